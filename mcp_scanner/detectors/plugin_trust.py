"""
플러그인 서명 / eval 사용 점검 탐지기
"""

from __future__ import annotations

import re
from typing import List

from mcp_scanner.adapters.signing import verify_plugin_signature
from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.types import Finding, PluginSource, Severity, VulnerabilityType

EVAL_PATTERN = re.compile(r"\beval\s*\(")


def _plugin_location(plugin: PluginSource) -> str:
    return plugin.path or plugin.name or "unknown"


class PluginTrustDetector(BaseDetector):
    name = "plugin_trust"

    def detect(self) -> List[Finding]:
        for plugin in self.context.plugins or ():
            label = plugin.name or _plugin_location(plugin)

            # 서명 검증 실패는 오류가 아니라 신뢰 불가 결과로 기록한다.
            if not verify_plugin_signature(plugin.code, plugin.signature, plugin.public_key):
                self.add_finding(
                    VulnerabilityType.UNSIGNED_PLUGIN,
                    Severity.HIGH,
                    details=f"Plugin {label} is not properly signed",
                    location=_plugin_location(plugin),
                    recommendation="Implement plugin signing and verification",
                )

            if plugin.code and EVAL_PATTERN.search(plugin.code):
                self.add_finding(
                    VulnerabilityType.UNSAFE_EVAL,
                    Severity.CRITICAL,
                    details=f"Plugin {label} uses unsafe eval()",
                    location=_plugin_location(plugin),
                    recommendation="Avoid using eval() in plugins",
                )

        return self.results
