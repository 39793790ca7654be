"""
약한 계정 비밀번호 / 디버그 모드 / CSRF 설정 점검 탐지기
"""

from __future__ import annotations

from typing import List

from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.types import Finding, Severity, VulnerabilityType


class ConfigurationDetector(BaseDetector):
    name = "configuration"

    def detect(self) -> List[Finding]:
        weak_passwords = self.settings.weak_passwords
        for user, password in (self.context.credentials or {}).items():
            # 대소문자를 무시하고 금지 목록과 비교한다.
            if password is not None and str(password).lower() in weak_passwords:
                self.add_finding(
                    VulnerabilityType.WEAK_CREDENTIALS,
                    Severity.HIGH,
                    details=f"Weak password detected for user: {user}",
                    location="authentication",
                    recommendation="Implement strong password requirements",
                )

        config = self.context.config
        if config is None:
            return self.results

        if config.get("debug") is True:
            self.add_finding(
                VulnerabilityType.DEBUG_MODE,
                Severity.MEDIUM,
                details="Debug mode is enabled in production",
                location="configuration",
                recommendation="Disable debug mode in production",
            )

        if not config.get("csrfProtection"):
            self.add_finding(
                VulnerabilityType.MISSING_CSRF,
                Severity.HIGH,
                details="CSRF protection is not enabled",
                location="configuration",
                recommendation="Enable CSRF protection",
            )

        return self.results
