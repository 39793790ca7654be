"""이 파일은 .py 리포팅 모듈로 결과 요약과 텍스트/JSON 출력을 제공합니다."""

from __future__ import annotations

import json
from typing import Any, Dict, List

from mcp_scanner.core.types import Finding, Report, Severity

NO_VULNERABILITIES_LINE = "No vulnerabilities found."
SEVERITY_ORDER = [Severity.CRITICAL, Severity.HIGH, Severity.MEDIUM, Severity.LOW]


def report_to_dict(report: Report) -> Dict[str, Any]:
    # 와이어 형식과 같은 키(scanDuration, error.stack)를 사용한다.
    payload: Dict[str, Any] = {
        "vulnerabilities": [_finding_to_dict(finding) for finding in report.vulnerabilities],
        "timestamp": report.timestamp,
        "scanDuration": report.scan_duration_ms,
    }
    if report.error is not None:
        payload["error"] = {"message": report.error.message, "stack": report.error.trace}
    return payload


def render_json(report: Report) -> str:
    return json.dumps(report_to_dict(report), ensure_ascii=False, indent=2)


def format_report(report: Report) -> str:
    if not report.vulnerabilities:
        lines = [NO_VULNERABILITIES_LINE]
    else:
        lines = [
            f"Scan completed at {report.timestamp} in {report.scan_duration_ms} ms",
            f"Found {len(report.vulnerabilities)} vulnerabilities ({_format_summary(report)})",
        ]
        for index, finding in enumerate(report.vulnerabilities, start=1):
            lines.append("")
            lines.extend(_format_finding(index, finding))

    # 탐지기 오류가 있으면 일부 결과만 있다는 사실을 함께 보여준다.
    if report.error is not None:
        lines.append("")
        lines.append(f"Scan error: {report.error.message}")
    return "\n".join(lines)


def _format_summary(report: Report) -> str:
    summary = report.summary()
    parts = [f"{severity.value}: {summary[severity.value]}" for severity in SEVERITY_ORDER if severity.value in summary]
    return ", ".join(parts)


def _format_finding(index: int, finding: Finding) -> List[str]:
    return [
        f"{index}. [{finding.severity.value}] {finding.type.value}",
        f"   Details: {finding.details}",
        f"   Location: {finding.location}",
        f"   Recommendation: {finding.recommendation}",
    ]


def _finding_to_dict(finding: Finding) -> Dict[str, Any]:
    return {
        "type": finding.type.value,
        "severity": finding.severity.value,
        "details": finding.details,
        "location": finding.location,
        "recommendation": finding.recommendation,
    }
