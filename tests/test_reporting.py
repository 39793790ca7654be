"""이 파일은 .py 테스트 모듈로 리포트 텍스트/JSON 출력과 와이어 변환을 검증합니다."""

import json

from mcp_scanner.api.protocol import decode_report, encode_report, parse_response, scan_results_message
from mcp_scanner.core.types import Finding, Report, ScanError, Severity, VulnerabilityType
from mcp_scanner.services.reporting import NO_VULNERABILITIES_LINE, format_report, render_json, report_to_dict


def _sample_report(error=None) -> Report:
    return Report(
        vulnerabilities=(
            Finding(
                VulnerabilityType.PATH_TRAVERSAL,
                Severity.CRITICAL,
                "Potential path traversal vulnerability detected",
                "../etc/passwd",
                "Sanitize and validate all file paths",
            ),
            Finding(
                VulnerabilityType.DEBUG_MODE,
                Severity.MEDIUM,
                "Debug mode is enabled in production",
                "configuration",
                "Disable debug mode in production",
            ),
        ),
        timestamp="2026-10-19T08:00:00.000Z",
        scan_duration_ms=12,
        error=error,
    )


def test_format_empty_report_is_single_line() -> None:
    text = format_report(Report(timestamp="2026-10-19T08:00:00.000Z"))
    assert text == NO_VULNERABILITIES_LINE


def test_format_report_renders_each_finding() -> None:
    report = _sample_report()
    text = format_report(report)
    assert "Found 2 vulnerabilities (CRITICAL: 1, MEDIUM: 1)" in text
    assert "1. [CRITICAL] PATH_TRAVERSAL" in text
    assert "   Location: ../etc/passwd" in text
    assert "2. [MEDIUM] DEBUG_MODE" in text
    assert "   Recommendation: Disable debug mode in production" in text
    # 출력 후에도 리포트는 그대로다.
    assert report == _sample_report()


def test_format_report_mentions_scan_error() -> None:
    text = format_report(_sample_report(ScanError("memory: boom", "Traceback ...")))
    assert text.endswith("Scan error: memory: boom")


def test_render_json_uses_wire_keys() -> None:
    data = json.loads(render_json(_sample_report()))
    assert set(data) == {"vulnerabilities", "timestamp", "scanDuration"}
    assert data["scanDuration"] == 12
    assert data["vulnerabilities"][0] == {
        "type": "PATH_TRAVERSAL",
        "severity": "CRITICAL",
        "details": "Potential path traversal vulnerability detected",
        "location": "../etc/passwd",
        "recommendation": "Sanitize and validate all file paths",
    }


def test_report_round_trip_through_wire_format() -> None:
    report = _sample_report(ScanError("filesystem: denied", "Traceback (most recent call last): ..."))
    wire = json.dumps(encode_report(report))
    assert json.loads(wire)["error"] == {
        "message": "filesystem: denied",
        "stack": "Traceback (most recent call last): ...",
    }
    assert decode_report(json.loads(wire)) == report


def test_scan_results_message_round_trip() -> None:
    report = _sample_report()
    message = json.dumps(scan_results_message(report, request_id=7))
    assert json.loads(message)["type"] == "scanResults"
    assert json.loads(message)["id"] == 7
    assert parse_response(message, expected_id=7) == report


def test_render_json_matches_wire_encoding() -> None:
    report = _sample_report(ScanError("network: refused", "Traceback ..."))
    assert json.loads(render_json(report)) == encode_report(report)
    assert report_to_dict(report)["error"] == {"message": "network: refused", "stack": "Traceback ..."}
