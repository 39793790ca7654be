"""이 파일은 .py 테스트 모듈로 요청 메시지 파싱과 오류 응답 형식을 검증합니다."""

import json

from mcp_scanner.api.protocol import build_scan_request, error_message, parse_request, parse_response
from mcp_scanner.core.errors import ProtocolError, RemoteScanError
from mcp_scanner.core.types import Connection, PluginSource, ScanContext


def _expect_protocol_error(raw) -> str:
    try:
        parse_request(raw)
    except ProtocolError as exc:
        return str(exc)
    raise AssertionError("ProtocolError not raised")


def test_parse_scan_request_maps_wire_keys() -> None:
    raw = json.dumps(
        {
            "type": "scan",
            "context": {
                "basePath": "/srv/app",
                "bufferSize": 4096,
                "plugins": [{"name": "p", "path": "p.js", "code": "x", "publicKey": "pem"}],
                "connections": [{"host": "h", "port": 80, "protocol": "http:", "encrypted": False}],
                "allowedPorts": [443],
                "credentials": {"bob": 123456},
                "config": {"debug": True},
                "unknownField": "ignored",
            },
        }
    )
    context = parse_request(raw).context.to_context()
    assert context.base_path == "/srv/app"
    assert context.buffer_size == 4096
    assert context.plugins == (PluginSource(name="p", path="p.js", code="x", public_key="pem"),)
    assert context.connections == (Connection(host="h", port=80, protocol="http:", encrypted=False),)
    assert context.allowed_ports == (443,)
    assert context.credentials == {"bob": "123456"}
    assert context.config == {"debug": True}
    assert context.paths is None


def test_parse_request_without_context_is_empty_scan() -> None:
    request = parse_request('{"type": "scan", "id": "abc"}')
    assert request.context.to_context() == ScanContext()
    assert request.id == "abc"


def test_parse_request_rejects_bad_messages() -> None:
    assert "valid JSON" in _expect_protocol_error("{not json")
    assert "JSON object" in _expect_protocol_error("[1, 2]")
    assert "Unsupported message type" in _expect_protocol_error('{"type": "hello"}')
    assert "Invalid scan request" in _expect_protocol_error('{"type": "scan", "context": {"bufferSize": "big"}}')


def test_build_scan_request_from_dataclass() -> None:
    context = ScanContext(paths=["a/b"], config={"csrfProtection": True})
    payload = json.loads(build_scan_request(context, request_id=3))
    assert payload == {
        "type": "scan",
        "context": {"paths": ["a/b"], "config": {"csrfProtection": True}},
        "id": 3,
    }


def test_error_response_raises_remote_error() -> None:
    raw = json.dumps(error_message("Scan timed out after 30 seconds", "stack here"))
    assert json.loads(raw) == {
        "type": "error",
        "error": {"message": "Scan timed out after 30 seconds", "stack": "stack here"},
    }
    try:
        parse_response(raw)
    except RemoteScanError as exc:
        assert exc.message == "Scan timed out after 30 seconds"
        assert exc.stack == "stack here"
    else:
        raise AssertionError("RemoteScanError not raised")


def test_unexpected_response_type() -> None:
    try:
        parse_response('{"type": "pong"}')
    except ProtocolError as exc:
        assert "pong" in str(exc)
    else:
        raise AssertionError("ProtocolError not raised")


def test_parse_request_stringifies_boolean_passwords() -> None:
    raw = json.dumps({"type": "scan", "context": {"credentials": {"alice": True, "bob": "admin", "carol": None}}})
    context = parse_request(raw).context.to_context()
    assert context.credentials == {"alice": "True", "bob": "admin", "carol": None}
