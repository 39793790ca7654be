"""이 파일은 .py 프로토콜 모듈로 scan / scanResults / error 메시지의 인코딩과 디코딩을 담당합니다."""

from __future__ import annotations

import json
import traceback
from typing import Any, Dict, Optional, Union

from pydantic import ValidationError

from mcp_scanner.core.errors import ProtocolError, RemoteScanError
from mcp_scanner.core.types import Report, ScanContext

from .schemas import (
    ErrorMessage,
    ErrorPayload,
    ReportPayload,
    ScanContextPayload,
    ScanRequest,
    ScanResultsMessage,
)

SCAN = "scan"
SCAN_RESULTS = "scanResults"
ERROR = "error"


def _load_object(raw: Union[str, bytes]) -> Dict[str, Any]:
    # 텍스트 프레임을 JSON 객체로 변환한다.
    try:
        value = json.loads(raw)
    except (TypeError, ValueError) as exc:
        raise ProtocolError(f"Message is not valid JSON: {exc}") from exc
    if not isinstance(value, dict):
        raise ProtocolError("Message must be a JSON object")
    return value


def _dump(model: Any) -> Dict[str, Any]:
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)


def encode_report(report: Report) -> Dict[str, Any]:
    return _dump(ReportPayload.from_report(report))


def decode_report(data: Dict[str, Any]) -> Report:
    try:
        return ReportPayload.model_validate(data).to_report()
    except ValidationError as exc:
        raise ProtocolError(f"Invalid report payload: {exc}") from exc


def encode_context(context: Union[ScanContext, Dict[str, Any], None]) -> Dict[str, Any]:
    # dict로 받은 컨텍스트도 스키마 검증을 거쳐 와이어 형식으로 정리한다.
    if context is None:
        return {}
    if isinstance(context, ScanContext):
        return _dump(ScanContextPayload.from_context(context))
    try:
        return _dump(ScanContextPayload.model_validate(context))
    except ValidationError as exc:
        raise ProtocolError(f"Invalid scan context: {exc}") from exc


def parse_request(raw: Union[str, bytes]) -> ScanRequest:
    data = _load_object(raw)
    kind = data.get("type")
    if kind != SCAN:
        raise ProtocolError(f"Unsupported message type: {kind!r}")
    try:
        return ScanRequest.model_validate(data)
    except ValidationError as exc:
        raise ProtocolError(f"Invalid scan request: {exc}") from exc


def build_scan_request(context: Union[ScanContext, Dict[str, Any], None], request_id: Any = None) -> str:
    payload: Dict[str, Any] = {"type": SCAN, "context": encode_context(context)}
    if request_id is not None:
        payload["id"] = request_id
    return json.dumps(payload)


def scan_results_message(report: Report, request_id: Any = None) -> Dict[str, Any]:
    return _dump(ScanResultsMessage(data=ReportPayload.from_report(report), id=request_id))


def error_message(message: str, stack: str = "", request_id: Any = None) -> Dict[str, Any]:
    return _dump(ErrorMessage(error=ErrorPayload(message=message, stack=stack), id=request_id))


def error_from_exception(exc: BaseException, request_id: Any = None) -> Dict[str, Any]:
    # 예외 메시지와 트레이스백을 error 응답으로 변환한다.
    stack = "".join(traceback.format_exception(type(exc), exc, exc.__traceback__))
    return error_message(str(exc) or type(exc).__name__, stack, request_id)


def parse_response(raw: Union[str, bytes], expected_id: Optional[Any] = None) -> Report:
    """서버 응답을 Report로 변환합니다. error 응답은 RemoteScanError로 올립니다."""
    data = _load_object(raw)
    kind = data.get("type")
    if expected_id is not None and data.get("id") not in (None, expected_id):
        raise ProtocolError(f"Response id {data.get('id')!r} does not match request id {expected_id!r}")
    if kind == SCAN_RESULTS:
        if not isinstance(data.get("data"), dict):
            raise ProtocolError("scanResults message has no report data")
        return decode_report(data["data"])
    if kind == ERROR:
        error = data.get("error") or {}
        if not isinstance(error, dict):
            error = {"message": str(error)}
        raise RemoteScanError(str(error.get("message", "Unknown server error")), str(error.get("stack", "")))
    raise ProtocolError(f"Unexpected response type: {kind!r}")
