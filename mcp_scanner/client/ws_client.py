"""스캐너 서버에 WebSocket으로 스캔을 요청하는 동기 클라이언트."""

from __future__ import annotations

import logging
from contextlib import ExitStack
from typing import Any, Dict, Optional, Union

from websockets.exceptions import ConnectionClosed, InvalidHandshake, InvalidURI
from websockets.sync.client import ClientConnection, connect

from mcp_scanner.api.protocol import build_scan_request, parse_response
from mcp_scanner.core.errors import ScannerConnectionError, ScanTimeoutError
from mcp_scanner.core.types import Report, ScanContext
from mcp_scanner.services.reporting import format_report

logger = logging.getLogger(__name__)


class ScannerClient:
    def __init__(self, url: str, timeout: float = 30.0) -> None:
        self.url = url
        self.timeout = timeout
        self._connection: Optional[ClientConnection] = None
        self._stack: Optional[ExitStack] = None

    @property
    def connected(self) -> bool:
        return self._connection is not None

    def connect(self) -> None:
        if self._connection is not None:
            return
        # 연결은 컨텍스트 매니저로 열고 ExitStack이 닫기를 맡는다.
        stack = ExitStack()
        try:
            self._connection = stack.enter_context(connect(self.url, open_timeout=self.timeout))
        except (OSError, InvalidURI, InvalidHandshake, TimeoutError) as exc:
            stack.close()
            raise ScannerConnectionError(f"Cannot connect to scanner server {self.url}: {exc}") from exc
        self._stack = stack
        logger.debug("Connected to %s", self.url)

    def scan_system(
        self,
        context: Union[ScanContext, Dict[str, Any], None] = None,
        request_id: Any = None,
    ) -> Report:
        # 연결당 하나의 요청만 보내고 다음 수신 메시지를 그 응답으로 본다.
        if self._connection is None:
            raise ScannerConnectionError("Client is not connected; call connect() first")
        message = build_scan_request(context, request_id)
        try:
            self._connection.send(message)
            raw = self._connection.recv(timeout=self.timeout)
        except TimeoutError as exc:
            # 늦게 도착할 응답이 다음 요청의 응답으로 읽히지 않도록 연결을 버린다.
            self.disconnect()
            raise ScanTimeoutError(f"No response from {self.url} within {self.timeout:g} seconds") from exc
        except ConnectionClosed as exc:
            self.disconnect()
            raise ScannerConnectionError(f"Connection to {self.url} closed: {exc}") from exc
        return parse_response(raw, expected_id=request_id)

    def disconnect(self) -> None:
        if self._connection is None:
            return
        stack = self._stack
        self._connection = None
        self._stack = None
        try:
            if stack is not None:
                stack.close()
        finally:
            logger.debug("Disconnected from %s", self.url)

    def format_results(self, report: Report) -> str:
        return format_report(report)

    def __enter__(self) -> "ScannerClient":
        self.connect()
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.disconnect()
