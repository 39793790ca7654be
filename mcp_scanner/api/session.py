"""이 파일은 .py WebSocket 세션 모듈로 연결 하나의 요청 처리, 타임아웃, 취소를 담당합니다."""

from __future__ import annotations

import asyncio
import functools
import logging
import threading
from typing import Any, Dict, Optional

from fastapi import WebSocket, WebSocketDisconnect

from mcp_scanner.core.errors import ProtocolError, ScanTimeoutError
from mcp_scanner.core.types import Report, ScanContext
from mcp_scanner.services.engine import ScanEngine

from .protocol import error_from_exception, parse_request, scan_results_message

logger = logging.getLogger(__name__)


class ScanSession:
    def __init__(self, websocket: WebSocket, engine: ScanEngine, timeout: Optional[float] = None) -> None:
        # 연결마다 새 세션을 만들며 다른 연결과 공유하는 가변 상태는 없다.
        self.websocket = websocket
        self.engine = engine
        self.timeout = timeout if timeout is not None else engine.settings.scan_timeout
        self._inbox: "asyncio.Queue[Optional[str]]" = asyncio.Queue()
        self._disconnected = asyncio.Event()

    @property
    def peer(self) -> str:
        client = self.websocket.client
        if client is None:
            return "unknown"
        return f"{client.host}:{client.port}"

    async def serve(self) -> None:
        await self.websocket.accept()
        logger.info("Client connected: %s", self.peer)
        reader = asyncio.ensure_future(self._read_frames())
        try:
            while True:
                raw = await self._inbox.get()
                if raw is None:
                    break
                response = await self._handle(raw)
                # 스캔 도중 연결이 끊기면 응답 없이 종료한다.
                if response is None:
                    break
                await self.websocket.send_json(response)
        except (WebSocketDisconnect, OSError):
            logger.info("Client went away while sending response: %s", self.peer)
        finally:
            reader.cancel()
            await asyncio.gather(reader, return_exceptions=True)
            logger.info("Client disconnected: %s", self.peer)

    async def _read_frames(self) -> None:
        # 수신 프레임을 큐에 넣고, 연결 종료를 감지하면 세션에 알린다.
        try:
            while True:
                message = await self.websocket.receive()
                if message["type"] == "websocket.disconnect":
                    break
                text = message.get("text")
                if text is None and message.get("bytes") is not None:
                    text = message["bytes"].decode("utf-8", errors="replace")
                if text is not None:
                    await self._inbox.put(text)
        except (WebSocketDisconnect, RuntimeError, OSError) as exc:
            # 닫힌 소켓에서 receive가 실패하면 연결 종료로 취급한다.
            logger.info("Receive failed for %s: %s", self.peer, exc)
        finally:
            self._disconnected.set()
            self._inbox.put_nowait(None)

    async def _handle(self, raw: str) -> Optional[Dict[str, Any]]:
        try:
            request = parse_request(raw)
        except ProtocolError as exc:
            logger.warning("Rejected message from %s: %s", self.peer, exc)
            return error_from_exception(exc)

        context = request.context.to_context()
        cancel_event = threading.Event()
        scan = asyncio.ensure_future(self._run_scan(context, cancel_event))
        watcher = asyncio.ensure_future(self._disconnected.wait())
        try:
            await asyncio.wait({scan, watcher}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            watcher.cancel()

        if not scan.done():
            # 클라이언트가 떠났으므로 진행 중인 스캔을 포기한다.
            cancel_event.set()
            scan.cancel()
            logger.info("Abandoned in-flight scan for %s", self.peer)
            return None

        try:
            report = scan.result()
        except asyncio.TimeoutError:
            cancel_event.set()
            exc = ScanTimeoutError(f"Scan timed out after {self.timeout:g} seconds")
            logger.warning("%s (client %s)", exc, self.peer)
            return error_from_exception(exc, request.id)
        except Exception as exc:
            logger.exception("Scan failed for %s", self.peer)
            return error_from_exception(exc, request.id)
        return scan_results_message(report, request.id)

    async def _run_scan(self, context: ScanContext, cancel_event: threading.Event) -> Report:
        # 엔진은 동기 코드이므로 작업 스레드에서 실행하고 전체 시간을 제한한다.
        loop = asyncio.get_running_loop()
        work = loop.run_in_executor(None, functools.partial(self.engine.scan, context, cancel_event))
        return await asyncio.wait_for(work, timeout=self.timeout)
