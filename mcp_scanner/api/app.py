"""이 파일은 .py FastAPI 앱 모듈로 WebSocket 스캔 엔드포인트와 상태 조회 API를 제공합니다."""

from __future__ import annotations

from typing import List

from fastapi import Depends, FastAPI, WebSocket

from mcp_scanner.core.config import API_PREFIX, WEBSOCKET_PATH
from mcp_scanner.services.engine import ScanEngine, get_engine

from .schemas import HealthResponse
from .session import ScanSession

app = FastAPI(title="mcp-security-scanner")


@app.get(f"{API_PREFIX}/health", response_model=HealthResponse)
def health(engine: ScanEngine = Depends(get_engine)) -> HealthResponse:
    return HealthResponse(status="ok", detectors=engine.list_detectors())


@app.get(f"{API_PREFIX}/detectors", response_model=List[str])
def list_detectors(engine: ScanEngine = Depends(get_engine)) -> List[str]:
    # 엔진이 실행하는 순서 그대로 탐지기 이름을 반환한다.
    return engine.list_detectors()


@app.websocket(WEBSOCKET_PATH)
async def scan_socket(websocket: WebSocket, engine: ScanEngine = Depends(get_engine)) -> None:
    session = ScanSession(websocket, engine)
    await session.serve()
