"""이 파일은 .py 클라이언트 패키지 초기화 모듈로 WebSocket 클라이언트를 노출합니다."""

from .ws_client import ScannerClient

__all__ = ["ScannerClient"]
