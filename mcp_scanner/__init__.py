"""MCP 보안 스캐너: 규칙 기반 취약점 탐지 엔진과 WebSocket 스캔 프로토콜."""

__version__ = "0.1.0"
