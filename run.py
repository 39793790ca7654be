"""이 파일은 .py 엔트리포인트로 스캐너 WebSocket 서버를 실행합니다."""

import argparse

import uvicorn

from mcp_scanner.core.config import LOG_LEVEL, SCANNER_HOST, SCANNER_PORT
from mcp_scanner.core.logging import setup_logging


def main() -> None:
    parser = argparse.ArgumentParser(description="MCP Security Scanner server")
    parser.add_argument("--host", default=SCANNER_HOST)
    parser.add_argument("--port", "-p", type=int, default=SCANNER_PORT)
    args = parser.parse_args()

    setup_logging()
    uvicorn.run("mcp_scanner.api.app:app", host=args.host, port=args.port, log_level=LOG_LEVEL.lower())


if __name__ == "__main__":
    main()
