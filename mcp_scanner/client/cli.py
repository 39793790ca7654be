"""이 파일은 .py CLI 모듈로 경로를 스캐너 서버에 보내 결과를 출력하고 종료 코드를 결정합니다."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from mcp_scanner.core.config import SCANNER_HOST, SCANNER_PORT
from mcp_scanner.core.errors import ProtocolError, ScannerError
from mcp_scanner.core.logging import setup_logging
from mcp_scanner.services.reporting import render_json

from .ws_client import ScannerClient

EPILOG = """\
Examples:
  mcp-scan /path/to/project
  mcp-scan --port 3001 /path/to/project
  mcp-scan --json /path/to/project > results.json
"""


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mcp-scan",
        description="MCP Security Scanner CLI",
        epilog=EPILOG,
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("path", help="path to scan")
    parser.add_argument("--port", "-p", type=int, default=SCANNER_PORT, help="server port (default: %(default)s)")
    parser.add_argument("--host", default=SCANNER_HOST, help="server host (default: %(default)s)")
    parser.add_argument("--config", "-c", help="path to a YAML/JSON file with extra scan context")
    parser.add_argument("--json", action="store_true", help="output results in JSON format")
    parser.add_argument("--quiet", "-q", action="store_true", help="minimal output")
    parser.add_argument("--verbose", "-v", action="store_true", help="log client activity to stderr")
    parser.add_argument("--timeout", type=float, default=30.0, help="seconds to wait for the server (default: %(default)s)")
    return parser


def load_context_file(path: str) -> Dict[str, Any]:
    # JSON은 YAML의 부분집합이므로 safe_load 하나로 두 형식을 읽는다.
    try:
        data = yaml.safe_load(Path(path).read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        raise ProtocolError(f"Cannot read config file {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise ProtocolError(f"Config file {path} must contain a mapping")
    return data


def build_context(path: str, config_file: Optional[str] = None) -> Dict[str, Any]:
    context: Dict[str, Any] = {}
    if config_file:
        context.update(load_context_file(config_file))
    # 스캔 대상 경로는 항상 위치 인자에서 가져와 절대 경로로 바꾼다.
    context["basePath"] = str(Path(path).resolve())
    return context


def main(argv: Optional[List[str]] = None) -> int:
    try:
        args = build_parser().parse_args(argv)
    except SystemExit as exc:
        # --help는 0, 인자 오류는 1로 종료한다.
        return 0 if exc.code == 0 else 1
    setup_logging("DEBUG" if args.verbose else "WARNING")

    def say(message: str) -> None:
        # 진행 메시지는 stderr로 보내 --json 출력과 섞이지 않게 한다.
        if not args.quiet:
            print(message, file=sys.stderr)

    client = ScannerClient(f"ws://{args.host}:{args.port}", timeout=args.timeout)
    try:
        context = build_context(args.path, args.config)
        say("Connecting to scanner server...")
        client.connect()
        try:
            say("Starting security scan...")
            report = client.scan_system(context)
        finally:
            client.disconnect()
    except (ScannerError, ProtocolError) as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1

    if args.json:
        print(render_json(report))
    else:
        print(client.format_results(report))
    return 1 if report.has_vulnerabilities else 0


if __name__ == "__main__":
    raise SystemExit(main())
