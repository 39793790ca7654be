"""이 파일은 .py 서비스 패키지 초기화 모듈로 핵심 서비스를 노출합니다."""

from .engine import ScanEngine, get_engine
from .reporting import format_report, render_json

__all__ = ["ScanEngine", "format_report", "get_engine", "render_json"]
