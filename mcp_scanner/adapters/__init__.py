"""이 파일은 .py 어댑터 패키지 초기화 모듈로 외부 자원 조회 기능을 노출합니다."""

from .probes import read_resident_memory, scan_open_ports
from .signing import verify_plugin_signature

__all__ = [
    "read_resident_memory",
    "scan_open_ports",
    "verify_plugin_signature",
]
