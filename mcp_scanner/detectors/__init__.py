"""이 파일은 .py 탐지기 패키지 초기화 모듈로 기본 실행 순서를 정의합니다."""

from typing import Tuple, Type

from mcp_scanner.core.detector_base import BaseDetector

from .configuration import ConfigurationDetector
from .filesystem import FilesystemDetector
from .memory import MemoryDetector
from .network import NetworkDetector
from .plugin_trust import PluginTrustDetector

# 리포트 순서 재현을 위해 실행 순서를 고정한다.
DEFAULT_DETECTORS: Tuple[Type[BaseDetector], ...] = (
    MemoryDetector,
    FilesystemDetector,
    PluginTrustDetector,
    NetworkDetector,
    ConfigurationDetector,
)

__all__ = [
    "ConfigurationDetector",
    "DEFAULT_DETECTORS",
    "FilesystemDetector",
    "MemoryDetector",
    "NetworkDetector",
    "PluginTrustDetector",
]
