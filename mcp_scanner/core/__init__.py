"""이 파일은 .py 코어 패키지 초기화 모듈로 주요 심볼을 재노출합니다."""

from .config import API_PREFIX, ScanSettings
from .detector_base import BaseDetector
from .logging import setup_logging
from .types import (
    Connection,
    Finding,
    PluginSource,
    Report,
    ScanContext,
    ScanError,
    Severity,
    VulnerabilityType,
)

__all__ = [
    "API_PREFIX",
    "BaseDetector",
    "Connection",
    "Finding",
    "PluginSource",
    "Report",
    "ScanContext",
    "ScanError",
    "ScanSettings",
    "Severity",
    "VulnerabilityType",
    "setup_logging",
]
