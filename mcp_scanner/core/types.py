"""이 파일은 .py 타입 정의 모듈로 스캔 컨텍스트와 결과(Finding/Report) 모델을 제공합니다."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Tuple


class Severity(str, Enum):
    CRITICAL = "CRITICAL"
    HIGH = "HIGH"
    MEDIUM = "MEDIUM"
    LOW = "LOW"


class VulnerabilityType(str, Enum):
    MEMORY_LEAK = "MEMORY_LEAK"
    BUFFER_OVERFLOW = "BUFFER_OVERFLOW"
    INSECURE_FILE_PERMISSIONS = "INSECURE_FILE_PERMISSIONS"
    PATH_TRAVERSAL = "PATH_TRAVERSAL"
    UNSIGNED_PLUGIN = "UNSIGNED_PLUGIN"
    UNSAFE_EVAL = "UNSAFE_EVAL"
    INSECURE_CONNECTION = "INSECURE_CONNECTION"
    OPEN_PORT = "OPEN_PORT"
    WEAK_CREDENTIALS = "WEAK_CREDENTIALS"
    DEBUG_MODE = "DEBUG_MODE"
    MISSING_CSRF = "MISSING_CSRF"


def _freeze_mapping(value: Optional[Mapping[str, Any]]) -> Optional[Mapping[str, Any]]:
    # 매핑 필드는 읽기 전용 뷰로 감싸 탐지기가 수정하지 못하게 한다.
    if value is None:
        return None
    return MappingProxyType(dict(value))


@dataclass(frozen=True)
class PluginSource:
    # 신뢰 여부를 검증할 플러그인 코드 단위이다.
    name: Optional[str] = None
    path: Optional[str] = None
    code: Optional[str] = None
    # signature는 base64 문자열, public_key는 PEM 문자열이다.
    signature: Optional[str] = None
    public_key: Optional[str] = None


@dataclass(frozen=True)
class Connection:
    host: Optional[str] = None
    port: Optional[int] = None
    protocol: Optional[str] = None
    encrypted: Optional[bool] = None


@dataclass(frozen=True)
class ScanContext:
    # 스캔 대상 환경을 설명하는 입력 묶음이다. 모든 필드는 선택이며 None은 "없음"을 뜻한다.
    base_path: Optional[str] = None
    buffer_size: Optional[int] = None
    buffer_location: Optional[str] = None
    paths: Optional[Tuple[str, ...]] = None
    plugins: Optional[Tuple[PluginSource, ...]] = None
    connections: Optional[Tuple[Connection, ...]] = None
    host: Optional[str] = None
    allowed_ports: Optional[Tuple[int, ...]] = None
    credentials: Optional[Mapping[str, str]] = None
    config: Optional[Mapping[str, Any]] = None

    def __post_init__(self) -> None:
        # 리스트로 전달된 시퀀스도 튜플로 고정한다.
        for name in ("paths", "plugins", "connections", "allowed_ports"):
            value = getattr(self, name)
            if value is not None and not isinstance(value, tuple):
                object.__setattr__(self, name, tuple(value))
        object.__setattr__(self, "credentials", _freeze_mapping(self.credentials))
        object.__setattr__(self, "config", _freeze_mapping(self.config))


@dataclass(frozen=True)
class Finding:
    # 탐지기가 발견한 이슈 하나를 표현하며 생성 후 변경되지 않는다.
    type: VulnerabilityType
    severity: Severity
    details: str
    location: str
    recommendation: str


@dataclass(frozen=True)
class ScanError:
    # 스캔 중 발생한 탐지기 오류의 메시지와 스택 트레이스이다.
    message: str
    trace: str = ""


@dataclass(frozen=True)
class Report:
    # vulnerabilities 순서는 탐지기 실행 순서, 그다음 탐지기 내부 발견 순서다.
    vulnerabilities: Tuple[Finding, ...] = field(default_factory=tuple)
    timestamp: str = ""
    scan_duration_ms: int = 0
    error: Optional[ScanError] = None

    def __post_init__(self) -> None:
        if not isinstance(self.vulnerabilities, tuple):
            object.__setattr__(self, "vulnerabilities", tuple(self.vulnerabilities))

    @property
    def has_vulnerabilities(self) -> bool:
        return len(self.vulnerabilities) > 0

    def summary(self) -> Dict[str, int]:
        # 심각도별 카운트를 집계한다.
        summary: Dict[str, int] = {}
        for finding in self.vulnerabilities:
            key = finding.severity.value
            summary[key] = summary.get(key, 0) + 1
        return summary
