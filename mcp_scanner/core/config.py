"""이 파일은 .py 설정 모듈로 환경 변수 기반 기본값과 불변 스캔 설정을 정의합니다."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Callable, FrozenSet, Optional, Sequence, Union

import yaml

from mcp_scanner.adapters.probes import read_resident_memory, scan_open_ports

from .config_validation import validate_settings
from .errors import SettingsError

REPO_ROOT = Path(__file__).resolve().parents[2]
API_PREFIX = "/api/v1"
WEBSOCKET_PATH = "/"

SCANNER_HOST = os.getenv("SCANNER_HOST", "localhost")
SCANNER_PORT = int(os.getenv("SCANNER_PORT", "3000"))
SCAN_TIMEOUT_SECONDS = float(os.getenv("SCAN_TIMEOUT_SECONDS", "30"))
MEMORY_THRESHOLD_MB = int(os.getenv("MEMORY_THRESHOLD_MB", "100"))
MAX_BUFFER_SIZE = int(os.getenv("MAX_BUFFER_SIZE", "2048"))
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
SETTINGS_FILE = Path(os.getenv("SETTINGS_FILE", str(REPO_ROOT / "scanner.yml")))

DEFAULT_WEAK_PASSWORDS = frozenset({"admin", "password", "123456", "default"})

MemoryProbe = Callable[[], int]
PortProbe = Callable[[str], Sequence[int]]


@dataclass(frozen=True)
class ScanSettings:
    # 엔진 생성 시 한 번 주입되는 불변 설정값이다. 요청 간에 공유해도 안전하다.
    memory_threshold_bytes: int = MEMORY_THRESHOLD_MB * 1024 * 1024
    max_buffer_size: int = MAX_BUFFER_SIZE
    weak_passwords: FrozenSet[str] = DEFAULT_WEAK_PASSWORDS
    scan_timeout: float = SCAN_TIMEOUT_SECONDS
    # 프로세스 메모리/열린 포트 조회는 테스트에서 교체할 수 있도록 함수로 주입한다.
    memory_probe: MemoryProbe = field(default=read_resident_memory, compare=False)
    port_probe: PortProbe = field(default=scan_open_ports, compare=False)

    def __post_init__(self) -> None:
        # 비교는 소문자 기준이므로 저장 시점에 정규화한다.
        normalized = frozenset(str(item).lower() for item in self.weak_passwords)
        object.__setattr__(self, "weak_passwords", normalized)
        if self.scan_timeout <= 0:
            raise SettingsError("scan_timeout must be > 0")

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "ScanSettings":
        # YAML 파일을 읽어 검증한 뒤 기본값 위에 덮어쓴다.
        path = Path(path)
        try:
            data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
        except (OSError, yaml.YAMLError) as exc:
            raise SettingsError(f"Cannot read settings file {path}: {exc}") from exc
        values = validate_settings(data)

        settings = cls()
        if "memory_threshold_mb" in values:
            settings = replace(settings, memory_threshold_bytes=values["memory_threshold_mb"] * 1024 * 1024)
        if "max_buffer_size" in values:
            settings = replace(settings, max_buffer_size=values["max_buffer_size"])
        if "weak_passwords" in values:
            settings = replace(settings, weak_passwords=frozenset(values["weak_passwords"]))
        if "scan_timeout_seconds" in values:
            settings = replace(settings, scan_timeout=float(values["scan_timeout_seconds"]))
        return settings

    @classmethod
    def from_env(cls, settings_file: Optional[Path] = None) -> "ScanSettings":
        # 설정 파일이 있으면 로드하고 없으면 환경 변수 기본값만 사용한다.
        path = settings_file or SETTINGS_FILE
        if path.exists():
            return cls.from_file(path)
        return cls()
