"""이 파일은 .py 테스트 설정 모듈로 경로를 초기화하고 공통 픽스처를 제공합니다."""

import sys
from pathlib import Path

import pytest

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from mcp_scanner.core.config import ScanSettings  # noqa: E402


@pytest.fixture
def settings() -> ScanSettings:
    # 테스트 프로세스 메모리 사용량에 결과가 흔들리지 않도록 메모리 프로브를 0으로 고정한다.
    return ScanSettings(memory_probe=lambda: 0, port_probe=lambda host: [])
