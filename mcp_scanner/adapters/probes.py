"""이 파일은 .py 프로브 어댑터로 프로세스 메모리와 열린 포트 조회 기능을 제공합니다."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import List, Optional

logger = logging.getLogger(__name__)

_PROC_STATM = Path("/proc/self/statm")


def read_resident_memory() -> int:
    # Linux는 /proc에서 현재 RSS(바이트)를 읽는다.
    if _PROC_STATM.exists():
        fields = _PROC_STATM.read_text().split()
        return int(fields[1]) * os.sysconf("SC_PAGE_SIZE")

    # 그 외 POSIX 환경은 최대 RSS로 대신한다. macOS는 바이트, Linux 계열은 KiB 단위다.
    import resource

    usage = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform == "darwin":
        return usage
    return usage * 1024


def scan_open_ports(host: Optional[str]) -> List[int]:
    # 실제 포트 스캔은 구현하지 않는다. 테스트/확장용으로 교체 가능한 자리만 둔다.
    logger.debug("Port probe is not implemented; reporting no open ports for %s", host)
    return []
