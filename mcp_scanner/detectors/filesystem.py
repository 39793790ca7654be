"""
파일 권한(0777) / 경로 조작(..) 점검 탐지기
"""

from __future__ import annotations

import logging
import os
import stat
from typing import Dict, List

from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.types import Finding, Severity, VulnerabilityType

logger = logging.getLogger(__name__)

WORLD_WRITABLE_MODE = 0o777
TRAVERSAL_TOKEN = ".."


def collect_file_modes(base_path: str) -> Dict[str, int]:
    """base_path 바로 아래 항목들의 권한 비트를 경로별로 반환합니다.

    디렉터리를 읽지 못하면 OSError를 그대로 올려 엔진이 탐지기 오류로 기록하게 합니다.
    """
    modes: Dict[str, int] = {}
    with os.scandir(base_path) as entries:
        for entry in sorted(entries, key=lambda item: item.name):
            try:
                st = entry.stat(follow_symlinks=True)
            except FileNotFoundError:
                # 대상이 사라진 심볼릭 링크는 점검 대상이 아니다.
                logger.debug("Skipping dangling entry: %s", entry.path)
                continue
            modes[entry.path] = stat.S_IMODE(st.st_mode)
    return modes


class FilesystemDetector(BaseDetector):
    name = "filesystem"

    def detect(self) -> List[Finding]:
        base_path = self.context.base_path
        if base_path:
            for file_path, mode in collect_file_modes(base_path).items():
                # 하위 9비트(rwx * 3)가 모두 열린 경우만 취약으로 본다.
                if mode & 0o777 == WORLD_WRITABLE_MODE:
                    self.add_finding(
                        VulnerabilityType.INSECURE_FILE_PERMISSIONS,
                        Severity.HIGH,
                        details=f"File has overly permissive access: {file_path}",
                        location=file_path,
                        recommendation="Restrict file permissions to minimum required",
                    )

        for path in self.context.paths or ():
            if TRAVERSAL_TOKEN in path:
                self.add_finding(
                    VulnerabilityType.PATH_TRAVERSAL,
                    Severity.CRITICAL,
                    details="Potential path traversal vulnerability detected",
                    location=path,
                    recommendation="Sanitize and validate all file paths",
                )

        return self.results
