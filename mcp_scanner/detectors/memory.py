"""
메모리 사용량/버퍼 크기 점검 탐지기
"""

from __future__ import annotations

from typing import List

from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.types import Finding, Severity, VulnerabilityType


class MemoryDetector(BaseDetector):
    name = "memory"

    def detect(self) -> List[Finding]:
        usage = self.settings.memory_probe()
        if usage > self.settings.memory_threshold_bytes:
            self.add_finding(
                VulnerabilityType.MEMORY_LEAK,
                Severity.HIGH,
                details=f"High memory usage detected: {round(usage / 1024 / 1024)}MB",
                location="process",
                recommendation="Implement proper memory management and garbage collection",
            )

        # bufferSize가 없으면 버퍼 점검은 건너뛴다.
        buffer_size = self.context.buffer_size
        if buffer_size is not None and buffer_size > self.settings.max_buffer_size:
            self.add_finding(
                VulnerabilityType.BUFFER_OVERFLOW,
                Severity.CRITICAL,
                details="Potential buffer overflow detected",
                location=self.context.buffer_location or "unknown",
                recommendation="Implement proper buffer size checks",
            )

        return self.results
