"""이 파일은 .py 탐지기 베이스 모듈로 결과 생성 공통 로직을 제공합니다."""

from abc import ABC, abstractmethod
from typing import List

from .config import ScanSettings
from .types import Finding, ScanContext, Severity, VulnerabilityType


class BaseDetector(ABC):
    # 엔진 실행 순서와 오류 메시지에 쓰이는 탐지기 이름이다.
    name: str = "base"

    def __init__(self, context: ScanContext, settings: ScanSettings):
        # 스캔마다 새 인스턴스를 만들므로 results는 해당 스캔에만 속한다.
        self.context = context
        self.settings = settings
        self.results: List[Finding] = []

    @abstractmethod
    def detect(self) -> List[Finding]:
        raise NotImplementedError

    def add_finding(
        self,
        vuln_type: VulnerabilityType,
        severity: Severity,
        details: str,
        location: str,
        recommendation: str,
    ) -> Finding:
        finding = Finding(
            type=vuln_type,
            severity=severity,
            details=details,
            location=location,
            recommendation=recommendation,
        )
        self.results.append(finding)
        return finding
