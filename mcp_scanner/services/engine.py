"""이 파일은 .py 스캔 엔진 서비스 모듈로 탐지기 실행과 결과 집계를 담당합니다."""

from __future__ import annotations

import logging
import threading
import time
import traceback
from dataclasses import dataclass
from datetime import datetime, timezone
from functools import lru_cache
from typing import Iterable, List, Optional, Sequence, Tuple, Type

from mcp_scanner.core.config import ScanSettings
from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.errors import ScanCancelledError
from mcp_scanner.core.types import Finding, Report, ScanContext, ScanError
from mcp_scanner.detectors import DEFAULT_DETECTORS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DetectorOutcome:
    # 탐지기 한 개의 실행 결과. error가 있으면 findings는 버려진 상태다.
    name: str
    findings: Tuple[Finding, ...] = ()
    error: Optional[ScanError] = None


def utc_timestamp() -> str:
    # 밀리초 정밀도의 ISO-8601(UTC, Z 접미사) 문자열을 만든다.
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def merge_errors(outcomes: Iterable[DetectorOutcome]) -> Optional[ScanError]:
    # 실패한 탐지기들의 메시지/트레이스를 실행 순서대로 하나로 합친다.
    failed = [outcome for outcome in outcomes if outcome.error is not None]
    if not failed:
        return None
    message = "; ".join(f"{outcome.name}: {outcome.error.message}" for outcome in failed)
    trace = "\n".join(outcome.error.trace for outcome in failed)
    return ScanError(message=message, trace=trace)


class ScanEngine:
    def __init__(
        self,
        settings: Optional[ScanSettings] = None,
        detectors: Optional[Sequence[Type[BaseDetector]]] = None,
    ) -> None:
        # 엔진은 생성 후 변경되지 않으므로 여러 연결에서 동시에 사용해도 안전하다.
        self.settings = settings or ScanSettings()
        self.detectors: Tuple[Type[BaseDetector], ...] = tuple(detectors or DEFAULT_DETECTORS)

    def list_detectors(self) -> List[str]:
        return [detector.name for detector in self.detectors]

    def scan(self, context: ScanContext, cancel_event: Optional[threading.Event] = None) -> Report:
        timestamp = utc_timestamp()
        started = time.monotonic()
        outcomes: List[DetectorOutcome] = []

        for detector_class in self.detectors:
            # 각 탐지기 실행 전에 취소 여부를 확인한다.
            if cancel_event is not None and cancel_event.is_set():
                raise ScanCancelledError(f"Scan cancelled before {detector_class.name} detector")
            outcomes.append(self._run_detector(detector_class, context))

        findings: List[Finding] = []
        for outcome in outcomes:
            findings.extend(outcome.findings)

        report = Report(
            vulnerabilities=tuple(findings),
            timestamp=timestamp,
            scan_duration_ms=int((time.monotonic() - started) * 1000),
            error=merge_errors(outcomes),
        )
        logger.info(
            "Scan finished: %d findings in %d ms%s",
            len(report.vulnerabilities),
            report.scan_duration_ms,
            " (with detector errors)" if report.error else "",
        )
        return report

    def _run_detector(self, detector_class: Type[BaseDetector], context: ScanContext) -> DetectorOutcome:
        # 탐지기 단위로 예외를 격리하고 나머지 탐지기는 계속 실행한다.
        try:
            findings = detector_class(context, self.settings).detect()
        except Exception as exc:
            logger.warning("Detector %s failed: %s", detector_class.name, exc, exc_info=True)
            return DetectorOutcome(
                name=detector_class.name,
                error=ScanError(message=str(exc) or type(exc).__name__, trace=traceback.format_exc()),
            )
        return DetectorOutcome(name=detector_class.name, findings=tuple(findings))


@lru_cache(maxsize=1)
def get_engine() -> ScanEngine:
    # 환경 설정으로 만든 기본 엔진. API 의존성으로 주입되며 테스트에서 교체할 수 있다.
    return ScanEngine(ScanSettings.from_env())
