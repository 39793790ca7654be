"""이 파일은 .py API 스키마 모듈로 WebSocket 요청/응답 모델을 정의합니다."""

from __future__ import annotations

from typing import Any, Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from mcp_scanner.core.types import (
    Connection,
    Finding,
    PluginSource,
    Report,
    ScanContext,
    ScanError,
    Severity,
    VulnerabilityType,
)


class PluginPayload(BaseModel):
    name: Optional[str] = None
    path: Optional[str] = None
    code: Optional[str] = None
    signature: Optional[str] = None
    public_key: Optional[str] = Field(default=None, alias="publicKey")

    model_config = ConfigDict(populate_by_name=True)


class ConnectionPayload(BaseModel):
    host: Optional[str] = None
    port: Optional[int] = None
    protocol: Optional[str] = None
    encrypted: Optional[bool] = None


class ScanContextPayload(BaseModel):
    # 와이어에서는 camelCase 키를 쓰고 내부에서는 snake_case로 매핑한다.
    base_path: Optional[str] = Field(default=None, alias="basePath")
    buffer_size: Optional[int] = Field(default=None, alias="bufferSize")
    buffer_location: Optional[str] = Field(default=None, alias="bufferLocation")
    paths: Optional[List[str]] = None
    plugins: Optional[List[PluginPayload]] = None
    connections: Optional[List[ConnectionPayload]] = None
    host: Optional[str] = None
    allowed_ports: Optional[List[int]] = Field(default=None, alias="allowedPorts")
    credentials: Optional[Dict[str, Optional[str]]] = None
    # pydantic 예약어와 겹치지 않도록 내부 이름을 app_config로 둔다.
    app_config: Optional[Dict[str, Any]] = Field(default=None, alias="config")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator("credentials", mode="before")
    @classmethod
    def stringify_passwords(cls, value: Any) -> Any:
        # 숫자/불리언 비밀번호(예: 123456, true)도 문자열로 비교할 수 있게 변환한다.
        if not isinstance(value, dict):
            return value
        return {
            key: str(password) if isinstance(password, (bool, int, float)) else password
            for key, password in value.items()
        }

    def to_context(self) -> ScanContext:
        return ScanContext(
            base_path=self.base_path,
            buffer_size=self.buffer_size,
            buffer_location=self.buffer_location,
            paths=self.paths,
            plugins=None
            if self.plugins is None
            else [PluginSource(**plugin.model_dump()) for plugin in self.plugins],
            connections=None
            if self.connections is None
            else [Connection(**conn.model_dump()) for conn in self.connections],
            host=self.host,
            allowed_ports=self.allowed_ports,
            credentials=self.credentials,
            config=self.app_config,
        )

    @classmethod
    def from_context(cls, context: ScanContext) -> "ScanContextPayload":
        return cls(
            base_path=context.base_path,
            buffer_size=context.buffer_size,
            buffer_location=context.buffer_location,
            paths=None if context.paths is None else list(context.paths),
            plugins=None
            if context.plugins is None
            else [PluginPayload(**vars(plugin)) for plugin in context.plugins],
            connections=None
            if context.connections is None
            else [ConnectionPayload(**vars(conn)) for conn in context.connections],
            host=context.host,
            allowed_ports=None if context.allowed_ports is None else list(context.allowed_ports),
            credentials=None if context.credentials is None else dict(context.credentials),
            app_config=None if context.config is None else dict(context.config),
        )


class FindingPayload(BaseModel):
    type: VulnerabilityType
    severity: Severity
    details: str
    location: str
    recommendation: str


class ErrorPayload(BaseModel):
    message: str
    stack: str = ""


class ReportPayload(BaseModel):
    vulnerabilities: List[FindingPayload] = Field(default_factory=list)
    timestamp: str
    scan_duration: int = Field(..., alias="scanDuration")
    error: Optional[ErrorPayload] = None

    model_config = ConfigDict(populate_by_name=True)

    @classmethod
    def from_report(cls, report: Report) -> "ReportPayload":
        return cls(
            vulnerabilities=[FindingPayload(**vars(finding)) for finding in report.vulnerabilities],
            timestamp=report.timestamp,
            scan_duration=report.scan_duration_ms,
            error=None
            if report.error is None
            else ErrorPayload(message=report.error.message, stack=report.error.trace),
        )

    def to_report(self) -> Report:
        return Report(
            vulnerabilities=tuple(Finding(**item.model_dump()) for item in self.vulnerabilities),
            timestamp=self.timestamp,
            scan_duration_ms=self.scan_duration,
            error=None if self.error is None else ScanError(message=self.error.message, trace=self.error.stack),
        )


class ScanRequest(BaseModel):
    # id는 선택 필드로, 있으면 응답에 그대로 돌려준다.
    type: Literal["scan"]
    context: ScanContextPayload = Field(default_factory=ScanContextPayload)
    id: Optional[Any] = None


class ScanResultsMessage(BaseModel):
    type: Literal["scanResults"] = "scanResults"
    data: ReportPayload
    id: Optional[Any] = None


class ErrorMessage(BaseModel):
    type: Literal["error"] = "error"
    error: ErrorPayload
    id: Optional[Any] = None


class HealthResponse(BaseModel):
    status: str
    detectors: List[str]
