"""
평문 연결 / 허용되지 않은 열린 포트 점검 탐지기
"""

from __future__ import annotations

from typing import List, Optional

from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.types import Connection, Finding, Severity, VulnerabilityType

PLAINTEXT_PROTOCOLS = {"http", "http:"}


def _is_plaintext(protocol: Optional[str]) -> bool:
    if not protocol:
        return False
    return protocol.strip().lower() in PLAINTEXT_PROTOCOLS


def is_insecure_connection(conn: Connection) -> bool:
    return not conn.encrypted or _is_plaintext(conn.protocol)


def connection_location(conn: Connection) -> str:
    # 비어 있는 host/port는 각각 "unknown"으로 표시한다.
    host = conn.host or "unknown"
    port = "unknown" if conn.port is None else conn.port
    return f"{host}:{port}"


class NetworkDetector(BaseDetector):
    name = "network"

    def detect(self) -> List[Finding]:
        for conn in self.context.connections or ():
            if is_insecure_connection(conn):
                self.add_finding(
                    VulnerabilityType.INSECURE_CONNECTION,
                    Severity.HIGH,
                    details="Unencrypted connection detected",
                    location=connection_location(conn),
                    recommendation="Use HTTPS/TLS for all connections",
                )

        host = self.context.host
        if host:
            allowed = set(self.context.allowed_ports or ())
            for port in self.settings.port_probe(host):
                if port not in allowed:
                    self.add_finding(
                        VulnerabilityType.OPEN_PORT,
                        Severity.MEDIUM,
                        details=f"Potentially unnecessary open port: {port}",
                        location=f"{host}:{port}",
                        recommendation="Close unnecessary ports",
                    )

        return self.results
