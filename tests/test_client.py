"""이 파일은 .py 테스트 모듈로 실제 서버(임시 포트)와 클라이언트 간 종단 간 스캔을 검증합니다."""

import socket
import threading
import time
from contextlib import contextmanager
from dataclasses import replace

import pytest
import uvicorn

from mcp_scanner.api.app import app
from mcp_scanner.core.detector_base import BaseDetector
from mcp_scanner.core.errors import ScannerConnectionError, ScanTimeoutError
from mcp_scanner.core.types import ScanContext, Severity, VulnerabilityType
from mcp_scanner.detectors import FilesystemDetector
from mcp_scanner.services.engine import ScanEngine, get_engine
from mcp_scanner.client import ScannerClient


@contextmanager
def _running_server(engine: ScanEngine):
    # 포트 0으로 띄워 운영체제가 고른 임시 포트를 사용한다.
    app.dependency_overrides[get_engine] = lambda: engine
    server = uvicorn.Server(uvicorn.Config(app, host="127.0.0.1", port=0, log_level="warning"))
    thread = threading.Thread(target=server.run, daemon=True)
    thread.start()
    try:
        deadline = time.monotonic() + 10
        while not server.started:
            if time.monotonic() > deadline:
                raise RuntimeError("uvicorn did not start")
            time.sleep(0.05)
        port = server.servers[0].sockets[0].getsockname()[1]
        yield f"ws://127.0.0.1:{port}"
    finally:
        server.should_exit = True
        thread.join(timeout=10)
        app.dependency_overrides.clear()


@pytest.fixture
def server_url(settings):
    with _running_server(ScanEngine(settings)) as url:
        yield url


class _SlowWhenAsked(BaseDetector):
    # paths에 "slow"가 있으면 응답을 늦춘다.
    name = "slow_when_asked"

    def detect(self):
        if "slow" in (self.context.paths or ()):
            time.sleep(1.0)
        return self.results


@pytest.fixture
def slow_server_url(settings):
    engine = ScanEngine(replace(settings, scan_timeout=10), detectors=[_SlowWhenAsked, FilesystemDetector])
    with _running_server(engine) as url:
        yield url


def _unused_port() -> int:
    with socket.socket() as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


def test_end_to_end_debug_and_csrf(server_url) -> None:
    with ScannerClient(server_url, timeout=10) as client:
        report = client.scan_system({"config": {"debug": True, "csrfProtection": False}})
    assert [(finding.type, finding.severity) for finding in report.vulnerabilities] == [
        (VulnerabilityType.DEBUG_MODE, Severity.MEDIUM),
        (VulnerabilityType.MISSING_CSRF, Severity.HIGH),
    ]
    assert report.error is None


def test_client_reuses_connection_for_sequential_scans(server_url) -> None:
    client = ScannerClient(server_url, timeout=10)
    client.connect()
    try:
        first = client.scan_system(ScanContext(paths=["../etc/passwd"]), request_id=1)
        second = client.scan_system(ScanContext(credentials={"alice": "S3cur3!"}), request_id=2)
    finally:
        client.disconnect()
    assert [finding.location for finding in first.vulnerabilities] == ["../etc/passwd"]
    assert second.vulnerabilities == ()
    assert not client.connected


def test_concurrent_clients_get_independent_reports(server_url) -> None:
    results = {}

    def worker(name: str, context: dict) -> None:
        with ScannerClient(server_url, timeout=10) as client:
            results[name] = client.scan_system(context)

    threads = [
        threading.Thread(target=worker, args=("paths", {"paths": ["../a", "../b"]})),
        threading.Thread(target=worker, args=("creds", {"credentials": {"root": "ADMIN"}})),
    ]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join(timeout=20)

    assert [finding.type for finding in results["paths"].vulnerabilities] == [VulnerabilityType.PATH_TRAVERSAL] * 2
    assert [finding.type for finding in results["creds"].vulnerabilities] == [VulnerabilityType.WEAK_CREDENTIALS]


def test_connect_failure_is_descriptive() -> None:
    client = ScannerClient(f"ws://127.0.0.1:{_unused_port()}", timeout=2)
    try:
        client.connect()
    except ScannerConnectionError as exc:
        assert "Cannot connect" in str(exc)
    else:
        raise AssertionError("ScannerConnectionError not raised")


def test_scan_without_connect_fails() -> None:
    try:
        ScannerClient("ws://127.0.0.1:1").scan_system({})
    except ScannerConnectionError as exc:
        assert "connect()" in str(exc)
    else:
        raise AssertionError("ScannerConnectionError not raised")


def test_response_timeout_drops_connection(slow_server_url) -> None:
    client = ScannerClient(slow_server_url, timeout=0.3)
    client.connect()
    try:
        client.scan_system({"paths": ["slow", "../first"]})
    except ScanTimeoutError as exc:
        assert "within 0.3 seconds" in str(exc)
    else:
        raise AssertionError("ScanTimeoutError not raised")
    # 늦은 응답이 남은 연결은 재사용하지 않는다.
    assert not client.connected

    client.connect()
    try:
        second = client.scan_system({"paths": ["ok"]})
    finally:
        client.disconnect()
    assert second.vulnerabilities == ()


def test_connect_uses_context_managed_connection(server_url, recwarn) -> None:
    client = ScannerClient(server_url, timeout=10)
    client.connect()
    try:
        assert client.connected
    finally:
        client.disconnect()
    assert not client.connected
    assert not [warning for warning in recwarn if "context manager" in str(warning.message)]
