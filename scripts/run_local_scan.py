"""이 파일은 .py 로컬 스캔 데모 스크립트로 서버 없이 엔진을 직접 실행합니다."""

import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(REPO_ROOT))

from mcp_scanner.core.types import ScanContext
from mcp_scanner.services.engine import ScanEngine
from mcp_scanner.services.reporting import format_report


def main() -> None:
    target = sys.argv[1] if len(sys.argv) > 1 else str(REPO_ROOT)
    context = ScanContext(
        base_path=target,
        paths=["../etc/passwd"],
        credentials={"admin": "admin"},
        config={"debug": True, "csrfProtection": False},
    )
    report = ScanEngine().scan(context)
    print(format_report(report))


if __name__ == "__main__":
    main()
