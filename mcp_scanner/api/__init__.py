"""이 파일은 .py API 패키지 초기화 모듈입니다. FastAPI 앱은 mcp_scanner.api.app에서 가져옵니다."""
