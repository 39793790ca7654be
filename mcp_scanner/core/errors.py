"""이 파일은 .py 공통 예외 모듈로 오류 유형을 표준화합니다."""


class ScannerError(Exception):
    """스캐너 전용 예외의 공통 부모입니다."""


class SettingsError(ValueError):
    """스캔 설정 값이나 설정 파일 검증 실패 시 사용합니다."""


class ProtocolError(ValueError):
    """잘못된 형식의 요청/응답 메시지에 사용합니다."""


class ScanTimeoutError(ScannerError):
    """스캔 또는 응답 대기가 제한 시간을 넘었을 때 사용합니다."""


class ScanCancelledError(ScannerError):
    """취소 신호로 스캔이 중단되었을 때 사용합니다."""


class ScannerConnectionError(ScannerError):
    """클라이언트가 서버에 연결하지 못하거나 연결이 끊겼을 때 사용합니다."""


class RemoteScanError(ScannerError):
    """서버가 error 응답을 보냈을 때 메시지와 스택을 함께 전달합니다."""

    def __init__(self, message: str, stack: str = "") -> None:
        super().__init__(message)
        self.message = message
        self.stack = stack
