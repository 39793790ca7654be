"""이 파일은 .py 테스트 모듈로 스캔 설정 파일 검증을 검증합니다."""

from mcp_scanner.core.config import ScanSettings
from mcp_scanner.core.config_validation import validate_settings
from mcp_scanner.core.errors import SettingsError


def test_defaults_match_documented_values() -> None:
    settings = ScanSettings()
    assert settings.memory_threshold_bytes == 100 * 1024 * 1024
    assert settings.max_buffer_size == 2048
    assert settings.scan_timeout == 30.0
    assert settings.weak_passwords == {"admin", "password", "123456", "default"}


def test_settings_file_overrides_defaults(tmp_path) -> None:
    path = tmp_path / "scanner.yml"
    path.write_text(
        "memory_threshold_mb: 256\n"
        "max_buffer_size: 4096\n"
        "scan_timeout_seconds: 5\n"
        "weak_passwords: [Admin, letmein]\n"
    )
    settings = ScanSettings.from_file(path)
    assert settings.memory_threshold_bytes == 256 * 1024 * 1024
    assert settings.max_buffer_size == 4096
    assert settings.scan_timeout == 5.0
    assert settings.weak_passwords == {"admin", "letmein"}


def test_from_env_without_file_uses_defaults(tmp_path) -> None:
    assert ScanSettings.from_env(tmp_path / "absent.yml") == ScanSettings()


def test_validate_settings_type_error() -> None:
    try:
        validate_settings({"max_buffer_size": "big"})
    except SettingsError as exc:
        assert "max_buffer_size" in str(exc)
    else:
        raise AssertionError("SettingsError not raised")


def test_validate_settings_rejects_bool_and_unknown_keys() -> None:
    try:
        validate_settings({"memory_threshold_mb": True, "colour": "blue"})
    except SettingsError as exc:
        assert "memory_threshold_mb" in str(exc)
        assert "Unknown setting: colour" in str(exc)
    else:
        raise AssertionError("SettingsError not raised")


def test_validate_settings_min_validation() -> None:
    try:
        validate_settings({"memory_threshold_mb": 0})
    except SettingsError as exc:
        assert ">= 1" in str(exc)
    else:
        raise AssertionError("SettingsError not raised")


def test_unreadable_settings_file(tmp_path) -> None:
    path = tmp_path / "broken.yml"
    path.write_text("memory_threshold_mb: [unclosed\n")
    try:
        ScanSettings.from_file(path)
    except SettingsError as exc:
        assert "broken.yml" in str(exc)
    else:
        raise AssertionError("SettingsError not raised")
