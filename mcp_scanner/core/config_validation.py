"""이 파일은 .py 스캔 설정 파일 스키마 검증 모듈입니다."""

from __future__ import annotations

from typing import Any, Dict

from .errors import SettingsError

SETTINGS_SCHEMA: Dict[str, Dict[str, Any]] = {
    "memory_threshold_mb": {"type": "integer", "min": 1},
    "max_buffer_size": {"type": "integer", "min": 0},
    "weak_passwords": {"type": "array", "items": "string"},
    "scan_timeout_seconds": {"type": "number", "min": 0.001},
}

_TYPE_MAP = {
    # 스키마 타입을 파이썬 타입으로 매핑한다.
    "string": str,
    "integer": int,
    "number": (int, float),
    "array": list,
}


def validate_settings(data: Any) -> Dict[str, Any]:
    if not isinstance(data, dict):
        raise SettingsError("Settings file must contain a mapping")

    errors = []
    for key in data:
        # 알 수 없는 키는 오타일 가능성이 높으므로 오류로 수집한다.
        if key not in SETTINGS_SCHEMA:
            errors.append(f"Unknown setting: {key}")

    for key, rule in SETTINGS_SCHEMA.items():
        if key not in data:
            continue
        value = data[key]
        expected = rule["type"]
        # bool은 int의 하위 타입이므로 숫자 검증에서 예외 처리한다.
        if isinstance(value, bool) or not isinstance(value, _TYPE_MAP[expected]):
            errors.append(f"Setting '{key}' must be {expected}")
            continue
        if "min" in rule and value < rule["min"]:
            errors.append(f"Setting '{key}' must be >= {rule['min']}")
        if expected == "array":
            item_type = _TYPE_MAP[rule["items"]]
            if not all(isinstance(item, item_type) for item in value):
                errors.append(f"Setting '{key}' must be a list of {rule['items']}")

    if errors:
        # 누적된 오류를 하나의 예외로 전달한다.
        raise SettingsError("; ".join(errors))
    return dict(data)
