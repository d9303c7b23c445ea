"""Decoded log records"""

import json
from typing import Any

Record = dict[str, Any]

MISSING = object()


def value_to_string(value: Any) -> str:
    """Format a JSON value the way it is shown, filtered and searched"""
    if value is MISSING:
        return ""
    if isinstance(value, str):
        return value
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (dict, list)):
        return json.dumps(value, ensure_ascii=False)
    return str(value)


def get_value(record: Record, key: str) -> str:
    """Get the value of a field, formatted as a string"""
    return value_to_string(record.get(key, MISSING))
