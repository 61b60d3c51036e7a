"""Narrowing helpers for untyped JSON (``docship.json``, GitHub responses)."""

from __future__ import annotations

from typing import Mapping, TypeGuard, cast

JsonObject = dict[str, object]


def is_json_object(value: object) -> TypeGuard[JsonObject]:
    if not isinstance(value, dict):
        return False
    keys = cast(dict[object, object], value).keys()
    return all(isinstance(k, str) for k in keys)


def as_json_object(value: object) -> JsonObject | None:
    return value if is_json_object(value) else None


def get_str(obj: Mapping[str, object], key: str) -> str | None:
    """String value of ``key``, stripped.

    Missing keys, non-strings and blank strings all come back as None, which
    the precondition guard treats as "not configured".
    """
    value = obj.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return None


def get_object(obj: Mapping[str, object], key: str) -> JsonObject | None:
    return as_json_object(obj.get(key))
