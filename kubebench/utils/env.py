"""Environment variable helpers with type coercion.

Usage:
    from kubebench.utils.env import get_env

    period = get_env("KUBEBENCH_PROBE_PERIOD", default=2, as_type=int)
    level = get_env("KUBEBENCH_LOG_LEVEL", default="INFO")
"""

from __future__ import annotations

import os
from typing import Any, TypeVar, cast, overload

T = TypeVar("T")

_FALSE_VALUES = ("false", "0", "", "no", "off")


class EnvVarError(Exception):
    """Base exception for environment variable errors."""

    pass


class EnvVarTypeError(EnvVarError):
    """Raised when an environment variable cannot be converted to the expected type."""

    def __init__(self, name: str, value: str, expected_type: type) -> None:
        self.name = name
        self.value = value
        self.expected_type = expected_type
        super().__init__(f"Cannot convert {name}='{value}' to {expected_type.__name__}")


def _coerce_type(name: str, value: str, as_type: type) -> Any:
    """Convert a raw string to ``as_type``.

    Raises:
        EnvVarTypeError: If conversion fails.
    """
    try:
        if as_type is bool:
            return value.strip().lower() not in _FALSE_VALUES
        if as_type is list:
            return [item.strip() for item in value.split(",") if item.strip()]
        return as_type(value.strip())
    except (ValueError, TypeError) as e:
        raise EnvVarTypeError(name, value, as_type) from e


@overload
def get_env(name: str, *, default: T, as_type: type[T]) -> T:
    ...


@overload
def get_env(name: str, *, default: T) -> T:
    ...


@overload
def get_env(name: str) -> str | None:
    ...


def get_env(
    name: str,
    *,
    default: T | None = None,
    as_type: type[T] | None = None,
) -> T | str | None:
    """Read an environment variable, optionally converting it.

    Args:
        name: Environment variable name.
        default: Returned when the variable is not set.
        as_type: bool, int, float, str or list (comma separated).

    Raises:
        EnvVarTypeError: If as_type is given and conversion fails.
    """
    value = os.environ.get(name)
    if value is None:
        return default
    if as_type is not None:
        return cast(T, _coerce_type(name, value, as_type))
    return value
