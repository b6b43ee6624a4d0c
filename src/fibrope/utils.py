"""utils.py - Argument checks and byte coercion helpers"""

from __future__ import annotations

from typing import Any

from .config import get_config


def assumption(obj: Any, *expected: type) -> bool:
    """Check against multiple possible types"""
    for exp in expected:
        if isinstance(obj, exp):
            return True
    # If no expected type matched, raise an assertion to preserve previous behavior
    _raise_assert(obj, expected)
    return False


def _raise_assert(obj: Any, expected: tuple[type, ...]) -> bool:
    if len(expected) == 1:
        msg = f"Expected {expected[0].__name__}, instead got {type(obj).__name__} (value: {obj!r})"
    else:
        names = ", ".join(exp.__name__ for exp in expected)
        msg = f"Expected one of ({names}), instead got {type(obj).__name__} (value: {obj!r})"
    raise AssertionError(msg)


def to_bytes(data: Any) -> bytes:
    """Coerce user input to an immutable byte string.

    str values are encoded with the configured encoding; bytes-like values
    (bytes, bytearray, memoryview) are copied. Anything else is a TypeError.
    """
    if isinstance(data, bytes):
        return data
    if isinstance(data, str):
        return data.encode(get_config().encoding)
    if isinstance(data, (bytearray, memoryview)):
        return bytes(data)
    raise TypeError(
        f"Expected bytes, bytearray, memoryview or str, instead got {type(data).__name__}"
    )
