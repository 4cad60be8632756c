"""String → scalar conversion used by the typed accessors.

The accepted spellings are deliberately narrower than Python's builtins:
``int(" 1_0 ")`` is valid Python but not a valid configuration integer here.
All failures raise the builtin :class:`ValueError`.
"""

from __future__ import annotations

import re

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

_TRUE = frozenset({"1", "t", "T", "TRUE", "true", "True"})
_FALSE = frozenset({"0", "f", "F", "FALSE", "false", "False"})
_INT = re.compile(r"[+-]?[0-9]+")


def parse_bool(text: str) -> bool:
    """Parse ``1/t/T/TRUE/true/True`` or ``0/f/F/FALSE/false/False``."""
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"invalid boolean literal: {text!r}")


def parse_int64(text: str) -> int:
    """Parse a signed decimal integer that fits in 64 bits."""
    if not _INT.fullmatch(text):
        raise ValueError(f"invalid integer literal: {text!r}")
    number = int(text)
    if not INT64_MIN <= number <= INT64_MAX:
        raise ValueError(f"integer out of 64-bit range: {text!r}")
    return number


# Plain ``int`` is modelled as a 64-bit platform integer.
parse_int = parse_int64


def parse_float64(text: str) -> float:
    """Parse a floating point literal (``inf``/``nan`` included)."""
    if text != text.strip() or "_" in text:
        raise ValueError(f"invalid float literal: {text!r}")
    return float(text)


__all__ = ["INT64_MAX", "INT64_MIN", "parse_bool", "parse_float64", "parse_int", "parse_int64"]
