"""
Damage reconstruction (magnitude + exponent code -> US$)
=======================================================

Storm Data stores each damage figure in two columns:
- PROPDMG / CROPDMG: the magnitude (e.g. 2.5)
- PROPDMGEXP / CROPDMGEXP: a code for the order of magnitude (e.g. "K")

True amount = magnitude * multiplier(code).

| code              | multiplier |
|-------------------|-----------:|
| h                 |        100 |
| k                 |      1,000 |
| m                 |  1,000,000 |
| b                 |      1e9   |
| +                 |          1 |
| - , ? , blank     |          0 |
| digits only (0-9) |         10 |

Codes are case-insensitive. Anything else raises `UnknownExponentCode`.
"""

from __future__ import annotations
from enum import Enum
from types import MappingProxyType
from typing import Optional
import math
import re

class ExponentCode(Enum):
    HUNDRED = "h"
    THOUSAND = "k"
    MILLION = "m"
    BILLION = "b"
    PLUS = "+"
    MINUS = "-"
    QUESTION = "?"
    BLANK = ""
    # any all-digit code; its value is never used for lookup
    DIGIT = "0-9"

MULTIPLIERS = MappingProxyType({
    ExponentCode.HUNDRED: 100,
    ExponentCode.THOUSAND: 1_000,
    ExponentCode.MILLION: 1_000_000,
    ExponentCode.BILLION: 1_000_000_000,
    ExponentCode.PLUS: 1,
    ExponentCode.MINUS: 0,
    ExponentCode.QUESTION: 0,
    ExponentCode.BLANK: 0,
    ExponentCode.DIGIT: 10,
})

_SYMBOLS = {c.value: c for c in ExponentCode if c is not ExponentCode.DIGIT}
_DIGITS_RE = re.compile(r"[0-9]+")

class UnknownExponentCode(ValueError):
    """Exponent code that is not a digit, not in the table and not blank."""

    def __init__(self, code: str) -> None:
        super().__init__(f"Undefined exponent code: {code!r}")
        self.code = code

def _clean(code: Optional[object]) -> str:
    if code is None:
        return ""
    if isinstance(code, float):
        if math.isnan(code):
            return ""
        # digit codes from a numeric column arrive as 5.0
        if code.is_integer():
            return str(int(code))
    return str(code).strip().lower()

def parse_exponent_code(code: Optional[object]) -> ExponentCode:
    """Resolve a raw code to an ExponentCode.

    The all-digits check runs before the symbol lookup.
    """
    c = _clean(code)
    if _DIGITS_RE.fullmatch(c):
        return ExponentCode.DIGIT
    try:
        return _SYMBOLS[c]
    except KeyError:
        raise UnknownExponentCode(str(code)) from None

def multiplier(code: Optional[object]) -> int:
    return MULTIPLIERS[parse_exponent_code(code)]

def reconstruct_damage(magnitude: Optional[float], code: Optional[object]) -> float:
    """Return magnitude * multiplier(code). A missing magnitude counts as 0."""
    factor = multiplier(code)
    if magnitude is None or (isinstance(magnitude, float) and math.isnan(magnitude)):
        return 0.0
    return float(magnitude) * factor
