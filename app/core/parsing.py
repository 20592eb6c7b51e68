import re
from typing import Optional

# Leading numeric prefix, so "3.0" -> 3 and "12abc" -> 12
INT_PREFIX = re.compile(r"\s*([+-]?\d+)")
FLOAT_PREFIX = re.compile(r"\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def leading_int(value: str) -> Optional[int]:
    match = INT_PREFIX.match(value)
    if not match:
        return None
    try:
        return int(match.group(1))
    except ValueError:
        # Digit run past the int conversion limit
        return None


def leading_float(value: str) -> Optional[float]:
    match = FLOAT_PREFIX.match(value)
    return float(match.group(1)) if match else None
