"""Condition evaluation and random number helpers used by script actions."""

from __future__ import annotations

import operator
import random
import re
from datetime import datetime
from typing import Callable, Mapping, Optional

# Searched in this order; the first operator found anywhere in the
# expression splits it into its two sides.
_OPERATORS = ("==", "<=", ">=", "<>", "<", ">", "=", "[[", "[")

_ORDERING: dict[str, Callable[[object, object], bool]] = {
    "=": operator.eq,
    "<>": operator.ne,
    "<": operator.lt,
    "<=": operator.le,
    ">": operator.gt,
    ">=": operator.ge,
}

_INT_PATTERN = re.compile(r"\s*[+-]?\d+\s*")
_INT_MIN = -(2**31)
_INT_MAX = 2**31 - 1


def _split(expr: str) -> Optional[tuple[str, str, str]]:
    for op in _OPERATORS:
        idx = expr.find(op)
        if idx != -1:
            return op, expr[:idx].strip(), expr[idx + len(op):].strip()
    return None


def _parse_int(text: str) -> int:
    if not _INT_PATTERN.fullmatch(text):
        return 0
    value = int(text)
    return value if _INT_MIN <= value <= _INT_MAX else 0


def _parse_datetime(text: str) -> Optional[datetime]:
    candidate = text.strip()
    if candidate.endswith(("Z", "z")):
        candidate = candidate[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(candidate)
    except ValueError:
        return None


def _time_key(value: Optional[datetime]) -> tuple:
    # An invalid time orders before every valid one and equals another invalid one.
    if value is None:
        return (0, 0.0)
    return (1, value.timestamp())


def evaluate_condition(
    expr: str,
    string_vars: Mapping[str, str],
    counters: Mapping[str, int],
    time_vars: Mapping[str, datetime],
) -> bool:
    """Evaluate a script condition such as ``#count >= 3`` or ``$name = bob``.

    Counters start with ``#``, time variables with ``!`` and string
    variables with ``$``. Anything that cannot be evaluated is false.
    """
    split = _split(expr)
    if split is None:
        return False
    op, lhs, rhs = split
    if not lhs or not rhs:
        return False

    if lhs.startswith("#") or rhs.startswith("#"):
        def resolve_int(value: str) -> int:
            if value.startswith("#"):
                return counters.get(value, 0)
            return _parse_int(value)

        compare = _ORDERING.get(op)
        return bool(compare and compare(resolve_int(lhs), resolve_int(rhs)))

    if lhs.startswith("!"):
        def resolve_time(value: str) -> Optional[datetime]:
            if value.startswith("!"):
                return time_vars.get(value)
            return _parse_datetime(value)

        compare = _ORDERING.get(op)
        return bool(
            compare and compare(_time_key(resolve_time(lhs)), _time_key(resolve_time(rhs)))
        )

    def resolve_string(value: str) -> str:
        if value.startswith("$"):
            return string_vars.get(value, "")
        return value

    left = resolve_string(lhs)
    right = resolve_string(rhs)
    if op == "=":
        return left.lower() == right.lower()
    if op == "==":
        return left == right
    if op == "<>":
        return left.lower() != right.lower()
    if op == "[":
        return right.lower() in left.lower()
    if op == "[[":
        return right in left
    return False


def random_in_range(minimum: int, maximum: int, center_random: bool) -> int:
    """Return a random integer in ``[minimum, maximum]``.

    With ``center_random`` the result is the mean of two draws, which
    favours values near the middle of the range.
    """
    if minimum > maximum:
        raise ValueError(f"empty range: {minimum} > {maximum}")
    if not center_random:
        return random.randint(minimum, maximum)
    total = random.randint(minimum, maximum) + random.randint(minimum, maximum)
    half = abs(total) // 2
    return half if total >= 0 else -half