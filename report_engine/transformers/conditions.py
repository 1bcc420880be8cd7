# ==============================================
# report_engine/transformers/conditions.py
# ==============================================
"""
Threshold predicates shared by metric classification and column style rules.
"""

import math
import operator
from dataclasses import dataclass
from typing import Any, Callable, Dict, Optional

NUMERIC_OPERATORS: Dict[str, Callable[[float, float], bool]] = {
    "gt": operator.gt,
    "gte": operator.ge,
    "lt": operator.lt,
    "lte": operator.le,
}

SUPPORTED_OPERATORS = ("gt", "gte", "lt", "lte", "eq", "ne", "in", "contains")


def _to_float(value: Any) -> Optional[float]:
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(number):
        return None
    return number


@dataclass(frozen=True)
class Condition:
    """
    A single comparison against a fixed bound.

    Numeric operators (gt, gte, lt, lte) coerce both sides to float and
    evaluate to False when either side is not numeric.
    """

    operator: str
    bound: Any = None

    def __post_init__(self):
        if self.operator not in SUPPORTED_OPERATORS:
            raise ValueError(
                f"Unsupported condition operator: {self.operator}. "
                f"Supported operators: {list(SUPPORTED_OPERATORS)}"
            )

    def matches(self, value: Any) -> bool:
        if self.operator in NUMERIC_OPERATORS:
            left = _to_float(value)
            right = _to_float(self.bound)
            if left is None or right is None:
                return False
            return NUMERIC_OPERATORS[self.operator](left, right)

        if self.operator == "eq":
            return value == self.bound
        if self.operator == "ne":
            return value != self.bound
        if self.operator == "in":
            try:
                return value in self.bound
            except TypeError:
                return False

        # contains
        if value is None:
            return False
        try:
            return self.bound in value
        except TypeError:
            return False

    __call__ = matches


def gt(bound: Any) -> Condition:
    return Condition("gt", bound)


def gte(bound: Any) -> Condition:
    return Condition("gte", bound)


def lt(bound: Any) -> Condition:
    return Condition("lt", bound)


def lte(bound: Any) -> Condition:
    return Condition("lte", bound)


def eq(bound: Any) -> Condition:
    return Condition("eq", bound)


def ne(bound: Any) -> Condition:
    return Condition("ne", bound)


def is_in(bound: Any) -> Condition:
    return Condition("in", bound)


def contains(bound: Any) -> Condition:
    return Condition("contains", bound)
