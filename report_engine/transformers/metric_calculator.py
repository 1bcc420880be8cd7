# ==============================================
# report_engine/transformers/metric_calculator.py
# ==============================================
"""
Derived metric calculations for report rows.

All functions are pure and total: non-numeric input, None and zero or negative
denominators degrade to 0 instead of raising, and NaN/inf never escape.
"""

import math
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Callable, Iterable, Tuple, Union

from report_engine.core.enums import (
    ComplianceStatus,
    DifficultyLevel,
    LearningQuality,
    RiskLevel,
)
from report_engine.transformers.conditions import Condition, gt, gte, lt

Number = Union[int, float]
Threshold = Tuple[Union[Condition, Callable[[Any], bool]], Any]

DEFAULT_DECIMALS = 2
COMPLIANCE_THRESHOLD = 80
QUALITY_BASELINE_MINUTES = 60


def safe_number(value: Any, default: Number = 0) -> Number:
    """
    Coerce a value to int or float.

    Integers (and integer strings) stay int, everything else numeric becomes
    float. None, booleans, unparseable strings, NaN and inf yield default.
    """
    if value is None or isinstance(value, bool):
        return default

    if isinstance(value, int):
        return value

    if isinstance(value, str):
        text = value.strip()
        if not text:
            return default
        try:
            return int(text)
        except ValueError:
            pass
        value = text

    try:
        number = float(value)
    except (TypeError, ValueError):
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def round_metric(value: Any, decimals: int = DEFAULT_DECIMALS) -> Number:
    """
    Round half away from zero.

    ``round_metric(2.675)`` is ``2.68`` and ``round_metric(0.5, 0)`` is ``1``,
    unlike the builtin ``round``. ``decimals=0`` returns an int.
    """
    number = safe_number(value)
    try:
        quantum = Decimal(1).scaleb(-decimals)
        rounded = Decimal(str(number)).quantize(quantum, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return 0 if decimals == 0 else 0.0

    if decimals == 0:
        return int(rounded)
    return float(rounded)


def rate(numerator: Any, denominator: Any) -> float:
    """Fraction numerator/denominator, 0 when the denominator is not positive."""
    den = safe_number(denominator)
    if den <= 0:
        return 0.0
    return safe_number(numerator) / den


def percentage_rate(numerator: Any, denominator: Any, decimals: int = DEFAULT_DECIMALS) -> Number:
    """rate() on the 0-100 scale, rounded."""
    return round_metric(rate(numerator, denominator) * 100, decimals)


def delta(current: Any, previous: Any) -> Number:
    return safe_number(current) - safe_number(previous)


def growth_rate(current: Any, previous: Any) -> float:
    prev = safe_number(previous)
    if prev <= 0:
        return 0.0
    return delta(current, prev) / prev


def improvement_percentage(current: Any, previous: Any, decimals: int = DEFAULT_DECIMALS) -> Number:
    """Growth from previous to current as a rounded percentage."""
    return round_metric(growth_rate(current, previous) * 100, decimals)


def classify_by_thresholds(value: Any, thresholds: Iterable[Threshold], default: Any) -> Any:
    """
    Return the label of the first matching threshold.

    Args:
        value: Value to classify
        thresholds: Ordered (condition, label) pairs; conditions may be
            Condition instances or plain callables
        default: Catch-all label when nothing matches

    Returns:
        Matching label or default
    """
    for condition, label in thresholds:
        if condition(value):
            return label
    return default


# Preset classifiers

RISK_THRESHOLDS = (
    (gt(60), RiskLevel.CRITICAL.value),
    (gt(30), RiskLevel.HIGH.value),
)

DIFFICULTY_THRESHOLDS = (
    (gte(85), DifficultyLevel.EASY.value),
    (gte(70), DifficultyLevel.MEDIUM.value),
    (gte(50), DifficultyLevel.HARD.value),
)

IMPROVEMENT_THRESHOLDS = (
    (gt(20), "Excellent"),
    (gt(5), "Good"),
)

PROGRESS_STATUS_THRESHOLDS = (
    (gte(80), "On Track"),
    (gte(50), "In Progress"),
)

RECOMMENDATION_RULES = (
    ("avg_score", lt(50), "Review content"),
    ("pass_rate", lt(40), "Too difficult"),
    ("discrimination", lt(0.2), "Poor discrimination"),
    ("reliability", lt(0.6), "Low reliability"),
)

RANK_BADGES = {1: "Gold", 2: "Silver", 3: "Bronze"}


def classify_risk_level(days_inactive: Any) -> str:
    """Days since last activity: >60 CRITICAL, >30 HIGH, otherwise MEDIUM."""
    return classify_by_thresholds(
        safe_number(days_inactive), RISK_THRESHOLDS, RiskLevel.MEDIUM.value
    )


def classify_learning_quality(duration_minutes: Any, score: Any, progress: Any) -> str:
    """
    Infer learning quality from time spent versus result.

    Very short sessions with high scores are flagged SUSPECT, high progress
    with a failing score is a CONCERN.
    """
    duration = safe_number(duration_minutes)
    score = safe_number(score)
    progress = safe_number(progress)

    if duration < 5 and score >= 80:
        return LearningQuality.SUSPECT.value
    if progress > 80 and score < 40:
        return LearningQuality.CONCERN.value
    if duration > QUALITY_BASELINE_MINUTES * 1.5 and score >= 70:
        return LearningQuality.EXCELLENT.value
    if duration >= QUALITY_BASELINE_MINUTES and score >= 70:
        return LearningQuality.GOOD.value
    if score >= 70:
        return LearningQuality.PASSING.value
    return LearningQuality.STANDARD.value


def infer_difficulty(avg_score: Any) -> str:
    return classify_by_thresholds(
        safe_number(avg_score), DIFFICULTY_THRESHOLDS, DifficultyLevel.VERY_HARD.value
    )


def classify_improvement(improvement_pct: Any) -> str:
    return classify_by_thresholds(safe_number(improvement_pct), IMPROVEMENT_THRESHOLDS, "Minimal")


def classify_progress_status(completion_pct: Any) -> str:
    return classify_by_thresholds(safe_number(completion_pct), PROGRESS_STATUS_THRESHOLDS, "At Risk")


def classify_compliance(completion_pct: Any, threshold: Number = COMPLIANCE_THRESHOLD) -> str:
    if safe_number(completion_pct) >= threshold:
        return ComplianceStatus.COMPLIANT.value
    return ComplianceStatus.NON_COMPLIANT.value


def generate_recommendation(
    avg_score: Any,
    pass_rate: Any,
    discrimination: Any,
    reliability: Any,
) -> str:
    """
    Accumulate assessment warning tags in a fixed order.

    Returns the tags joined with " | ", or "Acceptable" when none apply.
    """
    values = {
        "avg_score": safe_number(avg_score),
        "pass_rate": safe_number(pass_rate),
        "discrimination": safe_number(discrimination),
        "reliability": safe_number(reliability),
    }
    tags = [tag for field, condition, tag in RECOMMENDATION_RULES if condition(values[field])]
    return " | ".join(tags) if tags else "Acceptable"


def rank_badge(rank: Any) -> str:
    return RANK_BADGES.get(safe_number(rank), "Member")


def format_duration(minutes: Any) -> str:
    """Render minutes as "2h 5m" or "45m"; "-" when not positive."""
    total = safe_number(minutes)
    if total <= 0:
        return "-"
    hours, mins = divmod(int(total), 60)
    if hours > 0:
        return f"{hours}h {mins}m"
    return f"{mins}m"
