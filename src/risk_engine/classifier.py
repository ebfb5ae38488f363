"""
Risk Classifier

Maps the current rainfall magnitude to a flood risk level.
"""

import math
import re
from typing import Any

from .models import RiskAssessment, normalize_risk_level


HIGH_RAINFALL_MM = 100.0
MEDIUM_RAINFALL_MM = 50.0

_LEADING_NUMBER = re.compile(r"^\s*[-+]?(\d+(\.\d*)?|\.\d+)([eE][-+]?\d+)?")


def coerce_rainfall(value: Any) -> float:
    """
    Coerce a rainfall reading to a non-negative float

    Accepts numbers and strings with a leading number ("12mm" -> 12.0).
    Anything else, NaN, infinities and negative values become 0.
    """
    if isinstance(value, bool):
        return 0.0

    if isinstance(value, str):
        match = _LEADING_NUMBER.match(value)
        if not match:
            return 0.0
        value = match.group(0)

    try:
        rainfall = float(value)
    except (TypeError, ValueError):
        return 0.0

    if not math.isfinite(rainfall) or rainfall < 0:
        return 0.0
    return rainfall


def _format_mm(rainfall: float) -> str:
    return f"{rainfall:g}mm"


def classify_rainfall(rainfall_mm: Any) -> RiskAssessment:
    """
    Classify flood risk from current rainfall

    - above 100mm: High
    - 50mm to 100mm inclusive: Medium
    - below 50mm: Low
    """
    rainfall = coerce_rainfall(rainfall_mm)

    if rainfall > HIGH_RAINFALL_MM:
        return RiskAssessment(
            level="High",
            explanation=(
                f"High risk due to intense rainfall ({_format_mm(rainfall)}). "
                "Potential for severe flooding."
            ),
        )
    elif MEDIUM_RAINFALL_MM <= rainfall <= HIGH_RAINFALL_MM:
        return RiskAssessment(
            level="Medium",
            explanation=(
                f"Moderate risk with significant rainfall ({_format_mm(rainfall)}). "
                "Flood prone areas should be alert."
            ),
        )
    else:
        return RiskAssessment(
            level="Low",
            explanation=f"Low risk. Rainfall is within manageable limits ({_format_mm(rainfall)}).",
        )


__all__ = ["classify_rainfall", "coerce_rainfall", "normalize_risk_level"]
