"""
Route Confidence Scoring

Scores evacuation route candidates from the current risk assessment and
explanation. Safe routes gain confidence as conditions worsen; fast routes
lose it.
"""

from typing import List, Optional, Sequence

from .evacuation import evacuation_factors
from .models import RiskAssessment, RiskExplanation, RouteCandidate, RouteConfidence


SAFE_ROUTE_BASE = 0.6
FAST_ROUTE_BASE = 0.7

SAFE_ROUTE_ADJUSTMENTS = {
    "high_risk": 0.2,
    "above_average_rainfall": 0.1,
    "wettest_month": 0.1,
}
FAST_ROUTE_ADJUSTMENTS = {
    "high_risk": -0.2,
    "above_average_rainfall": -0.2,
}

MIN_CONFIDENCE = 0.3
MAX_CONFIDENCE = 1.0

HIGH_CONFIDENCE = 0.7
MEDIUM_CONFIDENCE = 0.5


DEFAULT_ROUTES = [
    RouteCandidate(
        id=1,
        name="Safest Route (Recommended)",
        is_safe=True,
        metadata={
            "why_text": "Why this route?",
            "why_points": [
                "Passes through historically low-flood-risk zones",
                "Avoids roads that recorded high water levels in past events",
                "Slightly longer, but minimizes displacement risk",
            ],
            "best_for": "Families, elderly, night evacuation",
            "risk_warning": None,
            "path": [[28.7041, 77.1025], [28.71, 77.11]],
        },
    ),
    RouteCandidate(
        id=2,
        name="Fastest Route (Use with caution)",
        is_safe=False,
        metadata={
            "why_text": "Why this route?",
            "why_points": [
                "Shortest travel time to shelter",
                "May cross low-lying areas prone to waterlogging",
                "Risk increases if rainfall continues",
            ],
            "best_for": "Short-term evacuation during light rain",
            "risk_warning": "Roads may become impassable if rainfall exceeds historical average.",
            "path": [[28.7041, 77.1025], [28.69, 77.09]],
        },
    ),
]


def confidence_label(confidence: float) -> str:
    if confidence >= HIGH_CONFIDENCE:
        return "High"
    elif confidence >= MEDIUM_CONFIDENCE:
        return "Medium"
    return "Low"


def route_confidence(is_safe: bool, risk: RiskAssessment, explanation: RiskExplanation) -> float:
    """
    Confidence score for a single route

    Safe routes start at 0.6 and are capped at 1.0; fast routes start at 0.7
    and are floored at 0.3. Rounded to two decimals so thresholds compare
    exactly (0.7 - 0.2 is 0.5, not 0.49999...).
    """
    conditions = evacuation_factors(risk, explanation)

    if is_safe:
        score = SAFE_ROUTE_BASE + sum(
            delta for name, delta in SAFE_ROUTE_ADJUSTMENTS.items() if conditions[name]
        )
        score = min(MAX_CONFIDENCE, score)
    else:
        score = FAST_ROUTE_BASE + sum(
            delta for name, delta in FAST_ROUTE_ADJUSTMENTS.items() if conditions[name]
        )
        score = max(MIN_CONFIDENCE, score)

    return round(score, 2)


def score_routes(
    routes: Sequence[RouteCandidate],
    risk: Optional[RiskAssessment],
    explanation: Optional[RiskExplanation]
) -> List[RouteConfidence]:
    """
    Score every route candidate

    While either input is unresolved each route is returned as pending,
    without a numeric confidence.
    """
    if risk is None or explanation is None:
        return [
            RouteConfidence(route_id=route.id, name=route.name, is_safe=route.is_safe, pending=True)
            for route in routes
        ]

    scored = []
    for route in routes:
        confidence = route_confidence(route.is_safe, risk, explanation)
        scored.append(RouteConfidence(
            route_id=route.id,
            name=route.name,
            is_safe=route.is_safe,
            confidence=confidence,
            label=confidence_label(confidence),
        ))

    return scored
