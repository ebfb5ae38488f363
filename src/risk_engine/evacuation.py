"""
Evacuation Decision

Three-condition gate: evacuation is recommended only when the risk level is
High, the last 7 days were wetter than an average week, and the current
month is historically the wettest. Partial matches never recommend.
"""

from typing import Optional

from .models import EvacuationDecision, RiskAssessment, RiskExplanation


EVACUATION_WINDOW_HOURS = (24, 48)

RECOMMENDED_RATIONALE = (
    "High risk + above-average rainfall + wettest month. Consider moving to higher ground."
)
STAY_INFORMED_RATIONALE = "No evacuation needed yet. Stay informed with local updates."


def evacuation_factors(risk: RiskAssessment, explanation: RiskExplanation) -> dict:
    """Each gate condition evaluated separately"""
    return {
        "high_risk": risk.level == "High",
        "above_average_rainfall": explanation.recent_7day_mm > explanation.average_weekly_mm,
        "wettest_month": explanation.is_wettest_month is True,
    }


def decide_evacuation(
    risk: Optional[RiskAssessment],
    explanation: Optional[RiskExplanation]
) -> EvacuationDecision:
    """
    Decide whether evacuation should be recommended

    Returns:
        EvacuationDecision with a 24-48 hour window when all gate conditions
        hold, otherwise a non-recommendation with the generic rationale
    """
    if risk is None or explanation is None:
        return EvacuationDecision(recommended=False, rationale=STAY_INFORMED_RATIONALE)

    if all(evacuation_factors(risk, explanation).values()):
        return EvacuationDecision(
            recommended=True,
            window_hours=EVACUATION_WINDOW_HOURS,
            rationale=RECOMMENDED_RATIONALE,
        )

    return EvacuationDecision(recommended=False, rationale=STAY_INFORMED_RATIONALE)
