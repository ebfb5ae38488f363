import itertools

import pytest

from src.risk_engine import DEFAULT_ROUTES, RiskAssessment, RouteCandidate, score_routes
from src.risk_engine.routes import confidence_label, route_confidence

from conftest import make_explanation


def _risk(level):
    return RiskAssessment(level=level, explanation="")


def test_worst_case_confidence():
    explanation = make_explanation(recent_7day_mm=120, average_weekly_mm=80, is_wettest_month=True)
    safe, fast = score_routes(DEFAULT_ROUTES, _risk("High"), explanation)

    assert safe.is_safe and safe.confidence == 1.0 and safe.label == "High"
    assert not fast.is_safe and fast.confidence == 0.3 and fast.label == "Low"


def test_calm_conditions_use_bases():
    explanation = make_explanation(recent_7day_mm=5, average_weekly_mm=20)
    safe, fast = score_routes(DEFAULT_ROUTES, _risk("Low"), explanation)

    assert safe.confidence == 0.6
    assert safe.label == "Medium"
    assert fast.confidence == 0.7
    assert fast.label == "High"


def test_high_risk_only():
    explanation = make_explanation(recent_7day_mm=5, average_weekly_mm=20)
    safe, fast = score_routes(DEFAULT_ROUTES, _risk("High"), explanation)

    assert safe.confidence == 0.8
    assert fast.confidence == 0.5
    assert fast.label == "Medium"


@pytest.mark.parametrize("level, above, wettest", itertools.product(
    ["Low", "Medium", "High"], [True, False], [True, False]
))
def test_confidence_bounds(level, above, wettest):
    explanation = make_explanation(
        recent_7day_mm=30 if above else 10,
        average_weekly_mm=20,
        is_wettest_month=wettest,
    )
    safe, fast = score_routes(DEFAULT_ROUTES, _risk(level), explanation)

    for score in (safe, fast):
        assert 0.3 <= score.confidence <= 1.0
        assert score.label == confidence_label(score.confidence)

    if level == "High":
        assert safe.confidence >= fast.confidence


def test_fast_route_never_exceeds_base():
    explanation = make_explanation(recent_7day_mm=0, average_weekly_mm=20, is_wettest_month=True)
    assert route_confidence(False, _risk("Low"), explanation) == 0.7


@pytest.mark.parametrize("confidence, label", [
    (1.0, "High"),
    (0.7, "High"),
    (0.69, "Medium"),
    (0.5, "Medium"),
    (0.49, "Low"),
    (0.3, "Low"),
])
def test_confidence_label(confidence, label):
    assert confidence_label(confidence) == label


def test_pending_without_inputs():
    explanation = make_explanation()
    for risk, expl in ((None, explanation), (_risk("High"), None), (None, None)):
        scores = score_routes(DEFAULT_ROUTES, risk, expl)
        assert [score.route_id for score in scores] == [1, 2]
        assert all(score.pending for score in scores)
        assert all(score.confidence is None and score.label is None for score in scores)


def test_custom_candidates():
    routes = [
        RouteCandidate(id=7, name="Ridge road", is_safe=True),
        RouteCandidate(id=8, name="River road", is_safe=False, metadata={"km": 4}),
        RouteCandidate(id=9, name="Hill path", is_safe=True),
    ]
    scores = score_routes(routes, _risk("Medium"), make_explanation())

    assert [score.route_id for score in scores] == [7, 8, 9]
    assert [score.confidence for score in scores] == [0.6, 0.7, 0.6]
    assert not any(score.pending for score in scores)


def test_empty_candidates():
    assert score_routes([], _risk("High"), make_explanation()) == []
