import pytest
from valuator.valuation.errors import UndefinedRatioError
from valuator.valuation.risk import (
    compute_confidence, compute_risk_scores, financial_risk, liquidity_risk,
    market_risk, operational_risk, risk_level, to_risk_assessment,
)


def test_market_risk_capped_at_80():
    assert market_risk(0.05) == pytest.approx(70)
    assert market_risk(0.15) == 80
    assert market_risk(2.0) == 80


def test_market_risk_never_negative():
    assert market_risk(-0.50) == 0


def test_financial_risk_floor():
    assert financial_risk(1_000_000, 200_000) == pytest.approx(30)
    assert financial_risk(1_000_000, 900_000) == 20


def test_financial_risk_bounded_for_heavy_losses():
    assert financial_risk(100_000, -500_000) == 100


def test_financial_risk_zero_revenue():
    with pytest.raises(UndefinedRatioError):
        financial_risk(0, 100_000)


@pytest.mark.parametrize("employees,expected", [
    (0, 65), (19, 65), (20, 55), (99, 55), (100, 45), (5_000, 45),
])
def test_operational_risk_size_bands(employees, expected):
    assert operational_risk(employees) == expected


def test_liquidity_risk():
    assert liquidity_risk(1_000_000) == pytest.approx(35)
    assert liquidity_risk(100_000_000) == 20


def test_overall_is_mean():
    scores = compute_risk_scores(1_000_000, 200_000, 0.15, 50)
    assert scores.overall == pytest.approx((80 + 30 + 55 + 35) / 4)
    assessment = to_risk_assessment(scores)
    assert assessment.overall_score == 50
    assert assessment.market_risk == 80


def test_confidence_capped_at_95():
    scores = compute_risk_scores(50_000_000, 25_000_000, 0.0, 500)
    assert scores.overall < 40
    assert compute_confidence(scores) == 95


def test_confidence_floored_at_70():
    scores = compute_risk_scores(100_000, -500_000, 0.50, 5)
    assert compute_confidence(scores) == 70


def test_confidence_mid_band():
    scores = compute_risk_scores(1_000_000, 200_000, 0.15, 50)
    assert compute_confidence(scores) == 90


@pytest.mark.parametrize("score,label", [(0, "Low"), (30, "Low"), (31, "Medium"), (60, "Medium"), (61, "High")])
def test_risk_level(score, label):
    assert risk_level(score) == label
