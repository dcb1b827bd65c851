from dataclasses import dataclass

from valuator.models.valuations import RiskAssessment
from valuator.valuation.errors import UndefinedRatioError
from valuator.valuation.formatting import round_int

MIN_CONFIDENCE = 70
MAX_CONFIDENCE = 95


@dataclass(frozen=True)
class RiskScores:
    """Unrounded risk sub-scores, each already within its bounds."""
    market: float
    financial: float
    operational: float
    liquidity: float

    @property
    def overall(self) -> float:
        return (self.market + self.financial + self.operational + self.liquidity) / 4


def _bounded(score: float) -> float:
    return min(max(score, 0.0), 100.0)


def market_risk(growth_rate: float) -> float:
    """Faster growth reads as more volatile. Capped at 80."""
    return _bounded(min(60 + growth_rate * 100 * 2, 80))


def financial_risk(revenue: float, ebitda: float) -> float:
    """Higher EBITDA margin lowers risk. Floored at 20."""
    if revenue == 0:
        raise UndefinedRatioError("EBITDA margin", "revenue")
    return _bounded(max(20, 50 - (ebitda / revenue * 100)))


def operational_risk(employees: int) -> float:
    """Small teams carry key-person risk. Capped at 70."""
    if employees < 20:
        size_adjustment = 20
    elif employees < 100:
        size_adjustment = 10
    else:
        size_adjustment = 0
    return _bounded(min(45 + size_adjustment, 70))


def liquidity_risk(revenue: float) -> float:
    """Larger companies are easier to sell. Floored at 20."""
    return _bounded(max(20, 40 - (revenue / 1_000_000 * 5)))


def compute_risk_scores(
    revenue: float,
    ebitda: float,
    growth_rate: float,
    employees: int,
) -> RiskScores:
    """growth_rate is a fraction (0.15 for 15%)."""
    return RiskScores(
        market=market_risk(growth_rate),
        financial=financial_risk(revenue, ebitda),
        operational=operational_risk(employees),
        liquidity=liquidity_risk(revenue),
    )


def compute_confidence(scores: RiskScores) -> int:
    """Confidence falls one point per risk point above 40, held within [70, 95]."""
    confidence = max(MIN_CONFIDENCE, min(MAX_CONFIDENCE, 100 - (scores.overall - 40)))
    return round_int(confidence)


def to_risk_assessment(scores: RiskScores) -> RiskAssessment:
    return RiskAssessment(
        market_risk=round_int(scores.market),
        financial_risk=round_int(scores.financial),
        operational_risk=round_int(scores.operational),
        liquidity_risk=round_int(scores.liquidity),
        overall_score=round_int(scores.overall),
    )


def risk_level(score: float) -> str:
    if score <= 30:
        return "Low"
    if score <= 60:
        return "Medium"
    return "High"
