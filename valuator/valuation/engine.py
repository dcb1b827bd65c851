"""Valuation engine: three simplified methods, a fixed blend, risk scoring and headline ratios.

Both entry points are pure functions of their inputs and the industry multiples table.
"""
import logging

from valuator.models.request import CompanyProfile
from valuator.models.valuations import ValuationResults, QuickEstimateResult
from valuator.valuation.asset_based import BOOK_VALUE_TO_REVENUE, compute_asset_based_value
from valuator.valuation.blender import DEFAULT_WEIGHTS, RANGE_PCT, compute_blended_valuation
from valuator.valuation.comps import ILLIQUIDITY_DISCOUNT, compute_comps_value
from valuator.valuation.dcf import PRESENT_VALUE_FACTOR, TERMINAL_GROWTH_RATE, WACC, compute_dcf_value
from valuator.valuation.errors import InsufficientDataError, UndefinedRatioError, require_finite
from valuator.valuation.formatting import format_multiple, format_range, round_int
from valuator.valuation.industries import get_industry_multiples
from valuator.valuation.metrics import EARNINGS_TO_EBITDA, compute_key_metrics
from valuator.valuation.risk import compute_confidence, compute_risk_scores, to_risk_assessment

logger = logging.getLogger(__name__)

QUICK_LOW_FACTOR = 0.9
QUICK_HIGH_FACTOR = 1.1


def compute_valuation(profile: CompanyProfile) -> ValuationResults:
    """Value a company from its profile.

    Raises UndefinedRatioError when revenue or EBITDA is zero, or when an
    input is so large that a method value overflows. ``ai_analysis``
    is left empty for the narrative step to fill in.
    """
    if profile.revenue == 0:
        raise UndefinedRatioError("valuation ratios", "revenue")
    if profile.ebitda == 0:
        raise UndefinedRatioError("valuation ratios", "EBITDA")

    growth_rate = profile.growth_rate / 100
    multiples = get_industry_multiples(profile.industry)

    dcf_value = require_finite("DCF value", compute_dcf_value(profile.ebitda, growth_rate))
    comps_value = require_finite("comparables value", compute_comps_value(profile.revenue, multiples))
    asset_based_value = require_finite("asset-based value", compute_asset_based_value(profile.revenue))
    logger.info(
        f"Method values: DCF=${dcf_value:,.0f}, comps=${comps_value:,.0f}, "
        f"asset-based=${asset_based_value:,.0f}"
    )

    blended = compute_blended_valuation(dcf_value, comps_value, asset_based_value)
    require_finite("weighted value", blended.fair_value)
    low, high = (require_finite("valuation range", bound) for bound in blended.fair_value_range)

    scores = compute_risk_scores(profile.revenue, profile.ebitda, growth_rate, profile.employees)

    key_metrics = compute_key_metrics(
        revenue=profile.revenue,
        ebitda=profile.ebitda,
        growth_rate=growth_rate,
        comps_value=comps_value,
        asset_based_value=asset_based_value,
        enterprise_value=blended.fair_value,
    )

    return ValuationResults(
        valuation_range=format_range(low, high),
        valuation_low=round_int(low),
        valuation_high=round_int(high),
        confidence=compute_confidence(scores),
        dcf=round_int(dcf_value),
        comps=round_int(comps_value),
        asset_based=round_int(asset_based_value),
        ai_analysis="",
        risk_assessment=to_risk_assessment(scores),
        key_metrics=key_metrics,
        methodology_weights=blended.methodology_weights,
    )


def quick_estimate(
    revenue: float | None,
    ebitda: float | None,
    industry: str | None = None,
) -> QuickEstimateResult:
    """Bracket a value between the revenue-multiple and EBITDA-multiple estimates, widened 10% each way."""
    missing = []
    if not revenue:
        missing.append("revenue")
    if not ebitda:
        missing.append("ebitda")
    if missing:
        raise InsufficientDataError("Revenue and EBITDA are required", missing)

    multiples = get_industry_multiples(industry)
    revenue_estimate = require_finite("revenue estimate", revenue * multiples.revenue_multiple)
    ebitda_estimate = require_finite("EBITDA estimate", ebitda * multiples.ebitda_multiple)

    low = min(revenue_estimate, ebitda_estimate) * QUICK_LOW_FACTOR
    high = require_finite("quick estimate", max(revenue_estimate, ebitda_estimate) * QUICK_HIGH_FACTOR)

    return QuickEstimateResult(
        revenue_multiple=format_multiple(multiples.revenue_multiple),
        ebitda_multiple=format_multiple(multiples.ebitda_multiple),
        quick_estimate=format_range(low, high),
    )


def valuation_assumptions() -> dict:
    """Fixed inputs behind every valuation, echoed into reports."""
    return {
        "wacc": WACC,
        "terminal_growth_rate": TERMINAL_GROWTH_RATE,
        "dcf_present_value_factor": PRESENT_VALUE_FACTOR,
        "illiquidity_discount": ILLIQUIDITY_DISCOUNT,
        "book_value_to_revenue": BOOK_VALUE_TO_REVENUE,
        "earnings_to_ebitda": EARNINGS_TO_EBITDA,
        "method_weights": dict(DEFAULT_WEIGHTS),
        "range_pct": RANGE_PCT,
    }
