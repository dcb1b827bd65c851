from valuator.models.valuations import KeyMetrics
from valuator.valuation.errors import UndefinedRatioError, require_finite
from valuator.valuation.formatting import round_int, round_ratio

# Net income proxy: share of EBITDA left after interest, D&A and tax
EARNINGS_TO_EBITDA = 0.7


def compute_key_metrics(
    revenue: float,
    ebitda: float,
    growth_rate: float,
    comps_value: float,
    asset_based_value: float,
    enterprise_value: float,
) -> KeyMetrics:
    """Headline ratios priced off the comparables value.

    growth_rate is a fraction. PEG is left undefined (None) for zero growth.
    """
    if revenue == 0:
        raise UndefinedRatioError("revenue multiple", "revenue")
    if ebitda == 0:
        raise UndefinedRatioError("EBITDA multiple", "EBITDA")
    if asset_based_value == 0:
        raise UndefinedRatioError("price-to-book", "asset-based value")

    revenue_multiple = require_finite("revenue multiple", comps_value / revenue)
    ebitda_multiple = require_finite("EBITDA multiple", comps_value / ebitda)
    pe_ratio = require_finite("P/E ratio", comps_value / (ebitda * EARNINGS_TO_EBITDA))
    price_to_book = require_finite("price-to-book", comps_value / asset_based_value)
    growth_pct = growth_rate * 100
    peg_ratio = None
    if growth_pct != 0:
        peg_ratio = round_ratio(require_finite("PEG ratio", pe_ratio / growth_pct))

    return KeyMetrics(
        revenue_multiple=round_ratio(revenue_multiple),
        ebitda_multiple=round_ratio(ebitda_multiple),
        enterprise_value=round_int(enterprise_value),
        pe_ratio=round_ratio(pe_ratio),
        peg_ratio=peg_ratio,
        price_to_book=round_ratio(price_to_book),
    )
