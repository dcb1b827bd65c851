from valuator.valuation.industries import IndustryMultiples

# Discount applied to public-market multiples for a non-traded company
ILLIQUIDITY_DISCOUNT = 0.30


def compute_comps_value(revenue: float, multiples: IndustryMultiples) -> float:
    """Enterprise value from the industry EV/Revenue multiple, net of the illiquidity discount."""
    return revenue * multiples.revenue_multiple * (1 - ILLIQUIDITY_DISCOUNT)
