from valuator.models.valuations import MethodologyWeight, BlendedValuation

DEFAULT_WEIGHTS: dict[str, float] = {
    "dcf": 0.4,
    "comps": 0.4,
    "asset_based": 0.2,
}

RANGE_PCT = 0.15

_RATIONALES = {
    "dcf": "intrinsic value anchor from capitalised next-year EBITDA",
    "comps": "industry revenue multiple, net of 30% illiquidity discount",
    "asset_based": "revenue-derived book value floor",
}


def compute_blended_valuation(
    dcf_value: float,
    comps_value: float,
    asset_based_value: float,
) -> BlendedValuation:
    """Blend the three methodology values into a point estimate and a +/-15% band."""
    results = {
        "dcf": dcf_value,
        "comps": comps_value,
        "asset_based": asset_based_value,
    }

    fair_value = sum(results[method] * weight for method, weight in DEFAULT_WEIGHTS.items())
    # Sorted so low <= high also holds for a negative blend
    fair_value_range = sorted([fair_value * (1 - RANGE_PCT), fair_value * (1 + RANGE_PCT)])

    methodology_weights = [
        MethodologyWeight(
            method=method,
            weight=weight,
            rationale=f"Weight {weight:.2f}: {_RATIONALES[method]}",
        )
        for method, weight in DEFAULT_WEIGHTS.items()
    ]

    return BlendedValuation(
        fair_value=fair_value,
        fair_value_range=fair_value_range,
        methodology_weights=methodology_weights,
    )
