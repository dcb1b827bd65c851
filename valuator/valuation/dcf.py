from valuator.valuation.errors import UndefinedRatioError

WACC = 0.10
TERMINAL_GROWTH_RATE = 0.03
# Flat haircut standing in for discounting the terminal value back to today
PRESENT_VALUE_FACTOR = 0.8


def compute_terminal_value(projected_cash_flow: float, wacc: float, tgr: float) -> float:
    """Gordon growth terminal value of a single projected cash flow."""
    if wacc <= tgr:
        raise UndefinedRatioError(
            "terminal value",
            f"WACC ({wacc}) minus terminal growth rate ({tgr})",
        )
    return projected_cash_flow * (1 + tgr) / (wacc - tgr)


def compute_dcf_value(
    ebitda: float,
    growth_rate: float,
    wacc: float = WACC,
    tgr: float = TERMINAL_GROWTH_RATE,
) -> float:
    """Single-period DCF: next year's EBITDA capitalised at (wacc - tgr).

    growth_rate is a fraction (0.15 for 15%).
    """
    projected_cash_flow = ebitda * (1 + growth_rate)
    terminal_value = compute_terminal_value(projected_cash_flow, wacc, tgr)
    return terminal_value * PRESENT_VALUE_FACTOR
