import math


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round halves towards +infinity, matching spreadsheet/JS rounding of reported figures."""
    factor = 10 ** ndigits
    scaled = value * factor
    if not math.isfinite(scaled):
        # Magnitudes this large carry no fractional digits
        return value
    return math.floor(scaled + 0.5) / factor


def round_int(value: float) -> int:
    return int(round_half_up(value))


def round_ratio(value: float) -> float:
    return round_half_up(value, 1)


def format_millions(value: float) -> str:
    return f"${round_half_up(value / 1_000_000, 1):.1f}M"


def format_range(low: float, high: float) -> str:
    return f"{format_millions(low)} - {format_millions(high)}"


def format_multiple(multiple: float) -> str:
    """'4.2x', '10x' — trailing zeros dropped."""
    return f"{multiple:g}x"
