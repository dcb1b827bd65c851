import math


class ValuationError(Exception):
    """Base class for errors raised by the valuation engine."""


class UndefinedRatioError(ValuationError):
    """Raised when a valuation formula would divide by zero."""
    def __init__(self, ratio: str, denominator: str):
        self.ratio = ratio
        self.denominator = denominator
        super().__init__(f"Cannot compute {ratio}: {denominator} must be non-zero")


class InsufficientDataError(ValuationError):
    """Raised when required inputs are missing or zero."""
    def __init__(self, message: str, missing_fields: list[str]):
        self.missing_fields = missing_fields
        super().__init__(message)


def require_finite(label: str, value: float) -> float:
    """Reject results that overflowed to inf/NaN for very large (but finite) inputs."""
    if not math.isfinite(value):
        raise UndefinedRatioError(label, "input magnitude")
    return value
