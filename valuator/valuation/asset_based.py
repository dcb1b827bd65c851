# Book value proxy: no balance sheet is collected, so assets are approximated from revenue
BOOK_VALUE_TO_REVENUE = 0.8


def compute_asset_based_value(revenue: float) -> float:
    return revenue * BOOK_VALUE_TO_REVENUE
