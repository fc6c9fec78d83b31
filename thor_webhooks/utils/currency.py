from decimal import ROUND_HALF_UP, Decimal


def cents_to_amount(cents: int) -> str:
    """
    Format an integer amount of minor units with two decimals.

    Examples:
        cents_to_amount(1234) -> "12.34"
        cents_to_amount(100) -> "1.00"
        cents_to_amount(5) -> "0.05"
    """
    amount = (Decimal(cents) / Decimal(100)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{amount:.2f}"
