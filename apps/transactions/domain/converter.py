"""
Currency conversion arithmetic.

Amounts are integer minor units (cents). The rate is applied with exact
decimal arithmetic and the product is rounded half away from zero.
"""

from decimal import Decimal, ROUND_HALF_UP, localcontext


def to_decimal(value) -> Decimal:
    """Turn a rate into a Decimal; floats go through their shortest repr."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(value)


def _significant_digits(value: Decimal) -> int:
    return len(value.as_tuple().digits)


def convert(amount_in_cents: int, exchange_rate) -> int:
    """
    Apply an exchange rate to an amount in cents and round to the nearest cent.

    Example:
        >>> convert(25, Decimal("0.745"))
        19
        >>> convert(-25, Decimal("0.745"))
        -19
    """
    amount = Decimal(amount_in_cents)
    rate = to_decimal(exchange_rate)
    if not rate.is_finite():
        raise ValueError(f"exchange rate must be a finite number, got {exchange_rate}")

    # enough precision for the product, and its integer part, to be exact
    precision = (
        _significant_digits(amount)
        + _significant_digits(rate)
        + max(rate.as_tuple().exponent, 0)
        + 2
    )
    with localcontext() as ctx:
        ctx.prec = max(precision, ctx.prec)
        product = amount * rate
        # ROUND_HALF_UP rounds ties away from zero for both signs
        return int(product.quantize(Decimal(1), rounding=ROUND_HALF_UP))
