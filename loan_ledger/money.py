"""Numeric and rounding policy shared by the calculator and the ledger."""

from decimal import ROUND_CEILING, ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

from loan_ledger.exceptions import InvalidInputError

CENT = Decimal("0.01")
ZERO = Decimal("0")
# Largest amount a NUMERIC(18, 2) column holds
MAX_MONEY = Decimal("9999999999999999.99")


def to_decimal(value: Any, field: str = "value") -> Decimal:
    """Convert a request value to ``Decimal``.

    Floats go through ``str()`` so ``0.1`` becomes ``Decimal("0.1")``
    rather than its binary expansion.

    Raises
    ------
    InvalidInputError
        If the value is a bool, not numeric, NaN or infinite.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidInputError(f"{field} must be a number", field=field)
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except InvalidOperation:
            raise InvalidInputError(f"{field} must be a number", field=field) from None
    if not result.is_finite():
        raise InvalidInputError(f"{field} must be a finite number", field=field)
    return result


def round2(value: Decimal) -> Decimal:
    """Round to two decimal places, half away from zero."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def to_money(value: Any, field: str = "amount") -> Decimal:
    """Convert a currency amount, rejecting sub-cent precision and out-of-range values."""
    amount = to_decimal(value, field)
    if abs(amount) > MAX_MONEY:
        raise InvalidInputError(f"{field} exceeds the supported range", field=field)
    if amount != amount.quantize(CENT):
        raise InvalidInputError(f"{field} must have at most 2 decimal places", field=field)
    return amount.quantize(CENT)


def ceil_div(numerator: Decimal, denominator: Decimal) -> int:
    """Ceiling of ``numerator / denominator``."""
    return int((numerator / denominator).to_integral_value(rounding=ROUND_CEILING))
