"""
Remittance fee arithmetic.

Amounts are Decimal in settlement currency; on-ledger amounts are
integers in the smallest settlement unit.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from zkredit.domain.exceptions import ValidationError

FEE_RATE = Decimal("0.007")
MIN_FEE = Decimal("0.5")


def to_decimal(amount) -> Decimal:
    """
    Coerce an amount to Decimal without going through binary floats.

    Raises:
        ValidationError: If the amount is not a finite number
    """
    if isinstance(amount, Decimal):
        value = amount
    elif isinstance(amount, bool):
        raise ValidationError("Amount must be numeric")
    else:
        try:
            value = Decimal(str(amount))
        except (InvalidOperation, ValueError):
            raise ValidationError(f"Amount must be numeric: {amount!r}")
    if not value.is_finite():
        raise ValidationError("Amount must be finite")
    return value


def compute_fee(gross_amount) -> Decimal:
    """
    Fee charged on a remittance: 0.7% with a 0.50 minimum.

    Example: 250.72 -> 1.75504; 10 -> 0.5
    """
    gross = to_decimal(gross_amount)
    return max(gross * FEE_RATE, MIN_FEE)


def compute_net(gross_amount) -> Decimal:
    """Amount delivered to the receiver after the fee."""
    gross = to_decimal(gross_amount)
    return gross - compute_fee(gross)


def to_smallest_unit(amount, exponent: int = 8) -> int:
    """
    Convert a decimal amount to integer smallest units, rounding half up.

    Args:
        amount: Amount in settlement currency
        exponent: Decimal places of the smallest unit (8 for tinybars)

    Raises:
        ValidationError: If the converted amount is not positive
    """
    scaled = to_decimal(amount).scaleb(exponent)
    units = int(scaled.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    if units <= 0:
        raise ValidationError(
            f"Amount {amount} converts to {units} smallest units; must be positive",
            code="NON_POSITIVE_AMOUNT",
        )
    return units


def from_smallest_unit(units: int, exponent: int = 8) -> Decimal:
    """Display form of an on-ledger amount."""
    return Decimal(units).scaleb(-exponent)
