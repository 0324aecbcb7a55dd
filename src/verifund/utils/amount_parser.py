"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from verifund.domain.errors import ValidationError
from verifund.domain.precision import AMOUNT_CONTEXT, MAX_AMOUNT, MAX_DECIMAL_PLACES, QUANTUM


def parse_amount(amount_str: str | Decimal | int) -> Decimal:
    """Parse an amount into a Decimal.

    Handles various formats:
    - "1.5"
    - "1.5 ETH"
    - "1,234.56"
    - Decimal or int values, passed through

    Floats are rejected; they cannot carry an exact amount.

    Args:
        amount_str: Amount string or number

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount cannot be parsed, has more than 18
            decimal places, or is not below MAX_AMOUNT
    """
    if isinstance(amount_str, bool) or isinstance(amount_str, float):
        raise ValidationError(f"Amount must be a decimal string, got {amount_str!r}")

    if isinstance(amount_str, (Decimal, int)):
        amount = Decimal(amount_str)
    else:
        if not amount_str or not amount_str.strip():
            raise ValidationError("Empty amount string")

        cleaned = re.sub(r"(?i)\s*eth\s*$", "", amount_str.strip())
        cleaned = cleaned.replace(",", "").strip()

        try:
            amount = Decimal(cleaned)
        except InvalidOperation:
            raise ValidationError(f"Could not parse amount '{amount_str}'")

    if not amount.is_finite():
        raise ValidationError(f"Amount must be finite, got '{amount_str}'")

    if abs(amount) >= MAX_AMOUNT:
        raise ValidationError(f"Amount '{amount_str}' is too large")

    if amount != amount.quantize(QUANTUM, context=AMOUNT_CONTEXT):
        raise ValidationError(
            f"Amount '{amount_str}' has more than {MAX_DECIMAL_PLACES} decimal places"
        )

    return amount


def parse_positive_amount(amount_str: str | Decimal | int) -> Decimal:
    """Parse an amount that must be strictly greater than zero.

    Raises:
        ValidationError: If amount cannot be parsed or is not positive
    """
    amount = parse_amount(amount_str)
    if amount <= 0:
        raise ValidationError(f"Amount must be positive, got '{amount_str}'")
    return amount


def to_storage(amount: Decimal) -> str:
    """Render an amount as the canonical fixed-point string used in storage.

    Equal amounts always produce identical strings, which lets storage
    compare balances exactly.
    """
    return format(amount.quantize(QUANTUM, context=AMOUNT_CONTEXT), "f")


def format_amount(amount: Decimal) -> str:
    """Format an amount for display without trailing zeros."""
    if amount == 0:
        return "0"
    return format(amount.normalize(), "f")
