"""Donor identity validation and record id helpers."""

import re

from verifund.domain.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
WALLET_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


def validate_email(email: str) -> str:
    """Validate an email address of the form local@domain.tld.

    Returns:
        The email with surrounding whitespace removed

    Raises:
        ValidationError: If the email is malformed
    """
    email = (email or "").strip()
    if not EMAIL_PATTERN.match(email):
        raise ValidationError(f"Invalid email format: '{email}'")
    return email


def validate_wallet_address(wallet_address: str) -> str:
    """Validate a 0x-prefixed, 40 hex character wallet address.

    Returns:
        The address with surrounding whitespace removed

    Raises:
        ValidationError: If the address is malformed
    """
    wallet_address = (wallet_address or "").strip()
    if not WALLET_PATTERN.match(wallet_address):
        raise ValidationError(f"Invalid wallet address format: '{wallet_address}'")
    return wallet_address


def make_record_id(tx_hash: str, ordinal: int) -> str:
    """Build the id of a donation or reimbursement from its source event.

    The same (tx_hash, ordinal) always yields the same id, so ingesting an
    on-chain event twice addresses the same record.

    Raises:
        ValidationError: If tx_hash is empty or ordinal is negative
    """
    tx_hash = (tx_hash or "").strip()
    if not tx_hash:
        raise ValidationError("Transaction hash is required")
    if isinstance(ordinal, bool) or not isinstance(ordinal, int):
        raise ValidationError(f"Block ordinal must be an integer, got {ordinal!r}")
    if ordinal < 0:
        raise ValidationError(f"Block ordinal must not be negative, got {ordinal}")
    return f"{tx_hash}-{ordinal}"
