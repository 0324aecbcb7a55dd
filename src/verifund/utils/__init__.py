"""Utility functions for verifund."""

from verifund.utils.amount_parser import parse_amount, parse_positive_amount, format_amount
from verifund.utils.identity import validate_email, validate_wallet_address, make_record_id

__all__ = [
    "parse_amount",
    "parse_positive_amount",
    "format_amount",
    "validate_email",
    "validate_wallet_address",
    "make_record_id",
]
