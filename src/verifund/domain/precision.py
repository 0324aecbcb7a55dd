"""Decimal precision shared by every amount calculation.

Amounts carry at most 18 fractional digits (wei) and at most
``MAX_SIGNIFICANT_DIGITS`` digits overall. ``AMOUNT_CONTEXT`` keeps twenty
more digits than that, so sums and differences of accepted amounts are
always exact.
"""

from decimal import Context, Decimal

# Smallest unit of ETH (wei) is 1e-18.
MAX_DECIMAL_PLACES = 18
MAX_SIGNIFICANT_DIGITS = 40
QUANTUM = Decimal(1).scaleb(-MAX_DECIMAL_PLACES)
MAX_AMOUNT = Decimal(10) ** (MAX_SIGNIFICANT_DIGITS - MAX_DECIMAL_PLACES)

AMOUNT_CONTEXT = Context(prec=MAX_SIGNIFICANT_DIGITS + 20)
