"""Donation recording service."""

from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional
from verifund.database.base import Database
from verifund.domain.donor import DonorService
from verifund.domain.entities import Donation
from verifund.domain.errors import ConflictError, record_mismatch
from verifund.logging_setup import get_logger
from verifund.utils.amount_parser import parse_positive_amount
from verifund.utils.identity import make_record_id, validate_wallet_address

logger = get_logger(__name__)


def _same_donation(donation: Donation, wallet_address: str, amount: Decimal) -> bool:
    return (
        donation.amount == amount
        and donation.wallet_address.lower() == wallet_address.lower()
    )


class DonationRecorder:
    """Appends inbound donations to the ledger."""

    def __init__(self, db: Database, clock: Optional[Callable[[], datetime]] = None):
        """Initialize donation recorder.

        Args:
            db: Database instance
            clock: Optional callable returning the ingestion timestamp;
                defaults to the database's current UTC time
        """
        self.db = db
        self.clock = clock
        self.donors = DonorService(db)

    def record_donation(
        self,
        wallet_address: str,
        amount: str | Decimal,
        tx_hash: str,
        ordinal: int,
    ) -> Donation:
        """Record a donation from a registered wallet.

        Recording the same (tx_hash, ordinal) again returns the stored
        donation unchanged, so re-ingesting an on-chain event never adds
        balance twice.

        Args:
            wallet_address: Donor wallet the funds came from
            amount: Donated amount, must be positive
            tx_hash: Source transaction hash
            ordinal: Block number of the source event

        Returns:
            The new or previously stored donation

        Raises:
            ValidationError: If amount, wallet, tx_hash or ordinal is invalid
            UnregisteredWalletError: If no donor owns the wallet
            ConflictError: If the id exists with a different wallet or amount
        """
        parsed = parse_positive_amount(amount)
        wallet_address = validate_wallet_address(wallet_address)
        donation_id = make_record_id(tx_hash, ordinal)

        donor = self.donors.require_by_wallet(wallet_address)

        existing = self.db.get_donation(donation_id)
        if existing is not None:
            return self._existing(existing, wallet_address, parsed)

        try:
            donation = self.db.create_donation(
                donation_id=donation_id,
                email=donor.email,
                wallet_address=wallet_address,
                amount=parsed,
                tx_hash=tx_hash.strip(),
                ordinal=ordinal,
                created_at=self.clock() if self.clock else None,
            )
        except ConflictError:
            # Another writer stored the same event first.
            existing = self.db.get_donation(donation_id)
            if existing is None:
                raise
            return self._existing(existing, wallet_address, parsed)

        logger.info(
            "Recorded donation %s of %s from %s", donation.id, donation.amount, donation.email
        )
        return donation

    def _existing(self, donation: Donation, wallet_address: str, amount: Decimal) -> Donation:
        if not _same_donation(donation, wallet_address, amount):
            raise ConflictError(record_mismatch("Donation", donation.id))
        logger.info("Donation %s already recorded; ignoring duplicate", donation.id)
        return donation
