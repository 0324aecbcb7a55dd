"""Donor domain service."""

from typing import Optional
from verifund.database.base import Database
from verifund.domain.entities import Donor
from verifund.domain.errors import (
    ConflictError,
    NotFoundError,
    UnregisteredWalletError,
    donor_not_found,
    wallet_not_registered,
    wallet_taken,
)
from verifund.logging_setup import get_logger
from verifund.utils.identity import validate_email, validate_wallet_address

logger = get_logger(__name__)


class DonorService:
    """Service for registering donors and resolving wallets to donors."""

    def __init__(self, db: Database):
        """Initialize donor service.

        Args:
            db: Database instance
        """
        self.db = db

    def register(self, email: str, wallet_address: str) -> Donor:
        """Register a donor, or move an existing donor to a new wallet.

        Emails and wallets are matched case-insensitively. Re-registering an
        email with another wallet overwrites the wallet in place.

        Args:
            email: Donor email (local@domain)
            wallet_address: 0x-prefixed, 40 hex character address

        Returns:
            The stored donor

        Raises:
            ValidationError: If email or wallet is malformed
            ConflictError: If the wallet belongs to a different email
        """
        email = validate_email(email)
        wallet_address = validate_wallet_address(wallet_address)

        owner = self.db.get_donor_by_wallet(wallet_address)
        if owner is not None and owner.email.lower() != email.lower():
            raise ConflictError(wallet_taken(wallet_address, owner.email))

        existing = self.db.get_donor_by_email(email)
        donor = self.db.save_donor(email=email, wallet_address=wallet_address)
        if existing is None:
            logger.info("Registered donor %s with wallet %s", donor.email, donor.wallet_address)
        elif existing.wallet_address.lower() != wallet_address.lower():
            logger.info(
                "Donor %s moved from wallet %s to %s",
                donor.email,
                existing.wallet_address,
                donor.wallet_address,
            )
        return donor

    def get_by_email(self, email: str) -> Optional[Donor]:
        """Get donor by email, or None if not registered."""
        return self.db.get_donor_by_email(email.strip())

    def get_by_wallet(self, wallet_address: str) -> Optional[Donor]:
        """Get donor by wallet address, or None if not registered."""
        return self.db.get_donor_by_wallet(wallet_address.strip())

    def require_by_email(self, email: str) -> Donor:
        """Get donor by email.

        Raises:
            NotFoundError: If no donor has this email
        """
        donor = self.get_by_email(email)
        if donor is None:
            raise NotFoundError(donor_not_found(email))
        return donor

    def require_by_wallet(self, wallet_address: str) -> Donor:
        """Get donor by wallet address.

        Raises:
            UnregisteredWalletError: If no donor has this wallet
        """
        donor = self.get_by_wallet(wallet_address)
        if donor is None:
            raise UnregisteredWalletError(wallet_not_registered(wallet_address))
        return donor
