"""Mapper functions to convert SQLAlchemy models into domain entities.

This layer isolates the conversion logic so the schema can change
(e.g., lookup key columns) without leaking into the domain.
"""

from verifund.domain import entities as domain
from verifund.database.models import (
    Donor as ORMDonor,
    Donation as ORMDonation,
    Reimbursement as ORMReimbursement,
)


def donor_to_domain(orm_donor: ORMDonor) -> domain.Donor:
    """Convert SQLAlchemy Donor model to domain Donor entity."""
    return domain.Donor(
        email=orm_donor.email,
        wallet_address=orm_donor.wallet_address,
        created_at=orm_donor.created_at,
    )


def donation_to_domain(orm_donation: ORMDonation) -> domain.Donation:
    """Convert SQLAlchemy Donation model to domain Donation entity."""
    return domain.Donation(
        id=orm_donation.id,
        email=orm_donation.email,
        wallet_address=orm_donation.wallet_address,
        amount=orm_donation.amount,
        tx_hash=orm_donation.tx_hash,
        ordinal=orm_donation.ordinal,
        created_at=orm_donation.created_at,
        remaining=orm_donation.remaining,
    )


def reimbursement_to_domain(orm_reimbursement: ORMReimbursement) -> domain.Reimbursement:
    """Convert SQLAlchemy Reimbursement model to domain Reimbursement entity."""
    return domain.Reimbursement(
        id=orm_reimbursement.id,
        amount=orm_reimbursement.amount,
        tx_hash=orm_reimbursement.tx_hash,
        ordinal=orm_reimbursement.ordinal,
        invoice_text=orm_reimbursement.invoice_text,
        created_at=orm_reimbursement.created_at,
        allocated_at=orm_reimbursement.allocated_at,
    )
