"""SQLAlchemy models for the verifund ledger."""

from datetime import datetime, UTC
from decimal import Decimal
from sqlalchemy import (
    Column,
    Integer,
    String,
    Text,
    DateTime,
    TypeDecorator,
    create_engine,
)
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from verifund.utils.amount_parser import to_storage

Base = declarative_base()


class DecimalString(TypeDecorator):
    """Exact decimal stored as a canonical fixed-point string.

    SQLite has no exact numeric type, and ETH amounts need 18 fractional
    digits. The canonical form makes equal amounts compare equal in SQL.
    """

    impl = String
    cache_ok = True

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        return to_storage(Decimal(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return Decimal(value)


def _utcnow() -> datetime:
    return datetime.now(UTC)


class Donor(Base):
    """Donor model: email to wallet mapping."""

    __tablename__ = "donors"

    id = Column(Integer, primary_key=True)
    email = Column(String, nullable=False)
    email_key = Column(String, unique=True, nullable=False)
    wallet_address = Column(String, nullable=False)
    wallet_key = Column(String, unique=True, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)


class Donation(Base):
    """Donation model."""

    __tablename__ = "donations"

    id = Column(String, primary_key=True)
    email = Column(String, nullable=False, index=True)
    wallet_address = Column(String, nullable=False)
    amount = Column(DecimalString, nullable=False)
    tx_hash = Column(String, nullable=False)
    ordinal = Column(Integer, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    remaining = Column(DecimalString, nullable=False)


class Reimbursement(Base):
    """Reimbursement model."""

    __tablename__ = "reimbursements"

    id = Column(String, primary_key=True)
    amount = Column(DecimalString, nullable=False)
    tx_hash = Column(String, nullable=False)
    ordinal = Column(Integer, nullable=False)
    invoice_text = Column(Text, nullable=False)
    created_at = Column(DateTime, default=_utcnow, nullable=False)
    allocated_at = Column(DateTime, nullable=True)


def create_session_factory(database_url: str) -> sessionmaker[Session]:
    """Create a SQLAlchemy session factory."""
    engine = create_engine(database_url, echo=False)
    Base.metadata.create_all(engine)
    return sessionmaker(bind=engine)
