"""Shared pytest fixtures for verifund tests."""

import tempfile
import os
from datetime import datetime, timedelta, UTC
import pytest

from verifund.database.factories import create_sqlite_database
from verifund.domain.donation import DonationRecorder
from verifund.domain.donor import DonorService
from verifund.domain.query import LedgerQueryService
from verifund.domain.reimbursement import ReimbursementProcessor

WALLET_A = "0x52908400098527886E0F7030069857D2E4169EE7"
WALLET_B = "0x8617E340B3D01FA5F11F306F4090FD50E238070D"
WALLET_C = "0xde709f2102306220921060314715629080e2fb77"


class StepClock:
    """Deterministic clock advancing one second per call."""

    def __init__(self, start: datetime = datetime(2024, 1, 1, tzinfo=UTC)):
        self.current = start

    def __call__(self) -> datetime:
        now = self.current
        self.current = now + timedelta(seconds=1)
        return now


class RecordingSink:
    """Notification sink that keeps every intent it is sent."""

    def __init__(self):
        self.sent = []

    def send(self, intent):
        self.sent.append(intent)


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def clock():
    return StepClock()


@pytest.fixture
def sink():
    return RecordingSink()


@pytest.fixture
def donor_service(temp_db):
    """Create a DonorService with a temporary database."""
    return DonorService(temp_db)


@pytest.fixture
def recorder(temp_db, clock):
    """Create a DonationRecorder with a temporary database and stepping clock."""
    return DonationRecorder(temp_db, clock=clock)


@pytest.fixture
def processor(temp_db, clock, sink):
    """Create a ReimbursementProcessor that records notifications."""
    return ReimbursementProcessor(temp_db, notifier=sink, clock=clock)


@pytest.fixture
def query_service(temp_db):
    """Create a LedgerQueryService with a temporary database."""
    return LedgerQueryService(temp_db)


@pytest.fixture
def registered_donors(donor_service):
    """Register two donors, A and B."""
    return {
        "a": donor_service.register("alice@example.org", WALLET_A),
        "b": donor_service.register("bob@example.org", WALLET_B),
    }


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
