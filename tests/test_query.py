"""Tests for LedgerQueryService."""

from decimal import Decimal

import pytest

from verifund.domain.errors import NotFoundError, ValidationError

WALLET_A = "0x52908400098527886E0F7030069857D2E4169EE7"
WALLET_B = "0x8617E340B3D01FA5F11F306F4090FD50E238070D"


@pytest.fixture
def funded(recorder, registered_donors):
    recorder.record_donation(WALLET_A, "2", "0xd1", 1)
    recorder.record_donation(WALLET_B, "3", "0xd2", 2)


class TestPreviewAllocation:
    """Preview computes without writing."""

    def test_preview_matches_processing(self, query_service, processor, funded):
        preview = query_service.preview_allocation("4")
        result = processor.process_reimbursement("4", "0xr1", 3, "Invoice")

        assert preview == result.entries

    def test_preview_writes_nothing(self, query_service, funded, temp_db):
        query_service.preview_allocation("4")
        query_service.preview_allocation("4")

        assert [d.remaining for d in temp_db.list_donations()] == [Decimal("3"), Decimal("2")]
        assert temp_db.list_reimbursements() == []

    def test_preview_rejects_non_positive(self, query_service):
        with pytest.raises(ValidationError):
            query_service.preview_allocation("0")

    def test_preview_on_empty_ledger(self, query_service):
        assert query_service.preview_allocation("5") == []


class TestLedgerQueries:
    """Donation, reimbursement and balance queries."""

    def test_list_donations_newest_first(self, query_service, funded):
        assert [d.id for d in query_service.list_donations()] == ["0xd2-2", "0xd1-1"]

    def test_list_donations_by_email(self, query_service, funded):
        donations = query_service.list_donations(email=" BOB@example.org ")

        assert [d.id for d in donations] == ["0xd2-2"]

    def test_get_donation_missing(self, query_service):
        with pytest.raises(NotFoundError):
            query_service.get_donation("0xnope-1")

    def test_list_reimbursements(self, query_service, processor, funded):
        processor.process_reimbursement("1", "0xr1", 3, "First")
        processor.process_reimbursement("1", "0xr2", 4, "Second")

        assert [r.invoice_text for r in query_service.list_reimbursements()] == ["Second", "First"]

    def test_pool_balance(self, query_service, processor, funded):
        processor.process_reimbursement("2.5", "0xr1", 3, "Invoice")

        balance = query_service.pool_balance()

        assert balance.donation_count == 2
        assert balance.total_donated == Decimal("5")
        assert balance.total_remaining == Decimal("2.5")
        assert balance.total_spent == Decimal("2.5")
