"""Tests for DonationRecorder."""

from decimal import Decimal

import pytest

from verifund.domain.errors import ConflictError, UnregisteredWalletError, ValidationError

WALLET_A = "0x52908400098527886E0F7030069857D2E4169EE7"
WALLET_C = "0xde709f2102306220921060314715629080e2fb77"


class TestRecordDonation:
    """Tests for recording donations."""

    def test_record_sets_remaining_to_amount(self, recorder, registered_donors):
        donation = recorder.record_donation(WALLET_A, "1.5", "0xabc", 100)

        assert donation.id == "0xabc-100"
        assert donation.email == "alice@example.org"
        assert donation.wallet_address == WALLET_A
        assert donation.amount == Decimal("1.5")
        assert donation.remaining == Decimal("1.5")
        assert donation.tx_hash == "0xabc"
        assert donation.ordinal == 100

    def test_wallet_match_is_case_insensitive(self, recorder, registered_donors):
        donation = recorder.record_donation(WALLET_A.lower(), "1", "0xabc", 1)

        assert donation.email == "alice@example.org"

    def test_unregistered_wallet_rejected(self, recorder, temp_db):
        with pytest.raises(UnregisteredWalletError):
            recorder.record_donation(WALLET_C, "1", "0xabc", 1)

        assert temp_db.list_donations() == []

    @pytest.mark.parametrize("amount", ["0", "-1", "abc", "", "1e-19"])
    def test_invalid_amount_rejected(self, recorder, registered_donors, temp_db, amount):
        with pytest.raises(ValidationError):
            recorder.record_donation(WALLET_A, amount, "0xabc", 1)

        assert temp_db.list_donations() == []

    def test_malformed_wallet_rejected(self, recorder):
        with pytest.raises(ValidationError):
            recorder.record_donation("not-a-wallet", "1", "0xabc", 1)

    def test_missing_tx_hash_rejected(self, recorder, registered_donors):
        with pytest.raises(ValidationError):
            recorder.record_donation(WALLET_A, "1", "", 1)

    def test_negative_ordinal_rejected(self, recorder, registered_donors):
        with pytest.raises(ValidationError):
            recorder.record_donation(WALLET_A, "1", "0xabc", -1)


class TestIdempotentIngestion:
    """Recording the same on-chain event twice."""

    def test_duplicate_returns_existing(self, recorder, registered_donors, temp_db):
        first = recorder.record_donation(WALLET_A, "2", "0xabc", 7)
        second = recorder.record_donation(WALLET_A, "2", "0xabc", 7)

        assert second == first
        assert len(temp_db.list_donations()) == 1

    def test_duplicate_does_not_reset_remaining(self, recorder, processor, registered_donors, temp_db):
        recorder.record_donation(WALLET_A, "2", "0xabc", 7)
        processor.process_reimbursement("0.5", "0xspend", 8, "Rent")

        again = recorder.record_donation(WALLET_A, "2.0", "0xabc", 7)

        assert again.remaining == Decimal("1.5")
        assert temp_db.get_donation("0xabc-7").remaining == Decimal("1.5")

    def test_same_id_different_amount_conflicts(self, recorder, registered_donors):
        recorder.record_donation(WALLET_A, "2", "0xabc", 7)

        with pytest.raises(ConflictError):
            recorder.record_donation(WALLET_A, "3", "0xabc", 7)

    def test_same_tx_different_ordinal_is_new_donation(self, recorder, registered_donors, temp_db):
        recorder.record_donation(WALLET_A, "1", "0xabc", 7)
        recorder.record_donation(WALLET_A, "1", "0xabc", 8)

        assert len(temp_db.list_donations()) == 2
