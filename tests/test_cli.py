"""Tests for CLI commands."""

from decimal import Decimal

import pytest
from verifund.cli.main import cli

WALLET_A = "0x52908400098527886E0F7030069857D2E4169EE7"
WALLET_C = "0xde709f2102306220921060314715629080e2fb77"


@pytest.fixture
def invoke(cli_runner, temp_db):
    """Invoke the CLI against the temporary database."""

    def _invoke(*args):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])

    return _invoke


def test_help_does_not_touch_database(cli_runner):
    result = cli_runner.invoke(cli, ["--help"])

    assert result.exit_code == 0
    assert "donation" in result.output
    assert "reimbursement" in result.output


class TestDonorCommands:
    """Tests for donor commands."""

    def test_register(self, invoke):
        result = invoke("donor", "register", "alice@example.org", WALLET_A)

        assert result.exit_code == 0
        assert "Registered donor 'alice@example.org'" in result.output

    def test_register_invalid_wallet(self, invoke):
        result = invoke("donor", "register", "alice@example.org", "0x123")

        assert result.exit_code == 1
        assert "Error [invalid_input]" in result.output

    def test_show_by_wallet(self, invoke):
        invoke("donor", "register", "alice@example.org", WALLET_A)

        result = invoke("donor", "show", "--wallet", WALLET_A.lower())

        assert result.exit_code == 0
        assert "alice@example.org" in result.output

    def test_show_missing(self, invoke):
        result = invoke("donor", "show", "--email", "nobody@example.org")

        assert result.exit_code == 1
        assert "Error [not_found]" in result.output

    def test_show_requires_option(self, invoke):
        result = invoke("donor", "show")

        assert result.exit_code == 1
        assert "Error [invalid_input]: Provide --email or --wallet" in result.output


class TestDonationCommands:
    """Tests for donation commands."""

    def test_record_and_list(self, invoke):
        invoke("donor", "register", "alice@example.org", WALLET_A)

        result = invoke("donation", "record", WALLET_A, "1.5", "0xabc", "100")
        assert result.exit_code == 0
        assert "Recorded donation 0xabc-100: 1.5 ETH from alice@example.org" in result.output

        result = invoke("donation", "list")
        assert result.exit_code == 0
        assert "0xabc-100" in result.output
        assert "Found 1 donation(s)" in result.output

    def test_record_unregistered_wallet(self, invoke):
        result = invoke("donation", "record", WALLET_C, "1", "0xabc", "1")

        assert result.exit_code == 1
        assert "Error [unregistered_wallet]" in result.output

    def test_record_negative_amount(self, invoke):
        invoke("donor", "register", "alice@example.org", WALLET_A)

        result = invoke("donation", "record", WALLET_A, "--", "-1", "0xabc", "1")

        assert result.exit_code != 0

    def test_list_empty(self, invoke):
        result = invoke("donation", "list")

        assert result.exit_code == 0
        assert "No donations found" in result.output

    def test_show(self, invoke, temp_db):
        invoke("donor", "register", "alice@example.org", WALLET_A)
        invoke("donation", "record", WALLET_A, "2", "0xabc", "1")

        result = invoke("donation", "show", "0xabc-1")

        assert result.exit_code == 0
        assert "Remaining: 2 ETH" in result.output


class TestReimbursementCommands:
    """Tests for reimbursement commands."""

    @pytest.fixture
    def funded(self, invoke):
        invoke("donor", "register", "alice@example.org", WALLET_A)
        invoke("donation", "record", WALLET_A, "2", "0xabc", "1")

    def test_preview_does_not_spend(self, invoke, funded, temp_db):
        result = invoke("reimbursement", "preview", "0.5")

        assert result.exit_code == 0
        assert "1 donation(s) would be drawn" in result.output
        assert "25.0%" in result.output
        assert temp_db.get_donation("0xabc-1").remaining == Decimal("2")

    def test_process(self, invoke, funded, temp_db):
        result = invoke("reimbursement", "process", "0.5", "0xdef", "2", "Printer paper")

        assert result.exit_code == 0
        assert "Processed reimbursement 0xdef-2" in result.output
        assert "1 donor(s) affected, 1 notification(s) sent, 0 failed" in result.output
        assert temp_db.get_donation("0xabc-1").remaining == Decimal("1.5")

    def test_process_twice(self, invoke, funded):
        invoke("reimbursement", "process", "0.5", "0xdef", "2", "Printer paper")

        result = invoke("reimbursement", "process", "0.5", "0xdef", "2", "Printer paper")

        assert result.exit_code == 0
        assert "already processed" in result.output

    def test_process_shortfall_warns(self, invoke, funded):
        result = invoke("reimbursement", "process", "3", "0xdef", "2", "Laptop")

        assert result.exit_code == 0
        assert "Warning: 1 ETH could not be attributed" in result.output

    def test_process_shortfall_strict(self, cli_runner, temp_db, funded):
        result = cli_runner.invoke(
            cli,
            [
                "--db-path",
                temp_db.database_path,
                "--strict-allocation",
                "reimbursement",
                "process",
                "3",
                "0xdef",
                "2",
                "Laptop",
            ],
        )

        assert result.exit_code == 1
        assert "Error [allocation_shortfall]" in result.output

    def test_list(self, invoke, funded):
        invoke("reimbursement", "process", "0.5", "0xdef", "2", "Printer paper")

        result = invoke("reimbursement", "list")

        assert result.exit_code == 0
        assert "0xdef-2" in result.output
        assert "allocated" in result.output


def test_balance(invoke):
    invoke("donor", "register", "alice@example.org", WALLET_A)
    invoke("donation", "record", WALLET_A, "2", "0xabc", "1")
    invoke("reimbursement", "process", "0.75", "0xdef", "2", "Stamps")

    result = invoke("balance")

    assert result.exit_code == 0
    assert "Donated:   2 ETH" in result.output
    assert "Spent:     0.75 ETH" in result.output
    assert "Unspent:   1.25 ETH" in result.output
