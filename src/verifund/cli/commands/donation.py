"""Donation commands."""

import click
from verifund.cli.error_handling import handle_domain_error
from verifund.domain.donation import DonationRecorder
from verifund.domain.errors import DomainError
from verifund.domain.query import LedgerQueryService
from verifund.utils.amount_parser import format_amount


@click.group()
def donation_group():
    """Record and list donations."""
    pass


@donation_group.command("record")
@click.argument("wallet", metavar="WALLET_ADDRESS")
@click.argument("amount", metavar="AMOUNT")
@click.argument("tx_hash", metavar="TX_HASH")
@click.argument("block", metavar="BLOCK", type=int)
@click.pass_context
def record_donation(ctx, wallet: str, amount: str, tx_hash: str, block: int):
    """Record a donation from a registered wallet.

    Recording the same TX_HASH and BLOCK twice keeps a single donation.

    Examples:
        verifund donation record 0x5290...9EE7 1.5 0xabc123 18000000
    """
    recorder = DonationRecorder(ctx.obj["db"])

    try:
        donation = recorder.record_donation(
            wallet_address=wallet, amount=amount, tx_hash=tx_hash, ordinal=block
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(
        f"Recorded donation {donation.id}: {format_amount(donation.amount)} ETH from {donation.email}"
    )


@donation_group.command("list")
@click.option("--email", help="Only show donations from this donor")
@click.pass_context
def list_donations(ctx, email: str | None):
    """List donations, newest first."""
    service = LedgerQueryService(ctx.obj["db"])

    try:
        donations = service.list_donations(email=email)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not donations:
        click.echo("No donations found.")
        return

    click.echo(f"\nFound {len(donations)} donation(s):")
    click.echo("-" * 110)
    click.echo(f"{'ID':<30} {'Donor':<30} {'Amount':>14} {'Remaining':>14}  {'Recorded':<20}")
    click.echo("-" * 110)
    for d in donations:
        click.echo(
            f"{d.id[:30]:<30} {d.email[:30]:<30} {format_amount(d.amount):>14} "
            f"{format_amount(d.remaining):>14}  {d.created_at:%Y-%m-%d %H:%M:%S}"
        )


@donation_group.command("show")
@click.argument("donation_id", metavar="DONATION_ID")
@click.pass_context
def show_donation(ctx, donation_id: str):
    """Show one donation and how much of it has been spent."""
    service = LedgerQueryService(ctx.obj["db"])

    try:
        d = service.get_donation(donation_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Donation:  {d.id}")
    click.echo(f"  Donor:     {d.email} ({d.wallet_address})")
    click.echo(f"  Amount:    {format_amount(d.amount)} ETH")
    click.echo(f"  Remaining: {format_amount(d.remaining)} ETH")
    click.echo(f"  Tx:        {d.tx_hash} (block {d.ordinal})")
    click.echo(f"  Recorded:  {d.created_at}")


def register_commands(cli):
    """Register donation commands with main CLI."""
    cli.add_command(donation_group, name="donation")
