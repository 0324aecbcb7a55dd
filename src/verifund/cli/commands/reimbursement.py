"""Reimbursement commands: process, preview, list."""

import click
from verifund.cli.error_handling import handle_domain_error
from verifund.domain.entities import AllocationEntry
from verifund.domain.errors import DomainError
from verifund.domain.query import LedgerQueryService
from verifund.domain.reimbursement import ReimbursementProcessor
from verifund.utils.amount_parser import format_amount


def _echo_entries(entries: list[AllocationEntry]) -> None:
    click.echo("-" * 100)
    click.echo(f"{'Donor':<30} {'Donation':<30} {'Spent':>14} {'Of':>14} {'%':>7}")
    click.echo("-" * 100)
    for entry in entries:
        click.echo(
            f"{entry.email[:30]:<30} {entry.donation_id[:30]:<30} "
            f"{format_amount(entry.amount_spent):>14} {format_amount(entry.original_amount):>14} "
            f"{entry.percentage_spent:>6.1f}%"
        )


@click.group()
def reimbursement_group():
    """Process and inspect reimbursements."""
    pass


@reimbursement_group.command("process")
@click.argument("amount", metavar="AMOUNT")
@click.argument("tx_hash", metavar="TX_HASH")
@click.argument("block", metavar="BLOCK", type=int)
@click.argument("invoice", metavar="INVOICE")
@click.pass_context
def process_reimbursement(ctx, amount: str, tx_hash: str, block: int, invoice: str):
    """Record a reimbursement and attribute it to donors, oldest first.

    Each affected donor receives one notification per donation drawn.
    Processing the same TX_HASH and BLOCK again changes nothing.

    Examples:
        verifund reimbursement process 0.4 0xdef456 18000100 "Office supplies"
    """
    processor = ReimbursementProcessor(
        ctx.obj["db"], notifier=ctx.obj["notifier"], strict=ctx.obj["strict"]
    )

    try:
        result = processor.process_reimbursement(
            amount=amount, tx_hash=tx_hash, ordinal=block, invoice_text=invoice
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    reimbursement = result.reimbursement
    if result.already_applied:
        click.echo(f"Reimbursement {reimbursement.id} was already processed; nothing changed.")
        return

    click.echo(
        f"Processed reimbursement {reimbursement.id}: {format_amount(reimbursement.amount)} ETH "
        f"for '{reimbursement.invoice_text}'"
    )
    if result.entries:
        _echo_entries(result.entries)
    else:
        click.echo("No donations available to attribute.")
    if result.unallocated > 0:
        click.echo(f"Warning: {format_amount(result.unallocated)} ETH could not be attributed to any donation")
    click.echo(
        f"{result.donors_affected} donor(s) affected, "
        f"{result.notifications_sent} notification(s) sent, "
        f"{result.notifications_failed} failed"
    )


@reimbursement_group.command("preview")
@click.argument("amount", metavar="AMOUNT")
@click.pass_context
def preview_reimbursement(ctx, amount: str):
    """Show how a reimbursement would be attributed, without recording it."""
    service = LedgerQueryService(ctx.obj["db"])

    try:
        entries = service.preview_allocation(amount)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not entries:
        click.echo("No donations available to attribute.")
        return

    click.echo(f"\nPreview: {len(entries)} donation(s) would be drawn:")
    _echo_entries(entries)


@reimbursement_group.command("list")
@click.pass_context
def list_reimbursements(ctx):
    """List reimbursements, newest first."""
    service = LedgerQueryService(ctx.obj["db"])

    try:
        reimbursements = service.list_reimbursements()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not reimbursements:
        click.echo("No reimbursements found.")
        return

    click.echo(f"\nFound {len(reimbursements)} reimbursement(s):")
    click.echo("-" * 100)
    for r in reimbursements:
        status = "allocated" if r.allocation_applied else "pending"
        click.echo(
            f"{r.id[:30]:<30} {format_amount(r.amount):>14} {status:<10} {r.invoice_text[:40]}"
        )


def register_commands(cli):
    """Register reimbursement commands with main CLI."""
    cli.add_command(reimbursement_group, name="reimbursement")
