"""Pool balance command."""

import click
from verifund.cli.error_handling import handle_domain_error
from verifund.domain.errors import DomainError
from verifund.domain.query import LedgerQueryService
from verifund.utils.amount_parser import format_amount


@click.command("balance")
@click.pass_context
def show_balance(ctx):
    """Show donated, spent and unspent totals for the pool."""
    service = LedgerQueryService(ctx.obj["db"])

    try:
        balance = service.pool_balance()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Donations: {balance.donation_count}")
    click.echo(f"Donated:   {format_amount(balance.total_donated)} ETH")
    click.echo(f"Spent:     {format_amount(balance.total_spent)} ETH")
    click.echo(f"Unspent:   {format_amount(balance.total_remaining)} ETH")


def register_commands(cli):
    """Register balance command with main CLI."""
    cli.add_command(show_balance)
