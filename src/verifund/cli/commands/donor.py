"""Donor registration commands."""

import click
from verifund.cli.error_handling import handle_domain_error
from verifund.domain.donor import DonorService
from verifund.domain.errors import DomainError, ValidationError


@click.group()
def donor_group():
    """Manage donors."""
    pass


@donor_group.command("register")
@click.argument("email", metavar="EMAIL")
@click.argument("wallet", metavar="WALLET_ADDRESS")
@click.pass_context
def register_donor(ctx, email: str, wallet: str):
    """Register a donor's email and wallet.

    Registering an existing email again moves it to the new wallet.

    Examples:
        verifund donor register alice@example.org 0x52908400098527886E0F7030069857D2E4169EE7
    """
    service = DonorService(ctx.obj["db"])

    try:
        donor = service.register(email=email, wallet_address=wallet)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Registered donor '{donor.email}' with wallet {donor.wallet_address}")


@donor_group.command("show")
@click.option("--email", help="Donor email")
@click.option("--wallet", help="Donor wallet address")
@click.pass_context
def show_donor(ctx, email: str | None, wallet: str | None):
    """Look up a donor by email or wallet address."""
    if not email and not wallet:
        handle_domain_error(ctx, ValidationError("Provide --email or --wallet"))

    service = DonorService(ctx.obj["db"])

    try:
        if email:
            donor = service.require_by_email(email)
        else:
            donor = service.require_by_wallet(wallet)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Email:      {donor.email}")
    click.echo(f"Wallet:     {donor.wallet_address}")
    click.echo(f"Registered: {donor.created_at}")


def register_commands(cli):
    """Register donor commands with main CLI."""
    cli.add_command(donor_group, name="donor")
