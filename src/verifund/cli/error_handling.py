"""CLI error handling helpers."""

import click

from verifund.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError) -> None:
    """Render a domain error with its kind and exit with failure."""
    click.echo(f"Error [{error.kind}]: {error}", err=True)
    ctx.exit(1)
