"""Main CLI entry point."""

import click
from verifund.cli.error_handling import handle_domain_error
from verifund.database.factories import create_sqlite_database
from verifund.domain.errors import DomainError
from verifund.domain.notifications import LoggingNotificationSink
from verifund.logging_setup import configure_logging

# Import and register all commands at module level
from verifund.cli.commands import (
    balance,
    donation,
    donor,
    reimbursement,
)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides VERIFUND_DB_PATH environment variable)",
    envvar="VERIFUND_DB_PATH",
)
@click.option(
    "--log-level",
    help="Log level, e.g. INFO or DEBUG (overrides VERIFUND_LOG_LEVEL)",
    envvar="VERIFUND_LOG_LEVEL",
)
@click.option(
    "--strict-allocation",
    is_flag=True,
    envvar="VERIFUND_STRICT_ALLOCATION",
    help="Reject reimbursements larger than the unspent donations",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str | None, strict_allocation: bool):
    """VeriFund - donation ledger with FIFO reimbursement attribution.

    Records donations into a pooled vault and attributes each reimbursement
    to the donors whose money paid for it, oldest donations first.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        configure_logging(log_level)
        try:
            db = create_sqlite_database(database_path=db_path)
        except DomainError as e:
            handle_domain_error(ctx, e)
        db.connect()
        db.initialize_schema()
        ctx.call_on_close(db.disconnect)
        ctx.obj["db"] = db
        # Constructed once per process and injected into the processor
        ctx.obj["notifier"] = LoggingNotificationSink()
        ctx.obj["strict"] = strict_allocation


# Register all commands
donor.register_commands(cli)
donation.register_commands(cli)
reimbursement.register_commands(cli)
balance.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
