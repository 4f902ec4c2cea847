"""Main CLI entry point."""

import logging

import click
from cashledger.database.factories import create_sqlite_store
from cashledger.domain.errors import StorageError
from cashledger.cli.error_handling import handle_error

# Import and register all commands at module level
from cashledger.cli.commands import (
    add,
    export,
    import_cmd,
    password,
    summary,
    transaction,
    view,
)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


def configure_logging(level: str) -> None:
    """Send log records to stderr at ``level``."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.WARNING),
        format="%(levelname)s - %(name)s - %(message)s",
    )


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides CASHLEDGER_DB_PATH environment variable)",
    envvar="CASHLEDGER_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="CASHLEDGER_LOG_LEVEL",
    help="Logging verbosity",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Cashledger - personal cash and online ledger.

    Record credits and debits, then search, summarize, import and export
    them. Every command except set-password asks for the ledger password.
    """
    ctx.ensure_object(dict)
    configure_logging(log_level)

    # Open the store only when actually running a command (not for --help)
    if ctx.invoked_subcommand is not None:
        store = create_sqlite_store(database_path=db_path)
        try:
            store.connect()
            store.initialize_schema()
        except StorageError as e:
            handle_error(ctx, e)
        ctx.obj["store"] = store
        ctx.call_on_close(store.disconnect)


# Register all commands
password.register_commands(cli)
add.register_commands(cli)
transaction.register_commands(cli)
view.register_commands(cli)
summary.register_commands(cli)
export.register_commands(cli)
import_cmd.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
