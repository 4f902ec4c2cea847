"""Opening an authenticated ledger for a CLI command."""

from typing import Optional

import click

from cashledger.domain.access import AccessGate
from cashledger.domain.errors import DomainError, StorageError
from cashledger.domain.ledger import LedgerService
from cashledger.cli.error_handling import handle_error

# Prompting happens in open_ledger, once a password is known to exist
password_option = click.option(
    "--password",
    envvar="CASHLEDGER_PASSWORD",
    help="Ledger password (or set CASHLEDGER_PASSWORD; prompted when omitted)",
)


def open_ledger(ctx: click.Context, password: Optional[str]) -> LedgerService:
    """Pass the access gate and load the working set, or exit with an error."""
    store = ctx.obj["store"]
    gate = AccessGate(store)
    try:
        if not gate.has_secret():
            click.echo("Error: No password has been set. Run 'cashledger set-password' first.", err=True)
            ctx.exit(1)
        if password is None:
            password = click.prompt("Password", hide_input=True)
        gate.login(password)
        ledger = LedgerService(store, gate)
        ledger.open()
    except (DomainError, StorageError) as e:
        handle_error(ctx, e)
    return ledger
