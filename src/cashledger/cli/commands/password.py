"""Password management command."""

import click
from cashledger.domain.access import AccessGate
from cashledger.domain.errors import DomainError, StorageError
from cashledger.cli.error_handling import handle_error


@click.command("set-password")
@click.option("--current", "current_password", help="Current password (required when one is already set)")
@click.option(
    "--new-password",
    prompt="New password",
    hide_input=True,
    confirmation_prompt=True,
    help="Password to store",
)
@click.pass_context
def set_password(ctx, current_password: str | None, new_password: str):
    """Set the ledger password, or change it.

    Examples:
        cashledger set-password
        cashledger set-password --current old-secret
    """
    gate = AccessGate(ctx.obj["store"])

    try:
        if gate.has_secret():
            if current_password is None:
                current_password = click.prompt("Current password", hide_input=True)
            gate.change_secret(current_password, new_password)
            click.echo("Password changed.")
        else:
            gate.set_secret(new_password)
            click.echo("Password set.")
    except (DomainError, StorageError) as e:
        handle_error(ctx, e)


def register_commands(cli):
    """Register password command with main CLI."""
    cli.add_command(set_password)
