"""Summary command."""

import click
from cashledger.cli.filters import criteria_from_options, filter_options
from cashledger.cli.session import open_ledger, password_option


@click.command("summary")
@filter_options
@password_option
@click.pass_context
def summary(ctx, password: str | None, **filters):
    """Show total credit, total debit and balance for the filtered view.

    Examples:
        cashledger summary
        cashledger summary --last-month --mode online
    """
    criteria = criteria_from_options(ctx, filters)
    ledger = open_ledger(ctx, password)
    totals = ledger.summary(criteria)

    click.echo(f"Total credit (money received): {totals.credit:>14,.2f}")
    click.echo(f"Total debit (money paid):      {totals.debit:>14,.2f}")
    click.echo(f"Balance:                       {totals.balance:>14,.2f}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
