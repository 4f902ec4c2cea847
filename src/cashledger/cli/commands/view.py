"""Transaction viewing commands."""

import click
from cashledger.cli.filters import criteria_from_options, filter_options
from cashledger.cli.session import open_ledger, password_option


def format_summary_line(summary) -> str:
    return (
        f"Credit: {summary.credit:,.2f} | Debit: {summary.debit:,.2f} | "
        f"Balance: {summary.balance:,.2f}"
    )


@click.command("list")
@filter_options
@click.option("--verbose", "-v", is_flag=True, help="Show every field of each transaction")
@password_option
@click.pass_context
def list_transactions(ctx, verbose: bool, password: str | None, **filters):
    """List transactions, newest first, with optional filters.

    Examples:
        cashledger list --this-month
        cashledger list --kind credit --search alice
    """
    criteria = criteria_from_options(ctx, filters)
    ledger = open_ledger(ctx, password)
    view = ledger.view(criteria)

    if not view.transactions:
        click.echo("No transactions found.")
        return

    click.echo(f"\nFound {len(view.transactions)} transaction(s):")

    if verbose:
        click.echo("=" * 100)
        for txn in view.transactions:
            click.echo(f"\nTransaction ID: {txn.id}")
            click.echo(f"  Date: {txn.date} {txn.time}")
            click.echo(f"  Kind: {txn.kind.value}")
            click.echo(f"  Payment mode: {txn.payment_mode.value}")
            click.echo(f"  Amount: {txn.amount:,.2f}")
            click.echo(f"  Counterparty: {txn.counterparty}")
            click.echo(f"  Remarks: {txn.remarks}")
            if txn.reference_id:
                click.echo(f"  Reference: {txn.reference_id}")
            click.echo("-" * 100)
    else:
        click.echo("-" * 100)
        click.echo(
            f"{'Date':<11} {'Time':<6} {'Kind':<7} {'Mode':<7} {'Amount':>12}  {'Counterparty':<20} {'Remarks':<30}"
        )
        click.echo("-" * 100)
        for txn in view.transactions:
            click.echo(
                f"{str(txn.date):<11} {txn.time:<6} {txn.kind.value:<7} {txn.payment_mode.value:<7} "
                f"{txn.amount:>12,.2f}  {txn.counterparty[:20]:<20} {txn.remarks[:30]:<30}"
            )

    click.echo("-" * 100)
    click.echo(format_summary_line(view.summary))


@click.command("counterparties")
@password_option
@click.pass_context
def list_counterparties(ctx, password: str | None):
    """List every counterparty seen so far."""
    ledger = open_ledger(ctx, password)
    names = ledger.counterparties()
    if not names:
        click.echo("No counterparties found.")
        return
    for name in names:
        click.echo(name)


def register_commands(cli):
    """Register view commands with main CLI."""
    cli.add_command(list_transactions)
    cli.add_command(list_counterparties)
