"""CSV export and printable report commands."""

import click
from cashledger.domain.csv_export import REPORT_HEADERS, default_export_filename, write_csv_export
from cashledger.domain.entities import TransactionKind
from cashledger.cli.filters import criteria_from_options, filter_options
from cashledger.cli.session import open_ledger, password_option

KIND_COLORS = {TransactionKind.CREDIT: "green", TransactionKind.DEBIT: "red"}


@click.command("export")
@filter_options
@click.option("--output", "-o", type=click.Path(dir_okay=False), help="Output file (default transactions_<today>.csv)")
@password_option
@click.pass_context
def export_transactions(ctx, output: str | None, password: str | None, **filters):
    """Export the filtered transactions to CSV."""
    criteria = criteria_from_options(ctx, filters)
    ledger = open_ledger(ctx, password)
    transactions = ledger.transactions(criteria)

    path = write_csv_export(output or default_export_filename(), transactions)
    click.echo(f"Exported {len(transactions)} transaction(s) to {path}")


@click.command("report")
@filter_options
@password_option
@click.pass_context
def report(ctx, password: str | None, **filters):
    """Print a transaction report; credits in green, debits in red."""
    criteria = criteria_from_options(ctx, filters)
    ledger = open_ledger(ctx, password)
    transactions = ledger.transactions(criteria)
    rows = ledger.report_rows(criteria)

    widths = [len(header) for header in REPORT_HEADERS]
    for row in rows:
        widths = [max(width, len(cell)) for width, cell in zip(widths, row)]

    click.echo("Transaction Report")
    click.echo("  ".join(header.ljust(width) for header, width in zip(REPORT_HEADERS, widths)))
    click.echo("  ".join("-" * width for width in widths))
    for txn, row in zip(transactions, rows):
        cells = [cell.ljust(width) for cell, width in zip(row[:-1], widths)]
        amount = click.style(row[-1].rjust(widths[-1]), fg=KIND_COLORS[txn.kind])
        click.echo("  ".join(cells + [amount]))


def register_commands(cli):
    """Register export commands with main CLI."""
    cli.add_command(export_transactions)
    cli.add_command(report)
