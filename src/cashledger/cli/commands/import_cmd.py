"""CSV import command."""

import click
from cashledger.domain.errors import DomainError, StorageError
from cashledger.cli.error_handling import handle_error
from cashledger.cli.session import open_ledger, password_option


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@password_option
@click.pass_context
def import_csv(ctx, csv_file: str, password: str | None):
    """Import transactions from a CSV file.

    Rows are keyed by their id: re-importing a file updates the same
    records instead of duplicating them. Incomplete rows are skipped.
    """
    ledger = open_ledger(ctx, password)

    try:
        result = ledger.import_csv_file(csv_file)
    except (DomainError, StorageError, FileNotFoundError) as e:
        handle_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    click.echo(f"  Skipped: {len(result.skipped)} rows")
    for skipped in result.skipped:
        click.echo(f"    Row {skipped.row_num}: {skipped.reason}", err=True)


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
