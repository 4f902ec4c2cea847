"""Commands changing an existing transaction."""

import click
from cashledger.domain.errors import DomainError, StorageError
from cashledger.cli.error_handling import handle_error
from cashledger.cli.session import open_ledger, password_option


@click.command("edit")
@click.argument("transaction_id")
@click.option("--kind", type=click.Choice(["credit", "debit"], case_sensitive=False), help="New kind")
@click.option("--date", "txn_date", help="New date")
@click.option("--time", "txn_time", help="New time (HH:MM)")
@click.option("--mode", type=click.Choice(["cash", "online"], case_sensitive=False), help="New payment mode")
@click.option("--amount", help="New amount")
@click.option("--reference", help="New reference ID, or empty string to clear")
@click.option("--counterparty", help="New counterparty")
@click.option("--remarks", help="New remarks")
@password_option
@click.pass_context
def edit_transaction(
    ctx,
    transaction_id: str,
    kind: str | None,
    txn_date: str | None,
    txn_time: str | None,
    mode: str | None,
    amount: str | None,
    reference: str | None,
    counterparty: str | None,
    remarks: str | None,
    password: str | None,
) -> None:
    """Edit a transaction.

    Only the given fields change; the whole record is validated again and
    saved in place of the old one.

    Examples:
        cashledger edit 3f2a... --amount 650
        cashledger edit 3f2a... --mode cash --reference ""
    """
    ledger = open_ledger(ctx, password)

    try:
        transaction = ledger.edit_transaction(
            transaction_id,
            kind=kind,
            date=txn_date,
            time=txn_time,
            payment_mode=mode,
            amount=amount,
            reference_id=reference,
            counterparty=counterparty,
            remarks=remarks,
        )
    except (DomainError, StorageError) as e:
        handle_error(ctx, e)

    click.echo(f"Updated transaction {transaction.id}")


@click.command("delete")
@click.argument("transaction_id")
@click.option("--yes", "-y", is_flag=True, help="Skip confirmation prompt")
@password_option
@click.pass_context
def delete_transaction(ctx, transaction_id: str, yes: bool, password: str | None) -> None:
    """Delete a transaction.

    Examples:
        cashledger delete 3f2a...
        cashledger delete 3f2a... --yes  # Skip confirmation
    """
    ledger = open_ledger(ctx, password)

    if not yes:
        if not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
            click.echo("Cancelled.")
            return

    try:
        ledger.delete_transaction(transaction_id)
    except (DomainError, StorageError) as e:
        handle_error(ctx, e)

    click.echo(f"Deleted transaction {transaction_id}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(edit_transaction)
    cli.add_command(delete_transaction)
