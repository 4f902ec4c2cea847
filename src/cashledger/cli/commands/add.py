"""Add transaction command."""

import click
from datetime import date
from cashledger.domain.errors import DomainError, StorageError
from cashledger.cli.error_handling import handle_error
from cashledger.cli.session import open_ledger, password_option
from cashledger.utils.date_parser import current_time


@click.command("add")
@click.option(
    "--kind",
    type=click.Choice(["credit", "debit"], case_sensitive=False),
    default="debit",
    show_default=True,
    help="Money received (credit) or paid (debit)",
)
@click.option("--date", "txn_date", help="Transaction date (YYYY-MM-DD or relative like 'yesterday'; default today)")
@click.option("--time", "txn_time", help="Transaction time HH:MM (default now)")
@click.option(
    "--mode",
    type=click.Choice(["cash", "online"], case_sensitive=False),
    default="cash",
    show_default=True,
    help="Payment mode",
)
@click.option("--amount", required=True, help="Positive amount (e.g., 500 or 1,250.75)")
@click.option("--reference", help="Reference ID (required for online payments)")
@click.option("--counterparty", required=True, help="Who the money came from or went to")
@click.option("--remarks", required=True, help="Description of the transaction")
@password_option
@click.pass_context
def add_transaction(
    ctx,
    kind: str,
    txn_date: str | None,
    txn_time: str | None,
    mode: str,
    amount: str,
    reference: str | None,
    counterparty: str,
    remarks: str,
    password: str | None,
):
    """Record a transaction.

    Examples:
        cashledger add --kind credit --amount 500 --counterparty Alice --remarks gift
        cashledger add --mode online --reference UPI123 --amount 120 --counterparty Grocer --remarks vegetables
    """
    ledger = open_ledger(ctx, password)

    try:
        transaction = ledger.add_transaction(
            date=txn_date or date.today(),
            time=txn_time or current_time(),
            amount=amount,
            kind=kind,
            payment_mode=mode,
            counterparty=counterparty,
            remarks=remarks,
            reference_id=reference,
        )
    except (DomainError, StorageError) as e:
        handle_error(ctx, e)

    click.echo(f"Created transaction {transaction.id}")
    click.echo(f"  Date: {transaction.date} {transaction.time}")
    click.echo(f"  Kind: {transaction.kind.value} ({transaction.payment_mode.value})")
    click.echo(f"  Amount: {transaction.amount:,.2f}")
    click.echo(f"  Counterparty: {transaction.counterparty}")
    if transaction.reference_id:
        click.echo(f"  Reference: {transaction.reference_id}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
