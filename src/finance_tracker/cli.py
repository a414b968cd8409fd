import typer
from pathlib import Path
from typing import Optional
from datetime import date, datetime

from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from finance_tracker.config.settings import Settings
from finance_tracker.database.connection import DatabaseConfig, DatabaseManager
from finance_tracker.domain.enums import FilterMode
from finance_tracker.domain.errors import FinanceTrackerError
from finance_tracker.domain.models import TransactionDraft
from finance_tracker.logging_setup import configure_logging
from finance_tracker.services.models import LedgerSummary
from finance_tracker.services.preferences import PreferenceStore
from finance_tracker.services.transaction_store import TransactionStore
from finance_tracker.storage import SQLiteKeyValueStore

app = typer.Typer(
    name="finance-tracker",
    help="Track your income and expenses",
    add_completion=False,
)

console = Console()

class State:
    verbose: bool = False
    db_manager: Optional[DatabaseManager] = None
    store: Optional[TransactionStore] = None
    preferences: Optional[PreferenceStore] = None


state = State()

@app.callback()
def main(
    verbose: bool = typer.Option(
        False,
        "--verbose", "-v",
        help="Enable verbose output",
    ),
    db: Optional[Path] = typer.Option(
        None,
        "--db",
        help="Database file (overrides the configured path)",
        dir_okay=False,
    ),
):
    """
    Finance Tracker - Record transactions and see where your money goes.
    """
    state.verbose = verbose

    try:
        settings = Settings.load()
    except (FinanceTrackerError, OSError) as e:
        _fail(e)
    configure_logging("DEBUG" if verbose else settings.log_level)

    if state.store is None:
        state.db_manager = DatabaseManager(DatabaseConfig(db or settings.db_path))
        try:
            storage = SQLiteKeyValueStore(state.db_manager)
        except FinanceTrackerError as e:
            _fail(e)
        state.store = TransactionStore(storage, key=settings.transactions_key)
        state.store.load()
        state.preferences = PreferenceStore(storage, key=settings.theme_key)

def _parse_date(value: Optional[str]) -> Optional[date]:
    if value is None:
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        raise typer.BadParameter(f"'{value}' is not a date in YYYY-MM-DD format")

def _fail(error: Exception) -> None:
    console.print(f"[bold red]Error:[/bold red] {error}")
    if state.verbose:
        console.print_exception()
    raise typer.Exit(code=1)

def _warn_if_unsaved() -> None:
    if state.store.last_persistence_error is not None:
        console.print(
            f"[yellow]⚠ Changes may not survive a restart: "
            f"{state.store.last_persistence_error}[/yellow]"
        )

def _format_amount(amount, is_expense: bool) -> str:
    if is_expense:
        return f"[red]-${amount:,.2f}[/red]"
    return f"[green]+${amount:,.2f}[/green]"

def _summary_panel(summary: LedgerSummary) -> Panel:
    summary_text = (
        f"[green]💰 Income:[/green]    ${summary.total_income:>10,.2f}\n"
        f"[red]💸 Expenses:[/red]  ${summary.total_expense:>10,.2f}\n"
        f"{'─' * 30}\n"
    )
    if summary.balance >= 0:
        summary_text += f"[bold green]📈 Balance:[/bold green]   ${summary.balance:>10,.2f}"
    else:
        summary_text += f"[bold red]📉 Balance:[/bold red]   ${summary.balance:>10,.2f}"

    return Panel(
        summary_text,
        title="[bold]Summary[/bold]",
        border_style="cyan",
        padding=(1, 2)
    )

@app.command(name="add")
def add_transaction(
    description: str = typer.Argument(..., help="What the money was for"),
    amount: str = typer.Argument(..., help="Positive amount, e.g. 4.50"),
    on: Optional[str] = typer.Option(
        None,
        "--date", "-d",
        help="Date as YYYY-MM-DD (defaults to today)",
    ),
    expense: bool = typer.Option(
        True,
        "--expense/--income",
        help="Money going out (default) or coming in",
    ),
):
    """
    Record a new transaction.

    Examples:
        finance-tracker add Coffee 4.50
        finance-tracker add Salary 2000 --income --date 2024-01-02
    """
    txn_date = _parse_date(on) or date.today()
    try:
        txn = state.store.add(TransactionDraft(
            description=description,
            amount=amount,
            date=txn_date,
            is_expense=expense,
        ))
    except FinanceTrackerError as e:
        _fail(e)

    console.print(
        f"[bold green]✓ Added[/bold green] {txn.description} "
        f"{_format_amount(txn.amount, txn.is_expense)} on {txn.date} [dim]({txn.id})[/dim]"
    )
    _warn_if_unsaved()

@app.command(name="edit")
def edit_transaction(
    transaction_id: str = typer.Argument(..., help="ID of the transaction to change"),
    description: Optional[str] = typer.Option(None, "--description", help="New description"),
    amount: Optional[str] = typer.Option(None, "--amount", help="New amount"),
    on: Optional[str] = typer.Option(None, "--date", "-d", help="New date as YYYY-MM-DD"),
    expense: Optional[bool] = typer.Option(
        None,
        "--expense/--income",
        help="Change whether it's money out or in",
    ),
):
    """
    Change a transaction. Fields you don't pass keep their current values.

    Examples:
        finance-tracker edit 3f2a... --amount 5.00
    """
    new_date = _parse_date(on)
    try:
        current = state.store.get(transaction_id)
        txn = state.store.update(transaction_id, TransactionDraft(
            description=current.description if description is None else description,
            amount=current.amount if amount is None else amount,
            date=current.date if new_date is None else new_date,
            is_expense=current.is_expense if expense is None else expense,
        ))
    except FinanceTrackerError as e:
        _fail(e)

    console.print(
        f"[bold green]✓ Updated[/bold green] {txn.description} "
        f"{_format_amount(txn.amount, txn.is_expense)} on {txn.date}"
    )
    _warn_if_unsaved()

@app.command(name="remove")
def remove_transaction(
    transaction_id: str = typer.Argument(..., help="ID of the transaction to remove"),
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
):
    """
    Permanently remove a transaction.
    """
    try:
        txn = state.store.get(transaction_id)
    except FinanceTrackerError as e:
        _fail(e)

    if not yes:
        typer.confirm(
            f"Are you sure you want to remove '{txn.description}' ({txn.date})?",
            abort=True,
        )

    try:
        state.store.remove(transaction_id)
    except FinanceTrackerError as e:
        _fail(e)

    console.print(f"[bold green]✓ Removed[/bold green] {txn.description}")
    _warn_if_unsaved()

@app.command(name="list")
def list_transactions(
    filter_mode: str = typer.Option(
        FilterMode.ALL.value,
        "--filter", "-f",
        help="Which transactions to show (all, income, expense)",
    ),
):
    """
    Show transactions and the overall summary.

    Examples:
        finance-tracker list
        finance-tracker list --filter income
    """
    try:
        state.store.set_filter_mode(filter_mode)
    except ValueError as e:
        _fail(e)

    transactions = state.store.get_filtered_view()

    if not transactions:
        console.print(Panel(
            "[yellow]No transactions to show[/yellow]",
            title="Empty Ledger",
            border_style="yellow"
        ))
    else:
        txn_table = Table(
            title=f"Transactions ({state.store.filter_mode.value})",
            show_header=True,
            padding=(0, 1),
        )
        txn_table.add_column("ID", style="dim", no_wrap=True)
        txn_table.add_column("Date", style="cyan", width=12)
        txn_table.add_column("Description", style="white", max_width=40)
        txn_table.add_column("Amount", justify="right", width=14)

        for txn in transactions:
            desc = txn.description[:37] + "..." if len(txn.description) > 40 else txn.description
            txn_table.add_row(
                txn.id,
                str(txn.date),
                desc,
                _format_amount(txn.amount, txn.is_expense),
            )

        console.print(txn_table)

    # Totals always cover the whole ledger, not just the filtered rows
    console.print(_summary_panel(state.store.get_aggregates()))

@app.command(name="summary")
def summary():
    """
    Show total income, total expenses and the balance.
    """
    summary = state.store.get_aggregates()
    console.print(_summary_panel(summary))

    if state.verbose:
        console.print(f"\n[dim]{summary.total_transactions} transactions[/dim]")

@app.command(name="theme")
def theme(
    dark: Optional[bool] = typer.Option(
        None,
        "--dark/--light",
        help="Set the theme preference; omit to show it",
    ),
):
    """
    Show or set the dark-mode preference.
    """
    if dark is not None and not state.preferences.set(dark):
        console.print("[yellow]⚠ Theme preference could not be saved[/yellow]")

    current = "dark" if state.preferences.get() else "light"
    console.print(f"Theme: [bold]{current}[/bold]")

@app.command(name="reset")
def reset(
    yes: bool = typer.Option(False, "--yes", "-y", help="Don't ask for confirmation"),
):
    """
    Delete every transaction.
    """
    if not yes:
        typer.confirm("This permanently deletes all transactions. Continue?", abort=True)

    try:
        count = state.store.clear()
    except FinanceTrackerError as e:
        _fail(e)

    console.print(f"[bold green]✓ Removed {count} transactions[/bold green]")
    _warn_if_unsaved()


def cli_main():
    """Entry point for the CLI"""
    try:
        app()
    finally:
        if state.db_manager is not None:
            state.db_manager.close()


if __name__ == "__main__":
    cli_main()
