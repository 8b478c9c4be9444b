"""Command-line interface for the Bitvora API client."""

import sys
import asyncio
from typing import Any, Awaitable, Callable, Dict, List, Optional

import typer
from rich.console import Console
from rich.table import Table
from rich.panel import Panel
from rich.markup import escape

from . import __version__
from .config import Settings, load_config
from .api.client import BitvoraClient
from .api.errors import BitvoraAPIError, BitvoraError
from .api.models import (
    CreateLightningAddressRequest,
    CreateLightningInvoiceRequest,
    CreateOnChainAddressRequest,
    EstimateWithdrawalRequest,
    WithdrawRequest,
)


app = typer.Typer(
    name="bitvora",
    help="Bitvora Bitcoin/Lightning API client",
    add_completion=False,
)

console = Console()


def create_client(settings: Settings) -> BitvoraClient:
    """Create an API client from CLI settings."""
    return BitvoraClient.from_config(settings.get_client_config())


def get_settings() -> Settings:
    """Load settings and configure logging."""
    try:
        settings = load_config()
    except Exception as e:
        console.print(f"[red]Error:[/red] Failed to load configuration: {escape(str(e))}")
        raise typer.Exit(1)

    settings.setup_logging()
    return settings


def run_call(call: Callable[[BitvoraClient], Awaitable[Any]]) -> Any:
    """
    Run one API call with a fresh client.

    Prints the error and exits with status 1 if the call fails.
    """
    settings = get_settings()

    async def _runner():
        async with create_client(settings) as client:
            return await call(client)

    try:
        return asyncio.run(_runner())
    except BitvoraAPIError as e:
        console.print(f"[red]✗ API error ({e.status_code}):[/red] {escape(e.body)}")
        raise typer.Exit(1)
    except BitvoraError as e:
        console.print(f"[red]✗ Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Operation cancelled by user[/yellow]")
        raise typer.Exit(0)


def parse_metadata(values: Optional[List[str]]) -> Dict[str, str]:
    """Parse repeated KEY=VALUE options into a metadata mapping."""
    metadata: Dict[str, str] = {}
    for item in values or []:
        key, sep, value = item.partition("=")
        if not sep or not key:
            raise typer.BadParameter(f"Expected KEY=VALUE, got '{item}'", param_hint="--meta")
        metadata[key] = value
    return metadata


def print_record(title: str, fields: Dict[str, Any]) -> None:
    """Print a flat record as a two-column table."""
    console.print(f"\n[bold green]✓ {title}[/bold green]\n")
    table = Table(show_header=False, box=None)
    for name, value in fields.items():
        if value is None:
            continue
        table.add_row(f"{name}:", f"[cyan]{escape(str(value))}[/cyan]")
    console.print(table)
    console.print()


@app.command()
def balance():
    """Show the account balance."""
    response = run_call(lambda client: client.get_balance())
    console.print(f"\nBalance: [green]{response.data.balance}[/green] sats\n")


@app.command()
def transactions(
    limit: int = typer.Option(20, "--limit", "-l", min=1, help="Maximum number of transactions to display"),
):
    """List account transactions."""
    response = run_call(lambda client: client.get_transactions())
    txs = response.data

    if not txs:
        console.print("[yellow]No transactions found[/yellow]\n")
        return

    table = Table(show_header=True)
    table.add_column("ID", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Rail", style="white")
    table.add_column("Amount", style="green")
    table.add_column("Status", style="yellow")
    table.add_column("Created", style="white")

    for tx in txs[:limit]:
        table.add_row(
            tx.id,
            tx.type,
            tx.rail_type,
            f"{tx.amount_sats} sats",
            tx.status,
            tx.created_at,
        )

    console.print(table)
    console.print(f"\nShowing {min(len(txs), limit)} of {len(txs)} transaction(s)\n")


@app.command()
def withdrawal(withdrawal_id: str = typer.Argument(..., help="Withdrawal ID")):
    """Show a withdrawal."""
    response = run_call(lambda client: client.get_withdrawal(withdrawal_id))
    data = response.data
    print_record("Withdrawal", {
        "ID": data.id,
        "Recipient": data.recipient,
        "Amount": f"{data.amount_sats} sats",
        "Fee": f"{data.fee_sats} sats",
        "Rail": data.rail_type,
        "Network": data.network_type,
        "Status": data.status,
        "Chain TX": data.chain_tx_id,
        "Created": data.created_at,
    })


@app.command()
def deposit(deposit_id: str = typer.Argument(..., help="Deposit ID")):
    """Show a deposit."""
    response = run_call(lambda client: client.get_deposit(deposit_id))
    data = response.data
    print_record("Deposit", {
        "ID": data.id,
        "Ledger TX": data.ledger_tx_id,
        "Recipient": data.recipient,
        "Amount": f"{data.amount_sats} sats",
        "Fee": f"{data.fee_sats} sats",
        "Rail": data.rail_type,
        "Network": data.network_type,
        "Status": data.status,
        "Chain TX": data.chain_tx_id,
        "Created": data.created_at,
    })


@app.command()
def withdraw(
    amount: float = typer.Option(..., "--amount", "-a", help="Amount to send"),
    destination: str = typer.Option(..., "--destination", "-d", help="Invoice, Lightning address or bitcoin address"),
    currency: str = typer.Option("sats", "--currency", "-c", help="Currency of the amount"),
    meta: Optional[List[str]] = typer.Option(None, "--meta", "-m", help="Metadata as KEY=VALUE (repeatable)"),
    confirm: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation prompt"),
):
    """
    Send a withdrawal.

    Funds leave the account immediately, so a confirmation is asked first.
    """
    request = WithdrawRequest(
        amount=amount,
        currency=currency,
        destination=destination,
        metadata=parse_metadata(meta),
    )

    if not confirm:
        confirm = typer.confirm(f"Send {amount} {currency} to {destination}?")
        if not confirm:
            console.print("[yellow]Operation cancelled[/yellow]")
            raise typer.Exit(0)

    response = run_call(lambda client: client.withdraw(request))
    data = response.data
    print_record("Withdrawal created", {
        "ID": data.id,
        "Recipient": data.recipient,
        "Amount": f"{data.amount_sats} sats",
        "Fee": f"{data.fee_sats} sats",
        "Rail": data.rail_type,
        "Status": data.status,
    })


@app.command()
def estimate(
    amount: float = typer.Option(..., "--amount", "-a", help="Amount to send"),
    destination: str = typer.Option(..., "--destination", "-d", help="Invoice, Lightning address or bitcoin address"),
    currency: str = typer.Option("sats", "--currency", "-c", help="Currency of the amount"),
):
    """Estimate the fee for a withdrawal."""
    request = EstimateWithdrawalRequest(amount=amount, currency=currency, destination=destination)
    response = run_call(lambda client: client.estimate_withdrawal(request))
    data = response.data
    print_record("Estimate", {
        "Recipient": data.recipient,
        "Recipient type": data.recipient_type,
        "Amount": f"{data.amount_sats} sats",
        "Fee": f"{data.bitvora_fee_sats} sats",
        "Success probability": f"{data.success_probability:.2%}",
    })


@app.command()
def invoice(
    amount: float = typer.Option(..., "--amount", "-a", help="Amount to receive"),
    description: str = typer.Option("", "--description", help="Invoice description"),
    currency: str = typer.Option("sats", "--currency", "-c", help="Currency of the amount"),
    expiry: int = typer.Option(3600, "--expiry", help="Invoice expiry in seconds"),
    meta: Optional[List[str]] = typer.Option(None, "--meta", "-m", help="Metadata as KEY=VALUE (repeatable)"),
):
    """Create a Lightning invoice."""
    request = CreateLightningInvoiceRequest(
        amount=amount,
        currency=currency,
        description=description,
        expiry_seconds=expiry,
        metadata=parse_metadata(meta) or None,
    )
    response = run_call(lambda client: client.create_lightning_invoice(request))
    data = response.data
    print_record("Invoice created", {
        "ID": data.id,
        "Amount": f"{data.amount_sats} sats",
        "Memo": data.memo,
        "Payment hash": data.r_hash,
        "Invoice": data.payment_request,
    })


@app.command()
def lightning_address(
    handle: str = typer.Option("", "--handle", help="Address handle (random if empty)"),
    domain: str = typer.Option("", "--domain", help="Address domain (default if empty)"),
    meta: Optional[List[str]] = typer.Option(None, "--meta", "-m", help="Metadata as KEY=VALUE (repeatable)"),
):
    """Create a Lightning address."""
    request = CreateLightningAddressRequest(
        handle=handle,
        domain=domain,
        metadata=parse_metadata(meta) or None,
    )
    response = run_call(lambda client: client.create_lightning_address(request))
    data = response.data
    print_record("Lightning address created", {
        "ID": data.id,
        "Address": data.address,
        "Created": data.created_at,
    })


@app.command()
def onchain_address(
    meta: Optional[List[str]] = typer.Option(None, "--meta", "-m", help="Metadata as KEY=VALUE (repeatable)"),
):
    """Create an on-chain deposit address."""
    request = CreateOnChainAddressRequest(metadata=parse_metadata(meta) or None)
    response = run_call(lambda client: client.create_onchain_address(request))
    data = response.data
    print_record("On-chain address created", {
        "ID": data.id,
        "Address": data.address,
        "Created": data.created_at,
    })


@app.command()
def version():
    """Display version information."""
    console.print(Panel(
        f"[bold cyan]bitvora[/bold cyan]\n"
        f"Version: [green]{__version__}[/green]\n"
        f"Bitvora Bitcoin/Lightning API client",
        title="Version Info",
        border_style="cyan",
    ))


def main():
    """Main CLI entry point."""
    try:
        app()
    except Exception as e:
        console.print(f"\n[red]Fatal error:[/red] {escape(str(e))}")
        sys.exit(1)


if __name__ == "__main__":
    main()
