# starledger/cli/main.py
"""
CLI for wallets, ownership challenges and an in-memory star registry demo.
"""

import json
import logging
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.table import Table

from starledger.config import LedgerConfig, load_config
from starledger.core.errors import LedgerError
from starledger.crypto.keys import WalletKeyPair, verify_signature
from starledger.registry import StarRegistry

app = typer.Typer(
    name="starledger",
    help="Sign ownership challenges and register stars on a hash-linked ledger",
    add_completion=False,
    no_args_is_help=True,
)

console = Console()


def get_config() -> LedgerConfig:
    """Resolve configuration from STARLEDGER_* environment variables."""
    try:
        return load_config()
    except ValueError as e:
        console.print(f"[red]Invalid configuration: {e}[/]")
        raise typer.Exit(1)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output"),
):
    """Manage wallets and star registrations."""
    cfg = get_config()
    logging.basicConfig(
        level=logging.DEBUG if verbose else cfg.log_level_value,
        format="%(levelname)s %(name)s: %(message)s",
    )


@app.command()
def keygen():
    """Generate a new Ed25519 wallet."""
    wallet = WalletKeyPair.generate()
    console.print(f"[bold]Address:[/]     {wallet.address}")
    console.print(f"[bold]Private key:[/] {wallet.private_key_b64url()}")
    console.print("[yellow]Keep the private key secret. It proves ownership of the address.[/]")


@app.command()
def challenge(
    address: str = typer.Argument(..., help="Wallet address requesting the challenge"),
):
    """Print an ownership challenge message to be signed by the wallet."""
    cfg = get_config()
    registry = StarRegistry(config=cfg)
    try:
        message = registry.request_message_ownership_verification(address)
    except LedgerError as e:
        console.print(f"[red]{e}[/]")
        raise typer.Exit(1)
    console.print(message, soft_wrap=True)
    console.print(f"[dim]Valid for {cfg.validation_window_seconds} seconds.[/]")


@app.command()
def sign(
    message: str = typer.Argument(..., help="Challenge message to sign"),
    key: str = typer.Option(..., "--key", "-k", help="Private key (base64url)"),
):
    """Sign a message with a wallet private key."""
    try:
        wallet = WalletKeyPair.from_private_b64url(key)
    except LedgerError as e:
        console.print(f"[red]Failed to load private key: {e}[/]")
        raise typer.Exit(1)
    console.print(wallet.sign(message), soft_wrap=True)


@app.command("verify-signature")
def verify_signature_cmd(
    message: str = typer.Argument(..., help="Signed message"),
    address: str = typer.Argument(..., help="Wallet address of the signer"),
    signature: str = typer.Argument(..., help="Signature (base64url)"),
):
    """Check a signature against a wallet address."""
    try:
        ok = verify_signature(message, address, signature)
    except LedgerError as e:
        console.print(f"[red]Malformed input: {e}[/]")
        raise typer.Exit(1)

    if ok:
        console.print("[green]✓ Signature is valid[/]")
    else:
        console.print("[red]✗ Signature does not match address[/]")
        raise typer.Exit(1)


@app.command()
def demo(
    stars: int = typer.Option(3, "--stars", "-n", min=0, help="Number of stars to register"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Export the chain as JSONL"),
):
    """Register stars with a fresh wallet, show the chain and validate it."""
    registry = StarRegistry(config=get_config())
    wallet = WalletKeyPair.generate()

    for i in range(stars):
        message = registry.request_message_ownership_verification(wallet.address)
        registry.submit_star(
            wallet.address,
            message,
            wallet.sign(message),
            {"dec": f"68° 52' {i:02d}.0", "ra": f"16h 29m {i:02d}.0s", "story": f"Demo star #{i}"},
        )

    table = Table(title=f"Chain (height {registry.get_chain_height()})")
    table.add_column("Height")
    table.add_column("Hash")
    table.add_column("Previous")
    table.add_column("Body")

    for block in registry.chain:
        prev = block.previous_block_hash[:12] if block.previous_block_hash else "—"
        body = json.dumps(block.decode_body(), ensure_ascii=False)
        table.add_row(str(block.height), block.hash[:12], prev, body[:60])

    console.print(table)
    console.print(f"Owner {wallet.address} has {len(registry.get_stars_by_wallet_address(wallet.address))} stars")

    if output:
        with open(output, "w", encoding="utf-8") as f:
            for block in registry.chain:
                json.dump(block.to_dict(), f, separators=(",", ":"))
                f.write("\n")
        console.print(f"[green]Exported {len(registry.chain)} blocks to {output}[/]")

    result = registry.validation_report()
    if result.is_valid:
        console.print(f"[green]✓ {result}[/]")
    else:
        console.print(f"[red]✗ {result}[/]")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
