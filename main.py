#!/usr/bin/env python3
"""
mint-view CLI entrypoint
"""

import asyncio
import json
import sys
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from loguru import logger

from mint_view import (
    AddressBook,
    CollectionStateFetcher,
    TokenGateChecker,
    decode_token_uri,
    explorer_links,
)
from mint_view.clients import EthereumRPCClient
from mint_view.config import Config, config
from mint_view.contracts import EVMContractFactory
from mint_view.exceptions import ConfigurationError, MintViewError
from mint_view.utils import require_address

app = typer.Typer(help="mint-view - on-chain collection state for minting pages")
console = Console()


@app.callback()
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logs (gas per call)")):
    logger.remove()
    logger.add(sys.stderr, level="DEBUG" if verbose else "WARNING")


def _client(cfg: Config, network: str) -> EthereumRPCClient:
    return EthereumRPCClient(
        rpc_url=cfg.get_rpc_url(network),
        timeout=cfg.timeout,
        max_retries=cfg.max_retries,
        max_concurrency=cfg.max_concurrency,
    )


def _address_or_exit(value: Optional[str], what: str) -> str:
    if not value:
        console.print(f"[red]No {what} given (argument or environment)[/red]")
        raise typer.Exit(1)
    try:
        return require_address(value)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _run(coro):
    try:
        return asyncio.run(coro)
    except MintViewError as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        console.print(f"[bold red]Error:[/bold red] {e}{cause}")
        raise typer.Exit(1)


@app.command()
def collection(
    token_address: Optional[str] = typer.Argument(None, help="Token contract address (default: TOKEN_ADDRESS)"),
    network: str = typer.Option(config.network, help="Network name (mainnet, goerli, mumbai, localhost...)"),
    asset_provider: str = typer.Option(config.asset_provider, help="Asset provider name in the address book"),
    addresses: Optional[Path] = typer.Option(config.address_book_path, help="Address book JSON file"),
):
    """Show supply, mint limit, next token preview and recent tokens"""
    token_address = _address_or_exit(token_address or config.token_address, "token address")
    if addresses is None:
        console.print("[red]No address book given (--addresses or ADDRESS_BOOK_PATH)[/red]")
        raise typer.Exit(1)

    async def fetch_state():
        address_book = AddressBook.from_file(addresses)
        async with _client(config, network) as client:
            contracts = EVMContractFactory(client)
            fetcher = CollectionStateFetcher(address_book, contracts)
            with Progress(
                SpinnerColumn(),
                TextColumn("[progress.description]{task.description}"),
                console=console,
            ) as progress:
                task = progress.add_task(f"Fetching collection {token_address}...", total=None)
                state = await fetcher.fetch_collection_state(
                    network, asset_provider, contracts.token(token_address)
                )
                progress.update(task, completed=True)

        console.print(f"\n[bold green]{state.total_supply} / {state.mint_limit} minted[/bold green]")
        if state.is_minted_out:
            console.print("[yellow]Minting closed: collection is fully minted[/yellow]")
        else:
            console.print(f"Next token #{state.total_supply} preview: {len(state.next_image)} chars, "
                          f"gas {state.generation_gas}")

        if state.recent_tokens:
            table = Table(title="Recent tokens")
            table.add_column("Token ID", style="yellow")
            table.add_column("Image", style="white")
            for token in state.recent_tokens:
                table.add_row(str(token.token_id), token.image[:48] + "...")
            console.print(table)

        links = explorer_links(network, token_address)
        console.print(f"\n[dim]{links.etherscan_token}[/dim]")
        console.print(f"[dim]{links.opensea_path}[/dim]")

    _run(fetch_state())


@app.command()
def gate(
    account: str = typer.Argument(..., help="Account to check"),
    token_address: Optional[str] = typer.Option(config.token_address, help="Token contract address"),
    token_gate_address: Optional[str] = typer.Option(config.token_gate_address, help="Token gate contract address"),
    token_gated: bool = typer.Option(config.token_gated, "--token-gated/--no-token-gated", help="Query the gate contract"),
    network: str = typer.Option(config.network, help="Network name"),
):
    """Show token gate balance, token balance and mint price for an account"""
    account = _address_or_exit(account, "account")
    token_address = _address_or_exit(token_address, "token address")
    if token_gated:
        token_gate_address = _address_or_exit(token_gate_address, "token gate address")

    async def check():
        async with _client(config, network) as client:
            contracts = EVMContractFactory(client)
            checker = TokenGateChecker(contracts)
            state = await checker.check_eligibility(
                account, token_gate_address, token_gated, contracts.token(token_address)
            )

        table = Table(title=f"Gate state for {account}")
        table.add_column("Metric", style="cyan")
        table.add_column("Value", style="white")
        table.add_row("Gate balance", str(state.total_balance_at_gate_contract) if token_gated else "not gated")
        table.add_row("Token balance", str(state.balance_at_token_contract))
        table.add_row("Mint price (wei)", str(state.mint_price))
        console.print(table)

    _run(check())


@app.command()
def decode(
    token_uri: str = typer.Argument(..., help="Token URI, or a file containing one"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Write the SVG image to this file"),
):
    """Decode a data-URI token representation"""
    path = Path(token_uri)
    if not token_uri.startswith("data:") and path.is_file():
        token_uri = path.read_text().strip()

    try:
        decoded = decode_token_uri(token_uri)
    except MintViewError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    metadata = {k: v for k, v in decoded.metadata.items() if k != "image"}
    console.print_json(json.dumps(metadata))
    console.print(f"[dim]image: {len(decoded.image)} bytes[/dim]")

    if output:
        with open(output, "wb") as f:
            f.write(decoded.image)
        console.print(f"\n[green]Saved to {output}[/green]")


@app.command()
def links(
    content_address: str = typer.Argument(..., help="Content contract address"),
    network: str = typer.Option(config.network, help="Network name"),
):
    """Print block explorer and marketplace links"""
    result = explorer_links(network, content_address)
    console.print(f"Etherscan: {result.etherscan_token}")
    console.print(f"OpenSea:   {result.opensea_path}")


@app.command()
def endpoint(network: str = typer.Option(config.network, help="Network name")):
    """Print the RPC endpoint that would be used for a network"""
    try:
        console.print(config.get_rpc_url(network))
    except ConfigurationError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)


if __name__ == "__main__":
    app()
