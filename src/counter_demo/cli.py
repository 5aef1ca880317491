"""
counter-demo CLI

Command-line interface for reading and writing a Counter contract on a
local EVM test network (Foundry / Anvil by default).

Commands:
  demo          - Full read/write walk-through
  read          - Print number()
  increment     - Send increment()
  set-number    - Send setNumber(VALUE)
  deploy        - Deploy a contract from a Foundry artifact
  block-number  - Show the current block number
  whoami        - Show the signing address
  info          - Show configuration and node status
"""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Optional

import click

from .account import get_address
from .config import COUNTER_DEMO_ENV, load_settings
from .session import Session


# ============ Constants ============

VERSION = "0.1.0"


# ============ Banner ============


def _print_banner() -> None:
    border = click.style("  ◆ ═══════════════════════════════════ ◆", fg="cyan")
    click.echo()
    click.echo(border)
    click.echo(
        click.style("        C O U N T E R   D E M O", fg="bright_white", bold=True)
        + click.style(f"   v{VERSION}", dim=True)
    )
    click.echo(border)
    click.echo()


# ============ Main CLI Group ============


@click.group(invoke_without_command=True)
@click.version_option(version=VERSION, prog_name="counter-demo")
@click.option("--rpc-url", envvar="RPC_URL", default=None, help="JSON-RPC endpoint URL")
@click.option("--chain-id", default=None, type=int, help="Chain ID used for signing (default: CHAIN_ID)")
@click.option("--address", envvar="COUNTER_ADDRESS", default=None, help="Counter contract address")
@click.option(
    "--abi",
    "abi_path",
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="ABI JSON or Foundry artifact (default: bundled Counter ABI)",
)
@click.option("--timeout", default=120.0, show_default=True, type=float, help="Receipt wait timeout in seconds")
@click.option("--poll-interval", default=1.0, show_default=True, type=float, help="Receipt polling interval in seconds")
@click.pass_context
def cli(
    ctx: click.Context,
    rpc_url: Optional[str],
    chain_id: Optional[int],
    address: Optional[str],
    abi_path: Optional[Path],
    timeout: float,
    poll_interval: float,
) -> None:
    """Read and write a Counter contract over JSON-RPC."""
    ctx.ensure_object(dict)

    try:
        settings = load_settings()
    except ValueError as exc:
        raise click.ClickException(str(exc)) from None

    session = Session(
        settings=settings,
        abi_path=abi_path,
        receipt_timeout=timeout,
        poll_interval=poll_interval,
        transport=ctx.obj.get("transport"),
    ).with_overrides(rpc_url=rpc_url, chain_id=chain_id, counter_address=address)
    ctx.obj["session"] = session

    if ctx.invoked_subcommand is None:
        _print_banner()
        click.echo(ctx.get_help())


# ============ Top-level Commands ============

from .commands.counter import increment, read, set_number
from .commands.demo import demo
from .commands.deploy import deploy

cli.add_command(demo)
cli.add_command(read)
cli.add_command(increment)
cli.add_command(set_number)
cli.add_command(deploy)


# ============ Node / Identity ============


@cli.command("block-number")
@click.pass_obj
def block_number(obj: dict) -> None:
    """Show the current block number."""
    session: Session = obj["session"]
    try:
        with session.public_client() as public:
            number = public.get_block_number()
    except Exception as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)
    click.echo(f"Block number: {number}")


@cli.command()
@click.pass_obj
def whoami(obj: dict) -> None:
    """Show the signing address."""
    session: Session = obj["session"]
    try:
        address = get_address(session.settings.private_key)
    except ValueError as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        click.echo(f"Set PRIVATE_KEY in the environment or in {COUNTER_DEMO_ENV}.")
        sys.exit(1)
    click.echo(f"Address: {address}")


@cli.command()
@click.pass_obj
def info(obj: dict) -> None:
    """Show configuration and node status."""
    session: Session = obj["session"]
    settings = session.settings
    chain = session.chain

    _print_banner()

    click.secho("  Config ─────────────────────────────────", fg="cyan")
    click.echo()
    click.echo(click.style("  Chain:    ", dim=True) + f"{chain.name} ({chain.id})")
    click.echo(click.style("  RPC:      ", dim=True) + chain.rpc_url)
    click.echo(click.style("  Contract: ", dim=True) + settings.counter_address)
    click.echo(click.style("  ABI:      ", dim=True) + str(session.abi_path or "bundled Counter ABI"))

    try:
        signer = click.style(get_address(settings.private_key), fg="bright_white")
    except ValueError:
        signer = click.style("invalid PRIVATE_KEY", fg="yellow")
    click.echo(click.style("  Signer:   ", dim=True) + signer)
    click.echo()

    click.secho("  Node ───────────────────────────────────", fg="cyan")
    click.echo()
    try:
        with session.public_client() as public:
            node_chain_id = public.get_chain_id()
            head = public.get_block_number()
            code = public.get_code(settings.counter_address)
    except Exception as exc:
        click.echo(
            click.style("  Status:   ", dim=True)
            + click.style(f"unreachable ({exc})", fg="red")
        )
        click.echo()
        return

    click.echo(click.style("  Status:   ", dim=True) + click.style("online", fg="green"))
    click.echo(click.style("  Block:    ", dim=True) + str(head))
    if node_chain_id != chain.id:
        click.secho(
            f"  WARNING: node reports chain id {node_chain_id}, configured {chain.id}",
            fg="yellow",
        )
    if code in ("0x", ""):
        click.secho("  WARNING: no contract code at the configured address", fg="yellow")
    else:
        click.echo(click.style("  Code:     ", dim=True) + f"{(len(code) - 2) // 2} bytes")
    click.echo()


# ============ Entry Points ============


def main() -> None:
    """counter-demo CLI entry point."""
    # Ensure UTF-8 output on Windows (for Unicode box-drawing / symbols)
    if sys.platform == "win32":
        try:
            sys.stdout.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
            sys.stderr.reconfigure(encoding="utf-8")  # type: ignore[union-attr]
        except (AttributeError, OSError):
            pass
    cli()


if __name__ == "__main__":
    main()
