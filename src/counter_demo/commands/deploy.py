"""
Deploy - Deploy a contract from a Foundry build artifact.

Typically used to put a fresh Counter on a local Anvil node:

    forge build
    counter-demo deploy --artifact out/Counter.sol/Counter.json --save
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from ..client.abi import load_abi, load_bytecode
from ..client.rpc import receipt_status
from ..config import save_setting
from ..session import Session


@click.command()
@click.option(
    "--artifact",
    "artifact_path",
    required=True,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Foundry artifact JSON (out/<Name>.sol/<Name>.json)",
)
@click.option("--args", "args_json", default="[]", help="Constructor args as JSON array")
@click.option("--gas-limit", default=None, type=int, help="Gas limit (default: estimate)")
@click.option("--save", is_flag=True, help="Store the new address as COUNTER_ADDRESS in ~/.counter-demo/.env")
@click.pass_obj
def deploy(obj: dict, artifact_path: Path, args_json: str, gas_limit: int | None, save: bool) -> None:
    """Deploy a contract and print its address."""
    session: Session = obj["session"]

    try:
        args = json.loads(args_json)
        if not isinstance(args, list):
            raise ValueError("Args must be a JSON array")
    except (json.JSONDecodeError, ValueError) as exc:
        click.secho(f"ERROR: Invalid args: {exc}", fg="red")
        sys.exit(1)

    try:
        abi = load_abi(artifact_path)
        bytecode = load_bytecode(artifact_path)
    except (ValueError, FileNotFoundError) as exc:
        click.secho(f"ERROR: {exc}", fg="red")
        sys.exit(1)

    click.echo(f"=== Deploy {artifact_path.stem} ===")
    click.echo("")

    try:
        with session.wallet_client() as wallet:
            click.echo(f"  Deployer: {wallet.address}")
            tx_hash = wallet.deploy_contract(bytecode, abi=abi, constructor_args=args, gas=gas_limit)
            click.echo(f"  TX: {tx_hash}")

            receipt = wallet.wait_for_transaction_receipt(
                tx_hash,
                timeout=session.receipt_timeout,
                poll_interval=session.poll_interval,
            )
    except Exception as exc:
        click.secho(f"Deployment failed: {exc}", fg="red")
        sys.exit(1)

    contract_address = receipt.get("contractAddress")
    if receipt_status(receipt) != "success" or not contract_address:
        click.secho("FAILED: Deployment reverted", fg="red")
        sys.exit(1)

    click.secho("SUCCESS: Contract deployed!", fg="green")
    click.echo(f"  Address: {contract_address}")

    if save:
        env_path = save_setting("COUNTER_ADDRESS", contract_address)
        click.echo(f"  Saved COUNTER_ADDRESS to {env_path}")
