"""
Counter commands - single reads and writes against the Counter contract.
"""

from __future__ import annotations

import sys
from typing import Callable

import click

from ..client.contract import Contract
from ..client.rpc import receipt_status
from ..session import Session


@click.command()
@click.pass_obj
def read(obj: dict) -> None:
    """Print the current number() value."""
    session: Session = obj["session"]

    try:
        with session.public_client() as public:
            value = session.counter(public=public).read.number()
    except Exception as exc:
        click.secho(f"ERROR: Failed to read number(): {exc}", fg="red")
        sys.exit(1)

    click.echo(f"number: {value}")


def _send_and_report(
    session: Session,
    label: str,
    send: Callable[[Contract], str],
    wait: bool,
) -> None:
    click.echo(f"=== {label} ===")
    click.echo("")

    try:
        with session.public_client() as public, session.wallet_client() as wallet:
            counter = session.counter(public=public, wallet=wallet)
            click.echo(f"  Sender:   {wallet.address}")
            click.echo(f"  Contract: {counter.address}")
            click.echo("")

            tx_hash = send(counter)
            click.echo(f"  TX: {tx_hash}")
            if not wait:
                return

            receipt = public.wait_for_transaction_receipt(
                tx_hash,
                timeout=session.receipt_timeout,
                poll_interval=session.poll_interval,
            )
            if receipt_status(receipt) != "success":
                click.secho("FAILED: Transaction reverted", fg="red")
                sys.exit(1)

            click.secho("SUCCESS: Transaction confirmed!", fg="green")
            click.echo(f"  number: {counter.read.number()}")

    except Exception as exc:
        click.secho(f"Transaction failed: {exc}", fg="red")
        sys.exit(1)


@click.command()
@click.option("--no-wait", is_flag=True, help="Return after submitting, without waiting for the receipt")
@click.pass_obj
def increment(obj: dict, no_wait: bool) -> None:
    """Send increment() and show the new value."""
    _send_and_report(
        obj["session"],
        "increment",
        lambda counter: counter.write.increment(),
        wait=not no_wait,
    )


@click.command("set-number")
@click.argument("value", type=click.IntRange(min=0))
@click.option("--no-wait", is_flag=True, help="Return after submitting, without waiting for the receipt")
@click.pass_obj
def set_number(obj: dict, value: int, no_wait: bool) -> None:
    """Send setNumber(VALUE) and show the new value."""
    _send_and_report(
        obj["session"],
        f"setNumber({value})",
        lambda counter: counter.write.setNumber(value),
        wait=not no_wait,
    )
