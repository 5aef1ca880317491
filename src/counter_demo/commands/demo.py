"""
Demo - Walk through reading and writing the Counter contract.

Flow:
1. Print the current block number and the wallet address
2. Read number() through the contract binding and through read_contract()
3. increment() through the binding, wait for the receipt, re-read
4. setNumber(value) through the binding, wait for the receipt, re-read
5. increment() through WalletClient.write_contract(), wait, final read

Each write runs in its own recovery block so a failed write is reported
and the walk-through moves on to the next one.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field
from typing import Callable, Optional

import click

from ..client.contract import Contract
from ..client.rpc import PublicClient, receipt_status
from ..client.tx import WalletClient
from ..session import Session


@dataclass
class StepResult:
    name: str
    tx_hash: Optional[str] = None
    status: Optional[str] = None
    value: Optional[int] = None
    error: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.error is None and self.status == "success"


@dataclass
class DemoReport:
    block_number: int = 0
    wallet_address: str = ""
    initial_value: Optional[int] = None
    steps: list[StepResult] = field(default_factory=list)

    @property
    def final_value(self) -> Optional[int]:
        for step in reversed(self.steps):
            if step.value is not None:
                return step.value
        return self.initial_value


def _write_step(
    name: str,
    send: Callable[[], str],
    counter: Contract,
    public: PublicClient,
    value_label: str,
    timeout: float,
    poll_interval: float,
) -> StepResult:
    step = StepResult(name=name)
    click.secho(f"--- {name} ---", fg="cyan")
    try:
        step.tx_hash = send()
        click.echo(f"  Transaction hash: {step.tx_hash}")

        receipt = public.wait_for_transaction_receipt(
            step.tx_hash, timeout=timeout, poll_interval=poll_interval
        )
        step.status = receipt_status(receipt)
        click.secho(
            f"  Status: {step.status}",
            fg="green" if step.status == "success" else "red",
        )

        step.value = counter.read.number()
        click.echo(f"  {value_label}: {step.value}")
    except Exception as exc:
        step.error = str(exc)
        click.secho(f"  {name} failed: {exc}", fg="red")
    click.echo("")
    return step


def run_demo(
    public: PublicClient,
    wallet: WalletClient,
    counter: Contract,
    set_value: int = 100,
    timeout: float = 120,
    poll_interval: float = 1.0,
) -> DemoReport:
    """
    Run the full read/write walk-through.

    Reads and client queries propagate their errors; writes are recorded
    in the report instead.
    """
    report = DemoReport()

    click.secho("=== Counter Contract Demo ===", bold=True)
    click.echo("")

    report.block_number = public.get_block_number()
    click.echo(f"Current block number: {report.block_number}")

    report.wallet_address = wallet.get_addresses()[0]
    click.echo(f"Wallet address: {report.wallet_address}")
    click.echo("")

    click.secho("--- Read contract state ---", fg="cyan")
    report.initial_value = counter.read.number()
    click.echo(f"  number via binding: {report.initial_value}")

    by_read_contract = public.read_contract(counter.address, counter.abi, "number")
    click.echo(f"  number via read_contract: {by_read_contract}")
    click.echo("")

    report.steps.append(
        _write_step(
            "increment",
            lambda: counter.write.increment(),
            counter,
            public,
            "number after increment",
            timeout,
            poll_interval,
        )
    )
    report.steps.append(
        _write_step(
            f"setNumber({set_value})",
            lambda: counter.write.setNumber(set_value),
            counter,
            public,
            "number after setNumber",
            timeout,
            poll_interval,
        )
    )
    report.steps.append(
        _write_step(
            "write_contract increment",
            lambda: wallet.write_contract(counter.address, counter.abi, "increment"),
            counter,
            public,
            "final number",
            timeout,
            poll_interval,
        )
    )

    click.secho("=== Demo complete ===", bold=True)
    return report


@click.command()
@click.option(
    "--set-value",
    default=100,
    show_default=True,
    type=click.IntRange(min=0),
    help="Value passed to setNumber()",
)
@click.pass_obj
def demo(obj: dict, set_value: int) -> None:
    """
    Walk through reading and writing the Counter contract.

    Reads number(), then sends increment(), setNumber() and a second
    increment(), waiting for each receipt and re-reading the value.
    """
    session: Session = obj["session"]

    try:
        with session.public_client() as public, session.wallet_client() as wallet:
            counter = session.counter(public=public, wallet=wallet)
            run_demo(
                public,
                wallet,
                counter,
                set_value=set_value,
                timeout=session.receipt_timeout,
                poll_interval=session.poll_interval,
            )
    except Exception as exc:
        click.secho(f"Demo failed: {exc}", fg="red")
        sys.exit(1)
