"""
Wallet client - Build, sign, and send Ethereum transactions.

Uses eth-account for signing and the httpx-based public client for
nonce, gas and submission. All gas is paid by the local account.
"""

from __future__ import annotations

from typing import Any, Optional

import httpx
from eth_account.signers.local import LocalAccount

from ..chains import FOUNDRY, Chain
from ..utils import add_0x, to_checksum_address
from .abi import encode_constructor_args, encode_function_call
from .rpc import PublicClient

# Headroom added on top of eth_estimateGas, in percent.
GAS_MARGIN_PERCENT = 20


class WalletClient(PublicClient):
    """
    Write-side client: a public client that can also sign.

    Transactions are legacy (gasPrice) transactions with EIP-155 replay
    protection, which every dev node accepts.
    """

    def __init__(
        self,
        account: LocalAccount,
        chain: Chain = FOUNDRY,
        rpc_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        super().__init__(chain=chain, rpc_url=rpc_url, timeout=timeout, transport=transport)
        self.account = account

    @property
    def address(self) -> str:
        return self.account.address

    def get_addresses(self) -> list[str]:
        """Addresses this client signs for (the local account only)."""
        return [self.account.address]

    def build_transaction(
        self,
        to: Optional[str],
        data: str,
        value: int = 0,
        gas: Optional[int] = None,
    ) -> dict[str, Any]:
        """
        Build an unsigned transaction.

        Args:
            to: 0x-prefixed recipient, or None for contract creation
            data: 0x-prefixed calldata (or init code)
            value: ETH value in wei
            gas: Gas limit (default: estimate + margin)

        Returns:
            Unsigned transaction dict
        """
        tx: dict[str, Any] = {
            "data": data,
            "value": value,
            "nonce": self.get_transaction_count(self.address),
            "gasPrice": self.get_gas_price(),
            "chainId": self.chain.id,
        }
        if to is not None:
            tx["to"] = to_checksum_address(to)

        if gas is None:
            estimated = self.estimate_gas({"from": self.address, **tx, "gasPrice": None})
            gas = estimated + estimated * GAS_MARGIN_PERCENT // 100
        tx["gas"] = gas

        return tx

    def send_transaction(self, tx: dict[str, Any]) -> str:
        """
        Sign a transaction and send it.

        Returns:
            Transaction hash (0x-prefixed hex)
        """
        signed = self.account.sign_transaction(tx)
        raw_tx = add_0x(signed.raw_transaction.hex())
        return self.request("eth_sendRawTransaction", [raw_tx])

    def write_contract(
        self,
        address: str,
        abi: list,
        function_name: str,
        args: Optional[list] = None,
        value: int = 0,
        gas: Optional[int] = None,
    ) -> str:
        """
        Build, sign, and send a contract call transaction.

        Does not wait for inclusion; pair with wait_for_transaction_receipt().

        Returns:
            Transaction hash
        """
        calldata = encode_function_call(abi, function_name, args or [])
        tx = self.build_transaction(address, calldata, value=value, gas=gas)
        return self.send_transaction(tx)

    def deploy_contract(
        self,
        bytecode: str,
        abi: Optional[list] = None,
        constructor_args: Optional[list] = None,
        gas: Optional[int] = None,
    ) -> str:
        """
        Send a contract creation transaction.

        The deployed address is in the receipt's ``contractAddress``.

        Returns:
            Transaction hash
        """
        deploy_data = add_0x(bytecode)
        if constructor_args:
            if abi is None:
                raise ValueError("abi is required when constructor_args are given")
            deploy_data += encode_constructor_args(abi, constructor_args).hex()

        tx = self.build_transaction(None, deploy_data, gas=gas)
        return self.send_transaction(tx)
