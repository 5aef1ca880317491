"""
JSON-RPC public client.

Lightweight alternative to web3.py: uses httpx for HTTP + eth-abi for encoding.
Supports block/account queries, read-only contract calls, and transaction
receipt polling.
"""

from __future__ import annotations

import itertools
import time
from typing import Any, Optional

import httpx

from ..chains import FOUNDRY, Chain
from ..utils import hex_to_int, int_to_hex
from .abi import decode_function_result, encode_function_call


class RpcError(RuntimeError):
    """A JSON-RPC error object returned by the node."""

    def __init__(self, code: int, message: str, data: Any = None) -> None:
        self.code = code
        self.message = message
        self.data = data
        detail = f"RPC error {code}: {message}"
        if data:
            detail += f" ({data})"
        super().__init__(detail)


class ContractError(RuntimeError):
    """Raised for contract calls that cannot be made or return nothing."""


class PublicClient:
    """
    Read-side client bound to one JSON-RPC endpoint.

    Construction does no I/O; the first request opens the connection.
    """

    def __init__(
        self,
        chain: Chain = FOUNDRY,
        rpc_url: Optional[str] = None,
        timeout: float = 30.0,
        transport: Optional[httpx.BaseTransport] = None,
    ) -> None:
        self.chain = chain
        self.rpc_url = rpc_url or chain.rpc_url
        self._http = httpx.Client(timeout=timeout, transport=transport)
        self._ids = itertools.count(1)

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> "PublicClient":
        return self

    def __exit__(self, *exc: object) -> None:
        self.close()

    def __repr__(self) -> str:
        return f"{type(self).__name__}(chain={self.chain.name!r}, rpc_url={self.rpc_url!r})"

    # ------------------------------------------------------------------
    # Transport
    # ------------------------------------------------------------------

    def request(self, method: str, params: Optional[list] = None) -> Any:
        """
        Make a JSON-RPC call.

        Args:
            method: RPC method name (e.g., "eth_call")
            params: RPC parameters

        Returns:
            Result field from the RPC response

        Raises:
            httpx.HTTPError: On transport failures or non-2xx responses
            RpcError: If the node returns an error object
        """
        payload = {
            "jsonrpc": "2.0",
            "method": method,
            "params": params or [],
            "id": next(self._ids),
        }

        response = self._http.post(self.rpc_url, json=payload)
        response.raise_for_status()
        data = response.json()

        error = data.get("error")
        if error:
            if not isinstance(error, dict):
                raise RpcError(-32603, str(error))
            raise RpcError(
                int(error.get("code", -32603)),
                str(error.get("message", "unknown error")),
                error.get("data"),
            )

        return data.get("result")

    # ------------------------------------------------------------------
    # Chain and account state
    # ------------------------------------------------------------------

    def get_block_number(self) -> int:
        return hex_to_int(self.request("eth_blockNumber"))

    def get_chain_id(self) -> int:
        return hex_to_int(self.request("eth_chainId"))

    def get_balance(self, address: str, block: str = "latest") -> int:
        """Balance of ``address`` in wei."""
        return hex_to_int(self.request("eth_getBalance", [address, block]))

    def get_transaction_count(self, address: str, block: str = "pending") -> int:
        """Nonce for the next transaction from ``address``."""
        return hex_to_int(self.request("eth_getTransactionCount", [address, block]))

    def get_gas_price(self) -> int:
        return hex_to_int(self.request("eth_gasPrice"))

    def get_code(self, address: str, block: str = "latest") -> str:
        return self.request("eth_getCode", [address, block]) or "0x"

    def estimate_gas(self, tx: dict[str, Any]) -> int:
        """Estimate gas for a transaction dict (integer fields are hex-encoded)."""
        params = {
            k: int_to_hex(v) if isinstance(v, int) else v
            for k, v in tx.items()
            if v is not None and k in ("from", "to", "data", "value", "gas", "gasPrice")
        }
        return hex_to_int(self.request("eth_estimateGas", [params]))

    # ------------------------------------------------------------------
    # Contract reads
    # ------------------------------------------------------------------

    def call(self, to: str, data: str, from_: Optional[str] = None, block: str = "latest") -> str:
        """Execute ``eth_call`` and return the raw hex result."""
        call_obj: dict[str, str] = {"to": to, "data": data}
        if from_ is not None:
            call_obj["from"] = from_
        return self.request("eth_call", [call_obj, block]) or "0x"

    def read_contract(
        self,
        address: str,
        abi: list,
        function_name: str,
        args: Optional[list] = None,
    ) -> Any:
        """
        Read from a smart contract (eth_call).

        Args:
            address: 0x-prefixed contract address
            abi: Contract ABI
            function_name: Function to call
            args: Function arguments (default: [])

        Returns:
            Decoded return value(s)

        Raises:
            ContractError: If the call returned no data (no contract at address)
        """
        calldata = encode_function_call(abi, function_name, args or [])
        result = self.call(address, calldata)

        if result == "0x":
            raise ContractError(
                f"{function_name}() returned no data. "
                f"Is a contract deployed at {address}?"
            )

        return decode_function_result(abi, function_name, result)

    # ------------------------------------------------------------------
    # Receipts
    # ------------------------------------------------------------------

    def get_transaction_receipt(self, tx_hash: str) -> Optional[dict]:
        return self.request("eth_getTransactionReceipt", [tx_hash])

    def wait_for_transaction_receipt(
        self,
        tx_hash: str,
        timeout: float = 120,
        poll_interval: float = 1.0,
    ) -> dict:
        """
        Wait for a transaction receipt.

        Args:
            tx_hash: Transaction hash
            timeout: Maximum wait time in seconds
            poll_interval: Polling interval in seconds

        Returns:
            Transaction receipt dict

        Raises:
            TimeoutError: If receipt not found within timeout
        """
        deadline = time.monotonic() + timeout
        while True:
            receipt = self.get_transaction_receipt(tx_hash)
            if receipt is not None:
                return receipt
            if time.monotonic() >= deadline:
                break
            time.sleep(poll_interval)

        raise TimeoutError(f"Transaction {tx_hash} not confirmed within {timeout}s")


def receipt_status(receipt: dict) -> str:
    """Return "success" for status 0x1, "reverted" otherwise."""
    status = receipt.get("status")
    if not isinstance(status, int):
        status = hex_to_int(status)
    return "success" if status == 1 else "reverted"
