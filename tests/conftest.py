"""
Shared fixtures: an in-memory EVM node that emulates the Counter contract.

The node speaks JSON-RPC through httpx.MockTransport, so the real clients
run end to end without a network. Signed raw transactions are decoded with
rlp and the sender is recovered with eth-account.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any, Optional

import httpx
import pytest
import rlp
from eth_abi import decode, encode
from eth_account import Account
from eth_hash.auto import keccak

from counter_demo.account import get_account
from counter_demo.client.abi import counter_abi
from counter_demo.client.contract import Contract, get_contract
from counter_demo.client.rpc import PublicClient
from counter_demo.client.tx import WalletClient
from counter_demo.config import DEFAULT_COUNTER_ADDRESS, DEFAULT_PRIVATE_KEY

NUMBER = keccak(b"number()")[:4]
INCREMENT = keccak(b"increment()")[:4]
SET_NUMBER = keccak(b"setNumber(uint256)")[:4]

ANVIL_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"


class FakeRpcError(Exception):
    def __init__(self, code: int, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


class FakeNode:
    """Just enough of an Anvil node to run the Counter contract."""

    def __init__(self, chain_id: int = 31337, counter_address: str = DEFAULT_COUNTER_ADDRESS) -> None:
        self.chain_id = chain_id
        self.counter_address = counter_address.lower()
        self.number = 0
        self.block = 1
        self.gas_price = 1_000_000_000
        self.estimate = 30_000
        self.nonces: dict[str, int] = {}
        self.receipts: dict[str, dict] = {}
        self.sent: list[dict[str, Any]] = []
        self.methods: list[str] = []
        # Receipt lookups that return None before the receipt shows up
        self.pending_polls = 0
        self._countdown: dict[str, int] = {}
        # Selectors whose transactions are mined with status 0
        self.revert_selectors: set[bytes] = set()
        # Selectors rejected at submission with a JSON-RPC error
        self.reject_selectors: set[bytes] = set()

    @property
    def transport(self) -> httpx.MockTransport:
        return httpx.MockTransport(self.handle)

    def handle(self, request: httpx.Request) -> httpx.Response:
        payload = json.loads(request.content)
        method = payload["method"]
        self.methods.append(method)

        handler = getattr(self, f"_{method}", None)
        try:
            if handler is None:
                raise FakeRpcError(-32601, f"Method not found: {method}")
            result = handler(*payload.get("params", []))
        except FakeRpcError as exc:
            body = {
                "jsonrpc": "2.0",
                "id": payload["id"],
                "error": {"code": exc.code, "message": exc.message},
            }
        else:
            body = {"jsonrpc": "2.0", "id": payload["id"], "result": result}
        return httpx.Response(200, json=body)

    # ---- chain state ----

    def _eth_blockNumber(self) -> str:
        return hex(self.block)

    def _eth_chainId(self) -> str:
        return hex(self.chain_id)

    def _eth_gasPrice(self) -> str:
        return hex(self.gas_price)

    def _eth_getBalance(self, address: str, block: str) -> str:
        return hex(10_000 * 10**18)

    def _eth_getTransactionCount(self, address: str, block: str) -> str:
        return hex(self.nonces.get(address.lower(), 0))

    def _eth_estimateGas(self, tx: dict) -> str:
        return hex(self.estimate)

    def _eth_getCode(self, address: str, block: str) -> str:
        return "0x6080604052" if address.lower() == self.counter_address else "0x"

    def _eth_call(self, call: dict, block: str) -> str:
        if call["to"].lower() != self.counter_address:
            return "0x"
        data = bytes.fromhex(call["data"][2:])
        if data[:4] == NUMBER:
            return "0x" + encode(["uint256"], [self.number]).hex()
        return "0x"

    # ---- transactions ----

    def _eth_sendRawTransaction(self, raw_tx: str) -> str:
        raw = bytes.fromhex(raw_tx[2:])
        nonce, gas_price, gas, to, value, data = rlp.decode(raw)[:6]
        sender = Account.recover_transaction(raw_tx).lower()
        selector = data[:4]

        expected = self.nonces.get(sender, 0)
        if int.from_bytes(nonce, "big") != expected:
            raise FakeRpcError(-32003, "nonce too low")
        if selector in self.reject_selectors:
            raise FakeRpcError(3, "execution reverted")

        self.nonces[sender] = expected + 1
        tx_hash = "0x" + keccak(raw).hex()
        self.sent.append(
            {
                "hash": tx_hash,
                "from": sender,
                "to": "0x" + to.hex() if to else None,
                "data": data,
                "gas": int.from_bytes(gas, "big"),
                "gasPrice": int.from_bytes(gas_price, "big"),
            }
        )

        status = 1
        contract_address: Optional[str] = None
        if not to:
            contract_address = "0x" + keccak(raw)[-20:].hex()
        elif "0x" + to.hex() == self.counter_address:
            if selector in self.revert_selectors:
                status = 0
            elif selector == INCREMENT:
                self.number += 1
            elif selector == SET_NUMBER:
                (self.number,) = decode(["uint256"], data[4:])

        self.block += 1
        self.receipts[tx_hash] = {
            "transactionHash": tx_hash,
            "blockNumber": hex(self.block),
            "from": sender,
            "to": "0x" + to.hex() if to else None,
            "contractAddress": contract_address,
            "gasUsed": hex(self.estimate),
            "logs": [],
            "status": hex(status),
        }
        self._countdown[tx_hash] = self.pending_polls
        return tx_hash

    def _eth_getTransactionReceipt(self, tx_hash: str) -> Optional[dict]:
        if self._countdown.get(tx_hash, 0) > 0:
            self._countdown[tx_hash] -= 1
            return None
        return self.receipts.get(tx_hash)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Keep the user's environment and ~/.counter-demo/.env out of tests."""
    for key in ("RPC_URL", "CHAIN_ID", "COUNTER_ADDRESS", "PRIVATE_KEY"):
        monkeypatch.delenv(key, raising=False)
    env_path = tmp_path / ".counter-demo" / ".env"
    monkeypatch.setattr("counter_demo.config.COUNTER_DEMO_ENV", env_path)
    return env_path


@pytest.fixture()
def node() -> FakeNode:
    return FakeNode()


@pytest.fixture()
def public(node: FakeNode) -> PublicClient:
    client = PublicClient(transport=node.transport)
    yield client
    client.close()


@pytest.fixture()
def wallet(node: FakeNode) -> WalletClient:
    client = WalletClient(get_account(DEFAULT_PRIVATE_KEY), transport=node.transport)
    yield client
    client.close()


@pytest.fixture()
def counter(public: PublicClient, wallet: WalletClient) -> Contract:
    return get_contract(DEFAULT_COUNTER_ADDRESS, counter_abi(), public=public, wallet=wallet)
