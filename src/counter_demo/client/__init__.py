"""
Client - On-chain interaction layer for counter-demo.

Provides a JSON-RPC public client, a signing wallet client, ABI handling
and contract bindings for EVM chains.

Uses httpx + eth-account + eth-abi instead of the heavyweight web3.py.
"""

from .abi import counter_abi, load_abi, load_bytecode
from .contract import Contract, ContractError, get_contract
from .rpc import PublicClient, RpcError, receipt_status
from .tx import WalletClient

__all__ = [
    "Contract",
    "ContractError",
    "PublicClient",
    "RpcError",
    "WalletClient",
    "counter_abi",
    "get_contract",
    "load_abi",
    "load_bytecode",
    "receipt_status",
]
