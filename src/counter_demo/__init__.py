__all__ = [
    # Chains
    "Chain",
    "FOUNDRY",
    "get_chain",
    # Config
    "Settings",
    "load_settings",
    # Accounts
    "get_account",
    "get_address",
    # Clients
    "PublicClient",
    "WalletClient",
    "RpcError",
    "receipt_status",
    # Contracts
    "Contract",
    "ContractError",
    "get_contract",
    "counter_abi",
    "load_abi",
    "load_bytecode",
    # Demo
    "DemoReport",
    "run_demo",
]

from .account import get_account, get_address
from .chains import FOUNDRY, Chain, get_chain
from .client.abi import counter_abi, load_abi, load_bytecode
from .client.contract import Contract, ContractError, get_contract
from .client.rpc import PublicClient, RpcError, receipt_status
from .client.tx import WalletClient
from .commands.demo import DemoReport, run_demo
from .config import Settings, load_settings
