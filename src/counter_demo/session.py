"""
Session - resolved settings plus factories for clients and the Counter binding.

Built once by the CLI group and shared by every command through the click
context object.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Optional

import httpx

from .account import get_account
from .chains import Chain, get_chain
from .client.abi import counter_abi, load_abi
from .client.contract import Contract, get_contract
from .client.rpc import PublicClient
from .client.tx import WalletClient
from .config import Settings


@dataclass
class Session:
    settings: Settings
    abi_path: Optional[Path] = None
    rpc_timeout: float = 30.0
    receipt_timeout: float = 120.0
    poll_interval: float = 1.0
    transport: Optional[httpx.BaseTransport] = None

    @property
    def chain(self) -> Chain:
        return get_chain(self.settings.chain_id, self.settings.rpc_url)

    def with_overrides(self, **changes: object) -> "Session":
        """Return a copy with Settings fields replaced (None values ignored)."""
        changes = {k: v for k, v in changes.items() if v is not None}
        if not changes:
            return self
        return replace(self, settings=replace(self.settings, **changes))

    def abi(self) -> list:
        if self.abi_path is not None:
            return load_abi(self.abi_path)
        return counter_abi()

    def public_client(self) -> PublicClient:
        return PublicClient(
            chain=self.chain,
            timeout=self.rpc_timeout,
            transport=self.transport,
        )

    def wallet_client(self) -> WalletClient:
        return WalletClient(
            get_account(self.settings.private_key),
            chain=self.chain,
            timeout=self.rpc_timeout,
            transport=self.transport,
        )

    def counter(
        self,
        public: Optional[PublicClient] = None,
        wallet: Optional[WalletClient] = None,
    ) -> Contract:
        return get_contract(self.settings.counter_address, self.abi(), public=public, wallet=wallet)
