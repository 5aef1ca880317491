"""
Contract binding.

Associates an address and ABI with a public and/or wallet client:

    counter = get_contract(address, abi, public=public, wallet=wallet)
    counter.read.number()
    tx_hash = counter.write.setNumber(100)
"""

from __future__ import annotations

from typing import Any, Callable, Optional

from .abi import find_function, function_names, is_read_only
from .rpc import ContractError, PublicClient
from .tx import WalletClient

__all__ = ["Contract", "ContractError", "get_contract"]


class _Namespace:
    """Attribute access that turns ABI function names into callables."""

    def __init__(
        self,
        contract: "Contract",
        factory: Callable[[str], Callable[..., Any]],
        read_only: bool = False,
    ) -> None:
        self._contract = contract
        self._factory = factory
        self._read_only = read_only

    def __getattr__(self, name: str) -> Callable[..., Any]:
        if name.startswith("_"):
            raise AttributeError(name)
        try:
            entry = find_function(self._contract.abi, name)
        except ValueError:
            raise AttributeError(
                f"Contract at {self._contract.address} has no function {name!r}"
            ) from None
        if self._read_only and not is_read_only(entry):
            raise AttributeError(f"{name!r} is not a view function; use contract.write.{name}()")
        return self._factory(name)

    def __dir__(self) -> list[str]:
        names = function_names(self._contract.abi)
        if self._read_only:
            names = [n for n in names if is_read_only(find_function(self._contract.abi, n))]
        return names


class Contract:
    def __init__(
        self,
        address: str,
        abi: list,
        public: Optional[PublicClient] = None,
        wallet: Optional[WalletClient] = None,
    ) -> None:
        self.address = address
        self.abi = abi
        self.public = public
        self.wallet = wallet
        self.read = _Namespace(self, self._reader, read_only=True)
        self.write = _Namespace(self, self._writer)

    def __repr__(self) -> str:
        return f"Contract(address={self.address!r})"

    def functions(self) -> list[str]:
        return function_names(self.abi)

    def _reader(self, function_name: str) -> Callable[..., Any]:
        client = self.public or self.wallet
        if client is None:
            raise ContractError("No public client bound; cannot read")

        def call(*args: Any) -> Any:
            return client.read_contract(self.address, self.abi, function_name, list(args))

        call.__name__ = function_name
        return call

    def _writer(self, function_name: str) -> Callable[..., str]:
        wallet = self.wallet
        if wallet is None:
            raise ContractError("No wallet client bound; cannot write")

        def send(*args: Any, value: int = 0, gas: Optional[int] = None) -> str:
            return wallet.write_contract(
                self.address, self.abi, function_name, list(args), value=value, gas=gas
            )

        send.__name__ = function_name
        return send


def get_contract(
    address: str,
    abi: list,
    public: Optional[PublicClient] = None,
    wallet: Optional[WalletClient] = None,
) -> Contract:
    """Bind ``address`` + ``abi`` to the given clients."""
    return Contract(address, abi, public=public, wallet=wallet)
