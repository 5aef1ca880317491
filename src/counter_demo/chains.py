"""
Chain definitions.

Only the local Foundry/Anvil network ships by default; any other chain id
resolves to a bare definition so the tools still work against it.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Chain:
    id: int
    name: str
    rpc_url: str
    native_currency: str = "ETH"


FOUNDRY = Chain(id=31337, name="Foundry", rpc_url="http://127.0.0.1:8545")

_KNOWN: dict[int, Chain] = {FOUNDRY.id: FOUNDRY}


def get_chain(chain_id: int, rpc_url: str | None = None) -> Chain:
    """Return the chain for ``chain_id``, with ``rpc_url`` overriding its default."""
    chain = _KNOWN.get(chain_id)
    if chain is None:
        chain = Chain(id=chain_id, name=f"chain-{chain_id}", rpc_url=rpc_url or FOUNDRY.rpc_url)
    if rpc_url and rpc_url != chain.rpc_url:
        chain = Chain(
            id=chain.id,
            name=chain.name,
            rpc_url=rpc_url,
            native_currency=chain.native_currency,
        )
    return chain
