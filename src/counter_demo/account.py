"""
ECDSA / secp256k1 account handling.

The signing key comes from PRIVATE_KEY (environment or ~/.counter-demo/.env)
and falls back to Anvil's first development account.
"""

from __future__ import annotations

from typing import Optional

from eth_account import Account
from eth_account.signers.local import LocalAccount

from .config import get_setting
from .utils import add_0x, strip_0x


def normalize_private_key(private_key: str) -> str:
    """
    Return ``private_key`` as 0x-prefixed lowercase hex.

    Raises:
        ValueError: If the key is not 32 bytes of hex
    """
    body = strip_0x(private_key.strip())
    if len(body) != 64:
        raise ValueError("Private key must be 32 bytes (64 hex characters)")
    try:
        bytes.fromhex(body)
    except ValueError:
        raise ValueError("Private key is not valid hex") from None
    return add_0x(body.lower())


def load_private_key() -> str:
    """Load the configured private key (0x-prefixed)."""
    return normalize_private_key(get_setting("PRIVATE_KEY"))


def get_account(private_key: Optional[str] = None) -> LocalAccount:
    """
    Get an eth-account LocalAccount from a private key.

    Args:
        private_key: 0x-prefixed hex private key.
                     If None, loads the configured key.
    """
    if private_key is None:
        private_key = load_private_key()
    return Account.from_key(normalize_private_key(private_key))


def get_address(private_key: Optional[str] = None) -> str:
    """Checksummed address for ``private_key`` (or the configured key)."""
    return get_account(private_key).address
