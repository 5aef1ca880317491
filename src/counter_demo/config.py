"""
Configuration for counter-demo.

Values come from the process environment, then from an optional
~/.counter-demo/.env file, then from the local Anvil defaults below.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import dotenv_values, set_key

from .chains import FOUNDRY

# Default config directory
COUNTER_DEMO_DIR = Path.home() / ".counter-demo"
COUNTER_DEMO_ENV = COUNTER_DEMO_DIR / ".env"

# ---- Local Anvil defaults ----
# The counter address is where the first deployment from Anvil's first
# account lands; the key is that account's published development key.
DEFAULT_RPC_URL = FOUNDRY.rpc_url
DEFAULT_CHAIN_ID = FOUNDRY.id
DEFAULT_COUNTER_ADDRESS = "0x5fbdb2315678afecb367f032d93f642f64180aa3"
DEFAULT_PRIVATE_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"

_DEFAULTS: dict[str, str] = {
    "RPC_URL": DEFAULT_RPC_URL,
    "CHAIN_ID": str(DEFAULT_CHAIN_ID),
    "COUNTER_ADDRESS": DEFAULT_COUNTER_ADDRESS,
    "PRIVATE_KEY": DEFAULT_PRIVATE_KEY,
}


@dataclass(frozen=True)
class Settings:
    rpc_url: str
    chain_id: int
    counter_address: str
    private_key: str


def _read_env_file(env_path: Path) -> dict[str, str]:
    if not env_path.exists():
        return {}
    return {k: v for k, v in dotenv_values(env_path).items() if v is not None}


def get_setting(key: str, env_path: Optional[Path] = None) -> str:
    """Resolve one setting: environment > .env file > built-in default."""
    value = os.environ.get(key)
    if value:
        return value
    value = _read_env_file(env_path or COUNTER_DEMO_ENV).get(key)
    if value:
        return value
    try:
        return _DEFAULTS[key]
    except KeyError:
        raise KeyError(f"Unknown setting: {key}") from None


def load_settings(env_path: Optional[Path] = None) -> Settings:
    """
    Load all settings.

    Args:
        env_path: Path to .env file (default: ~/.counter-demo/.env)

    Raises:
        ValueError: If CHAIN_ID is not an integer
    """
    env_path = env_path or COUNTER_DEMO_ENV
    file_values = _read_env_file(env_path)

    def pick(key: str) -> str:
        return os.environ.get(key) or file_values.get(key) or _DEFAULTS[key]

    raw_chain_id = pick("CHAIN_ID")
    try:
        chain_id = int(raw_chain_id, 0)
    except ValueError:
        raise ValueError(f"CHAIN_ID must be an integer, got {raw_chain_id!r}") from None

    return Settings(
        rpc_url=pick("RPC_URL"),
        chain_id=chain_id,
        counter_address=pick("COUNTER_ADDRESS"),
        private_key=pick("PRIVATE_KEY"),
    )


def save_setting(key: str, value: str, env_path: Optional[Path] = None) -> Path:
    """
    Save a single key=value to the .env file, preserving other entries.

    Also sets it in the current process environment so later reads see it.

    Returns:
        Path to the .env file
    """
    env_path = env_path or COUNTER_DEMO_ENV
    env_path.parent.mkdir(parents=True, exist_ok=True)
    env_path.touch(exist_ok=True)
    set_key(str(env_path), key, value, quote_mode="never")

    # The file may hold PRIVATE_KEY
    if os.name != "nt":
        env_path.chmod(0o600)

    os.environ[key] = value
    return env_path
