from __future__ import annotations

from eth_hash.auto import keccak


def keccak256(data: bytes) -> bytes:
    # Keccak-256, not NIST SHA3-256. Never use hashlib.sha3_256 here.
    return keccak(data)


def add_0x(value: str) -> str:
    return value if value.startswith(("0x", "0X")) else "0x" + value


def strip_0x(value: str) -> str:
    return value[2:] if value.startswith(("0x", "0X")) else value


def hex_to_bytes(value: str) -> bytes:
    return bytes.fromhex(strip_0x(value))


def hex_to_int(value: str | None) -> int:
    if value is None or value in ("0x", ""):
        return 0
    return int(value, 16)


def int_to_hex(value: int) -> str:
    if value < 0:
        raise ValueError(f"Quantity must be non-negative: {value}")
    return hex(value)


def is_address(value: str) -> bool:
    body = strip_0x(value)
    if len(body) != 40 or not value.startswith("0x"):
        return False
    try:
        int(body, 16)
    except ValueError:
        return False
    return True


def to_checksum_address(address: str) -> str:
    """Convert an address to EIP-55 checksummed format.

    eth-account requires checksummed addresses in transaction fields.
    """
    if not is_address(address):
        raise ValueError(f"Invalid address: {address!r}")
    addr = strip_0x(address).lower()
    addr_hash = keccak256(addr.encode("ascii")).hex()
    result = "0x"
    for i, c in enumerate(addr):
        if c in "abcdef":
            result += c.upper() if int(addr_hash[i], 16) >= 8 else c
        else:
            result += c
    return result
