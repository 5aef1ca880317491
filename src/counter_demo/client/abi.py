"""
ABI Loader and codec.

Loads contract ABIs either as bare JSON lists or from Foundry build
artifacts (out/<Name>.sol/<Name>.json), and encodes/decodes function
calls with eth-abi.
"""

from __future__ import annotations

import copy
import json
from functools import lru_cache
from pathlib import Path
from typing import Any, Union

from eth_abi import decode, encode

from ..utils import hex_to_bytes, keccak256

_BUNDLED_DIR = Path(__file__).resolve().parent / "abis"

PathLike = Union[str, Path]


def _read_json(path: PathLike) -> Any:
    json_path = Path(path).expanduser()
    if not json_path.exists():
        raise FileNotFoundError(f"ABI file not found: {json_path}")
    with json_path.open("r", encoding="utf-8") as f:
        return json.load(f)


def load_abi(path: PathLike) -> list[dict[str, Any]]:
    """
    Load an ABI from a JSON file.

    Accepts either a bare ABI list or a Foundry artifact with an "abi" key.

    Raises:
        FileNotFoundError: If the file does not exist
        ValueError: If the JSON holds neither form
    """
    data = _read_json(path)
    if isinstance(data, dict):
        data = data.get("abi")
    if not isinstance(data, list) or not all(isinstance(e, dict) for e in data):
        raise ValueError(f"{path} does not contain an ABI list")
    return data


def load_bytecode(path: PathLike) -> str:
    """
    Load deployment bytecode from a Foundry artifact.

    Returns:
        Hex-encoded bytecode string (0x-prefixed)
    """
    artifact = _read_json(path)
    bytecode = ""
    if isinstance(artifact, dict):
        raw = artifact.get("bytecode", "")
        bytecode = raw.get("object", "") if isinstance(raw, dict) else raw
    if not bytecode or bytecode == "0x":
        raise ValueError(f"No bytecode in artifact {path}")
    if not bytecode.startswith("0x"):
        bytecode = "0x" + bytecode
    return bytecode


@lru_cache(maxsize=1)
def _bundled_counter_abi() -> list[dict[str, Any]]:
    return load_abi(_BUNDLED_DIR / "counter-abi.json")


def counter_abi() -> list[dict[str, Any]]:
    """Load the bundled Counter ABI."""
    return copy.deepcopy(_bundled_counter_abi())


def find_function(abi: list[dict[str, Any]], function_name: str) -> dict[str, Any]:
    """Return the ABI entry for ``function_name``."""
    for entry in abi:
        if entry.get("type", "function") == "function" and entry.get("name") == function_name:
            return entry
    raise ValueError(f"Function {function_name} not found in ABI")


def function_names(abi: list[dict[str, Any]]) -> list[str]:
    return [e["name"] for e in abi if e.get("type", "function") == "function" and "name" in e]


def _canonical_type(param: dict[str, Any]) -> str:
    typ = param["type"]
    if typ.startswith("tuple"):
        inner = ",".join(_canonical_type(c) for c in param.get("components", []))
        return f"({inner}){typ[len('tuple'):]}"
    return typ


def input_types(entry: dict[str, Any]) -> list[str]:
    return [_canonical_type(p) for p in entry.get("inputs", [])]


def output_types(entry: dict[str, Any]) -> list[str]:
    return [_canonical_type(p) for p in entry.get("outputs", [])]


def function_signature(entry: dict[str, Any]) -> str:
    """Canonical signature, e.g. ``setNumber(uint256)``."""
    return f"{entry['name']}({','.join(input_types(entry))})"


def function_selector(entry: dict[str, Any]) -> bytes:
    """First 4 bytes of keccak256 of the canonical signature."""
    return keccak256(function_signature(entry).encode("utf-8"))[:4]


def is_read_only(entry: dict[str, Any]) -> bool:
    mutability = entry.get("stateMutability")
    if mutability is not None:
        return mutability in ("view", "pure")
    return bool(entry.get("constant", False))


def encode_arguments(types: list[str], args: list[Any]) -> bytes:
    if len(types) != len(args):
        raise ValueError(f"Expected {len(types)} argument(s), got {len(args)}")
    return encode(types, args) if types else b""


def encode_function_call(abi: list[dict[str, Any]], function_name: str, args: list[Any]) -> str:
    """
    ABI-encode a function call.

    Returns:
        0x-prefixed hex encoded calldata
    """
    entry = find_function(abi, function_name)
    encoded_args = encode_arguments(input_types(entry), list(args))
    return "0x" + function_selector(entry).hex() + encoded_args.hex()


def encode_constructor_args(abi: list[dict[str, Any]], args: list[Any]) -> bytes:
    constructor = next((e for e in abi if e.get("type") == "constructor"), None)
    if constructor is None:
        if args:
            raise ValueError("Constructor not found in ABI, but constructor args were provided")
        return b""
    return encode_arguments(input_types(constructor), list(args))


def decode_function_result(abi: list[dict[str, Any]], function_name: str, data: str) -> Any:
    """
    ABI-decode a function call result.

    Returns:
        None when the function has no outputs, the value for a single
        output, a tuple otherwise.
    """
    entry = find_function(abi, function_name)
    types = output_types(entry)
    if not types:
        return None

    decoded = decode(types, hex_to_bytes(data))
    if len(decoded) == 1:
        return decoded[0]
    return decoded
