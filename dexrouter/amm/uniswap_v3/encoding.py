"""Packed multi-hop path encoding for UniswapV3.

A V3 path is token0 | fee0 | token1 | fee1 | ... | tokenN with 20-byte
addresses and 3-byte (uint24) fees, tightly packed.
"""

from __future__ import annotations

from collections.abc import Sequence

from eth_abi.packed import encode_packed

from dexrouter.models.types import address_to_bytes

ADDRESS_SIZE = 20
FEE_SIZE = 3


def encode_path(path: Sequence[str], fees: Sequence[int]) -> bytes:
    """Pack a token path and its per-hop fees.

    Args:
        path: Token addresses, input first
        fees: One fee tier per hop (len(path) - 1 entries)

    Returns:
        Packed path bytes

    Raises:
        ValueError: If the path is too short or fees don't match the hop count
    """
    if len(path) < 2:
        raise ValueError(f"Path needs at least 2 tokens, got {len(path)}")
    if len(fees) != len(path) - 1:
        raise ValueError(f"Path/fee lengths do not match: {len(path)} tokens, {len(fees)} fees")

    types: list[str] = []
    values: list[object] = []
    for i, fee in enumerate(fees):
        types.extend(["address", "uint24"])
        values.extend([address_to_bytes(path[i]), int(fee)])
    types.append("address")
    values.append(address_to_bytes(path[-1]))

    return encode_packed(types, values)


def decode_path(data: bytes) -> tuple[list[str], list[int]]:
    """Unpack a V3 path into (tokens, fees).

    Raises:
        ValueError: If data is not a whole number of hops
    """
    step = ADDRESS_SIZE + FEE_SIZE
    if len(data) < ADDRESS_SIZE + step or (len(data) - ADDRESS_SIZE) % step != 0:
        raise ValueError(f"Invalid V3 path length: {len(data)} bytes")

    tokens: list[str] = []
    fees: list[int] = []
    offset = 0
    while offset + ADDRESS_SIZE < len(data):
        tokens.append("0x" + data[offset : offset + ADDRESS_SIZE].hex())
        offset += ADDRESS_SIZE
        fees.append(int.from_bytes(data[offset : offset + FEE_SIZE], "big"))
        offset += FEE_SIZE
    tokens.append("0x" + data[offset:].hex())
    return tokens, fees


__all__ = ["decode_path", "encode_path"]
