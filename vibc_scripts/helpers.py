"""Small value helpers used when comparing on-chain data with config values."""

from typing import Optional, Union


def are_addresses_equal(address1: Optional[str], address2: Optional[str]) -> bool:
    """Case-insensitive address comparison. Missing values never match."""
    if not address1 or not address2:
        return False
    return address1.lower() == address2.lower()


def decode_bytes32_string(value: Union[bytes, str]) -> str:
    """Decode a bytes32 value (e.g. a channel id) into a string.

    Accepts raw bytes as returned by web3 or a 0x-prefixed hex string. The
    value must be exactly 32 bytes and end with a zero byte, so at most 31
    bytes of text. Trailing zero bytes are padding and get stripped.
    """
    if isinstance(value, str):
        value = bytes.fromhex(value[2:] if value.startswith("0x") else value)

    if len(value) != 32:
        raise ValueError(f"Expected 32 bytes, got {len(value)}")
    if value[31] != 0:
        raise ValueError("Invalid bytes32 string, no null terminator")

    return value.rstrip(b"\x00").decode("utf-8")
