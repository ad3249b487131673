"""Small binary helpers shared across the protocol code."""

VERSION = "0.10.23"


def byte_to_int(data: bytes) -> int:
    """Decode a 2- or 4-byte big-endian unsigned integer.

    Raises ValueError for any other length.
    """
    if len(data) in (2, 4):
        return int.from_bytes(data, "big")
    raise ValueError(f"unknown byte length: {len(data)}")