"""File transfer handshake header and banner delivery."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import BinaryIO

HTXF = b"HTXF"
_HEADER_SIZE = 16


@dataclass(frozen=True)
class Transfer:
    """The 16-byte header a client sends when opening a transfer connection."""

    protocol: bytes = HTXF
    reference_number: bytes = bytes(4)
    data_size: bytes = bytes(4)
    reserved: bytes = bytes(4)

    @classmethod
    def from_bytes(cls, data: bytes) -> "Transfer":
        """Parse a transfer header; only the HTXF protocol is accepted.

        Bytes beyond the first 16 are ignored.
        """
        if len(data) < _HEADER_SIZE:
            raise ValueError("transfer header is shorter than 16 bytes")
        header = cls(
            protocol=bytes(data[0:4]),
            reference_number=bytes(data[4:8]),
            data_size=bytes(data[8:12]),
            reserved=bytes(data[12:16]),
        )
        if header.protocol != HTXF:
            raise ValueError("invalid protocol")
        return header

    def to_bytes(self) -> bytes:
        """Encode the header in wire form."""
        return self.protocol + self.reference_number + self.data_size + self.reserved


def banner_download(config_dir: str | os.PathLike, banner_file: str, writer: BinaryIO) -> int:
    """Write the configured banner file to writer and return the byte count."""
    with open(os.path.join(config_dir, banner_file), "rb") as banner:
        content = banner.read()
    writer.write(content)
    return len(content)