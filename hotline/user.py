"""User records and the byte-negation obfuscation used for logins and passwords."""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum


class UserFlag(IntEnum):
    """Bit positions in the 2-byte user flags bitmap."""

    AWAY = 0
    ADMIN = 1
    REFUSE_PM = 2
    REFUSE_PCHAT = 3


class UserOption(IntEnum):
    """Bit positions in the options field sent by v1.5+ clients on agreement."""

    REFUSE_PM = 0
    REFUSE_CHAT = 1
    AUTO_RESPONSE = 2


_NAME_ENCODING = "utf-8"
_NAME_ERRORS = "surrogateescape"


def _two_bytes(value: bytes, label: str) -> bytes:
    if len(value) == 4:
        value = value[2:]
    if len(value) < 2:
        raise ValueError(f"{label} must be at least 2 bytes")
    return value[:2]


@dataclass
class User:
    """A user as listed by the server: 2-byte id, icon and flags plus a name."""

    id: bytes
    icon: bytes
    flags: bytes
    name: str

    def payload(self) -> bytes:
        """Encode the user in wire form: id, icon, flags, name length, name."""
        if len(self.id) < 2:
            raise ValueError("id must be at least 2 bytes")
        name = self.name.encode(_NAME_ENCODING, _NAME_ERRORS)
        if len(name) > 0xFFFF:
            raise ValueError("name is too long")
        return b"".join(
            (
                self.id[:2],
                _two_bytes(self.icon, "icon"),
                _two_bytes(self.flags, "flags"),
                len(name).to_bytes(2, "big"),
                name,
            )
        )


def read_user(data: bytes) -> User:
    """Decode a user from its wire form.

    The name runs from byte 8 to the end; the length field is not consulted.
    """
    if len(data) < 8:
        raise ValueError("user record is shorter than 8 bytes")
    return User(
        id=bytes(data[0:2]),
        icon=bytes(data[2:4]),
        flags=bytes(data[4:6]),
        name=bytes(data[8:]).decode(_NAME_ENCODING, _NAME_ERRORS),
    )


def decode_user_string(data: bytes) -> str:
    """Decode an obfuscated string sent by a client, e.g. 98 8a 9a 8c 8b -> "guest"."""
    return "".join(chr(255 - byte) for byte in data)


def negate_string(data: bytes) -> bytes:
    """Obfuscate clear text by subtracting each byte from 255."""
    return bytes(255 - byte for byte in data)