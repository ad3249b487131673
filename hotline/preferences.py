"""Client preferences and bookmarks, stored as YAML."""

from __future__ import annotations

import os
from dataclasses import dataclass, field

import yaml

DEFAULT_USERNAME = "unnamed"

_BOOKMARK_KEYS = {"name": "Name", "addr": "Addr", "login": "Login", "password": "Password"}


@dataclass
class Bookmark:
    """A saved server address with the credentials used to join it."""

    name: str
    addr: str
    login: str = ""
    password: str = ""

    def _to_mapping(self) -> dict:
        return {key: getattr(self, attr) for attr, key in _BOOKMARK_KEYS.items()}

    @classmethod
    def _from_mapping(cls, data: dict) -> "Bookmark":
        if not isinstance(data, dict):
            raise ValueError("bookmark entry must be a mapping")
        values = {attr: str(data.get(key) or "") for attr, key in _BOOKMARK_KEYS.items()}
        return cls(**values)


def _parse_icon_id(value: int | str) -> int:
    try:
        return int(str(value).strip())
    except ValueError:
        return 0


@dataclass
class Preferences:
    """User settings for the client: name, icon, tracker, bell and bookmarks."""

    username: str = DEFAULT_USERNAME
    icon_id: int = 0
    tracker: str = ""
    enable_bell: bool = False
    bookmarks: list[Bookmark] = field(default_factory=list)

    def add_bookmark(self, name: str, addr: str, login: str, password: str) -> Bookmark:
        """Append a bookmark and return it."""
        bookmark = Bookmark(name=name, addr=addr, login=login, password=password)
        self.bookmarks.append(bookmark)
        return bookmark

    def apply_settings(self, username: str, icon_id: int | str, tracker: str, enable_bell: bool) -> None:
        """Update settings as entered in the settings form.

        An empty name becomes "unnamed"; an icon id that is not a number becomes 0.
        """
        self.username = username or DEFAULT_USERNAME
        self.icon_id = _parse_icon_id(icon_id)
        self.tracker = tracker
        self.enable_bell = bool(enable_bell)

    def to_yaml(self) -> str:
        """Serialise the preferences as a YAML document."""
        document = {
            "Username": self.username,
            "IconID": self.icon_id,
            "Bookmarks": [bookmark._to_mapping() for bookmark in self.bookmarks],
            "Tracker": self.tracker,
            "EnableBell": self.enable_bell,
        }
        return yaml.safe_dump(document, sort_keys=False, allow_unicode=True)

    @classmethod
    def from_yaml(cls, text: str) -> "Preferences":
        """Parse preferences from a YAML document; missing keys take defaults."""
        data = yaml.safe_load(text)
        if data is None:
            return cls()
        if not isinstance(data, dict):
            raise ValueError("preferences document must be a mapping")
        defaults = cls()
        return cls(
            username=str(data.get("Username", defaults.username)),
            icon_id=_parse_icon_id(data.get("IconID", defaults.icon_id)),
            tracker=str(data.get("Tracker") or ""),
            enable_bell=bool(data.get("EnableBell", defaults.enable_bell)),
            bookmarks=[Bookmark._from_mapping(entry) for entry in data.get("Bookmarks") or []],
        )

    def save(self, path: str | os.PathLike) -> None:
        """Write the preferences to path, replacing its contents."""
        with open(path, "w", encoding="utf-8") as out:
            out.write(self.to_yaml())