# hotline

Building blocks for talking to Hotline BBS servers, plus a terminal
interface for a client, built on urwid.

## Modules

- `hotline.util`: `byte_to_int` reads a 2- or 4-byte big-endian unsigned
  value and raises `ValueError` for any other length. `VERSION` holds the
  version string shown by the interface.
- `hotline.user`: the `User` record (2-byte `id`, `icon` and `flags`, and a
  `name`) and its wire form via `User.payload()`; `read_user` parses one
  (the name runs from byte 8 to the end; records shorter than 8 bytes raise
  `ValueError`). `UserFlag` and `UserOption` name the bit positions of the
  user flags and client options. `negate_string` and `decode_user_string`
  apply the byte-negation obfuscation used for logins and passwords.
- `hotline.transfer`: the 16-byte `Transfer` header that opens a file
  transfer connection. `Transfer.from_bytes` parses it, ignoring bytes past
  the sixteenth, and raises `ValueError` if the input is short or the
  protocol is anything but `HTXF`; `Transfer.to_bytes` encodes it.
  `banner_download(config_dir, banner_file, writer)` writes a banner file to
  a binary writer and returns the number of bytes written.
- `hotline.preferences`: client settings (`Preferences`) with saved servers
  (`Bookmark`), read and written as YAML with the keys `Username`, `IconID`,
  `Bookmarks`, `Tracker` and `EnableBell`.
- `hotline.ui`: the terminal interface `UI` and the helpers it uses:
  `with_default_port`, `default_server_name`, `news_post_text` and
  `edit_news_text`.

## Examples

Logins and passwords travel obfuscated, each byte subtracted from 255:

```python
from hotline.user import negate_string, decode_user_string

assert negate_string(b"guest") == b"\x98\x8a\x9a\x8c\x8b"
assert decode_user_string(b"\x98\x8a\x9a\x8c\x8b") == "guest"
```

Encoding and reading a user record:

```python
from hotline.user import User, read_user

record = User(id=b"\x00\x01", icon=b"\x07\xd0", flags=b"\x00\x01", name="aaa").payload()
assert read_user(record).name == "aaa"
```

Reading sizes and counts off the wire:

```python
from hotline.util import byte_to_int

assert byte_to_int(b"\x00\x01") == 1
assert byte_to_int(b"\x00\x01\x00\x00") == 65536
```

Parsing a transfer header:

```python
from hotline.transfer import Transfer

header = Transfer.from_bytes(
    b"HTXF" b"\x00\x00\x00\x01" b"\x00\x00\x00\x02" b"\x00\x00\x00\x00"
)
assert header.reference_number == b"\x00\x00\x00\x01"
assert header.to_bytes()[:4] == b"HTXF"
```

Server addresses without a port get the Hotline default of 5500:

```python
from hotline.ui import with_default_port

assert with_default_port("example.com") == "example.com:5500"
assert with_default_port("example.com:5600") == "example.com:5600"
```

Preferences round-trip through YAML. `apply_settings` turns an empty name
into `unnamed` and an icon id that is not a number into 0:

```python
from hotline.preferences import Preferences

prefs = Preferences()
prefs.apply_settings("", "abc", "tracker.example.com", True)
assert prefs.username == "unnamed" and prefs.icon_id == 0

password = "password"
prefs.add_bookmark("Example", "example.com:5500", "guest", password)
assert Preferences.from_yaml(prefs.to_yaml()) == prefs
prefs.save("client-config.yaml")
```

## The terminal interface

`UI(client, preferences, config_path, fetch_listing)` takes:

- `client`: an object with `connect(addr, login, password)`,
  `handle_transactions()`, `disconnect()` and
  `send(transaction_type, fields)`, where `fields` is a list of
  `(field_id, bytes)` pairs;
- `preferences`: a `Preferences` instance, written to `config_path` when
  settings or bookmarks are saved;
- `fetch_listing`: a callable that takes the tracker address and returns
  server records with `name`, `description` and `addr` attributes.

`UI.start()` runs the interface: a home menu (join server, bookmarks, browse
tracker, settings, quit), a join form, and a connected view with chat and a
user list. In the connected view `ctrl n` requests the message board,
`ctrl p` opens a news post editor, `ctrl f` requests the file list and `esc`
asks whether to disconnect. `ctrl c` leaves the interface from anywhere.
`join_server` runs `client.handle_transactions()` on a background thread and
shows a notice when it returns; a failed connect raises `ConnectionError`.

## What this package does not do

It has no Hotline connection or transaction encoding of its own, no tracker
client and no server: the `client` and `fetch_listing` given to `UI` must
supply those. Incoming chat, user lists, news and file lists are not
displayed by the package itself, and it installs no command to start the
interface.

## Tests

The test suite uses pytest and is installed with the `test` extra.