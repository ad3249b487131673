"""Terminal user interface for the client."""

from __future__ import annotations

import logging
import os
import threading
from typing import Any, Callable, Protocol, Sequence

import urwid

from .preferences import Preferences
from .util import VERSION

logger = logging.getLogger(__name__)

DEFAULT_PORT = 5500
GUEST_ACCOUNT = "guest"

TRAN_GET_MSGS = 101
TRAN_OLD_POST_NEWS = 103
TRAN_CHAT_SEND = 105
TRAN_GET_FILE_NAME_LIST = 200
FIELD_DATA = 101

PAGE_HOME = "home"
PAGE_SERVER_UI = "serverUI"
PAGE_JOIN_SERVER = "joinServer"
PAGE_TRACKER_LIST = "trackerList"
PAGE_BOOKMARKS = "bookmarks"

_BACKSPACES = ("\x08", "\x7f")
_SHORTCUTS = "abcdefghijklmnopqrstuvwxyz"
_MASKED_CAPTION = "Password: "


class HotlineClient(Protocol):
    """What the interface needs from a client connection."""

    def connect(self, addr: str, login: str, password: str) -> None: ...

    def handle_transactions(self) -> None: ...

    def disconnect(self) -> None: ...

    def send(self, transaction_type: int, fields: Sequence[tuple[int, bytes]]) -> None: ...


class ServerRecord(Protocol):
    name: Any
    description: Any
    addr: str


def with_default_port(addr: str) -> str:
    """Append the default port to addr when it carries none."""
    return addr if ":" in addr else f"{addr}:{DEFAULT_PORT}"


def default_server_name(name: str, login: str, addr: str) -> str:
    """Return name, or "login@addr" when no name is given."""
    return name or f"{login}@{addr}"


def news_post_text(text: str) -> str:
    """Convert newlines to the carriage returns used by message board posts."""
    return text.replace("\n", "\r")


def edit_news_text(text: str, char: str) -> str:
    """Apply one typed character to the news draft; backspace removes the last one."""
    if char in _BACKSPACES:
        return text[:-1]
    return text + char


def _as_text(value: Any) -> str:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", "replace")
    return str(value)


class _KeyCapture(urwid.WidgetWrap):
    """Gives a handler the first look at every key press."""

    def __init__(self, widget: urwid.Widget, handler: Callable[[str], bool]):
        self._handler = handler
        super().__init__(widget)

    def keypress(self, size, key):
        if self._handler(key):
            return None
        return self._w.keypress(size, key)


class _Menu(urwid.WidgetWrap):
    """A list of entries, each with an optional single-key shortcut."""

    def __init__(self, entries, on_escape: Callable[[], None] | None = None):
        self._shortcuts: dict[str, Callable[[], None]] = {}
        self._on_escape = on_escape
        buttons = []
        for label, secondary, shortcut, action in entries:
            text = f"({shortcut}) {label}" if shortcut else label
            if secondary:
                text = f"{text}  {secondary}"
            buttons.append(urwid.Button(text, on_press=lambda _b, act=action: act()))
            if shortcut:
                self._shortcuts[shortcut] = action
        super().__init__(urwid.ListBox(urwid.SimpleFocusListWalker(buttons)))

    def keypress(self, size, key):
        if key == "esc" and self._on_escape is not None:
            self._on_escape()
            return None
        if key in self._shortcuts:
            self._shortcuts[key]()
            return None
        return self._w.keypress(size, key)


class _ChatInput(urwid.Edit):
    def __init__(self, on_submit: Callable[[str], None]):
        self._on_submit = on_submit
        super().__init__("> ")

    def keypress(self, size, key):
        if key == "enter":
            text = self.get_edit_text()
            if text:
                self._on_submit(text)
                self.set_edit_text("")
            return None
        return super().keypress(size, key)


class _NewsEditor(urwid.WidgetWrap):
    """A draft area edited one character at a time."""

    def __init__(self, on_escape: Callable[[], None], on_tab: Callable[[], None]):
        self.text = ""
        self._display = urwid.Text("")
        self._on_escape = on_escape
        self._on_tab = on_tab
        super().__init__(urwid.Filler(self._display, valign="top"))

    def selectable(self):
        return True

    def keypress(self, size, key):
        if key == "esc":
            self._on_escape()
        elif key == "tab":
            self._on_tab()
        elif key == "enter":
            self.text += "\n"
        elif key == "backspace":
            self.text = edit_news_text(self.text, "\x7f")
        elif len(key) == 1:
            self.text = edit_news_text(self.text, key)
        else:
            return key
        self._display.set_text(self.text)
        return None


def _centered(widget: urwid.Widget, width: int, height: int) -> urwid.Widget:
    return urwid.Overlay(widget, urwid.SolidFill(" "), "center", width, "middle", height)


def _boxed_form(rows: list[urwid.Widget], title: str) -> urwid.Widget:
    return urwid.LineBox(urwid.Filler(urwid.Pile(rows), valign="top"), title=title)


class UI:
    """The client's terminal interface: menus, forms and the connected server view."""

    def __init__(
        self,
        client: HotlineClient,
        preferences: Preferences,
        config_path: str | os.PathLike,
        fetch_listing: Callable[[str], Sequence[ServerRecord]],
    ):
        self.client = client
        self.preferences = preferences
        self.config_path = config_path
        self.fetch_listing = fetch_listing
        self.server_name = ""
        self.loop: urwid.MainLoop | None = None
        self.chat_box = urwid.SimpleFocusListWalker([])
        self.user_list = urwid.Text("")
        self._chat_input = _ChatInput(self.send_chat)
        self._root = urwid.WidgetPlaceholder(urwid.SolidFill(" "))
        self._pages: dict[str, tuple[urwid.Widget, bool]] = {}
        self._visible: list[str] = []
        self._wake_fd: int | None = None
        self._session_thread: threading.Thread | None = None

    # page management

    def _render(self) -> None:
        base: urwid.Widget = urwid.SolidFill(" ")
        for name in self._visible:
            widget, modal = self._pages[name]
            if modal:
                base = urwid.Overlay(widget, base, "center", 50, "middle", 9)
            else:
                base = widget
        self._root.original_widget = base

    def _add_page(self, name: str, widget: urwid.Widget, modal: bool = False) -> None:
        if name in self._visible:
            self._visible.remove(name)
        self._pages[name] = (widget, modal)
        self._visible.append(name)
        self._render()

    def _remove_page(self, name: str) -> None:
        self._pages.pop(name, None)
        if name in self._visible:
            self._visible.remove(name)
        self._render()

    def _switch_to(self, name: str) -> None:
        if name in self._pages:
            self._visible = [name]
            self._render()

    def _modal(self, name: str, text: str, buttons: list[str], on_done: Callable[[int, str], None], title: str = "") -> None:
        row = urwid.Columns(
            [
                urwid.Button(label, on_press=lambda _b, i=index, lbl=label: on_done(i, lbl))
                for index, label in enumerate(buttons)
            ]
        )
        body = urwid.Pile([urwid.Text(text, align="center"), urwid.Divider(), row])
        self._add_page(name, urwid.LineBox(urwid.Filler(body), title=title), modal=True)

    # actions

    def join_server(self, addr: str, login: str, password: str) -> None:
        """Connect to addr and handle its transactions on a background thread."""
        addr = with_default_port(addr)
        try:
            self.client.connect(addr, login, password)
        except Exception as err:
            raise ConnectionError(f"Error joining server: {err}") from err

        self._session_thread = threading.Thread(target=self._run_session, daemon=True)
        self._session_thread.start()

    def _run_session(self) -> None:
        try:
            self.client.handle_transactions()
        except Exception:
            logger.exception("server connection ended with an error")
        if self._wake_fd is not None:
            os.write(self._wake_fd, b"closed\n")

    def _on_wake(self, _data: bytes) -> bool:
        self._switch_to(PAGE_HOME)
        self._modal(
            "loginErr",
            "The server connection has closed.",
            ["Ok"],
            lambda _i, _l: self._switch_to(PAGE_HOME),
            title="Server Connection Error",
        )
        return True

    def send_chat(self, text: str) -> None:
        """Send a chat line; empty text is not sent."""
        if not text:
            return
        try:
            self.client.send(TRAN_CHAT_SEND, [(FIELD_DATA, text.encode("utf-8"))])
        except Exception:
            logger.exception("error sending chat")

    def post_news(self, text: str) -> None:
        """Post a message board entry; empty text is not sent."""
        news_text = news_post_text(text)
        if not news_text:
            return
        try:
            self.client.send(TRAN_OLD_POST_NEWS, [(FIELD_DATA, news_text.encode("utf-8"))])
        except Exception:
            logger.exception("Error posting news")

    def save_settings(self, username: str, icon_id: int | str, tracker: str, enable_bell: bool) -> None:
        """Apply the settings form and write the preferences file."""
        self.preferences.apply_settings(username, icon_id, tracker, enable_bell)
        self.preferences.save(self.config_path)

    def _send_request(self, transaction_type: int) -> None:
        try:
            self.client.send(transaction_type, [])
        except Exception:
            logger.exception("error sending request")

    # pages

    def _bookmarks_page(self) -> urwid.Widget:
        entries = []
        for shortcut, bookmark in zip(_SHORTCUTS, self.preferences.bookmarks):
            def open_bookmark(bm=bookmark):
                self._remove_page(PAGE_JOIN_SERVER)
                form = self._join_server_form("", bm.addr, bm.login, bm.password, PAGE_BOOKMARKS, True, True)
                self._add_page(PAGE_JOIN_SERVER, form)

            entries.append((bookmark.name, bookmark.addr, shortcut, open_bookmark))
        menu = _Menu(entries, on_escape=lambda: self._switch_to(PAGE_HOME))
        return urwid.LineBox(menu, title="| Bookmarks |")

    def _tracker_page(self, servers: Sequence[ServerRecord]) -> urwid.Widget:
        entries = []
        for shortcut, server in zip(_SHORTCUTS, servers):
            def open_server(srv=server):
                self._remove_page(PAGE_JOIN_SERVER)
                form = self._join_server_form(
                    _as_text(srv.name), srv.addr, GUEST_ACCOUNT, "", PAGE_TRACKER_LIST, False, True
                )
                self._add_page(PAGE_JOIN_SERVER, form)

            entries.append((_as_text(server.name), _as_text(server.description), shortcut, open_server))
        menu = _Menu(entries, on_escape=lambda: self._switch_to(PAGE_HOME))
        return urwid.LineBox(menu, title="| Servers |")

    def _browse_tracker(self) -> None:
        try:
            listing = self.fetch_listing(self.preferences.tracker)
        except Exception as err:
            self._remove_page(PAGE_JOIN_SERVER)
            self._modal(
                "errModal",
                f"Error fetching tracker results:\n{err}",
                ["Cancel"],
                lambda _i, _l: self._remove_page("errModal"),
            )
            return
        self._add_page(PAGE_TRACKER_LIST, self._tracker_page(listing))
        self._switch_to(PAGE_TRACKER_LIST)

    def _settings_page(self) -> urwid.Widget:
        prefs = self.preferences
        name_edit = urwid.Edit("Your Name: ", prefs.username)
        icon_edit = urwid.IntEdit("IconID: ", prefs.icon_id)
        tracker_edit = urwid.Edit("Tracker: ", prefs.tracker)
        bell = urwid.CheckBox("Enable Terminal Bell", prefs.enable_bell)

        def save(_button):
            self.save_settings(
                name_edit.get_edit_text(),
                icon_edit.get_edit_text(),
                tracker_edit.get_edit_text(),
                bell.get_state(),
            )
            self._remove_page("settings")

        form = _boxed_form(
            [name_edit, icon_edit, tracker_edit, bell, urwid.Divider(), urwid.Button("Save", on_press=save)],
            "Settings",
        )

        def keys(key):
            if key == "esc":
                self._remove_page("settings")
                return True
            return False

        return _KeyCapture(_centered(form, 40, 15), keys)

    def _join_server_form(
        self, name: str, server: str, login: str, password: str, back_page: str, save: bool, default_connect: bool
    ) -> urwid.Widget:
        server_edit = urwid.Edit("Server: ", server)
        login_edit = urwid.Edit("Login: ", login)
        masked_edit = urwid.Edit(_MASKED_CAPTION, password, mask="*")

        def save_bookmark(_checkbox, _state):
            addr = server_edit.get_edit_text()
            self.preferences.add_bookmark(addr, addr, login_edit.get_edit_text(), masked_edit.get_edit_text())
            self.preferences.save(self.config_path)

        save_box = urwid.CheckBox("Save", save, on_state_change=save_bookmark)

        def connect(_button):
            srv_addr = server_edit.get_edit_text()
            login_input = login_edit.get_edit_text()
            self.server_name = default_server_name(name, login_input, srv_addr)
            try:
                self.join_server(srv_addr, login_input, masked_edit.get_edit_text())
            except ConnectionError as err:
                logger.error("login error: %s", err)
                self._modal("loginErr", str(err), ["Oh no"], lambda _i, _l: self._switch_to(back_page))
                return
            self._add_page(PAGE_SERVER_UI, self._server_page())
            self._switch_to(PAGE_SERVER_UI)

        buttons = urwid.Columns(
            [
                urwid.Button("Cancel", on_press=lambda _b: self._switch_to(back_page)),
                urwid.Button("Connect", on_press=connect),
            ]
        )
        pile = urwid.Pile([server_edit, login_edit, masked_edit, save_box, urwid.Divider(), buttons])
        if default_connect:
            pile.focus_position = 5
            buttons.focus_position = 1
        form = urwid.LineBox(urwid.Filler(pile, valign="top"), title="| Connect |")

        def keys(key):
            if key == "esc":
                self._switch_to(back_page)
                return True
            return False

        return _KeyCapture(_centered(form, 40, 14), keys)

    def _news_post_page(self) -> urwid.Widget:
        holder: dict[str, urwid.Pile] = {}

        def focus_button():
            holder["pile"].focus_position = 1

        editor = _NewsEditor(lambda: self._remove_page("newsInput"), focus_button)

        def send(_button):
            if not news_post_text(editor.text):
                return
            self.post_news(editor.text)
            self._remove_page("newsInput")

        def button_keys(key):
            if key == "esc":
                self._remove_page("newsInput")
                return True
            if key == "tab":
                holder["pile"].focus_position = 0
                return True
            return False

        send_button = _KeyCapture(urwid.Padding(urwid.Button("Send", on_press=send), align="right", width=10), button_keys)
        holder["pile"] = urwid.Pile([(10, editor), ("pack", send_button)])
        box = urwid.LineBox(urwid.Filler(holder["pile"], valign="top"), title="| Post Message |")
        return _centered(box, 40, 15)

    def _server_page(self) -> urwid.Widget:
        del self.chat_box[:]
        commands = urwid.LineBox(
            urwid.Text("^n: Read News   ^p: Post News\n^l: View Logs   ^f: View Files"),
            title="| Keyboard Shortcuts |",
        )
        left = urwid.Pile(
            [
                (4, commands),
                ("weight", 8, urwid.LineBox(urwid.ListBox(self.chat_box), title="| Chat |")),
                (3, urwid.LineBox(self._chat_input, title="Send")),
            ],
            focus_item=2,
        )
        columns = urwid.Columns(
            [("weight", 1, left), (25, urwid.LineBox(urwid.Filler(self.user_list, valign="top"), title="Users"))]
        )
        framed = urwid.LineBox(columns, title=f"| Mobius - Connected to {self.server_name} |", title_align="left")

        def confirm_disconnect(index, _label):
            if index == 1:
                try:
                    self.client.disconnect()
                except Exception:
                    logger.exception("error disconnecting")
                self._remove_page(PAGE_SERVER_UI)
                self._remove_page("modal")
                self._switch_to(PAGE_HOME)
            else:
                self._remove_page("modal")

        def keys(key):
            if key == "esc":
                self._modal("modal", "Disconnect from the server?", ["Cancel", "Exit"], confirm_disconnect)
                return True
            if key == "ctrl f":
                self._send_request(TRAN_GET_FILE_NAME_LIST)
                return True
            if key == "ctrl n":
                self._send_request(TRAN_GET_MSGS)
                return True
            if key == "ctrl p":
                self._add_page("newsInput", self._news_post_page())
                return True
            return False

        return _KeyCapture(framed, keys)

    def _quit(self) -> None:
        logger.info("Quitting")
        raise urwid.ExitMainLoop()

    def _home_page(self) -> urwid.Widget:
        def join():
            form = self._join_server_form("", "", GUEST_ACCOUNT, "", PAGE_HOME, False, False)
            self._add_page(PAGE_JOIN_SERVER, form)

        def bookmarks():
            self._add_page(PAGE_BOOKMARKS, self._bookmarks_page())
            self._switch_to(PAGE_BOOKMARKS)

        menu = _Menu(
            [
                ("Join Server", "", "j", join),
                ("Bookmarks", "", "b", bookmarks),
                ("Browse Tracker", "", "t", self._browse_tracker),
                ("Settings", "", "s", lambda: self._add_page("settings", self._settings_page())),
                ("Quit", "", "q", self._quit),
            ]
        )
        body = urwid.Pile(
            [
                ("pack", urwid.Text(f"Mobius v{VERSION}", align="center")),
                ("pack", urwid.Divider()),
                ("weight", 1, urwid.Padding(menu, align="center", width=("relative", 34))),
            ]
        )
        return urwid.LineBox(body, title=f"| Mobius v{VERSION} |", title_align="left")

    def _global_keys(self, key) -> None:
        if key == "ctrl c":
            logger.info("Exiting")
            raise urwid.ExitMainLoop()

    def start(self) -> None:
        """Run the interface until the user quits."""
        self._add_page(PAGE_HOME, self._home_page())
        self.loop = urwid.MainLoop(self._root, unhandled_input=self._global_keys)
        self._wake_fd = self.loop.watch_pipe(self._on_wake)
        try:
            self.loop.run()
        finally:
            fd, self._wake_fd = self._wake_fd, None
            if fd is not None:
                self.loop.remove_watch_pipe(fd)