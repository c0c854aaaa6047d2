"""
Interaction state machine for browsing VPN/Wi-Fi lists and entering secrets.

The current mode is one of two value types:

- ``Browse(kind, cursor)``: navigating the VPN or Wi-Fi list.
- ``SecretEntry(origin, target, buffer)``: typing a secret for ``target``; the
  browse mode it was entered from travels with it and is restored on exit.

``SelectionMachine.handle`` consumes one input event and returns the effects
the application should carry out (connect, disconnect, refresh, ...). The
machine itself never talks to the outside world.
"""

from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, List, Optional, Sequence, Union

from ..utils.logger import get_logger

logger = get_logger(__name__)


class ListKind(Enum):
    VPN = "vpn"
    WIFI = "wifi"

    @property
    def other(self) -> "ListKind":
        return ListKind.WIFI if self is ListKind.VPN else ListKind.VPN


@dataclass(frozen=True)
class Browse:
    kind: ListKind
    cursor: int = 0


@dataclass(frozen=True)
class SecretEntry:
    origin: Browse
    target: str
    buffer: str = ""


Mode = Union[Browse, SecretEntry]


class Command(Enum):
    """Discrete input events."""
    MODE_TOGGLE = "mode_toggle"
    CURSOR_DOWN = "cursor_down"
    CURSOR_UP = "cursor_up"
    CONFIRM = "confirm"
    CANCEL = "cancel"
    BACKSPACE = "backspace"
    DISCONNECT = "disconnect"
    REFRESH = "refresh"
    CYCLE_GRAPH = "cycle_graph"
    ADD_CONNECTION = "add_connection"
    QUIT = "quit"


@dataclass(frozen=True)
class CharInput:
    char: str


InputEvent = Union[Command, CharInput]


class Effect(Enum):
    """Effects without a payload."""
    REFRESH_LISTS = "refresh_lists"
    OPEN_EDITOR = "open_editor"
    CYCLE_GRAPH = "cycle_graph"
    QUIT = "quit"


@dataclass(frozen=True)
class SubmitSecret:
    kind: ListKind
    name: str
    secret: str


@dataclass(frozen=True)
class RequestDisconnect:
    name: str


Action = Union[Effect, SubmitSecret, RequestDisconnect]


BROWSE_KEYS: Dict[str, Command] = {
    "tab": Command.MODE_TOGGLE,
    "down": Command.CURSOR_DOWN,
    "j": Command.CURSOR_DOWN,
    "up": Command.CURSOR_UP,
    "k": Command.CURSOR_UP,
    "enter": Command.CONFIRM,
    "x": Command.DISCONNECT,
    "r": Command.REFRESH,
    "g": Command.CYCLE_GRAPH,
    "a": Command.ADD_CONNECTION,
    "q": Command.QUIT,
}

SECRET_KEYS: Dict[str, Command] = {
    "enter": Command.CONFIRM,
    "escape": Command.CANCEL,
    "backspace": Command.BACKSPACE,
}


def key_to_event(key: str, character: Optional[str], in_secret_entry: bool) -> Optional[InputEvent]:
    """Translate a terminal key press into an input event for the current mode.

    While a secret is being typed every printable character is text, so
    letters like ``q`` do not act as shortcuts.
    """
    if in_secret_entry:
        if key in SECRET_KEYS:
            return SECRET_KEYS[key]
        if character is not None and len(character) == 1 and character.isprintable():
            return CharInput(character)
        return None
    return BROWSE_KEYS.get(key)


def clamp_cursor(cursor: int, length: int) -> int:
    """Keep a cursor inside ``[0, length)``; 0 for an empty list."""
    if length <= 0:
        return 0
    return min(max(cursor, 0), length - 1)


class SelectionMachine:
    """Owns the interaction mode and the externally supplied name lists."""

    def __init__(self, vpn_names: Sequence[str] = (), wifi_ssids: Sequence[str] = ()):
        self.lists: Dict[ListKind, List[str]] = {
            ListKind.VPN: list(vpn_names),
            ListKind.WIFI: list(wifi_ssids),
        }
        self.mode: Mode = Browse(ListKind.VPN, 0)

    # ---- queries ----

    @property
    def browse(self) -> Browse:
        """The browse mode in effect, or the one a secret entry will return to."""
        return self.mode.origin if isinstance(self.mode, SecretEntry) else self.mode

    @property
    def in_secret_entry(self) -> bool:
        return isinstance(self.mode, SecretEntry)

    def items(self, kind: Optional[ListKind] = None) -> List[str]:
        return self.lists[kind or self.browse.kind]

    def selected_name(self) -> Optional[str]:
        items = self.items()
        if not items:
            return None
        return items[clamp_cursor(self.browse.cursor, len(items))]

    # ---- list updates ----

    def set_lists(self, vpn_names: Sequence[str], wifi_ssids: Sequence[str]) -> None:
        """Replace both lists and re-clamp the cursor."""
        self.lists[ListKind.VPN] = list(vpn_names)
        self.lists[ListKind.WIFI] = list(wifi_ssids)

        origin = self.browse
        clamped = replace(origin, cursor=clamp_cursor(origin.cursor, len(self.items(origin.kind))))
        if isinstance(self.mode, SecretEntry):
            self.mode = replace(self.mode, origin=clamped)
        else:
            self.mode = clamped

    # ---- event handling ----

    def handle(self, event: InputEvent) -> List[Action]:
        if isinstance(self.mode, SecretEntry):
            return self._handle_secret(self.mode, event)
        return self._handle_browse(self.mode, event)

    def _handle_browse(self, mode: Browse, event: InputEvent) -> List[Action]:
        items = self.items(mode.kind)
        length = len(items)

        if event is Command.MODE_TOGGLE:
            self.mode = Browse(mode.kind.other, 0)
        elif event is Command.CURSOR_DOWN:
            if length:
                self.mode = replace(mode, cursor=(mode.cursor + 1) % length)
        elif event is Command.CURSOR_UP:
            if length:
                self.mode = replace(mode, cursor=(mode.cursor - 1 + length) % length)
        elif event is Command.CONFIRM:
            if length:
                cursor = clamp_cursor(mode.cursor, length)
                self.mode = SecretEntry(origin=replace(mode, cursor=cursor), target=items[cursor])
        elif event is Command.DISCONNECT:
            if mode.kind is ListKind.VPN and length:
                return [RequestDisconnect(items[clamp_cursor(mode.cursor, length)])]
        elif event is Command.REFRESH:
            return [Effect.REFRESH_LISTS]
        elif event is Command.CYCLE_GRAPH:
            return [Effect.CYCLE_GRAPH]
        elif event is Command.ADD_CONNECTION:
            return [Effect.OPEN_EDITOR]
        elif event is Command.QUIT:
            return [Effect.QUIT]
        return []

    def _handle_secret(self, mode: SecretEntry, event: InputEvent) -> List[Action]:
        if isinstance(event, CharInput):
            self.mode = replace(mode, buffer=mode.buffer + event.char)
        elif event is Command.BACKSPACE:
            self.mode = replace(mode, buffer=mode.buffer[:-1])
        elif event is Command.CANCEL:
            self._leave_secret(mode)
        elif event is Command.CONFIRM:
            self._leave_secret(mode)
            kind = mode.origin.kind
            if mode.target in self.items(kind):
                return [SubmitSecret(kind, mode.target, mode.buffer)]
            logger.info(f"Dropping secret for '{mode.target}': no longer in the {kind.value} list")
        return []

    def _leave_secret(self, mode: SecretEntry) -> None:
        origin = mode.origin
        self.mode = replace(origin, cursor=clamp_cursor(origin.cursor, len(self.items(origin.kind))))
