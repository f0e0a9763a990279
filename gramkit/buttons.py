"""Keyboard buttons, reply markups and a builder for inline keyboards."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Any, Union


class ButtonKind(enum.Enum):
    """Kinds of buttons that carry only a label (and, for web views, a URL)."""

    REQUEST_LOCATION = "keyboardButtonRequestGeoLocation"
    BUY = "keyboardButtonBuy"
    GAME = "keyboardButtonGame"
    REQUEST_PHONE = "keyboardButtonRequestPhone"
    WEB_VIEW = "keyboardButtonSimpleWebView"


@dataclass(frozen=True)
class CallbackButton:
    """A button that sends callback data to the bot when pressed."""

    text: str
    data: bytes


@dataclass(frozen=True)
class URLButton:
    """A button that opens a URL."""

    text: str
    url: str


@dataclass(frozen=True)
class URLAuthButton:
    """A button that logs the user in to a website."""

    text: str
    url: str
    fwd_text: str = ""
    button_id: int = 0


@dataclass(frozen=True)
class SimpleButton:
    """A button identified by its kind and label."""

    kind: ButtonKind
    text: str
    url: str = ""


@dataclass(frozen=True)
class RequestPeerButton:
    """A button asking the user to choose peers of a given type."""

    text: str
    button_id: int
    peer_type: Any
    max_quantity: int = 0


@dataclass(frozen=True)
class RequestPollButton:
    """A button asking the user to create a poll or quiz."""

    text: str
    quiz: bool = False


@dataclass(frozen=True)
class SwitchInlineButton:
    """A button that starts an inline query with the bot."""

    text: str
    same_peer: bool = False
    query: str = ""


@dataclass(frozen=True)
class UserProfileButton:
    """A button that opens the profile of a user."""

    text: str
    user_id: int


KeyboardButton = Union[
    CallbackButton,
    URLButton,
    URLAuthButton,
    SimpleButton,
    RequestPeerButton,
    RequestPollButton,
    SwitchInlineButton,
    UserProfileButton,
]


@dataclass
class ButtonRow:
    """One row of keyboard buttons."""

    buttons: list[Any] = field(default_factory=list)


@dataclass
class InlineMarkup:
    """An inline keyboard attached to a message."""

    rows: list[ButtonRow] = field(default_factory=list)


@dataclass(frozen=True)
class ForceReply:
    """Markup asking the client to show a reply interface."""

    placeholder: str = ""


@dataclass(frozen=True)
class KeyboardHide:
    """Markup removing the custom reply keyboard."""


class Button:
    """Factory for buttons and markups."""

    @staticmethod
    def force(placeholder: str) -> ForceReply:
        return ForceReply(placeholder)

    @staticmethod
    def auth(text: str, url: str, forward_text: str, button_id: int) -> URLAuthButton:
        return URLAuthButton(text, url, forward_text, button_id)

    @staticmethod
    def url(text: str, url: str) -> URLButton:
        return URLButton(text, url)

    @staticmethod
    def data(text: str, data: str | bytes) -> CallbackButton:
        raw = data.encode() if isinstance(data, str) else bytes(data)
        return CallbackButton(text, raw)

    @staticmethod
    def request_location(text: str) -> SimpleButton:
        return SimpleButton(ButtonKind.REQUEST_LOCATION, text)

    @staticmethod
    def buy(text: str) -> SimpleButton:
        return SimpleButton(ButtonKind.BUY, text)

    @staticmethod
    def game(text: str) -> SimpleButton:
        return SimpleButton(ButtonKind.GAME, text)

    @staticmethod
    def request_phone(text: str) -> SimpleButton:
        return SimpleButton(ButtonKind.REQUEST_PHONE, text)

    @staticmethod
    def request_peer(
        text: str, button_id: int, peer_type: Any, max_quantity: int = 0
    ) -> RequestPeerButton:
        return RequestPeerButton(text, button_id, peer_type, max_quantity)

    @staticmethod
    def request_poll(text: str, quiz: bool) -> RequestPollButton:
        return RequestPollButton(text, quiz)

    @staticmethod
    def switch_inline(text: str, same_peer: bool, query: str) -> SwitchInlineButton:
        return SwitchInlineButton(text, same_peer, query)

    @staticmethod
    def web_view(text: str, url: str) -> SimpleButton:
        return SimpleButton(ButtonKind.WEB_VIEW, text, url)

    @staticmethod
    def mention(text: str, user_id: int) -> UserProfileButton:
        return UserProfileButton(text, user_id)

    @staticmethod
    def row(*args: Any) -> ButtonRow:
        return ButtonRow(list(args))

    @staticmethod
    def keyboard(*args: ButtonRow) -> InlineMarkup:
        return InlineMarkup(list(args))

    @staticmethod
    def clear() -> KeyboardHide:
        return KeyboardHide()


class KeyboardBuilder:
    """Builds an inline keyboard row by row; every method returns the builder."""

    def __init__(self) -> None:
        self._rows: list[ButtonRow] = []

    def add_row(self, *args: Any) -> KeyboardBuilder:
        """Append one row holding ``args``."""
        self._rows.append(ButtonRow(list(args)))
        return self

    def new_grid(self, x: int, y: int, *args: Any) -> KeyboardBuilder:
        """Lay buttons out in up to ``x`` rows of ``y``; any overflow goes in one last row."""
        total = len(args)
        row = 0
        while row < x and row * y < total:
            self.add_row(*args[row * y:min((row + 1) * y, total)])
            row += 1
        if total > x * y:
            self.add_row(*args[x * y:])
        return self

    def new_column(self, x: int, *args: Any) -> KeyboardBuilder:
        """Lay buttons out in consecutive rows of ``x`` buttons."""
        if x <= 0:
            raise ValueError("buttons per row must be positive")
        for start in range(0, len(args), x):
            self.add_row(*args[start:start + x])
        return self

    def new_row(self, y: int, *args: Any) -> KeyboardBuilder:
        """Deal buttons round-robin into ``y`` rows."""
        for row in range(max(y, 0)):
            self.add_row(*args[row::y])
        return self

    def build(self) -> InlineMarkup:
        """Return the inline markup holding the rows added so far."""
        return InlineMarkup(list(self._rows))


def _is_int(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def find_callback_data(markup: Any, *args: Any) -> bytes:
    """Return the callback data of the button a click with ``args`` would press.

    With no arguments the first button is chosen. One argument selects by
    button text (case-insensitive), by callback data (bytes), by row index
    (int; the last callback button of that row) or by ``[row, column]``.
    Raises ValueError for markup without buttons, TypeError for an argument
    of another type, and LookupError when no callback button matches.
    """
    if markup is None:
        raise ValueError("replyMarkup: message has no buttons")

    data: bytes | None = None
    if isinstance(markup, InlineMarkup):
        if not markup.rows:
            raise ValueError("replyMarkup: rows are empty")
        if not args:
            first_row = markup.rows[0].buttons
            if not first_row:
                raise ValueError("replyMarkup: row(0) has no buttons")
            if isinstance(first_row[0], CallbackButton):
                data = first_row[0].data
        elif len(args) == 1:
            option = args[0]
            for x, row in enumerate(markup.rows):
                for y, button in enumerate(row.buttons):
                    callback = button if isinstance(button, CallbackButton) else None
                    if isinstance(option, str):
                        if callback and callback.text.casefold() == option.casefold():
                            data = callback.data
                    elif isinstance(option, (bytes, bytearray)):
                        if callback and callback.data == bytes(option):
                            data = callback.data
                    elif _is_int(option):
                        if callback and option == x:
                            data = callback.data
                    elif isinstance(option, (list, tuple)) and all(map(_is_int, option)):
                        if callback and len(option) == 2 and option[0] == x and option[1] == y:
                            data = callback.data
                    else:
                        raise TypeError(
                            "replyMarkup: invalid argument type "
                            "(expected string, bytes, int, or [x, y])"
                        )

    if data is None:
        raise LookupError(
            "replyMarkup: button with given (text, data, or coordinates) not found"
        )
    return data