"""Peer and entity types, and conversions between them."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Union


@dataclass(frozen=True)
class PeerUser:
    """A user as it appears in messages and updates."""

    user_id: int = 0


@dataclass(frozen=True)
class PeerChat:
    """A basic group as it appears in messages and updates."""

    chat_id: int = 0


@dataclass(frozen=True)
class PeerChannel:
    """A channel or supergroup as it appears in messages and updates."""

    channel_id: int = 0


@dataclass(frozen=True)
class InputPeerUser:
    """A user addressable in requests."""

    user_id: int = 0
    access_hash: int = 0


@dataclass(frozen=True)
class InputPeerChat:
    """A basic group addressable in requests."""

    chat_id: int = 0


@dataclass(frozen=True)
class InputPeerChannel:
    """A channel or supergroup addressable in requests."""

    channel_id: int = 0
    access_hash: int = 0


@dataclass(frozen=True)
class InputPeerSelf:
    """The current account."""


@dataclass
class User:
    """A user entity."""

    id: int = 0
    access_hash: int = 0
    first_name: str = ""
    last_name: str = ""
    username: str = ""
    phone: str = ""
    bot: bool = False
    min: bool = False


@dataclass
class Chat:
    """A basic group entity."""

    id: int = 0
    title: str = ""


@dataclass
class Channel:
    """A channel or supergroup entity."""

    id: int = 0
    access_hash: int = 0
    title: str = ""
    username: str = ""
    broadcast: bool = False
    megagroup: bool = False
    min: bool = False


@dataclass
class ChatForbidden:
    """A basic group the account can no longer access."""

    id: int = 0
    title: str = ""


@dataclass
class ChannelForbidden:
    """A channel the account can no longer access."""

    id: int = 0
    access_hash: int = 0
    title: str = ""
    broadcast: bool = False
    megagroup: bool = False


Peer = Union[PeerUser, PeerChat, PeerChannel]
InputPeer = Union[InputPeerUser, InputPeerChat, InputPeerChannel, InputPeerSelf]


def get_peer_id(peer: Any) -> int:
    """Return the numeric id of a peer or entity, or 0 if it has none."""
    match peer:
        case PeerChat(chat_id=ident) | InputPeerChat(chat_id=ident):
            return ident
        case PeerChannel(channel_id=ident) | InputPeerChannel(channel_id=ident):
            return ident
        case PeerUser(user_id=ident) | InputPeerUser(user_id=ident):
            return ident
        case User(id=ident) | Chat(id=ident) | Channel(id=ident):
            return ident
    return 0


def to_input_peer(peer: Any) -> InputPeer:
    """Convert a peer or entity that carries its own access data to an input peer.

    Raises ValueError for None, LookupError for peers that need a cache lookup
    (bare ids, usernames, user and channel peers), and TypeError for anything else.
    """
    match peer:
        case None:
            raise ValueError("peer is None")
        case InputPeerUser() | InputPeerChat() | InputPeerChannel() | InputPeerSelf():
            return peer
        case PeerChat(chat_id=ident):
            return InputPeerChat(ident)
        case Chat(id=ident) | ChatForbidden(id=ident):
            return InputPeerChat(ident)
        case Channel(id=ident, access_hash=access) | ChannelForbidden(id=ident, access_hash=access):
            return InputPeerChannel(ident, access)
        case User(id=ident, access_hash=access):
            return InputPeerUser(ident, access)
        case "me" | "self":
            return InputPeerSelf()
        case PeerUser() | PeerChannel() | str():
            raise LookupError(f"peer {peer!r} needs a cache lookup to resolve")
        case bool():
            pass
        case int():
            raise LookupError(f"peer {peer!r} needs a cache lookup to resolve")
    raise TypeError(f"cannot get a sendable peer from {type(peer).__name__}")


def to_peer(input_peer: Any) -> Peer | None:
    """Convert an input peer to the peer form used in messages, or None."""
    match input_peer:
        case InputPeerUser(user_id=ident):
            return PeerUser(ident)
        case InputPeerChat(chat_id=ident):
            return PeerChat(ident)
        case InputPeerChannel(channel_id=ident):
            return PeerChannel(ident)
    return None