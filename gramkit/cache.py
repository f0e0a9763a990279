"""A persistent cache of peer access hashes and known entities."""

from __future__ import annotations

import json
import logging
import os
import re
import struct
import threading
from dataclasses import dataclass, field
from typing import Any, Iterable

from .peers import (
    Channel,
    ChannelForbidden,
    Chat,
    ChatForbidden,
    InputPeerChannel,
    InputPeerChat,
    InputPeerSelf,
    InputPeerUser,
    PeerChannel,
    PeerUser,
    User,
    to_input_peer,
)

_ENTRY = struct.Struct(">Bqq")
_USER_ENTRY = 1
_CHAT_ENTRY = 2
_CHANNEL_ENTRY = 3
_BOT_API_CHANNEL_PREFIX = "-100"
_DECIMAL_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)


@dataclass
class CacheConfig:
    """Settings for a peer cache."""

    log_level: int = logging.INFO
    log_name: str = ""
    memory: bool = False
    disabled: bool = False


@dataclass
class InputPeerCache:
    """Access hashes by id, for users, basic groups and channels."""

    channels: dict[int, int] = field(default_factory=dict)
    users: dict[int, int] = field(default_factory=dict)
    chats: dict[int, int] = field(default_factory=dict)


class PeerCache:
    """Keeps access hashes and entities, optionally mirrored to a binary file."""

    def __init__(self, file_name: str | os.PathLike[str], config: CacheConfig | None = None):
        config = config or CacheConfig()
        self._lock = threading.RLock()
        self.file_name = os.fspath(file_name)
        self.users: dict[int, User] = {}
        self.chats: dict[int, Chat] = {}
        self.channels: dict[int, Channel] = {}
        self.input_peers = InputPeerCache()
        self.memory = config.memory
        self.disabled = config.disabled
        suffix = f".{config.log_name}" if config.log_name else ""
        self.logger = logging.getLogger(f"gramkit.cache{suffix}")
        self.logger.setLevel(config.log_level)

        if not self.memory and not self.disabled:
            self.logger.debug("initialized cache (%s) successfully", self.file_name)
        if not self.disabled and not self.memory and os.path.exists(self.file_name):
            self.read_file()

    def set_write_file(self, write: bool) -> PeerCache:
        """Turn mirroring to the cache file on or off."""
        self.memory = not write
        return self

    def disable(self) -> PeerCache:
        """Stop the cache from recording peers and writing its file."""
        self.disabled = True
        return self

    def clear(self) -> None:
        """Forget every entity and access hash."""
        with self._lock:
            self.users = {}
            self.chats = {}
            self.channels = {}
            self.input_peers = InputPeerCache()

    def export_json(self) -> bytes:
        """Serialise the access hashes to compact JSON, omitting empty maps."""
        with self._lock:
            document: dict[str, dict[str, int]] = {}
            for name in ("channels", "users", "chats"):
                table: dict[int, int] = getattr(self.input_peers, name)
                if table:
                    document[name] = {str(k): table[k] for k in sorted(table, key=str)}
        return json.dumps(document, separators=(",", ":")).encode()

    def import_json(self, data: bytes | str) -> None:
        """Merge access hashes from JSON produced by ``export_json``."""
        document = json.loads(data)
        if not isinstance(document, dict):
            raise ValueError("cache JSON must be an object")
        with self._lock:
            for name in ("channels", "users", "chats"):
                table = document.get(name)
                if table is None:
                    continue
                if not isinstance(table, dict):
                    raise ValueError(f"cache JSON field {name!r} must be an object")
                target: dict[int, int] = getattr(self.input_peers, name)
                for key, value in table.items():
                    target[int(key)] = int(value)

    def write_file(self) -> None:
        """Write all access hashes to the cache file, unless disabled or in memory."""
        if self.disabled or self.memory:
            return
        with self._lock:
            chunks = [_ENTRY.pack(_USER_ENTRY, i, h) for i, h in self.input_peers.users.items()]
            chunks += [_ENTRY.pack(_CHAT_ENTRY, i, h) for i, h in self.input_peers.chats.items()]
            chunks += [
                _ENTRY.pack(_CHANNEL_ENTRY, i, h) for i, h in self.input_peers.channels.items()
            ]
        try:
            fd = os.open(self.file_name, os.O_CREAT | os.O_WRONLY | os.O_TRUNC, 0o600)
            with os.fdopen(fd, "wb") as handle:
                handle.write(b"".join(chunks))
        except OSError as exc:
            self.logger.error("error writing cache file: %s", exc)

    def read_file(self) -> None:
        """Load access hashes from the cache file, keeping entries read before any damage."""
        try:
            with open(self.file_name, "rb") as handle:
                raw = handle.read()
        except FileNotFoundError:
            return
        except OSError as exc:
            self.logger.error("error opening cache file: %s", exc)
            return

        whole = len(raw) - len(raw) % _ENTRY.size
        loaded = {_USER_ENTRY: 0, _CHAT_ENTRY: 0, _CHANNEL_ENTRY: 0}
        tables = {
            _USER_ENTRY: self.input_peers.users,
            _CHAT_ENTRY: self.input_peers.chats,
            _CHANNEL_ENTRY: self.input_peers.channels,
        }
        with self._lock:
            for kind, ident, access_hash in _ENTRY.iter_unpack(raw[:whole]):
                if kind in tables:
                    tables[kind][ident] = access_hash
                    loaded[kind] += 1
        if whole != len(raw):
            self.logger.error("cache file corrupted: truncated entry at byte %d", whole)
            return
        if not self.memory:
            self.logger.debug(
                "loaded %d users, %d chats, %d channels from cache",
                loaded[_USER_ENTRY], loaded[_CHAT_ENTRY], loaded[_CHANNEL_ENTRY],
            )

    def get_user_peer(self, user_id: int) -> InputPeerUser:
        """Return the cached input peer of a user."""
        with self._lock:
            if user_id in self.input_peers.users:
                return InputPeerUser(user_id, self.input_peers.users[user_id])
        raise LookupError(f"no user with id '{user_id}' or missing from cache")

    def get_channel_peer(self, channel_id: int) -> InputPeerChannel:
        """Return the cached input peer of a channel."""
        with self._lock:
            if channel_id in self.input_peers.channels:
                return InputPeerChannel(channel_id, self.input_peers.channels[channel_id])
        raise LookupError(f"no channel with id '{channel_id}' or missing from cache")

    def get_input_peer(self, peer_id: int) -> InputPeerUser | InputPeerChat | InputPeerChannel:
        """Return the input peer cached for an id, accepting "-100" prefixed channel ids."""
        text = str(peer_id)
        if text.startswith(_BOT_API_CHANNEL_PREFIX):
            peer_id = int(text[len(_BOT_API_CHANNEL_PREFIX):])
        with self._lock:
            if peer_id in self.input_peers.users:
                return InputPeerUser(peer_id, self.input_peers.users[peer_id])
            if peer_id in self.input_peers.chats:
                return InputPeerChat(peer_id)
            if peer_id in self.input_peers.channels:
                return InputPeerChannel(peer_id, self.input_peers.channels[peer_id])
        raise LookupError(f"there is no peer with id '{peer_id}' or missing from cache")

    def update_user(self, user: User) -> bool:
        """Record a user; return True when its access hash was added or changed."""
        with self._lock:
            if user.min:
                cached = self.users.get(user.id)
                if cached is None or cached.min:
                    self.users[user.id] = user
                return False
            current = self.input_peers.users.get(user.id)
            if current is not None and current == user.access_hash:
                return False
            self.input_peers.users[user.id] = user.access_hash
            self.users[user.id] = user
            return True

    def update_channel(self, channel: Channel) -> bool:
        """Record a channel; return True when its cached data was replaced."""
        with self._lock:
            if channel.id in self.input_peers.channels:
                active = self.channels.get(channel.id)
                if active is not None:
                    if active.min:
                        self.input_peers.channels[channel.id] = channel.access_hash
                        self.channels[channel.id] = channel
                        return True
                    if channel.min:
                        return False
                current = self.input_peers.channels[channel.id]
                if current != channel.access_hash and not channel.min:
                    self.input_peers.channels[channel.id] = channel.access_hash
                    self.channels[channel.id] = channel
                    return True
                return False
            self.channels[channel.id] = channel
            self.input_peers.channels[channel.id] = channel.access_hash
            return True

    def update_chat(self, chat: Chat) -> bool:
        """Record a basic group; return True if it was not known before."""
        with self._lock:
            if chat.id in self.input_peers.chats:
                return False
            self.chats[chat.id] = chat
            self.input_peers.chats[chat.id] = chat.id
            return True

    def update_peers(self, users: Iterable[Any], chats: Iterable[Any]) -> tuple[int, int]:
        """Record users and chats; return the counts of updated users and chats."""
        if self.disabled:
            return 0, 0
        users = list(users)
        chats = list(chats)
        updated_users = sum(1 for user in users if isinstance(user, User) and self.update_user(user))
        updated_chats = 0
        for chat in chats:
            match chat:
                case Chat():
                    updated_chats += self.update_chat(chat)
                case Channel():
                    updated_chats += self.update_channel(chat)
                case ChatForbidden():
                    with self._lock:
                        if chat.id not in self.input_peers.chats:
                            self.chats[chat.id] = Chat(id=chat.id)
                            self.input_peers.chats[chat.id] = chat.id
                case ChannelForbidden():
                    with self._lock:
                        if chat.id not in self.input_peers.channels:
                            self.channels[chat.id] = Channel(
                                id=chat.id,
                                access_hash=chat.access_hash,
                                title=chat.title,
                                broadcast=chat.broadcast,
                                megagroup=chat.megagroup,
                            )
                            self.input_peers.channels[chat.id] = chat.access_hash

        if updated_users or updated_chats:
            if not self.memory:
                self.write_file()
            self.logger.debug(
                "updated %d users %d chats in cache (u: %d, c: %d)",
                updated_users, updated_chats, len(users), len(chats),
            )
        return updated_users, updated_chats

    def contains(self, peer_id: int) -> bool:
        """Return True if any access hash is cached for ``peer_id``."""
        with self._lock:
            return (
                peer_id in self.input_peers.users
                or peer_id in self.input_peers.chats
                or peer_id in self.input_peers.channels
            )

    def __contains__(self, peer_id: object) -> bool:
        return isinstance(peer_id, int) and self.contains(peer_id)

    def resolve(self, peer: Any) -> InputPeerUser | InputPeerChat | InputPeerChannel | InputPeerSelf:
        """Resolve a peer, entity, id or username to an input peer using the cache."""
        match peer:
            case PeerUser(user_id=ident):
                return self.get_user_peer(ident)
            case PeerChannel(channel_id=ident):
                return self.get_channel_peer(ident)
            case bool():
                return to_input_peer(peer)
            case int():
                return self.get_input_peer(peer)
            case str():
                if _DECIMAL_RE.fullmatch(peer):
                    return self.get_input_peer(int(peer))
                if peer in ("me", "self"):
                    return InputPeerSelf()
                with self._lock:
                    for channel in self.channels.values():
                        if channel.username == peer:
                            return InputPeerChannel(channel.id, channel.access_hash)
                    for user in self.users.values():
                        if user.username == peer:
                            return InputPeerUser(user.id, user.access_hash)
                raise LookupError(f"no cached peer with username {peer!r}")
        return to_input_peer(peer)