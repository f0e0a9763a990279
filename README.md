# gramkit

Building blocks for writing Telegram bots and clients in Python. Everything
here works without a live connection:

- **Peers** (`gramkit.peers`): small dataclasses for peers and entities
  (`PeerUser`, `PeerChat`, `PeerChannel`, `InputPeerUser`, `InputPeerChat`,
  `InputPeerChannel`, `InputPeerSelf`, `User`, `Chat`, `Channel`,
  `ChatForbidden`, `ChannelForbidden`), plus `get_peer_id`, `to_input_peer`
  and `to_peer`.
- **Peer cache** (`gramkit.cache`): `PeerCache` records the access hashes of
  users, basic groups and channels, mirrors them to a compact binary file,
  and exports or imports them as JSON.
- **Keyboards** (`gramkit.buttons`): the `Button` factory, `KeyboardBuilder`
  for inline keyboards, and `find_callback_data` to pick a button's callback
  data by text, data or position.
- **Bot requests** (`gramkit.bots`): builds the request objects that answer
  inline queries and callback queries, with the usual defaults.
- **Media** (`gramkit.media`): file-type checks and document attributes for
  video and audio files, read with `ffprobe`.
- **Files** (`gramkit.files`): path helpers, random ids and `to_json` for
  rendering dataclasses and plain values as JSON.

## Installation

```
pip install gramkit
```

## Peers

```python
from gramkit.peers import User, PeerChannel, InputPeerChannel, get_peer_id, to_input_peer, to_peer

to_input_peer(User(id=42, access_hash=7))        # InputPeerUser(user_id=42, access_hash=7)
to_input_peer("me")                              # InputPeerSelf()
to_peer(InputPeerChannel(10, 99))                # PeerChannel(channel_id=10)
get_peer_id(PeerChannel(10))                     # 10
```

`to_input_peer` raises `ValueError` for `None`, `LookupError` for bare ids,
usernames, `PeerUser` and `PeerChannel` (these need the cache), and
`TypeError` for anything else.

## Caching peers

```python
from gramkit.cache import CacheConfig, PeerCache
from gramkit.peers import User

cache = PeerCache("cache.db", CacheConfig(memory=True))
cache.update_user(User(id=42, access_hash=1234))   # True: a new access hash
cache.get_input_peer(42)       # InputPeerUser(user_id=42, access_hash=1234)
42 in cache                    # True
cache.resolve("42")            # the same input peer, from a decimal string
```

- A bot-API style id such as `-1001234` is looked up as channel `1234`.
- Lookups that find nothing raise `LookupError`.
- `update_peers(users, chats)` records a batch and returns how many users and
  chats changed. When something changed and the cache is not in memory mode,
  it rewrites the cache file.
- `write_file()` and `read_file()` use 17-byte big-endian records: a kind
  byte (1 user, 2 chat, 3 channel), the id and the access hash. A truncated
  file keeps the entries read before the damage.
- `export_json()` and `import_json(data)` move the access hashes as JSON with
  `channels`, `users` and `chats` objects.
- `set_write_file(False)` keeps the cache in memory only. `disable()` stops
  recording and writing, and `clear()` forgets everything.

## Building keyboards

```python
from gramkit.buttons import Button, KeyboardBuilder, find_callback_data

markup = (
    KeyboardBuilder()
    .add_row(Button.data("Yes", "yes"), Button.data("No", "no"))
    .add_row(Button.url("Docs", "https://example.com"))
    .build()
)

find_callback_data(markup, "no")        # b"no"   (text, case-insensitive)
find_callback_data(markup, [0, 0])      # b"yes"  (row, column)
find_callback_data(markup)              # b"yes"  (first button)
```

Other layouts:

- `new_grid(x, y, *buttons)`: up to `x` rows of `y` buttons, with any
  overflow in one last row.
- `new_column(x, *buttons)`: consecutive rows of `x` buttons.
- `new_row(y, *buttons)`: deals the buttons round-robin into `y` rows.

`find_callback_data` raises `ValueError` for markup without buttons,
`TypeError` for an unsupported selector, and `LookupError` when no callback
button matches.

## Answering queries

```python
from gramkit.bots import (
    CallbackOptions, InlineSendOptions,
    build_callback_answer_request, build_inline_results_request,
)

req = build_inline_results_request(1, [], InlineSendOptions(switch_pm="Open"))
req.cache_time               # 60 when no cache time is given
req.switch_pm.start_param    # "start" when no start parameter is given

answer = build_callback_answer_request(2, "Done", CallbackOptions(alert=True))
```

## Media metadata

`is_streamable(mime_type)`, `is_streamable_file(path)` and
`is_audio_file(path)` classify media by MIME type or file extension.
`gather_video_metadata(path, attrs)` fills in attributes and returns them
together with the duration in whole seconds:

- For video files it fills in `DocumentAttributeVideo` (width, height,
  duration). It raises `MediaMetadataError` if `ffprobe` cannot read the
  file.
- For audio files it fills in `DocumentAttributeAudio` (performer, title,
  duration). A missing performer becomes `"Unknown"`.
- `.gif` files get `DocumentAttributeAnimated`.

`thumbnail_position(duration)` gives the second at which a thumbnail frame
would be taken.

## What this package does not do

It has no network client. It does not connect to Telegram, log in or send
anything. The request objects in `gramkit.bots` are built, not sent. It does
not parse HTML or Markdown message text into entities. It does not handle
incoming updates. It does not upload media or render thumbnails; it only
reads metadata with `ffprobe`.

## Running the tests

```
pip install -e .[test]
pytest
```