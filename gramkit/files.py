"""File-system helpers, random ids and JSON rendering of objects."""

from __future__ import annotations

import base64
import dataclasses
import enum
import json
import os
import random
from typing import Any

DEFAULT_SESSION_FILE = "session.dat"

_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}


def join_abs_working_dir(filename: str) -> str:
    """Return ``filename`` as an absolute path, relative names joined to the working directory.

    An empty name stands for the default session file.
    """
    if not filename:
        filename = DEFAULT_SESSION_FILE
    if not os.path.isabs(filename) or os.sep not in filename:
        return os.path.normpath(os.path.join(os.getcwd(), filename))
    return filename


def file_exists(path: str | os.PathLike[str]) -> bool:
    """Return True if something exists at ``path``."""
    try:
        os.stat(path)
    except (OSError, ValueError):
        return False
    return True


def path_is_writable(path: str | os.PathLike[str]) -> bool:
    """Return True if an existing file at ``path`` can be opened for writing."""
    try:
        fd = os.open(path, os.O_WRONLY)
    except (OSError, ValueError):
        return False
    os.close(fd)
    return True


def gen_rand_int() -> int:
    """Return a random non-negative 31-bit integer."""
    return random.randrange(2**31)


def _to_plain(obj: Any) -> Any:
    if dataclasses.is_dataclass(obj) and not isinstance(obj, type):
        return {f.name: _to_plain(getattr(obj, f.name)) for f in dataclasses.fields(obj)}
    if isinstance(obj, enum.Enum):
        return _to_plain(obj.value)
    if isinstance(obj, (bytes, bytearray, memoryview)):
        return base64.b64encode(bytes(obj)).decode("ascii")
    if isinstance(obj, dict):
        items = []
        for key, value in obj.items():
            if isinstance(key, bool) or not isinstance(key, (str, int)):
                raise TypeError(f"unsupported map key type {type(key).__name__}")
            items.append((str(key), _to_plain(value)))
        return dict(sorted(items))
    if isinstance(obj, (list, tuple)):
        return [_to_plain(item) for item in obj]
    if obj is None or isinstance(obj, (str, int, float, bool)):
        return obj
    raise TypeError(f"unsupported type: {type(obj).__name__}")


def to_json(obj: Any, compact: bool = False) -> str:
    """Render ``obj`` as JSON, indented by two spaces unless ``compact``.

    Failures are reported in the returned text as ``marshal: <reason>``.
    """
    try:
        plain = _to_plain(obj)
        if compact:
            text = json.dumps(plain, ensure_ascii=False, allow_nan=False, separators=(",", ":"))
        else:
            text = json.dumps(plain, ensure_ascii=False, allow_nan=False, indent=2)
    except (TypeError, ValueError) as exc:
        return f"marshal: {exc}"
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text