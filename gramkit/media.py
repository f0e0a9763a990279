"""Media file classification and document attributes gathered with ffprobe."""

from __future__ import annotations

import json
import os
import random
import re
import subprocess
from dataclasses import dataclass
from typing import Any, Iterable

_STREAMABLE_MIME_TYPES = frozenset(
    {
        "video/mp4", "video/webm", "video/mpeg", "video/matroska", "video/3gpp",
        "video/3gpp2", "video/x-matroska", "video/quicktime", "video/x-msvideo",
        "video/x-ms-wmv", "video/x-m4v", "video/x-flv",
    }
)

_STREAMABLE_EXTENSIONS = frozenset(
    {
        ".mp4", ".webm", ".mpeg", ".mkv", ".3gpp", ".3gpp2", ".x-matroska",
        ".quicktime", ".x-msvideo", ".x-ms-wmv", ".x-m4v", ".x-flv",
    }
)

_AUDIO_EXTENSIONS = frozenset(
    {".mp3", ".ogg", ".wav", ".flac", ".m4a", ".alac", ".vorbis", ".opus"}
)

_DEFAULT_THUMB_DURATION = 2
_UNKNOWN_PERFORMER = "Unknown"
_INT_RE = re.compile(r"[+-]?[0-9]+", re.ASCII)
_INT32_MIN, _INT32_MAX = -(2**31), 2**31 - 1


class MediaMetadataError(RuntimeError):
    """Raised when metadata of a video file cannot be gathered."""


@dataclass
class DocumentAttributeFilename:
    """The original file name of a document."""

    file_name: str = ""


@dataclass
class DocumentAttributeVideo:
    """Video properties of a document."""

    round_message: bool = False
    supports_streaming: bool = False
    w: int = 0
    h: int = 0
    duration: float = 0.0


@dataclass
class DocumentAttributeAudio:
    """Audio properties of a document."""

    voice: bool = False
    performer: str = ""
    title: str = ""
    duration: int = 0


@dataclass
class DocumentAttributeAnimated:
    """Marks a document as an animation."""


def _extension(path: str) -> str:
    separators = {"/", os.sep}
    for index in range(len(path) - 1, -1, -1):
        char = path[index]
        if char in separators:
            break
        if char == ".":
            return path[index:]
    return ""


def _base_name(path: str) -> str:
    stripped = path.rstrip("/" + os.sep)
    if not stripped:
        return "/" if path else "."
    cut = max(stripped.rfind("/"), stripped.rfind(os.sep))
    return stripped[cut + 1:]


def is_streamable(mime_type: str) -> bool:
    """Return True if the MIME type names a streamable video format."""
    return mime_type in _STREAMABLE_MIME_TYPES


def is_streamable_file(path: str) -> bool:
    """Return True if the file extension names a streamable video format."""
    return _extension(path) in _STREAMABLE_EXTENSIONS


def is_audio_file(path: str) -> bool:
    """Return True if the file extension names an audio format."""
    return _extension(path) in _AUDIO_EXTENSIONS


def _half(value: int) -> int:
    # Integer halving that truncates toward zero.
    return -((-value) // 2) if value < 0 else value // 2


def thumbnail_position(duration: int) -> int:
    """Return the second at which a video thumbnail frame is taken."""
    if duration == 0:
        duration = _DEFAULT_THUMB_DURATION
    if duration <= 10:
        return _half(duration) + 1
    return random.randrange(_half(duration)) + 1


def _parse_float(text: str) -> float:
    try:
        return float(text.strip())
    except ValueError:
        return 0.0


def _probe(*args: str) -> str:
    completed = subprocess.run(["ffprobe", *args], capture_output=True, check=True)
    return completed.stdout.decode("utf-8", errors="replace")


def _video_metadata(path: str, attrs: list[Any]) -> tuple[list[Any], int] | None:
    try:
        output = _probe(
            "-v", "error",
            "-show_entries", "format=duration:stream=width:stream=height",
            "-of", "default=noprint_wrappers=1:nokey=1",
            path,
        )
    except (OSError, subprocess.CalledProcessError) as exc:
        raise MediaMetadataError(f"gathering video metadata: {exc}") from exc

    lines = output.strip().split("\n")
    duration = _parse_float(lines[-1])
    width = height = 0
    for line in lines:
        line = line.strip()
        if not _INT_RE.fullmatch(line):
            continue
        number = int(line)
        if not _INT32_MIN <= number <= _INT32_MAX:
            continue
        if width == 0:
            width = number
        elif height == 0:
            height = number
            break

    for attr in attrs:
        if isinstance(attr, DocumentAttributeVideo):
            attr.w = attr.w or width
            attr.h = attr.h or height
            attr.duration = attr.duration or duration
            return attrs, int(attr.duration)

    attrs.append(
        DocumentAttributeVideo(
            round_message=False,
            supports_streaming=True,
            w=width,
            h=height,
            duration=duration,
        )
    )
    return None if duration == 0 else None


def _audio_metadata(path: str, attrs: list[Any], duration: float) -> tuple[list[Any], int]:
    performer = ""
    title = ""
    try:
        tags_output = _probe(
            "-v", "error", "-show_entries", "format_tags=artist,title", "-of", "json", path
        )
    except (OSError, subprocess.CalledProcessError):
        tags_output = None

    try:
        duration_output = _probe(
            "-v", "error", "-show_entries", "format=duration",
            "-of", "default=noprint_wrappers=1:nokey=1", path,
        )
    except (OSError, subprocess.CalledProcessError):
        duration_output = None

    if tags_output is not None:
        try:
            tags = json.loads(tags_output).get("format", {}).get("tags", {})
        except (ValueError, AttributeError):
            tags = {}
        if isinstance(tags, dict):
            artist = tags.get("artist", "")
            name = tags.get("title", "")
            performer = artist if isinstance(artist, str) else ""
            title = name if isinstance(name, str) else ""
        performer = performer or _UNKNOWN_PERFORMER
        title = title or _base_name(path).replace(_extension(path), "", 1)

    if duration_output is not None:
        duration = _parse_float(duration_output)

    seconds = int(duration)
    for attr in attrs:
        if isinstance(attr, DocumentAttributeAudio):
            attr.performer = attr.performer or performer
            attr.title = attr.title or title
            attr.duration = attr.duration or seconds
            return attrs, int(attr.duration)

    attrs.append(
        DocumentAttributeAudio(voice=False, performer=performer, title=title, duration=seconds)
    )
    return attrs, seconds


def gather_video_metadata(path: str, attrs: Iterable[Any]) -> tuple[list[Any], int]:
    """Complete document attributes for the media file at ``path``.

    Returns the attribute list and the duration in whole seconds. Video
    dimensions and durations, and audio tags, are read with ffprobe; a
    video whose metadata cannot be read raises MediaMetadataError.
    """
    attrs = list(attrs)
    duration = 0.0

    if is_streamable_file(path):
        early = _video_metadata(path, attrs)
        if early is not None:
            return early
        video = next(a for a in reversed(attrs) if isinstance(a, DocumentAttributeVideo))
        duration = video.duration

    if _extension(path) == ".gif":
        attrs.append(DocumentAttributeAnimated())

    if is_audio_file(path):
        return _audio_metadata(path, attrs, duration)

    return attrs, int(duration)