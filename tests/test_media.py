import subprocess
from unittest import mock

import pytest

from gramkit.media import (
    DocumentAttributeAnimated,
    DocumentAttributeAudio,
    DocumentAttributeFilename,
    DocumentAttributeVideo,
    MediaMetadataError,
    gather_video_metadata,
    is_audio_file,
    is_streamable,
    is_streamable_file,
    thumbnail_position,
)


def _completed(stdout: str) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(["ffprobe"], 0, stdout=stdout.encode(), stderr=b"")


@pytest.mark.parametrize("mime", ["video/mp4", "video/webm", "video/x-flv", "video/quicktime"])
def test_streamable_mime_types(mime):
    assert is_streamable(mime) is True


@pytest.mark.parametrize("mime", ["image/png", "audio/mpeg", "", "VIDEO/MP4"])
def test_non_streamable_mime_types(mime):
    assert is_streamable(mime) is False


@pytest.mark.parametrize("path", ["clip.mp4", "dir/movie.mkv", "a.b.webm", "x.3gpp2"])
def test_streamable_files(path):
    assert is_streamable_file(path) is True


@pytest.mark.parametrize("path", ["clip.MP4", "song.mp3", "noext", "dir.mp4/file"])
def test_non_streamable_files(path):
    assert is_streamable_file(path) is False


@pytest.mark.parametrize("path", ["song.mp3", "voice.ogg", "track.opus", "a/b.flac"])
def test_audio_files(path):
    assert is_audio_file(path) is True


@pytest.mark.parametrize("path", ["video.mp4", "dir.mp3/file", "song.MP3", "plain"])
def test_non_audio_files(path):
    assert is_audio_file(path) is False


def test_thumbnail_position_zero_uses_default_duration():
    assert thumbnail_position(0) == thumbnail_position(2)


def test_thumbnail_position_short_video_is_deterministic():
    assert thumbnail_position(10) == thumbnail_position(10)
    assert thumbnail_position(10) == 6


@pytest.mark.parametrize("duration", [11, 40, 600])
def test_thumbnail_position_long_video_in_range(duration):
    for _ in range(50):
        position = thumbnail_position(duration)
        assert 1 <= position <= duration // 2


def test_plain_file_is_left_alone():
    attrs = [DocumentAttributeFilename("notes.txt")]
    with mock.patch("subprocess.run") as run:
        result, duration = gather_video_metadata("notes.txt", attrs)
    run.assert_not_called()
    assert result == attrs
    assert duration == 0


def test_input_list_is_not_modified():
    attrs = [DocumentAttributeFilename("anim.gif")]
    result, _ = gather_video_metadata("anim.gif", attrs)
    assert len(attrs) == 1
    assert len(result) == 2


def test_gif_gets_animated_attribute():
    result, duration = gather_video_metadata("anim.gif", [])
    assert result == [DocumentAttributeAnimated()]
    assert duration == 0


def test_video_metadata_from_ffprobe():
    with mock.patch("subprocess.run", return_value=_completed("1280\n720\n30.0\n")) as run:
        result, duration = gather_video_metadata("movie.mp4", [])
    assert run.call_args.args[0][0] == "ffprobe"
    assert run.call_args.args[0][-1] == "movie.mp4"
    assert result == [
        DocumentAttributeVideo(
            round_message=False, supports_streaming=True, w=1280, h=720, duration=30.0
        )
    ]
    assert duration == 30


def test_existing_video_attribute_keeps_its_values():
    existing = DocumentAttributeVideo(w=640, duration=5.0)
    with mock.patch("subprocess.run", return_value=_completed("1280\n720\n30.0\n")):
        result, duration = gather_video_metadata("movie.mp4", [existing])
    assert result == [existing]
    assert existing.w == 640
    assert existing.h == 720
    assert existing.duration == 5.0
    assert duration == 5


def test_video_probe_failure_raises():
    error = subprocess.CalledProcessError(1, ["ffprobe"])
    with mock.patch("subprocess.run", side_effect=error):
        with pytest.raises(MediaMetadataError):
            gather_video_metadata("movie.mp4", [])


def test_video_probe_missing_raises():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("ffprobe")):
        with pytest.raises(MediaMetadataError):
            gather_video_metadata("movie.webm", [])


def test_audio_metadata_from_tags():
    tags = '{"format": {"tags": {"artist": "Band", "title": "Song"}}}'
    outputs = [_completed(tags), _completed("42.9\n")]
    with mock.patch("subprocess.run", side_effect=outputs):
        result, duration = gather_video_metadata("music/track.mp3", [])
    assert result == [DocumentAttributeAudio(voice=False, performer="Band", title="Song", duration=42)]
    assert duration == 42


def test_audio_without_tags_uses_file_name_and_unknown_performer():
    outputs = [_completed('{"format": {}}'), _completed("3.0\n")]
    with mock.patch("subprocess.run", side_effect=outputs):
        result, _ = gather_video_metadata("music/track.flac", [])
    (audio,) = result
    assert audio.performer == "Unknown"
    assert audio.title == "track"


def test_existing_audio_attribute_keeps_its_values():
    existing = DocumentAttributeAudio(performer="Mine", duration=7)
    tags = '{"format": {"tags": {"artist": "Band", "title": "Song"}}}'
    outputs = [_completed(tags), _completed("42.0\n")]
    with mock.patch("subprocess.run", side_effect=outputs):
        result, duration = gather_video_metadata("track.ogg", [existing])
    assert result == [existing]
    assert existing.performer == "Mine"
    assert existing.title == "Song"
    assert duration == 7


def test_audio_without_ffprobe_yields_empty_attribute():
    with mock.patch("subprocess.run", side_effect=FileNotFoundError("ffprobe")):
        result, duration = gather_video_metadata("track.wav", [])
    assert result == [DocumentAttributeAudio()]
    assert duration == 0