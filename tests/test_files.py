import json
import os
from dataclasses import dataclass

import pytest

from gramkit.files import (
    file_exists,
    gen_rand_int,
    join_abs_working_dir,
    path_is_writable,
    to_json,
)


@dataclass
class _Sample:
    name: str
    blob: bytes
    count: int = 0


def test_join_empty_uses_default_session(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = join_abs_working_dir("")
    assert result == os.path.join(os.getcwd(), "session.dat")


def test_join_relative_name(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = join_abs_working_dir("my.session")
    assert os.path.isabs(result)
    assert os.path.basename(result) == "my.session"
    assert os.path.dirname(result) == os.getcwd()


def test_join_relative_path_is_cleaned(tmp_path, monkeypatch):
    monkeypatch.chdir(tmp_path)
    result = join_abs_working_dir(os.path.join("sub", "..", "x.dat"))
    assert result == os.path.join(os.getcwd(), "x.dat")


def test_join_absolute_path_unchanged(tmp_path):
    path = str(tmp_path / "abs.dat")
    assert join_abs_working_dir(path) == path


def test_file_exists(tmp_path):
    target = tmp_path / "f.txt"
    assert file_exists(target) is False
    target.write_text("x")
    assert file_exists(target) is True
    assert file_exists(tmp_path) is True


def test_path_is_writable(tmp_path):
    target = tmp_path / "w.txt"
    assert path_is_writable(target) is False
    assert not target.exists()
    target.write_text("content")
    assert path_is_writable(target) is True
    assert target.read_text() == "content"


def test_directory_is_not_writable_file(tmp_path):
    assert path_is_writable(tmp_path) is False


def test_gen_rand_int_range():
    values = [gen_rand_int() for _ in range(200)]
    assert all(0 <= v < 2**31 for v in values)
    assert len(set(values)) > 1


def test_to_json_dataclass_round_trip():
    text = to_json(_Sample(name="a", blob=b"hi", count=3), compact=True)
    assert json.loads(text) == {"name": "a", "blob": "aGk=", "count": 3}
    assert text.index('"name"') < text.index('"blob"') < text.index('"count"')


def test_to_json_indented_by_default():
    text = to_json({"k": [1, 2]})
    assert "\n  " in text
    assert json.loads(text) == {"k": [1, 2]}


def test_to_json_compact_sorts_map_keys():
    assert to_json({"b": 1, "a": 2}, compact=True) == '{"a":2,"b":1}'


def test_to_json_escapes_html():
    text = to_json("<b>&", compact=True)
    assert "<" not in text and ">" not in text and "&" not in text
    assert json.loads(text) == "<b>&"


@pytest.mark.parametrize("bad", [float("nan"), {1.5: "x"}, object()])
def test_to_json_reports_errors(bad):
    assert to_json(bad).startswith("marshal: ")