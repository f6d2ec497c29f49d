import os
import stat
import sys

import pytest

from pqclient.errors import QueryFileError, SecureDeleteFatalError
from pqclient.tools import secure_files
from pqclient.tools.name_generator import ALPHANUMERIC, RandomNameGenerator


def test_create_file_writes_content_and_mode(tmp_path, files):
    p = tmp_path / "q.priq"
    files.create_file(str(p), "#HOST h\n")
    assert p.read_text(encoding="utf-8") == "#HOST h\n"
    if sys.platform != "win32":
        assert stat.S_IMODE(p.stat().st_mode) == 0o644


def test_create_file_in_missing_dir_raises(tmp_path, files):
    with pytest.raises(QueryFileError) as exc:
        files.create_file(str(tmp_path / "nope" / "q.priq"), "x")
    assert exc.value.operation == "create"
    assert isinstance(exc.value, OSError)


def test_create_temp_file_uses_prefix(files):
    path = files.create_temp_file("abc", "payload")
    try:
        assert os.path.basename(path).startswith("abc")
        assert os.path.realpath(os.path.dirname(path)) == os.path.realpath(files.temp_dir)
        with open(path, encoding="utf-8") as f:
            assert f.read() == "payload"
    finally:
        os.remove(path)


def test_file_exists_ignores_directories(tmp_path, files):
    p = tmp_path / "f"
    p.write_text("x")
    assert files.file_exists(str(p))
    assert not files.file_exists(str(tmp_path))
    assert not files.file_exists(str(tmp_path / "missing"))


def test_secure_delete_overwrites_before_removal(tmp_path, files, monkeypatch):
    p = tmp_path / "secret.priq"
    original = "#PASS hunter2\n"
    p.write_text(original, encoding="utf-8")
    seen = {}
    real_remove = os.remove

    def spy_remove(path):
        with open(path, "rb") as f:
            seen["content"] = f.read()
        real_remove(path)

    monkeypatch.setattr(secure_files.os, "remove", spy_remove)
    files.secure_delete(str(p))

    assert not p.exists()
    # last pass writes '9' over the whole original length
    assert seen["content"] == b"9" * len(original)


def test_secure_delete_empty_file(tmp_path, files):
    p = tmp_path / "empty"
    p.write_text("")
    files.secure_delete(str(p))
    assert not p.exists()


def test_secure_delete_missing_file_is_recoverable(tmp_path, files):
    with pytest.raises(QueryFileError) as exc:
        files.secure_delete(str(tmp_path / "missing"))
    assert not isinstance(exc.value, SecureDeleteFatalError)
    assert exc.value.fatal is False


def test_secure_delete_failure_after_open_is_fatal(tmp_path, files, monkeypatch):
    p = tmp_path / "secret"
    p.write_text("abc")

    def failing_remove(path):
        raise PermissionError("denied")

    monkeypatch.setattr(secure_files.os, "remove", failing_remove)
    with pytest.raises(SecureDeleteFatalError) as exc:
        files.secure_delete(str(p))
    assert exc.value.fatal is True
    assert exc.value.filename == str(p)


def test_remove_file(tmp_path, files):
    p = tmp_path / "f"
    p.write_text("x")
    files.remove_file(str(p))
    assert not p.exists()
    with pytest.raises(QueryFileError):
        files.remove_file(str(p))


def test_name_generator_is_seedable():
    a = RandomNameGenerator(seed=7).next_name()
    b = RandomNameGenerator(seed=7).next_name()
    assert a == b
    assert len(a) == 128
    assert set(a) <= set(ALPHANUMERIC)


def test_name_generator_yields_distinct_names():
    gen = RandomNameGenerator(seed=7)
    assert len({gen.next_name() for _ in range(50)}) == 50


def test_create_file_writes_bytes_verbatim(tmp_path, files):
    p = tmp_path / "out.json"
    files.create_file(str(p), b"caf\xe9\r\n")
    assert p.read_bytes() == b"caf\xe9\r\n"
