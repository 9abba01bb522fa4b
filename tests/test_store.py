import pytest

from verkeep.exceptions import RecordSyntaxError
from verkeep.semver import SemVer
from verkeep.store import VersionStore


def test_read_missing_store_returns_none(tmp_path):
    store = VersionStore(tmp_path, "resources/VERSION")
    assert not store.exists()
    assert store.read() is None


def test_write_creates_parent_directories(tmp_path):
    store = VersionStore(tmp_path, "resources/VERSION")
    store.write(SemVer(0, 1, 0))

    assert (tmp_path / "resources" / "VERSION").is_file()
    assert store.read() == SemVer(0, 1, 0)


def test_write_replaces_previous_record_and_leaves_no_temp_files(tmp_path):
    store = VersionStore(tmp_path, "resources/VERSION")
    store.write(SemVer(1, 0, 0, "rc.1"))
    store.write(SemVer(1, 0, 0))

    assert store.read() == SemVer(1, 0, 0)
    assert [p.name for p in (tmp_path / "resources").iterdir()] == ["VERSION"]


def test_read_propagates_syntax_errors(tmp_path):
    path = tmp_path / "resources" / "VERSION"
    path.parent.mkdir()
    path.write_text("(println :oops)", encoding="utf-8")

    with pytest.raises(RecordSyntaxError):
        VersionStore(tmp_path, "resources/VERSION").read()


def test_read_rejects_invalid_utf8(tmp_path):
    path = tmp_path / "resources" / "VERSION"
    path.parent.mkdir()
    path.write_bytes(b'{:major 1 :pre-release "\xff\xfe"}')

    with pytest.raises(RecordSyntaxError, match="not valid UTF-8"):
        VersionStore(tmp_path, "resources/VERSION").read()
