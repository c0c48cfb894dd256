"""
Tests for the upload store and file catalog.
"""

import io
import os

import pytest

from lockbox.errors import NoFileUploaded, StorageError, StoredFileNotFound
from lockbox.storage.catalog import FileCatalog
from lockbox.storage.store import UploadStore, extension_of


class FixedClock:
    """Clock returning a fixed millisecond value."""

    def __init__(self, millis):
        self.millis = millis

    def __call__(self):
        return self.millis


class BrokenStream:
    """Stream that fails after handing out its first chunk."""

    def __init__(self, first_chunk):
        self.first_chunk = first_chunk
        self.reads = 0

    def read(self, size=-1):
        self.reads += 1
        if self.reads == 1:
            return self.first_chunk
        raise OSError("connection reset")


@pytest.mark.parametrize(
    "original,expected",
    [
        ("photo.png", ".png"),
        ("archive.tar.gz", ".gz"),
        ("README", ""),
        (".bashrc", ""),
        ("dir/sub/report.pdf", ".pdf"),
        ("C:\\Users\\me\\notes.txt", ".txt"),
    ],
)
def test_extension_of(original, expected):
    assert extension_of(original) == expected


def test_ensure_directory_is_idempotent(tmp_path):
    store = UploadStore(tmp_path / "a" / "b")
    store.ensure_directory()
    store.ensure_directory()
    assert (tmp_path / "a" / "b").is_dir()


def test_store_writes_content_under_timestamp_name(tmp_path):
    store = UploadStore(tmp_path, clock=FixedClock(1700000000123))

    name = store.store(io.BytesIO(b"\x89PNG data"), "photo.png")

    assert name == "1700000000123.png"
    assert (tmp_path / name).read_bytes() == b"\x89PNG data"


def test_store_creates_missing_directory(tmp_path):
    target = tmp_path / "later"
    store = UploadStore(target)

    name = store.store(io.BytesIO(b"x"), "a.txt")

    assert (target / name).is_file()


@pytest.mark.parametrize("stream,original", [(None, "a.txt"), (io.BytesIO(b"x"), ""), (io.BytesIO(b"x"), None)])
def test_store_rejects_missing_payload(tmp_path, stream, original):
    store = UploadStore(tmp_path / "uploads")

    with pytest.raises(NoFileUploaded):
        store.store(stream, original)

    assert not (tmp_path / "uploads").exists()


def test_same_millisecond_collides_without_strict_names(tmp_path):
    store = UploadStore(tmp_path, clock=FixedClock(42))

    first = store.store(io.BytesIO(b"first"), "a.txt")
    second = store.store(io.BytesIO(b"second"), "b.txt")

    assert first == second == "42.txt"
    assert os.listdir(tmp_path) == ["42.txt"]
    assert (tmp_path / "42.txt").read_bytes() == b"second"


def test_strict_names_never_overwrite(tmp_path):
    store = UploadStore(tmp_path, strict_unique_names=True, clock=FixedClock(42))

    first = store.store(io.BytesIO(b"first"), "a.txt")
    second = store.store(io.BytesIO(b"second"), "b.txt")

    assert first == "42.txt"
    assert second == "43.txt"
    assert (tmp_path / first).read_bytes() == b"first"
    assert (tmp_path / second).read_bytes() == b"second"


def test_strict_names_skip_existing_files(tmp_path):
    (tmp_path / "42.txt").write_bytes(b"old")
    store = UploadStore(tmp_path, strict_unique_names=True, clock=FixedClock(42))

    name = store.store(io.BytesIO(b"new"), "a.txt")

    assert name == "43.txt"
    assert (tmp_path / "42.txt").read_bytes() == b"old"


@pytest.mark.parametrize("strict", [False, True])
def test_failed_write_leaves_no_partial_file(tmp_path, strict):
    store = UploadStore(tmp_path, strict_unique_names=strict, clock=FixedClock(99))

    with pytest.raises(StorageError):
        store.store(BrokenStream(b"partial"), "a.txt")

    assert os.listdir(tmp_path) == []
    assert FileCatalog(store).list_all() == []


def test_retrieve_and_delete(tmp_path):
    store = UploadStore(tmp_path, clock=FixedClock(7))
    name = store.store(io.BytesIO(b"abc"), "a.bin")

    assert store.retrieve(name) == (tmp_path / name).resolve()

    store.delete(name)

    assert not (tmp_path / name).exists()
    with pytest.raises(StoredFileNotFound):
        store.retrieve(name)


def test_delete_missing_file_is_not_found(tmp_path):
    store = UploadStore(tmp_path)

    with pytest.raises(StoredFileNotFound):
        store.delete("123.txt")


def test_not_found_is_a_storage_error(tmp_path):
    store = UploadStore(tmp_path)

    with pytest.raises(StorageError):
        store.delete("123.txt")


@pytest.mark.parametrize("name", ["..", "../secret.txt", "", "."])
def test_names_outside_directory_are_not_found(tmp_path, name):
    upload_dir = tmp_path / "uploads"
    upload_dir.mkdir()
    (tmp_path / "secret.txt").write_text("keep out")
    store = UploadStore(upload_dir)

    with pytest.raises(StoredFileNotFound):
        store.retrieve(name)
    with pytest.raises(StoredFileNotFound):
        store.delete(name)

    assert (tmp_path / "secret.txt").exists()


def test_catalog_lists_exactly_the_directory(tmp_path):
    store = UploadStore(tmp_path)
    catalog = FileCatalog(store)
    for name in ("1.png", "2.txt", "3"):
        (tmp_path / name).write_bytes(b"x")
    (tmp_path / "subdir").mkdir()

    assert sorted(catalog.list_all()) == ["1.png", "2.txt", "3"]

    (tmp_path / "2.txt").unlink()
    (tmp_path / "4.gif").write_bytes(b"x")

    assert sorted(catalog.list_all()) == ["1.png", "3", "4.gif"]


def test_catalog_of_empty_directory(tmp_path):
    assert FileCatalog(UploadStore(tmp_path)).list_all() == []


def test_catalog_of_missing_directory_raises(tmp_path):
    catalog = FileCatalog(UploadStore(tmp_path / "missing"))

    with pytest.raises(StorageError):
        catalog.list_all()
