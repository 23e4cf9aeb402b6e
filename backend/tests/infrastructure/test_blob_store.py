"""Filesystem Blob Store — atomic overwrite semantics under a root directory."""

import pytest

from person_api.infrastructure.blob_store import FilesystemBlobStore


async def test_write_creates_root_and_file(tmp_path):
    store = FilesystemBlobStore(tmp_path / "pictures")
    path = await store.write("1.png", b"first")
    assert (tmp_path / "pictures" / "1.png").read_bytes() == b"first"
    assert path.endswith("1.png")


async def test_write_fully_overwrites_previous_blob(tmp_path):
    store = FilesystemBlobStore(tmp_path)
    await store.write("1.png", b"a much longer original payload")
    await store.write("1.png", b"short")
    assert (tmp_path / "1.png").read_bytes() == b"short"


async def test_write_leaves_no_temp_files(tmp_path):
    store = FilesystemBlobStore(tmp_path)
    await store.write("1.png", b"data")
    assert [p.name for p in tmp_path.iterdir()] == ["1.png"]


@pytest.mark.parametrize("name", ["", "..", "../escape.png", "nested/1.png"])
async def test_write_rejects_unsafe_names(tmp_path, name):
    with pytest.raises(ValueError):
        await FilesystemBlobStore(tmp_path).write(name, b"data")
