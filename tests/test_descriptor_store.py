from pathlib import Path

import pytest

from gitform.models import RepositoryDescriptor
from gitform.utils import DescriptorStore, MalformedDescriptorError, path_hash

CLIM = RepositoryDescriptor.create("clim", "clim", "git@github.com:hu-zza/clim.git")


@pytest.fixture
def store(tmp_path: Path) -> DescriptorStore:
    store = DescriptorStore(tmp_path / "GitForm")
    store.ensure_output_directory()
    return store


def test_path_hash_matches_existing_descriptor_files():
    assert path_hash("clim") == 3056492
    assert path_hash(Path("clim")) == 3056492


def test_path_hash_is_signed_32_bit():
    value = path_hash("some/rather/long/relative/path/to/a/repository")
    assert -2 ** 31 <= value < 2 ** 31
    assert value == path_hash(Path("some/rather/long/relative/path/to/a/repository"))


def test_filename_for():
    assert DescriptorStore("x").filename_for(CLIM) == "clim_3056492.yaml"


def test_ensure_output_directory_creates_parents(tmp_path):
    store = DescriptorStore(tmp_path / "a" / "b")
    store.ensure_output_directory()
    assert store.directory.is_dir()
    store.ensure_output_directory()


def test_ensure_output_directory_rejects_file(tmp_path):
    path = tmp_path / "GitForm"
    path.write_text("not a directory")
    with pytest.raises(NotADirectoryError):
        DescriptorStore(path).ensure_output_directory()


def test_write_creates_descriptor_file(store):
    written = store.write(CLIM)

    assert written == store.directory / "clim_3056492.yaml"
    assert written.read_text(encoding="utf-8") == \
        "name: clim\nlocal: clim\norigin: git@github.com:hu-zza/clim.git\n"


def test_write_twice_raises(store):
    store.write(CLIM)
    with pytest.raises(FileExistsError):
        store.write(CLIM)


def test_write_colliding_filename_never_overwrites(store):
    store.write(CLIM)
    other = RepositoryDescriptor.create("clim", "clim", "https://example.com/other/clim.git")

    with pytest.raises(FileExistsError):
        store.write(other)
    assert store.load(store.directory / "clim_3056492.yaml").origin_url == CLIM.origin_url


def test_list_descriptor_files(store):
    store.write(RepositoryDescriptor.create("b", "group/b", "url-b"))
    store.write(RepositoryDescriptor.create("a", "a", "url-a"))
    (store.directory / "notes.txt").write_text("ignored")
    (store.directory / "nested.yaml").mkdir()
    (store.directory / "nested.yaml" / "inner.yaml").write_text("name: x")

    names = [path.name for path in store.list_descriptor_files()]

    assert names == sorted(names)
    assert len(names) == 2
    assert all(name.endswith(".yaml") for name in names)


def test_list_missing_directory_raises(tmp_path):
    with pytest.raises(OSError):
        DescriptorStore(tmp_path / "missing").list_descriptor_files()


def test_load_round_trip(store):
    descriptor = RepositoryDescriptor.create("tool", "B/tool", "git@github.com:x/tool.git")
    loaded = store.load(store.write(descriptor))

    assert loaded == descriptor
    assert (loaded.name, loaded.origin_url) == ("tool", "git@github.com:x/tool.git")


def test_load_malformed_file_raises(store):
    path = store.directory / "broken_1.yaml"
    path.write_text("name: broken\norigin: url\n", encoding="utf-8")

    with pytest.raises(MalformedDescriptorError):
        store.load(path)
