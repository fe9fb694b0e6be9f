from pathlib import Path

import pytest

from gitform.models import RepositoryDescriptor
from gitform.utils import MalformedDescriptorError, decode_descriptor, encode_descriptor, parse_entries

CLIM_LINES = ["name: clim", "local: clim", "origin: git@github.com:hu-zza/clim.git"]


def test_decode_clim():
    descriptor = decode_descriptor(CLIM_LINES)

    assert descriptor.name == "clim"
    assert descriptor.local_path == Path("clim")
    assert descriptor.origin_url == "git@github.com:hu-zza/clim.git"


def test_encode_clim_keeps_line_order():
    descriptor = RepositoryDescriptor.create("clim", "clim", "git@github.com:hu-zza/clim.git")
    assert encode_descriptor(descriptor) == CLIM_LINES


def test_round_trip_keeps_every_field():
    descriptor = RepositoryDescriptor.create("Project name", "group/sub/path", "https://host/x/Project.git")
    decoded = decode_descriptor(encode_descriptor(descriptor))

    assert decoded == descriptor
    assert (decoded.name, decoded.local_path, decoded.origin_url) == \
        (descriptor.name, descriptor.local_path, descriptor.origin_url)


def test_decode_ignores_blank_and_malformed_lines():
    lines = ["", "# comment", "name: clim", "garbage", "local: clim\n", "origin: o: with: colons\r\n"]
    descriptor = decode_descriptor(lines)

    assert descriptor.local_path == Path("clim")
    assert descriptor.origin_url == "o: with: colons"


def test_decode_last_value_wins_on_duplicate_keys():
    lines = CLIM_LINES + ["local: other"]
    assert decode_descriptor(lines).local_path == Path("other")


@pytest.mark.parametrize("missing", ["name", "local", "origin"])
def test_decode_missing_key_raises(missing):
    lines = [line for line in CLIM_LINES if not line.startswith(missing)]
    with pytest.raises(MalformedDescriptorError, match=missing):
        decode_descriptor(lines)


def test_decode_rejects_escaping_local_path():
    lines = ["name: x", "local: ../../etc", "origin: url"]
    with pytest.raises(MalformedDescriptorError):
        decode_descriptor(lines)


def test_malformed_error_is_distinct_from_io_errors():
    assert issubclass(MalformedDescriptorError, ValueError)
    assert not issubclass(MalformedDescriptorError, OSError)


def test_parse_entries_splits_on_first_separator():
    assert parse_entries(["a: b: c", "no separator", "k:v"]) == {"a": "b: c"}
