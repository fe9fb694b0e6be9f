"""Line oriented 'key: value' encoding of repository descriptors."""

import logging
from typing import Dict, Iterable, List

from ..models import RepositoryDescriptor

logger = logging.getLogger('gitform.descriptor_codec')

SEPARATOR = ": "
NAME_KEY = "name"
LOCAL_KEY = "local"
ORIGIN_KEY = "origin"
REQUIRED_KEYS = (NAME_KEY, LOCAL_KEY, ORIGIN_KEY)


class MalformedDescriptorError(ValueError):
    """Raised when descriptor content lacks a required key or holds invalid values."""


def encode_descriptor(descriptor: RepositoryDescriptor) -> List[str]:
    """
    Export a descriptor as three 'key: value' lines.

    Args:
        descriptor: Descriptor to encode

    Returns:
        Lines for name, local path and origin, in this order
    """
    return [
        f"{NAME_KEY}{SEPARATOR}{descriptor.name}",
        f"{LOCAL_KEY}{SEPARATOR}{descriptor.local_key}",
        f"{ORIGIN_KEY}{SEPARATOR}{descriptor.origin_url}",
    ]


def parse_entries(lines: Iterable[str]) -> Dict[str, str]:
    """
    Parse 'key: value' lines into a dictionary.

    Every line is split on the first ': '. Lines without the separator are ignored,
    and when a key repeats the last value wins.
    """
    entries = {}
    for line in lines:
        parts = line.rstrip('\r\n').split(SEPARATOR, 1)
        if len(parts) == 2:
            entries[parts[0]] = parts[1]
    return entries


def decode_descriptor(lines: Iterable[str]) -> RepositoryDescriptor:
    """
    Build a descriptor from 'key: value' lines.

    Args:
        lines: Lines with at least the keys name, local and origin

    Returns:
        RepositoryDescriptor

    Raises:
        MalformedDescriptorError: If a required key is missing or a value is invalid
    """
    entries = parse_entries(lines)

    missing = [key for key in REQUIRED_KEYS if key not in entries]
    if missing:
        raise MalformedDescriptorError(f"Missing required keys: {', '.join(missing)}")

    try:
        return RepositoryDescriptor.create(
            name=entries[NAME_KEY],
            local_path=entries[LOCAL_KEY],
            origin_url=entries[ORIGIN_KEY],
        )
    except ValueError as e:
        raise MalformedDescriptorError(str(e)) from e
