"""Utilities for GitForm."""

from .descriptor_codec import (
    MalformedDescriptorError,
    encode_descriptor,
    decode_descriptor,
    parse_entries
)
from .descriptor_store import DescriptorStore, path_hash
from .git_utils import GitRepositoryManager
from .settings import Settings, calculate_default_workers

__all__ = [
    'MalformedDescriptorError',
    'encode_descriptor',
    'decode_descriptor',
    'parse_entries',
    'DescriptorStore',
    'path_hash',
    'GitRepositoryManager',
    'Settings',
    'calculate_default_workers'
]
