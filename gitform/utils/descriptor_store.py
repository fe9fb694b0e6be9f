"""Storage of repository descriptors as files in a directory."""

import os
import logging
from pathlib import Path
from typing import List, Union

from ..models import RepositoryDescriptor
from .descriptor_codec import encode_descriptor, decode_descriptor

logger = logging.getLogger('gitform.descriptor_store')

DEFAULT_EXTENSION = '.yaml'


def path_hash(local_path: Union[str, os.PathLike]) -> int:
    """
    Stable 32-bit hash of a relative path.

    It is the 31-polynomial over the UTF-8 bytes of the POSIX path plus 31, wrapped to
    a signed 32-bit integer, so file names match the ones the Java GitForm wrote
    (e.g. 'clim' -> 3056492).
    """
    h = 0
    for byte in Path(local_path).as_posix().encode('utf-8'):
        h = (31 * h + byte) & 0xFFFFFFFF
    h = (31 + h) & 0xFFFFFFFF
    return h - 0x100000000 if h >= 0x80000000 else h


class DescriptorStore:
    """Directory of descriptor files named '{name}_{hash}{extension}'."""

    def __init__(self, directory: Union[str, os.PathLike], extension: str = DEFAULT_EXTENSION):
        self.directory = Path(directory)
        self.extension = extension

    def ensure_output_directory(self):
        """
        Create the store directory (with parents) if it does not exist.

        Raises:
            NotADirectoryError: If the path exists but is not a directory
            OSError: If the directory cannot be created
        """
        if self.directory.exists():
            if not self.directory.is_dir():
                raise NotADirectoryError(f"{self.directory} should be a directory.")
        else:
            self.directory.mkdir(parents=True)
            logger.info(f"Created descriptor directory {self.directory}")

    def filename_for(self, descriptor: RepositoryDescriptor) -> str:
        return f"{descriptor.name}_{path_hash(descriptor.local_path)}{self.extension}"

    def write(self, descriptor: RepositoryDescriptor) -> Path:
        """
        Write a descriptor to a new file of the store. Existing files are never overwritten.

        Returns:
            Path of the written file

        Raises:
            FileExistsError: If a file with the same name already exists
        """
        target = self.directory / self.filename_for(descriptor)
        with open(target, 'x', encoding='utf-8', newline='\n') as f:
            f.write('\n'.join(encode_descriptor(descriptor)) + '\n')
        logger.debug(f"Descriptor of {descriptor.local_key} saved to {target}")
        return target

    def list_descriptor_files(self) -> List[Path]:
        """
        List the descriptor files of the store (non-recursive), sorted by name.

        Raises:
            OSError: If the directory cannot be listed
        """
        with os.scandir(self.directory) as entries:
            files = [Path(entry.path) for entry in entries
                     if entry.name.endswith(self.extension) and entry.is_file()]
        return sorted(files)

    def load(self, path: Union[str, os.PathLike]) -> RepositoryDescriptor:
        """
        Read and decode a descriptor file.

        Raises:
            OSError: If the file cannot be read
            MalformedDescriptorError: If the content is not a valid descriptor
        """
        with open(path, 'r', encoding='utf-8') as f:
            return decode_descriptor(f)
