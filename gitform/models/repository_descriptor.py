"""Model for the portable descriptor of a single repository."""

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Union


def name_from_origin(origin_url: str) -> str:
    """Extract the repository name from an origin URL (last segment, without '.git')."""
    name = origin_url.strip().rstrip('/')
    name = name.split('/')[-1].split(':')[-1]
    if name.endswith('.git'):
        name = name[:-4]
    return name


@dataclass(frozen=True, eq=False)
class RepositoryDescriptor:
    """
    Identity of one repository: its name, its location relative to the git root
    and the origin URL it can be re-cloned from.

    Two descriptors are equal if and only if their ``local_path`` is equal; name and
    origin are payload only.
    """
    origin_url: str
    local_path: Path
    name: str = field(default="")

    def __post_init__(self):
        local_path = Path(self.local_path)
        origin_url = self.origin_url.strip()

        if local_path.is_absolute() or not local_path.parts:
            raise ValueError(f"Local path must be a non-empty relative path: '{self.local_path}'")
        if '..' in local_path.parts:
            raise ValueError(f"Local path must not leave the git root: '{self.local_path}'")

        name = self.name.strip() or name_from_origin(origin_url) or local_path.name

        object.__setattr__(self, 'local_path', local_path)
        object.__setattr__(self, 'origin_url', origin_url)
        object.__setattr__(self, 'name', name)

    @classmethod
    def create(cls, name: str, local_path: Union[str, PurePath], origin_url: str) -> 'RepositoryDescriptor':
        return cls(origin_url=origin_url, local_path=Path(local_path), name=name)

    @property
    def local_key(self) -> str:
        """The local path in POSIX form, used in reports and descriptor files."""
        return self.local_path.as_posix()

    def __eq__(self, other):
        if not isinstance(other, RepositoryDescriptor):
            return NotImplemented
        return self.local_path == other.local_path

    def __hash__(self):
        return hash(self.local_path)
