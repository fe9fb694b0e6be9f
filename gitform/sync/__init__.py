"""Save and load operations of GitForm."""

from .repository_discovery import RepositoryDiscovery
from .project_mapper import ProjectMapper
from .project_builder import ProjectBuilder

__all__ = [
    'RepositoryDiscovery',
    'ProjectMapper',
    'ProjectBuilder'
]
