"""GitForm: save the structure of local Git repositories and rebuild it by cloning."""

from .models import RepositoryDescriptor, ResultReport
from .sync import ProjectBuilder, ProjectMapper, RepositoryDiscovery
from .utils import DescriptorStore, MalformedDescriptorError, Settings

__version__ = "0.1.0"

__all__ = [
    'RepositoryDescriptor',
    'ResultReport',
    'ProjectBuilder',
    'ProjectMapper',
    'RepositoryDiscovery',
    'DescriptorStore',
    'MalformedDescriptorError',
    'Settings'
]
