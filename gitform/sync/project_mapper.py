"""Save operation: map local repositories to descriptor files."""

import os
import logging
from pathlib import Path
from typing import Optional, Union

from ..models import RepositoryDescriptor, ResultReport
from ..utils.descriptor_store import DescriptorStore
from .repository_discovery import RepositoryDiscovery

logger = logging.getLogger('gitform.project_mapper')

SAVE_OBJECTIVE = "Save GitHub projects"
PROJECT_EXISTS = "Project already exists"
CANNOT_SAVE_PROJECT = "Cannot save project"
CANNOT_SAVE_PROJECTS = "Cannot save projects"


class ProjectMapper:
    """
    Saves every repository found below ``git_root`` as a descriptor file of ``store``.

    The files can be shared and used by ProjectBuilder to rebuild the same layout
    (relative to another git root) on a different machine.
    """

    def __init__(self, git_root: Union[str, os.PathLike], store: DescriptorStore,
                 report: Optional[ResultReport] = None):
        self.git_root = Path(git_root)
        self.store = store
        self.report = report if report is not None else ResultReport()

    def save(self) -> ResultReport:
        """
        Discover the repositories and write one descriptor file per repository.

        Per-repository problems are recorded in the report; only a failure to prepare the
        store directory or to walk the git root makes the report unsuccessful.

        Returns:
            The report of the operation
        """
        self.report.clear()
        self.report.objective = SAVE_OBJECTIVE

        try:
            self.store.ensure_output_directory()
            discovery = RepositoryDiscovery(self.git_root, self.report)
            for descriptor in discovery.iter_repositories():
                self._safely_save(descriptor)
            self.report.successful = True
        except OSError as e:
            logger.error(f"Cannot save projects from {self.git_root}: {e}")
            self.report.append_additional_info(CANNOT_SAVE_PROJECTS, str(e))

        return self.report

    def _safely_save(self, descriptor: RepositoryDescriptor):
        try:
            self.store.write(descriptor)
            self.report.append_result(descriptor.local_key)
        except FileExistsError:
            self.report.append_additional_info(PROJECT_EXISTS, descriptor.local_key)
        except OSError as e:
            logger.warning(f"Cannot save project {descriptor.local_key}: {e}")
            self.report.append_additional_info(CANNOT_SAVE_PROJECT, descriptor.local_key)
