"""Discovery of Git repositories below a root directory."""

import os
import logging
from pathlib import Path
from typing import Iterator, Optional, Union

from ..models import RepositoryDescriptor, ResultReport
from ..utils.git_utils import GitRepositoryManager, GIT_MARKER

logger = logging.getLogger('gitform.repository_discovery')

UNDETERMINED_PROJECT = "Cannot be determined whether it is a project"
MISSING_ORIGIN = "Cannot retrieve origin URL"


class RepositoryDiscovery:
    """
    Walks a directory tree and yields a descriptor for every repository with an origin.

    A directory is a repository root if it directly contains a '.git' directory. The walk
    continues below repository roots, so nested repositories are found too; only the
    '.git' directories themselves are not entered.
    """

    def __init__(self, root: Union[str, os.PathLike], report: Optional[ResultReport] = None):
        self.root = Path(root)
        self.report = report if report is not None else ResultReport()

    def iter_repositories(self) -> Iterator[RepositoryDescriptor]:
        """
        Lazily yield the descriptors of the repositories found below the root.

        Raises:
            NotADirectoryError: If the root is not a directory
            OSError: If the root itself cannot be listed
        """
        if not self.root.is_dir():
            raise NotADirectoryError(f"Git root {self.root} is not a directory.")

        for dirpath, dirnames, _ in os.walk(self.root, onerror=self._on_walk_error):
            if GIT_MARKER in dirnames:
                dirnames.remove(GIT_MARKER)
                descriptor = self._create_descriptor(Path(dirpath))
                if descriptor is not None:
                    yield descriptor
            dirnames.sort()

    def _on_walk_error(self, error: OSError):
        if error.filename is not None and Path(error.filename) == self.root:
            raise error
        logger.warning(f"Cannot list directory {error.filename}: {error}")
        self.report.append_additional_info(UNDETERMINED_PROJECT, str(error.filename))

    def _create_descriptor(self, project_root: Path) -> Optional[RepositoryDescriptor]:
        if not (project_root / GIT_MARKER).is_dir():
            return None

        try:
            origin_url = GitRepositoryManager.find_origin_url(project_root)
        except OSError as e:
            logger.warning(f"Cannot read Git config of {project_root}: {e}")
            self.report.append_additional_info(MISSING_ORIGIN, str(project_root))
            return None

        if origin_url is None:
            logger.debug(f"No origin URL in {project_root}, skipping")
            return None

        local_path = project_root.relative_to(self.root)
        if not local_path.parts:
            # The root itself is a repository; it has no location relative to itself
            logger.info(f"Git root {self.root} is a repository itself, skipping")
            return None

        return RepositoryDescriptor(origin_url=origin_url, local_path=local_path)
