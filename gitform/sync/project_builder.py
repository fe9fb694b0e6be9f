"""Load operation: rebuild the repository layout by cloning from descriptor files."""

import os
import logging
import subprocess
import concurrent.futures
from pathlib import Path
from typing import Callable, Iterable, List, Optional, Union

from tqdm import tqdm

from ..models import RepositoryDescriptor, ResultReport
from ..utils.descriptor_codec import MalformedDescriptorError
from ..utils.descriptor_store import DescriptorStore
from ..utils.git_utils import GitRepositoryManager
from ..utils.settings import calculate_default_workers

logger = logging.getLogger('gitform.project_builder')

LOAD_OBJECTIVE = "Load GitHub projects"
PROJECT_EXISTS = "Project already exists"
DUPLICATE_PROJECT = "Duplicate project"
CANNOT_CLONE_PROJECT = "Cannot clone project"
CANNOT_CLONE_TIMEOUT = "Cannot clone project (timeout)"
CANNOT_LOAD_PROJECT = "Cannot load project"
CANNOT_LOAD_PROJECTS = "Cannot load projects"
CANNOT_READ_FILE = "Cannot read project file"
CANNOT_PARSE_FILE = "Cannot parse project file"

CloneFunction = Callable[[str, Path, Optional[float]], object]


class ProjectBuilder:
    """
    Clones every missing repository described in the descriptor store.

    The clones run concurrently in a bounded thread pool, each worker driving one
    external 'git clone'. A nested project is launched only after its pending ancestors
    have finished; its parent directories are created right before. Outcomes are
    collected on the calling thread only, so the report needs no locking.
    """

    def __init__(self, git_root: Union[str, os.PathLike], store: DescriptorStore,
                 report: Optional[ResultReport] = None, max_workers: Optional[int] = None,
                 clone_timeout: Optional[float] = None,
                 clone_function: Optional[CloneFunction] = None,
                 show_progress: bool = False):
        """
        Initialize the builder.

        Args:
            git_root: Directory the descriptor local paths are relative to
            store: Store holding the descriptor files
            report: Report to fill (default: a new one)
            max_workers: Maximum number of concurrent clones (default: auto-calculated)
            clone_timeout: Seconds after which a single clone is aborted (default: no limit)
            clone_function: Callable (url, target, timeout) performing one clone; it must
                raise on failure (default: GitRepositoryManager.clone_repository)
            show_progress: Show a progress bar on stderr while cloning
        """
        self.git_root = Path(git_root)
        self.store = store
        self.report = report if report is not None else ResultReport()
        if max_workers is not None and max_workers < 1:
            logger.warning(f"Invalid number of clone workers {max_workers}, using the default")
            max_workers = None
        self.max_workers = max_workers or calculate_default_workers()
        self.clone_timeout = clone_timeout
        self.clone_function = clone_function or GitRepositoryManager.clone_repository
        self.show_progress = show_progress

    def load(self) -> ResultReport:
        """
        Parse every descriptor file of the store and clone the missing repositories.

        If the store directory cannot be listed nothing is cloned and the report stays
        unsuccessful.

        Returns:
            The report of the operation
        """
        self._reset()

        try:
            files = self.store.list_descriptor_files()
        except OSError as e:
            logger.error(f"Cannot list descriptor files in {self.store.directory}: {e}")
            self.report.append_additional_info(CANNOT_LOAD_PROJECTS, str(e))
            return self.report

        descriptors = [d for d in map(self._parse_project_file, files) if d is not None]
        logger.info(f"Found {len(descriptors)}/{len(files)} valid descriptor files")

        self._clone_all(descriptors)
        return self.report

    def materialize(self, descriptors: Iterable[RepositoryDescriptor]) -> ResultReport:
        """
        Clone every descriptor whose target directory does not exist yet.

        Returns:
            The report of the operation; it is successful once all outcomes are collected,
            per-repository failures are listed as additional info
        """
        self._reset()
        self._clone_all(descriptors)
        return self.report

    def _reset(self):
        self.report.clear()
        self.report.objective = LOAD_OBJECTIVE

    def _parse_project_file(self, path: Path) -> Optional[RepositoryDescriptor]:
        try:
            return self.store.load(path)
        except MalformedDescriptorError as e:
            logger.warning(f"Malformed descriptor file {path}: {e}")
            self.report.append_additional_info(CANNOT_PARSE_FILE, path.name)
        except (OSError, UnicodeDecodeError) as e:
            logger.warning(f"Cannot read descriptor file {path}: {e}")
            self.report.append_additional_info(CANNOT_READ_FILE, path.name)
        return None

    def _prepare(self, descriptors: Iterable[RepositoryDescriptor]) -> List[RepositoryDescriptor]:
        """
        Filter out existing and duplicate projects.

        Existence is checked for the whole batch before any directory is created.
        """
        pending = []
        scheduled = set()

        for descriptor in descriptors:
            target = self.git_root / descriptor.local_path

            if descriptor in scheduled:
                self.report.append_additional_info(DUPLICATE_PROJECT, descriptor.local_key)
                continue

            if target.exists() or target.is_symlink():
                self.report.append_additional_info(PROJECT_EXISTS, descriptor.local_key)
                continue

            scheduled.add(descriptor)
            pending.append(descriptor)

        return pending

    def _clone_all(self, descriptors: Iterable[RepositoryDescriptor]):
        pending = self._prepare(descriptors)

        if pending:
            # A nested project waits until every pending ancestor has been cloned
            waiting = {
                descriptor: {other for other in pending if other.local_path in descriptor.local_path.parents}
                for descriptor in pending
            }
            workers = min(len(pending), self.max_workers)
            logger.info(f"Cloning {len(pending)} repositories with {workers} workers")

            with concurrent.futures.ThreadPoolExecutor(max_workers=workers) as executor, \
                    tqdm(total=len(pending), desc="Cloning", unit="repo",
                         disable=not self.show_progress) as progress:
                future_to_project = {}
                self._submit_ready(executor, waiting, future_to_project, progress)

                while future_to_project:
                    done, _ = concurrent.futures.wait(
                        future_to_project, return_when=concurrent.futures.FIRST_COMPLETED)
                    for future in done:
                        descriptor = future_to_project.pop(future)
                        self._append_outcome(descriptor, future)
                        self._release(waiting, descriptor)
                        progress.update(1)
                    self._submit_ready(executor, waiting, future_to_project, progress)

        self.report.successful = True

    def _submit_ready(self, executor: concurrent.futures.Executor, waiting: dict,
                      future_to_project: dict, progress: tqdm):
        """Create the parent directories of unblocked projects and launch their clones."""
        ready = [descriptor for descriptor, blockers in waiting.items() if not blockers]
        while ready:
            for descriptor in ready:
                del waiting[descriptor]
                target = self.git_root / descriptor.local_path
                try:
                    target.parent.mkdir(parents=True, exist_ok=True)
                except OSError as e:
                    logger.warning(f"Cannot create parent directories of {target}: {e}")
                    self.report.append_additional_info(
                        CANNOT_CLONE_PROJECT, f"{descriptor.local_key} ({descriptor.origin_url})")
                    self._release(waiting, descriptor)
                    progress.update(1)
                    continue

                future = executor.submit(self.clone_function, descriptor.origin_url, target, self.clone_timeout)
                future_to_project[future] = descriptor

            # Launch failures may unblock further projects right away
            ready = [descriptor for descriptor, blockers in waiting.items() if not blockers]

    @staticmethod
    def _release(waiting: dict, finished: RepositoryDescriptor):
        for blockers in waiting.values():
            blockers.discard(finished)

    def _append_outcome(self, descriptor: RepositoryDescriptor, future: concurrent.futures.Future):
        try:
            future.result()
        except subprocess.TimeoutExpired:
            self.report.append_additional_info(CANNOT_CLONE_TIMEOUT, descriptor.local_key)
        except Exception as e:
            logger.error(f"Error cloning {descriptor.origin_url} into {descriptor.local_key}: {e}")
            self.report.append_additional_info(CANNOT_LOAD_PROJECT, descriptor.local_key)
        else:
            logger.info(f"Successfully cloned {descriptor.local_key}")
            self.report.append_result(descriptor.local_key)
