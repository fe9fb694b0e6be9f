"""Utilities for local Git repositories: marker detection, origin lookup and cloning."""

import os
import shutil
import subprocess
import logging
from pathlib import Path
from typing import Optional, Union

from git import GitCommandError

logger = logging.getLogger('gitform.git_utils')

GIT_MARKER = '.git'
CONFIG_FILE = 'config'
URL_TOKEN = 'url = '

PathLike = Union[str, os.PathLike]


class GitRepositoryManager:
    """Class to inspect and clone Git repositories."""

    @staticmethod
    def find_origin_url(project_root: PathLike) -> Optional[str]:
        """
        Extract the origin URL from the Git config of a repository.

        The first line containing 'url = ' is used; the text after it, trimmed, is the URL.

        Args:
            project_root: Path to the repository root (the directory holding '.git')

        Returns:
            The origin URL, or None if the config has no (non-empty) url line

        Raises:
            OSError: If the config file cannot be read
        """
        config_path = Path(project_root) / GIT_MARKER / CONFIG_FILE
        with open(config_path, 'r', encoding='utf-8', errors='replace') as f:
            for line in f:
                if URL_TOKEN in line:
                    url = line[line.index(URL_TOKEN) + len(URL_TOKEN):].strip()
                    return url or None
        return None

    @staticmethod
    def clone_repository(url: str, local_path: PathLike, timeout: Optional[float] = None) -> int:
        """
        Clone a Git repository with an external 'git clone' process.

        Args:
            url: Repository URL
            local_path: Target directory of the clone (must not exist)
            timeout: Seconds after which the clone is killed (None: no limit)

        Returns:
            The exit status of git (always 0)

        Raises:
            GitCommandError: If git exits with a non-zero status
            subprocess.TimeoutExpired: If the clone did not finish in time
            OSError: If git cannot be started
        """
        cmd = ['git', 'clone', url, str(local_path)]
        logger.info(f"Cloning repository {url} to {local_path}")

        try:
            result = subprocess.run(cmd,
                                    stdin=subprocess.DEVNULL,
                                    stdout=subprocess.DEVNULL,
                                    stderr=subprocess.PIPE,
                                    timeout=timeout)
        except subprocess.TimeoutExpired:
            logger.warning(f"Clone of {url} timed out after {timeout} seconds")
            # A killed clone may leave a partial checkout behind
            if os.path.exists(local_path):
                shutil.rmtree(local_path, ignore_errors=True)
            raise

        if result.returncode != 0:
            stderr = result.stderr.decode('utf-8', errors='ignore')
            logger.warning(f"Clone of {url} failed with status {result.returncode}: {stderr.strip()}")
            raise GitCommandError(cmd, result.returncode, stderr)

        return result.returncode
