"""Settings of GitForm, stored as YAML in the user's home directory."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import psutil
import yaml

logger = logging.getLogger('gitform.settings')

SETTINGS_DIR_NAME = '.git-form'
SETTINGS_FILE_NAME = 'settings.yaml'
GIT_DIR_NAME = 'GIT'
GIT_FORM_DIR_NAME = 'GitForm'


def calculate_default_workers() -> int:
    """Default number of parallel clones based on the available CPUs."""
    cpu_count = psutil.cpu_count() or 1
    return max(2, min(8, cpu_count))


@dataclass
class Settings:
    """Locations and clone options used by the save and load operations."""
    home: Path
    settings_dir: Path
    settings_file: Path
    git_root: Path
    git_form_root: Path
    clone_workers: Optional[int] = None
    clone_timeout: Optional[float] = None
    custom_git_form_root: bool = field(default=False, repr=False)

    @classmethod
    def defaults(cls, home: Optional[Path] = None) -> 'Settings':
        home = Path(home) if home else Path.home()
        settings_dir = home / SETTINGS_DIR_NAME
        git_root = home / GIT_DIR_NAME
        return cls(
            home=home,
            settings_dir=settings_dir,
            settings_file=settings_dir / SETTINGS_FILE_NAME,
            git_root=git_root,
            git_form_root=git_root / GIT_FORM_DIR_NAME,
        )

    def init(self) -> 'Settings':
        """
        Load the settings file, or create it with the current values if it is missing.

        Problems are logged and leave the current values in place.
        """
        if self.settings_dir.exists():
            if self.settings_dir.is_dir():
                self._load_settings()
            else:
                logger.error(f"{self.settings_dir} should be a directory.")
        else:
            self._write_default_settings()
        return self

    def effective_workers(self) -> int:
        return self.clone_workers or calculate_default_workers()

    def to_dict(self) -> dict:
        data = {
            'git': str(self.git_root),
            'git-form': str(self.git_form_root),
        }
        if self.clone_workers is not None:
            data['clone-workers'] = self.clone_workers
        if self.clone_timeout is not None:
            data['clone-timeout'] = self.clone_timeout
        return data

    def _load_settings(self):
        try:
            with open(self.settings_file, 'r', encoding='utf-8') as f:
                data = yaml.safe_load(f) or {}
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Cannot load and initialize settings: {self.settings_file} ({e})")
            return

        if not isinstance(data, dict):
            logger.error(f"Settings file {self.settings_file} should contain a mapping")
            return

        if data.get('git'):
            self.git_root = Path(str(data['git'])).expanduser()
        if data.get('git-form'):
            self.git_form_root = Path(str(data['git-form'])).expanduser()
            self.custom_git_form_root = self.git_form_root != self.git_root / GIT_FORM_DIR_NAME

        try:
            if data.get('clone-workers') is not None:
                clone_workers = int(data['clone-workers'])
                if clone_workers < 1:
                    raise ValueError(f"clone-workers must be at least 1, got {clone_workers}")
                self.clone_workers = clone_workers
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid clone-workers in {self.settings_file}: {e}")

        try:
            if data.get('clone-timeout') is not None:
                clone_timeout = float(data['clone-timeout'])
                if clone_timeout <= 0:
                    raise ValueError(f"clone-timeout must be positive, got {clone_timeout}")
                self.clone_timeout = clone_timeout
        except (TypeError, ValueError) as e:
            logger.error(f"Invalid clone-timeout in {self.settings_file}: {e}")

        logger.info(f"Settings loaded from {self.settings_file}")

    def _write_default_settings(self):
        try:
            self.settings_dir.mkdir(parents=True)
            with open(self.settings_file, 'w', encoding='utf-8') as f:
                yaml.safe_dump(self.to_dict(), f, default_flow_style=False, sort_keys=False)
            logger.info(f"Default settings written to {self.settings_file}")
        except OSError as e:
            logger.error(f"Cannot initialize settings folder and files: {self.settings_dir} ({e})")
