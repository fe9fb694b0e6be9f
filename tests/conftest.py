from pathlib import Path
from typing import Optional

import pytest

GIT_CONFIG_TEMPLATE = """[core]
\trepositoryformatversion = 0
\tfilemode = true
\tbare = false
[remote "origin"]
\turl = {url}
\tfetch = +refs/heads/*:refs/remotes/origin/*
[branch "main"]
\tremote = origin
\tmerge = refs/heads/main
"""

GIT_CONFIG_WITHOUT_REMOTE = """[core]
\trepositoryformatversion = 0
\tbare = false
"""


def make_repository(path: Path, url: Optional[str]) -> Path:
    """Create a directory that looks like a Git working tree with the given origin."""
    git_dir = path / ".git"
    git_dir.mkdir(parents=True)
    config = GIT_CONFIG_TEMPLATE.format(url=url) if url else GIT_CONFIG_WITHOUT_REMOTE
    (git_dir / "config").write_text(config, encoding="utf-8")
    return path


class FakeCloner:
    """Clone function double: creates the target like a successful 'git clone' would."""

    def __init__(self):
        self.calls = []

    def __call__(self, url, target, timeout):
        self.calls.append((url, Path(target), timeout))
        make_repository(Path(target), url)
        return 0


@pytest.fixture
def git_root(tmp_path: Path) -> Path:
    root = tmp_path / "GIT"
    root.mkdir()
    return root


@pytest.fixture
def fake_cloner() -> FakeCloner:
    return FakeCloner()
