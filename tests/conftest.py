"""
Test fixtures and configuration.
"""

import logging
import shutil
import subprocess
from pathlib import Path

import pytest
from helpers.fakes import RecordingInvoker
from helpers.samples import SAMPLE_MAPPINGS_YAML

from playwright_mapper.config import MapperConfig
from playwright_mapper.reporter.system_reporter import SystemReporter


@pytest.fixture
def reporter() -> SystemReporter:
    """Verbose reporter so verbose_level=2 diagnostics are emitted."""
    return SystemReporter(name="test_mapper", level=logging.DEBUG, verbose=2)


@pytest.fixture
def quiet_reporter() -> SystemReporter:
    """Reporter at the default verbosity."""
    return SystemReporter(name="test_mapper_quiet", level=logging.INFO, verbose=1)


@pytest.fixture
def project_dir(tmp_path: Path, monkeypatch) -> Path:
    """Empty project directory used as cwd."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.delenv("MAPPER_DISABLE", raising=False)
    return tmp_path


@pytest.fixture
def mappings_file(project_dir: Path) -> Path:
    """Default YAML mappings file in the project directory."""
    path = project_dir / "test-mappings.yaml"
    path.write_text(SAMPLE_MAPPINGS_YAML, encoding="utf-8")
    return path


@pytest.fixture
def config() -> MapperConfig:
    """Configuration with built-in defaults."""
    return MapperConfig.model_construct()


@pytest.fixture
def invoker() -> RecordingInvoker:
    """Invoker that records runs and reports success."""
    return RecordingInvoker()


class GitRepo:
    """Temporary git repository driven through the git CLI."""

    def __init__(self, path: Path):
        self.path = path

    def git(self, *args: str) -> str:
        result = subprocess.run(
            [
                "git",
                "-c",
                "user.name=Mapper Tests",
                "-c",
                "user.email=mapper@example.com",
                "-c",
                "commit.gpgsign=false",
                *args,
            ],
            cwd=str(self.path),
            capture_output=True,
            text=True,
            check=True,
        )
        return result.stdout

    def commit(self, relative: str, content: str = "x\n", message: str = "change"):
        file_path = self.path / relative
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        self.git("add", relative)
        self.git("commit", "-q", "-m", message)

    def checkout(self, branch: str, create: bool = False):
        if create:
            self.git("checkout", "-q", "-b", branch)
        else:
            self.git("checkout", "-q", branch)


@pytest.fixture
def git_repo(tmp_path: Path) -> GitRepo:
    """
    Git repository with one commit on main and a checked-out feature branch.
    """
    if shutil.which("git") is None:
        pytest.skip("git is not installed")

    repo = GitRepo(tmp_path / "repo")
    repo.path.mkdir()

    repo.git("init", "-q")
    repo.git("symbolic-ref", "HEAD", "refs/heads/main")
    repo.commit("README.md", "# demo\n", "initial commit")
    repo.checkout("feature", create=True)

    return repo
