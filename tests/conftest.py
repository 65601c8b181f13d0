"""
Shared fixtures for the Cowboy Deploy test suite
"""

from pathlib import Path
from typing import List, Sequence

import pytest

from cowboy.logger import DeployLogger
from cowboy.models.profile import (
    DeploymentKind,
    DeploymentProfile,
    DeploymentRecord,
    DeployPolicy,
    FtpCredentials,
    ProjectInfo,
)
from cowboy.models.results import ExecutionResult
from cowboy.services import ProfileStore


class FakeExecutor:
    """
    Stands in for CommandExecutor.

    Results are scripted by argument prefix; the first matching rule
    wins and `once` rules are consumed. Unmatched commands succeed with
    empty output.
    """

    def __init__(self, tools: Sequence[str] = ()):
        self.tools = set(tools)
        self.rules = []
        self.calls: List[List[str]] = []
        self.redactions: List[tuple] = []

    def on(
        self,
        *prefix: str,
        returncode: int = 0,
        stdout: str = "",
        stderr: str = "",
        once: bool = False,
    ) -> "FakeExecutor":
        result = ExecutionResult(returncode, stdout, stderr, " ".join(prefix))
        self.rules.append([list(prefix), result, once])
        return self

    def which(self, tool: str) -> bool:
        return tool in self.tools

    def run(self, args, timeout=None, env=None, redact=()) -> ExecutionResult:
        args = [str(arg) for arg in args]
        self.calls.append(args)
        self.redactions.append(tuple(redact))

        for rule in self.rules:
            prefix, result, once = rule
            if args[: len(prefix)] == prefix:
                if once:
                    self.rules.remove(rule)
                return result
        return ExecutionResult(0, "", "", " ".join(args))

    def ran(self, *prefix: str) -> bool:
        return any(call[: len(prefix)] == list(prefix) for call in self.calls)

    def index(self, *prefix: str) -> int:
        for idx, call in enumerate(self.calls):
            if call[: len(prefix)] == list(prefix):
                return idx
        raise ValueError(f"never ran: {' '.join(prefix)}")


class Answers:
    """Scripted replies for the confirm callback."""

    def __init__(self, *replies: bool):
        self.replies = list(replies)
        self.questions: List[str] = []

    def __call__(self, question: str, default: bool = False) -> bool:
        self.questions.append(question)
        return self.replies.pop(0) if self.replies else default


def make_profile(
    records: int = 0,
    with_commits: bool = True,
    build_assets: bool = False,
    run_composer: bool = False,
    secure: bool = False,
) -> DeploymentProfile:
    history = [
        DeploymentRecord(
            timestamp=f"2024-01-{idx + 1:02d}T10:00:00+00:00",
            user="alice",
            kind=DeploymentKind.FULL if idx == 0 else DeploymentKind.INCREMENTAL,
            git_commit=f"c{idx + 1}" if with_commits else None,
        )
        for idx in range(records)
    ]
    return DeploymentProfile(
        project=ProjectInfo(type="laravel", name="site"),
        ftp=FtpCredentials(
            host="ftp.example.com",
            username="deployer",
            password="s3cret",
            port=21,
            path="/public_html",
            secure=secure,
        ),
        deploy=DeployPolicy(build_assets=build_assets, run_composer=run_composer),
        history=history,
    )


@pytest.fixture
def project_dir(tmp_path, monkeypatch) -> Path:
    """Empty project directory as the working directory, logs kept in tmp."""
    project = tmp_path / "site"
    project.mkdir()
    monkeypatch.chdir(project)
    monkeypatch.setenv("COWBOY_LOG_DIR", str(tmp_path / "logs"))
    return project


@pytest.fixture
def git_project(project_dir) -> Path:
    """Project directory that looks like a git working tree."""
    (project_dir / ".git").mkdir()
    return project_dir


@pytest.fixture
def store(project_dir) -> ProfileStore:
    return ProfileStore(project_dir)


@pytest.fixture
def save_profile(store):
    """Write a generated profile into the project and return it."""

    def _save(records: int = 0, **kwargs) -> DeploymentProfile:
        profile = make_profile(records, **kwargs)
        store.save(profile)
        return profile

    return _save


@pytest.fixture
def logger(project_dir):
    """Verbose logger so long-running commands skip the live spinner."""
    deploy_logger = DeployLogger("site", "test", verbose=True)
    yield deploy_logger
    deploy_logger.close()


@pytest.fixture
def answers():
    """Factory for scripted confirm replies."""

    def _answers(*replies: bool) -> Answers:
        return Answers(*replies)

    return _answers

