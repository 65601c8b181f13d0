"""
Git Service

Thin wrapper around the git CLI for the push and rollback flows.
"""

import re
from pathlib import Path
from typing import List, Optional

from cowboy.constants import BUILD_ARTIFACT_PATTERN
from cowboy.models.results import ExecutionResult
from cowboy.utils import CommandExecutor


class GitService:
    """
    Version-control operations for the deployed project.

    Non-zero exits are returned to the caller, never raised: each flow
    decides which git failures are fatal.
    """

    def __init__(self, executor: CommandExecutor, project_root: Path):
        self.executor = executor
        self.project_root = project_root

    def is_repository(self) -> bool:
        """Check if the project is a git working tree."""
        return (self.project_root / ".git").is_dir()

    def _git(self, *args: str, redact: List[str] = None) -> ExecutionResult:
        return self.executor.run(["git", *args], redact=redact or ())

    def status_porcelain(self) -> List[str]:
        """Uncommitted changes, one porcelain line each."""
        result = self._git("status", "--porcelain")
        if result.is_failure:
            return []
        return [line for line in result.stdout.splitlines() if line.strip()]

    def has_changes(self) -> bool:
        """Check for any uncommitted change, build output included."""
        return bool(self.status_porcelain())

    def relevant_changes(self) -> List[str]:
        """Uncommitted changes with recognised build artifacts filtered out."""
        artifact = re.compile(BUILD_ARTIFACT_PATTERN)
        return [line for line in self.status_porcelain() if not artifact.search(line)]

    def stash_push(self, message: str) -> ExecutionResult:
        return self._git("stash", "push", "-m", message)

    def stash_pop(self) -> ExecutionResult:
        return self._git("stash", "pop")

    def current_commit(self) -> Optional[str]:
        """Short revision of HEAD, or None outside a repository."""
        if not self.is_repository():
            return None
        result = self._git("rev-parse", "--short", "HEAD")
        if result.is_failure:
            return None
        return result.stdout.strip() or None

    def current_branch(self) -> Optional[str]:
        if not self.is_repository():
            return None
        result = self._git("rev-parse", "--abbrev-ref", "HEAD")
        if result.is_failure:
            return None
        return result.stdout.strip() or None

    def checkout(self, ref: str) -> ExecutionResult:
        return self._git("checkout", ref)

    def checkout_previous(self) -> ExecutionResult:
        """Return to whatever was checked out before the last checkout."""
        return self._git("checkout", "-")

    def diff_head(self, path: str) -> str:
        """Uncommitted diff of one path against HEAD."""
        result = self._git("diff", "HEAD", "--", path)
        return result.stdout if result.is_success else ""

    def add_all(self) -> ExecutionResult:
        return self._git("add", "-A")

    def commit(self, message: str) -> ExecutionResult:
        return self._git("commit", "-m", message)

    def reset_soft(self, ref: str = "HEAD~1") -> ExecutionResult:
        return self._git("reset", "--soft", ref)

    def set_config(self, key: str, value: str, secret: bool = False) -> ExecutionResult:
        """Set a repository-local config value."""
        return self._git("config", key, value, redact=[value] if secret else None)
