"""
Build Service

Frontend asset builds and composer dependency installs.
"""

from pathlib import Path
from typing import Optional, TYPE_CHECKING

from cowboy.constants import (
    COMPOSER_INSTALL,
    COMPOSER_LOCK,
    NPM_BUILD,
    NPM_INSTALL,
)
from cowboy.models.results import ExecutionResult
from cowboy.services.git_service import GitService
from cowboy.utils import CommandExecutor

if TYPE_CHECKING:
    from cowboy.logger import DeployLogger


class AssetBuilder:
    """Runs the project's npm build."""

    def __init__(
        self,
        executor: CommandExecutor,
        project_root: Path,
        logger: Optional["DeployLogger"] = None,
    ):
        self.executor = executor
        self.project_root = project_root
        self.logger = logger

    def _run(self, command, description: str) -> ExecutionResult:
        if self.logger:
            from cowboy.logger import run_with_progress

            return run_with_progress(self.logger, self.executor, command, description)
        return self.executor.run(command)

    def build(self) -> bool:
        """
        Build frontend assets.

        Returns:
            True if built (or nothing to build), False on failure
        """
        if not (self.project_root / "package.json").exists():
            return True

        if not (self.project_root / "node_modules").is_dir():
            install = self._run(NPM_INSTALL, "Installing npm dependencies")
            if install.is_failure:
                return False

        return self._run(NPM_BUILD, "Building assets").is_success


class DependencyInstaller:
    """Runs composer install when the lock file changed."""

    def __init__(
        self,
        executor: CommandExecutor,
        project_root: Path,
        git: GitService,
        logger: Optional["DeployLogger"] = None,
    ):
        self.executor = executor
        self.project_root = project_root
        self.git = git
        self.logger = logger

    def has_changes(self) -> bool:
        """Check if composer.lock differs from HEAD (always True outside git)."""
        if not self.git.is_repository():
            return True
        return bool(self.git.diff_head(COMPOSER_LOCK).strip())

    def install(self) -> ExecutionResult:
        if self.logger:
            from cowboy.logger import run_with_progress

            return run_with_progress(
                self.logger, self.executor, COMPOSER_INSTALL, "Running composer install"
            )
        return self.executor.run(COMPOSER_INSTALL)
