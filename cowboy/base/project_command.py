"""
Project Command Base Class

Base class for commands that need an existing deployment profile.
"""

from typing import Optional
from .base_command import BaseCommand
from cowboy.models.profile import DeploymentProfile
from cowboy.services import GitService, ProfileStore, TransferService
from cowboy.utils import CommandExecutor


class ProjectCommand(BaseCommand):
    """
    Base class for commands run inside a configured project.

    Provides:
    - Profile loading (call load_profile() first in execute)
    - Git and transfer service factories for read-only commands
    """

    def __init__(self, verbose: bool = False, json_output: bool = False):
        super().__init__(verbose=verbose, json_output=json_output)
        self.store = ProfileStore(self.project_root)
        self.profile: Optional[DeploymentProfile] = None

    @property
    def project_name(self) -> str:
        if self.profile and self.profile.project.name:
            return self.profile.project.name
        return self.project_root.name

    def load_profile(self) -> DeploymentProfile:
        """
        Load the profile once per command.

        Raises:
            ProfileNotFoundError: If cowboy init has not been run
            ConfigurationError: If the file is not valid JSON
        """
        if self.profile is None:
            self.profile = self.store.load()
        return self.profile

    def make_executor(self) -> CommandExecutor:
        return CommandExecutor(self.project_root, logger=self.logger)

    def make_git(self, executor: Optional[CommandExecutor] = None) -> GitService:
        return GitService(executor or self.make_executor(), self.project_root)

    def make_transfer(self) -> TransferService:
        executor = self.make_executor()
        return TransferService(
            executor, self.project_root, self.make_git(executor), logger=self.logger
        )

