"""
Cowboy Deploy Exception Hierarchy

Clean exception hierarchy for consistent error handling across the CLI.
"""

from typing import Optional

from cowboy.constants import (
    ERROR_PROFILE_EXISTS,
    ERROR_PROFILE_NOT_FOUND,
    HINT_FORCE_INIT,
    HINT_RUN_INIT,
)


class CowboyError(Exception):
    """Base exception for all Cowboy Deploy errors."""

    def __init__(self, message: str, context: Optional[str] = None):
        self.message = message
        self.context = context
        super().__init__(self.format_message())

    def format_message(self) -> str:
        """Format error message with optional context."""
        if self.context:
            return f"{self.message}\nContext: {self.context}"
        return self.message


class ConfigurationError(CowboyError):
    """Raised when the deployment profile is invalid or missing."""

    pass


class ProfileNotFoundError(ConfigurationError):
    """Raised when no profile exists in the project root."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(ERROR_PROFILE_NOT_FOUND, HINT_RUN_INIT)


class ProfileExistsError(ConfigurationError):
    """Raised when init would overwrite an existing profile."""

    def __init__(self, path: str):
        self.path = path
        super().__init__(ERROR_PROFILE_EXISTS, HINT_FORCE_INIT)


class DeploymentError(CowboyError):
    """Raised when deployment operations fail."""

    pass


class DeploymentCancelled(DeploymentError):
    """Raised when the user declines a confirmation."""

    pass


class TransferError(DeploymentError):
    """Raised when the file transfer tool fails."""

    def __init__(self, tool: str, stderr: str, stdout: str = ""):
        self.tool = tool
        self.stderr = stderr
        self.stdout = stdout
        super().__init__(f"{tool} failed", context=stderr.strip() or None)


class RollbackError(DeploymentError):
    """Raised when a rollback target cannot be resolved or deployed."""

    pass


class GitError(CowboyError):
    """Raised when a required git operation fails."""

    pass
