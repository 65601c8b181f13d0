"""
Result Models

Dataclass models for operation results and command outputs.
"""

from dataclasses import dataclass


@dataclass
class ExecutionResult:
    """Result of an external command execution."""

    returncode: int
    stdout: str = ""
    stderr: str = ""
    command: str = ""

    @property
    def is_success(self) -> bool:
        """Check if execution succeeded."""
        return self.returncode == 0

    @property
    def is_failure(self) -> bool:
        """Check if execution failed."""
        return self.returncode != 0

    def __repr__(self) -> str:
        return f"ExecutionResult(returncode={self.returncode}, command='{self.command[:50]}...')"


@dataclass
class TransferResult:
    """Result of a file transfer to the remote host."""

    success: bool
    tool: str
    kind: str
    stdout: str = ""
    stderr: str = ""
    dry_run: bool = False

    @property
    def is_failure(self) -> bool:
        """Check if transfer failed."""
        return not self.success

    def __repr__(self) -> str:
        return f"TransferResult(tool={self.tool}, kind={self.kind}, success={self.success})"
