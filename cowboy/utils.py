"""
CLI Utilities

Core utility functions and classes for Cowboy Deploy.
"""

import getpass
import os
import shlex
import shutil
import subprocess
from pathlib import Path
from typing import Optional, Dict, List, Sequence, TYPE_CHECKING

from cowboy.constants import DEFAULT_LOG_DIR, LOG_DIR_ENV, REDACTED
from cowboy.models.results import ExecutionResult

if TYPE_CHECKING:
    from cowboy.logger import DeployLogger


def get_project_root() -> Path:
    """
    Get the project being deployed.

    Returns:
        Current working directory (holds the profile and the tree to upload)
    """
    return Path.cwd()


def get_log_root() -> Path:
    """Directory that receives per-operation log files."""
    return Path(os.environ.get(LOG_DIR_ENV) or DEFAULT_LOG_DIR).expanduser()


def get_current_user() -> str:
    """Operating system user recorded with each deployment."""
    try:
        return getpass.getuser()
    except (KeyError, OSError):
        return "unknown"


def format_command(args: Sequence[str], redact: Sequence[str] = ()) -> str:
    """
    Render a command line for logs with secrets masked.

    Args:
        args: Command arguments
        redact: Secret values to mask wherever they appear

    Returns:
        Shell-quoted command string
    """
    return " ".join(shlex.quote(mask_secrets(str(arg), redact)) for arg in args)


class CommandExecutor:
    """Executes external tools with error handling."""

    def __init__(self, cwd: Path, logger: Optional["DeployLogger"] = None):
        self.cwd = cwd
        self.logger = logger

    def which(self, tool: str) -> bool:
        """Check if a tool is installed."""
        return shutil.which(tool) is not None

    def run(
        self,
        args: List[str],
        timeout: Optional[int] = None,
        env: Optional[Dict[str, str]] = None,
        redact: Sequence[str] = (),
    ) -> ExecutionResult:
        """
        Run an external command and capture its output.

        A non-zero exit is reported in the result, never raised.

        Args:
            args: Command arguments
            timeout: Seconds before the command is killed
            env: Extra environment variables
            redact: Secret values to mask in logs

        Returns:
            ExecutionResult with exit code and captured output
        """
        display = format_command(args, redact)
        if self.logger:
            self.logger.log_command(display)

        try:
            completed = subprocess.run(
                args,
                cwd=self.cwd,
                env={**os.environ, **(env or {})},
                capture_output=True,
                text=True,
                timeout=timeout,
            )
            result = ExecutionResult(
                returncode=completed.returncode,
                stdout=completed.stdout or "",
                stderr=completed.stderr or "",
                command=display,
            )
        except FileNotFoundError:
            result = ExecutionResult(
                returncode=127,
                stderr=f"{args[0]}: command not found",
                command=display,
            )
        except subprocess.TimeoutExpired:
            result = ExecutionResult(
                returncode=124,
                stderr=f"{args[0]} timed out after {timeout}s",
                command=display,
            )

        if self.logger:
            self.logger.log_output(mask_secrets(result.stdout, redact), "stdout")
            self.logger.log_output(mask_secrets(result.stderr, redact), "stderr")
            if result.is_failure:
                self.logger.log(f"Exit code: {result.returncode}", "DEBUG")

        return result


def mask_secrets(text: str, redact: Sequence[str]) -> str:
    """Replace every occurrence of each secret with a placeholder."""
    for secret in redact:
        if secret:
            text = text.replace(secret, REDACTED)
    return text
