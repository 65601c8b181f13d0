"""
Logging system for Cowboy Deploy
Provides real-time logging to files with clean console output
"""

import re
from pathlib import Path
from datetime import datetime
from typing import List, Optional, Sequence, TextIO, TYPE_CHECKING
from rich.console import Console
from rich.markup import escape
from rich.live import Live
from rich.spinner import Spinner
from rich.text import Text
from rich.padding import Padding

from cowboy.constants import LOG_DATE_FORMAT
from cowboy.models.results import ExecutionResult

if TYPE_CHECKING:
    from cowboy.utils import CommandExecutor

console = Console()

ANSI_ESCAPE = re.compile(r"\x1B(?:[@-Z\\-_]|\[[0-?]*[ -/]*[@-~])")


class DeployLogger:
    """
    Manages logging for deployment operations
    - Writes all output to log files in real-time
    - Shows clean progress UI in console (unless verbose)
    - Captures errors with context
    """

    def __init__(self, project_name: str, operation: str, verbose: bool = False):
        """
        Initialize logger

        Args:
            project_name: Name of project being deployed
            operation: Operation name (e.g., 'push', 'rollback', 'init')
            verbose: If True, show all output in console
        """
        self.project_name = project_name
        self.operation = operation
        self.verbose = verbose
        self.log_file: Optional[TextIO] = None
        self.log_path: Optional[Path] = None
        self.current_step = ""
        self.has_errors = False

        from cowboy.utils import get_log_root

        # Structure: {log root}/{project}/{date}/{time}_{operation}.log
        now = datetime.now()
        date_str = now.strftime(LOG_DATE_FORMAT)
        time_str = now.strftime("%H-%M-%S")

        project_logs_dir = get_log_root() / (project_name or "default") / date_str
        project_logs_dir.mkdir(parents=True, exist_ok=True)

        log_filename = f"{time_str}_{operation}.log"
        self.log_path = project_logs_dir / log_filename

        # Line buffered for real-time tailing
        self.log_file = open(self.log_path, "a", buffering=1)

        self._write_log_header()

    def _write_log_header(self):
        """Write log file header"""
        header = f"""
{"=" * 80}
Cowboy Deploy Log
{"=" * 80}
Project: {self.project_name}
Operation: {self.operation}
Started: {datetime.now().isoformat()}
{"=" * 80}

"""
        self.log_file.write(header)
        self.log_file.flush()

    def log(self, message: str, level: str = "INFO"):
        """
        Log a message to file and optionally console

        Args:
            message: Message to log
            level: Log level (INFO, WARNING, ERROR, DEBUG)
        """
        timestamp = datetime.now().strftime("%H:%M:%S")
        log_line = f"[{timestamp}] [{level}] {message}\n"

        if self.log_file:
            self.log_file.write(log_line)
            self.log_file.flush()

        if self.verbose:
            if level == "ERROR":
                console.print(f"[red]{message}[/red]")
            elif level == "WARNING":
                console.print(f"[yellow]{message}[/yellow]")
            elif level == "DEBUG":
                console.print(f"[dim]{message}[/dim]")
            else:
                console.print(message)

    def log_command(self, command: str):
        """Log a command being executed"""
        self.log(f"Executing: {command}", "DEBUG")

    def log_output(self, output: str, stream: str = "stdout"):
        """
        Log command output

        Always written to the log file, shown in console only if verbose.

        Args:
            output: Command output (single line or multiline)
            stream: Stream name (stdout, stderr)
        """
        if not output:
            return

        clean_output = ANSI_ESCAPE.sub("", output)

        if self.log_file:
            for line in clean_output.splitlines():
                self.log_file.write(f"  [{stream}] {line}\n")
            self.log_file.flush()

        if self.verbose:
            console.print(output.rstrip(), markup=False, highlight=False)

    def log_error(self, error: str, context: Optional[str] = None):
        """
        Log an error with context

        Args:
            error: Error message
            context: Additional context (e.g., captured stderr)
        """
        self.has_errors = True

        error_block = f"""
{"!" * 80}
ERROR OCCURRED
{"!" * 80}
{error}
"""
        if context:
            error_block += f"\nContext: {context}\n"

        error_block += f"{'!' * 80}\n\n"

        if self.log_file:
            self.log_file.write(error_block)
            self.log_file.flush()

        if not self.verbose:
            console.print()

        console.print(f"[bold red]✗ {error}[/bold red]")
        if context:
            console.print(f"  [color(208)]{escape(context)}[/color(208)]")

    def step(self, step_name: str):
        """
        Start a new step

        Args:
            step_name: Name of the step
        """
        if self.current_step and not self.verbose:
            console.print()

        self.current_step = step_name
        self.log(f"Step: {step_name}", "INFO")

        if not self.verbose:
            console.print(f"[color(214)]▶[/color(214)] [white]{step_name}[/white]")

    def success(self, message: str):
        """Log a success message"""
        self.log(message, "INFO")

        if not self.verbose:
            console.print(f"  [dim]✓ {message}[/dim]")

    def warning(self, message: str):
        """Log a warning message"""
        self.log(message, "WARNING")

        if not self.verbose:
            console.print(f"  [yellow]⚠[/yellow] [dim]{message}[/dim]")

    def detail(self, message: str):
        """Log an indented informational line"""
        self.log(message, "INFO")

        if not self.verbose:
            console.print(f"    {message}", markup=False, highlight=False)

    def close(self):
        """Close log file"""
        if self.log_file:
            footer = f"""
{"=" * 80}
Completed: {datetime.now().isoformat()}
Status: {"FAILED" if self.has_errors else "SUCCESS"}
{"=" * 80}
"""
            self.log_file.write(footer)
            self.log_file.close()
            self.log_file = None

    def __enter__(self):
        """Context manager entry"""
        return self

    def __exit__(self, exc_type, exc_val, _exc_tb):
        """Context manager exit"""
        if exc_type is not None and exc_type != SystemExit:
            self.has_errors = True
            self.log(
                f"{exc_type.__name__}: {exc_val}" if exc_val else "Operation failed",
                "ERROR",
            )
        self.close()
        return False


def run_with_progress(
    logger: DeployLogger,
    executor: "CommandExecutor",
    command: List[str],
    description: str,
    timeout: Optional[int] = None,
    redact: Sequence[str] = (),
) -> ExecutionResult:
    """
    Run a command with progress indicator

    Args:
        logger: DeployLogger instance
        executor: Executor that runs and logs the command
        command: Command arguments
        description: Description for progress indicator
        timeout: Seconds before the command is killed
        redact: Secret values to mask in logs

    Returns:
        ExecutionResult of the command
    """
    if logger.verbose:
        # Executor already echoes output through the logger
        return executor.run(command, timeout=timeout, redact=redact)

    spinner = Spinner("dots", text=f"[cyan]{description}...[/cyan]")
    padded_spinner = Padding(spinner, (0, 0, 0, 2))

    with Live(
        padded_spinner,
        console=console,
        refresh_per_second=10,
    ) as live:
        result = executor.run(command, timeout=timeout, redact=redact)

        if result.is_success:
            checkmark = Text("  ✓ ", style="dim")
            checkmark.append(description, style="dim")
            live.update(checkmark)
        else:
            x_mark = Text("  ✗ ", style="red")
            x_mark.append(description, style="dim")
            live.update(x_mark)

    return result
