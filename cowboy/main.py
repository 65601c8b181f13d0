#!/usr/bin/env python3
"""Cowboy Deploy CLI - Main entry point"""

import functools
import os
import sys

from rich.console import Console

# Rich-Click: colored CLI help
import rich_click as click
from click.exceptions import Abort, ClickException, UsageError

from cowboy import __version__
from cowboy.commands import init, log, push, rollback, status

click.rich_click.USE_RICH_MARKUP = True
click.rich_click.USE_MARKDOWN = False
click.rich_click.SHOW_ARGUMENTS = True
click.rich_click.GROUP_ARGUMENTS_OPTIONS = True
click.rich_click.MAX_WIDTH = 100

# COMMANDS / OPTIONS
click.rich_click.STYLE_COMMAND = "bold cyan"
click.rich_click.STYLE_OPTION = "bold magenta"
click.rich_click.STYLE_SWITCH = "bold green"
click.rich_click.STYLE_ARGUMENT = "bold yellow"

# HEADERS
click.rich_click.STYLE_HEADER_TEXT = "bold cyan"
click.rich_click.STYLE_USAGE = "bold yellow"
click.rich_click.STYLE_USAGE_COMMAND = "bold cyan"

# HELP TEXT
click.rich_click.STYLE_HELPTEXT_FIRST_LINE = "bold white"
click.rich_click.STYLE_HELPTEXT = ""
click.rich_click.STYLE_OPTION_HELP = ""
click.rich_click.STYLE_OPTION_DEFAULT = "dim cyan"

# PANEL BORDERS
click.rich_click.STYLE_OPTIONS_PANEL_BORDER = "cyan"
click.rich_click.STYLE_COMMANDS_PANEL_BORDER = "cyan"
click.rich_click.ERRORS_EPILOGUE = ""

console = Console()

BANNER = """
[bold color(214)]🤠 Cowboy Deploy[/bold color(214)] [dim]- FTP deployments without the ceremony[/dim]
"""


def handle_cli_errors(func):
    """Decorator to handle CLI errors gracefully."""

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except UsageError as e:
            console.print(f"\n[bold red]✗ Error:[/bold red] {e.format_message()}\n")
            if e.ctx and e.ctx.command:
                console.print(
                    f"[dim]Run[/dim] [cyan]cowboy {e.ctx.command.name} --help[/cyan] [dim]for usage information[/dim]\n"
                )
            sys.exit(2)
        except ClickException as e:
            e.show()
            sys.exit(e.exit_code)
        except (KeyboardInterrupt, Abort):
            console.print("\n\n[yellow]⚠️  Operation cancelled by user[/yellow]")
            sys.exit(130)
        except Exception as e:
            console.print(f"\n[bold red]✗ Unexpected error:[/bold red] {e}\n")

            if os.environ.get("DEBUG") or os.environ.get("VERBOSE"):
                import traceback

                console.print("[dim]Traceback:[/dim]")
                traceback.print_exc()
            sys.exit(1)

    return wrapper


@click.group(cls=click.RichGroup)
@click.version_option(version=__version__, prog_name="cowboy")
@click.pass_context
def cli(ctx: click.Context) -> None:
    """
    Cowboy Deploy - Push web projects to FTP hosting straight from git.

    \b
    Quick Start:
      cowboy init          # Configure FTP credentials
      cowboy push          # Deploy changes
      cowboy log           # Show deployment history
      cowboy rollback      # Redeploy an earlier deployment

    \b
    Settings live in .cowboy-deploy.json in the project root.
    Logs are written to ~/.cowboy/logs (override with COWBOY_LOG_DIR).
    """
    if ctx.invoked_subcommand is None:
        console.print(BANNER)
        console.print("[yellow]Run 'cowboy --help' for usage[/yellow]\n")


cli.add_command(init.init)
cli.add_command(push.push)
cli.add_command(log.log)
cli.add_command(status.status)
cli.add_command(rollback.rollback)


@handle_cli_errors
def main():
    """Main entry point with error handling."""
    cli(standalone_mode=False)


if __name__ == "__main__":
    main()
