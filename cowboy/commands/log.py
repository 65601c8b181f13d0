"""Cowboy Deploy - Log command"""

import click
from rich.table import Table

from cowboy.base import ProjectCommand
from cowboy.ui_components import kind_color


class LogCommand(ProjectCommand):
    """Show deployment history (last 20 deployments kept)."""

    def __init__(self, limit: int = 10, verbose: bool = False, json_output: bool = False):
        super().__init__(verbose=verbose, json_output=json_output)
        self.limit = limit

    def execute(self) -> None:
        """Execute log command."""
        profile = self.load_profile()
        total = len(profile.history)
        entries = profile.numbered_history(self.limit)

        if self.json_output:
            self.output_json(
                {
                    "total": total,
                    "deployments": [
                        {"number": number, **record.to_dict()}
                        for number, record in entries
                    ],
                }
            )
            return

        if not profile.has_history:
            self.print_warning("No deployments yet!")
            self.print_dim("Run: cowboy push to deploy.")
            return

        self.show_header(title="Deployment History", project=self.project_name)

        table = Table(
            title=f"Deployment History (Last {len(entries)} of {total})",
            title_justify="left",
            show_header=True,
            header_style="bold cyan",
            padding=(0, 1),
        )
        table.add_column("#", style="bold", no_wrap=True)
        table.add_column("Type", no_wrap=True)
        table.add_column("Deployed At", style="cyan")
        table.add_column("User", style="white")
        table.add_column("Commit", style="yellow")

        for idx, (number, record) in enumerate(entries):
            kind = record.kind.value
            table.add_row(
                f"● {number}" if idx == 0 else f"  {number}",
                f"[{kind_color(kind)}]{kind}[/{kind_color(kind)}]",
                record.timestamp,
                record.user,
                record.git_commit or "-",
                style=None if idx == 0 else "dim",
            )

        self.console.print(table)

        remaining = total - len(entries)
        if remaining > 0:
            self.print_dim(
                f"... and {remaining} more. Use --limit={total} to see all"
            )

        if total >= 2:
            self.console.print("\n[bold]💡 Roll back to any deployment:[/bold]")
            self.console.print("   [cyan]cowboy rollback --to <number>[/cyan]\n")


@click.command(name="log")
@click.option("-n", "--limit", default=10, show_default=True, help="Number of deployments to show")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def log(limit, verbose, json_output):
    """
    Show deployment history

    \b
    Examples:
      cowboy log           # Last 10 deployments
      cowboy log -n 3      # Last 3
      cowboy log --json    # Machine readable

    \b
    Numbers count from the oldest kept deployment and are the ones
    accepted by 'cowboy rollback --to'.
    """
    cmd = LogCommand(limit=limit, verbose=verbose, json_output=json_output)
    cmd.run()
