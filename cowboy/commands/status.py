"""Cowboy Deploy - Status command"""

import click
from rich.table import Table

from cowboy.base import ProjectCommand


def _yes_no(value: bool) -> str:
    return "Yes" if value else "No"


class StatusCommand(ProjectCommand):
    """Show current deployment status."""

    def __init__(self, verbose: bool = False, json_output: bool = False):
        super().__init__(verbose=verbose, json_output=json_output)

    def collect(self) -> dict:
        """Gather project, FTP, git and history facts (never the password)."""
        profile = self.load_profile()
        git = self.make_git()
        transfer = self.make_transfer()

        git_info = {"repository": git.is_repository()}
        if git_info["repository"]:
            git_info.update(
                {
                    "branch": git.current_branch(),
                    "commit": git.current_commit(),
                    "uncommitted_changes": git.has_changes(),
                }
            )

        latest = profile.latest
        return {
            "project": profile.project.to_dict(),
            "ftp": profile.ftp.to_public_dict(),
            "transfer_tool": transfer.select_tool(),
            "git": git_info,
            "deployments": {
                "total": len(profile.history),
                "latest": latest.to_dict() if latest else None,
            },
            "deploy": {
                "build_assets": profile.deploy.build_assets,
                "run_composer": profile.deploy.run_composer,
            },
        }

    def execute(self) -> None:
        """Execute status command."""
        status = self.collect()

        if self.json_output:
            self.output_json(status)
            return

        self.show_header(title="Status", project=self.project_name)

        table = Table(title_justify="left", show_header=False, padding=(0, 1))
        table.add_column("Key", style="yellow", no_wrap=True)
        table.add_column("Value")

        project = status["project"]
        table.add_row("Project", project["name"] or "Unknown")
        table.add_row("Type", project["type"] or "Unknown")
        table.add_section()

        ftp = status["ftp"]
        table.add_row("FTP Host", f"{ftp['host']}:{ftp['port']}")
        table.add_row("FTP Path", ftp["path"])
        table.add_row("FTP User", ftp["username"])
        table.add_row("Secure", "Yes (FTPS)" if ftp["secure"] else "No")
        table.add_row("Transfer Tool", status["transfer_tool"])
        table.add_section()

        git = status["git"]
        if git["repository"]:
            table.add_row("Git Branch", git["branch"] or "-")
            table.add_row("Git Commit", git["commit"] or "-")
            if git["uncommitted_changes"]:
                table.add_row("Uncommitted Changes", "[red]Yes[/red]")
            else:
                table.add_row("Uncommitted Changes", "[green]No[/green]")
        else:
            table.add_row("Git", "[dim]Not a repository[/dim]")
        table.add_section()

        deployments = status["deployments"]
        latest = deployments["latest"]
        if latest is None:
            table.add_row("Deployments", "None yet")
        else:
            table.add_row("Total Deployments", str(deployments["total"]))
            table.add_row("Last Deployment", latest["timestamp"])
            table.add_row("Last Deploy Type", latest["type"])
            if latest["git_commit"]:
                table.add_row("Last Deploy Commit", latest["git_commit"])
        table.add_section()

        deploy = status["deploy"]
        table.add_row("Build Assets", _yes_no(deploy["build_assets"]))
        table.add_row("Run Composer", _yes_no(deploy["run_composer"]))

        self.console.print(table)


@click.command(name="status")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
@click.option("--json", "json_output", is_flag=True, help="Output in JSON format")
def status(verbose, json_output):
    """
    Show current deployment status

    \b
    Shows:
    - Project name and type
    - FTP target (password is never shown)
    - Git branch, commit and uncommitted changes
    - Last deployment and build options
    """
    cmd = StatusCommand(verbose=verbose, json_output=json_output)
    cmd.run()
