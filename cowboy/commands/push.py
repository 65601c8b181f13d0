"""Cowboy Deploy - Push command"""

import click

from cowboy.base import ProjectCommand
from cowboy.services import DeploymentService


class PushCommand(ProjectCommand):
    """Deploy the project to its FTP server."""

    def __init__(self, full: bool = False, dry_run: bool = False, verbose: bool = False):
        super().__init__(verbose=verbose)
        self.full = full
        self.dry_run = dry_run

    def execute(self) -> None:
        """Execute push command."""
        profile = self.load_profile()

        self.show_header(
            title="DRY RUN" if self.dry_run else "Pushing to production",
            project=self.project_name,
            details={
                "Target": f"{profile.ftp.host}{profile.ftp.path}",
                "Mode": "full" if self.full else "changes only",
            },
        )

        logger = self.init_logger(self.project_name, "push")

        service = DeploymentService(
            self.project_root, logger, confirm=self.confirm, store=self.store
        )
        service.push(full=self.full, dry_run=self.dry_run)

        self.console.print()
        if self.dry_run:
            self.print_success("Deployment preview complete!")
        else:
            self.print_success("Deployment complete!")

        self._show_log_path()


@click.command(name="push")
@click.option("--full", is_flag=True, help="Upload all files instead of just changes")
@click.option(
    "--dry-run",
    is_flag=True,
    help="Show what would be deployed without actually deploying",
)
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def push(full, dry_run, verbose):
    """
    Deploy project to the FTP server

    \b
    Examples:
      cowboy push              # Upload changes since the last deploy
      cowboy push --full       # Upload everything
      cowboy push --dry-run    # Preview without uploading

    \b
    Steps:
    1. Test the FTP connection
    2. Stash unrelated local changes (asks first)
    3. Build assets and run composer install (if configured)
    4. Upload with git-ftp, or ncftpput when git-ftp is missing
    5. Record the deployment and restore stashed changes
    """
    cmd = PushCommand(full=full, dry_run=dry_run, verbose=verbose)
    cmd.run()
