"""Cowboy Deploy - Rollback command"""

from typing import Optional

import click
import inquirer

from cowboy.base import ProjectCommand
from cowboy.exceptions import RollbackError
from cowboy.services import DeploymentService


class RollbackCommand(ProjectCommand):
    """Redeploy the commit of an earlier deployment."""

    def __init__(self, target: Optional[int] = None, verbose: bool = False):
        super().__init__(verbose=verbose)
        self.target = target

    def choose_target(self) -> int:
        """Ask which of the recent deployments to go back to."""
        candidates = self.profile.rollback_candidates()
        if not candidates:
            raise RollbackError("No previous deployments to rollback to!")

        choices = [
            (
                f"#{number} - {record.timestamp} ({record.kind.value}) "
                f"[{record.git_commit or 'no commit'}]",
                number,
            )
            for number, record in candidates
        ]

        questions = [
            inquirer.List(
                "target",
                message="Which deployment to rollback to?",
                choices=choices,
                carousel=True,
            )
        ]
        answers = inquirer.prompt(questions, raise_keyboard_interrupt=True)
        if not answers:
            raise RollbackError("No deployment selected")
        return int(answers["target"])

    def execute(self) -> None:
        """Execute rollback command."""
        profile = self.load_profile()

        if len(profile.history) < 2:
            raise RollbackError(
                "Not enough deployment history to rollback!",
                context="You need at least 2 deployments to rollback.",
            )

        self.show_header(title="Rollback", project=self.project_name)

        target = self.target if self.target is not None else self.choose_target()

        logger = self.init_logger(self.project_name, "rollback")
        service = DeploymentService(
            self.project_root, logger, confirm=self.confirm, store=self.store
        )
        service.rollback(target)

        self.console.print()
        self.print_success("Rollback complete!")
        self._show_log_path()


@click.command(name="rollback")
@click.option("--to", "target", type=int, default=None, help="Deployment number to rollback to")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def rollback(target, verbose):
    """
    Rollback to a previous deployment

    \b
    Examples:
      cowboy rollback          # Pick from recent deployments
      cowboy rollback --to 3   # Redeploy deployment #3

    \b
    Checks out the deployment's commit, uploads the full tree, then
    returns the working copy to where it was. Numbers come from 'cowboy log'.
    """
    cmd = RollbackCommand(target=target, verbose=verbose)
    cmd.run()
