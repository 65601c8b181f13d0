"""
Project initialization - interactive wizard that writes the deployment profile
"""

from typing import Any, Dict, Optional

import click
from rich.prompt import Confirm, IntPrompt, Prompt

from cowboy.base import BaseCommand
from cowboy.constants import DEFAULT_FTP_PORT, DEFAULT_REMOTE_PATH, PROFILE_FILENAME
from cowboy.exceptions import ProfileExistsError
from cowboy.models.profile import (
    DeploymentProfile,
    DeployPolicy,
    FtpCredentials,
    ProjectInfo,
)
from cowboy.services import ProfileStore
from cowboy.services.project_detector import (
    add_to_gitignore,
    detect_project_type,
    load_defaults,
)

GITIGNORE_MESSAGES = {
    "created": "Created .gitignore",
    "exists": f".gitignore already contains {PROFILE_FILENAME}",
    "added": "Added to .gitignore",
}


class InitCommand(BaseCommand):
    """Initialize deployment configuration for this project."""

    def __init__(self, force: bool = False, verbose: bool = False):
        super().__init__(verbose=verbose)
        self.force = force
        self.store = ProfileStore(self.project_root)

    def _ask(self, label: str, default: Optional[Any] = None) -> str:
        """Prompt until a non-empty answer is given."""
        kwargs = {} if default in (None, "") else {"default": str(default)}
        while True:
            value = Prompt.ask(f"[?] {label}", console=self.console, **kwargs)
            if value and value.strip():
                return value.strip()
            self.print_warning(f"{label} is required")

    def _ask_password(self, default: Optional[str]) -> str:
        hint = " (press enter to use the password from .env)" if default else ""
        while True:
            value = click.prompt(
                f"[?] FTP Password{hint}",
                hide_input=True,
                default="",
                show_default=False,
            )
            if value:
                return value
            if default:
                return default
            self.print_warning("FTP Password is required")

    def collect_credentials(self, defaults: Dict[str, Any]) -> FtpCredentials:
        """Ask for the FTP connection details."""
        host = self._ask("FTP Host", defaults.get("host"))
        port = IntPrompt.ask(
            "[?] FTP Port",
            console=self.console,
            default=int(defaults.get("port") or DEFAULT_FTP_PORT),
        )
        username = self._ask("FTP Username", defaults.get("username"))
        password = self._ask_password(defaults.get("password"))
        path = self._ask("Remote Path", defaults.get("path") or DEFAULT_REMOTE_PATH)
        secure = Confirm.ask(
            "[?] Use FTPS (secure FTP)?",
            console=self.console,
            default=bool(defaults.get("secure", False)),
        )

        return FtpCredentials(
            host=host,
            port=port,
            username=username,
            password=password,
            path=path,
            secure=secure,
        )

    def collect_policy(self) -> DeployPolicy:
        """Ask what should happen around each upload."""
        build_assets = Confirm.ask(
            "[?] Build assets before deployment? (npm run build)",
            console=self.console,
            default=True,
        )
        run_composer = Confirm.ask(
            "[?] Run composer install on changes?",
            console=self.console,
            default=True,
        )
        return DeployPolicy(build_assets=build_assets, run_composer=run_composer)

    def execute(self) -> None:
        """Execute init command."""
        if self.store.exists() and not self.force:
            raise ProfileExistsError(str(self.store.path))

        project_name = self.project_root.name
        self.show_header(title="Project Setup", project=project_name)

        project_type = detect_project_type(self.project_root)
        self.console.print(f"Detected: [yellow]{project_type.value}[/yellow]\n")

        defaults = load_defaults(self.project_root)
        if defaults:
            self.console.print("[bold]📋 Found existing config values:[/bold]")
            for key, value in defaults.items():
                if key != "password":
                    self.console.print(f"  • {key}: [cyan]{value}[/cyan]")
            self.console.print()

        ftp = self.collect_credentials(defaults)
        policy = self.collect_policy()

        logger = self.init_logger(project_name, "init")

        profile = DeploymentProfile(
            project=ProjectInfo(type=project_type.value, name=project_name),
            ftp=ftp,
            deploy=policy,
            history=[],
        )
        self.store.save(profile)
        logger.log(f"Profile written: {self.store.path} ({ftp!r})")

        self.console.print()
        self.print_success(f"Configuration saved to {PROFILE_FILENAME}")
        self.print_warning(
            f"Add {PROFILE_FILENAME} to .gitignore (contains FTP credentials)"
        )

        outcome = add_to_gitignore(self.project_root, PROFILE_FILENAME)
        self.print_dim(GITIGNORE_MESSAGES[outcome])

        self.console.print("\nReady to deploy! Run: [green]cowboy push[/green]\n")


@click.command(name="init")
@click.option("--force", is_flag=True, help="Overwrite existing config")
@click.option("--verbose", "-v", is_flag=True, help="Show all command output")
def init(force, verbose):
    """
    Initialize deployment configuration for this project

    \b
    Examples:
      cowboy init            # Interactive setup
      cowboy init --force    # Start over

    \b
    Pre-fills answers from .env (FTP_HOST, FTP_USER, ...), deploy.php
    and .ftpconfig when present. Credentials are stored in plaintext in
    .cowboy-deploy.json, which is added to .gitignore.
    """
    cmd = InitCommand(force=force, verbose=verbose)
    cmd.run()
