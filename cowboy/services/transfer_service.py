"""
Transfer Service

Uploads the working tree with git-ftp (incremental) or ncftpput (full
mirror) and probes the FTP server with curl.
"""

from pathlib import Path
from typing import List, Optional, TYPE_CHECKING

from cowboy.constants import (
    FTP_CONNECT_TIMEOUT,
    GIT_FTP,
    GIT_FTP_IGNORE_FILE,
    NCFTPPUT,
    TEMP_COMMIT_MESSAGE,
    TRANSFER_TIMEOUT,
)
from cowboy.models.profile import DeploymentKind, DeploymentProfile, FtpCredentials
from cowboy.models.results import ExecutionResult, TransferResult
from cowboy.services.git_service import GitService
from cowboy.utils import CommandExecutor

if TYPE_CHECKING:
    from cowboy.logger import DeployLogger

TROUBLESHOOTING_TIPS = [
    "Check FTP credentials are correct",
    "Verify remote path exists and is writable",
    "Try: cowboy push --full (force a full upload)",
    "Check git-ftp verbose: git ftp push -vv",
]


class TransferService:
    """
    Publishes the project to the FTP server.

    Tool selection: git-ftp when it is installed and the project is a git
    repository, otherwise ncftpput.
    """

    def __init__(
        self,
        executor: CommandExecutor,
        project_root: Path,
        git: GitService,
        logger: Optional["DeployLogger"] = None,
    ):
        self.executor = executor
        self.project_root = project_root
        self.git = git
        self.logger = logger

    def _notice(self, message: str) -> None:
        if self.logger:
            self.logger.success(message)

    def _warn(self, message: str) -> None:
        if self.logger:
            self.logger.warning(message)

    def _run_long(
        self, command: List[str], description: str, redact: List[str]
    ) -> ExecutionResult:
        if self.logger:
            from cowboy.logger import run_with_progress

            return run_with_progress(
                self.logger,
                self.executor,
                command,
                description,
                timeout=TRANSFER_TIMEOUT,
                redact=redact,
            )
        return self.executor.run(command, timeout=TRANSFER_TIMEOUT, redact=redact)

    def probe_command(self, ftp: FtpCredentials) -> List[str]:
        """curl invocation that lists the remote directory."""
        url = ftp.url if ftp.url.endswith("/") else f"{ftp.url}/"
        return [
            "curl",
            "-s",
            "--connect-timeout",
            str(FTP_CONNECT_TIMEOUT),
            "--list-only",
            "--user",
            f"{ftp.username}:{ftp.password}",
            url,
        ]

    def probe(self, ftp: FtpCredentials) -> ExecutionResult:
        """
        Test the FTP connection.

        Returns:
            ExecutionResult of the curl listing
        """
        command = self.probe_command(ftp)
        if self.logger:
            from cowboy.logger import run_with_progress

            return run_with_progress(
                self.logger,
                self.executor,
                command,
                "Testing FTP connection",
                redact=[ftp.password],
            )
        return self.executor.run(command, redact=[ftp.password])

    def select_tool(self) -> str:
        """Pick the transfer tool for this project."""
        if self.executor.which(GIT_FTP) and self.git.is_repository():
            return GIT_FTP
        return NCFTPPUT

    def deploy(
        self, profile: DeploymentProfile, full: bool = False, dry_run: bool = False
    ) -> TransferResult:
        """
        Upload the project.

        Args:
            profile: Deployment profile with credentials and excluded paths
            full: Upload every file instead of just the changes
            dry_run: Describe the transfer without uploading

        Returns:
            TransferResult
        """
        tool = self.select_tool()

        if dry_run:
            return self._preview(profile, tool, full)

        if tool == GIT_FTP:
            return self.deploy_with_git_ftp(profile, full)
        return self.deploy_with_ncftp(profile)

    def _preview(self, profile: DeploymentProfile, tool: str, full: bool) -> TransferResult:
        kind = DeploymentKind.FULL
        if tool == GIT_FTP and profile.has_history and not full:
            kind = DeploymentKind.INCREMENTAL

        self._warn("DRY RUN MODE - No files will be uploaded")
        if self.logger:
            self.logger.detail(f"Would deploy from: {self.project_root}")
            self.logger.detail(f"Transfer tool: {tool} ({kind.value})")
            self.logger.detail(
                f"Excluded paths: {', '.join(profile.deploy.excluded_paths)}"
            )

        return TransferResult(success=True, tool=tool, kind=kind.value, dry_run=True)

    def _write_ignore_file(self, excluded_paths: List[str]) -> None:
        ignore_file = self.project_root / GIT_FTP_IGNORE_FILE
        ignore_file.write_text("\n".join(excluded_paths) + "\n", encoding="utf-8")

    def deploy_with_git_ftp(
        self, profile: DeploymentProfile, full: bool = False
    ) -> TransferResult:
        """
        Incremental upload through git-ftp.

        Uncommitted build output is committed temporarily so git-ftp sees
        it, and the commit is undone (soft reset) afterwards.
        """
        ftp = profile.ftp
        redact = [ftp.password]

        self.git.set_config("git-ftp.url", ftp.url)
        self.git.set_config("git-ftp.user", ftp.username)
        self.git.set_config("git-ftp.password", ftp.password, secret=True)
        self._write_ignore_file(profile.deploy.excluded_paths)

        temp_commit = False
        if self.git.has_changes():
            self._notice("Temporarily committing build artifacts for deployment")
            self.git.add_all()
            if self.git.commit(TEMP_COMMIT_MESSAGE).is_success:
                temp_commit = True
            else:
                self._warn("Could not create temp commit, may have issues...")

        first_deploy = not profile.has_history
        if first_deploy:
            self._warn("First deployment - initializing git-ftp, this may take a while")
            command = ["git", "ftp", "init"]
            kind = DeploymentKind.FULL
        elif full:
            self._notice("Using git-ftp for a full upload")
            command = ["git", "ftp", "push", "--all"]
            kind = DeploymentKind.FULL
        else:
            self._notice("Using git-ftp for incremental deployment")
            command = ["git", "ftp", "push"]
            kind = DeploymentKind.INCREMENTAL

        result = self._run_long(command, "Uploading with git-ftp", redact)

        if temp_commit and self.git.reset_soft("HEAD~1").is_success:
            self._notice("Temporary commit removed")

        if result.is_failure and not first_deploy and "git ftp init" in result.stderr:
            self._warn("Remote state missing, running git ftp init...")
            result = self._run_long(
                ["git", "ftp", "init"], "Initializing git-ftp", redact
            )
            kind = DeploymentKind.FULL

        return TransferResult(
            success=result.is_success,
            tool=GIT_FTP,
            kind=kind.value,
            stdout=result.stdout,
            stderr=result.stderr,
        )

    def ncftp_command(self, profile: DeploymentProfile) -> List[str]:
        ftp = profile.ftp
        command = [
            NCFTPPUT,
            "-R",
            "-v",
            "-u",
            ftp.username,
            "-p",
            ftp.password,
            "-P",
            str(ftp.port),
        ]
        for path in profile.deploy.excluded_paths:
            command.extend(["-X", path])
        command.extend([ftp.host, ftp.path, "."])
        return command

    def deploy_with_ncftp(self, profile: DeploymentProfile) -> TransferResult:
        """Full mirror upload through ncftpput."""
        self._warn("Full upload mode (install git-ftp for incremental deploys)")
        if profile.ftp.secure:
            self._warn("ncftpput does not support FTPS, uploading over plain FTP")

        result = self._run_long(
            self.ncftp_command(profile),
            "Uploading with ncftpput",
            [profile.ftp.password],
        )

        return TransferResult(
            success=result.is_success,
            tool=NCFTPPUT,
            kind=DeploymentKind.FULL.value,
            stdout=result.stdout,
            stderr=result.stderr,
        )
