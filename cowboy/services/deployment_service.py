"""
Deployment Service

Push and rollback orchestration over git, the build tools and the
transfer tools. Strictly sequential.
"""

from datetime import datetime
from pathlib import Path
from typing import Callable, Optional, Tuple

from cowboy.constants import (
    AUTO_STASH_MESSAGE,
    LOG_DATETIME_FORMAT,
    ROLLBACK_STASH_MESSAGE,
)
from cowboy.exceptions import (
    DeploymentCancelled,
    DeploymentError,
    GitError,
    RollbackError,
    TransferError,
)
from cowboy.logger import DeployLogger
from cowboy.models.profile import (
    DeploymentKind,
    DeploymentProfile,
    DeploymentRecord,
)
from cowboy.services.build_service import AssetBuilder, DependencyInstaller
from cowboy.services.git_service import GitService
from cowboy.services.profile_service import ProfileStore
from cowboy.services.transfer_service import TROUBLESHOOTING_TIPS, TransferService
from cowboy.utils import CommandExecutor, get_current_user, mask_secrets

ConfirmFunc = Callable[[str, bool], bool]


class DeploymentService:
    """
    Coordinates a deployment from pre-flight checks to the history record.

    Collaborators are created from the project root unless injected.
    """

    def __init__(
        self,
        project_root: Path,
        logger: DeployLogger,
        confirm: ConfirmFunc,
        store: Optional[ProfileStore] = None,
        executor: Optional[CommandExecutor] = None,
        git: Optional[GitService] = None,
        transfer: Optional[TransferService] = None,
        builder: Optional[AssetBuilder] = None,
        installer: Optional[DependencyInstaller] = None,
    ):
        self.project_root = project_root
        self.logger = logger
        self.confirm = confirm
        self.store = store or ProfileStore(project_root)
        self.executor = executor or CommandExecutor(project_root, logger=logger)
        self.git = git or GitService(self.executor, project_root)
        self.transfer = transfer or TransferService(
            self.executor, project_root, self.git, logger=logger
        )
        self.builder = builder or AssetBuilder(self.executor, project_root, logger=logger)
        self.installer = installer or DependencyInstaller(
            self.executor, project_root, self.git, logger=logger
        )

    # ------------------------------------------------------------------
    # Push
    # ------------------------------------------------------------------

    def push(
        self,
        full: bool = False,
        dry_run: bool = False,
        stash_changes: bool = True,
    ) -> Optional[DeploymentRecord]:
        """
        Deploy the working tree.

        Args:
            full: Upload every file instead of just the changes
            dry_run: Show what would happen without building or uploading
            stash_changes: Offer to stash unrelated local changes first

        Returns:
            The appended DeploymentRecord, or None for a dry run

        Raises:
            DeploymentCancelled: If the user refuses to stash
            TransferError: If the upload fails (any stash is left in place)
        """
        profile = self.store.load()

        self.preflight_checks(profile)

        stashed = self.stash_if_needed(dry_run) if stash_changes else False

        if profile.deploy.build_assets and not dry_run:
            self.logger.step("Building assets")
            if self.builder.build():
                self.logger.success("Assets built")
            else:
                self.logger.warning("Asset build failed, continuing deployment anyway...")

        if profile.deploy.run_composer and not dry_run and self.installer.has_changes():
            self.logger.step("Installing composer dependencies")
            if self.installer.install().is_success:
                self.logger.success("Composer dependencies installed")
            else:
                self.logger.warning("composer install failed, continuing deployment anyway...")

        self.logger.step(f"Deploying to {profile.ftp.host}{profile.ftp.path}")
        result = self.transfer.deploy(profile, full=full, dry_run=dry_run)

        if result.is_failure:
            for tip in TROUBLESHOOTING_TIPS:
                self.logger.detail(f"• {tip}")
            if stashed:
                self.logger.warning("Your changes are still stashed. Run: git stash pop")
            secrets = [profile.ftp.password]
            raise TransferError(
                result.tool,
                mask_secrets(result.stderr, secrets),
                mask_secrets(result.stdout, secrets),
            )

        if dry_run:
            return None

        record = self.save_deployment_record(profile, result.kind)
        self.logger.success(f"Deployment #{len(profile.history)} recorded")

        if stashed:
            if self.git.stash_pop().is_success:
                self.logger.success("Stashed changes restored")
            else:
                self.logger.warning("Could not restore stashed changes. Run: git stash pop")

        return record

    def preflight_checks(self, profile: DeploymentProfile) -> None:
        """Repository presence and FTP connectivity."""
        self.logger.step("Pre-deployment checks")

        if not self.git.is_repository():
            self.logger.warning(
                "Not a git repository. Consider initializing git for better deployment tracking."
            )

        probe = self.transfer.probe(profile.ftp)
        if probe.is_failure:
            # Reported, never fatal
            self.logger.warning("FTP connection test failed, continuing anyway...")
        else:
            self.logger.success("FTP connection OK")

    def stash_if_needed(self, dry_run: bool = False) -> bool:
        """
        Stash uncommitted changes that are not build output.

        Returns:
            True if changes were stashed

        Raises:
            DeploymentCancelled: If the user refuses
        """
        if not self.git.is_repository():
            return False

        changes = self.git.relevant_changes()
        if not changes:
            return False

        self.logger.warning("You have uncommitted changes:")
        for line in changes:
            self.logger.detail(line)

        if dry_run:
            return False

        if not self.confirm("Stash changes and continue deployment?", False):
            raise DeploymentCancelled("Deployment cancelled.")

        message = AUTO_STASH_MESSAGE.format(
            timestamp=datetime.now().strftime(LOG_DATETIME_FORMAT)
        )
        if self.git.stash_push(message).is_failure:
            raise GitError("Could not stash changes", context="git stash push failed")

        self.logger.success("Changes stashed")
        return True

    def save_deployment_record(
        self, profile: DeploymentProfile, kind: str
    ) -> DeploymentRecord:
        """Append a record (history capped) and persist the profile."""
        record = DeploymentRecord(
            timestamp=datetime.now().astimezone().isoformat(timespec="seconds"),
            user=get_current_user(),
            kind=DeploymentKind.parse(kind),
            git_commit=self.git.current_commit(),
        )
        profile.record_deployment(record)
        self.store.save(profile)
        return record

    # ------------------------------------------------------------------
    # Rollback
    # ------------------------------------------------------------------

    def resolve_rollback_target(
        self, profile: DeploymentProfile, number: int
    ) -> Tuple[int, DeploymentRecord]:
        """
        Validate a rollback ordinal.

        Raises:
            RollbackError: If the history is too short, the number is out of
                range, the record has no commit, or there is no repository
        """
        total = len(profile.history)
        if total < 2:
            raise RollbackError(
                "Not enough deployment history to rollback!",
                context="You need at least 2 deployments to rollback.",
            )

        record = profile.get_record(number)
        if record is None:
            raise RollbackError(
                f"Invalid deployment number: {number}",
                context=f"Choose a number between 1 and {total}.",
            )

        if not record.has_revision:
            raise RollbackError(
                "Cannot rollback: target deployment has no git commit reference!",
                context="The deployment must have been made from a git repository.",
            )

        if not self.git.is_repository():
            raise RollbackError(
                "Not a git repository!",
                context="Rollback requires git. Please initialize a git repository first.",
            )

        return number, record

    def rollback(self, number: int) -> DeploymentRecord:
        """
        Redeploy the commit of an earlier deployment.

        The local checkout and any stashed changes are restored afterwards;
        only the remote changes.

        Raises:
            RollbackError: If the target is invalid or the redeploy fails
            DeploymentCancelled: If the user declines
        """
        profile = self.store.load()
        number, target = self.resolve_rollback_target(profile, number)

        self.logger.step(f"Rolling back to deployment #{number}")
        self.logger.detail(f"Timestamp: {target.timestamp}")
        self.logger.detail(f"Git commit: {target.git_commit}")

        stashed = False
        changes = self.git.status_porcelain()
        if changes:
            self.logger.warning("You have uncommitted changes:")
            for line in changes:
                self.logger.detail(line)

            if not self.confirm("Stash changes and continue?", False):
                raise DeploymentCancelled("Rollback cancelled.")

            if self.git.stash_push(ROLLBACK_STASH_MESSAGE).is_failure:
                raise RollbackError("Could not stash changes", context="git stash push failed")
            stashed = True
            self.logger.success("Changes stashed")

        if not self.confirm(f"Rollback to deployment #{number}?", False):
            self.restore_stash(stashed)
            raise DeploymentCancelled("Rollback cancelled.")

        checkout = self.git.checkout(target.git_commit)
        if checkout.is_failure:
            self.restore_stash(stashed)
            raise RollbackError(
                f"Could not check out commit {target.git_commit}",
                context=checkout.stderr.strip() or None,
            )
        self.logger.success(f"Checked out commit {target.git_commit}")

        try:
            record = self.push(full=True, stash_changes=False)
        except DeploymentError as e:
            self.return_from_checkout(stashed)
            raise RollbackError(
                "Deployment failed during rollback!", context=e.context
            ) from e
        except Exception:
            self.return_from_checkout(stashed)
            raise

        if self.return_from_checkout(stashed):
            self.logger.success("Local git state restored")
        return record

    def return_from_checkout(self, stashed: bool) -> bool:
        """
        Go back to the previous checkout, then restore stashed changes.

        Single best-effort attempt. The stash is only popped once the
        previous checkout is back.

        Returns:
            True if the local state is as it was before the rollback
        """
        if self.git.checkout_previous().is_failure:
            self.logger.warning("Could not return to the previous checkout. Run: git checkout -")
            if stashed:
                self.logger.warning("Your changes are still stashed. Run: git stash pop")
            return False
        return self.restore_stash(stashed)

    def restore_stash(self, stashed: bool) -> bool:
        """Pop the rollback stash, warning when it cannot be applied."""
        if not stashed:
            return True
        if self.git.stash_pop().is_failure:
            self.logger.warning("Could not restore stashed changes. Run: git stash pop")
            return False
        self.logger.success("Stashed changes restored")
        return True
