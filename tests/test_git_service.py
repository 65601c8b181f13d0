"""
Tests for the git wrapper
File: cowboy/services/git_service.py
"""

from cowboy.services import GitService
from tests.conftest import FakeExecutor


def _git(root, executor=None):
    return GitService(executor or FakeExecutor(), root)


class TestRepositoryDetection:
    def test_plain_directory(self, project_dir):
        assert not _git(project_dir).is_repository()

    def test_git_directory(self, git_project):
        assert _git(git_project).is_repository()


class TestChanges:
    def test_porcelain_lines(self, git_project):
        executor = FakeExecutor().on("git", "status", stdout=" M app.php\n?? new.txt\n\n")
        assert _git(git_project, executor).status_porcelain() == [" M app.php", "?? new.txt"]

    def test_failed_status_means_no_changes(self, git_project):
        executor = FakeExecutor().on("git", "status", returncode=128)
        assert not _git(git_project, executor).has_changes()

    def test_build_artifacts_are_not_relevant(self, git_project):
        executor = FakeExecutor().on(
            "git",
            "status",
            stdout=" M public/build/app.js\n M public/css/site.css\n M dist/bundle.js\n"
            " M public/mix-manifest.json\n M resources/views/home.blade.php\n",
        )
        git = _git(git_project, executor)

        assert git.has_changes()
        assert git.relevant_changes() == [" M resources/views/home.blade.php"]


class TestRevisions:
    def test_current_commit(self, git_project):
        executor = FakeExecutor().on("git", "rev-parse", "--short", stdout="abc1234\n")
        assert _git(git_project, executor).current_commit() == "abc1234"

    def test_no_commit_outside_repository(self, project_dir):
        executor = FakeExecutor()
        assert _git(project_dir, executor).current_commit() is None
        assert executor.calls == []

    def test_no_commit_on_empty_repository(self, git_project):
        executor = FakeExecutor().on("git", "rev-parse", returncode=128, stderr="unknown revision")
        assert _git(git_project, executor).current_commit() is None

    def test_current_branch(self, git_project):
        executor = FakeExecutor().on("git", "rev-parse", "--abbrev-ref", stdout="main\n")
        assert _git(git_project, executor).current_branch() == "main"


class TestCommands:
    def test_checkout_previous(self, git_project):
        executor = FakeExecutor()
        _git(git_project, executor).checkout_previous()
        assert executor.calls == [["git", "checkout", "-"]]

    def test_diff_head_failure_is_empty(self, git_project):
        executor = FakeExecutor().on("git", "diff", returncode=1, stdout="ignored")
        assert _git(git_project, executor).diff_head("composer.lock") == ""

    def test_secret_config_is_redacted(self, git_project):
        executor = FakeExecutor()
        git = _git(git_project, executor)
        git.set_config("git-ftp.user", "deployer")
        git.set_config("git-ftp.password", "s3cret", secret=True)

        assert executor.redactions == [(), ("s3cret",)]

    def test_stash_message(self, git_project):
        executor = FakeExecutor()
        _git(git_project, executor).stash_push("auto-stash")
        assert executor.calls == [["git", "stash", "push", "-m", "auto-stash"]]
