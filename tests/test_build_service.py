"""
Tests for asset builds and composer installs
File: cowboy/services/build_service.py
"""

from cowboy.services import AssetBuilder, DependencyInstaller, GitService
from tests.conftest import FakeExecutor


class TestAssetBuilder:
    def test_nothing_to_build(self, project_dir):
        executor = FakeExecutor()
        assert AssetBuilder(executor, project_dir).build()
        assert executor.calls == []

    def test_installs_when_node_modules_missing(self, project_dir):
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        executor = FakeExecutor()

        assert AssetBuilder(executor, project_dir).build()
        assert executor.calls == [["npm", "install"], ["npm", "run", "build"]]

    def test_skips_install_when_node_modules_present(self, project_dir):
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        (project_dir / "node_modules").mkdir()
        executor = FakeExecutor()

        AssetBuilder(executor, project_dir).build()
        assert executor.calls == [["npm", "run", "build"]]

    def test_failed_install_stops_build(self, project_dir):
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        executor = FakeExecutor().on("npm", "install", returncode=1)

        assert not AssetBuilder(executor, project_dir).build()
        assert not executor.ran("npm", "run", "build")

    def test_failed_build(self, project_dir, logger):
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        (project_dir / "node_modules").mkdir()
        executor = FakeExecutor().on("npm", "run", "build", returncode=2)

        assert not AssetBuilder(executor, project_dir, logger=logger).build()


class TestDependencyInstaller:
    def _installer(self, root, executor):
        return DependencyInstaller(executor, root, GitService(executor, root))

    def test_always_changed_outside_git(self, project_dir):
        assert self._installer(project_dir, FakeExecutor()).has_changes()

    def test_unchanged_lock_file(self, git_project):
        executor = FakeExecutor().on("git", "diff", stdout="")
        assert not self._installer(git_project, executor).has_changes()

    def test_changed_lock_file(self, git_project):
        executor = FakeExecutor().on("git", "diff", stdout="- \"version\": \"1.0\"\n")
        assert self._installer(git_project, executor).has_changes()
        assert ["git", "diff", "HEAD", "--", "composer.lock"] in executor.calls

    def test_install_command(self, project_dir):
        executor = FakeExecutor()
        self._installer(project_dir, executor).install()
        assert executor.calls == [["composer", "install", "--no-dev", "--optimize-autoloader"]]
