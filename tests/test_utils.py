"""
Tests for CLI utilities
File: cowboy/utils.py
"""

import sys
from pathlib import Path

from cowboy.constants import REDACTED
from cowboy.utils import (
    CommandExecutor,
    format_command,
    get_log_root,
    get_project_root,
)


class TestFormatCommand:
    def test_quotes_arguments(self):
        assert format_command(["git", "commit", "-m", "two words"]) == "git commit -m 'two words'"

    def test_masks_secrets(self):
        rendered = format_command(["ncftpput", "-p", "s3cret"], redact=["s3cret"])
        assert "s3cret" not in rendered
        assert REDACTED in rendered

    def test_masks_secret_that_needs_quoting(self):
        rendered = format_command(["curl", "--user", "deployer:it's"], redact=["it's"])
        assert rendered == f"curl --user 'deployer:{REDACTED}'"

    def test_ignores_empty_secret(self):
        assert format_command(["ls"], redact=[""]) == "ls"


class TestPaths:
    def test_project_root_is_cwd(self, project_dir):
        assert get_project_root() == project_dir

    def test_log_root_from_environment(self, project_dir, tmp_path):
        assert get_log_root() == tmp_path / "logs"

    def test_default_log_root(self, monkeypatch):
        monkeypatch.delenv("COWBOY_LOG_DIR", raising=False)
        assert get_log_root() == Path("~/.cowboy/logs").expanduser()


class TestCommandExecutor:
    def test_captures_output(self, tmp_path):
        result = CommandExecutor(tmp_path).run([sys.executable, "-c", "print('hello')"])
        assert result.is_success
        assert result.stdout.strip() == "hello"

    def test_non_zero_exit_is_returned(self, tmp_path):
        result = CommandExecutor(tmp_path).run([sys.executable, "-c", "import sys; sys.exit(3)"])
        assert result.returncode == 3
        assert result.is_failure

    def test_missing_tool(self, tmp_path):
        result = CommandExecutor(tmp_path).run(["cowboy-no-such-tool-xyz"])
        assert result.returncode == 127
        assert "command not found" in result.stderr

    def test_timeout(self, tmp_path):
        result = CommandExecutor(tmp_path).run(
            [sys.executable, "-c", "import time; time.sleep(5)"], timeout=1
        )
        assert result.returncode == 124

    def test_which(self, tmp_path):
        assert not CommandExecutor(tmp_path).which("cowboy-no-such-tool-xyz")

    def test_log_masks_secrets(self, project_dir, logger):
        CommandExecutor(project_dir, logger=logger).run(
            [sys.executable, "-c", "print('token s3cret')"], redact=["s3cret"]
        )
        logger.close()

        content = logger.log_path.read_text()
        assert "s3cret" not in content
        assert f"token {REDACTED}" in content

    def test_log_masks_quoted_password(self, project_dir, logger):
        password = "pa'ss word"
        CommandExecutor(project_dir, logger=logger).run(
            [sys.executable, "-c", "pass", "-p", password], redact=[password]
        )
        logger.close()

        content = logger.log_path.read_text()
        assert "pa'" not in content
        assert "ss word" not in content
        assert f"-p '{REDACTED}'" in content
