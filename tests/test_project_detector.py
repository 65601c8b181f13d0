"""
Tests for project detection and credential defaults
File: cowboy/services/project_detector.py
"""

import json

import pytest

from cowboy.models.profile import ProjectType
from cowboy.services.project_detector import (
    add_to_gitignore,
    detect_project_type,
    load_defaults,
)


def _composer(root, require):
    (root / "composer.json").write_text(json.dumps({"require": require}), encoding="utf-8")


class TestDetectProjectType:
    @pytest.mark.parametrize(
        "require, expected",
        [
            ({"statamic/cms": "^4.0", "laravel/framework": "^10.0"}, ProjectType.STATAMIC),
            ({"laravel/framework": "^10.0"}, ProjectType.LARAVEL),
            ({"monolog/monolog": "^3.0"}, ProjectType.PHP_COMPOSER),
        ],
    )
    def test_composer_projects(self, project_dir, require, expected):
        _composer(project_dir, require)
        assert detect_project_type(project_dir) is expected

    def test_unreadable_composer_file(self, project_dir):
        (project_dir / "composer.json").write_text("{broken", encoding="utf-8")
        assert detect_project_type(project_dir) is ProjectType.PHP_COMPOSER

    def test_node_project(self, project_dir):
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        assert detect_project_type(project_dir) is ProjectType.NODE

    def test_composer_wins_over_package_json(self, project_dir):
        _composer(project_dir, {})
        (project_dir / "package.json").write_text("{}", encoding="utf-8")
        assert detect_project_type(project_dir) is ProjectType.PHP_COMPOSER

    def test_generic(self, project_dir):
        assert detect_project_type(project_dir) is ProjectType.GENERIC


class TestLoadDefaults:
    def test_nothing_found(self, project_dir):
        assert load_defaults(project_dir) == {}

    def test_env_file(self, project_dir):
        (project_dir / ".env").write_text(
            "APP_NAME=Site\n"
            "FTP_HOST=ftp.example.com\n"
            "DEPLOY_FTP_USER=deployer\n"
            'FTP_PASSWORD="s3cret"\n'
            "FTP_SECURE=TRUE\n",
            encoding="utf-8",
        )
        assert load_defaults(project_dir) == {
            "host": "ftp.example.com",
            "username": "deployer",
            "password": "s3cret",
            "port": "21",
            "path": "/",
            "secure": True,
        }

    def test_env_key_priority(self, project_dir):
        (project_dir / ".env").write_text(
            "DEPLOY_FTP_HOST=second.example.com\nFTP_HOST=first.example.com\n",
            encoding="utf-8",
        )
        assert load_defaults(project_dir)["host"] == "first.example.com"

    def test_secure_false_is_dropped(self, project_dir):
        (project_dir / ".env").write_text("FTP_HOST=h\nFTP_SECURE=false\n", encoding="utf-8")
        assert "secure" not in load_defaults(project_dir)

    def test_deployer_file(self, project_dir):
        (project_dir / "deploy.php").write_text(
            "<?php\nhost('web.example.com')\n    ->user('forge');\n", encoding="utf-8"
        )
        assert load_defaults(project_dir) == {"host": "web.example.com", "username": "forge"}

    def test_ftpconfig_file(self, project_dir):
        (project_dir / ".ftpconfig").write_text(
            json.dumps(
                {
                    "host": "ftp.example.com",
                    "port": 2121,
                    "user": "deployer",
                    "pass": "s3cret",
                    "remotePath": "/www",
                    "secure": False,
                }
            ),
            encoding="utf-8",
        )
        assert load_defaults(project_dir) == {
            "host": "ftp.example.com",
            "port": 2121,
            "username": "deployer",
            "password": "s3cret",
            "path": "/www",
        }

    def test_earlier_sources_win(self, project_dir):
        (project_dir / ".env").write_text("FTP_HOST=env.example.com\n", encoding="utf-8")
        (project_dir / "deploy.php").write_text(
            "host('deployer.example.com')->user('forge');", encoding="utf-8"
        )
        (project_dir / ".ftpconfig").write_text(
            json.dumps({"host": "config.example.com", "pass": "s3cret"}), encoding="utf-8"
        )
        defaults = load_defaults(project_dir)

        assert defaults["host"] == "env.example.com"
        assert defaults["username"] == "forge"
        assert defaults["password"] == "s3cret"

    def test_ftpconfig_secure_string(self, project_dir):
        (project_dir / ".ftpconfig").write_text(
            json.dumps({"host": "h", "secure": "false"}), encoding="utf-8"
        )
        assert load_defaults(project_dir) == {"host": "h"}

    def test_invalid_ftpconfig_is_ignored(self, project_dir):
        (project_dir / ".ftpconfig").write_text("not json", encoding="utf-8")
        assert load_defaults(project_dir) == {}


class TestAddToGitignore:
    def test_creates_file(self, project_dir):
        assert add_to_gitignore(project_dir, ".cowboy-deploy.json") == "created"
        assert (project_dir / ".gitignore").read_text() == ".cowboy-deploy.json\n"

    def test_already_listed(self, project_dir):
        (project_dir / ".gitignore").write_text("vendor\n.cowboy-deploy.json\n")
        assert add_to_gitignore(project_dir, ".cowboy-deploy.json") == "exists"

    def test_appends_on_new_line(self, project_dir):
        (project_dir / ".gitignore").write_text("vendor")
        assert add_to_gitignore(project_dir, ".cowboy-deploy.json") == "added"
        assert (project_dir / ".gitignore").read_text() == "vendor\n.cowboy-deploy.json\n"
