"""
Project Detection

Guesses the project type and pre-fills FTP credentials from files
already lying around in the project root.
"""

import json
import re
from pathlib import Path
from typing import Any, Dict

from dotenv import dotenv_values

from cowboy.constants import DEFAULT_FTP_PORT, DEFAULT_REMOTE_PATH
from cowboy.models.profile import ProjectType, parse_bool

# Checked in order, first non-empty value wins
ENV_KEYS = {
    "host": ["FTP_HOST", "DEPLOY_FTP_HOST"],
    "port": ["FTP_PORT", "DEPLOY_FTP_PORT"],
    "username": ["FTP_USER", "DEPLOY_FTP_USER", "FTP_USERNAME"],
    "password": ["FTP_PASSWORD", "DEPLOY_FTP_PASSWORD", "FTP_PASS"],
    "path": ["FTP_PATH", "DEPLOY_FTP_PATH"],
    "secure": ["FTP_SECURE", "FTP_SSL"],
}

FTPCONFIG_KEYS = {
    "host": "host",
    "port": "port",
    "username": "user",
    "password": "pass",
    "path": "remotePath",
    "secure": "secure",
}

DEPLOYER_HOST = re.compile(r"host\('([^']+)'\)")
DEPLOYER_USER = re.compile(r"user\('([^']+)'\)")


def _read_json(path: Path) -> Dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError):
        return {}
    return data if isinstance(data, dict) else {}


def detect_project_type(project_root: Path) -> ProjectType:
    """
    Detect the kind of project from its manifest files.

    Args:
        project_root: Project directory

    Returns:
        ProjectType
    """
    composer_file = project_root / "composer.json"
    if composer_file.exists():
        require = _read_json(composer_file).get("require") or {}

        if "statamic/cms" in require:
            return ProjectType.STATAMIC
        if "laravel/framework" in require:
            return ProjectType.LARAVEL
        return ProjectType.PHP_COMPOSER

    if (project_root / "package.json").exists():
        return ProjectType.NODE

    return ProjectType.GENERIC


def _defaults_from_env(env_file: Path) -> Dict[str, Any]:
    env = dotenv_values(env_file)
    found: Dict[str, Any] = {}

    for field, keys in ENV_KEYS.items():
        for key in keys:
            if env.get(key):
                found[field] = env[key]
                break

    found.setdefault("port", str(DEFAULT_FTP_PORT))
    found.setdefault("path", DEFAULT_REMOTE_PATH)
    found["secure"] = parse_bool(found.get("secure"))
    return found


def _defaults_from_deployer(deploy_file: Path) -> Dict[str, Any]:
    try:
        content = deploy_file.read_text(encoding="utf-8")
    except OSError:
        return {}

    found: Dict[str, Any] = {}
    host = DEPLOYER_HOST.search(content)
    if host:
        found["host"] = host.group(1)
    user = DEPLOYER_USER.search(content)
    if user:
        found["username"] = user.group(1)
    return found


def _defaults_from_ftpconfig(config_file: Path) -> Dict[str, Any]:
    config = _read_json(config_file)
    found = {
        field: config[key]
        for field, key in FTPCONFIG_KEYS.items()
        if config.get(key) not in (None, "")
    }
    if "secure" in found:
        found["secure"] = parse_bool(found["secure"])
    return found


def load_defaults(project_root: Path) -> Dict[str, Any]:
    """
    Collect credential defaults from .env, deploy.php and .ftpconfig.

    Earlier sources win; later ones only fill fields still empty.
    Empty values are dropped.

    Args:
        project_root: Project directory

    Returns:
        Dict with any of host, port, username, password, path, secure
    """
    defaults: Dict[str, Any] = {}
    sources = [
        (project_root / ".env", _defaults_from_env),
        (project_root / "deploy.php", _defaults_from_deployer),
        (project_root / ".ftpconfig", _defaults_from_ftpconfig),
    ]

    for path, reader in sources:
        if not path.is_file():
            continue
        for field, value in reader(path).items():
            if not defaults.get(field):
                defaults[field] = value

    return {field: value for field, value in defaults.items() if value}


def add_to_gitignore(project_root: Path, entry: str) -> str:
    """
    Make sure .gitignore lists an entry.

    Returns:
        "created", "exists" or "added"
    """
    gitignore = project_root / ".gitignore"

    if not gitignore.exists():
        gitignore.write_text(entry + "\n", encoding="utf-8")
        return "created"

    content = gitignore.read_text(encoding="utf-8")
    if entry in content:
        return "exists"

    separator = "" if content.endswith("\n") or not content else "\n"
    gitignore.write_text(f"{content}{separator}{entry}\n", encoding="utf-8")
    return "added"
