"""
Profile Storage Service

Loads and saves the JSON deployment profile in the project root.
"""

import json
from pathlib import Path

from cowboy.constants import PROFILE_FILENAME
from cowboy.models.profile import DeploymentProfile
from cowboy.exceptions import ConfigurationError, ProfileNotFoundError


class ProfileStore:
    """
    File-backed deployment profile.

    Responsibilities:
    - Locate the profile in the project root
    - Parse it into a DeploymentProfile
    - Write it back as pretty-printed JSON

    Read once at the start of a command, written once at the end of a
    successful operation. There is no locking.
    """

    def __init__(self, project_root: Path):
        """
        Initialize profile store.

        Args:
            project_root: Directory holding the profile
        """
        self.project_root = project_root
        self.path = project_root / PROFILE_FILENAME

    def exists(self) -> bool:
        """Check if a profile has been created."""
        return self.path.is_file()

    def load(self) -> DeploymentProfile:
        """
        Load the deployment profile.

        Returns:
            DeploymentProfile object

        Raises:
            ProfileNotFoundError: If the profile does not exist
            ConfigurationError: If the profile is not valid JSON
        """
        if not self.exists():
            raise ProfileNotFoundError(str(self.path))

        try:
            data = json.loads(self.path.read_text(encoding="utf-8"))
        except json.JSONDecodeError as e:
            raise ConfigurationError(
                f"Invalid deployment config: {self.path.name}",
                context=f"Line {e.lineno}: {e.msg}",
            )

        if not isinstance(data, dict):
            raise ConfigurationError(
                f"Invalid deployment config: {self.path.name}",
                context="Expected a JSON object",
            )

        return DeploymentProfile.from_dict(data)

    def save(self, profile: DeploymentProfile) -> None:
        """
        Write the deployment profile.

        Args:
            profile: Profile to persist
        """
        content = json.dumps(profile.to_dict(), indent=4, ensure_ascii=False)
        self.path.write_text(content + "\n", encoding="utf-8")
