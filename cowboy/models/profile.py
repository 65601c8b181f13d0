"""
Deployment Profile Models

Dataclass models for the persisted deployment profile and its history.
"""

from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List, Tuple
from enum import Enum

from cowboy.constants import (
    DEFAULT_EXCLUDED_PATHS,
    DEFAULT_FTP_PORT,
    DEFAULT_REMOTE_PATH,
    HISTORY_LIMIT,
    ROLLBACK_CHOICES,
)



def parse_bool(value: Any, default: bool = False) -> bool:
    """Read a flag that may have been hand-edited as a string."""
    if value is None:
        return default
    if isinstance(value, str):
        return value.strip().lower() == "true"
    return bool(value)


class DeploymentKind(Enum):
    """How much of the tree a deployment uploaded."""

    FULL = "full"
    INCREMENTAL = "incremental"
    UNKNOWN = "unknown"

    @classmethod
    def parse(cls, value: Optional[str]) -> "DeploymentKind":
        """Parse a stored value, tolerating anything unrecognised."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNKNOWN


class ProjectType(Enum):
    """Detected kind of web project."""

    STATAMIC = "statamic"
    LARAVEL = "laravel"
    PHP_COMPOSER = "php-composer"
    NODE = "node"
    GENERIC = "generic"


@dataclass(frozen=True)
class DeploymentRecord:
    """One logged deployment. Immutable once appended."""

    timestamp: str
    user: str
    kind: DeploymentKind = DeploymentKind.INCREMENTAL
    git_commit: Optional[str] = None

    @property
    def has_revision(self) -> bool:
        """Check if the record can be checked out again."""
        return bool(self.git_commit)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "timestamp": self.timestamp,
            "user": self.user,
            "type": self.kind.value,
            "git_commit": self.git_commit,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentRecord":
        """Create from dictionary."""
        return cls(
            timestamp=data.get("timestamp") or "Unknown",
            user=data.get("user") or "Unknown",
            kind=DeploymentKind.parse(data.get("type")),
            git_commit=data.get("git_commit") or None,
        )

    def __repr__(self) -> str:
        return f"DeploymentRecord(timestamp={self.timestamp}, kind={self.kind.value}, commit={self.git_commit})"


@dataclass
class ProjectInfo:
    """Project descriptor."""

    type: str = ProjectType.GENERIC.value
    name: str = ""

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"type": self.type, "name": self.name}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ProjectInfo":
        """Create from dictionary."""
        return cls(
            type=data.get("type", ProjectType.GENERIC.value),
            name=data.get("name", ""),
        )


@dataclass
class FtpCredentials:
    """Transfer credentials (stored in plaintext)."""

    host: str
    username: str
    password: str
    port: int = DEFAULT_FTP_PORT
    path: str = DEFAULT_REMOTE_PATH
    secure: bool = False

    @property
    def scheme(self) -> str:
        """URL scheme for the probe and git-ftp."""
        return "ftps" if self.secure else "ftp"

    @property
    def url(self) -> str:
        """Remote URL without credentials."""
        path = self.path if self.path.startswith("/") else f"/{self.path}"
        return f"{self.scheme}://{self.host}:{self.port}{path}"

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "host": self.host,
            "port": self.port,
            "username": self.username,
            "password": self.password,
            "path": self.path,
            "secure": self.secure,
        }

    def to_public_dict(self) -> Dict[str, Any]:
        """Same as to_dict without the password."""
        data = self.to_dict()
        data.pop("password")
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "FtpCredentials":
        """Create from dictionary."""
        return cls(
            host=data.get("host", ""),
            username=data.get("username", ""),
            password=data.get("password", ""),
            port=int(data.get("port") or DEFAULT_FTP_PORT),
            path=data.get("path") or DEFAULT_REMOTE_PATH,
            secure=parse_bool(data.get("secure"), False),
        )

    def __repr__(self) -> str:
        return f"FtpCredentials(host={self.host}, port={self.port}, user={self.username}, secure={self.secure})"


@dataclass
class DeployPolicy:
    """What to do around each upload."""

    build_assets: bool = True
    run_composer: bool = True
    excluded_paths: List[str] = field(
        default_factory=lambda: list(DEFAULT_EXCLUDED_PATHS)
    )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "build_assets": self.build_assets,
            "run_composer": self.run_composer,
            "excluded_paths": list(self.excluded_paths),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeployPolicy":
        """Create from dictionary."""
        excluded = data.get("excluded_paths")
        return cls(
            build_assets=parse_bool(data.get("build_assets"), True),
            run_composer=parse_bool(data.get("run_composer"), True),
            excluded_paths=list(DEFAULT_EXCLUDED_PATHS)
            if excluded is None
            else list(excluded),
        )


@dataclass
class DeploymentProfile:
    """
    Complete deployment profile for a project.

    History is kept oldest first. Records are addressed by a 1-based
    ordinal counted from the oldest retained record, recomputed from the
    current list on every read, so a deployment's number shifts down as
    old records are evicted.
    """

    project: ProjectInfo
    ftp: FtpCredentials
    deploy: DeployPolicy = field(default_factory=DeployPolicy)
    history: List[DeploymentRecord] = field(default_factory=list)

    @property
    def has_history(self) -> bool:
        """Check if anything has been deployed yet."""
        return len(self.history) > 0

    @property
    def latest(self) -> Optional[DeploymentRecord]:
        """Most recent deployment."""
        return self.history[-1] if self.history else None

    def record_deployment(self, record: DeploymentRecord) -> None:
        """Append a record, keeping only the most recent HISTORY_LIMIT."""
        self.history.append(record)
        self.history = self.history[-HISTORY_LIMIT:]

    def get_record(self, number: int) -> Optional[DeploymentRecord]:
        """Resolve a 1-based ordinal to a record, or None if out of range."""
        if number < 1 or number > len(self.history):
            return None
        return self.history[number - 1]

    def numbered_history(
        self, limit: Optional[int] = None
    ) -> List[Tuple[int, DeploymentRecord]]:
        """Newest-first (ordinal, record) pairs, at most `limit` of them."""
        total = len(self.history)
        numbered = [(total - idx, record) for idx, record in enumerate(reversed(self.history))]
        if limit is not None:
            numbered = numbered[: max(limit, 0)]
        return numbered

    def rollback_candidates(
        self, limit: int = ROLLBACK_CHOICES
    ) -> List[Tuple[int, DeploymentRecord]]:
        """The `limit` most recent records before the current one."""
        return self.numbered_history()[1 : limit + 1]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "project": self.project.to_dict(),
            "ftp": self.ftp.to_dict(),
            "deploy": self.deploy.to_dict(),
            "history": [record.to_dict() for record in self.history],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DeploymentProfile":
        """Create from dictionary."""
        return cls(
            project=ProjectInfo.from_dict(data.get("project") or {}),
            ftp=FtpCredentials.from_dict(data.get("ftp") or {}),
            deploy=DeployPolicy.from_dict(data.get("deploy") or {}),
            history=[
                DeploymentRecord.from_dict(record)
                for record in data.get("history") or []
            ],
        )

    def __repr__(self) -> str:
        return f"DeploymentProfile(project={self.project.name}, host={self.ftp.host}, history={len(self.history)})"
