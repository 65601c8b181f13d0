"""
Cowboy Deploy Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .results import (
    ExecutionResult,
    TransferResult,
)
from .profile import (
    DeploymentKind,
    DeploymentProfile,
    DeploymentRecord,
    DeployPolicy,
    FtpCredentials,
    ProjectInfo,
    ProjectType,
)

__all__ = [
    # Results
    "ExecutionResult",
    "TransferResult",
    # Profile
    "DeploymentKind",
    "DeploymentProfile",
    "DeploymentRecord",
    "DeployPolicy",
    "FtpCredentials",
    "ProjectInfo",
    "ProjectType",
]
