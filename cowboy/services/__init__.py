"""
Cowboy Deploy Services Layer

Centralized business logic and operations for CLI commands.
"""

from .profile_service import ProfileStore
from .git_service import GitService
from .build_service import AssetBuilder, DependencyInstaller
from .transfer_service import TransferService
from .deployment_service import DeploymentService

__all__ = [
    "ProfileStore",
    "GitService",
    "AssetBuilder",
    "DependencyInstaller",
    "TransferService",
    "DeploymentService",
]
