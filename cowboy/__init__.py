"""Cowboy Deploy - FTP deployments for web projects."""

__version__ = "1.0.0"
