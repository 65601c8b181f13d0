"""Cowboy Deploy CLI commands."""
