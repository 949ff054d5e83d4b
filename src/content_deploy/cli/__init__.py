"""Command-line entry points."""

from .deploy import DeployDependencies, main

__all__ = ["DeployDependencies", "main"]
