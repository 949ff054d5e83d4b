"""
Adapters for the external tools the deployment drives.
"""

from .host import HostTools
from .tool import AzdCli, DeploymentTool, parse_env_values, parse_version

__all__ = [
    "AzdCli",
    "DeploymentTool",
    "HostTools",
    "parse_env_values",
    "parse_version",
]
