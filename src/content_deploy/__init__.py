"""
Content Deploy - Deploys the Content Processing Solution Accelerator with the Azure Developer CLI.
"""

__version__ = "1.0.0"

from .config import DeploymentConfig, load_deployment_config

__all__ = ["DeploymentConfig", "load_deployment_config"]
