"""
Deployment orchestration and post-deployment reporting.
"""

from .instructions import ENDPOINT_PLACEHOLDER, extract_api_endpoint, render_next_steps
from .orchestrator import (
    DeploymentOrchestrator,
    DeploymentResult,
    DeploymentStatus,
    click_prompt,
)

__all__ = [
    "DeploymentOrchestrator",
    "DeploymentResult",
    "DeploymentStatus",
    "ENDPOINT_PLACEHOLDER",
    "click_prompt",
    "extract_api_endpoint",
    "render_next_steps",
]
