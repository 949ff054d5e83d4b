"""
Deployment orchestration.

Runs the deployment steps in a fixed order: prerequisites, authentication,
environment setup, `azd up`, then the post-deployment report. Any fatal step
stops the run; the result carries the exit status for the CLI.
"""

import logging
import time
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, List, Optional, Tuple

import click

from ..azd import DeploymentTool, HostTools
from ..config import DeploymentConfig
from ..console import Console
from ..exceptions import (
    AuthenticationError,
    CommandError,
    ConfigurationError,
    DeploymentError,
    DeploymentFailedError,
    EnvironmentSetupError,
    PrerequisiteError,
)
from .instructions import (
    ENDPOINT_PLACEHOLDER,
    TROUBLESHOOTING_STEPS,
    extract_api_endpoint,
    render_next_steps,
)

logger = logging.getLogger(__name__)

AZD_INSTALL_URL = "https://aka.ms/install-azd"
DOCKER_INSTALL_URL = "https://www.docker.com/products/docker-desktop/"

Prompt = Callable[[str], str]


def click_prompt(message: str) -> str:
    """Ask the user for a line of input on the terminal."""
    return click.prompt(message, default="", show_default=False)


def _version_tuple(version: str) -> Tuple[int, ...]:
    return tuple(int(part) for part in version.split("."))


class DeploymentStatus(Enum):
    """Status of a deployment run."""
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    SUCCESS = "success"
    FAILED = "failed"


@dataclass
class DeploymentResult:
    """Result of a deployment run."""
    status: DeploymentStatus
    message: str
    duration: float
    outputs: Dict[str, Any] = None
    errors: List[str] = None
    warnings: List[str] = None
    exit_code: int = 0

    @property
    def success(self) -> bool:
        """Check if deployment was successful."""
        return self.status == DeploymentStatus.SUCCESS


class DeploymentOrchestrator:
    """Drives azd through a complete deployment of the solution."""

    def __init__(
        self,
        config: DeploymentConfig,
        tool: DeploymentTool,
        host: Optional[HostTools] = None,
        env_name: Optional[str] = None,
        skip_auth: bool = False,
        prompt: Optional[Prompt] = None,
        console: Optional[Console] = None,
    ):
        """
        Initialize the orchestrator.

        Args:
            config: Deployment target settings
            tool: Adapter for the deployment CLI
            host: Checks for locally installed tools
            env_name: Environment to deploy (defaults to config.default_env_name)
            skip_auth: If True, do not run `azd auth login`
            prompt: Reads a line of user input for a given message
            console: Output sink for progress messages
        """
        self.config = config
        self.tool = tool
        self.host = host or HostTools()
        self.env_name = config.default_env_name if env_name is None else env_name
        self.skip_auth = skip_auth
        self.prompt = prompt or click_prompt
        self.console = console or Console()

        self.status = DeploymentStatus.PENDING
        self.start_time: Optional[float] = None
        self.outputs: Dict[str, Any] = {}
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_warning(self, message: str) -> None:
        """Print an advisory warning and record it on the result."""
        self.warnings.append(message)
        self.console.warning(message)

    def check_prerequisites(self) -> None:
        """Verify azd is installed and report on Docker and Git."""
        self.console.header("Checking Prerequisites")

        if not self.host.is_installed("azd"):
            raise PrerequisiteError(
                "Azure Developer CLI (azd) is not installed",
                hints=[f"Please install azd from: {AZD_INSTALL_URL}"],
            )

        try:
            azd_version = self.tool.check_version()
        except CommandError as e:
            logger.debug(f"azd version query failed: {e}")
            azd_version = None
        self.console.success(f"Azure Developer CLI version: {azd_version or 'unknown'}")

        if azd_version and _version_tuple(azd_version) < _version_tuple(
            self.config.min_azd_version
        ):
            self.add_warning(
                f"azd {self.config.min_azd_version} or higher is recommended "
                f"(found {azd_version})"
            )

        if not self.host.is_installed("docker"):
            self.add_warning("Docker is not installed or not in PATH")
            self.console.echo(
                f"Docker is required for building containers. Install from: {DOCKER_INSTALL_URL}"
            )
        elif self.host.docker_running():
            self.console.success("Docker is running")
        else:
            self.add_warning("Docker daemon is not running. Please start Docker Desktop.")

        # A missing git is not reported
        if self.host.is_installed("git"):
            self.console.success("Git is installed")

        self.console.echo()

    def authenticate(self) -> None:
        """Log in to the configured tenant."""
        self.console.header("Azure Authentication")
        self.console.info("Authenticating with Azure Developer CLI...")

        try:
            self.tool.login(self.config.tenant_id)
        except CommandError as e:
            logger.debug(str(e))
            raise AuthenticationError("Authentication failed")

        self.console.success("Successfully authenticated with Azure")
        self.console.echo()

    def _environment_exists(self, name: str) -> bool:
        try:
            return name in self.tool.list_environments()
        except CommandError as e:
            raise EnvironmentSetupError(
                f"Could not list azd environments: {e}", exit_code=e.exit_status
            )
        except (ValueError, KeyError, TypeError) as e:
            raise EnvironmentSetupError(f"Unexpected output from azd env list: {e}")

    def create_environment(self, env_name: str) -> str:
        """
        Select or create the azd environment and configure it.

        If the environment already exists the user is asked whether to reuse it;
        declining asks once for a different name.

        Returns:
            The name of the environment that was configured
        """
        self.console.header("Environment Setup")

        if not env_name:
            raise ConfigurationError("Environment name must not be empty")

        if self._environment_exists(env_name):
            self.add_warning(f"Environment '{env_name}' already exists")
            reply = self.prompt("Do you want to use the existing environment? (y/n)")
            if not reply.strip().lower().startswith("y"):
                env_name = self.prompt("Enter a new environment name").strip()
                if not env_name:
                    raise ConfigurationError("Environment name must not be empty")

        try:
            if self._environment_exists(env_name):
                self.console.info(f"Selecting existing environment: {env_name}")
                self.tool.select_environment(env_name)
            else:
                self.console.info(f"Creating new environment: {env_name}")
                self.tool.new_environment(env_name)

            self.console.info("Configuring environment variables...")
            self.tool.set_variable("AZURE_SUBSCRIPTION_ID", self.config.subscription_id)
            self.tool.set_variable("AZURE_LOCATION", self.config.location)
        except CommandError as e:
            raise EnvironmentSetupError(str(e), exit_code=e.exit_status)

        self.console.success(f"Environment configured: {env_name}")
        self.console.info(f"Subscription: {self.config.subscription_id}")
        self.console.info(f"Location: {self.config.location}")
        self.console.echo()

        self.outputs["environment"] = env_name
        return env_name

    def deploy_solution(self) -> None:
        """Run `azd up` and wait for it to finish."""
        self.console.header("Deploying to Azure")
        self.console.info("Starting deployment (this will take 4-6 minutes)...")
        self.console.warning("Do not interrupt the deployment process")
        self.console.echo()

        try:
            self.tool.up()
        except CommandError as e:
            logger.debug(str(e))
            raise DeploymentFailedError(
                "Deployment failed",
                hints=[f"  {step}" for step in TROUBLESHOOTING_STEPS],
                hint_title="Troubleshooting steps:",
            )

        self.console.success("Deployment completed successfully!")
        self.console.echo()

    def display_post_deployment_steps(self) -> str:
        """
        Print the follow-up instructions for the deployed environment.

        Returns:
            The API endpoint used in the instructions (or the placeholder)
        """
        self.console.header("Next Steps - Post Deployment Configuration")

        try:
            api_endpoint = extract_api_endpoint(self.tool.get_values())
        except CommandError as e:
            logger.debug(f"azd env get-values failed: {e}")
            api_endpoint = None

        if not api_endpoint:
            self.add_warning("Could not retrieve API endpoint automatically")
            self.console.info(
                "You can find the API endpoint in the Azure Portal or by running: "
                "azd env get-values"
            )
            api_endpoint = ENDPOINT_PLACEHOLDER
        else:
            self.outputs["api_endpoint"] = api_endpoint

        self.console.echo(render_next_steps(api_endpoint))
        return api_endpoint

    def execute(self) -> DeploymentResult:
        """Run every step in order, stopping at the first fatal error."""
        self.start_time = time.time()
        self.status = DeploymentStatus.IN_PROGRESS

        self.console.info("Starting deployment process...")
        self.console.echo()

        try:
            self.check_prerequisites()

            if self.skip_auth:
                self.console.info("Skipping authentication (--skip-auth specified)")
                self.console.echo()
            else:
                self.authenticate()

            self.create_environment(self.env_name)
            self.deploy_solution()
            self.display_post_deployment_steps()
        except DeploymentError as e:
            self.status = DeploymentStatus.FAILED
            self.errors.append(e.message)
            self.console.error(e.message)
            if e.hint_title:
                self.console.echo()
                self.console.info(e.hint_title)
            for hint in e.hints:
                self.console.echo(hint)
            return DeploymentResult(
                status=self.status,
                message=e.message,
                duration=time.time() - self.start_time,
                outputs=self.outputs,
                errors=self.errors,
                warnings=self.warnings,
                exit_code=e.exit_code,
            )

        self.status = DeploymentStatus.SUCCESS
        self.console.success("Deployment script completed!")
        self.console.echo()
        return DeploymentResult(
            status=self.status,
            message="Deployment completed successfully",
            duration=time.time() - self.start_time,
            outputs=self.outputs,
            errors=self.errors,
            warnings=self.warnings,
        )
