"""Errors raised by the deployment steps."""

from typing import List, Optional


class DeploymentError(Exception):
    """A fatal failure that stops the deployment.

    Attributes:
        message: One-line description printed as the error
        hints: Remediation lines printed after the error
        hint_title: Optional heading printed as info before the hints
        exit_code: Process exit status to terminate with
    """

    def __init__(
        self,
        message: str,
        hints: Optional[List[str]] = None,
        exit_code: int = 1,
        hint_title: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.hints = list(hints or [])
        self.exit_code = exit_code
        self.hint_title = hint_title


class ConfigurationError(DeploymentError):
    """Raised when configuration is invalid or cannot be loaded."""


class PrerequisiteError(DeploymentError):
    """Raised when a required tool is missing."""


class AuthenticationError(DeploymentError):
    """Raised when `azd auth login` fails."""


class EnvironmentSetupError(DeploymentError):
    """Raised when an azd environment command fails."""


class DeploymentFailedError(DeploymentError):
    """Raised when `azd up` fails."""


class CommandError(Exception):
    """An external command exited with a non-zero status."""

    def __init__(self, command: List[str], returncode: int, stderr: str = ""):
        self.command = command
        self.returncode = returncode
        self.stderr = stderr
        message = f"Command '{' '.join(command)}' failed with exit code {returncode}"
        if stderr.strip():
            message += f": {stderr.strip()}"
        super().__init__(message)

    @property
    def exit_status(self) -> int:
        """Exit status as a shell reports it; signal N becomes 128 + N."""
        if self.returncode < 0:
            return 128 - self.returncode
        return self.returncode
