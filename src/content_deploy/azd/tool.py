"""
Azure Developer CLI (azd) adapter.

Every call the deployment makes to azd goes through DeploymentTool, so tests can
swap the real binary for an in-memory fake.
"""

import json
import logging
import os
import re
import subprocess
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Dict, List, Optional, Tuple

import click

from ..exceptions import CommandError

logger = logging.getLogger(__name__)

VERSION_PATTERN = re.compile(r"\d+\.\d+\.\d+")


def parse_env_values(text: str) -> Dict[str, str]:
    """
    Parse `azd env get-values` output.

    Lines look like KEY="value". Blank lines, comments and lines without '=' are
    skipped. Surrounding double quotes are removed from values.
    """
    values: Dict[str, str] = {}
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, value = line.split("=", 1)
        value = value.strip()
        if len(value) >= 2 and value[0] == value[-1] == '"':
            value = value[1:-1]
        values[key.strip()] = value
    return values


def parse_version(text: str) -> Optional[str]:
    """Return the first X.Y.Z found on the first line of `text`."""
    first_line = text.splitlines()[0] if text else ""
    match = VERSION_PATTERN.search(first_line)
    return match.group(0) if match else None


class DeploymentTool(ABC):
    """Operations the deployment needs from the deployment CLI."""

    @abstractmethod
    def check_version(self) -> Optional[str]:
        """Return the installed version, or None if it cannot be determined."""

    @abstractmethod
    def login(self, tenant_id: str) -> None:
        """Authenticate against a tenant."""

    @abstractmethod
    def list_environments(self) -> List[str]:
        """Return the names of existing environments."""

    @abstractmethod
    def new_environment(self, name: str) -> None:
        pass

    @abstractmethod
    def select_environment(self, name: str) -> None:
        pass

    @abstractmethod
    def set_variable(self, key: str, value: str) -> None:
        pass

    @abstractmethod
    def get_values(self) -> Dict[str, str]:
        """Return the selected environment's values."""

    @abstractmethod
    def up(self) -> None:
        """Provision and deploy. Blocks until azd exits."""


class AzdCli(DeploymentTool):
    """DeploymentTool backed by the real `azd` executable.

    Every method raises CommandError when azd exits with a non-zero status.
    """

    def __init__(
        self,
        executable: str = "azd",
        cwd: Optional[Path] = None,
        env: Optional[Dict[str, str]] = None,
        dry_run: bool = False,
    ):
        """
        Initialize the adapter.

        Args:
            executable: azd binary name or path
            cwd: Working directory for azd (the project root holding azure.yaml)
            env: Extra environment variables for azd processes
            dry_run: If True, print commands instead of running them
        """
        self.executable = executable
        self.cwd = cwd
        self.env = env or {}
        self.dry_run = dry_run

    def run_command(
        self, args: List[str], capture_output: bool = True
    ) -> Tuple[int, str, str]:
        """
        Run azd with the given arguments.

        Interactive commands should pass capture_output=False so azd can talk to
        the terminal directly.

        Returns:
            Tuple of (return_code, stdout, stderr)
        """
        command = [self.executable] + args
        logger.debug(f"Running command: {' '.join(command)}")

        if self.dry_run:
            click.echo(f"[dry-run] {' '.join(command)}")
            return 0, "", ""

        process_env = os.environ.copy()
        process_env.update(self.env)

        result = subprocess.run(
            command,
            cwd=self.cwd,
            env=process_env,
            capture_output=capture_output,
            text=True,
            check=False,
        )

        if result.returncode != 0:
            logger.debug(f"Command failed with code {result.returncode}")

        return result.returncode, result.stdout or "", result.stderr or ""

    def _check(self, args: List[str], capture_output: bool = True) -> str:
        returncode, stdout, stderr = self.run_command(args, capture_output)
        if returncode != 0:
            raise CommandError([self.executable] + args, returncode, stderr)
        return stdout

    def check_version(self) -> Optional[str]:
        return parse_version(self._check(["version"]))

    def login(self, tenant_id: str) -> None:
        self._check(["auth", "login", "--tenant-id", tenant_id], capture_output=False)

    def list_environments(self) -> List[str]:
        stdout = self._check(["env", "list", "--output", "json"])
        if not stdout.strip():
            return []
        environments = json.loads(stdout)
        if not isinstance(environments, list) or not all(
            isinstance(env, dict) for env in environments
        ):
            raise ValueError("expected a JSON list of environment objects")
        return [env["Name"] for env in environments if env.get("Name")]

    def new_environment(self, name: str) -> None:
        self._check(["env", "new", name], capture_output=False)

    def select_environment(self, name: str) -> None:
        self._check(["env", "select", name], capture_output=False)

    def set_variable(self, key: str, value: str) -> None:
        self._check(["env", "set", key, value])

    def get_values(self) -> Dict[str, str]:
        return parse_env_values(self._check(["env", "get-values"]))

    def up(self) -> None:
        self._check(["up"], capture_output=False)
