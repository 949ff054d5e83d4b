"""
Shared fixtures: in-memory stand-ins for azd and the host tool checks.
"""

from typing import Dict, List, Optional, Set, Tuple

import pytest

from content_deploy.azd import DeploymentTool, HostTools
from content_deploy.config import DeploymentConfig
from content_deploy.exceptions import CommandError


class FakeDeploymentTool(DeploymentTool):
    """Records every call and answers from canned data."""

    def __init__(
        self,
        version: Optional[str] = "1.18.2",
        environments: Optional[List[str]] = None,
        values: Optional[Dict[str, str]] = None,
        fail_on: Optional[Dict[str, int]] = None,
    ):
        self.version = version
        self.environments = list(environments or [])
        self.values = dict(values or {})
        self.fail_on = dict(fail_on or {})
        self.calls: List[Tuple] = []
        self.variables: Dict[str, str] = {}

    def _record(self, name: str, *args: str) -> None:
        self.calls.append((name,) + args)
        if name in self.fail_on:
            raise CommandError(["azd", name] + list(args), self.fail_on[name])

    def called(self, name: str) -> List[Tuple]:
        return [call for call in self.calls if call[0] == name]

    def check_version(self) -> Optional[str]:
        self._record("check_version")
        return self.version

    def login(self, tenant_id: str) -> None:
        self._record("login", tenant_id)

    def list_environments(self) -> List[str]:
        self._record("list_environments")
        return list(self.environments)

    def new_environment(self, name: str) -> None:
        self._record("new_environment", name)
        self.environments.append(name)

    def select_environment(self, name: str) -> None:
        self._record("select_environment", name)

    def set_variable(self, key: str, value: str) -> None:
        self._record("set_variable", key, value)
        self.variables[key] = value

    def get_values(self) -> Dict[str, str]:
        self._record("get_values")
        return dict(self.values)

    def up(self) -> None:
        self._record("up")


class FakeHostTools(HostTools):
    """Reports a fixed set of installed tools."""

    def __init__(self, installed: Optional[Set[str]] = None, docker_running: bool = True):
        self.installed = {"azd", "docker", "git"} if installed is None else set(installed)
        self._docker_running = docker_running

    def is_installed(self, name: str) -> bool:
        return name in self.installed

    def docker_running(self) -> bool:
        return self._docker_running


class ScriptedPrompt:
    """Answers prompts from a list and remembers the questions asked."""

    def __init__(self, answers: Optional[List[str]] = None):
        self.answers = list(answers or [])
        self.messages: List[str] = []

    def __call__(self, message: str) -> str:
        self.messages.append(message)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {message}")
        return self.answers.pop(0)


@pytest.fixture
def config() -> DeploymentConfig:
    return DeploymentConfig()


@pytest.fixture
def tool() -> FakeDeploymentTool:
    return FakeDeploymentTool(values={"SERVICE_API_URI": "https://api.contoso.io/"})


@pytest.fixture
def host() -> FakeHostTools:
    return FakeHostTools()
