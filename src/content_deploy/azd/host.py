"""Checks for tools installed on the local machine."""

import logging
import shutil
import subprocess

logger = logging.getLogger(__name__)


class HostTools:
    """Checks which prerequisite tools are available."""

    def is_installed(self, name: str) -> bool:
        """Check whether an executable is on PATH."""
        path = shutil.which(name)
        logger.debug(f"which {name}: {path}")
        return path is not None

    def docker_running(self) -> bool:
        """Check whether the Docker daemon answers `docker info`."""
        try:
            result = subprocess.run(
                ["docker", "info"],
                capture_output=True,
                text=True,
                check=False,
            )
        except FileNotFoundError:
            return False
        return result.returncode == 0
