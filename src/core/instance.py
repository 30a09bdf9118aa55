"""
Handle to one managed installation, plus the install-validity check.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

from utils.paths import InstallationPaths

from .config import SiteConfig
from .errors import PreconditionError

logger = logging.getLogger(__name__)


def check_valid_install(name: str, cwd: Union[str, Path]) -> None:
    """
    Make sure ``cwd`` is an installation Sitekeeper manages.

    Args:
        name: Command being run, used in the help text
        cwd: Directory to check

    Raises:
        PreconditionError: The directory is not a recognisable installation.
    """
    cwd = Path(cwd)

    if (cwd / InstallationPaths.LEGACY_CONFIG).exists():
        raise PreconditionError(
            f"Sitekeeper only manages installations created by Sitekeeper.\n"
            f"The folder {cwd} contains a legacy {InstallationPaths.LEGACY_CONFIG} "
            f"and cannot be used with `sitekeeper {name}`.",
            cwd=str(cwd),
        )

    if not InstallationPaths.marker(cwd).exists():
        raise PreconditionError(
            f"Working directory is not a recognisable installation.\n"
            f"Run `sitekeeper {name}` again within a folder where the site "
            f"was installed with Sitekeeper.",
            cwd=str(cwd),
        )


class Instance:
    """
    One installation directory.

    Attributes:
        system: The owning System
        dir: Installation directory
        ui: UI handle used for notices (may be None)
    """

    def __init__(self, system, directory: Union[str, Path], ui=None):
        self.system = system
        self.dir = Path(directory)
        self.ui = ui
        self._cli_config = None

    @property
    def cli_config(self) -> Dict[str, Any]:
        """Contents of the .sitekeeper-cli marker (empty if unreadable)."""
        if self._cli_config is None:
            marker = InstallationPaths.marker(self.dir)
            try:
                with open(marker, 'r') as f:
                    data = json.load(f)
            except (OSError, ValueError) as e:
                logger.debug(f"Could not read {marker}: {e}")
                data = {}
            self._cli_config = data if isinstance(data, dict) else {}
        return self._cli_config

    @property
    def process_name(self) -> str:
        """Process manager running this installation ('systemd' or 'local')."""
        return self.cli_config.get('process', 'systemd')

    @property
    def environment(self) -> str:
        return self.system.environment

    def config_path(self, environment: str = None) -> Path:
        return self.dir / InstallationPaths.config_file(environment or self.environment)

    def check_environment(self) -> None:
        """
        Fall back to development when only a development config exists.

        Running in production against an installation that has
        config.development.json but no config.production.json switches
        the system to development and tells the user about it.
        """
        if not self.system.production:
            return

        has_production = SiteConfig.exists(self.config_path('production')) is not None
        has_development = SiteConfig.exists(self.config_path('development')) is not None

        if not has_production and has_development:
            message = ('Found a development config but no production config; '
                       'running in development mode instead.')
            logger.info(f"{self.dir}: {message}")
            if self.ui is not None:
                self.ui.log(message, style='warning')
            self.system.set_environment(development=True)

    def __repr__(self) -> str:
        return f"Instance(dir={str(self.dir)!r}, environment={self.environment!r})"
