"""
The System registry: process-wide environment and installation lookup.
"""

import logging
from pathlib import Path
from typing import Union

from utils.env_config import get_config

from .instance import Instance

logger = logging.getLogger(__name__)

PRODUCTION = 'production'
DEVELOPMENT = 'development'


class System:
    """
    Resolves which installation a command is operating on.

    Attributes:
        ui: UI handle passed on to instances
        environment: 'production' or 'development'
    """

    def __init__(self, ui=None, environment: str = None):
        self.ui = ui
        if environment is None:
            environment = get_config('SITEKEEPER_ENVIRONMENT', PRODUCTION).lower()
        self.environment = environment

    @property
    def production(self) -> bool:
        return self.environment == PRODUCTION

    @property
    def development(self) -> bool:
        return self.environment == DEVELOPMENT

    def set_environment(self, development: bool) -> None:
        new_environment = DEVELOPMENT if development else PRODUCTION
        if new_environment != self.environment:
            logger.debug(f"Environment changed: {self.environment} -> {new_environment}")
        self.environment = new_environment

    def get_instance(self, directory: Union[str, Path, None] = None) -> Instance:
        """Get the installation in ``directory`` (default: current directory)."""
        directory = Path(directory) if directory is not None else Path.cwd()
        return Instance(self, directory, ui=self.ui)
