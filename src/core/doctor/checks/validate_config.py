"""Validation of the installation's environment config file."""

import logging

from core.advanced_options import ADVANCED_OPTIONS
from core.config import SiteConfig
from core.errors import ConfigError
from utils.paths import InstallationPaths

from ..models import START, CheckDescriptor

logger = logging.getLogger(__name__)

TASK_TITLE = 'Validating config'


def validate_config(context, task=None):
    """
    Load config.<environment>.json from ``context.cwd`` and validate it.

    Options are validated in ADVANCED_OPTIONS order and validation stops
    at the first invalid value. Options without a value are skipped.

    Raises:
        ConfigError: Missing or malformed file, or an invalid value
    """
    environment = context.system.environment
    path = context.cwd / InstallationPaths.config_file(environment)
    config = SiteConfig.exists(path)

    if config is None:
        raise ConfigError(
            'Config file is not valid JSON',
            environment=environment,
            task=task,
        )

    for name, option in ADVANCED_OPTIONS.items():
        if option.validate is None:
            continue

        key = option.config_path or name
        value = config.get(key)
        if value is None:
            continue

        result = option.validate(value)
        if result is not True:
            logger.debug(f"{path}: {key}={value!r} rejected: {result}")
            raise ConfigError(
                result,
                environment=environment,
                config={key: value},
                task=task,
            )


check = CheckDescriptor(
    title=TASK_TITLE,
    task=validate_config,
    category=(START,),
    enabled=lambda ctx: ctx.instance is not None,
)
