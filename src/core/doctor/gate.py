"""
Instance gate.

Decides whether a run needs a resolved installation and, when it does,
validates the working directory and the installation's environment
before any check executes. Failures here abort the run.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Union

from core.instance import check_valid_install

from .models import DOCTOR_COMMAND, INSTALL

logger = logging.getLogger(__name__)


def should_resolve_instance(argv: Dict[str, Any]) -> bool:
    """
    False when the run must not look for an installation.

    That is the case with ``skip_instance_check``, or when the only
    requested category is ``install`` (nothing is installed yet).
    Install together with other categories still resolves.
    """
    if argv.get('skip_instance_check'):
        return False
    categories = list(argv.get('categories') or [])
    return categories != [INSTALL]


def resolve_instance(argv: Dict[str, Any], system, cwd: Union[str, Path],
                     command_name: str = DOCTOR_COMMAND):
    """
    Resolve and environment-check the installation in ``cwd``.

    Returns:
        The Instance, or None if the gate skipped resolution

    Raises:
        PreconditionError: ``cwd`` is not a valid installation
    """
    if not should_resolve_instance(argv):
        logger.debug("Instance check skipped")
        return None

    check_valid_install(command_name, cwd)
    instance = system.get_instance(cwd)
    instance.check_environment()
    logger.debug(f"Resolved instance: {instance!r}")
    return instance
