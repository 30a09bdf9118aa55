"""
Doctor execution engine.

Ties together category filtering, the instance gate and the run context,
then hands the selected checks to the UI's task runner.

Usage:
    engine = DoctorEngine(ui, system)
    engine.run({'args': ['doctor'], 'categories': ['start']})
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Sequence, Union

from .context import build_context
from .filters import filter_checks
from .gate import resolve_instance
from .models import DOCTOR_COMMAND, CheckDescriptor

logger = logging.getLogger(__name__)

NO_CHECKS_MESSAGE = 'No checks found to run.'


class DoctorEngine:
    """
    Runs registered checks against an installation.

    Args:
        ui: UI handle providing ``log`` and ``listr``
        system: System registry providing ``get_instance``
        checks: Registered checks; defaults to the built-in registry
    """

    def __init__(self, ui, system, checks: Optional[Sequence[CheckDescriptor]] = None):
        self.ui = ui
        self.system = system
        if checks is None:
            from .checks import CHECKS
            checks = CHECKS
        self.checks = list(checks)

    def run(self, argv: Dict[str, Any], cwd: Union[str, Path, None] = None,
            command_name: str = DOCTOR_COMMAND) -> None:
        """
        Run the checks selected by ``argv``.

        ``command_name`` is the command named in install-validity errors.

        Standalone doctor runs keep going after a failed check so every
        problem gets reported; embedded runs stop at the first failure.

        Raises:
            PreconditionError: The working directory is not an installation
            CliError: A check failed (ListrError for standalone runs)
        """
        cwd = Path(cwd) if cwd is not None else Path.cwd()

        checks = filter_checks(self.checks, argv.get('categories'))
        if not checks:
            logger.debug(f"No checks match categories {argv.get('categories')}")
            if not argv.get('quiet'):
                self.ui.log(NO_CHECKS_MESSAGE)
            return

        instance = resolve_instance(argv, self.system, cwd, command_name)
        context = build_context(argv, self.system, self.ui, instance=instance, cwd=cwd)

        logger.info(f"Running {len(checks)} check(s): {', '.join(c.title for c in checks)}")
        self.ui.listr(checks, context, exit_on_error=not context.is_doctor_command)
