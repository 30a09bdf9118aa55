"""
Doctor commands - run diagnostic checks against an installation.

Usage:
    from commands import doctor

    result = doctor.run(categories=['start'])
    result = doctor.preflight('start')
    result = doctor.list_checks()
"""

import logging
from pathlib import Path
from typing import Any, Dict, Iterable, Optional, Union

from core.doctor import CATEGORIES, DoctorEngine, NO_CHECKS_MESSAGE, filter_checks
from core.doctor.checks import CHECKS
from core.errors import CliError, ListrError, PreconditionError
from core.system import System
from utils.ui import UI

from .base import CommandResult

logger = logging.getLogger(__name__)


def build_argv(command: str, categories: Iterable[str] = (), **flags) -> Dict[str, Any]:
    """Invocation arguments as the engine expects them."""
    argv = {'args': [command], 'categories': list(categories)}
    argv.update(flags)
    return argv


def _execute(argv: Dict[str, Any], ui: Optional[UI], system: Optional[System],
             cwd: Union[str, Path, None], command_name: str) -> CommandResult:
    ui = ui or UI()
    system = system or System(ui)

    try:
        DoctorEngine(ui, system, checks=CHECKS).run(argv, cwd=cwd, command_name=command_name)
    except PreconditionError:
        raise
    except ListrError as e:
        return CommandResult.fail(
            f"{e.message}: {', '.join(err.task_title or '?' for err in e.errors)}",
            error=e,
            data={'failed': [err.task_title for err in e.errors]},
        )
    except CliError as e:
        return CommandResult.fail(e.message, error=e, data={'failed': [e.task_title]})

    return CommandResult.ok("All checks passed", data={'environment': system.environment})


def run(categories: Iterable[str] = (), quiet: bool = False, skip_instance_check: bool = False,
        local: bool = False, ui: UI = None, system: System = None,
        cwd: Union[str, Path, None] = None, **flags) -> CommandResult:
    """
    Standalone doctor run: every selected check runs, all failures are reported.

    Raises:
        PreconditionError: The working directory is not an installation
    """
    argv = build_argv('doctor', categories, quiet=quiet,
                      skip_instance_check=skip_instance_check, local=local, **flags)
    logger.debug(f"doctor argv: {argv}")
    return _execute(argv, ui, system, cwd, command_name='doctor')


def preflight(category: str, ui: UI = None, system: System = None,
              cwd: Union[str, Path, None] = None, **flags) -> CommandResult:
    """
    Checks embedded in another command's workflow (e.g. before ``start``).

    Runs quietly and stops at the first failing check.
    """
    if category not in CATEGORIES:
        return CommandResult.fail(f"Unknown category '{category}'. Use one of: {', '.join(CATEGORIES)}")

    argv = build_argv(category, [category], quiet=True, **flags)
    return _execute(argv, ui, system, cwd, command_name='preflight')


def list_checks(categories: Iterable[str] = ()) -> CommandResult:
    """List registered checks, optionally filtered by category."""
    checks = filter_checks(CHECKS, categories)
    if not checks:
        return CommandResult.warn(NO_CHECKS_MESSAGE, data={'checks': []})
    return CommandResult.ok(
        f"{len(checks)} check(s)",
        data={'checks': [
            {'title': check.title, 'category': sorted(check.category)} for check in checks
        ]},
    )
