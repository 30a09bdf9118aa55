"""Permissions of the directory an install or update runs in."""

import os
import stat
from pathlib import Path

from core.errors import SystemCheckError

from ..models import INSTALL, UPDATE, CheckDescriptor


def _unreadable_by_others(directory: Path):
    """Yield ``directory`` and its parents other users cannot traverse."""
    for path in [directory, *directory.parents]:
        mode = path.stat().st_mode
        if not (mode & stat.S_IROTH and mode & stat.S_IXOTH):
            yield path


def check_install_folder(context, task=None):
    cwd = context.cwd

    if not os.access(cwd, os.W_OK):
        raise SystemCheckError(
            f"The directory {cwd} is not writable by your user.\n"
            f"Grant your user write access to it (`sudo chown $USER:$USER {cwd}`) and try again.",
            task=task,
        )

    if context.local:
        return

    blocked = list(_unreadable_by_others(cwd.resolve()))
    if blocked:
        lines = '\n'.join(f"- {path}" for path in blocked)
        raise SystemCheckError(
            "The service user needs to read the installation, but these directories "
            f"are not readable by other users:\n{lines}\n"
            f"Run `sudo chmod o+rx <directory>` for each of them and try again.",
            task=task,
        )


check = CheckDescriptor(
    title='Checking current folder permissions',
    task=check_install_folder,
    category=(INSTALL, UPDATE),
)
