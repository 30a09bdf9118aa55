"""Memory and disk space checks."""

from core.errors import SystemCheckError
from utils.env_config import get_config_int
from utils.system import get_available_memory, get_disk_space

from ..models import INSTALL, START, UPDATE, CheckDescriptor


def check_memory(context, task=None):
    required = get_config_int('SITEKEEPER_MIN_MEMORY_MB', 150)
    available = get_available_memory()
    if available < required:
        raise SystemCheckError(
            f"You are recommended to have at least {required} MB of memory available "
            f"for smooth operation. It looks like you have ~{available} MB available.\n"
            f"Free up memory, or run with --no-check-mem to skip this check.",
            task=task,
        )


def check_free_space(context, task=None):
    required = get_config_int('SITEKEEPER_MIN_FREE_SPACE_MB', 1024)
    available = get_disk_space(context.cwd)
    if available < required:
        raise SystemCheckError(
            f"You are recommended to have at least {required} MB of free disk space "
            f"in {context.cwd}. It looks like you have ~{available} MB available.\n"
            f"Free up disk space and try again.",
            task=task,
        )


memory_check = CheckDescriptor(
    title='Checking memory availability',
    task=check_memory,
    category=(INSTALL, START, UPDATE),
    enabled=lambda ctx: ctx.argv.get('check_mem') is not False,
)

free_space_check = CheckDescriptor(
    title='Checking free space',
    task=check_free_space,
    category=(INSTALL, UPDATE),
)
