"""
File and folder permission checks.

Each kind runs a ``find`` query in the installation directory; any path
it prints is reported together with the command that fixes it.
"""

import shlex
from collections import namedtuple

from core.errors import SystemCheckError
from utils.env_config import get_config
from utils.paths import InstallationPaths
from utils.system import run_checked

from ..classifier import classify_failures, describe_offenders
from ..models import START, UPDATE, CheckDescriptor

PermissionQuery = namedtuple('PermissionQuery', ['command', 'help'])


def permission_queries(user: str = None) -> dict:
    """Queries and remediation commands per kind of permission check."""
    user = shlex.quote(user or get_config('SITEKEEPER_SERVICE_USER'))
    content = f'./{InstallationPaths.CONTENT_DIR}'
    files = (f'{content} ./{InstallationPaths.SYSTEM_DIR} '
             f'{InstallationPaths.CLI_MARKER} *.json')
    return {
        'owner': PermissionQuery(
            command=f'find {content} ! -group {user} ! -user {user}',
            help=f'Run `sudo chown -R {user}:{user} {content}` and try again.',
        ),
        'folder': PermissionQuery(
            command='find ./ -type d ! -perm 775 ! -perm 755',
            help='Run `sudo find ./ -type d -exec chmod 775 {} \\;` and try again.',
        ),
        'files': PermissionQuery(
            command=f'find {files} -type f ! -perm 664 ! -perm 644',
            help=f'Run `sudo find {files} -type f -exec chmod 664 {{}} \\;` and try again.',
        ),
    }


def check_permissions(kind, context, task=None):
    """
    Run one permission query.

    Args:
        kind: 'owner', 'folder' or 'files' (None means 'owner')
        context: RunContext; the query runs in ``context.cwd``
        task: Handle of the calling check

    Raises:
        SystemCheckError: Offending paths were found, or the query was
            denied access to part of the installation
        ProcessError: The query failed for any other reason
    """
    queries = permission_queries()
    query = queries[kind or 'owner']
    denied_message = ("Sitekeeper can't access some files or directories "
                      "to check for correct permissions.\n" + queries['folder'].help)

    with classify_failures(task, denied_message=denied_message):
        result = run_checked(query.command, cwd=context.cwd)
        offending = [line for line in result.stdout.strip().split('\n') if line]
        if not offending:
            return

        raise SystemCheckError(
            describe_offenders(offending, 'with incorrect permissions', query.help),
            task=task,
        )


def _permissions_enabled(context):
    if context.local:
        return False
    return not (context.instance is not None and context.instance.process_name == 'local')


def installation_permissions(context, task=None):
    """Composite check: content ownership, folder modes, file modes."""
    return [
        CheckDescriptor(
            title='Checking content folder ownership',
            task=lambda ctx, t=None: check_permissions('owner', ctx, t),
        ),
        CheckDescriptor(
            title='Checking folder permissions',
            task=lambda ctx, t=None: check_permissions('folder', ctx, t),
        ),
        CheckDescriptor(
            title='Checking file permissions',
            task=lambda ctx, t=None: check_permissions('files', ctx, t),
        ),
    ]


check = CheckDescriptor(
    title='Checking installation permissions',
    task=installation_permissions,
    category=(START, UPDATE),
    enabled=_permissions_enabled,
)
