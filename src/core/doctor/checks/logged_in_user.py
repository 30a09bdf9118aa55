"""Refuses to operate as the service user."""

import getpass

from core.errors import SystemCheckError
from utils.env_config import get_config

from ..models import START, UPDATE, CheckDescriptor


def check_logged_in_user(context, task=None):
    service_user = get_config('SITEKEEPER_SERVICE_USER')
    if getpass.getuser() == service_user:
        raise SystemCheckError(
            f"You can't run commands as the '{service_user}' user.\n"
            f"Switch to your own user with `su <your-user>` and try again.",
            task=task,
        )


check = CheckDescriptor(
    title='Checking logged in user',
    task=check_logged_in_user,
    category=(START, UPDATE),
    enabled=lambda ctx: not ctx.local,
)
