"""Operating system compatibility check."""

from core.errors import SystemCheckError
from utils.system import SUPPORTED_DISTROS, has_systemd, is_supported_distro

from ..models import INSTALL, CheckDescriptor


def _skip(context):
    if context.local:
        return 'Local installs do not need a supported stack'
    if context.argv.get('stack') is False:
        return 'Disabled with --no-stack'
    return False


def check_system_stack(context, task=None):
    supported, description = is_supported_distro()
    problems = []

    if not supported:
        versions = '; '.join(f"{name.title()} {', '.join(v)}" for name, v in SUPPORTED_DISTROS.items())
        problems.append(f"- {description} is not a supported operating system (supported: {versions})")
    if not has_systemd():
        problems.append("- systemd was not found (systemctl is not on the PATH)")

    if problems:
        raise SystemCheckError(
            "Your system does not meet the recommended stack:\n"
            + '\n'.join(problems)
            + "\nInstall on a supported distribution, or run with --no-stack to skip this check.",
            task=task,
            os=description,
        )


check = CheckDescriptor(
    title='Checking system compatibility',
    task=check_system_stack,
    category=(INSTALL,),
    skip=_skip,
)
