"""System utilities for OS detection and command execution"""

import platform
import shutil
import subprocess
import logging
from pathlib import Path
from typing import Optional, Union

import distro
import psutil

from utils.env_config import get_config_int

logger = logging.getLogger(__name__)

# Distributions the managed server is supported on, with tested versions
SUPPORTED_DISTROS = {
    'ubuntu': ('20.04', '22.04', '24.04'),
    'debian': ('11', '12'),
}


def get_system_info():
    """Get system information used in error reports"""
    info = {}

    info['os'] = distro.name() or platform.system()
    info['os_id'] = distro.id()
    info['os_version'] = distro.version() or 'Unknown'
    info['arch'] = platform.machine()
    info['python'] = platform.python_version()
    info['kernel'] = platform.release()

    return info


def is_supported_distro():
    """Check the running OS against SUPPORTED_DISTROS.

    Returns:
        (supported, description) tuple
    """
    os_id = distro.id()
    version = distro.version()
    description = f"{distro.name() or os_id} {version}".strip()

    versions = SUPPORTED_DISTROS.get(os_id)
    if versions is None:
        return False, description
    return version in versions, description


def has_systemd():
    """Check if systemd's systemctl is available"""
    return shutil.which('systemctl') is not None


def get_available_memory():
    """Get available system memory in MB"""
    mem = psutil.virtual_memory()
    return mem.available // (1024 * 1024)


def get_disk_space(path: Union[str, Path] = '/'):
    """Get available disk space in MB"""
    disk = psutil.disk_usage(str(path))
    return disk.free // (1024 * 1024)


def run_checked(command: str, cwd: Union[str, Path, None] = None,
                timeout: Optional[float] = None) -> subprocess.CompletedProcess:
    """Run a shell command, raising on failure.

    Unlike a best-effort call, failures are not swallowed here: a non-zero
    exit raises subprocess.CalledProcessError and an overrun raises
    subprocess.TimeoutExpired, both carrying the captured stdout/stderr so
    callers can classify them.

    Args:
        command: Shell command line (globs are expanded by the shell)
        cwd: Working directory for the command
        timeout: Seconds before the command is killed. Defaults to
            SITEKEEPER_CHECK_TIMEOUT.

    Returns:
        The completed process with text stdout/stderr
    """
    if timeout is None:
        timeout = get_config_int('SITEKEEPER_CHECK_TIMEOUT', 60)

    logger.debug(f"Running: {command} (cwd={cwd}, timeout={timeout}s)")
    result = subprocess.run(
        command,
        shell=True,
        cwd=str(cwd) if cwd is not None else None,
        capture_output=True,
        text=True,
        timeout=timeout,
        check=True,
    )
    logger.debug(f"Command finished: {command} (returncode={result.returncode})")
    return result
