"""
Sitekeeper Path Constants

Centralized path definitions to reduce hardcoding across the codebase.

IMPORTANT: Always use get_real_user_home() instead of Path.home() when
the path should be in the user's home directory. This handles the case
where Sitekeeper is run with sudo but needs to access the real user's
config files, not root's.
"""

from pathlib import Path
import os


# ============================================================================
# Core utility functions - use these instead of Path.home()
# ============================================================================

def get_real_user_home() -> Path:
    """
    Get the real user's home directory, even when running as root via sudo.

    Returns:
        Path to the real user's home directory
    """
    # Check SUDO_USER first
    sudo_user = os.environ.get('SUDO_USER')
    if sudo_user and sudo_user != 'root':
        return Path(f'/home/{sudo_user}')

    # Fallback to current user
    return Path.home()


# ============================================================================
# Path classes
# ============================================================================

class InstallationPaths:
    """Files that make up a managed installation directory"""

    CLI_MARKER = '.sitekeeper-cli'
    LEGACY_CONFIG = 'config.js'
    CONTENT_DIR = 'content'
    SYSTEM_DIR = 'system'

    @staticmethod
    def config_file(environment: str) -> str:
        """Name of the JSON config file for an environment"""
        return f'config.{environment}.json'

    @classmethod
    def marker(cls, directory: Path) -> Path:
        """Path to the installation marker inside a directory"""
        return Path(directory) / cls.CLI_MARKER


class SiteKeeperPaths:
    """Paths related to the Sitekeeper CLI itself"""

    @classmethod
    def get_config_dir(cls) -> Path:
        """Get Sitekeeper config directory"""
        return get_real_user_home() / '.config' / 'sitekeeper'

    @classmethod
    def get_log_dir(cls) -> Path:
        """Get Sitekeeper log directory"""
        return cls.get_config_dir() / 'logs'

    @classmethod
    def get_log_file(cls) -> Path:
        """Get the default debug log file"""
        return cls.get_log_dir() / 'sitekeeper.log'
