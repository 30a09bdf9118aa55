"""Version information for Sitekeeper"""

__version__ = "1.0.0"
__release_date__ = "2026-10-19"


def get_full_version():
    """Get full version string with release date"""
    return f"{__version__} ({__release_date__})"
