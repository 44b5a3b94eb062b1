"""Version information for launchpd package"""

__version__ = "1.3.0"
__version_info__ = (1, 3, 0)
__author__ = "Launchpd"
__license__ = "MIT"

# Version details
VERSION_MAJOR = 1
VERSION_MINOR = 3
VERSION_PATCH = 0


def get_version():
    """Get the version string"""
    return __version__
