"""Version information for curvedna"""

__version__ = "1.0.0"
__version_info__ = (1, 0, 0)
__license__ = "MIT"


def get_version():
    """Return the current version string"""
    return __version__


def get_version_tuple():
    """Return the current version as a tuple of integers"""
    return __version_info__
