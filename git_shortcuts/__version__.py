"""Version information for git-shortcuts."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("git-shortcuts")
except PackageNotFoundError:
    # Fallback when running from a source checkout
    __version__ = "0.0.0+unknown"
