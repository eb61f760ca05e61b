"""Trackbridge - cross-catalog track resolution."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("trackbridge")
except PackageNotFoundError:
    __version__ = "0.0.0"
