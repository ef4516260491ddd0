"""Top-level package for nomadutil.

Download, verify and install HashiCorp Nomad release binaries.
"""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("nomadutil")
except PackageNotFoundError:
    # Fallback for development environments where package isn't installed
    __version__ = "dev"
