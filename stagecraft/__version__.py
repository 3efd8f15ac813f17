"""
stagecraft version information.

Version is read from package metadata; pyproject.toml is the single source of truth.
"""

try:
    from importlib.metadata import version

    __version__ = version("stagecraft")
except Exception:
    # Not installed (running from a source checkout)
    __version__ = "0.1.0"

try:
    __version_info__ = tuple(int(x) for x in __version__.split("."))
except ValueError:
    __version_info__ = (0, 1, 0)

# Version history:
# 0.1.0 - Pipeline compiler, guards, halt signal, builder surface, logger stage
