"""urltrace - trace the redirect chain behind a URL."""

from ._version import __version__


__all__ = ["__version__"]
