"""Weekly worship aid (8-page Mass booklet) generation."""

from worship_aid.version import __version__

__all__ = ["__version__"]
