"""Bundlr - visit co-occurrence and upsell analytics for salon transactions."""

from bundlr.__version__ import __version__

__all__ = ["__version__"]
