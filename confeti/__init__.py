"""confeti - conference talk report statistics service."""

from confeti.__version__ import __version__

__all__ = ["__version__"]
