"""Lighthouse scenario audits, metric averaging, trace analysis and summary files."""

__version__ = "0.1.0"
__all__ = ["__version__"]