"""API route handlers."""
from . import portfolio

__all__ = ["portfolio"]
