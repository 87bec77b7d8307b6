"""Common middleware for Ridelist."""

from .observability import StructlogContextMiddleware

__all__ = ["StructlogContextMiddleware"]
