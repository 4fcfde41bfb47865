"""
Scans router package.

Exports the router for scan lifecycle endpoints.
"""

from .scans_router import router

__all__ = ["router"]
