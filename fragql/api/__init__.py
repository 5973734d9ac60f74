"""
HTTP API for fragql.
"""

from .app import create_app

__all__ = ["create_app"]
