"""
Beelee API package.

Provides the FastAPI application for accounts, recipes and shopping baskets.
"""

from .app import app, create_app

__all__ = ["app", "create_app"]
