"""Local HTTP API over the current contest workspace."""

from .app import create_app

__all__ = ["create_app"]
