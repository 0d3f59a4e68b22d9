"""Command line interface entry points for tradefeed."""

from .main import app, create_app, fetch_entry

__all__ = ["app", "create_app", "fetch_entry"]
