"""ASGI entry point: `uvicorn sst_console.main:app`."""

from .api.main import app

__all__ = ["app"]
