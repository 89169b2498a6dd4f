# services/portal/__init__.py
"""portal package: FastAPI app factory and service container."""

__all__ = ["app", "container"]
