"""services package initializer: explicit exports only."""

__all__ = ["content", "community", "users", "portal"]
