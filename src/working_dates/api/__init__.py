"""
API Layer.

Flask HTTP endpoints and error handling.
"""

# Imported lazily: the blueprint pulls in the services layer, which
# itself depends on infrastructure modules imported by the app factory.

__all__ = ["api_bp"]


def __getattr__(name: str):
    """Lazy import to avoid circular dependencies."""
    if name == "api_bp":
        from working_dates.api.routes import api_bp
        return api_bp
    raise AttributeError(f"module {__name__!r} has no attribute {name!r}")
