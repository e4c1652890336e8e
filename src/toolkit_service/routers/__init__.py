"""
Exports the main API routers for the Toolkit Service.

This allows the main application to import and include them with a clean path.
- tool_router: Public tool directory.
- admin_router: Tool administration (admin role required).
- docs_router: Markdown documentation index.
- health_router: Handles health checks.
"""

from .admin_routes import router as admin_router
from .docs_routes import router as docs_router
from .health import router as health_router
from .tool_routes import router as tool_router

__all__ = ["tool_router", "admin_router", "docs_router", "health_router"]
