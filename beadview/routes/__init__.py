"""API route modules for FastAPI endpoints."""

from beadview.routes.graph import router as graph_router
from beadview.routes.issues import router as issues_router
from beadview.routes.metrics import router as metrics_router
from beadview.routes.repos import router as repos_router

__all__ = ["graph_router", "issues_router", "metrics_router", "repos_router"]
