import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from beadview.loaders import IssueLoader
from beadview.reports import graph_report
from beadview.routes.deps import get_loader, load_data
from beadview.schemas import DependencyGraph

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/graph", tags=["graph"])


@router.get("", response_model=DependencyGraph, response_model_exclude_none=True)
async def get_graph(repo: Optional[str] = None, loader: IssueLoader = Depends(get_loader)):
    """Dependency graph for all issues, or for a single repository."""
    data = await load_data(loader, "Failed to build dependency graph")
    try:
        return graph_report(data, repo)
    except Exception:
        logger.exception("Error building graph")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to build dependency graph",
        )
