import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from beadview.aggregation import IssueFilters
from beadview.loaders import IssueLoader
from beadview.reports import issues_report
from beadview.routes.deps import get_loader, load_data
from beadview.schemas import IssuesResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/issues", tags=["issues"])


@router.get("", response_model=IssuesResponse, response_model_exclude_none=True)
async def list_issues(
    status_filter: Optional[str] = Query(None, alias="status"),
    priority: Optional[str] = None,
    repo: Optional[str] = None,
    ready: Optional[str] = None,
    loader: IssueLoader = Depends(get_loader),
):
    """List issues across all repositories, optionally filtered."""
    data = await load_data(loader, "Failed to load issues")

    filters = IssueFilters(status=status_filter, priority=priority, repo=repo, ready_only=ready == "true")
    try:
        return issues_report(data, filters)
    except Exception:
        logger.exception("Error filtering issues")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to load issues"
        )
