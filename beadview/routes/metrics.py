import logging

from fastapi import APIRouter, Depends, HTTPException, status

from beadview.loaders import IssueLoader
from beadview.reports import metrics_report
from beadview.routes.deps import get_loader, load_data
from beadview.schemas import MetricsResponse

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/metrics", tags=["metrics"])


@router.get("", response_model=MetricsResponse)
async def get_metrics(loader: IssueLoader = Depends(get_loader)):
    """Overall and per-repository analytics."""
    data = await load_data(loader, "Failed to calculate metrics")
    try:
        return metrics_report(data)
    except Exception:
        logger.exception("Error calculating metrics")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to calculate metrics",
        )
