from fastapi import APIRouter, Depends

from beadview.loaders import IssueLoader
from beadview.reports import repositories_report
from beadview.routes.deps import get_loader, load_data
from beadview.schemas import RepositoriesResponse

router = APIRouter(prefix="/api/repos", tags=["repositories"])


@router.get("", response_model=RepositoriesResponse)
async def list_repositories(loader: IssueLoader = Depends(get_loader)):
    """List every repository with per-status issue counts."""
    data = await load_data(loader, "Failed to load repositories")
    return repositories_report(data)
