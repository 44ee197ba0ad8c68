import logging
from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from beadview.config import Settings, get_settings
from beadview.errors import AuthenticationError
from beadview.loaders import IssueLoader, create_loader
from beadview.schemas import MultiRepoData

logger = logging.getLogger(__name__)

bearer_scheme = HTTPBearer(auto_error=False)


async def get_loader(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
    settings: Settings = Depends(get_settings),
) -> IssueLoader:
    """Select the loader for this request from settings and the bearer token."""
    token = credentials.credentials if credentials else None
    try:
        return create_loader(settings, token)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))


async def load_data(loader: IssueLoader, failure_detail: str) -> MultiRepoData:
    """Run the loader, mapping failures onto HTTP errors."""
    try:
        return await loader.load()
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=str(e))
    except Exception:
        logger.exception(failure_detail)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=failure_detail
        )
