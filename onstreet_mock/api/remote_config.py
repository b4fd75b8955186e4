from fastapi import APIRouter, Request

from onstreet_mock.core.config import settings
from onstreet_mock.schemas.config import RemoteConfigOut

router = APIRouter(prefix="/v1", tags=["config"])


@router.get("/config", response_model=RemoteConfigOut)
async def remote_config(request: Request):
    """Base URL the app should switch to after its first request."""
    api_base_url = (
        settings.PUBLIC_URL
        or settings.PUBLIC_URL_DEFAULT
        or f"https://{request.headers.get('host', 'localhost')}"
    )
    return RemoteConfigOut(version=settings.CONFIG_VERSION, api_base_url=api_base_url)
