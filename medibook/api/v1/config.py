from fastapi import APIRouter, Depends, HTTPException, status
import logging

from ...core.config import Settings, get_settings
from ...schemas.config import ClientConfigResponse

logger = logging.getLogger(__name__)

router = APIRouter(tags=["Configuration"])

@router.get("/config", response_model=ClientConfigResponse)
def get_client_config(settings: Settings = Depends(get_settings)):
    """Public configuration needed by the web client."""
    if not settings.GOOGLE_MAPS_API_KEY:
        logger.error("Google Maps API key is not configured")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Maps configuration is not available"
        )

    return ClientConfigResponse(google_maps_api_key=settings.GOOGLE_MAPS_API_KEY)
