"""Health check endpoints."""

from datetime import datetime, timezone

from fastapi import APIRouter

from ensembl_dictionary import __version__
from ensembl_dictionary.transport.http.deps import Dictionary
from ensembl_dictionary.transport.http.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthResponse)
async def health_check(dictionary: Dictionary) -> HealthResponse:
    """Liveness check. Does not call EBI Search."""
    return HealthResponse(
        version=__version__,
        timestamp=datetime.now(timezone.utc),
        dict_id=dictionary.dict_id,
        upstream=dictionary.urls.matches_url,
        optimap=dictionary.config.optimap,
    )
