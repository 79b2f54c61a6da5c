"""Stats controller — storage and instance figures."""

from fastapi import APIRouter, Depends

from auth import require_user
from api.auth.dto.auth import Identity
from api.deps import get_stats_service
from api.stats.dto.stats import StatsResponse
from api.stats.services.stats_service import StatsService

router = APIRouter(prefix="/api/stats", tags=["Stats"])


@router.get("", response_model=StatsResponse)
def get_stats(
    _: Identity = Depends(require_user),
    service: StatsService = Depends(get_stats_service),
):
    return service.get_stats()
