"""Setup controller — first-run configuration."""

from fastapi import APIRouter, Depends

from api.deps import get_setup_service
from api.setup.dto.setup import SetupRequest, SetupResponse, SetupStatus
from api.setup.services.setup_service import SetupService

router = APIRouter(prefix="/api/setup", tags=["Setup"])


@router.get("", response_model=SetupStatus)
def get_setup(service: SetupService = Depends(get_setup_service)):
    return service.status()


@router.post("", response_model=SetupResponse)
def run_setup(data: SetupRequest, service: SetupService = Depends(get_setup_service)):
    service.run_setup(data)
    return SetupResponse()
