"""Upload controller — handles multipart file uploads."""

from fastapi import APIRouter, Depends, File, Form, Request, UploadFile

from auth import require_user
from api.auth.dto.auth import Identity
from api.deps import get_upload_service
from api.upload.dto.upload import UploadResponse
from api.upload.services.upload_service import UploadService

router = APIRouter(prefix="/api/upload", tags=["Upload"])


@router.post("", response_model=UploadResponse)
async def upload_file(
    request: Request,
    file: UploadFile = File(...),
    password: str = Form(""),
    expires_in: str = Form("", alias="expiresIn"),
    max_downloads: str = Form("", alias="maxDownloads"),
    identity: Identity = Depends(require_user),
    service: UploadService = Depends(get_upload_service),
):
    record = await service.save_upload(
        file=file,
        owner=identity,
        password=password,
        expires_in=expires_in,
        max_downloads=max_downloads,
    )

    base_url = str(request.base_url).rstrip("/")
    return UploadResponse(
        id=record.id,
        filename=record.storage_key,
        original_name=record.original_name,
        size=record.size_bytes,
        expires_at=record.expires_at,
        max_downloads=record.max_downloads,
        has_password=record.password is not None,
        url=f"{base_url}/d/{record.id}",
    )
