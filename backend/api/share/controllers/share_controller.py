"""Share controller — public share-link metadata and downloads."""

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, StreamingResponse

from api.deps import get_share_service
from api.share.dto.share import PasswordCheckRequest, PasswordCheckResponse, SharedFileInfo
from api.share.services.share_service import ShareService

router = APIRouter(prefix="/api/share", tags=["Share"])


@router.get("/{file_id}", response_model=SharedFileInfo)
def get_share(
    file_id: str,
    download: bool = False,
    password: str | None = None,
    service: ShareService = Depends(get_share_service),
):
    """Share metadata, or the file itself with ``?download=true``."""
    if not download:
        return service.get_info(file_id)

    record = service.open_download(file_id, password)
    file_size = service.artifacts.size(record.storage_key)

    return StreamingResponse(
        service.artifacts.iter_chunks(record.storage_key),
        media_type=record.mime_type or "application/octet-stream",
        headers={
            "Content-Disposition": f'attachment; filename="{quote(record.original_name)}"',
            "Content-Length": str(file_size),
        },
    )


@router.post("/{file_id}", response_model=PasswordCheckResponse)
def check_password(
    file_id: str,
    data: PasswordCheckRequest,
    service: ShareService = Depends(get_share_service),
):
    if service.verify_password(file_id, data.password):
        return PasswordCheckResponse(valid=True)
    return JSONResponse({"valid": False}, status_code=401)
