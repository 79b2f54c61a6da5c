"""Files controller — API routes for file management."""

from urllib.parse import quote

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from auth import require_admin, require_user
from cleanup import ExpirySweeper
from api.auth.dto.auth import Identity
from api.deps import get_files_service, get_sweeper
from api.files.dto.file import CleanupResponse, FileListResponse, PurgeRequest, PurgeResult
from api.files.services.files_service import FilesService
from api.users.dto.user import SuccessResponse

router = APIRouter(prefix="/api/files", tags=["Files"])
cleanup_router = APIRouter(prefix="/api/cleanup", tags=["Cleanup"])


@router.get("", response_model=FileListResponse)
def list_files(
    identity: Identity = Depends(require_user),
    service: FilesService = Depends(get_files_service),
):
    """Admins see every file, everyone else only their own."""
    return FileListResponse(files=service.list_files(identity))


@router.post("/purge", response_model=PurgeResult)
def purge_files(
    data: PurgeRequest,
    _: Identity = Depends(require_admin),
    service: FilesService = Depends(get_files_service),
):
    return service.purge_all(data.confirm_code)


@router.get("/{storage_key}")
def download_file(
    storage_key: str,
    identity: Identity = Depends(require_user),
    service: FilesService = Depends(get_files_service),
):
    record = service.open_owner_download(storage_key, identity)
    file_size = service.artifacts.size(record.storage_key)

    return StreamingResponse(
        service.artifacts.iter_chunks(record.storage_key),
        media_type=record.mime_type or "application/octet-stream",
        headers={
            "Content-Disposition": f'attachment; filename="{quote(record.original_name)}"',
            "Content-Length": str(file_size),
        },
    )


@router.delete("/{storage_key}", response_model=SuccessResponse)
def delete_file(
    storage_key: str,
    identity: Identity = Depends(require_user),
    service: FilesService = Depends(get_files_service),
):
    service.delete_file(storage_key, identity)
    return SuccessResponse()


# Unauthenticated so a plain cron job can trigger it
@cleanup_router.api_route("", methods=["GET", "POST"], response_model=CleanupResponse)
def run_cleanup(sweeper: ExpirySweeper = Depends(get_sweeper)):
    removed = sweeper.run_cleanup()
    return CleanupResponse(deleted=len(removed), files=removed)
