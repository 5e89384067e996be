from fastapi import APIRouter, Depends

from filestore.schemas.file import HealthResponse
from filestore.services.storage_service import get_store
from filestore.storage.file_store import FileStore

router = APIRouter(tags=["health"])

_VERSION = "0.1.0"


@router.get("/health", response_model=HealthResponse)
async def health_check(store: FileStore = Depends(get_store)):
    return HealthResponse(
        status="healthy",
        version=_VERSION,
        store_path=str(store.path),
    )
