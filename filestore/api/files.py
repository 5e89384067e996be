import logging

from fastapi import APIRouter, Depends, Request, Response
from fastapi.responses import StreamingResponse

from filestore.core.exceptions import (
    FileNotFoundHTTPError,
    InvalidIdentifierError,
    InvalidIdentifierHTTPError,
    StoredFileNotFoundError,
)
from filestore.core.formatting import guess_mime
from filestore.schemas.file import ErrorResponse, FileInfo, StoredFile
from filestore.services.storage_service import get_store
from filestore.storage.file_store import FileStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["files"])


@router.put(
    "/files/{identifier:path}",
    response_model=StoredFile,
    status_code=201,
    responses={400: {"model": ErrorResponse}},
)
async def upload_file(
    identifier: str,
    request: Request,
    store: FileStore = Depends(get_store),
):
    try:
        return await store.save(identifier, request.stream())
    except InvalidIdentifierError:
        raise InvalidIdentifierHTTPError(identifier)
    except Exception:
        logger.exception("Upload failed for %s", identifier)
        raise


@router.get(
    "/files/{identifier:path}",
    responses={400: {"model": ErrorResponse}, 404: {"model": ErrorResponse}},
)
async def download_file(
    identifier: str,
    store: FileStore = Depends(get_store),
):
    try:
        chunks = await store.get(identifier)
    except InvalidIdentifierError:
        raise InvalidIdentifierHTTPError(identifier)
    except StoredFileNotFoundError:
        raise FileNotFoundHTTPError(identifier)

    media_type = guess_mime(store.resolve(identifier).content_digest) or "application/octet-stream"
    return StreamingResponse(chunks, media_type=media_type)


@router.get(
    "/info/{identifier:path}",
    response_model=FileInfo,
    responses={400: {"model": ErrorResponse}},
)
async def file_info(
    identifier: str,
    store: FileStore = Depends(get_store),
):
    try:
        return await store.get_info(identifier)
    except InvalidIdentifierError:
        raise InvalidIdentifierHTTPError(identifier)


@router.delete(
    "/files/{identifier:path}",
    status_code=204,
    responses={400: {"model": ErrorResponse}},
)
async def delete_file(
    identifier: str,
    store: FileStore = Depends(get_store),
):
    try:
        await store.remove(identifier)
    except InvalidIdentifierError:
        raise InvalidIdentifierHTTPError(identifier)
    return Response(status_code=204)
