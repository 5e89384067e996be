from pydantic import BaseModel


class StoredFile(BaseModel):
    id: str
    path: str
    short_path: str


class FileInfo(BaseModel):
    id: str
    mime: str | None = None
    size: int | None = None
    human_size: str | None = None
    local_path: str
    client_path: str
    short_client_path: str


class ErrorResponse(BaseModel):
    detail: str


class HealthResponse(BaseModel):
    status: str
    version: str
    store_path: str
