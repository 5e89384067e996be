from fastapi import HTTPException, status


class FileStoreError(Exception):
    """Base class for errors raised by the file store."""


class StoredFileNotFoundError(FileStoreError, FileNotFoundError):
    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"File {self.path} does not exist")


class InvalidIdentifierError(FileStoreError, ValueError):
    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Invalid file identifier {identifier!r}: must be a non-empty string")


class FileNotFoundHTTPError(HTTPException):
    def __init__(self, identifier: str):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=f"File {identifier} not found")


class InvalidIdentifierHTTPError(HTTPException):
    def __init__(self, identifier: str):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=f"Invalid file identifier {identifier!r}",
        )
