from typing import Optional

from fastapi import status
from libs.result import Error

# Status code for each client-facing error code
ERROR_STATUS = {
    "INVALID_PAYLOAD": status.HTTP_400_BAD_REQUEST,
    "INVALID_FILTER": status.HTTP_400_BAD_REQUEST,
    "CANNOT_REFRESH": status.HTTP_400_BAD_REQUEST,
    "NOT_ACTIVE": status.HTTP_400_BAD_REQUEST,
    "UNAUTHORIZED": status.HTTP_401_UNAUTHORIZED,
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: Optional[int] = None):
        self.base_error = base_error
        self.status_code = status_code or ERROR_STATUS.get(
            base_error.code, status.HTTP_400_BAD_REQUEST
        )
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(error: Error):
    """Raise the HTTP-facing exception for a use case Error"""
    if error.code in ERROR_STATUS:
        raise ClientError(error)
    raise ServerError(error)
