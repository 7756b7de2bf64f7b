from fastapi import status

from engagement.libs.result import Error, Result

ERROR_STATUS = {
    "NOT_FOUND": status.HTTP_404_NOT_FOUND,
    "FORBIDDEN": status.HTTP_403_FORBIDDEN,
    "INVITE_EXPIRED": status.HTTP_410_GONE,
    "INVITE_EXHAUSTED": status.HTTP_410_GONE,
    "CONFLICT": status.HTTP_409_CONFLICT,
    "BUDGET_EXCEEDED": status.HTTP_409_CONFLICT,
    "VALIDATION_ERROR": status.HTTP_422_UNPROCESSABLE_CONTENT,
    "PROVIDER_ERROR": status.HTTP_502_BAD_GATEWAY,
}


class ClientError(Exception):
    def __init__(self, base_error: Error, status_code: int = status.HTTP_400_BAD_REQUEST):
        self.base_error = base_error
        self.status_code = status_code
        super().__init__(base_error.message)


class ServerError(Exception):
    def __init__(self, base_error: Error):
        self.base_error = base_error
        super().__init__(base_error.message)


def raise_for_error(result: Result) -> None:
    """Translate a failed use-case Result into the matching HTTP error"""
    if result.is_ok():
        return
    error = result.error
    status_code = ERROR_STATUS.get(error.code)
    if status_code is None:
        raise ServerError(error)
    raise ClientError(error, status_code=status_code)


def envelope(result: Result) -> dict:
    """Success body for a Result, raising for failures"""
    raise_for_error(result)
    return result.to_dict()
