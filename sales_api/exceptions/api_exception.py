"""API exception module.

Every exception raised by the service layer carries a stable internal
``code`` next to the HTTP status so clients can tell failures apart
without parsing messages.
"""
from fastapi import HTTPException, status

PROCESS_NOT_FINISHED = 55
PROCESS_NOT_FINISHED_MESSAGE = "Process not finished"

UNAUTHORIZED = 401
UNAUTHORIZED_MESSAGE = "Unauthorized access"

USER_ALREADY_EXISTS = 40
USER_ALREADY_EXISTS_MESSAGE = "User already exists"

RESOURCE_NOT_FOUND_MESSAGE = "Resource not found"

RESOURCE_ALREADY_EXISTS = 43
RESOURCE_ALREADY_EXISTS_MESSAGE = "Resource already exists"

VALIDATION_FAILED = 422
VALIDATION_FAILED_MESSAGE = "Invalid request data"


class APIException(HTTPException):
    """Base API exception class."""

    def __init__(
        self,
        status_code: int = status.HTTP_400_BAD_REQUEST,
        code: int = PROCESS_NOT_FINISHED,
        detail: str = PROCESS_NOT_FINISHED_MESSAGE,
    ):
        super().__init__(status_code=status_code, detail=detail)
        self.code = code


class ValidationFailedError(APIException):
    """Malformed or referentially invalid input."""

    def __init__(self, detail: str = VALIDATION_FAILED_MESSAGE):
        super().__init__(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            code=VALIDATION_FAILED,
            detail=detail,
        )


class AlreadyExistsError(APIException):
    """Unique key collision on create or update."""

    def __init__(self, detail: str = RESOURCE_ALREADY_EXISTS_MESSAGE):
        super().__init__(code=RESOURCE_ALREADY_EXISTS, detail=detail)


class UserAlreadyExistsError(AlreadyExistsError):
    """E-mail already registered."""

    def __init__(self):
        super().__init__(detail=USER_ALREADY_EXISTS_MESSAGE)
        self.code = USER_ALREADY_EXISTS


class UnauthorizedError(APIException):
    """Credential mismatch or missing/invalid bearer token."""

    def __init__(self, detail: str = UNAUTHORIZED_MESSAGE):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code=UNAUTHORIZED,
            detail=detail,
        )
        self.headers = {"WWW-Authenticate": "Bearer"}
