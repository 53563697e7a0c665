from enum import Enum
from typing import Optional, Tuple


class ErrorKind(str, Enum):
    NOT_FOUND = "NotFound"
    VALIDATION_ERROR = "ValidationError"
    RESOURCE_ALREADY_EXISTS = "ResourceAlreadyExists"
    REPOSITORY_ERROR = "RepositoryError"
    NOT_AUTHENTICATED = "NotAuthenticated"
    TOKEN_GENERATOR_ERROR = "TokenGeneratorError"
    NOT_AUTHORIZED = "NotAuthorized"
    UNKNOWN_ERROR = "UnknownError"


_HTTP_MAPPING = {
    ErrorKind.NOT_FOUND: (404, "record not found"),
    ErrorKind.VALIDATION_ERROR: (400, "validation error"),
    ErrorKind.RESOURCE_ALREADY_EXISTS: (409, "resource already exists"),
    ErrorKind.REPOSITORY_ERROR: (500, "error in repository operation"),
    ErrorKind.NOT_AUTHENTICATED: (401, "not authenticated"),
    ErrorKind.TOKEN_GENERATOR_ERROR: (500, "error in token generation"),
    ErrorKind.NOT_AUTHORIZED: (403, "not authorized"),
    ErrorKind.UNKNOWN_ERROR: (500, "something went wrong"),
}


def to_http(kind: ErrorKind) -> Tuple[int, str]:
    """Return the (status code, default message) pair for an error kind."""
    return _HTTP_MAPPING[kind]


class AppError(Exception):
    """
    The only exception type allowed to cross a service boundary.

    `detail` is for logs; clients only ever see the kind's default message.
    """

    def __init__(self, kind: ErrorKind, detail: Optional[str] = None):
        self.kind = kind
        self.detail = detail or to_http(kind)[1]
        super().__init__(self.detail)

    @property
    def status_code(self) -> int:
        return to_http(self.kind)[0]

    @property
    def message(self) -> str:
        return to_http(self.kind)[1]

    def __repr__(self) -> str:
        return f"AppError({self.kind.value}, {self.detail!r})"
