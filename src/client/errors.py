"""Failure classification for calls to the simulation service."""
from enum import Enum


class ErrorKind(Enum):
    """Kinds of failed remote calls."""

    SERVER = "server"
    NETWORK = "network"
    CLIENT = "client"


class ApiError(Exception):
    """Base class for classified simulation service failures."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ServerError(ApiError):
    """The service answered with a non-success status.

    Attributes:
        body: Response body returned by the service.
        status: HTTP status code.
    """

    kind = ErrorKind.SERVER

    def __init__(self, body: str, status: int | None = None):
        super().__init__(body)
        self.body = body
        self.status = status


class NetworkUnreachable(ApiError):
    """No response was received from the service."""

    kind = ErrorKind.NETWORK

    def __init__(self, message: str = "Unable to connect to the server."):
        super().__init__(message)


class ClientError(ApiError):
    """The call failed locally (bad request, bad response shape, misuse)."""

    kind = ErrorKind.CLIENT
