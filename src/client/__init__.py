"""Client module for the remote simulation service."""

from .errors import ApiError, ClientError, ErrorKind, NetworkUnreachable, ServerError
from .simulation_client import SimulationClient

__all__ = [
    "ApiError",
    "ClientError",
    "ErrorKind",
    "NetworkUnreachable",
    "ServerError",
    "SimulationClient",
]
