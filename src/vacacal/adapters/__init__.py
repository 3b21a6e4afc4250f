"""Adapters - I/O implementations of ports."""

from .apps_script import (
    AppsScriptAdapter,
    MissingEndpointError,
    ParseFailure,
    RemoteDataError,
    RemoteError,
    TransportFailure,
)

__all__ = [
    "AppsScriptAdapter",
    "MissingEndpointError",
    "ParseFailure",
    "RemoteDataError",
    "RemoteError",
    "TransportFailure",
]
