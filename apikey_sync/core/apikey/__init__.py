"""Apikey service synchronization library.

Keeps api keys managed by the Apikey service consistent with the
enable/disable/delete lifecycle of Keycloak clients.

Architecture:
- protocol.py: Request builders and validate-response interpretation
- client.py: HTTP transport over a shared requests session
- synchronizer.py: Synchronizer called by the Keycloak event hook
- exceptions.py: Typed exceptions for error handling

Usage:
    from apikey_sync.core.apikey import ApikeySynchronizer
    
    synchronizer = ApikeySynchronizer()
    synchronizer.init("https://apikey.example.org/apikey", "manager", "secret")
    synchronizer.synchronize_client("my-client", "0f3c...", enabled=True)
    synchronizer.delete_client("0f3c...")
    synchronizer.close()
"""
from .client import ApikeyHttpClient
from .exceptions import (
    ApikeyError,
    ApikeyNotFoundError,
    ApikeyTransportError,
    ApikeyNotConfiguredError,
)
from .protocol import (
    RemoteState,
    SyncRequest,
    prepare_authorization_header,
    build_validate_request,
    build_reenable_request,
    build_invalidate_request,
    build_delete_request,
    interpret_validate_response,
)
from .synchronizer import ApikeySynchronizer, create_synchronizer

__all__ = [
    # Client
    "ApikeyHttpClient",
    
    # Exceptions
    "ApikeyError",
    "ApikeyNotFoundError",
    "ApikeyTransportError",
    "ApikeyNotConfiguredError",
    
    # Protocol
    "RemoteState",
    "SyncRequest",
    "prepare_authorization_header",
    "build_validate_request",
    "build_reenable_request",
    "build_invalidate_request",
    "build_delete_request",
    "interpret_validate_response",
    
    # Synchronizer
    "ApikeySynchronizer",
    "create_synchronizer",
]
