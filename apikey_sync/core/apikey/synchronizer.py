"""Synchronization of Keycloak client state with the Apikey service.

The Keycloak event hook calls into ``ApikeySynchronizer`` whenever a client
is enabled, disabled or removed. Before every state change the current api
key state is read back from the Apikey service with a validate call, so
repeated invocations for the same client are harmless.
"""
from __future__ import annotations
import logging
import threading
from typing import Optional

import requests

from .client import ApikeyHttpClient
from .exceptions import ApikeyNotConfiguredError, ApikeyTransportError
from .protocol import (
    HTTP_NO_CONTENT,
    RemoteState,
    build_delete_request,
    build_invalidate_request,
    build_reenable_request,
    build_validate_request,
    interpret_validate_response,
    prepare_authorization_header,
)

logger = logging.getLogger(__name__)


class ApikeySynchronizer:
    """Keeps api keys in line with the enable/disable/delete lifecycle of clients.
    
    Service URL and manager credentials are configured once through ``init``.
    The credentials are not kept; only the derived Basic authorization header
    is cached for the mutating calls.
    
    One instance may be shared by several threads: the configured values are
    read-only after ``init`` and the transport is a single ``requests.Session``
    whose connection pool is thread-safe. Session-level state such as cookies
    is not, so the session must not be reconfigured while calls are in flight.
    
    Usage:
        synchronizer = ApikeySynchronizer()
        synchronizer.init("https://apikey.example.org/apikey", "manager", "secret")
        synchronizer.synchronize_client("my-client", "0f3c...", enabled=False)
        synchronizer.close()
    """
    
    def __init__(self, http_client: Optional[ApikeyHttpClient] = None):
        """Initialize the synchronizer.
        
        Args:
            http_client: Shared transport (a default one is created when omitted)
        """
        self.http_client = http_client or ApikeyHttpClient()
        self._service_url: Optional[str] = None
        self._authorization: Optional[str] = None
        self._closed = False
        self._close_lock = threading.Lock()
    
    def __enter__(self) -> "ApikeySynchronizer":
        return self
    
    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
    
    @property
    def service_url(self) -> Optional[str]:
        return self._service_url
    
    @property
    def authorization_header(self) -> Optional[str]:
        return self._authorization
    
    def init(self, service_url: Optional[str], client_id: Optional[str], client_secret: Optional[str]) -> None:
        """Configure service URL and manager credentials.
        
        Each value is accepted only once; later calls leave an already set
        value untouched.
        
        Args:
            service_url: Base URL of the Apikey service
            client_id: Manager client id
            client_secret: Secret corresponding to the client id
        """
        if self._service_url is None and service_url:
            self._service_url = service_url.rstrip("/")
        elif self._service_url is not None and service_url:
            logger.debug("[apikey] Service URL already set, ignoring new value")
        
        if self._authorization is None and client_id and client_secret:
            self._authorization = prepare_authorization_header(client_id, client_secret)
        elif self._authorization is not None and client_id:
            logger.debug("[apikey] Authorization header already set, ignoring new credentials")
    
    def synchronize_client(self, client_id: str, external_id: str, enabled: bool) -> None:
        """Bring the api key of a client in line with its state in Keycloak.
        
        The current state is validated first and a reenable or invalidate
        request is sent only when it differs from ``enabled``. The outcome of
        that request is logged, never raised.
        
        Args:
            client_id: Client id shared by Keycloak and the Apikey service
            external_id: Keycloak identifier of the client
            enabled: Current state of the client in Keycloak
            
        Raises:
            ApikeyNotFoundError: When the client id is not a known api key
            ApikeyTransportError: When the validate call cannot be executed
        """
        current = self._fetch_state(client_id)
        if current.enabled == enabled:
            logger.debug(f"[apikey] Api key {client_id} already {current.value}")
            return
        
        authorization = self._require_authorization()
        if enabled:
            request = build_reenable_request(self._service_url, authorization, client_id, external_id)
        else:
            request = build_invalidate_request(self._service_url, authorization, client_id)
        
        try:
            resp = self.http_client.send(request)
        except ApikeyTransportError as e:
            logger.warning(f"Synchronization for api key {client_id} failed: {e}")
            return
        
        try:
            if resp is not None and resp.status_code > HTTP_NO_CONTENT:
                logger.warning(
                    f"Synchronization for api key {client_id} failed with status: "
                    f"{resp.status_code} and message: {resp.reason}."
                )
            else:
                logger.info(f"[apikey] Api key {client_id} {request.kind}d")
        finally:
            _release(resp)
    
    def delete_client(self, external_id: str) -> None:
        """Completely remove the api key of a client deleted in Keycloak.
        
        Args:
            external_id: Keycloak identifier of the removed client
            
        Raises:
            ApikeyTransportError: When the delete call cannot be executed
        """
        request = build_delete_request(self._require_service_url(), self._require_authorization(), external_id)
        resp = self.http_client.send(request)
        try:
            if resp is None or resp.status_code != HTTP_NO_CONTENT:
                status = resp.status_code if resp is not None else None
                logger.warning(f"Delete api key {external_id} failed (status {status}).")
            else:
                logger.info(f"[apikey] Api key for Keycloak client {external_id} deleted")
        finally:
            _release(resp)
    
    def update_access_date(self, client_id: str) -> None:
        """Refresh the last access date of an api key through the validate call.
        
        Raises:
            ApikeyNotFoundError: When the client id is not a known api key
            ApikeyTransportError: When the validate call cannot be executed
        """
        self._fetch_state(client_id)
    
    def close(self) -> None:
        """Release the HTTP transport. Failures are logged, not raised."""
        with self._close_lock:
            if self._closed:
                return
            self._closed = True
        try:
            self.http_client.close()
        except Exception as e:
            logger.warning(f"Closing HTTP client in {type(self).__name__} failed: {e}")
    
    def _fetch_state(self, client_id: str) -> RemoteState:
        """Validate the client id and return the api key state."""
        request = build_validate_request(self._require_service_url(), client_id)
        resp = self.http_client.send(request)
        try:
            return interpret_validate_response(client_id, resp)
        finally:
            _release(resp)
    
    def _require_service_url(self) -> str:
        if self._service_url is None:
            raise ApikeyNotConfiguredError("Apikey service URL not set - call init first")
        return self._service_url
    
    def _require_authorization(self) -> str:
        if self._authorization is None:
            raise ApikeyNotConfiguredError("Manager client credentials not set - call init first")
        return self._authorization


def _release(resp: Optional[requests.Response]) -> None:
    """Close a response, logging instead of raising on failure."""
    if resp is None:
        return
    try:
        resp.close()
    except Exception as e:
        logger.warning(f"Close response failed: {e}")


def create_synchronizer(config=None) -> ApikeySynchronizer:
    """Build an initialized synchronizer from application settings.
    
    Args:
        config: ``SyncConfig`` instance (loaded from the environment when omitted)
        
    Returns:
        Synchronizer ready for use
    """
    if config is None:
        from apikey_sync.config import load_settings
        config = load_settings()
    
    synchronizer = ApikeySynchronizer(ApikeyHttpClient(timeout=config.request_timeout))
    synchronizer.init(config.apikey_service_url, config.manager_client_id, config.manager_client_secret)
    return synchronizer
