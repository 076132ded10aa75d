"""Low-level HTTP transport for the Apikey service.

One ``requests.Session`` is shared by every call of a synchronizer; it is
created once and released by ``close()``.
"""
from __future__ import annotations
import logging
from typing import Optional

import requests

from .exceptions import ApikeyTransportError
from .protocol import SyncRequest

logger = logging.getLogger(__name__)


class ApikeyHttpClient:
    """Send ``SyncRequest`` objects and hand back raw responses.
    
    Status codes are not interpreted here; only network failures are turned
    into ``ApikeyTransportError``. Redirects are not followed, so a 3xx reply
    reaches the caller as is. Responses are opened in streaming mode and
    must be closed by the caller.
    
    Usage:
        client = ApikeyHttpClient(timeout=10)
        resp = client.send(build_validate_request(url, "my-key"))
        try:
            print(resp.status_code)
        finally:
            resp.close()
    """
    
    def __init__(self, session: Optional[requests.Session] = None, timeout: Optional[float] = None):
        """Initialize the transport.
        
        Args:
            session: Session to reuse (a new one is created when omitted)
            timeout: Per-request timeout in seconds; None keeps the requests default
        """
        self.session = session or requests.Session()
        self.timeout = timeout
    
    def send(self, request: SyncRequest) -> requests.Response:
        """Execute a request.
        
        Args:
            request: Request description built by the protocol module
            
        Returns:
            Unread response object
            
        Raises:
            ApikeyTransportError: On connection, timeout or other IO failure
        """
        logger.debug(f"[apikey] {request.kind}: {request.method} {request.url}")
        try:
            return self.session.request(
                request.method,
                request.url,
                headers=dict(request.headers),
                timeout=self.timeout,
                stream=True,
                allow_redirects=False,
            )
        except requests.RequestException as e:
            raise ApikeyTransportError(request.method, request.url, str(e)) from e
    
    def close(self) -> None:
        """Close the underlying session and its connection pool."""
        self.session.close()
