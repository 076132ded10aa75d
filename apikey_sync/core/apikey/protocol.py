"""Request builders and response interpretation for the Apikey service.

Every outbound call is described by a ``SyncRequest`` built here. The
synchronizer never formats URLs or headers itself.
"""
from __future__ import annotations
import base64
import enum
from dataclasses import dataclass, field
from typing import Dict, Optional

import requests

from .exceptions import ApikeyNotFoundError

HTTP_NO_CONTENT = 204
HTTP_GONE = 410


class RemoteState(enum.Enum):
    """State of an api key as reported by the validate call."""
    ENABLED = "enabled"
    DISABLED = "disabled"
    
    @property
    def enabled(self) -> bool:
        return self is RemoteState.ENABLED


@dataclass(frozen=True)
class SyncRequest:
    """A single outbound call to the Apikey service."""
    kind: str
    method: str
    url: str
    headers: Dict[str, str] = field(default_factory=dict)


def prepare_authorization_header(client_id: str, client_secret: str) -> str:
    """Encode manager client credentials as a Basic authorization value.
    
    Args:
        client_id: Manager client id
        client_secret: Secret corresponding to the client id
        
    Returns:
        ``Authorization`` header value
    """
    raw = f"{client_id}:{client_secret}".encode("utf-8")
    return "Basic " + base64.b64encode(raw).decode("ascii")


def build_validate_request(service_url: str, client_id: str) -> SyncRequest:
    """POST {service_url}/validate authenticated with the client id as api key."""
    return SyncRequest(
        kind="validate",
        method="POST",
        url=f"{service_url}/validate",
        headers={"Authorization": f"APIKEY {client_id}"},
    )


def build_reenable_request(service_url: str, authorization: str, client_id: str, external_id: str) -> SyncRequest:
    """POST {service_url}/{client_id}?keycloakId={external_id} re-enabling the api key."""
    return SyncRequest(
        kind="reenable",
        method="POST",
        url=f"{service_url}/{client_id}?keycloakId={external_id}",
        headers={"Authorization": authorization, "Content-Type": "application/json"},
    )


def build_invalidate_request(service_url: str, authorization: str, client_id: str) -> SyncRequest:
    """DELETE {service_url}/{client_id} invalidating the api key."""
    return SyncRequest(
        kind="invalidate",
        method="DELETE",
        url=f"{service_url}/{client_id}",
        headers={"Authorization": authorization},
    )


def build_delete_request(service_url: str, authorization: str, external_id: str) -> SyncRequest:
    """DELETE {service_url}/synchronize/{external_id} removing the api key completely."""
    return SyncRequest(
        kind="delete",
        method="DELETE",
        url=f"{service_url}/synchronize/{external_id}",
        headers={"Authorization": authorization},
    )


def interpret_validate_response(client_id: str, resp: Optional[requests.Response]) -> RemoteState:
    """Map a validate response onto the api key state.
    
    Args:
        client_id: Client id that was validated
        resp: Response of the validate call, possibly None
        
    Returns:
        ``RemoteState.DISABLED`` for 410, ``RemoteState.ENABLED`` for 204
        
    Raises:
        ApikeyNotFoundError: For any other status or a missing response
    """
    if resp is not None:
        if resp.status_code == HTTP_GONE:
            return RemoteState.DISABLED
        if resp.status_code == HTTP_NO_CONTENT:
            return RemoteState.ENABLED
    raise ApikeyNotFoundError(client_id)
