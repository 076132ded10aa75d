"""Settings loader with environment variable and Docker secrets integration."""
from __future__ import annotations
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional


def _load_manager_secret(secret_name: str, env_var: str) -> str | None:
    """Read the manager client secret from the Docker secrets mount, else from ``env_var``."""
    secret_file = Path("/run/secrets") / secret_name
    if secret_file.is_file():
        try:
            value = secret_file.read_text().strip()
        except OSError as e:
            print(f"[settings] ✗ Cannot read manager secret {secret_file}: {e}")
            value = ""
        if value:
            print(f"[settings] ✓ Manager secret taken from {secret_file}")
            return value
    
    return os.getenv(env_var) or None


def _require(var_name: str) -> str:
    """Get a required environment variable."""
    value = os.environ.get(var_name, "").strip()
    if not value:
        raise RuntimeError(f"Environment variable {var_name} is required.")
    return value


def _parse_timeout(raw: Optional[str]) -> Optional[float]:
    """Parse APIKEY_REQUEST_TIMEOUT; empty means no timeout."""
    if raw is None or not raw.strip():
        return None
    try:
        timeout = float(raw)
    except ValueError:
        raise ValueError(f"APIKEY_REQUEST_TIMEOUT must be a number of seconds, got {raw!r}") from None
    if timeout <= 0:
        raise ValueError(f"APIKEY_REQUEST_TIMEOUT must be positive, got {raw!r}")
    return timeout


@dataclass
class SyncConfig:
    """Synchronizer configuration container."""
    # Apikey service
    apikey_service_url: str
    
    # Manager client authorized to perform synchronize calls
    manager_client_id: str
    manager_client_secret: str
    
    # Transport
    request_timeout: Optional[float] = None
    
    def __repr__(self) -> str:
        return (
            f"SyncConfig(apikey_service_url={self.apikey_service_url!r}, "
            f"manager_client_id={self.manager_client_id!r}, manager_client_secret='***', "
            f"request_timeout={self.request_timeout!r})"
        )


def load_settings() -> SyncConfig:
    """Load synchronizer settings from environment and /run/secrets."""
    apikey_service_url = _require("APIKEY_SERVICE_URL")
    manager_client_id = _require("APIKEY_MANAGER_CLIENT_ID")
    
    manager_client_secret = _load_manager_secret(
        "apikey_manager_client_secret",
        "APIKEY_MANAGER_CLIENT_SECRET",
    )
    if not manager_client_secret:
        raise RuntimeError(
            "APIKEY_MANAGER_CLIENT_SECRET not found in /run/secrets or environment"
        )
    
    request_timeout = _parse_timeout(os.environ.get("APIKEY_REQUEST_TIMEOUT"))
    
    print(f"[settings] Apikey service={apikey_service_url}; manager client_id={manager_client_id}")
    
    return SyncConfig(
        apikey_service_url=apikey_service_url,
        manager_client_id=manager_client_id,
        manager_client_secret=manager_client_secret,
        request_timeout=request_timeout,
    )
