"""Apikey-service-specific exceptions for error handling."""


class ApikeyError(Exception):
    """Base exception for all Apikey service operations."""
    pass


class ApikeyNotFoundError(ApikeyError):
    """Client id is not recognized as an api key by the Apikey service.
    
    Attributes:
        client_id: Client id that failed validation
    """
    
    def __init__(self, client_id: str):
        self.client_id = client_id
        super().__init__(f"Api key {client_id} not found")


class ApikeyTransportError(ApikeyError, IOError):
    """Network failure while executing a request against the Apikey service.
    
    Attributes:
        method: HTTP method of the failed request
        url: Target URL of the failed request
    """
    
    def __init__(self, method: str, url: str, message: str):
        self.method = method
        self.url = url
        super().__init__(f"{method} {url}: {message}")


class ApikeyNotConfiguredError(ApikeyError):
    """Synchronizer used before service URL and manager credentials were set."""
    pass
