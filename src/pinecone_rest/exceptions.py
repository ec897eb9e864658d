from typing import Optional


class PineconeError(Exception):
    """Base exception for all Pinecone client errors."""
    pass

class PineconeConfigError(PineconeError):
    """Raised when required configuration is missing."""
    pass

class PineconeTransportError(PineconeError):
    """Raised when the HTTP call itself could not complete (DNS, connect, TLS, timeout)."""
    pass

class PineconeDecodeError(PineconeError):
    """Raised when the status matched but the body did not decode into the expected shape."""
    pass

class PineconeUseAfterDeleteError(PineconeError):
    """Raised when an index handle is used after delete() consumed it."""
    pass

class PineconeAPIError(PineconeError):
    """Raised when the service answers with a status other than the expected one."""

    def __init__(self, status: int, type_tag: str, message: str, expected_status: Optional[int] = None):
        super().__init__(f"Pinecone responded {status} ({type_tag}): {message}")
        self.status = status
        self.type_tag = type_tag
        self.message = message
        self.expected_status = expected_status

    @property
    def is_client_error(self) -> bool:
        return 400 <= self.status < 500

class PineconeAuthenticationError(PineconeAPIError):
    """Raised when the API key is rejected (401/403)."""
    pass

class PineconeNotFoundError(PineconeAPIError):
    """Raised when a requested resource (index, namespace) is not found."""
    pass


def api_error_for(status: int, type_tag: str, message: str, expected_status: Optional[int] = None) -> PineconeAPIError:
    """Pick the most specific PineconeAPIError subclass for a status code."""
    if status in (401, 403):
        cls = PineconeAuthenticationError
    elif status == 404:
        cls = PineconeNotFoundError
    else:
        cls = PineconeAPIError
    return cls(status, type_tag, message, expected_status)
