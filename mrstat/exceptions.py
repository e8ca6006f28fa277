"""mrstat exception classes."""


class MRStatError(Exception):
    """Base exception for all mrstat errors."""

    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


class ConfigurationError(MRStatError):
    """Raised when configuration is invalid or missing."""

    def __init__(self, message: str) -> None:
        super().__init__("CONFIGURATION_ERROR", message)


class TransportError(MRStatError):
    """Raised when the API cannot be reached (DNS, connect, TLS, timeout)."""

    def __init__(self, message: str) -> None:
        super().__init__("TRANSPORT_ERROR", message)


class DecodeError(MRStatError):
    """Raised when a response body is not the JSON we expect."""

    def __init__(self, message: str) -> None:
        super().__init__("DECODE_ERROR", message)


class HTTPError(MRStatError):
    """Raised when the API answers with a status outside 200-299."""

    def __init__(self, status: int, message: str, code: str = "HTTP_ERROR") -> None:
        super().__init__(code, message)
        self.status = status


class AuthenticationError(HTTPError):
    """Raised when the API token is rejected (401)."""

    pass


class AuthorizationError(HTTPError):
    """Raised when the token lacks access to the project (403)."""

    pass


class NotFoundError(HTTPError):
    """Raised when a project or merge request is not found (404)."""

    pass


class ServerError(HTTPError):
    """Raised on server errors (5xx)."""

    pass
