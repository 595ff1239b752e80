"""
Exception types raised by the Directus client and tool handlers.

Every error raised by this package derives from DirectusError, so the MCP
layer can turn any of them into a tool error message without knowing the
details. The subclasses exist for the places where callers do care:

- ConfigurationError: the server cannot start (no URL, no credentials)
- AuthenticationError: the login exchange with Directus was rejected
- DirectusAPIError: Directus answered with an error, or could not be reached
- ResourceNotFoundError: a handler looked something up and found nothing
"""


class DirectusError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(DirectusError):
    """Raised at construction time when the client configuration is unusable."""


class AuthenticationError(DirectusError):
    """
    Raised when the email/password login exchange fails.

    The message always starts with "Authentication failed:" so operators can
    tell a bad password apart from an unreachable server in the startup logs.
    """

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Authentication failed: {detail}")


class DirectusAPIError(DirectusError):
    """
    Raised when a request to Directus does not produce a usable response.

    Covers both "the service said no" (non-2xx status) and "the service could
    not be reached" (transport failure). The message shape is the same for
    both; status_code is None for transport failures.

    Attributes:
        detail: The best available error text (remote message or transport error)
        status_code: HTTP status of the failed response, if there was one
    """

    def __init__(self, detail: str, status_code: int | None = None):
        self.detail = detail
        self.status_code = status_code
        super().__init__(f"Directus API error: {detail}")


class ResourceNotFoundError(DirectusError):
    """Raised by handlers that resolve an entity before acting on it."""
