class RoutingException(Exception):
    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)


class ValidationError(RoutingException):
    """User input that can not become part of a routing config."""


class SyncError(RoutingException):
    """Anything that stops a read-modify-write cycle against the route store."""


class TransportError(SyncError):
    """The route store could not be reached, there is no response to report."""


class DecodeError(SyncError):
    """The route store answered with a document that is not a route resource."""


class RemoteHTTPError(SyncError):
    """
    The route store answered with a non-success status.

    ``detail`` holds the response body exactly as the store sent it, which is
    also what ``str()`` returns so callers can show it without rewording.
    """
    def __init__(self, response, *args, **kwargs):
        self.response = response
        self.status_code = response.status_code
        self.detail = response.text
        super().__init__(self.detail, *args, **kwargs)


class RetrievalError(RemoteHTTPError):
    pass


class WriteError(RemoteHTTPError):
    pass


class ConflictError(WriteError):
    """A write lost against a concurrent change (HTTP 409)."""
