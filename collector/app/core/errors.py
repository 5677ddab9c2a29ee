class CollectorError(RuntimeError):
    """Base class for failures that abort a collection run."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class AuthNotReadyError(CollectorError):
    """Raised when a request is routed through the transport before login."""


class AuthenticationError(CollectorError):
    """Raised when the session handshake is rejected or cannot be completed."""


class RequestError(CollectorError):
    """Raised on transport failures and non-2xx responses after login."""


class BatchLimitError(RequestError):
    """Raised when a metric batch would exceed the configured host bound."""


class DecodeError(CollectorError):
    """Raised when a response body does not match the expected JSON shape."""


class EncodeError(CollectorError):
    """Raised when an outgoing payload cannot be serialized."""


class RenderError(CollectorError):
    """Raised when a metric value has no textual representation."""


class PipelineStateError(CollectorError):
    """Raised when a pipeline stage is invoked out of order."""
