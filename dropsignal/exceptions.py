class DropSignalError(Exception):
    """Base class for every error raised by this package."""


class TransportError(DropSignalError):
    """Raised when a relay call is unreachable or returns a non-success status."""

    def __init__(self, message: str, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(TransportError):
    """Raised when a relay response does not match its expected schema."""


class NegotiationError(DropSignalError):
    """Raised when the peer-connection primitive fails to produce an answer."""

    def __init__(self, message: str, offer_id: str | None = None) -> None:
        super().__init__(message)
        self.offer_id = offer_id


class StateError(DropSignalError):
    """Invalid transition for the current connection state."""

    def __init__(
        self,
        message: str,
        peer_id: str | None = None,
        current_state: str | None = None,
        attempted_state: str | None = None,
    ) -> None:
        super().__init__(message)
        self.peer_id = peer_id
        self.current_state = current_state
        self.attempted_state = attempted_state
