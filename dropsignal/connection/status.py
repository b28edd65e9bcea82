from enum import Enum


class UploaderConnectionStatus(Enum):
    PENDING = "PENDING"
    PAUSED = "PAUSED"
    UPLOADING = "UPLOADING"
    DONE = "DONE"
    INVALID_PASSWORD = "INVALID_PASSWORD"
    CLOSED = "CLOSED"

    @property
    def is_terminal(self) -> bool:
        return self in TERMINAL_STATES


TERMINAL_STATES = frozenset(
    {UploaderConnectionStatus.DONE, UploaderConnectionStatus.CLOSED}
)

# Legal moves between states. INVALID_PASSWORD returns to PENDING when the
# receiver may retry its password.
TRANSITIONS: dict[UploaderConnectionStatus, frozenset[UploaderConnectionStatus]] = {
    UploaderConnectionStatus.PENDING: frozenset(
        {
            UploaderConnectionStatus.PAUSED,
            UploaderConnectionStatus.UPLOADING,
            UploaderConnectionStatus.DONE,
            UploaderConnectionStatus.INVALID_PASSWORD,
            UploaderConnectionStatus.CLOSED,
        }
    ),
    UploaderConnectionStatus.PAUSED: frozenset(
        {UploaderConnectionStatus.UPLOADING, UploaderConnectionStatus.CLOSED}
    ),
    UploaderConnectionStatus.UPLOADING: frozenset(
        {
            UploaderConnectionStatus.PAUSED,
            UploaderConnectionStatus.DONE,
            UploaderConnectionStatus.CLOSED,
        }
    ),
    UploaderConnectionStatus.INVALID_PASSWORD: frozenset(
        {UploaderConnectionStatus.PENDING, UploaderConnectionStatus.CLOSED}
    ),
    UploaderConnectionStatus.DONE: frozenset(),
    UploaderConnectionStatus.CLOSED: frozenset(),
}


def can_transition(
    current: UploaderConnectionStatus, new: UploaderConnectionStatus
) -> bool:
    """Same-state requests are accepted for every non-terminal state."""
    if current is new:
        return not current.is_terminal
    return new in TRANSITIONS[current]
