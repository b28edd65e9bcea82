from collections import deque
from collections.abc import Callable
import dataclasses
import logging
from typing import Any

from dropsignal.exceptions import StateError

from .models import NegotiationResult, UploaderConnection
from .status import UploaderConnectionStatus, can_transition

logger = logging.getLogger("dropsignal.connection.tracker")

# Oldest negotiation results are dropped past this many.
MAX_RESULTS = 1024

_PROGRESS_FIELDS = frozenset(
    {
        "peer_metadata",
        "uploading_file_name",
        "uploading_offset",
        "completed_files",
        "total_files",
        "current_file_progress",
    }
)


class ConnectionStateTracker:
    """
    Holds one :class:`UploaderConnection` per peer and enforces its lifecycle.

    All mutation goes through this class. Each change replaces the stored
    record with a new one, so a reader holding a record never sees it change
    underneath it.
    """

    def __init__(self, max_results: int = MAX_RESULTS) -> None:
        self._connections: dict[str, UploaderConnection] = {}
        self._results: deque[NegotiationResult] = deque(maxlen=max_results)
        self._listeners: list[Callable[[UploaderConnection], None]] = []

    def register(self, connection: UploaderConnection) -> UploaderConnection:
        """
        Start tracking a peer.

        A peer whose previous record reached a terminal state may be
        registered again; a live peer may not.
        """
        existing = self._connections.get(connection.peer_id)
        if existing is not None and not existing.status.is_terminal:
            raise StateError(
                f"Peer {connection.peer_id} is already tracked",
                peer_id=connection.peer_id,
                current_state=existing.status.value,
                attempted_state=connection.status.value,
            )
        logger.debug(
            f"Registered peer {connection.peer_id} in {connection.status.value}"
        )
        return self._store(connection)

    def get(self, peer_id: str) -> UploaderConnection:
        return self._connections[peer_id]

    def connections(self) -> list[UploaderConnection]:
        return list(self._connections.values())

    def transition(
        self, peer_id: str, new_status: UploaderConnectionStatus
    ) -> UploaderConnection:
        """
        Move a peer to ``new_status``.

        Raises:
            KeyError: If the peer is not tracked
            StateError: If the lifecycle does not allow the move

        """
        current = self._connections[peer_id]
        if not can_transition(current.status, new_status):
            raise StateError(
                f"Illegal transition {current.status.value} -> {new_status.value} "
                f"for peer {peer_id}",
                peer_id=peer_id,
                current_state=current.status.value,
                attempted_state=new_status.value,
            )
        if current.status is new_status:
            return current
        logger.debug(f"Peer {peer_id}: {current.status.value} -> {new_status.value}")
        return self._store(dataclasses.replace(current, status=new_status))

    def update_progress(self, peer_id: str, **fields: Any) -> UploaderConnection:
        """Update transfer counters and metadata of a live peer."""
        unknown = set(fields) - _PROGRESS_FIELDS
        if unknown:
            raise ValueError(f"Cannot update fields: {', '.join(sorted(unknown))}")
        current = self._connections[peer_id]
        if current.status.is_terminal:
            raise StateError(
                f"Peer {peer_id} is {current.status.value}, progress is frozen",
                peer_id=peer_id,
                current_state=current.status.value,
            )
        return self._store(dataclasses.replace(current, **fields))

    def close(self, peer_id: str) -> UploaderConnection | None:
        """
        Mark a peer's connection as ended.

        Terminal records are left as they are and unknown peers are ignored,
        since a peer connection may end before any data channel was opened.
        """
        current = self._connections.get(peer_id)
        if current is None or current.status.is_terminal:
            return current
        return self.transition(peer_id, UploaderConnectionStatus.CLOSED)

    def record_result(self, result: NegotiationResult) -> None:
        self._results.append(result)
        if result.succeeded:
            logger.debug(f"Negotiation for offer {result.offer_id} succeeded")
        else:
            logger.debug(
                f"Negotiation for offer {result.offer_id} failed: {result.reason}"
            )

    @property
    def results(self) -> list[NegotiationResult]:
        return list(self._results)

    def on_change(self, callback: Callable[[UploaderConnection], None]) -> None:
        self._listeners.append(callback)

    def _store(self, connection: UploaderConnection) -> UploaderConnection:
        self._connections[connection.peer_id] = connection
        for listener in list(self._listeners):
            try:
                listener(connection)
            except Exception:
                logger.exception(
                    "Connection listener raised for peer %s", connection.peer_id
                )
        return connection
