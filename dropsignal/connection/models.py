from dataclasses import dataclass
from typing import Any

from .status import UploaderConnectionStatus


@dataclass(frozen=True)
class PeerMetadata:
    """Informational descriptors reported by the receiving browser."""

    browser_name: str | None = None
    browser_version: str | None = None
    os_name: str | None = None
    os_version: str | None = None
    mobile_vendor: str | None = None
    mobile_model: str | None = None


@dataclass(frozen=True)
class UploaderConnection:
    """
    The sender's view of one receiving peer.

    Records are immutable; the tracker swaps in a new record on every change.
    """

    peer_id: str
    status: UploaderConnectionStatus = UploaderConnectionStatus.PENDING
    data_channel: Any = None
    peer_metadata: PeerMetadata | None = None
    uploading_file_name: str | None = None
    uploading_offset: int | None = None
    completed_files: int = 0
    total_files: int = 0
    current_file_progress: float = 0.0


@dataclass(frozen=True)
class NegotiationResult:
    offer_id: str
    succeeded: bool
    reason: str | None = None
