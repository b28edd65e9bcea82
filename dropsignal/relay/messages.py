"""
Typed payloads exchanged with the relay and their validation.

Relay responses are decoded from JSON into these dataclasses on receipt. A
payload that does not match its schema raises ``ValidationError`` so callers
never see half-populated values.
"""

from dataclasses import dataclass
from typing import Any

from dropsignal.exceptions import ValidationError

from .config import SDP_TYPES


@dataclass(frozen=True)
class SessionDescription:
    sdp: str
    type: str

    def to_dict(self) -> dict[str, str]:
        return {"sdp": self.sdp, "type": self.type}

    @classmethod
    def from_dict(cls, data: Any) -> "SessionDescription":
        if not isinstance(data, dict):
            raise ValidationError(
                f"Session description must be an object, got {type(data).__name__}"
            )
        sdp = data.get("sdp")
        sdp_type = data.get("type")
        if not isinstance(sdp, str):
            raise ValidationError("Session description is missing 'sdp'")
        if sdp_type not in SDP_TYPES:
            raise ValidationError(f"Unknown session description type: {sdp_type!r}")
        return cls(sdp=sdp, type=sdp_type)


@dataclass(frozen=True)
class PendingOffer:
    """One receiver's connection attempt awaiting an answer."""

    offer_id: str
    description: SessionDescription


@dataclass(frozen=True)
class SessionDescriptionAnswer:
    offer_id: str
    answer: SessionDescription

    def to_request(self, slug: str) -> dict[str, Any]:
        return {"slug": slug, "offerID": self.offer_id, "answer": self.answer.to_dict()}


@dataclass(frozen=True)
class CreateResponse:
    secret: str
    long_slug: str
    short_slug: str


@dataclass(frozen=True)
class RenewResponse:
    offers: tuple[PendingOffer, ...] = ()


def _require_str(data: dict[str, Any], key: str) -> str:
    value = data.get(key)
    if not isinstance(value, str) or not value:
        raise ValidationError(f"Response field '{key}' must be a non-empty string")
    return value


def parse_create_response(data: Any) -> CreateResponse:
    """Validate the body returned by the create endpoint."""
    if not isinstance(data, dict):
        raise ValidationError("Create response must be a JSON object")
    return CreateResponse(
        secret=_require_str(data, "secret"),
        long_slug=_require_str(data, "longSlug"),
        short_slug=_require_str(data, "shortSlug"),
    )


def parse_renew_response(data: Any) -> RenewResponse:
    """
    Validate the body returned by the renew endpoint.

    A missing or null ``offers`` field is read as no pending offers. Offers
    keep the order in which the relay listed them.
    """
    if not isinstance(data, dict):
        raise ValidationError("Renew response must be a JSON object")
    offers = data.get("offers")
    if offers is None:
        return RenewResponse()
    if not isinstance(offers, dict):
        raise ValidationError("Renew response field 'offers' must be an object")
    return RenewResponse(
        offers=tuple(
            PendingOffer(
                offer_id=str(offer_id),
                description=SessionDescription.from_dict(description),
            )
            for offer_id, description in offers.items()
        )
    )
