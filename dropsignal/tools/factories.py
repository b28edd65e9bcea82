import factory

from dropsignal.connection.models import UploaderConnection
from dropsignal.connection.status import UploaderConnectionStatus
from dropsignal.relay.messages import PendingOffer, SessionDescription
from dropsignal.session.registry import Session

OFFER_SDP = "v=0\r\no=- 0 0 IN IP4 127.0.0.1\r\ns=-\r\nt=0 0\r\n"
ANSWER_SDP = "v=0\r\no=- 1 1 IN IP4 127.0.0.1\r\ns=-\r\nt=0 0\r\n"


class SessionFactory(factory.Factory):
    class Meta:
        model = Session

    upload_id = factory.Sequence(lambda n: f"upload-{n}")
    secret = factory.Sequence(lambda n: f"secret-{n}")
    long_slug = factory.Sequence(lambda n: f"long-slug-{n:06d}")
    short_slug = factory.Sequence(lambda n: f"s{n}")


class SessionDescriptionFactory(factory.Factory):
    class Meta:
        model = SessionDescription

    sdp = OFFER_SDP
    type = "offer"


class PendingOfferFactory(factory.Factory):
    class Meta:
        model = PendingOffer

    offer_id = factory.Sequence(lambda n: f"offer-{n}")
    description = factory.SubFactory(SessionDescriptionFactory)


class UploaderConnectionFactory(factory.Factory):
    class Meta:
        model = UploaderConnection

    peer_id = factory.Sequence(lambda n: f"peer-{n}")
    status = UploaderConnectionStatus.PENDING
    data_channel = None
    total_files = 3
