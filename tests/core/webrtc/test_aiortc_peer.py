"""
Tests for the aiortc-backed peer connection, with the bridge mocked out.
"""

from unittest.mock import AsyncMock, Mock

from aiortc import RTCSessionDescription
import pytest

from dropsignal.exceptions import NegotiationError
from dropsignal.relay.messages import SessionDescription
from dropsignal.tools.factories import ANSWER_SDP, OFFER_SDP
from dropsignal.webrtc.peer import AiortcPeerConnection, aiortc_peer_factory


@pytest.fixture
def peer_connection():
    pc = Mock()
    pc.connectionState = "new"
    return pc


@pytest.fixture
def bridge(peer_connection):
    bridge = Mock()
    bridge.create_peer_connection.return_value = peer_connection
    bridge.answer_offer = AsyncMock(
        return_value=RTCSessionDescription(sdp=ANSWER_SDP, type="answer")
    )
    bridge.close_peer_connection = AsyncMock()
    return bridge


def registered_handler(peer_connection, event):
    for call in peer_connection.on.call_args_list:
        if call.args[0] == event:
            return call.args[1]
    raise AssertionError(f"No handler registered for {event}")


@pytest.mark.trio
async def test_create_answer(bridge, peer_connection):
    peer = AiortcPeerConnection(bridge)
    answer = await peer.create_answer(SessionDescription(sdp=OFFER_SDP, type="offer"))

    assert answer == SessionDescription(sdp=ANSWER_SDP, type="answer")
    pc, offer = bridge.answer_offer.call_args.args
    assert pc is peer_connection
    assert offer.sdp == OFFER_SDP
    assert offer.type == "offer"


@pytest.mark.trio
async def test_create_answer_failure_raises_negotiation_error(bridge):
    bridge.answer_offer.side_effect = ValueError("bad sdp")
    peer = AiortcPeerConnection(bridge)
    with pytest.raises(NegotiationError, match="bad sdp"):
        await peer.create_answer(SessionDescription(sdp="garbage", type="offer"))


def test_on_data_channel_forwards_channel(bridge, peer_connection):
    peer = AiortcPeerConnection(bridge)
    channels = []
    peer.on_data_channel(channels.append)

    channel = Mock(label="dropsignal")
    registered_handler(peer_connection, "datachannel")(channel)
    assert channels == [channel]


@pytest.mark.parametrize("state", ["failed", "closed"])
def test_on_close_fires_once(bridge, peer_connection, state):
    peer = AiortcPeerConnection(bridge)
    closed = []
    peer.on_close(lambda: closed.append(True))

    on_state_change = registered_handler(peer_connection, "connectionstatechange")
    peer_connection.connectionState = "connected"
    on_state_change()
    assert closed == []

    peer_connection.connectionState = state
    on_state_change()
    on_state_change()
    assert closed == [True]


@pytest.mark.trio
async def test_close(bridge, peer_connection):
    peer = AiortcPeerConnection(bridge)
    closed = []
    peer.on_close(lambda: closed.append(True))
    await peer.close()

    bridge.close_peer_connection.assert_awaited_once_with(peer_connection)
    assert closed == [True]


def test_factory_creates_one_connection_per_call(bridge):
    factory = aiortc_peer_factory(bridge)
    assert factory() is not factory()
    assert bridge.create_peer_connection.call_count == 2
