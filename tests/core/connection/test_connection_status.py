"""
Tests for the connection lifecycle table.
"""

import pytest

from dropsignal.connection.status import (
    TERMINAL_STATES,
    TRANSITIONS,
    UploaderConnectionStatus as Status,
    can_transition,
)


def test_every_status_has_a_row():
    assert set(TRANSITIONS) == set(Status)


def test_terminal_states():
    assert TERMINAL_STATES == {Status.DONE, Status.CLOSED}
    assert Status.DONE.is_terminal
    assert not Status.PAUSED.is_terminal


@pytest.mark.parametrize("terminal", [Status.DONE, Status.CLOSED])
@pytest.mark.parametrize("target", list(Status))
def test_no_way_out_of_terminal_states(terminal, target):
    assert not can_transition(terminal, target)


@pytest.mark.parametrize(
    "current,new",
    [
        (Status.PENDING, Status.UPLOADING),
        (Status.UPLOADING, Status.PAUSED),
        (Status.PAUSED, Status.UPLOADING),
        (Status.UPLOADING, Status.DONE),
        (Status.PENDING, Status.INVALID_PASSWORD),
        (Status.INVALID_PASSWORD, Status.PENDING),
        (Status.PAUSED, Status.CLOSED),
    ],
)
def test_legal_transitions(current, new):
    assert can_transition(current, new)


@pytest.mark.parametrize(
    "current,new",
    [
        (Status.UPLOADING, Status.PENDING),
        (Status.PAUSED, Status.DONE),
        (Status.INVALID_PASSWORD, Status.UPLOADING),
        (Status.UPLOADING, Status.INVALID_PASSWORD),
    ],
)
def test_illegal_transitions(current, new):
    assert not can_transition(current, new)


@pytest.mark.parametrize(
    "status", [s for s in Status if s not in TERMINAL_STATES]
)
def test_same_state_is_a_no_op_for_live_states(status):
    assert can_transition(status, status)


def test_every_live_state_can_close():
    for status in Status:
        if not status.is_terminal:
            assert can_transition(status, Status.CLOSED)
