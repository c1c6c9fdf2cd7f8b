import pytest

from toolhive.transport import errors


@pytest.mark.parametrize(
    "cls, text",
    [
        (errors.UnsupportedTransportError, "unsupported transport type"),
        (errors.TransportNotStartedError, "transport not started"),
        (errors.TransportClosedError, "transport closed"),
        (errors.InvalidMessageError, "invalid message"),
        (errors.RuntimeNotSetError, "container runtime not set"),
        (errors.ContainerIDNotSetError, "container ID not set"),
        (errors.ContainerNameNotSetError, "container name not set"),
    ],
)
def test_sentinel_messages(cls, text):
    assert str(cls()) == text


def test_sentinel_custom_message():
    assert str(errors.InvalidMessageError("bad frame")) == "bad frame"


def test_error_with_message_and_container():
    err = errors.new_transport_error(errors.UnsupportedTransportError(), "abc123", "bad thing")
    assert str(err) == "unsupported transport type: bad thing (container: abc123)"


def test_error_with_message_only():
    err = errors.new_transport_error(errors.TransportClosedError(), "", "bad thing")
    assert str(err) == "transport closed: bad thing"


def test_error_with_container_only():
    err = errors.new_transport_error(errors.TransportClosedError(), "abc123", "")
    assert str(err) == "transport closed (container: abc123)"


def test_error_with_neither():
    err = errors.new_transport_error(errors.TransportNotStartedError(), "", "")
    assert str(err) == "transport not started"


def test_error_wraps_cause():
    cause = errors.ContainerIDNotSetError()
    with pytest.raises(errors.TransportError) as info:
        raise errors.new_transport_error(cause, "abc123", "start")
    assert info.value.__cause__ is cause
    assert info.value.err is cause
    assert info.value.container_id == "abc123"
    assert info.value.message == "start"