"""Errors raised by transports."""

from typing import Optional


class _SentinelError(Exception):
    default_message = ""

    def __init__(self, message: Optional[str] = None) -> None:
        super().__init__(message or self.default_message)


class UnsupportedTransportError(_SentinelError, ValueError):
    default_message = "unsupported transport type"


class TransportNotStartedError(_SentinelError, RuntimeError):
    default_message = "transport not started"


class TransportClosedError(_SentinelError, RuntimeError):
    default_message = "transport closed"


class InvalidMessageError(_SentinelError, ValueError):
    default_message = "invalid message"


class RuntimeNotSetError(_SentinelError, RuntimeError):
    default_message = "container runtime not set"


class ContainerIDNotSetError(_SentinelError, RuntimeError):
    default_message = "container ID not set"


class ContainerNameNotSetError(_SentinelError, RuntimeError):
    default_message = "container name not set"


class TransportError(Exception):
    """An error from a transport operation, wrapping an underlying error."""

    def __init__(self, err: BaseException, container_id: str = "", message: str = "") -> None:
        self.err = err
        self.container_id = container_id
        self.message = message
        super().__init__(self._render())
        self.__cause__ = err

    def _render(self) -> str:
        text = str(self.err)
        if self.message:
            text = f"{text}: {self.message}"
        if self.container_id:
            text = f"{text} (container: {self.container_id})"
        return text

    def __str__(self) -> str:
        return self._render()


def new_transport_error(err: BaseException, container_id: str, message: str) -> TransportError:
    """Build a :class:`TransportError`."""
    return TransportError(err, container_id, message)