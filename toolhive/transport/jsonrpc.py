"""JSON-RPC 2.0 messages as they travel over a container's stdio."""

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

WIRE_VERSION = "2.0"

MessageID = Union[int, str, None]

# Characters that are escaped in encoded output so it is safe to embed in HTML.
_HTML_ESCAPES = {
    "<": "\\u003c",
    ">": "\\u003e",
    "&": "\\u0026",
    "\u2028": "\\u2028",
    "\u2029": "\\u2029",
}

INVALID_REQUEST_MESSAGE = "JSON RPC invalid request"


class JSONRPCDecodeError(ValueError):
    """Raised when bytes cannot be decoded into a JSON-RPC message."""


@dataclass
class Request:
    """A call (with an id) or a notification (without one)."""

    method: str
    params: Any = None
    id: MessageID = None

    @property
    def is_call(self) -> bool:
        return self.id is not None


@dataclass
class Response:
    """The reply to a call: a result or an error object."""

    id: MessageID
    result: Any = None
    error: Optional[Dict[str, Any]] = None


Message = Union[Request, Response]


def _decode_id(raw: Any) -> MessageID:
    if raw is None:
        return None
    if isinstance(raw, bool):
        raise JSONRPCDecodeError(f"invalid message id type <bool>{str(raw).lower()}")
    if isinstance(raw, (int, float)):
        return int(raw)
    if isinstance(raw, str):
        return raw
    raise JSONRPCDecodeError(f"invalid message id type <{type(raw).__name__}>{raw!r}")


def decode_message(data: Union[bytes, bytearray, str]) -> Message:
    """Decode one JSON-RPC message; a method makes it a request, else a response."""
    try:
        wire = json.loads(data)
    except (ValueError, UnicodeDecodeError) as exc:
        raise JSONRPCDecodeError(f"unmarshaling jsonrpc message: {exc}") from exc
    if not isinstance(wire, dict):
        raise JSONRPCDecodeError("unmarshaling jsonrpc message: expected a JSON object")

    version = wire.get("jsonrpc")
    if version is None:
        version = ""
    if not isinstance(version, str):
        raise JSONRPCDecodeError("unmarshaling jsonrpc message: jsonrpc must be a string")
    if version != WIRE_VERSION:
        raise JSONRPCDecodeError(
            f"invalid message version tag {version} expected {WIRE_VERSION}"
        )

    msg_id = _decode_id(wire.get("id"))

    method = wire.get("method")
    if method is None:
        method = ""
    if not isinstance(method, str):
        raise JSONRPCDecodeError("unmarshaling jsonrpc message: method must be a string")
    if method:
        return Request(method=method, params=wire.get("params"), id=msg_id)

    if msg_id is None:
        raise JSONRPCDecodeError(INVALID_REQUEST_MESSAGE)

    error = wire.get("error")
    if error is not None and not isinstance(error, dict):
        raise JSONRPCDecodeError("unmarshaling jsonrpc message: error must be an object")
    return Response(id=msg_id, result=wire.get("result"), error=error)


def _dumps(value: Any) -> str:
    text = json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    for char, escaped in _HTML_ESCAPES.items():
        text = text.replace(char, escaped)
    return text


def encode_message(msg: Message) -> bytes:
    """Encode a message in compact wire form."""
    wire: Dict[str, Any] = {"jsonrpc": WIRE_VERSION}
    if isinstance(msg, Request):
        if msg.id is not None:
            wire["id"] = msg.id
        wire["method"] = msg.method
        if msg.params is not None:
            wire["params"] = msg.params
    elif isinstance(msg, Response):
        if msg.id is not None:
            wire["id"] = msg.id
        if msg.result is not None:
            wire["result"] = msg.result
        if msg.error is not None:
            wire["error"] = msg.error
    else:
        raise TypeError(f"unknown message type {type(msg).__name__}")
    try:
        return _dumps(wire).encode("utf-8")
    except (TypeError, ValueError) as exc:
        raise ValueError(f"marshaling jsonrpc message: {exc}") from exc


def _is_space(char: str) -> bool:
    return char in (" ", "\n")


def _is_kept(char: str) -> bool:
    return char.isprintable() or _is_space(char)


def has_binary_data(line: str) -> bool:
    """Report whether a line holds characters that are neither printable nor space."""
    return not all(_is_kept(char) for char in line)


def sanitize_json_string(text: str) -> str:
    """Cut out the span from the first ``{`` to the last ``}`` and drop control characters."""
    start = text.find("{")
    if start == -1:
        return ""
    end = text.rfind("}")
    if end == -1 or end < start:
        return ""
    return "".join(char for char in text[start : end + 1] if _is_kept(char))