"""Exceptions raised while decoding portal payloads or talking to the portal."""

from typing import Any, Optional


class GradevueError(Exception):
    """Base class for every error raised by gradevue."""


# -------------------------------------------------------------------------
# Decoding
# -------------------------------------------------------------------------


class DecodingError(GradevueError):
    """A payload could not be turned into domain objects."""


class MissingAttribute(DecodingError):
    def __init__(self, name: str):
        super().__init__(f"missing required attribute {name!r}")
        self.name = name


class TypedParseFailure(DecodingError):
    """An attribute is present but does not parse as the type it must have.

    ``kind`` is one of ``"int"``, ``"float"``, ``"bool"`` or ``"date"``. The
    underlying ``ValueError`` is chained as ``__cause__``.
    """

    def __init__(self, kind: str, attribute: str, raw_value: str):
        super().__init__(f"attribute {attribute!r} is not a valid {kind}: {raw_value!r}")
        self.kind = kind
        self.attribute = attribute
        self.raw_value = raw_value


class UnexpectedEvent(DecodingError):
    def __init__(self, event: Any):
        super().__init__(f"unexpected event {event!r}")
        self.event = event


class UnexpectedEndOfStream(DecodingError):
    def __init__(self):
        super().__init__("event stream ended before the closing tag was seen")


class MalformedPayload(DecodingError):
    """The tokenizer rejected the raw XML."""

    def __init__(self, detail: str):
        super().__init__(f"malformed XML payload: {detail}")
        self.detail = detail


# -------------------------------------------------------------------------
# Portal requests
# -------------------------------------------------------------------------


class PortalError(GradevueError):
    """A request to the portal did not yield the expected payload."""


class RemoteError(PortalError):
    """The portal answered with its own error record instead of a payload."""

    def __init__(self, message: str, trace: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.trace = trace


class ExpectedPayloadNotFound(PortalError):
    def __init__(self, tag: str):
        super().__init__(f"expected <{tag}> in the portal response but found neither it nor an error record")
        self.tag = tag


class ResponseBodyNotFound(PortalError):
    def __init__(self):
        super().__init__("portal response envelope carried no result text")


class RemoteErrorParsingFailed(PortalError):
    """The portal flagged an error but the error record itself was unreadable."""

    def __init__(self, payload: str):
        super().__init__("could not read the portal's error record")
        self.payload = payload


class TransportError(PortalError):
    """The HTTP request itself failed; the ``requests`` exception is chained."""
