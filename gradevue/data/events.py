"""Markup events and the single-pass cursor every decoder reads from.

The tokenizer here is a thin adapter over an lxml parser target: it never
builds an element tree, it only records the start/end/text callbacks in
document order.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, Iterator, Union

from lxml import etree

from .errors import MalformedPayload, UnexpectedEndOfStream

logger = logging.getLogger(__name__)

XML_WHITESPACE = " \t\r\n"


@dataclass(frozen=True)
class StartElement:
    name: str
    attributes: tuple[tuple[str, str], ...] = ()


@dataclass(frozen=True)
class EndElement:
    name: str


@dataclass(frozen=True)
class Characters:
    text: str


@dataclass(frozen=True)
class Whitespace:
    text: str


Event = Union[StartElement, EndElement, Characters, Whitespace]


class EventCursor:
    """A mutable position over an event sequence.

    Decoders share one cursor by reference; whatever one of them consumes is
    gone for every other decoder.
    """

    def __init__(self, events: Iterable[Event]):
        self._events: Iterator[Event] = iter(events)
        self.consumed = 0

    def __iter__(self) -> "EventCursor":
        return self

    def __next__(self) -> Event:
        event = next(self._events)
        self.consumed += 1
        return event

    def next_event(self) -> Event:
        """Return the next event, failing if the sequence is exhausted."""
        try:
            return next(self)
        except StopIteration:
            raise UnexpectedEndOfStream() from None


def _local_name(name: str) -> str:
    return etree.QName(name).localname if name.startswith("{") else name


class _EventCollector:
    """lxml parser target that records events instead of building a tree."""

    def __init__(self):
        self.events: list[Event] = []
        self._text: list[str] = []

    def _flush_text(self):
        if not self._text:
            return
        text = "".join(self._text)
        self._text = []
        if text.strip(XML_WHITESPACE):
            self.events.append(Characters(text))
        else:
            self.events.append(Whitespace(text))

    def start(self, tag, attrib):
        self._flush_text()
        attributes = tuple((_local_name(k), v) for k, v in attrib.items())
        self.events.append(StartElement(_local_name(tag), attributes))

    def end(self, tag):
        self._flush_text()
        self.events.append(EndElement(_local_name(tag)))

    def data(self, data):
        self._text.append(data)

    def close(self) -> list[Event]:
        self._flush_text()
        return self.events


def tokenize(xml: Union[str, bytes]) -> EventCursor:
    """Turn an XML document into an :class:`EventCursor`."""
    if isinstance(xml, str):
        xml = xml.encode("utf-8")

    collector = _EventCollector()
    parser = etree.XMLParser(target=collector, resolve_entities=False, no_network=True)
    try:
        parser.feed(xml)
        events = parser.close()
    except etree.XMLSyntaxError as e:
        raise MalformedPayload(str(e)) from e

    logger.debug("Tokenized %d bytes into %d events", len(xml), len(events))
    return EventCursor(events)
