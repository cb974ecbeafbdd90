"""Attribute lookup with typed getters for decoder use."""

import math
import re
from datetime import date, datetime
from typing import Optional

from .errors import MissingAttribute, TypedParseFailure
from .events import StartElement

# Portal dates look like 9/3/2024 (no zero padding)
DATE_FORMAT = "%m/%d/%Y"

_BOOLEANS = {"true": True, "false": False}

# Optionally signed ASCII digits, nothing else
_INTEGER_RE = re.compile(r"[+-]?[0-9]+")


class Attributes:
    """Name -> value view over one element's attributes."""

    def __init__(self, pairs):
        # Later duplicates overwrite earlier ones
        self._values: dict[str, str] = dict(pairs)

    @classmethod
    def from_event(cls, event: StartElement) -> "Attributes":
        return cls(event.attributes)

    def required(self, name: str) -> str:
        try:
            return self._values[name]
        except KeyError:
            raise MissingAttribute(name) from None

    def integer(self, name: str) -> int:
        raw = self.required(name)
        if not _INTEGER_RE.fullmatch(raw):
            raise TypedParseFailure("int", name, raw) from ValueError(f"not a decimal integer: {raw!r}")
        return int(raw)

    def floating(self, name: str) -> float:
        raw = self.required(name)
        try:
            return _finite_float(raw)
        except ValueError as e:
            raise TypedParseFailure("float", name, raw) from e

    def boolean(self, name: str) -> bool:
        raw = self.required(name)
        try:
            return _BOOLEANS[raw]
        except KeyError:
            raise TypedParseFailure("bool", name, raw) from None

    def date(self, name: str) -> date:
        raw = self.required(name)
        try:
            return parse_date(raw)
        except ValueError as e:
            raise TypedParseFailure("date", name, raw) from e

    def optional_float(self, name: str) -> Optional[float]:
        """Float value, or None when absent or not numeric."""
        raw = self._values.get(name)
        if raw is None:
            return None
        try:
            return _finite_float(raw)
        except ValueError:
            return None


def _finite_float(text: str) -> float:
    # Decoded values must equal themselves, so no NaN
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"not a finite number: {text!r}")
    return value


def parse_date(text: str) -> date:
    """Parse a portal M/D/YYYY date."""
    return datetime.strptime(text, DATE_FORMAT).date()
