"""Parsers for free-text fields that carry structured values.

The portal encodes scores, point totals, category weights and course titles
as prose. Each parser here recognises a handful of fixed shapes and falls
back to :class:`Unparseable` so the original text is never lost. None of
them raise.
"""

import re
from dataclasses import dataclass
from typing import Union


def _fmt(value: float) -> str:
    return f"{value:g}"


@dataclass(frozen=True)
class Unparseable:
    raw: str

    def __str__(self) -> str:
        return self.raw


@dataclass(frozen=True)
class Percentage:
    value: float

    def __str__(self) -> str:
        return f"{_fmt(self.value)}%"


# -------------------------------------------------------------------------
# Assignment scores
# -------------------------------------------------------------------------


@dataclass(frozen=True)
class NotDue:
    def __str__(self) -> str:
        return "Not Due"


@dataclass(frozen=True)
class NotForGrading:
    def __str__(self) -> str:
        return "Not For Grading"


@dataclass(frozen=True)
class NotGraded:
    def __str__(self) -> str:
        return "Not Graded"


@dataclass(frozen=True)
class SeeStandards:
    def __str__(self) -> str:
        return "See Standards"


@dataclass(frozen=True)
class Score:
    earned: float
    possible: float

    def __str__(self) -> str:
        return f"{_fmt(self.earned)} out of {_fmt(self.possible)}"


AssignmentScore = Union[NotDue, NotForGrading, NotGraded, SeeStandards, Percentage, Score, Unparseable]

_EXACT_SCORES = {
    "Not Due": NotDue(),
    "": NotForGrading(),
    "Not Graded": NotGraded(),
    "See Standards": SeeStandards(),
}

_OUT_OF_RE = re.compile(r"([\d.]+)\s*out\s*of\s*([\d.]+)")
# "92", "92 ()" and "(92)" all show up
_PERCENT_RE = re.compile(r"^\(?\s*([\d.]+)\s*\)?\s*(?:\(\))?$")


def parse_score(text: str) -> AssignmentScore:
    if text in _EXACT_SCORES:
        return _EXACT_SCORES[text]

    match = _OUT_OF_RE.search(text)
    if match:
        try:
            return Score(float(match.group(1)), float(match.group(2)))
        except ValueError:
            return Unparseable(text)

    match = _PERCENT_RE.match(text.strip())
    if match:
        try:
            return Percentage(float(match.group(1)))
        except ValueError:
            return Unparseable(text)

    return Unparseable(text)


# -------------------------------------------------------------------------
# Assignment points
# -------------------------------------------------------------------------


@dataclass(frozen=True)
class Ungraded:
    possible: float

    def __str__(self) -> str:
        return f"{_fmt(self.possible)} Points Possible"


@dataclass(frozen=True)
class Graded:
    earned: float
    possible: float

    def __str__(self) -> str:
        return f"{_fmt(self.earned)}/{_fmt(self.possible)}"


AssignmentPoints = Union[Ungraded, Graded, Unparseable]

_POINTS_POSSIBLE_RE = re.compile(r"([\d.]+)\s*Points\s*Possible")
_EARNED_OF_POSSIBLE_RE = re.compile(r"([\d.]+)\s*/\s*([\d.]+)")


def parse_points(text: str) -> AssignmentPoints:
    try:
        if "Points Possible" in text:
            match = _POINTS_POSSIBLE_RE.search(text)
            if match:
                return Ungraded(float(match.group(1)))
        else:
            match = _EARNED_OF_POSSIBLE_RE.search(text)
            if match:
                return Graded(float(match.group(1)), float(match.group(2)))
    except ValueError:
        pass
    return Unparseable(text)


# -------------------------------------------------------------------------
# Grade calculation weights
# -------------------------------------------------------------------------


GradeCalcWeight = Union[Percentage, Unparseable]


def parse_weight(text: str) -> GradeCalcWeight:
    text = text.strip()
    if text.endswith("%"):
        try:
            return Percentage(float(text.rstrip("%")))
        except ValueError:
            pass
    return Unparseable(text)


# -------------------------------------------------------------------------
# Course titles
# -------------------------------------------------------------------------


@dataclass(frozen=True)
class ParsedTitle:
    name: str
    id: str

    def __str__(self) -> str:
        return f"{self.name} ({self.id})"


CourseTitle = Union[ParsedTitle, Unparseable]

_TITLE_RE = re.compile(r"(.+?)\s+\(([^()]+)\)")


def parse_title(text: str) -> CourseTitle:
    match = _TITLE_RE.fullmatch(text.strip())
    if match:
        return ParsedTitle(match.group(1), match.group(2))
    return Unparseable(text)
