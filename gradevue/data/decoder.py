"""Recursive-descent decoders that rebuild a Gradebook from markup events.

Every decoder receives the start event of its own element, already pulled
off the cursor, plus the shared cursor. It reads its attributes, then hands
the cursor to :func:`_consume_subtree`, which only returns once the
element's own end tag has been consumed. A decoder therefore can neither
stop short of its subtree nor read into a sibling's.
"""

import logging
from typing import Any, Callable, Iterable, Union

from .attributes import Attributes
from .errors import UnexpectedEvent
from .events import EndElement, Event, EventCursor, StartElement, Whitespace, tokenize
from .grammars import parse_points, parse_score, parse_title, parse_weight
from .models import (
    Assignment,
    AssignmentGradeCalc,
    Course,
    Gradebook,
    Mark,
    ReportingPeriod,
    ReportPeriod,
    Standard,
    StandardAssignmentView,
    StandardScreenAssignment,
    StandardView,
)

logger = logging.getLogger(__name__)

Decoder = Callable[[StartElement, EventCursor], Any]

GRADEBOOK_TAG = "Gradebook"


def _consume_subtree(
    start: StartElement,
    cursor: EventCursor,
    children: dict[str, list],
    containers: frozenset = frozenset(),
) -> None:
    """Consume events up to and including the end tag matching ``start``.

    ``children`` maps each child tag this element may hold to the list its
    decoded values are appended to. ``containers`` are wrapper tags with
    nothing of interest on them; they are stepped into transparently.
    """
    open_containers: list[str] = []

    while True:
        event = cursor.next_event()

        if isinstance(event, StartElement):
            if event.name in children:
                children[event.name].append(DECODERS[event.name](event, cursor))
            elif event.name in containers:
                open_containers.append(event.name)
            else:
                raise UnexpectedEvent(event)
        elif isinstance(event, EndElement):
            if open_containers:
                if event.name != open_containers[-1]:
                    raise UnexpectedEvent(event)
                open_containers.pop()
            elif event.name == start.name:
                return
            else:
                raise UnexpectedEvent(event)
        elif isinstance(event, Whitespace):
            continue
        else:
            raise UnexpectedEvent(event)


# -------------------------------------------------------------------------
# Entity decoders
# -------------------------------------------------------------------------


def decode_report_period(start: StartElement, cursor: EventCursor) -> ReportPeriod:
    attrs = Attributes.from_event(start)
    period = ReportPeriod(
        index=attrs.integer("Index"),
        grade_period=attrs.required("GradePeriod"),
        start_date=attrs.date("StartDate"),
        end_date=attrs.date("EndDate"),
    )
    _consume_subtree(start, cursor, {})
    return period


def decode_reporting_period(start: StartElement, cursor: EventCursor) -> ReportingPeriod:
    attrs = Attributes.from_event(start)
    period = ReportingPeriod(
        grade_period=attrs.required("GradePeriod"),
        start_date=attrs.date("StartDate"),
        end_date=attrs.date("EndDate"),
    )
    _consume_subtree(start, cursor, {})
    return period


def decode_standard_screen_assignment(start: StartElement, cursor: EventCursor) -> StandardScreenAssignment:
    attrs = Attributes.from_event(start)
    value = StandardScreenAssignment(
        type=attrs.required("Type"),
        assignment=attrs.required("Assignment"),
        due_date=attrs.date("DueDate"),
        mark=attrs.required("Mark"),
        proficiency=attrs.optional_float("Proficiency"),
        # sic: the portal misspells this attribute
        proficiency_max_value=attrs.floating("ProfciencyMaxValue"),
    )
    _consume_subtree(start, cursor, {})
    return value


def decode_standard(start: StartElement, cursor: EventCursor) -> Standard:
    attrs = Attributes.from_event(start)
    subject = attrs.required("Subject")
    mark = attrs.required("Mark")
    description = attrs.required("Description")
    proficiency = attrs.optional_float("Proficiency")
    proficiency_max_value = attrs.floating("ProfciencyMaxValue")

    children = {"StandardScreenAssignment": []}
    _consume_subtree(start, cursor, children, frozenset({"StandardScreenAssignments"}))

    return Standard(
        subject=subject,
        mark=mark,
        description=description,
        proficiency=proficiency,
        proficiency_max_value=proficiency_max_value,
        standard_screen_assignments=children["StandardScreenAssignment"],
    )


def decode_standard_assignment_view(start: StartElement, cursor: EventCursor) -> StandardAssignmentView:
    attrs = Attributes.from_event(start)
    value = StandardAssignmentView(
        type=attrs.required("Type"),
        assignment=attrs.required("Assignment"),
        gradebook_id=attrs.required("GradebookID"),
        cal_value=attrs.floating("CalValue"),
        due_date=attrs.date("DueDate"),
        mark=attrs.required("Mark"),
        proficiency=attrs.optional_float("Proficiency"),
        proficiency_max_value=attrs.floating("ProfciencyMaxValue"),
    )
    _consume_subtree(start, cursor, {})
    return value


def decode_standard_view(start: StartElement, cursor: EventCursor) -> StandardView:
    attrs = Attributes.from_event(start)
    subject = attrs.required("Subject")
    subject_id = attrs.integer("SubjectID")
    mark = attrs.required("Mark")
    description = attrs.required("Description")
    cal_value = attrs.floating("CalValue")
    proficiency = attrs.optional_float("Proficiency")
    proficiency_max_value = attrs.floating("ProfciencyMaxValue")

    children = {"StandardAssignmentView": []}
    _consume_subtree(start, cursor, children, frozenset({"StandardAssignmentViews"}))

    return StandardView(
        subject=subject,
        subject_id=subject_id,
        mark=mark,
        description=description,
        cal_value=cal_value,
        proficiency=proficiency,
        proficiency_max_value=proficiency_max_value,
        standard_assignment_views=children["StandardAssignmentView"],
    )


def decode_assignment_grade_calc(start: StartElement, cursor: EventCursor) -> AssignmentGradeCalc:
    attrs = Attributes.from_event(start)
    value = AssignmentGradeCalc(
        type=attrs.required("Type"),
        calculated_mark=attrs.required("CalculatedMark"),
        points=attrs.floating("Points"),
        points_possible=attrs.floating("PointsPossible"),
        weight=parse_weight(attrs.required("Weight")),
        weighted_pct=parse_weight(attrs.required("WeightedPct")),
    )
    _consume_subtree(start, cursor, {})
    return value


def decode_assignment(start: StartElement, cursor: EventCursor) -> Assignment:
    attrs = Attributes.from_event(start)
    fields = dict(
        type=attrs.required("Type"),
        gradebook_id=attrs.required("GradebookID"),
        measure=attrs.required("Measure"),
        date=attrs.date("Date"),
        due_date=attrs.date("DueDate"),
        score=parse_score(attrs.required("Score")),
        score_type=attrs.required("ScoreType"),
        points=parse_points(attrs.required("Points")),
        notes=attrs.required("Notes"),
        teacher_id=attrs.required("TeacherID"),
        student_id=attrs.required("StudentID"),
        has_drop_box=attrs.boolean("HasDropBox"),
        drop_start_date=attrs.date("DropStartDate"),
        drop_end_date=attrs.date("DropEndDate"),
    )

    children = {"Standard": []}
    _consume_subtree(start, cursor, children, frozenset({"Standards", "Resources"}))

    return Assignment(standards=children["Standard"], **fields)


def decode_mark(start: StartElement, cursor: EventCursor) -> Mark:
    attrs = Attributes.from_event(start)
    mark_name = attrs.required("MarkName")
    calculated_score_string = attrs.required("CalculatedScoreString")
    calculated_score_raw = attrs.floating("CalculatedScoreRaw")

    children = {"Assignment": [], "AssignmentGradeCalc": [], "StandardView": []}
    containers = frozenset({"Assignments", "GradeCalculationSummary", "StandardViews"})
    _consume_subtree(start, cursor, children, containers)

    return Mark(
        mark_name=mark_name,
        calculated_score_raw=calculated_score_raw,
        calculated_score_string=calculated_score_string,
        assignments=children["Assignment"],
        grade_calculation_summary=children["AssignmentGradeCalc"],
        standard_views=children["StandardView"],
    )


def decode_course(start: StartElement, cursor: EventCursor) -> Course:
    attrs = Attributes.from_event(start)
    title = parse_title(attrs.required("Title"))
    period = attrs.integer("Period")
    room = attrs.required("Room")
    staff = attrs.required("Staff")
    staff_email = attrs.required("StaffEMail")
    cutoff = attrs.integer("HighlightPercentageCutOffForProgressBar")

    children = {"Mark": []}
    _consume_subtree(start, cursor, children, frozenset({"Marks"}))

    return Course(
        title=title,
        period=period,
        room=room,
        staff=staff,
        staff_email=staff_email,
        highlight_cutoff=cutoff,
        marks=children["Mark"],
    )


def decode_gradebook_element(start: StartElement, cursor: EventCursor) -> Gradebook:
    children = {"Course": [], "ReportPeriod": [], "ReportingPeriod": []}
    _consume_subtree(start, cursor, children, frozenset({"Courses", "ReportingPeriods"}))

    reporting_periods = children["ReportingPeriod"]
    return Gradebook(
        courses=children["Course"],
        reporting_period=reporting_periods[-1] if reporting_periods else None,
        reporting_periods=children["ReportPeriod"],
    )


DECODERS: dict[str, Decoder] = {
    "Assignment": decode_assignment,
    "AssignmentGradeCalc": decode_assignment_grade_calc,
    "Course": decode_course,
    GRADEBOOK_TAG: decode_gradebook_element,
    "Mark": decode_mark,
    "ReportPeriod": decode_report_period,
    "ReportingPeriod": decode_reporting_period,
    "Standard": decode_standard,
    "StandardAssignmentView": decode_standard_assignment_view,
    "StandardScreenAssignment": decode_standard_screen_assignment,
    "StandardView": decode_standard_view,
}


# -------------------------------------------------------------------------
# Entry points
# -------------------------------------------------------------------------


def _as_cursor(events: Union[EventCursor, Iterable[Event]]) -> EventCursor:
    return events if isinstance(events, EventCursor) else EventCursor(events)


def decode_element(start: StartElement, cursor: EventCursor) -> Any:
    """Decode whichever entity ``start`` opens."""
    try:
        decoder = DECODERS[start.name]
    except KeyError:
        raise UnexpectedEvent(start) from None
    return decoder(start, cursor)


def decode_document(events: Union[EventCursor, Iterable[Event]], root_tag: str) -> Any:
    """Decode a whole document whose root element must be ``root_tag``.

    Only whitespace may surround the root element.
    """
    cursor = _as_cursor(events)

    event = cursor.next_event()
    while isinstance(event, Whitespace):
        event = cursor.next_event()
    if not isinstance(event, StartElement) or event.name != root_tag:
        raise UnexpectedEvent(event)

    value = decode_element(event, cursor)

    for trailing in cursor:
        if not isinstance(trailing, Whitespace):
            raise UnexpectedEvent(trailing)
    return value


def decode_gradebook(events: Union[EventCursor, Iterable[Event]]) -> Gradebook:
    gradebook = decode_document(events, GRADEBOOK_TAG)
    logger.debug(
        "Decoded gradebook with %d courses and %d report periods",
        len(gradebook.courses),
        len(gradebook.reporting_periods),
    )
    return gradebook


def parse_gradebook(xml: Union[str, bytes]) -> Gradebook:
    """Tokenize and decode a Gradebook payload in one step."""
    return decode_gradebook(tokenize(xml))
