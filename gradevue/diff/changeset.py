"""Structural differences between two gradebook snapshots.

Courses are paired by title and assignments by gradebook ID. Only what
changed is recorded: an unchanged course or assignment does not appear at
all, and a changed one carries just the fields that differ.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, ClassVar, Optional

from gradevue.data.models import Assignment, Course, Gradebook, Mark

from .pairing import pair

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Added:
    def __str__(self) -> str:
        return "added"


@dataclass(frozen=True)
class Dropped:
    def __str__(self) -> str:
        return "dropped"


@dataclass(frozen=True)
class Removed:
    def __str__(self) -> str:
        return "removed"


@dataclass(frozen=True)
class FieldChange:
    """A single field that holds a different value in the new snapshot."""

    old: Any
    new: Any

    label: ClassVar[str] = "value"

    def __str__(self) -> str:
        return f"{self.label} changed from {_show(self.old)} to {_show(self.new)}"


def _show(value: Any) -> str:
    if value is None:
        return "nothing"
    if value == "":
        return "(blank)"
    return str(value)


# Course-level fields


class PeriodChange(FieldChange):
    label = "period"


class StaffChange(FieldChange):
    label = "teacher"


class StaffEmailChange(FieldChange):
    label = "teacher email"


class GradeChange(FieldChange):
    label = "grade"


# Assignment-level fields


class DateChange(FieldChange):
    label = "date"


class DueDateChange(FieldChange):
    label = "due date"


class NotesChange(FieldChange):
    label = "notes"


class PointsChange(FieldChange):
    label = "points"


class ScoreChange(FieldChange):
    label = "score"


class ScoreTypeChange(FieldChange):
    label = "score type"


class TitleChange(FieldChange):
    label = "title"


# There is no course title change: courses are paired by title, so a renamed
# course shows up as one dropped and one added course.
COURSE_FIELDS = (
    (PeriodChange, "period"),
    (StaffChange, "staff"),
    (StaffEmailChange, "staff_email"),
)

ASSIGNMENT_FIELDS = (
    (DateChange, "date"),
    (DueDateChange, "due_date"),
    (NotesChange, "notes"),
    (PointsChange, "points"),
    (ScoreChange, "score"),
    (ScoreTypeChange, "score_type"),
    (TitleChange, "measure"),
)


@dataclass(frozen=True)
class CalculatedGrade:
    """A course's overall grade as the portal computed it."""

    raw: float
    display: str

    @classmethod
    def of(cls, mark: Optional[Mark]) -> Optional["CalculatedGrade"]:
        if mark is None:
            return None
        return cls(mark.calculated_score_raw, mark.calculated_score_string)

    def __str__(self) -> str:
        return self.display or f"{self.raw:g}"


def _field_changes(table, old, new) -> list[FieldChange]:
    changes = []
    for change_type, attr in table:
        before, after = getattr(old, attr), getattr(new, attr)
        if before != after:
            changes.append(change_type(before, after))
    return changes


@dataclass(frozen=True)
class AssignmentChanges:
    gradebook_id: str
    old: Optional[Assignment]
    new: Optional[Assignment]
    changes: list = field(default_factory=list)

    @property
    def title(self) -> str:
        return (self.new or self.old).measure

    @classmethod
    def diff(cls, old: Optional[Assignment], new: Optional[Assignment]) -> Optional["AssignmentChanges"]:
        if old is None and new is None:
            return None
        if old is None:
            return cls(new.gradebook_id, None, new, [Added()])
        if new is None:
            return cls(old.gradebook_id, old, None, [Removed()])

        changes = _field_changes(ASSIGNMENT_FIELDS, old, new)
        if not changes:
            return None
        return cls(old.gradebook_id, old, new, changes)


@dataclass(frozen=True)
class CourseChanges:
    title: Any
    old: Optional[Course]
    new: Optional[Course]
    changes: list = field(default_factory=list)
    assignment_changes: list[AssignmentChanges] = field(default_factory=list)

    @classmethod
    def diff(cls, old: Optional[Course], new: Optional[Course]) -> Optional["CourseChanges"]:
        if old is None and new is None:
            return None
        if old is None:
            return cls(new.title, None, new, [Added()])
        if new is None:
            return cls(old.title, old, None, [Dropped()])

        changes = _field_changes(COURSE_FIELDS, old, new)

        old_grade = CalculatedGrade.of(old.current_mark)
        new_grade = CalculatedGrade.of(new.current_mark)
        if old_grade != new_grade:
            changes.append(GradeChange(old_grade, new_grade))

        assignment_changes = diff_assignments(old.assignments, new.assignments)

        if not changes and not assignment_changes:
            return None
        return cls(old.title, old, new, changes, assignment_changes)

    def lines(self) -> list[str]:
        """Human-readable description, one line per change."""
        name = str(self.title)
        lines = [f"{name}: {change}" for change in self.changes]
        for ac in self.assignment_changes:
            lines.extend(f"{name} / {ac.title}: {change}" for change in ac.changes)
        return lines


def diff_assignments(old: list[Assignment], new: list[Assignment]) -> list[AssignmentChanges]:
    changes = []
    for o, n in pair(old, new, lambda a: a.gradebook_id):
        ac = AssignmentChanges.diff(o, n)
        if ac is not None:
            changes.append(ac)
    return changes


@dataclass(frozen=True)
class Changeset:
    """Every difference between two snapshots, grouped by course."""

    changes: list[CourseChanges]

    def __iter__(self):
        return iter(self.changes)

    def __len__(self) -> int:
        return len(self.changes)

    def lines(self) -> list[str]:
        return [line for cc in self.changes for line in cc.lines()]

    @classmethod
    def diff(cls, old: Gradebook, new: Gradebook) -> Optional["Changeset"]:
        changes = []
        for o, n in pair(old.courses, new.courses, lambda c: c.title):
            cc = CourseChanges.diff(o, n)
            if cc is not None:
                changes.append(cc)

        if not changes:
            return None
        logger.debug("Gradebook changed in %d courses", len(changes))
        return cls(changes)


def diff_gradebooks(old: Gradebook, new: Gradebook) -> Optional[Changeset]:
    """Compare two snapshots; None when nothing changed."""
    return Changeset.diff(old, new)
