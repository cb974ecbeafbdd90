"""Data models for a decoded StudentVUE gradebook.

Everything here is immutable value data: a newer snapshot is decoded afresh
and compared against the older one, never patched in place.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from .grammars import AssignmentPoints, AssignmentScore, CourseTitle, GradeCalcWeight


@dataclass(frozen=True)
class ReportPeriod:
    """A selectable grading period; ``index`` is what the portal expects back."""

    index: int
    grade_period: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class ReportingPeriod:
    """The grading period a gradebook snapshot was taken for."""

    grade_period: str
    start_date: date
    end_date: date


@dataclass(frozen=True)
class StandardScreenAssignment:
    type: str
    assignment: str
    due_date: date
    mark: str
    proficiency: Optional[float]
    proficiency_max_value: float


@dataclass(frozen=True)
class Standard:
    subject: str
    mark: str
    description: str
    proficiency: Optional[float]
    proficiency_max_value: float
    standard_screen_assignments: list[StandardScreenAssignment] = field(default_factory=list)


@dataclass(frozen=True)
class StandardAssignmentView:
    type: str
    assignment: str
    gradebook_id: str
    cal_value: float
    due_date: date
    mark: str
    proficiency: Optional[float]
    proficiency_max_value: float


@dataclass(frozen=True)
class StandardView:
    subject: str
    subject_id: int
    mark: str
    description: str
    cal_value: float
    proficiency: Optional[float]
    proficiency_max_value: float
    standard_assignment_views: list[StandardAssignmentView] = field(default_factory=list)


@dataclass(frozen=True)
class AssignmentGradeCalc:
    """One grading category's contribution to the overall mark."""

    type: str
    calculated_mark: str
    points: float
    points_possible: float
    weight: GradeCalcWeight
    weighted_pct: GradeCalcWeight


@dataclass(frozen=True)
class Assignment:
    type: str
    gradebook_id: str
    measure: str
    date: date
    due_date: date
    score: AssignmentScore
    score_type: str
    points: AssignmentPoints
    notes: str
    teacher_id: str
    student_id: str
    has_drop_box: bool
    drop_start_date: date
    drop_end_date: date
    standards: list[Standard] = field(default_factory=list)

    @property
    def title(self) -> str:
        return self.measure


@dataclass(frozen=True)
class Mark:
    """A course's standing for one grading period."""

    mark_name: str
    calculated_score_raw: float
    calculated_score_string: str
    assignments: list[Assignment] = field(default_factory=list)
    grade_calculation_summary: list[AssignmentGradeCalc] = field(default_factory=list)
    standard_views: list[StandardView] = field(default_factory=list)

    @property
    def uses_standards(self) -> bool:
        return bool(self.standard_views)


@dataclass(frozen=True)
class Course:
    title: CourseTitle
    period: int
    room: str
    staff: str
    staff_email: str
    highlight_cutoff: int
    marks: list[Mark] = field(default_factory=list)

    @property
    def current_mark(self) -> Optional[Mark]:
        """The portal sends one mark per course; None if it sent none."""
        return self.marks[0] if self.marks else None

    @property
    def assignments(self) -> list[Assignment]:
        mark = self.current_mark
        return mark.assignments if mark is not None else []

    @property
    def display_name(self) -> str:
        return str(self.title)


@dataclass(frozen=True)
class Gradebook:
    courses: list[Course] = field(default_factory=list)
    reporting_period: Optional[ReportingPeriod] = None
    reporting_periods: list[ReportPeriod] = field(default_factory=list)

    def course(self, title: CourseTitle) -> Optional[Course]:
        for c in self.courses:
            if c.title == title:
                return c
        return None
