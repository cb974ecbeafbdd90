"""Builders for portal-shaped XML used across the test suite."""

from xml.sax.saxutils import escape, quoteattr

ASSIGNMENT_DEFAULTS = {
    "GradebookID": "1001",
    "Measure": "Quiz 1",
    "Type": "Quiz",
    "Date": "9/3/2024",
    "DueDate": "9/5/2024",
    "Score": "8 out of 10",
    "ScoreType": "Raw Score",
    "Points": "8 / 10",
    "Notes": "",
    "TeacherID": "4217",
    "StudentID": "98765",
    "MeasureDescription": "",
    "HasDropBox": "false",
    "DropStartDate": "9/3/2024",
    "DropEndDate": "9/6/2024",
}

COURSE_DEFAULTS = {
    "Period": "1",
    "Title": "Algebra I (MATH101)",
    "Room": "204",
    "Staff": "Ada Lovelace",
    "StaffEMail": "alovelace@school.org",
    "StaffGU": "8C7A",
    "HighlightPercentageCutOffForProgressBar": "50",
}

MARK_DEFAULTS = {
    "MarkName": "Q1",
    "CalculatedScoreString": "B",
    "CalculatedScoreRaw": "85.0",
}

GRADE_CALC = (
    '<AssignmentGradeCalc Type="Quizzes" Weight="40%" Points="8" PointsPossible="10" '
    'WeightedPct="32%" CalculatedMark="B" />'
)


def attrs(values: dict) -> str:
    return " ".join(f"{k}={quoteattr(v)}" for k, v in values.items())


def assignment_xml(standards: str = "", **overrides) -> str:
    values = {**ASSIGNMENT_DEFAULTS, **overrides}
    return (
        f"<Assignment {attrs(values)}>\n"
        f"  <Resources />\n"
        f"  <Standards>{standards}</Standards>\n"
        f"</Assignment>"
    )


def mark_xml(assignments=(), standard_views: str = "", **overrides) -> str:
    values = {**MARK_DEFAULTS, **overrides}
    return (
        f"<Mark {attrs(values)}>\n"
        f"  <StandardViews>{standard_views}</StandardViews>\n"
        f"  <GradeCalculationSummary>{GRADE_CALC}</GradeCalculationSummary>\n"
        f"  <Assignments>\n{''.join(assignments)}\n  </Assignments>\n"
        f"</Mark>"
    )


def course_xml(assignments=(), mark: dict = None, **overrides) -> str:
    values = {**COURSE_DEFAULTS, **overrides}
    return (
        f"<Course {attrs(values)}>\n"
        f"  <Marks>{mark_xml(assignments, **(mark or {}))}</Marks>\n"
        f"</Course>"
    )


def gradebook_xml(courses=()) -> str:
    return (
        '<Gradebook Type="Traditional" ErrorMessage="" HideStandardGraphInd="false">\n'
        "  <ReportingPeriods>\n"
        '    <ReportPeriod Index="0" GradePeriod="Q1 Progress" StartDate="9/3/2024" EndDate="11/8/2024" />\n'
        '    <ReportPeriod Index="1" GradePeriod="Q2 Progress" StartDate="11/12/2024" EndDate="1/31/2025" />\n'
        "  </ReportingPeriods>\n"
        '  <ReportingPeriod GradePeriod="Q1 Progress" StartDate="9/3/2024" EndDate="11/8/2024" />\n'
        f"  <Courses>\n{''.join(courses)}\n  </Courses>\n"
        "</Gradebook>\n"
    )


STANDARD_XML = (
    '<Standard Subject="Reading" Mark="3" Description="Cites textual evidence" '
    'Proficiency="3.0" ProfciencyMaxValue="4">'
    "<StandardScreenAssignments>"
    '<StandardScreenAssignment Type="Essay" Assignment="Essay 1" DueDate="10/1/2024" '
    'Mark="3" Proficiency="" ProfciencyMaxValue="4" />'
    "</StandardScreenAssignments>"
    "</Standard>"
)

STANDARD_VIEW_XML = (
    '<StandardView Subject="Reading" SubjectID="12" Mark="M" Description="Reads closely" '
    'CalValue="3.5" Proficiency="" ProfciencyMaxValue="4">'
    "<StandardAssignmentViews>"
    '<StandardAssignmentView Type="Essay" Assignment="Essay 1" GradebookID="2001" CalValue="3.5" '
    'DueDate="10/1/2024" Mark="M" Proficiency="3.5" ProfciencyMaxValue="4" />'
    "</StandardAssignmentViews>"
    "</StandardView>"
)


def soap_response(payload: str) -> str:
    """Wrap an inner payload the way the portal's SOAP endpoint does."""
    return (
        '<?xml version="1.0" encoding="utf-8"?>\n'
        '<soap:Envelope xmlns:soap="http://schemas.xmlsoap.org/soap/envelope/">\n'
        "  <soap:Body>\n"
        '    <ProcessWebServiceRequestResponse xmlns="http://edupoint.com/webservices/">\n'
        f"      <ProcessWebServiceRequestResult>{escape(payload)}</ProcessWebServiceRequestResult>\n"
        "    </ProcessWebServiceRequestResponse>\n"
        "  </soap:Body>\n"
        "</soap:Envelope>\n"
    )
