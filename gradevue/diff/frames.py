"""Tabular views of gradebooks and changesets."""

from typing import Optional

import pandas as pd

from gradevue.data.models import Gradebook

from .changeset import Changeset, FieldChange

CHANGE_COLUMNS = ["course", "gradebook_id", "assignment", "change", "old", "new"]

ASSIGNMENT_COLUMNS = [
    "course", "period", "gradebook_id", "assignment", "type",
    "date", "due_date", "score", "points", "notes",
]


def changeset_frame(changeset: Optional[Changeset]) -> pd.DataFrame:
    """One row per detected change; empty frame when nothing changed."""
    if changeset is None:
        return pd.DataFrame(columns=CHANGE_COLUMNS)

    rows = []
    for cc in changeset:
        course = str(cc.title)
        for change in cc.changes:
            rows.append(_change_row(course, None, None, change))
        for ac in cc.assignment_changes:
            for change in ac.changes:
                rows.append(_change_row(course, ac.gradebook_id, ac.title, change))

    return pd.DataFrame(rows, columns=CHANGE_COLUMNS)


def _change_row(course, gradebook_id, assignment, change) -> dict:
    if isinstance(change, FieldChange):
        kind, old, new = change.label, _cell(change.old), _cell(change.new)
    else:
        kind, old, new = str(change), None, None
    return {
        "course": course,
        "gradebook_id": gradebook_id,
        "assignment": assignment,
        "change": kind,
        "old": old,
        "new": new,
    }


def _cell(value):
    # Keep plain scalars as-is; variants and grades become their display text
    if value is None or isinstance(value, (str, int, float)):
        return value
    return str(value)


def assignments_frame(gradebook: Gradebook) -> pd.DataFrame:
    """Flatten every course's current assignments into one frame."""
    rows = []
    for course in gradebook.courses:
        for a in course.assignments:
            rows.append({
                "course": str(course.title),
                "period": course.period,
                "gradebook_id": a.gradebook_id,
                "assignment": a.measure,
                "type": a.type,
                "date": a.date,
                "due_date": a.due_date,
                "score": str(a.score),
                "points": str(a.points),
                "notes": a.notes,
            })

    df = pd.DataFrame(rows, columns=ASSIGNMENT_COLUMNS)
    df["date"] = pd.to_datetime(df["date"])
    df["due_date"] = pd.to_datetime(df["due_date"])
    return df
