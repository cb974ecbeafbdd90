from .changeset import Changeset, CourseChanges, AssignmentChanges, diff_gradebooks
from .frames import changeset_frame, assignments_frame
from .pairing import pair

__all__ = [
    "Changeset",
    "CourseChanges",
    "AssignmentChanges",
    "diff_gradebooks",
    "changeset_frame",
    "assignments_frame",
    "pair",
]
