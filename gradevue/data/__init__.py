from .client import PortalClient
from .decoder import decode_gradebook, parse_gradebook
from .events import EventCursor, tokenize
from .models import Gradebook, Course, Mark, Assignment

__all__ = [
    "PortalClient",
    "decode_gradebook",
    "parse_gradebook",
    "EventCursor",
    "tokenize",
    "Gradebook",
    "Course",
    "Mark",
    "Assignment",
]
