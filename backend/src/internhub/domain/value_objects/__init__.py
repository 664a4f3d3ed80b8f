"""Value Objects - Immutable objects defined by their attributes"""

from .email import Email
from .posting_window import PostingWindow
from .slot_capacity import SlotCapacity
__all__ = [
    "Email",
    "PostingWindow",
    "SlotCapacity",
]
