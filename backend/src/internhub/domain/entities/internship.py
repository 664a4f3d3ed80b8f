"""
Internship Domain Entity
A company's posting with slot accounting and approval status
"""
from dataclasses import dataclass, field
from datetime import date
from typing import List

from ..enums import InternshipLevel, InternshipStatus
from ..value_objects import PostingWindow, SlotCapacity
from .application import Application


@dataclass
class Internship:
    """Internship posting domain entity"""

    id: int
    title: str
    description: str
    level: InternshipLevel
    preferred_major: str
    open_date: date
    close_date: date
    company_name: str
    creator_id: str
    num_slots: int

    # Independent of status; students only see it while Approved
    visible: bool = False
    filled_slots: int = 0
    status: InternshipStatus = InternshipStatus.PENDING

    # Linked by the registry, in submission order
    applications: List[Application] = field(default_factory=list, repr=False, compare=False)

    @property
    def window(self) -> PostingWindow:
        return PostingWindow(self.open_date, self.close_date)

    def is_editable(self) -> bool:
        """Fields can change only before approval (or after rejection)"""
        return self.status in {InternshipStatus.PENDING, InternshipStatus.REJECTED}

    def is_full(self) -> bool:
        return self.filled_slots >= self.num_slots

    def is_open_on(self, day: date) -> bool:
        return self.window.contains(day)

    def is_owned_by(self, user_id: str) -> bool:
        return self.creator_id == user_id

    def add_application(self, application: Application) -> None:
        if application.internship_id != self.id:
            raise ValueError(
                f"Application {application.id} belongs to internship {application.internship_id}, not {self.id}"
            )
        self.applications.append(application)

    def has_applied(self, student_id: str) -> bool:
        return any(app.student_id == student_id for app in self.applications)

    def occupied_slots(self) -> int:
        """Authoritative count of slot-holding applications"""
        return sum(1 for app in self.applications if app.occupies_slot())

    def recount_slots(self) -> bool:
        """
        Re-derive filled_slots and the Filled status from the applications

        Stored records may hold more slot-holding applications than slots;
        filled_slots is clamped to num_slots so the posting reads as Filled.

        Returns:
            True if filled_slots or status changed
        """
        total = max(self.num_slots, 0)
        capacity = SlotCapacity(total, min(self.occupied_slots(), total))
        before = (self.filled_slots, self.status)

        self.filled_slots = capacity.filled
        if capacity.is_full() and self.status in {InternshipStatus.APPROVED, InternshipStatus.FILLED}:
            self.status = InternshipStatus.FILLED
        elif self.status == InternshipStatus.FILLED:
            self.status = InternshipStatus.APPROVED

        return before != (self.filled_slots, self.status)

    def __str__(self) -> str:
        return f"Internship({self.id}, {self.title} at {self.company_name}, {self.status.value})"
