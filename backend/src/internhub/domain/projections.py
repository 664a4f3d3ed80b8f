"""
Read-only Projections
Flat summary views handed to the presentation layer
"""
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Dict, Optional

from .entities import Application, Internship


@dataclass(frozen=True)
class InternshipSummary:
    id: int
    title: str
    description: str
    company_name: str
    level: str
    preferred_major: str
    open_date: date
    close_date: date
    status: str
    visible: bool
    num_slots: int
    filled_slots: int

    @property
    def availability(self) -> str:
        return "Filled" if self.filled_slots >= self.num_slots else "Available"

    @classmethod
    def from_entity(cls, internship: Internship) -> "InternshipSummary":
        return cls(
            id=internship.id,
            title=internship.title,
            description=internship.description,
            company_name=internship.company_name,
            level=internship.level.value,
            preferred_major=internship.preferred_major,
            open_date=internship.open_date,
            close_date=internship.close_date,
            status=internship.status.value,
            visible=internship.visible,
            num_slots=internship.num_slots,
            filled_slots=internship.filled_slots,
        )


@dataclass(frozen=True)
class ApplicationSummary:
    id: int
    internship_id: int
    internship_title: str
    student_id: str
    date_applied: datetime
    status: str
    previous_status: Optional[str] = None
    withdrawal_reason: Optional[str] = None

    @classmethod
    def from_entity(cls, application: Application, internship: Internship) -> "ApplicationSummary":
        return cls(
            id=application.id,
            internship_id=application.internship_id,
            internship_title=internship.title,
            student_id=application.student_id,
            date_applied=application.date_applied,
            status=application.status.value,
            previous_status=application.previous_status.value if application.previous_status else None,
            withdrawal_reason=application.withdrawal_reason,
        )


@dataclass(frozen=True)
class PlacementReport:
    """Counts across the whole working set"""
    total_internships: int
    total_applications: int
    total_slots: int
    filled_slots: int
    internships_by_status: Dict[str, int] = field(default_factory=dict)
    internships_by_level: Dict[str, int] = field(default_factory=dict)
    applications_by_status: Dict[str, int] = field(default_factory=dict)

    @property
    def fill_rate(self) -> float:
        if self.total_slots == 0:
            return 0.0
        return self.filled_slots / self.total_slots
