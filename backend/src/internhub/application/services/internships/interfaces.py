"""
Internship Service Interface
Posting lifecycle for company representatives and staff
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from internhub.domain.entities import Internship
from internhub.domain.projections import InternshipSummary


@dataclass(frozen=True)
class InternshipDetails:
    """Editable fields of a posting"""
    title: str
    description: str
    level: str
    preferred_major: str
    open_date: date
    close_date: date
    num_slots: int


@dataclass(frozen=True)
class InternshipChanges:
    """Partial edit; None keeps the current value"""
    title: Optional[str] = None
    description: Optional[str] = None
    level: Optional[str] = None
    preferred_major: Optional[str] = None
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    num_slots: Optional[int] = None


class IInternshipService(ABC):
    """Lifecycle engine for internship postings"""

    @abstractmethod
    async def create_internship(self, representative_id: str, details: InternshipDetails) -> Internship:
        """
        Create a Pending posting

        Raises:
            AuthorizationException: caller is not an approved representative
            ValidationException: a field is invalid
            PostingLimitException: open posting cap reached
        """
        pass

    @abstractmethod
    async def edit_internship(
        self,
        representative_id: str,
        internship_id: int,
        changes: InternshipChanges
    ) -> Internship:
        """Edit a Pending posting; editing a Rejected one resubmits it"""
        pass

    @abstractmethod
    async def delete_internship(self, representative_id: str, internship_id: int) -> None:
        """Delete a Pending or Rejected posting"""
        pass

    @abstractmethod
    async def resubmit_internship(self, representative_id: str, internship_id: int) -> Internship:
        """Rejected -> Pending"""
        pass

    @abstractmethod
    async def approve_internship(self, staff_id: str, internship_id: int) -> Internship:
        """Pending -> Approved, visibility on"""
        pass

    @abstractmethod
    async def reject_internship(self, staff_id: str, internship_id: int) -> Internship:
        """Pending -> Rejected, visibility off"""
        pass

    @abstractmethod
    async def toggle_visibility(self, representative_id: str, internship_id: int) -> bool:
        """Flip visibility of an Approved posting; no-op otherwise. Returns the flag."""
        pass

    @abstractmethod
    def visible_internships(self, student_id: str) -> List[InternshipSummary]:
        """Postings the student can currently see, by title"""
        pass

    @abstractmethod
    def internships_by_creator(self, representative_id: str) -> List[InternshipSummary]:
        """The representative's own postings"""
        pass

    @abstractmethod
    def pending_internships(self, staff_id: str) -> List[InternshipSummary]:
        """Postings awaiting staff approval"""
        pass

    @abstractmethod
    def all_internships(self, staff_id: str) -> List[InternshipSummary]:
        """Every posting (staff view)"""
        pass

    @abstractmethod
    def internship_details(self, user_id: str, internship_id: int) -> InternshipSummary:
        """One posting, if the caller may view it"""
        pass
