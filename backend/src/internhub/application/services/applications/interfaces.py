"""
Application Service Interface
Student, company and staff actions on applications
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from internhub.domain.entities import Application
from internhub.domain.projections import ApplicationSummary


class IApplicationService(ABC):
    """Lifecycle engine for applications and placements"""

    @abstractmethod
    async def submit_application(self, student_id: str, internship_id: int) -> Application:
        """
        Submit a new Pending application to an eligible internship

        Raises:
            ResourceNotFoundException, AuthorizationException, ValidationException,
            DuplicateResourceException, ApplicationLimitException
        """
        pass

    @abstractmethod
    async def approve_application(self, representative_id: str, application_id: int) -> Application:
        """Pending -> Successful (posting owner)"""
        pass

    @abstractmethod
    async def reject_application(self, representative_id: str, application_id: int) -> Application:
        """Pending -> Unsuccessful (posting owner)"""
        pass

    @abstractmethod
    async def accept_application(self, student_id: str, application_id: int) -> Application:
        """
        Successful -> Accepted (applicant)

        Withdraws the student's other active applications and recounts slots.
        """
        pass

    @abstractmethod
    async def confirm_placement(self, representative_id: str, application_id: int) -> Application:
        """Pending -> Successful, or Successful -> Accepted with the accept cascade (posting owner)"""
        pass

    @abstractmethod
    async def reject_placement(self, student_id: str, application_id: int) -> Application:
        """Successful or Accepted -> Unsuccessful (applicant)"""
        pass

    @abstractmethod
    async def request_withdrawal(
        self,
        student_id: str,
        application_id: int,
        reason: Optional[str] = None
    ) -> Application:
        """Pending, Successful or Accepted -> WithdrawalRequested (applicant)"""
        pass

    @abstractmethod
    async def approve_withdrawal(self, staff_id: str, application_id: int) -> Application:
        """WithdrawalRequested -> Withdrawn (staff)"""
        pass

    @abstractmethod
    async def reject_withdrawal(self, staff_id: str, application_id: int) -> Application:
        """WithdrawalRequested -> previous status (staff)"""
        pass

    @abstractmethod
    def applications_for_student(self, student_id: str) -> List[ApplicationSummary]:
        """The student's own applications, by id"""
        pass

    @abstractmethod
    def applications_for_internship(self, representative_id: str, internship_id: int) -> List[ApplicationSummary]:
        """Applications on one of the representative's postings"""
        pass

    @abstractmethod
    def withdrawal_requests(self, staff_id: str) -> List[ApplicationSummary]:
        """Applications awaiting a staff withdrawal decision"""
        pass
