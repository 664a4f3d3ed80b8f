"""
Application Domain Entity
A student's application to one internship posting
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..enums import ApplicationAction, ApplicationStatus, TERMINAL_APPLICATION_STATUSES
from ..transitions import next_application_status


@dataclass
class Application:
    """Application domain entity - status changes only through transition()"""

    id: int
    internship_id: int
    student_id: str
    date_applied: datetime

    status: ApplicationStatus = ApplicationStatus.PENDING
    # Status held before a withdrawal request, None otherwise
    previous_status: Optional[ApplicationStatus] = None
    withdrawal_reason: Optional[str] = None

    def transition(self, action: ApplicationAction, reason: Optional[str] = None) -> ApplicationStatus:
        """
        Apply one action of the application state machine

        Returns:
            The status held before the action
        """
        before = self.status
        after = next_application_status(before, action, self.previous_status)

        if after == ApplicationStatus.WITHDRAWAL_REQUESTED:
            self.previous_status = before
            self.withdrawal_reason = (reason or "").strip() or None
        elif before == ApplicationStatus.WITHDRAWAL_REQUESTED:
            self.previous_status = None
            self.withdrawal_reason = None

        self.status = after
        return before

    def is_pending(self) -> bool:
        return self.status == ApplicationStatus.PENDING

    def is_terminal(self) -> bool:
        """Unsuccessful and Withdrawn never move again"""
        return self.status in TERMINAL_APPLICATION_STATUSES

    def is_active(self) -> bool:
        return not self.is_terminal()

    def occupies_slot(self) -> bool:
        """Accepted placements hold a slot, also while their withdrawal awaits staff"""
        if self.status == ApplicationStatus.ACCEPTED:
            return True
        return (
            self.status == ApplicationStatus.WITHDRAWAL_REQUESTED
            and self.previous_status == ApplicationStatus.ACCEPTED
        )

    def __str__(self) -> str:
        return f"Application({self.id}, internship={self.internship_id}, status={self.status.value})"
