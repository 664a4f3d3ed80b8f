"""
Domain Enums
Business enumerations for postings, applications and users
"""
from enum import Enum
from typing import FrozenSet


class InternshipLevel(str, Enum):
    """Difficulty level of an internship posting"""
    BASIC = "Basic"
    INTERMEDIATE = "Intermediate"
    ADVANCED = "Advanced"

    @classmethod
    def parse(cls, value: str) -> "InternshipLevel":
        """Case-insensitive lookup ('advanced' -> ADVANCED)"""
        for level in cls:
            if level.value.lower() == (value or "").strip().lower():
                return level
        raise ValueError(f"Level must be Basic, Intermediate, or Advanced, got {value!r}")


class InternshipStatus(str, Enum):
    """Approval lifecycle of an internship posting"""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
    FILLED = "Filled"  # derived from slot recount only


class ApplicationStatus(str, Enum):
    """Status of a student's application"""
    PENDING = "Pending"
    SUCCESSFUL = "Successful"
    ACCEPTED = "Accepted"
    UNSUCCESSFUL = "Unsuccessful"
    WITHDRAWAL_REQUESTED = "WithdrawalRequested"
    WITHDRAWN = "Withdrawn"


TERMINAL_APPLICATION_STATUSES: FrozenSet[ApplicationStatus] = frozenset({
    ApplicationStatus.UNSUCCESSFUL,
    ApplicationStatus.WITHDRAWN,
})


class ApplicationAction(str, Enum):
    """Triggers of the application state machine"""
    APPROVE = "approve"
    REJECT = "reject"
    ACCEPT = "accept"
    REJECT_PLACEMENT = "reject placement"
    REQUEST_WITHDRAWAL = "request withdrawal"
    APPROVE_WITHDRAWAL = "approve withdrawal"
    REJECT_WITHDRAWAL = "reject withdrawal"
    FORCE_WITHDRAW = "force withdraw"


class InternshipAction(str, Enum):
    """Triggers of the internship approval lifecycle"""
    APPROVE = "approve"
    REJECT = "reject"
    EDIT = "edit"
    DELETE = "delete"
    RESUBMIT = "resubmit"
    TOGGLE_VISIBILITY = "toggle visibility"


class UserRole(str, Enum):
    """Kinds of user known to the directory"""
    STUDENT = "Student"
    COMPANY_REPRESENTATIVE = "CompanyRepresentative"
    STAFF = "Staff"


class RepresentativeApprovalStatus(str, Enum):
    """Staff approval of a company representative account"""
    PENDING = "Pending"
    APPROVED = "Approved"
    REJECTED = "Rejected"
