"""
User Domain Entities
Immutable user business objects, one class per role
"""
from dataclasses import dataclass

from ..enums import RepresentativeApprovalStatus, UserRole
from ..value_objects import Email


@dataclass(frozen=True)
class User:
    """User domain entity - immutable"""

    id: str
    name: str
    email: Email

    def __post_init__(self):
        """Validate user data"""
        if not self.id or len(self.id.strip()) == 0:
            raise ValueError("User id cannot be empty")
        if not self.name or len(self.name.strip()) == 0:
            raise ValueError("Name cannot be empty")

    @property
    def role(self) -> UserRole:
        raise NotImplementedError

    def __str__(self) -> str:
        return f"{self.role.value}({self.id}, {self.name})"


@dataclass(frozen=True)
class Student(User):
    year_of_study: int
    major: str

    def __post_init__(self):
        super().__post_init__()
        if not 1 <= self.year_of_study <= 4:
            raise ValueError(f"Year of study must be between 1 and 4, got {self.year_of_study}")

    @property
    def role(self) -> UserRole:
        return UserRole.STUDENT


@dataclass(frozen=True)
class CompanyRepresentative(User):
    company_name: str
    department: str = ""
    position: str = ""
    approval_status: RepresentativeApprovalStatus = RepresentativeApprovalStatus.PENDING

    @property
    def role(self) -> UserRole:
        return UserRole.COMPANY_REPRESENTATIVE

    def is_approved(self) -> bool:
        """Only approved representatives may post internships"""
        return self.approval_status == RepresentativeApprovalStatus.APPROVED


@dataclass(frozen=True)
class Staff(User):
    department: str = ""

    @property
    def role(self) -> UserRole:
        return UserRole.STAFF
