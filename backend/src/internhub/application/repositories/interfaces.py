"""
Repository Interfaces (Abstract Base Classes)
Define contracts for data access without implementation details
"""
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, List

from internhub.domain.entities import User, Internship, Application


@dataclass
class LoadedRecords:
    """Everything the gateway read from storage, internships first"""
    internships: List[Internship] = field(default_factory=list)
    applications: List[Application] = field(default_factory=list)


class IUserDirectory(ABC):
    """Read-only lookup of users by id"""

    @abstractmethod
    def get_by_id(self, user_id: str) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    def all_users(self) -> List[User]:
        """All known users"""
        pass


class IPlacementRegistry(ABC):
    """In-memory working set of internships and applications"""

    @abstractmethod
    def get_internship(self, internship_id: int) -> Optional[Internship]:
        """Get internship by ID"""
        pass

    @abstractmethod
    def all_internships(self) -> List[Internship]:
        """All internships in id order"""
        pass

    @abstractmethod
    def add_internship(self, internship: Internship) -> Internship:
        """Register a new internship"""
        pass

    @abstractmethod
    def remove_internship(self, internship_id: int) -> bool:
        """Drop an internship from the working set"""
        pass

    @abstractmethod
    def get_application(self, application_id: int) -> Optional[Application]:
        """Get application by ID"""
        pass

    @abstractmethod
    def all_applications(self) -> List[Application]:
        """All applications in id order"""
        pass

    @abstractmethod
    def add_application(self, application: Application) -> Application:
        """Register a new application and link it to its internship"""
        pass

    @abstractmethod
    def applications_for_student(self, student_id: str) -> List[Application]:
        """Applications submitted by one student"""
        pass

    @abstractmethod
    def next_internship_id(self) -> int:
        """Allocate the next internship id"""
        pass

    @abstractmethod
    def next_application_id(self) -> int:
        """Allocate the next application id"""
        pass

    @abstractmethod
    def replace(self, records: LoadedRecords) -> None:
        """Discard the working set and adopt freshly loaded records"""
        pass


class IRecordGateway(ABC):
    """Persistence gateway; every call completes (or raises) before returning"""

    @abstractmethod
    async def load(self) -> LoadedRecords:
        """Read all internships, then all applications"""
        pass

    @abstractmethod
    async def load_users(self) -> List[User]:
        """Read all users for the directory"""
        pass

    @abstractmethod
    async def save_internship(self, internship: Internship) -> None:
        """Insert or update an internship by id"""
        pass

    @abstractmethod
    async def save_application(self, application: Application) -> None:
        """Insert or update an application by id"""
        pass

    @abstractmethod
    async def delete_internship(self, internship_id: int) -> None:
        """Remove an internship record"""
        pass

    @abstractmethod
    async def save_user(self, user: User) -> None:
        """Insert or update a user by id"""
        pass
