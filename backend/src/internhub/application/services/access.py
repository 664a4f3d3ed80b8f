"""
Access Guard
Resolves callers and records, enforcing roles before any mutation
"""
from typing import Type, TypeVar

from loguru import logger

from internhub.application.repositories.interfaces import IPlacementRegistry, IUserDirectory
from internhub.core.exceptions import AuthorizationException, ResourceNotFoundException
from internhub.domain.entities import (
    Application,
    CompanyRepresentative,
    Internship,
    Staff,
    Student,
    User,
)

U = TypeVar("U", bound=User)


class AccessGuard:
    """Lookups that raise instead of returning None"""

    def __init__(self, user_directory: IUserDirectory, registry: IPlacementRegistry):
        self.users = user_directory
        self.registry = registry

    def user(self, user_id: str) -> User:
        user = self.users.get_by_id(user_id)
        if user is None:
            raise ResourceNotFoundException("User", user_id)
        return user

    def _user_of_role(self, user_id: str, role_cls: Type[U], label: str) -> U:
        user = self.user(user_id)
        if not isinstance(user, role_cls):
            logger.warning(f"User {user_id} ({user.role.value}) attempted a {label}-only action")
            raise AuthorizationException(f"User {user_id} is not a {label}")
        return user

    def student(self, user_id: str) -> Student:
        return self._user_of_role(user_id, Student, "student")

    def representative(self, user_id: str) -> CompanyRepresentative:
        return self._user_of_role(user_id, CompanyRepresentative, "company representative")

    def staff(self, user_id: str) -> Staff:
        return self._user_of_role(user_id, Staff, "staff member")

    def internship(self, internship_id: int) -> Internship:
        internship = self.registry.get_internship(internship_id)
        if internship is None:
            raise ResourceNotFoundException("Internship", internship_id)
        return internship

    def application(self, application_id: int) -> Application:
        application = self.registry.get_application(application_id)
        if application is None:
            raise ResourceNotFoundException("Application", application_id)
        return application

    def owned_internship(self, representative: CompanyRepresentative, internship_id: int) -> Internship:
        internship = self.internship(internship_id)
        if not internship.is_owned_by(representative.id):
            logger.warning(f"Representative {representative.id} does not own internship {internship_id}")
            raise AuthorizationException(
                f"Internship {internship_id} is not owned by {representative.id}"
            )
        return internship

    def owned_application(self, student: Student, application_id: int) -> Application:
        application = self.application(application_id)
        if application.student_id != student.id:
            logger.warning(f"Student {student.id} does not own application {application_id}")
            raise AuthorizationException(
                f"Application {application_id} does not belong to {student.id}"
            )
        return application

    def application_for_owner(self, representative: CompanyRepresentative, application_id: int) -> Application:
        """Application on one of the representative's postings"""
        application = self.application(application_id)
        self.owned_internship(representative, application.internship_id)
        return application
