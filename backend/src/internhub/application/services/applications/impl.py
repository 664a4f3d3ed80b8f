"""
Application Service Implementation
Concrete implementation of IApplicationService
"""
from datetime import date, datetime
from typing import Callable, Dict, List, Optional

from loguru import logger

from internhub.application.repositories.interfaces import IPlacementRegistry, IUserDirectory
from internhub.application.services.access import AccessGuard
from internhub.application.services.slot_allocator import SlotAllocator
from internhub.core.config import settings
from internhub.core.exceptions import (
    ApplicationLimitException,
    CapacityExceededException,
    DuplicateResourceException,
    InvalidTransitionException,
    ValidationException,
)
from internhub.domain.entities import Application, Internship
from internhub.domain.enums import ApplicationAction, ApplicationStatus
from internhub.domain.policies import is_visible_to_student
from internhub.domain.projections import ApplicationSummary
from internhub.domain.transitions import next_application_status
from .interfaces import IApplicationService

# Leaving or returning to these statuses can change an internship's occupancy
SLOT_RELEVANT_STATUSES = frozenset({ApplicationStatus.ACCEPTED, ApplicationStatus.SUCCESSFUL})


class ApplicationService(IApplicationService):
    """Application lifecycle engine"""

    def __init__(
        self,
        registry: IPlacementRegistry,
        user_directory: IUserDirectory,
        slots: SlotAllocator,
        today: Callable[[], date] = date.today,
        now: Callable[[], datetime] = datetime.now,
        max_active_applications: int = settings.MAX_ACTIVE_APPLICATIONS_PER_STUDENT,
        senior_min_year: int = settings.SENIOR_LEVEL_MIN_YEAR,
    ):
        self.registry = registry
        self.guard = AccessGuard(user_directory, registry)
        self.slots = slots
        self.today = today
        self.now = now
        self.max_active_applications = max_active_applications
        self.senior_min_year = senior_min_year

    async def submit_application(self, student_id: str, internship_id: int) -> Application:
        """Submit a new application"""

        student = self.guard.student(student_id)
        internship = self.guard.internship(internship_id)

        async with self.slots.student(student.id):
            async with self.slots.internships([internship.id]):
                if not is_visible_to_student(internship, student, self.today(), self.senior_min_year):
                    logger.warning(f"Student {student.id} not eligible for internship {internship.id}")
                    raise ValidationException(
                        "internship_id",
                        "Internship is not open to this student (check major, year of study, dates or visibility)"
                    )

                mine = self.registry.applications_for_student(student.id)

                if any(app.occupies_slot() for app in mine):
                    raise ValidationException("student_id", "Student already holds an accepted placement")

                if any(app.internship_id == internship.id and app.is_active() for app in mine):
                    raise DuplicateResourceException("Application", "internship_id", internship.id)

                active = sum(1 for app in mine if app.is_active())
                if active >= self.max_active_applications:
                    logger.warning(f"Student {student.id} already has {active} active applications")
                    raise ApplicationLimitException(self.max_active_applications)

                application = Application(
                    id=self.registry.next_application_id(),
                    internship_id=internship.id,
                    student_id=student.id,
                    date_applied=self.now(),
                )
                self.registry.add_application(application)

                await self.slots.persist(applications=[application])

        logger.info(f"Student {student.id} applied to internship {internship.id} (application {application.id})")
        return application

    async def approve_application(self, representative_id: str, application_id: int) -> Application:
        representative = self.guard.representative(representative_id)
        application = self.guard.application_for_owner(representative, application_id)
        return await self._simple_transition(application, ApplicationAction.APPROVE, representative.id)

    async def reject_application(self, representative_id: str, application_id: int) -> Application:
        representative = self.guard.representative(representative_id)
        application = self.guard.application_for_owner(representative, application_id)
        return await self._simple_transition(application, ApplicationAction.REJECT, representative.id)

    async def accept_application(self, student_id: str, application_id: int) -> Application:
        student = self.guard.student(student_id)
        application = self.guard.owned_application(student, application_id)
        return await self._accept(application, student.id)

    async def confirm_placement(self, representative_id: str, application_id: int) -> Application:
        """Approve a pending application, or accept a successful one"""

        representative = self.guard.representative(representative_id)
        application = self.guard.application_for_owner(representative, application_id)

        if application.status == ApplicationStatus.PENDING:
            return await self._simple_transition(application, ApplicationAction.APPROVE, representative.id)
        if application.status == ApplicationStatus.SUCCESSFUL:
            return await self._accept(application, representative.id)

        logger.warning(
            f"Cannot confirm placement for application {application.id} with status {application.status.value}"
        )
        raise InvalidTransitionException("application", application.status, "confirm placement")

    async def reject_placement(self, student_id: str, application_id: int) -> Application:
        student = self.guard.student(student_id)
        application = self.guard.owned_application(student, application_id)

        async with self.slots.student(student.id):
            async with self.slots.internships([application.internship_id]):
                internship = self.guard.internship(application.internship_id)
                before = self._transition(application, ApplicationAction.REJECT_PLACEMENT)

                touched: List[Internship] = []
                if before == ApplicationStatus.ACCEPTED:
                    self.slots.recount([internship])
                    touched.append(internship)

                await self.slots.persist(applications=[application], internships=touched)

        logger.info(f"Student {student.id} rejected placement {application.id} (was {before.value})")
        return application

    async def request_withdrawal(
        self,
        student_id: str,
        application_id: int,
        reason: Optional[str] = None
    ) -> Application:
        student = self.guard.student(student_id)
        application = self.guard.owned_application(student, application_id)
        return await self._simple_transition(
            application, ApplicationAction.REQUEST_WITHDRAWAL, student.id, reason=reason
        )

    async def approve_withdrawal(self, staff_id: str, application_id: int) -> Application:
        staff = self.guard.staff(staff_id)
        application = self.guard.application(application_id)

        async with self.slots.student(application.student_id):
            async with self.slots.internships([application.internship_id]):
                internship = self.guard.internship(application.internship_id)
                previous = application.previous_status
                self._transition(application, ApplicationAction.APPROVE_WITHDRAWAL)

                touched: List[Internship] = []
                if previous in SLOT_RELEVANT_STATUSES:
                    self.slots.recount([internship])
                    touched.append(internship)

                await self.slots.persist(applications=[application], internships=touched)

        logger.info(f"Staff {staff.id} approved withdrawal of application {application.id}")
        return application

    async def reject_withdrawal(self, staff_id: str, application_id: int) -> Application:
        staff = self.guard.staff(staff_id)
        application = self.guard.application(application_id)

        async with self.slots.student(application.student_id):
            async with self.slots.internships([application.internship_id]):
                internship = self.guard.internship(application.internship_id)
                self._transition(application, ApplicationAction.REJECT_WITHDRAWAL)

                touched: List[Internship] = []
                if application.status in SLOT_RELEVANT_STATUSES:
                    self.slots.recount([internship])
                    touched.append(internship)

                await self.slots.persist(applications=[application], internships=touched)

        logger.info(
            f"Staff {staff.id} rejected withdrawal of application {application.id}, "
            f"restored to {application.status.value}"
        )
        return application

    def applications_for_student(self, student_id: str) -> List[ApplicationSummary]:
        student = self.guard.student(student_id)
        return [self._summary(app) for app in self.registry.applications_for_student(student.id)]

    def applications_for_internship(self, representative_id: str, internship_id: int) -> List[ApplicationSummary]:
        representative = self.guard.representative(representative_id)
        internship = self.guard.owned_internship(representative, internship_id)
        return [ApplicationSummary.from_entity(app, internship) for app in internship.applications]

    def withdrawal_requests(self, staff_id: str) -> List[ApplicationSummary]:
        self.guard.staff(staff_id)
        return [
            self._summary(app)
            for app in self.registry.all_applications()
            if app.status == ApplicationStatus.WITHDRAWAL_REQUESTED
        ]

    async def _accept(self, application: Application, actor_id: str) -> Application:
        """
        Successful -> Accepted, withdrawing the student's other applications.

        Every internship whose occupancy changes is recounted and saved.
        """
        async with self.slots.student(application.student_id):
            others = [
                app for app in self.registry.applications_for_student(application.student_id)
                if app.id != application.id
            ]
            internship_ids = {application.internship_id} | {app.internship_id for app in others}

            async with self.slots.internships(internship_ids):
                self._ensure_allowed(application, ApplicationAction.ACCEPT)

                internship = self.guard.internship(application.internship_id)
                if internship.occupied_slots() >= internship.num_slots:
                    logger.warning(f"Internship {internship.id} is full, cannot accept application {application.id}")
                    raise CapacityExceededException(internship.id, internship.num_slots)

                self._transition(application, ApplicationAction.ACCEPT)

                touched_applications = [application]
                affected: Dict[int, Internship] = {internship.id: internship}
                for other in others:
                    if other.is_terminal():
                        continue
                    held_slot = other.occupies_slot()
                    other.transition(ApplicationAction.FORCE_WITHDRAW)
                    touched_applications.append(other)
                    if held_slot:
                        affected[other.internship_id] = self.guard.internship(other.internship_id)

                self.slots.recount(affected.values())
                await self.slots.persist(
                    applications=touched_applications,
                    internships=affected.values(),
                )

        logger.info(
            f"Application {application.id} accepted by {actor_id}; "
            f"withdrew {len(touched_applications) - 1} other applications of student {application.student_id}"
        )
        return application

    async def _simple_transition(
        self,
        application: Application,
        action: ApplicationAction,
        actor_id: str,
        reason: Optional[str] = None,
    ) -> Application:
        """A transition with no slot side effect"""
        async with self.slots.student(application.student_id):
            async with self.slots.internships([application.internship_id]):
                before = self._transition(application, action, reason)
                await self.slots.persist(applications=[application])

        logger.info(
            f"Application {application.id}: {before.value} -> {application.status.value} "
            f"({action.value} by {actor_id})"
        )
        return application

    def _ensure_allowed(self, application: Application, action: ApplicationAction) -> None:
        try:
            next_application_status(application.status, action, application.previous_status)
        except InvalidTransitionException:
            logger.warning(f"Rejected {action.value} on application {application.id} ({application.status.value})")
            raise

    def _transition(
        self,
        application: Application,
        action: ApplicationAction,
        reason: Optional[str] = None,
    ) -> ApplicationStatus:
        self._ensure_allowed(application, action)
        return application.transition(action, reason)

    def _summary(self, application: Application) -> ApplicationSummary:
        return ApplicationSummary.from_entity(
            application, self.guard.internship(application.internship_id)
        )
