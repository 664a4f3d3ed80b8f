"""
Internship Service Implementation
Concrete implementation of IInternshipService
"""
from dataclasses import asdict, replace
from datetime import date
from typing import Callable, List

from loguru import logger

from internhub.application.repositories.interfaces import IPlacementRegistry, IUserDirectory
from internhub.application.services.access import AccessGuard
from internhub.application.services.slot_allocator import SlotAllocator
from internhub.core.config import settings
from internhub.core.exceptions import (
    AuthorizationException,
    InvalidTransitionException,
    PostingLimitException,
    ValidationException,
)
from internhub.domain.entities import CompanyRepresentative, Internship, Staff, Student
from internhub.domain.enums import InternshipAction, InternshipLevel, InternshipStatus
from internhub.domain.policies import can_view_details, is_visible_to_student
from internhub.domain.projections import InternshipSummary
from internhub.domain.transitions import next_internship_status
from .interfaces import IInternshipService, InternshipChanges, InternshipDetails

# Postings that count against a representative's cap
OPEN_STATUSES = frozenset({InternshipStatus.PENDING, InternshipStatus.APPROVED, InternshipStatus.FILLED})


class InternshipService(IInternshipService):
    """Internship posting lifecycle engine"""

    def __init__(
        self,
        registry: IPlacementRegistry,
        user_directory: IUserDirectory,
        slots: SlotAllocator,
        today: Callable[[], date] = date.today,
        max_postings: int = settings.MAX_POSTINGS_PER_REPRESENTATIVE,
        min_slots: int = settings.MIN_SLOTS,
        max_slots: int = settings.MAX_SLOTS,
        senior_min_year: int = settings.SENIOR_LEVEL_MIN_YEAR,
    ):
        self.registry = registry
        self.guard = AccessGuard(user_directory, registry)
        self.slots = slots
        self.today = today
        self.max_postings = max_postings
        self.min_slots = min_slots
        self.max_slots = max_slots
        self.senior_min_year = senior_min_year

    async def create_internship(self, representative_id: str, details: InternshipDetails) -> Internship:
        """Create a new posting awaiting staff approval"""

        representative = self.guard.representative(representative_id)
        if not representative.is_approved():
            logger.warning(f"Unapproved representative {representative.id} tried to post an internship")
            raise AuthorizationException("Company representative must be approved to create internships")

        level = self._validate(details)

        async with self.slots.creator(representative.id):
            open_postings = [
                i for i in self.registry.all_internships()
                if i.is_owned_by(representative.id) and i.status in OPEN_STATUSES
            ]
            if len(open_postings) >= self.max_postings:
                logger.warning(f"Representative {representative.id} reached the posting cap ({self.max_postings})")
                raise PostingLimitException(self.max_postings)

            internship = Internship(
                id=self.registry.next_internship_id(),
                title=details.title.strip(),
                description=details.description.strip(),
                level=level,
                preferred_major=details.preferred_major.strip(),
                open_date=details.open_date,
                close_date=details.close_date,
                company_name=representative.company_name,
                creator_id=representative.id,
                num_slots=details.num_slots,
            )
            self.registry.add_internship(internship)
            await self.slots.persist(internships=[internship])

        logger.info(f"Representative {representative.id} created internship {internship.id} ({internship.title})")
        return internship

    async def edit_internship(
        self,
        representative_id: str,
        internship_id: int,
        changes: InternshipChanges
    ) -> Internship:
        representative = self.guard.representative(representative_id)
        internship = self.guard.owned_internship(representative, internship_id)

        async with self.slots.internships([internship.id]):
            target = self._next_status(internship, InternshipAction.EDIT)

            current = InternshipDetails(
                title=internship.title,
                description=internship.description,
                level=internship.level.value,
                preferred_major=internship.preferred_major,
                open_date=internship.open_date,
                close_date=internship.close_date,
                num_slots=internship.num_slots,
            )
            merged = replace(current, **{k: v for k, v in asdict(changes).items() if v is not None})
            level = self._validate(merged)

            resubmitted = internship.status == InternshipStatus.REJECTED
            internship.title = merged.title.strip()
            internship.description = merged.description.strip()
            internship.level = level
            internship.preferred_major = merged.preferred_major.strip()
            internship.open_date = merged.open_date
            internship.close_date = merged.close_date
            internship.num_slots = merged.num_slots
            internship.status = target
            internship.visible = False

            await self.slots.persist(internships=[internship])

        logger.info(
            f"Representative {representative.id} edited internship {internship.id}"
            + (" (resubmitted)" if resubmitted else "")
        )
        return internship

    async def delete_internship(self, representative_id: str, internship_id: int) -> None:
        representative = self.guard.representative(representative_id)
        internship = self.guard.owned_internship(representative, internship_id)

        async with self.slots.internships([internship.id]):
            self._next_status(internship, InternshipAction.DELETE)
            self.registry.remove_internship(internship.id)
            await self.slots.gateway.delete_internship(internship.id)

        logger.info(f"Representative {representative.id} deleted internship {internship.id}")

    async def resubmit_internship(self, representative_id: str, internship_id: int) -> Internship:
        representative = self.guard.representative(representative_id)
        internship = self.guard.owned_internship(representative, internship_id)
        return await self._move(internship, InternshipAction.RESUBMIT, representative.id, visible=False)

    async def approve_internship(self, staff_id: str, internship_id: int) -> Internship:
        staff = self.guard.staff(staff_id)
        internship = self.guard.internship(internship_id)
        return await self._move(internship, InternshipAction.APPROVE, staff.id, visible=True)

    async def reject_internship(self, staff_id: str, internship_id: int) -> Internship:
        staff = self.guard.staff(staff_id)
        internship = self.guard.internship(internship_id)
        return await self._move(internship, InternshipAction.REJECT, staff.id, visible=False)

    async def toggle_visibility(self, representative_id: str, internship_id: int) -> bool:
        representative = self.guard.representative(representative_id)
        internship = self.guard.owned_internship(representative, internship_id)

        async with self.slots.internships([internship.id]):
            if internship.status != InternshipStatus.APPROVED:
                logger.warning(
                    f"Visibility of internship {internship.id} unchanged: status is {internship.status.value}"
                )
                return internship.visible

            internship.visible = not internship.visible
            await self.slots.persist(internships=[internship])

        logger.info(f"Internship {internship.id} visibility set to {internship.visible}")
        return internship.visible

    def visible_internships(self, student_id: str) -> List[InternshipSummary]:
        student = self.guard.student(student_id)
        today = self.today()
        visible = [
            i for i in self.registry.all_internships()
            if is_visible_to_student(i, student, today, self.senior_min_year)
        ]
        return [InternshipSummary.from_entity(i) for i in sorted(visible, key=lambda i: i.title.lower())]

    def internships_by_creator(self, representative_id: str) -> List[InternshipSummary]:
        representative = self.guard.representative(representative_id)
        return [
            InternshipSummary.from_entity(i)
            for i in self.registry.all_internships()
            if i.is_owned_by(representative.id)
        ]

    def pending_internships(self, staff_id: str) -> List[InternshipSummary]:
        self.guard.staff(staff_id)
        return [
            InternshipSummary.from_entity(i)
            for i in self.registry.all_internships()
            if i.status == InternshipStatus.PENDING
        ]

    def all_internships(self, staff_id: str) -> List[InternshipSummary]:
        self.guard.staff(staff_id)
        return [InternshipSummary.from_entity(i) for i in self.registry.all_internships()]

    def internship_details(self, user_id: str, internship_id: int) -> InternshipSummary:
        user = self.guard.user(user_id)
        internship = self.guard.internship(internship_id)

        if isinstance(user, Staff):
            allowed = True
        elif isinstance(user, CompanyRepresentative):
            allowed = internship.is_owned_by(user.id)
        elif isinstance(user, Student):
            allowed = can_view_details(internship, user, self.today(), self.senior_min_year)
        else:
            allowed = False

        if not allowed:
            raise AuthorizationException(f"User {user.id} may not view internship {internship.id}")
        return InternshipSummary.from_entity(internship)

    async def _move(
        self,
        internship: Internship,
        action: InternshipAction,
        actor_id: str,
        visible: bool,
    ) -> Internship:
        """Status change with a fixed visibility outcome"""
        async with self.slots.internships([internship.id]):
            before = internship.status
            internship.status = self._next_status(internship, action)
            internship.visible = visible
            await self.slots.persist(internships=[internship])

        logger.info(
            f"Internship {internship.id}: {before.value} -> {internship.status.value} "
            f"({action.value} by {actor_id})"
        )
        return internship

    def _next_status(self, internship: Internship, action: InternshipAction) -> InternshipStatus:
        try:
            return next_internship_status(internship.status, action)
        except InvalidTransitionException:
            logger.warning(f"Rejected {action.value} on internship {internship.id} ({internship.status.value})")
            raise

    def _validate(self, details: InternshipDetails) -> InternshipLevel:
        """Field rules shared by create and edit"""
        for name in ("title", "description", "preferred_major"):
            value = getattr(details, name)
            if not value or not value.strip():
                raise ValidationException(name, "cannot be empty")

        try:
            level = InternshipLevel.parse(details.level)
        except ValueError as e:
            raise ValidationException("level", str(e))

        if details.open_date is None or details.close_date is None:
            raise ValidationException("open_date", "open and close dates are required")
        if details.close_date < details.open_date:
            raise ValidationException("close_date", "must be on or after the open date")

        if not self.min_slots <= details.num_slots <= self.max_slots:
            raise ValidationException(
                "num_slots", f"must be between {self.min_slots} and {self.max_slots}"
            )
        return level
