"""
Record Gateway Implementation
SQLAlchemy-backed persistence for internships, applications and users
"""
from typing import List, Optional

from loguru import logger
from sqlalchemy import select, delete
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import async_sessionmaker

from internhub.application.repositories.interfaces import IRecordGateway, LoadedRecords
from internhub.core.database import get_db_session
from internhub.core.exceptions import RepositoryException
from internhub.domain.entities import (
    Application,
    CompanyRepresentative,
    Internship,
    Staff,
    Student,
    User,
)
from internhub.domain.enums import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    RepresentativeApprovalStatus,
    UserRole,
)
from internhub.domain.value_objects import Email
from internhub.infrastructure.persistence.models import (
    ApplicationModel,
    InternshipModel,
    UserModel,
)


class SQLAlchemyRecordGateway(IRecordGateway):
    """
    Upsert-by-id table store. Each save runs in its own transaction, so a
    single record write is atomic; a multi-record operation is not.
    """

    def __init__(self, session_factory: Optional[async_sessionmaker] = None):
        self.session_factory = session_factory

    async def load(self) -> LoadedRecords:
        """Read all internships, then all applications"""
        try:
            async with get_db_session(self.session_factory) as session:
                internship_rows = (
                    await session.execute(select(InternshipModel).order_by(InternshipModel.id))
                ).scalars().all()
                application_rows = (
                    await session.execute(select(ApplicationModel).order_by(ApplicationModel.id))
                ).scalars().all()

            records = LoadedRecords(
                internships=[self._to_internship(m) for m in internship_rows],
                applications=[self._to_application(m) for m in application_rows],
            )
            logger.info(
                f"Loaded {len(records.internships)} internships and "
                f"{len(records.applications)} applications from storage"
            )
            return records

        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Failed to load records: {str(e)}")
            raise RepositoryException(f"Failed to load records: {str(e)}")

    async def load_users(self) -> List[User]:
        """Read all users"""
        try:
            async with get_db_session(self.session_factory) as session:
                rows = (await session.execute(select(UserModel).order_by(UserModel.id))).scalars().all()
            return [self._to_user(m) for m in rows]

        except (SQLAlchemyError, ValueError) as e:
            logger.error(f"Failed to load users: {str(e)}")
            raise RepositoryException(f"Failed to load users: {str(e)}")

    async def save_internship(self, internship: Internship) -> None:
        """Insert or update internship by id"""
        try:
            async with get_db_session(self.session_factory) as session:
                await session.merge(self._internship_to_model(internship))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save internship {internship.id}: {str(e)}")
            raise RepositoryException(f"Failed to save internship {internship.id}: {str(e)}")

    async def save_application(self, application: Application) -> None:
        """Insert or update application by id"""
        try:
            async with get_db_session(self.session_factory) as session:
                await session.merge(self._application_to_model(application))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save application {application.id}: {str(e)}")
            raise RepositoryException(f"Failed to save application {application.id}: {str(e)}")

    async def delete_internship(self, internship_id: int) -> None:
        """Remove internship row and any applications filed against it"""
        try:
            async with get_db_session(self.session_factory) as session:
                await session.execute(
                    delete(ApplicationModel).where(ApplicationModel.internship_id == internship_id)
                )
                await session.execute(
                    delete(InternshipModel).where(InternshipModel.id == internship_id)
                )
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete internship {internship_id}: {str(e)}")
            raise RepositoryException(f"Failed to delete internship {internship_id}: {str(e)}")

    async def save_user(self, user: User) -> None:
        """Insert or update user by id"""
        try:
            async with get_db_session(self.session_factory) as session:
                await session.merge(self._user_to_model(user))
        except SQLAlchemyError as e:
            logger.error(f"Failed to save user {user.id}: {str(e)}")
            raise RepositoryException(f"Failed to save user {user.id}: {str(e)}")

    def _internship_to_model(self, entity: Internship) -> InternshipModel:
        return InternshipModel(
            id=entity.id,
            title=entity.title,
            description=entity.description,
            level=entity.level.value,
            preferred_major=entity.preferred_major,
            open_date=entity.open_date,
            close_date=entity.close_date,
            company_name=entity.company_name,
            creator_id=entity.creator_id,
            visible=entity.visible,
            num_slots=entity.num_slots,
            filled_slots=entity.filled_slots,
            status=entity.status.value,
        )

    def _to_internship(self, model: InternshipModel) -> Internship:
        return Internship(
            id=model.id,
            title=model.title,
            description=model.description,
            level=InternshipLevel(model.level),
            preferred_major=model.preferred_major,
            open_date=model.open_date,
            close_date=model.close_date,
            company_name=model.company_name,
            creator_id=model.creator_id,
            num_slots=model.num_slots,
            visible=bool(model.visible),
            filled_slots=model.filled_slots,
            status=InternshipStatus(model.status),
        )

    def _application_to_model(self, entity: Application) -> ApplicationModel:
        return ApplicationModel(
            id=entity.id,
            internship_id=entity.internship_id,
            student_id=entity.student_id,
            date_applied=entity.date_applied,
            status=entity.status.value,
            previous_status=entity.previous_status.value if entity.previous_status else None,
            withdrawal_reason=entity.withdrawal_reason,
        )

    def _to_application(self, model: ApplicationModel) -> Application:
        return Application(
            id=model.id,
            internship_id=model.internship_id,
            student_id=model.student_id,
            date_applied=model.date_applied,
            status=ApplicationStatus(model.status),
            previous_status=ApplicationStatus(model.previous_status) if model.previous_status else None,
            withdrawal_reason=model.withdrawal_reason,
        )

    def _user_to_model(self, user: User) -> UserModel:
        model = UserModel(
            id=user.id,
            role=user.role.value,
            name=user.name,
            email=str(user.email),
        )
        if isinstance(user, Student):
            model.year_of_study = user.year_of_study
            model.major = user.major
        elif isinstance(user, CompanyRepresentative):
            model.company_name = user.company_name
            model.department = user.department
            model.position = user.position
            model.approval_status = user.approval_status.value
        elif isinstance(user, Staff):
            model.department = user.department
        return model

    def _to_user(self, model: UserModel) -> User:
        role = UserRole(model.role)
        common = dict(id=model.id, name=model.name, email=Email(model.email))

        if role == UserRole.STUDENT:
            return Student(**common, year_of_study=model.year_of_study, major=model.major or "")
        if role == UserRole.COMPANY_REPRESENTATIVE:
            return CompanyRepresentative(
                **common,
                company_name=model.company_name or "",
                department=model.department or "",
                position=model.position or "",
                approval_status=RepresentativeApprovalStatus(
                    model.approval_status or RepresentativeApprovalStatus.PENDING.value
                ),
            )
        return Staff(**common, department=model.department or "")
