"""
Shared fixtures: a small user directory, an empty registry and a recording gateway
"""
from datetime import date, datetime
from typing import Dict, List

import pytest

from internhub.application.repositories.interfaces import IRecordGateway, LoadedRecords
from internhub.application.services.applications.impl import ApplicationService
from internhub.application.services.internships.impl import InternshipService
from internhub.application.services.reporting import ReportingService
from internhub.application.services.slot_allocator import SlotAllocator
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
)
from internhub.domain.value_objects import Email
from internhub.infrastructure.persistence.repositories.registry import PlacementRegistry
from internhub.infrastructure.persistence.repositories.user_directory import InMemoryUserDirectory

TODAY = date(2025, 6, 2)
NOW = datetime(2025, 6, 2, 9, 30)
MAJOR = "Computer Science"


class RecordingGateway(IRecordGateway):
    """Keeps the last saved copy of every record in dictionaries"""

    def __init__(self):
        self.internships: Dict[int, Internship] = {}
        self.applications: Dict[int, Application] = {}
        self.users: Dict[str, User] = {}
        self.deleted: List[int] = []
        self.saved_internships: List[int] = []
        self.saved_applications: List[int] = []

    async def load(self) -> LoadedRecords:
        return LoadedRecords(
            internships=list(self.internships.values()),
            applications=list(self.applications.values()),
        )

    async def load_users(self) -> List[User]:
        return list(self.users.values())

    async def save_internship(self, internship: Internship) -> None:
        self.internships[internship.id] = internship
        self.saved_internships.append(internship.id)

    async def save_application(self, application: Application) -> None:
        self.applications[application.id] = application
        self.saved_applications.append(application.id)

    async def delete_internship(self, internship_id: int) -> None:
        self.internships.pop(internship_id, None)
        self.deleted.append(internship_id)

    async def save_user(self, user: User) -> None:
        self.users[user.id] = user


def make_users() -> List[User]:
    return [
        Student(id="U2300001A", name="Alice Tan", email=Email("alice@e.ntu.edu.sg"), year_of_study=3, major=MAJOR),
        Student(id="U2300002B", name="Ben Lim", email=Email("ben@e.ntu.edu.sg"), year_of_study=1, major=MAJOR),
        Student(id="U2300003C", name="Chloe Ng", email=Email("chloe@e.ntu.edu.sg"), year_of_study=4, major=MAJOR),
        Student(id="U2300004D", name="Dev Raj", email=Email("dev@e.ntu.edu.sg"), year_of_study=2, major="Biology"),
        CompanyRepresentative(
            id="hr@acme.com", name="Grace Ho", email=Email("hr@acme.com"),
            company_name="Acme", department="Engineering", position="Recruiter",
            approval_status=RepresentativeApprovalStatus.APPROVED,
        ),
        CompanyRepresentative(
            id="jobs@globex.com", name="Hank Scorpio", email=Email("jobs@globex.com"),
            company_name="Globex", approval_status=RepresentativeApprovalStatus.APPROVED,
        ),
        CompanyRepresentative(
            id="new@initech.com", name="Bill L", email=Email("new@initech.com"),
            company_name="Initech",
        ),
        Staff(id="staff01", name="Career Office", email=Email("career@ntu.edu.sg"), department="CCDS"),
    ]


ALICE, BEN, CHLOE, DEV = "U2300001A", "U2300002B", "U2300003C", "U2300004D"
ACME, GLOBEX, INITECH = "hr@acme.com", "jobs@globex.com", "new@initech.com"
STAFF = "staff01"


@pytest.fixture
def user_directory():
    return InMemoryUserDirectory(make_users())


@pytest.fixture
def registry():
    return PlacementRegistry(internship_id_start=100000, application_id_start=500000)


@pytest.fixture
def gateway():
    return RecordingGateway()


@pytest.fixture
def slots(gateway):
    return SlotAllocator(gateway)


@pytest.fixture
def application_service(registry, user_directory, slots):
    return ApplicationService(
        registry,
        user_directory,
        slots,
        today=lambda: TODAY,
        now=lambda: NOW,
        max_active_applications=3,
        senior_min_year=3,
    )


@pytest.fixture
def internship_service(registry, user_directory, slots):
    return InternshipService(
        registry,
        user_directory,
        slots,
        today=lambda: TODAY,
        max_postings=5,
        min_slots=1,
        max_slots=10,
        senior_min_year=3,
    )


@pytest.fixture
def reporting_service(registry, user_directory):
    return ReportingService(registry, user_directory)


@pytest.fixture
def add_internship(registry):
    """Register a posting directly, approved and listed unless told otherwise"""

    def _add(
        title: str = "Backend Intern",
        creator_id: str = ACME,
        num_slots: int = 2,
        status: InternshipStatus = InternshipStatus.APPROVED,
        visible: bool = True,
        level: InternshipLevel = InternshipLevel.BASIC,
        preferred_major: str = MAJOR,
        open_date: date = date(2025, 5, 1),
        close_date: date = date(2025, 7, 31),
    ) -> Internship:
        internship = Internship(
            id=registry.next_internship_id(),
            title=title,
            description=f"{title} description",
            level=level,
            preferred_major=preferred_major,
            open_date=open_date,
            close_date=close_date,
            company_name="Acme" if creator_id == ACME else "Globex",
            creator_id=creator_id,
            num_slots=num_slots,
            visible=visible,
            status=status,
        )
        return registry.add_internship(internship)

    return _add


@pytest.fixture
def add_application(registry):
    """Register an application in any status and keep slot counts consistent"""

    def _add(
        internship: Internship,
        student_id: str,
        status: ApplicationStatus = ApplicationStatus.PENDING,
        previous_status: ApplicationStatus = None,
    ) -> Application:
        application = Application(
            id=registry.next_application_id(),
            internship_id=internship.id,
            student_id=student_id,
            date_applied=NOW,
            status=status,
            previous_status=previous_status,
        )
        registry.add_application(application)
        internship.recount_slots()
        return application

    return _add
