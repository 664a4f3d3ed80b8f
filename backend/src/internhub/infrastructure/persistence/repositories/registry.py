"""
Placement Registry Implementation
Process-local working set of internships and applications
"""
from typing import Dict, List, Optional

from loguru import logger

from internhub.application.repositories.interfaces import IPlacementRegistry, LoadedRecords
from internhub.core.config import settings
from internhub.domain.entities import Application, Internship


class PlacementRegistry(IPlacementRegistry):
    """
    Dictionary-backed registry created once per process and injected into
    the services. Applications are linked into their internship's list.
    """

    def __init__(
        self,
        internship_id_start: int = settings.INTERNSHIP_ID_START,
        application_id_start: int = settings.APPLICATION_ID_START,
    ):
        self._internship_id_start = internship_id_start
        self._application_id_start = application_id_start
        self._internships: Dict[int, Internship] = {}
        self._applications: Dict[int, Application] = {}
        self._next_internship_id = internship_id_start
        self._next_application_id = application_id_start

    def get_internship(self, internship_id: int) -> Optional[Internship]:
        return self._internships.get(internship_id)

    def all_internships(self) -> List[Internship]:
        return [self._internships[i] for i in sorted(self._internships)]

    def add_internship(self, internship: Internship) -> Internship:
        if internship.id in self._internships:
            raise ValueError(f"Internship {internship.id} already registered")
        self._internships[internship.id] = internship
        self._next_internship_id = max(self._next_internship_id, internship.id + 1)
        return internship

    def remove_internship(self, internship_id: int) -> bool:
        internship = self._internships.pop(internship_id, None)
        if internship is None:
            return False
        for application in internship.applications:
            self._applications.pop(application.id, None)
        return True

    def get_application(self, application_id: int) -> Optional[Application]:
        return self._applications.get(application_id)

    def all_applications(self) -> List[Application]:
        return [self._applications[a] for a in sorted(self._applications)]

    def add_application(self, application: Application) -> Application:
        if application.id in self._applications:
            raise ValueError(f"Application {application.id} already registered")
        internship = self._internships.get(application.internship_id)
        if internship is None:
            raise ValueError(
                f"Application {application.id} references unknown internship {application.internship_id}"
            )
        internship.add_application(application)
        self._applications[application.id] = application
        self._next_application_id = max(self._next_application_id, application.id + 1)
        return application

    def applications_for_student(self, student_id: str) -> List[Application]:
        return [app for app in self.all_applications() if app.student_id == student_id]

    def next_internship_id(self) -> int:
        allocated = self._next_internship_id
        self._next_internship_id += 1
        return allocated

    def next_application_id(self) -> int:
        allocated = self._next_application_id
        self._next_application_id += 1
        return allocated

    def replace(self, records: LoadedRecords) -> None:
        """Full replacement: no merge with what was held before"""
        self._internships = {}
        self._applications = {}
        self._next_internship_id = self._internship_id_start
        self._next_application_id = self._application_id_start

        for internship in records.internships:
            internship.applications = []
            self.add_internship(internship)

        dropped = 0
        for application in records.applications:
            if application.internship_id not in self._internships:
                logger.warning(
                    f"Dropping application {application.id}: internship {application.internship_id} not found"
                )
                dropped += 1
                continue
            self.add_application(application)

        logger.info(
            f"Registry loaded {len(self._internships)} internships and "
            f"{len(self._applications)} applications ({dropped} dropped)"
        )
