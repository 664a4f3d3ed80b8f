"""
Bootstrap Loader
Fills the user directory and placement registry from storage at start-up
"""
from loguru import logger

from internhub.application.repositories.interfaces import (
    IRecordGateway,
    LoadedRecords,
)
from internhub.domain.entities import Student
from internhub.infrastructure.persistence.repositories.registry import PlacementRegistry
from internhub.infrastructure.persistence.repositories.user_directory import InMemoryUserDirectory


async def load_working_set(
    gateway: IRecordGateway,
    registry: PlacementRegistry,
    user_directory: InMemoryUserDirectory,
) -> LoadedRecords:
    """
    Replace the in-memory state with what storage holds.

    Applications whose student is unknown are dropped here; those whose
    internship is unknown are dropped by the registry.
    """
    users = await gateway.load_users()
    user_directory.replace(users)
    students = {u.id for u in users if isinstance(u, Student)}

    records = await gateway.load()

    kept = []
    for application in records.applications:
        if application.student_id not in students:
            logger.warning(
                f"Dropping application {application.id}: student {application.student_id} not found"
            )
            continue
        kept.append(application)

    records = LoadedRecords(internships=records.internships, applications=kept)
    registry.replace(records)

    # Stored slot counts are advisory; re-derive them from the applications
    for internship in registry.all_internships():
        occupied = internship.occupied_slots()
        if occupied > internship.num_slots:
            logger.warning(
                f"Internship {internship.id} has {occupied} placements for "
                f"{internship.num_slots} slots; counting it as full"
            )
        if internship.recount_slots():
            logger.warning(
                f"Internship {internship.id} stored slot count was stale, now "
                f"{internship.filled_slots}/{internship.num_slots} ({internship.status.value})"
            )

    logger.info(f"Working set ready: {len(users)} users")
    return records
