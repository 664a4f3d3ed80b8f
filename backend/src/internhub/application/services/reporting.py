"""
Reporting Service
Staff-facing placement statistics
"""
from collections import Counter

from internhub.application.repositories.interfaces import IPlacementRegistry, IUserDirectory
from internhub.application.services.access import AccessGuard
from internhub.domain.projections import PlacementReport


class ReportingService:
    """Aggregates over the registry's current working set"""

    def __init__(self, registry: IPlacementRegistry, user_directory: IUserDirectory):
        self.registry = registry
        self.guard = AccessGuard(user_directory, registry)

    def placement_report(self, staff_id: str) -> PlacementReport:
        self.guard.staff(staff_id)

        internships = self.registry.all_internships()
        applications = self.registry.all_applications()

        return PlacementReport(
            total_internships=len(internships),
            total_applications=len(applications),
            total_slots=sum(i.num_slots for i in internships),
            filled_slots=sum(i.filled_slots for i in internships),
            internships_by_status=dict(Counter(i.status.value for i in internships)),
            internships_by_level=dict(Counter(i.level.value for i in internships)),
            applications_by_status=dict(Counter(a.status.value for a in applications)),
        )
