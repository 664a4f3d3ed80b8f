"""
Dependency Injection Container
Manages the process-wide working set and service instances
"""
from internhub.application.repositories.interfaces import IRecordGateway
from internhub.application.services.applications.interfaces import IApplicationService
from internhub.application.services.internships.interfaces import IInternshipService
from internhub.application.services.reporting import ReportingService
from internhub.application.services.slot_allocator import SlotAllocator
from internhub.infrastructure.persistence.repositories.record_gateway import SQLAlchemyRecordGateway
from internhub.infrastructure.persistence.repositories.registry import PlacementRegistry
from internhub.infrastructure.persistence.repositories.user_directory import InMemoryUserDirectory


# Singleton instances
_record_gateway: IRecordGateway | None = None
_registry: PlacementRegistry | None = None
_user_directory: InMemoryUserDirectory | None = None
_slot_allocator: SlotAllocator | None = None
_application_service: IApplicationService | None = None
_internship_service: IInternshipService | None = None
_reporting_service: ReportingService | None = None


def get_record_gateway() -> IRecordGateway:
    """Get record gateway instance (singleton)"""
    global _record_gateway
    if _record_gateway is None:
        _record_gateway = SQLAlchemyRecordGateway()
    return _record_gateway


def get_registry() -> PlacementRegistry:
    """Get placement registry instance (singleton)"""
    global _registry
    if _registry is None:
        _registry = PlacementRegistry()
    return _registry


def get_user_directory() -> InMemoryUserDirectory:
    """Get user directory instance (singleton)"""
    global _user_directory
    if _user_directory is None:
        _user_directory = InMemoryUserDirectory()
    return _user_directory


def get_slot_allocator() -> SlotAllocator:
    """Get slot allocator instance (singleton, owns the engine locks)"""
    global _slot_allocator
    if _slot_allocator is None:
        _slot_allocator = SlotAllocator(get_record_gateway())
    return _slot_allocator


def get_application_service() -> IApplicationService:
    """Get application service instance (singleton)"""
    global _application_service
    if _application_service is None:
        from internhub.application.services.applications.impl import ApplicationService
        _application_service = ApplicationService(
            get_registry(), get_user_directory(), get_slot_allocator()
        )
    return _application_service


def get_internship_service() -> IInternshipService:
    """Get internship service instance (singleton)"""
    global _internship_service
    if _internship_service is None:
        from internhub.application.services.internships.impl import InternshipService
        _internship_service = InternshipService(
            get_registry(), get_user_directory(), get_slot_allocator()
        )
    return _internship_service


def get_reporting_service() -> ReportingService:
    """Get reporting service instance (singleton)"""
    global _reporting_service
    if _reporting_service is None:
        _reporting_service = ReportingService(get_registry(), get_user_directory())
    return _reporting_service
