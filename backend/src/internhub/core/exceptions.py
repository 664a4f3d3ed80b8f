"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class ValidationException(DomainException):
    """Data validation failed"""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class RepositoryException(DomainException):
    """Storage operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""

    def __init__(self, resource_type: str, identifier):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(DomainException):
    """Resource already exists"""

    def __init__(self, resource_type: str, field: str, value):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")


class InvalidTransitionException(DomainException):
    """Action is not allowed from the record's current status"""

    def __init__(self, entity: str, current_status, action):
        self.entity = entity
        self.current_status = getattr(current_status, "value", current_status)
        self.action = getattr(action, "value", action)
        super().__init__(
            f"Cannot {self.action} {entity} with status {self.current_status}"
        )


class CapacityExceededException(DomainException):
    """Internship has no free slot left"""

    def __init__(self, internship_id: int, num_slots: int):
        self.internship_id = internship_id
        self.num_slots = num_slots
        super().__init__(f"Internship {internship_id} has all {num_slots} slots filled")


class ApplicationLimitException(DomainException):
    """Student holds too many active applications"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum of {limit} active applications allowed")


class PostingLimitException(DomainException):
    """Company representative holds too many open postings"""

    def __init__(self, limit: int):
        self.limit = limit
        super().__init__(f"Maximum of {limit} open internships allowed per company representative")
