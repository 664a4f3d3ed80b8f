"""
Email Value Object
Immutable, normalised email address
"""
import re
from dataclasses import dataclass

EMAIL_PATTERN = re.compile(r'^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$')


@dataclass(frozen=True)
class Email:
    """Email value object with validation"""

    value: str

    def __post_init__(self):
        normalised = (self.value or "").strip().lower()
        if not self.is_valid(normalised):
            raise ValueError(f"Invalid email format: {self.value}")
        object.__setattr__(self, "value", normalised)

    @staticmethod
    def is_valid(email: str) -> bool:
        return bool(EMAIL_PATTERN.match(email or ""))

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"Email({self.value})"
