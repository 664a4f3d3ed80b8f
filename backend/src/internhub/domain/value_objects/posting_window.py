"""
Posting Window Value Object
Dates between which a posting accepts applications
"""
from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class PostingWindow:
    """Open/close date range, both ends inclusive"""

    open_date: date
    close_date: date

    def __post_init__(self):
        if self.open_date is None or self.close_date is None:
            raise ValueError("Open and close dates are required")
        if self.close_date < self.open_date:
            raise ValueError("Close date must be on or after open date")

    def contains(self, day: date) -> bool:
        """Check if a day falls inside the window"""
        return self.open_date <= day <= self.close_date

    def __str__(self) -> str:
        return f"{self.open_date.isoformat()} to {self.close_date.isoformat()}"
