"""
Slot Capacity Value Object
Advertised slots of a posting and how many are occupied
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class SlotCapacity:
    """Slot accounting: 0 <= filled <= total"""

    total: int
    filled: int = 0

    def __post_init__(self):
        if self.total < 0:
            raise ValueError("Slot count cannot be negative")
        if self.filled < 0:
            raise ValueError("Filled slots cannot be negative")
        if self.filled > self.total:
            raise ValueError(f"Filled slots ({self.filled}) exceed capacity ({self.total})")

    def is_full(self) -> bool:
        return self.filled >= self.total

    def __str__(self) -> str:
        return f"{self.filled}/{self.total}"
