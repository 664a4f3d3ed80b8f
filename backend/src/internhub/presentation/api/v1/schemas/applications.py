"""
Application Schemas
"""
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class ApplicationCreateRequest(BaseModel):
    internship_id: int = Field(..., description="Internship to apply for")


class WithdrawalCreateRequest(BaseModel):
    reason: Optional[str] = Field(None, max_length=500, description="Shown to staff when reviewing")


class ApplicationResponse(BaseModel):
    """Application with the title of its internship"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    internship_id: int
    internship_title: str
    student_id: str
    date_applied: datetime
    status: str
    previous_status: Optional[str] = None
    withdrawal_reason: Optional[str] = None
