"""
Internship Schemas
Request/response models for posting endpoints
"""
from datetime import date
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from internhub.domain.enums import InternshipLevel


class InternshipCreateRequest(BaseModel):
    """New posting submitted by a company representative"""

    title: str = Field(..., min_length=1, max_length=200, examples=["Backend Engineering Intern"])
    description: str = Field(..., min_length=1)
    level: str = Field(..., description="Basic, Intermediate or Advanced")
    preferred_major: str = Field(..., min_length=1, examples=["Computer Science"])
    open_date: date
    close_date: date
    num_slots: int = Field(..., ge=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        return InternshipLevel.parse(v).value

    @model_validator(mode="after")
    def validate_window(self) -> "InternshipCreateRequest":
        if self.close_date < self.open_date:
            raise ValueError("close_date must be on or after open_date")
        return self


class InternshipUpdateRequest(BaseModel):
    """Partial edit; omitted fields keep their value"""

    title: Optional[str] = Field(None, min_length=1, max_length=200)
    description: Optional[str] = Field(None, min_length=1)
    level: Optional[str] = None
    preferred_major: Optional[str] = Field(None, min_length=1)
    open_date: Optional[date] = None
    close_date: Optional[date] = None
    num_slots: Optional[int] = Field(None, ge=1)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        return InternshipLevel.parse(v).value


class InternshipResponse(BaseModel):
    """Posting as shown to users"""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str
    company_name: str
    level: str
    preferred_major: str
    open_date: date
    close_date: date
    status: str
    visible: bool
    num_slots: int
    filled_slots: int
    availability: str


class VisibilityResponse(BaseModel):
    internship_id: int
    visible: bool
