"""
Report Schemas
"""
from typing import Dict

from pydantic import BaseModel, ConfigDict


class PlacementReportResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    total_internships: int
    total_applications: int
    total_slots: int
    filled_slots: int
    fill_rate: float
    internships_by_status: Dict[str, int]
    internships_by_level: Dict[str, int]
    applications_by_status: Dict[str, int]
