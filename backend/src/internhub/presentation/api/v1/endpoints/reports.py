"""
Report API Endpoints
"""
from fastapi import APIRouter, Depends

from internhub.application.services.reporting import ReportingService
from internhub.presentation.api.v1.container import get_reporting_service
from internhub.presentation.api.v1.dependencies import get_current_user_id
from internhub.presentation.api.v1.schemas.reports import PlacementReportResponse


router = APIRouter()


@router.get("/reports/placements", response_model=PlacementReportResponse)
async def placement_report(
    user_id: str = Depends(get_current_user_id),
    service: ReportingService = Depends(get_reporting_service)
):
    """Slot and status totals across all postings (staff only)"""
    return PlacementReportResponse.model_validate(service.placement_report(user_id))
