"""
Application API Endpoints
Submission, placement decisions and withdrawal
"""
from typing import List, Optional

from fastapi import APIRouter, Body, Depends, status

from internhub.application.repositories.interfaces import IPlacementRegistry
from internhub.application.services.applications.interfaces import IApplicationService
from internhub.domain.entities import Application
from internhub.domain.projections import ApplicationSummary
from internhub.presentation.api.v1.container import get_application_service, get_registry
from internhub.presentation.api.v1.dependencies import get_current_user_id
from internhub.presentation.api.v1.schemas.applications import (
    ApplicationCreateRequest,
    ApplicationResponse,
    WithdrawalCreateRequest,
)


router = APIRouter()


def _response(application: Application, registry: IPlacementRegistry) -> ApplicationResponse:
    internship = registry.get_internship(application.internship_id)
    return ApplicationResponse.model_validate(ApplicationSummary.from_entity(application, internship))


@router.post("/applications", response_model=ApplicationResponse, status_code=status.HTTP_201_CREATED)
async def submit_application(
    request: ApplicationCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    """
    Apply for an internship.

    The posting must be visible to the student, who may hold at most three
    active applications and no accepted placement.
    """
    application = await service.submit_application(user_id, request.internship_id)
    return _response(application, registry)


@router.get("/applications/mine", response_model=List[ApplicationResponse])
async def list_my_applications(
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service)
):
    return [ApplicationResponse.model_validate(s) for s in service.applications_for_student(user_id)]


@router.get("/applications/withdrawals", response_model=List[ApplicationResponse])
async def list_withdrawal_requests(
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service)
):
    """Withdrawal requests awaiting a staff decision"""
    return [ApplicationResponse.model_validate(s) for s in service.withdrawal_requests(user_id)]


@router.post("/applications/{application_id}/approve", response_model=ApplicationResponse)
async def approve_application(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    return _response(await service.approve_application(user_id, application_id), registry)


@router.post("/applications/{application_id}/reject", response_model=ApplicationResponse)
async def reject_application(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    return _response(await service.reject_application(user_id, application_id), registry)


@router.post("/applications/{application_id}/confirm", response_model=ApplicationResponse)
async def confirm_placement(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    """Representative moves a Pending application to Successful, or a Successful one to Accepted"""
    return _response(await service.confirm_placement(user_id, application_id), registry)


@router.post("/applications/{application_id}/accept", response_model=ApplicationResponse)
async def accept_application(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    """Student accepts an offer; their other applications are withdrawn"""
    return _response(await service.accept_application(user_id, application_id), registry)


@router.post("/applications/{application_id}/decline", response_model=ApplicationResponse)
async def reject_placement(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    """Student turns down an offer or an accepted placement"""
    return _response(await service.reject_placement(user_id, application_id), registry)


@router.post("/applications/{application_id}/withdrawal", response_model=ApplicationResponse)
async def request_withdrawal(
    application_id: int,
    request: Optional[WithdrawalCreateRequest] = Body(None),
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    reason = request.reason if request else None
    return _response(await service.request_withdrawal(user_id, application_id, reason), registry)


@router.post("/applications/{application_id}/withdrawal/approve", response_model=ApplicationResponse)
async def approve_withdrawal(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    return _response(await service.approve_withdrawal(user_id, application_id), registry)


@router.post("/applications/{application_id}/withdrawal/reject", response_model=ApplicationResponse)
async def reject_withdrawal(
    application_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service),
    registry: IPlacementRegistry = Depends(get_registry)
):
    return _response(await service.reject_withdrawal(user_id, application_id), registry)
