"""
Internship API Endpoints
Posting lifecycle for representatives, approval for staff, browsing for students
"""
from typing import List

from fastapi import APIRouter, Depends, status

from internhub.application.services.applications.interfaces import IApplicationService
from internhub.application.services.internships.interfaces import (
    IInternshipService,
    InternshipChanges,
    InternshipDetails,
)
from internhub.domain.entities import Internship
from internhub.domain.projections import InternshipSummary
from internhub.presentation.api.v1.container import (
    get_application_service,
    get_internship_service,
)
from internhub.presentation.api.v1.dependencies import get_current_user_id
from internhub.presentation.api.v1.schemas.applications import ApplicationResponse
from internhub.presentation.api.v1.schemas.internships import (
    InternshipCreateRequest,
    InternshipResponse,
    InternshipUpdateRequest,
    VisibilityResponse,
)


router = APIRouter()


def _response(internship: Internship) -> InternshipResponse:
    return InternshipResponse.model_validate(InternshipSummary.from_entity(internship))


# Collection views are declared before /{internship_id} so they are matched first

@router.get("/internships/visible", response_model=List[InternshipResponse])
async def list_visible_internships(
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Postings the calling student can apply for, sorted by title"""
    return [InternshipResponse.model_validate(s) for s in service.visible_internships(user_id)]


@router.get("/internships/mine", response_model=List[InternshipResponse])
async def list_my_internships(
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Postings created by the calling representative"""
    return [InternshipResponse.model_validate(s) for s in service.internships_by_creator(user_id)]


@router.get("/internships/pending", response_model=List[InternshipResponse])
async def list_pending_internships(
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Postings awaiting staff approval"""
    return [InternshipResponse.model_validate(s) for s in service.pending_internships(user_id)]


@router.get("/internships", response_model=List[InternshipResponse])
async def list_all_internships(
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Every posting (staff only)"""
    return [InternshipResponse.model_validate(s) for s in service.all_internships(user_id)]


@router.post("/internships", response_model=InternshipResponse, status_code=status.HTTP_201_CREATED)
async def create_internship(
    request: InternshipCreateRequest,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """
    Create a posting.

    The posting starts Pending and hidden until staff approve it.
    """
    internship = await service.create_internship(user_id, InternshipDetails(**request.model_dump()))
    return _response(internship)


@router.get("/internships/{internship_id}", response_model=InternshipResponse)
async def get_internship(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    return InternshipResponse.model_validate(service.internship_details(user_id, internship_id))


@router.patch("/internships/{internship_id}", response_model=InternshipResponse)
async def edit_internship(
    internship_id: int,
    request: InternshipUpdateRequest,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Edit a Pending posting, or resubmit a Rejected one with changes"""
    changes = InternshipChanges(**request.model_dump(exclude_unset=True))
    internship = await service.edit_internship(user_id, internship_id, changes)
    return _response(internship)


@router.delete("/internships/{internship_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_internship(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    await service.delete_internship(user_id, internship_id)


@router.post("/internships/{internship_id}/resubmit", response_model=InternshipResponse)
async def resubmit_internship(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    return _response(await service.resubmit_internship(user_id, internship_id))


@router.post("/internships/{internship_id}/approve", response_model=InternshipResponse)
async def approve_internship(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    return _response(await service.approve_internship(user_id, internship_id))


@router.post("/internships/{internship_id}/reject", response_model=InternshipResponse)
async def reject_internship(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    return _response(await service.reject_internship(user_id, internship_id))


@router.post("/internships/{internship_id}/visibility", response_model=VisibilityResponse)
async def toggle_visibility(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IInternshipService = Depends(get_internship_service)
):
    """Flip visibility of an Approved posting; other statuses are left unchanged"""
    visible = await service.toggle_visibility(user_id, internship_id)
    return VisibilityResponse(internship_id=internship_id, visible=visible)


@router.get("/internships/{internship_id}/applications", response_model=List[ApplicationResponse])
async def list_internship_applications(
    internship_id: int,
    user_id: str = Depends(get_current_user_id),
    service: IApplicationService = Depends(get_application_service)
):
    """Applications on one of the calling representative's postings"""
    return [
        ApplicationResponse.model_validate(s)
        for s in service.applications_for_internship(user_id, internship_id)
    ]
