"""
Tests for the internship posting lifecycle
"""
from datetime import date

import pytest

from internhub.application.services.internships.interfaces import InternshipChanges, InternshipDetails
from internhub.core.exceptions import (
    AuthorizationException,
    InvalidTransitionException,
    PostingLimitException,
    ValidationException,
)
from internhub.domain.enums import ApplicationStatus, InternshipLevel, InternshipStatus

from conftest import ACME, ALICE, BEN, CHLOE, DEV, GLOBEX, INITECH, STAFF


def details(**overrides) -> InternshipDetails:
    fields = dict(
        title="Data Engineering Intern",
        description="Build pipelines",
        level="Intermediate",
        preferred_major="Computer Science",
        open_date=date(2025, 5, 15),
        close_date=date(2025, 8, 15),
        num_slots=3,
    )
    fields.update(overrides)
    return InternshipDetails(**fields)


class TestCreateInternship:

    @pytest.mark.asyncio
    async def test_create_pending_hidden_posting(self, internship_service, gateway):
        """Test a new posting starts Pending with visibility off"""
        internship = await internship_service.create_internship(ACME, details())

        assert internship.id == 100000
        assert internship.status == InternshipStatus.PENDING
        assert internship.visible is False
        assert internship.filled_slots == 0
        assert internship.level == InternshipLevel.INTERMEDIATE
        assert internship.company_name == "Acme"
        assert internship.creator_id == ACME
        assert gateway.internships[internship.id] is internship

    @pytest.mark.asyncio
    async def test_unapproved_representative_refused(self, internship_service):
        with pytest.raises(AuthorizationException):
            await internship_service.create_internship(INITECH, details())

    @pytest.mark.asyncio
    async def test_student_refused(self, internship_service):
        with pytest.raises(AuthorizationException):
            await internship_service.create_internship(ALICE, details())

    @pytest.mark.asyncio
    @pytest.mark.parametrize("overrides, field", [
        ({"num_slots": 11}, "num_slots"),
        ({"num_slots": 0}, "num_slots"),
        ({"level": "Expert"}, "level"),
        ({"title": "   "}, "title"),
        ({"preferred_major": ""}, "preferred_major"),
        ({"close_date": date(2025, 5, 1)}, "close_date"),
    ])
    async def test_field_validation(self, internship_service, registry, overrides, field):
        """Test field rules reject bad postings before anything is stored"""
        with pytest.raises(ValidationException) as exc_info:
            await internship_service.create_internship(ACME, details(**overrides))

        assert exc_info.value.field == field
        assert registry.all_internships() == []

    @pytest.mark.asyncio
    async def test_level_is_case_insensitive(self, internship_service):
        internship = await internship_service.create_internship(ACME, details(level="advanced"))
        assert internship.level == InternshipLevel.ADVANCED

    @pytest.mark.asyncio
    async def test_posting_cap(self, internship_service):
        """Test the cap of five open postings per representative"""
        for n in range(5):
            await internship_service.create_internship(ACME, details(title=f"Intern {n}"))

        with pytest.raises(PostingLimitException):
            await internship_service.create_internship(ACME, details(title="One too many"))

        other = await internship_service.create_internship(GLOBEX, details())
        assert other.creator_id == GLOBEX

    @pytest.mark.asyncio
    async def test_rejected_postings_do_not_count(self, internship_service):
        created = [
            await internship_service.create_internship(ACME, details(title=f"Intern {n}"))
            for n in range(5)
        ]
        await internship_service.reject_internship(STAFF, created[0].id)

        internship = await internship_service.create_internship(ACME, details(title="Replacement"))
        assert internship.status == InternshipStatus.PENDING


class TestEditAndDelete:

    @pytest.mark.asyncio
    async def test_edit_pending(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        edited = await internship_service.edit_internship(
            ACME, internship.id, InternshipChanges(title="Platform Intern", num_slots=5)
        )

        assert edited.title == "Platform Intern"
        assert edited.num_slots == 5
        assert edited.description == "Build pipelines"
        assert edited.level == InternshipLevel.INTERMEDIATE
        assert edited.status == InternshipStatus.PENDING

    @pytest.mark.asyncio
    async def test_edit_locked_after_approval(self, internship_service):
        """Test an approved posting can no longer be edited"""
        internship = await internship_service.create_internship(ACME, details())
        await internship_service.approve_internship(STAFF, internship.id)

        with pytest.raises(InvalidTransitionException):
            await internship_service.edit_internship(ACME, internship.id, InternshipChanges(title="Changed"))
        assert internship.title == "Data Engineering Intern"

    @pytest.mark.asyncio
    async def test_edit_rejected_resubmits(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())
        await internship_service.reject_internship(STAFF, internship.id)

        await internship_service.edit_internship(ACME, internship.id, InternshipChanges(description="Clearer scope"))

        assert internship.status == InternshipStatus.PENDING
        assert internship.visible is False
        assert internship.description == "Clearer scope"

    @pytest.mark.asyncio
    async def test_edit_validates_fields(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        with pytest.raises(ValidationException):
            await internship_service.edit_internship(ACME, internship.id, InternshipChanges(num_slots=20))
        assert internship.num_slots == 3

    @pytest.mark.asyncio
    async def test_edit_by_other_representative(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        with pytest.raises(AuthorizationException):
            await internship_service.edit_internship(GLOBEX, internship.id, InternshipChanges(title="Mine"))

    @pytest.mark.asyncio
    async def test_delete_pending(self, internship_service, registry, gateway):
        internship = await internship_service.create_internship(ACME, details())

        await internship_service.delete_internship(ACME, internship.id)

        assert registry.get_internship(internship.id) is None
        assert gateway.deleted == [internship.id]

    @pytest.mark.asyncio
    async def test_delete_approved_refused(self, internship_service, registry):
        internship = await internship_service.create_internship(ACME, details())
        await internship_service.approve_internship(STAFF, internship.id)

        with pytest.raises(InvalidTransitionException):
            await internship_service.delete_internship(ACME, internship.id)
        assert registry.get_internship(internship.id) is internship

    @pytest.mark.asyncio
    async def test_resubmit(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        with pytest.raises(InvalidTransitionException):
            await internship_service.resubmit_internship(ACME, internship.id)

        await internship_service.reject_internship(STAFF, internship.id)
        await internship_service.resubmit_internship(ACME, internship.id)
        assert internship.status == InternshipStatus.PENDING


class TestApprovalAndVisibility:

    @pytest.mark.asyncio
    async def test_approve_turns_visibility_on(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        await internship_service.approve_internship(STAFF, internship.id)

        assert internship.status == InternshipStatus.APPROVED
        assert internship.visible is True

    @pytest.mark.asyncio
    async def test_reject_turns_visibility_off(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        await internship_service.reject_internship(STAFF, internship.id)

        assert internship.status == InternshipStatus.REJECTED
        assert internship.visible is False

    @pytest.mark.asyncio
    async def test_approve_requires_staff(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())

        with pytest.raises(AuthorizationException):
            await internship_service.approve_internship(ACME, internship.id)
        assert internship.status == InternshipStatus.PENDING

    @pytest.mark.asyncio
    async def test_approve_twice_is_invalid(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())
        await internship_service.approve_internship(STAFF, internship.id)

        with pytest.raises(InvalidTransitionException):
            await internship_service.approve_internship(STAFF, internship.id)

    @pytest.mark.asyncio
    async def test_toggle_visibility(self, internship_service):
        internship = await internship_service.create_internship(ACME, details())
        await internship_service.approve_internship(STAFF, internship.id)

        assert await internship_service.toggle_visibility(ACME, internship.id) is False
        assert await internship_service.toggle_visibility(ACME, internship.id) is True
        assert internship.status == InternshipStatus.APPROVED

    @pytest.mark.asyncio
    async def test_toggle_pending_is_noop(self, internship_service, gateway):
        """Test toggling a posting that is not Approved changes nothing"""
        internship = await internship_service.create_internship(ACME, details())
        saves = len(gateway.saved_internships)

        assert await internship_service.toggle_visibility(ACME, internship.id) is False
        assert internship.visible is False
        assert len(gateway.saved_internships) == saves

    @pytest.mark.asyncio
    async def test_toggle_by_other_representative(self, internship_service, add_internship):
        internship = add_internship(creator_id=ACME)

        with pytest.raises(AuthorizationException):
            await internship_service.toggle_visibility(GLOBEX, internship.id)


class TestInternshipReads:

    def test_visible_internships_filter_and_sort(self, internship_service, add_internship):
        add_internship(title="Zeta Intern")
        add_internship(title="alpha intern")
        add_internship(title="Hidden", visible=False)
        add_internship(title="Pending", status=InternshipStatus.PENDING, visible=False)
        add_internship(title="Advanced", level=InternshipLevel.ADVANCED)
        add_internship(title="Biology", preferred_major="Biology")

        titles = [s.title for s in internship_service.visible_internships(BEN)]

        assert titles == ["alpha intern", "Zeta Intern"]
        assert "Advanced" in [s.title for s in internship_service.visible_internships(ALICE)]
        assert [s.title for s in internship_service.visible_internships(DEV)] == ["Biology"]

    def test_full_posting_hidden(self, internship_service, add_internship, add_application):
        internship = add_internship(num_slots=1)
        add_application(internship, CHLOE, ApplicationStatus.ACCEPTED)

        assert internship_service.visible_internships(ALICE) == []

    def test_views_by_role(self, internship_service, add_internship):
        mine = add_internship(creator_id=ACME)
        add_internship(creator_id=GLOBEX)
        pending = add_internship(creator_id=GLOBEX, status=InternshipStatus.PENDING, visible=False)

        assert [s.id for s in internship_service.internships_by_creator(ACME)] == [mine.id]
        assert [s.id for s in internship_service.pending_internships(STAFF)] == [pending.id]
        assert len(internship_service.all_internships(STAFF)) == 3

        with pytest.raises(AuthorizationException):
            internship_service.pending_internships(ACME)

    def test_details_permission(self, internship_service, add_internship, add_application):
        """Test applicants keep access to postings that are no longer listed"""
        internship = add_internship(creator_id=ACME)
        add_application(internship, ALICE)
        internship.visible = False

        assert internship_service.internship_details(ALICE, internship.id).id == internship.id
        assert internship_service.internship_details(STAFF, internship.id).id == internship.id
        assert internship_service.internship_details(ACME, internship.id).id == internship.id

        with pytest.raises(AuthorizationException):
            internship_service.internship_details(CHLOE, internship.id)
        with pytest.raises(AuthorizationException):
            internship_service.internship_details(GLOBEX, internship.id)

    def test_summary_availability(self, internship_service, add_internship, add_application):
        internship = add_internship(num_slots=1)
        add_application(internship, CHLOE, ApplicationStatus.ACCEPTED)

        summary = internship_service.internship_details(STAFF, internship.id)

        assert summary.status == "Filled"
        assert summary.availability == "Filled"
        assert summary.filled_slots == 1
