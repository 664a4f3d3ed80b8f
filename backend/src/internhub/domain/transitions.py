"""
Transition Tables
The fixed state machines of applications and internships
"""
from typing import Dict, Optional, Tuple

from internhub.core.exceptions import InvalidTransitionException
from .enums import (
    ApplicationAction,
    ApplicationStatus,
    InternshipAction,
    InternshipStatus,
)

# Marker target: the application returns to the status it held before the request
RESTORE_PREVIOUS = None

_A = ApplicationStatus
_AA = ApplicationAction

APPLICATION_TRANSITIONS: Dict[Tuple[ApplicationStatus, ApplicationAction], Optional[ApplicationStatus]] = {
    (_A.PENDING, _AA.APPROVE): _A.SUCCESSFUL,
    (_A.PENDING, _AA.REJECT): _A.UNSUCCESSFUL,
    (_A.SUCCESSFUL, _AA.ACCEPT): _A.ACCEPTED,
    (_A.SUCCESSFUL, _AA.REJECT_PLACEMENT): _A.UNSUCCESSFUL,
    (_A.ACCEPTED, _AA.REJECT_PLACEMENT): _A.UNSUCCESSFUL,
    (_A.PENDING, _AA.REQUEST_WITHDRAWAL): _A.WITHDRAWAL_REQUESTED,
    (_A.SUCCESSFUL, _AA.REQUEST_WITHDRAWAL): _A.WITHDRAWAL_REQUESTED,
    (_A.ACCEPTED, _AA.REQUEST_WITHDRAWAL): _A.WITHDRAWAL_REQUESTED,
    (_A.WITHDRAWAL_REQUESTED, _AA.APPROVE_WITHDRAWAL): _A.WITHDRAWN,
    (_A.WITHDRAWAL_REQUESTED, _AA.REJECT_WITHDRAWAL): RESTORE_PREVIOUS,
    # administrative side effect of accepting another placement
    (_A.PENDING, _AA.FORCE_WITHDRAW): _A.WITHDRAWN,
    (_A.SUCCESSFUL, _AA.FORCE_WITHDRAW): _A.WITHDRAWN,
    (_A.ACCEPTED, _AA.FORCE_WITHDRAW): _A.WITHDRAWN,
    (_A.WITHDRAWAL_REQUESTED, _AA.FORCE_WITHDRAW): _A.WITHDRAWN,
}

_I = InternshipStatus
_IA = InternshipAction

INTERNSHIP_TRANSITIONS: Dict[Tuple[InternshipStatus, InternshipAction], InternshipStatus] = {
    (_I.PENDING, _IA.APPROVE): _I.APPROVED,
    (_I.PENDING, _IA.REJECT): _I.REJECTED,
    (_I.PENDING, _IA.EDIT): _I.PENDING,
    (_I.REJECTED, _IA.EDIT): _I.PENDING,
    (_I.REJECTED, _IA.RESUBMIT): _I.PENDING,
    (_I.PENDING, _IA.DELETE): _I.PENDING,
    (_I.REJECTED, _IA.DELETE): _I.REJECTED,
    (_I.APPROVED, _IA.TOGGLE_VISIBILITY): _I.APPROVED,
}


def can_transition_application(current: ApplicationStatus, action: ApplicationAction) -> bool:
    return (current, action) in APPLICATION_TRANSITIONS


def next_application_status(
    current: ApplicationStatus,
    action: ApplicationAction,
    previous: Optional[ApplicationStatus] = None,
) -> ApplicationStatus:
    """
    Look up the status an application moves to

    Raises:
        InvalidTransitionException: action not allowed from current status
    """
    key = (current, action)
    if key not in APPLICATION_TRANSITIONS:
        raise InvalidTransitionException("application", current, action)

    target = APPLICATION_TRANSITIONS[key]
    if target is RESTORE_PREVIOUS:
        if previous is None:
            # a withdrawal request always remembers where it came from
            raise InvalidTransitionException("application", current, action)
        return previous
    return target


def next_internship_status(current: InternshipStatus, action: InternshipAction) -> InternshipStatus:
    """
    Look up the status a posting moves to

    Raises:
        InvalidTransitionException: action not allowed from current status
    """
    try:
        return INTERNSHIP_TRANSITIONS[(current, action)]
    except KeyError:
        raise InvalidTransitionException("internship", current, action)
