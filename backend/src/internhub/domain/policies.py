"""
Eligibility Policies
Pure rules deciding what a student may see and apply for
"""
from datetime import date

from .entities import Internship, Student
from .enums import InternshipLevel, InternshipStatus

SENIOR_LEVELS = frozenset({InternshipLevel.INTERMEDIATE, InternshipLevel.ADVANCED})


def is_listed(internship: Internship) -> bool:
    """Visibility flag on and approved by staff"""
    return internship.visible and internship.status == InternshipStatus.APPROVED


def level_allowed(level: InternshipLevel, year_of_study: int, senior_min_year: int = 3) -> bool:
    """Basic is open to any year, Intermediate and Advanced need senior_min_year"""
    if level in SENIOR_LEVELS:
        return year_of_study >= senior_min_year
    return True


def major_matches(internship: Internship, student: Student) -> bool:
    if not internship.preferred_major or not student.major:
        return False
    return internship.preferred_major.strip().lower() == student.major.strip().lower()


def is_visible_to_student(
    internship: Internship,
    student: Student,
    today: date,
    senior_min_year: int = 3,
) -> bool:
    """
    Effective visibility of a posting for one student

    A posting is visible when it is listed, not full, matches the student's
    major and year of study, and today lies in its open/close window.
    """
    return (
        is_listed(internship)
        and not internship.is_full()
        and major_matches(internship, student)
        and level_allowed(internship.level, student.year_of_study, senior_min_year)
        and internship.is_open_on(today)
    )


def can_view_details(
    internship: Internship,
    student: Student,
    today: date,
    senior_min_year: int = 3,
) -> bool:
    """Students keep access to postings they applied to, even once hidden"""
    return (
        is_visible_to_student(internship, student, today, senior_min_year)
        or internship.has_applied(student.id)
    )
