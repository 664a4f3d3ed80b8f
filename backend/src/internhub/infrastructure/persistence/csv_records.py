"""
Legacy CSV Record Codec
Reads and writes internship/application record files in their fixed column order
"""
import csv
from datetime import date, datetime
from pathlib import Path
from typing import Iterable, List, Optional, Type, TypeVar
from enum import Enum

from internhub.domain.entities import (
    Application,
    CompanyRepresentative,
    Internship,
    Staff,
    Student,
)
from internhub.domain.enums import (
    ApplicationStatus,
    InternshipLevel,
    InternshipStatus,
    RepresentativeApprovalStatus,
)
from internhub.domain.value_objects import Email

INTERNSHIP_COLUMNS = [
    "id",
    "title",
    "description",
    "level",
    "preferredMajor",
    "openDate",
    "closeDate",
    "companyName",
    "creatorId",
    "visibilityFlag",
    "numSlots",
    "filledSlots",
    "status",
]

APPLICATION_COLUMNS = [
    "id",
    "internshipId",
    "studentId",
    "dateApplied",
    "status",
    "previousStatus",
]

# Optional trailing column, absent from older files
WITHDRAWAL_REASON_COLUMN = "withdrawalReason"

E = TypeVar("E", bound=Enum)


class RecordFormatError(ValueError):
    """A row that cannot be turned into a record"""

    def __init__(self, path: str, line: int, message: str):
        self.path = path
        self.line = line
        super().__init__(f"{path}:{line}: {message}")


def parse_enum(enum_cls: Type[E], raw: str) -> E:
    """Accept both 'WithdrawalRequested' and legacy 'WITHDRAWAL_REQUESTED'"""
    key = raw.strip().replace("_", "").replace(" ", "").lower()
    for member in enum_cls:
        if member.value.replace(" ", "").lower() == key or member.name.replace("_", "").lower() == key:
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {raw!r}")


def parse_bool(raw: str) -> bool:
    value = raw.strip().lower()
    if value in {"true", "1", "yes", "y"}:
        return True
    if value in {"false", "0", "no", "n", ""}:
        return False
    raise ValueError(f"Not a boolean: {raw!r}")


def internship_to_row(internship: Internship) -> List[str]:
    return [
        str(internship.id),
        internship.title,
        internship.description,
        internship.level.value,
        internship.preferred_major,
        internship.open_date.isoformat(),
        internship.close_date.isoformat(),
        internship.company_name,
        internship.creator_id,
        "true" if internship.visible else "false",
        str(internship.num_slots),
        str(internship.filled_slots),
        internship.status.value,
    ]


def row_to_internship(row: List[str]) -> Internship:
    if len(row) < len(INTERNSHIP_COLUMNS):
        raise ValueError(f"Expected {len(INTERNSHIP_COLUMNS)} columns, got {len(row)}")
    if int(row[10]) < 1:
        raise ValueError(f"numSlots must be at least 1, got {row[10]}")
    if int(row[11]) < 0:
        raise ValueError(f"filledSlots cannot be negative, got {row[11]}")
    return Internship(
        id=int(row[0]),
        title=row[1],
        description=row[2],
        level=InternshipLevel.parse(row[3]),
        preferred_major=row[4],
        open_date=date.fromisoformat(row[5].strip()),
        close_date=date.fromisoformat(row[6].strip()),
        company_name=row[7],
        creator_id=row[8],
        visible=parse_bool(row[9]),
        num_slots=int(row[10]),
        filled_slots=int(row[11]),
        status=parse_enum(InternshipStatus, row[12]),
    )


def application_to_row(application: Application, with_reason: bool = True) -> List[str]:
    row = [
        str(application.id),
        str(application.internship_id),
        application.student_id,
        application.date_applied.isoformat(),
        application.status.value,
        application.previous_status.value if application.previous_status else "",
    ]
    if with_reason:
        row.append(application.withdrawal_reason or "")
    return row


def row_to_application(row: List[str]) -> Application:
    if len(row) < len(APPLICATION_COLUMNS):
        raise ValueError(f"Expected {len(APPLICATION_COLUMNS)} columns, got {len(row)}")
    previous: Optional[ApplicationStatus] = None
    if row[5].strip():
        previous = parse_enum(ApplicationStatus, row[5])
    reason = row[6] if len(row) > 6 and row[6] else None
    return Application(
        id=int(row[0]),
        internship_id=int(row[1]),
        student_id=row[2],
        date_applied=datetime.fromisoformat(row[3].strip()),
        status=parse_enum(ApplicationStatus, row[4]),
        previous_status=previous,
        withdrawal_reason=reason,
    )


def _read_rows(path: Path, columns: List[str]) -> Iterable[tuple]:
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        header = next(reader, None)
        if header is None:
            return
        if [h.strip() for h in header[:len(columns)]] != columns:
            raise RecordFormatError(str(path), 1, f"unexpected header {header}")
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            yield reader.line_num, row


def read_internships(path: Path) -> List[Internship]:
    internships = []
    for line, row in _read_rows(Path(path), INTERNSHIP_COLUMNS):
        try:
            internships.append(row_to_internship(row))
        except ValueError as e:
            raise RecordFormatError(str(path), line, str(e))
    return internships


def read_applications(path: Path) -> List[Application]:
    applications = []
    for line, row in _read_rows(Path(path), APPLICATION_COLUMNS):
        try:
            applications.append(row_to_application(row))
        except ValueError as e:
            raise RecordFormatError(str(path), line, str(e))
    return applications


def write_internships(path: Path, internships: Iterable[Internship]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(INTERNSHIP_COLUMNS)
        writer.writerows(internship_to_row(i) for i in internships)


def write_applications(path: Path, applications: Iterable[Application]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow(APPLICATION_COLUMNS + [WITHDRAWAL_REASON_COLUMN])
        writer.writerows(application_to_row(a) for a in applications)


# User lists carry a free-form header; columns are positional and passwords are ignored.
# Students:        StudentID,Name,Major,Year,Email[,Password]
# Staff:           StaffID,Name,Role,Department,Email[,Password]
# Representatives: CompanyRepID,Name,CompanyName,Department,Position,Email[,Password,Status]

def _read_user_rows(path: Path, min_columns: int) -> Iterable[tuple]:
    with open(path, newline="", encoding="utf-8") as handle:
        reader = csv.reader(handle)
        next(reader, None)
        for row in reader:
            if not any(cell.strip() for cell in row):
                continue
            if len(row) < min_columns:
                raise RecordFormatError(str(path), reader.line_num, f"expected {min_columns} columns")
            yield reader.line_num, [cell.strip() for cell in row]


def read_students(path: Path) -> List[Student]:
    students = []
    for line, row in _read_user_rows(Path(path), 5):
        try:
            students.append(Student(
                id=row[0], name=row[1], email=Email(row[4]),
                year_of_study=int(row[3]), major=row[2],
            ))
        except ValueError as e:
            raise RecordFormatError(str(path), line, str(e))
    return students


def read_staff(path: Path) -> List[Staff]:
    staff = []
    for line, row in _read_user_rows(Path(path), 5):
        try:
            staff.append(Staff(id=row[0], name=row[1], email=Email(row[4]), department=row[3]))
        except ValueError as e:
            raise RecordFormatError(str(path), line, str(e))
    return staff


def read_representatives(path: Path) -> List[CompanyRepresentative]:
    representatives = []
    for line, row in _read_user_rows(Path(path), 6):
        try:
            status = RepresentativeApprovalStatus.PENDING
            if len(row) > 7 and row[7]:
                status = parse_enum(RepresentativeApprovalStatus, row[7])
            representatives.append(CompanyRepresentative(
                id=row[0], name=row[1], email=Email(row[5]),
                company_name=row[2], department=row[3], position=row[4],
                approval_status=status,
            ))
        except ValueError as e:
            raise RecordFormatError(str(path), line, str(e))
    return representatives
