"""
Domain types for UniTracker.

Records are stored in Supabase, not in Django's database, so these are
plain dataclasses built from PostgREST rows rather than ORM models.

Notes:
- `Status` reuses Django's TextChoices so forms and templates get labels for free.
- `University.from_row()` rejects unknown statuses; every record in memory
  carries one of the five known values.
"""

from dataclasses import dataclass
from datetime import date, datetime

from django.db import models
from django.utils.dateparse import parse_date, parse_datetime


class Status(models.TextChoices):
    APPLYING   = "Applying",   "Applying"
    WAITING    = "Waiting",    "Waiting"
    ACCEPTED   = "Accepted",   "Accepted"
    WAITLISTED = "Waitlisted", "Waitlisted"
    REJECTED   = "Rejected",   "Rejected"


def _parse_deadline(value) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    # Accept both '2025-01-15' and '2025-01-15T00:00:00+00:00'
    raw = str(value or "").split("T")[0]
    parsed = parse_date(raw)
    if parsed is None:
        raise ValueError(f"Invalid deadline: {value!r}")
    return parsed


def _parse_timestamp(value) -> datetime | None:
    if not value:
        return None
    if isinstance(value, datetime):
        return value
    parsed = parse_datetime(str(value))
    if parsed is None:
        raise ValueError(f"Invalid timestamp: {value!r}")
    return parsed


@dataclass
class University:
    """
    One tracked university application, owned by a single user.
    `id`, `user_id` and the timestamps are assigned by the backend.
    """
    id: str
    user_id: str
    name: str
    country: str
    deadline: date
    scholarship_percentage: float = 0.0
    application_fees: float = 0.0
    notes: str = ""
    status: str = Status.APPLYING
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: dict) -> "University":
        status = row.get("status") or Status.APPLYING
        if status not in Status.values:
            raise ValueError(f"Unknown status: {status!r}")
        return cls(
            id=str(row["id"]),
            user_id=str(row["user_id"]),
            name=row.get("name") or "",
            country=row.get("country") or "",
            deadline=_parse_deadline(row.get("deadline")),
            scholarship_percentage=float(row.get("scholarship_percentage") or 0),
            application_fees=float(row.get("application_fees") or 0),
            notes=row.get("notes") or "",
            status=Status(status),
            created_at=_parse_timestamp(row.get("created_at")),
            updated_at=_parse_timestamp(row.get("updated_at")),
        )

    def __str__(self) -> str:
        return f"{self.name} ({self.country})"

    def get_status_display(self) -> str:
        return Status(self.status).label

    def initial_form_data(self) -> dict:
        """Values for pre-filling the edit form."""
        return {
            "name": self.name,
            "country": self.country,
            "deadline": self.deadline,
            "scholarship_percentage": self.scholarship_percentage,
            "application_fees": self.application_fees,
            "notes": self.notes,
            "status": self.status,
        }


@dataclass
class BackendUser:
    """The signed-in user as reported by the auth backend."""
    id: str
    email: str = ""
    created_at: datetime | None = None

    @classmethod
    def from_payload(cls, payload: dict) -> "BackendUser":
        return cls(
            id=str(payload["id"]),
            email=payload.get("email") or "",
            created_at=_parse_timestamp(payload.get("created_at")),
        )

    def to_session(self) -> dict:
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }
