from __future__ import annotations

import math
from dataclasses import dataclass, field
from datetime import datetime, time, timezone as dt_timezone

from django.utils import timezone

from core.models import Status, University

TOP_LIMIT = 5
URGENT_DAYS = 7
SECONDS_PER_DAY = 24 * 60 * 60


@dataclass
class StatusCounts:
    total: int = 0
    by_status: dict[str, int] = field(default_factory=lambda: {s.value: 0 for s in Status})

    def rows(self) -> list[tuple[str, int, float]]:
        """(status, count, percent of total) in enum order, for the UI."""
        return [(s, c, percent(c, self.total)) for s, c in self.by_status.items()]


@dataclass
class FinancialSummary:
    total_fees: float = 0.0
    avg_scholarship: float = 0.0
    max_scholarship: float = 0.0


@dataclass
class UpcomingDeadline:
    university: University
    days_left: int

    @property
    def urgent(self) -> bool:
        return self.days_left <= URGENT_DAYS


def percent(count: int, total: int) -> float:
    if not total or total <= 0:
        return 0.0
    return (count / total) * 100


def status_counts(records: list[University]) -> StatusCounts:
    """One pass; each record lands in exactly one bucket."""
    counts = StatusCounts()
    for r in records:
        counts.by_status[Status(r.status).value] += 1
        counts.total += 1
    return counts


def financial_summary(records: list[University]) -> FinancialSummary:
    if not records:
        return FinancialSummary()
    fees = sum(r.application_fees or 0 for r in records)
    scholarships = [r.scholarship_percentage or 0 for r in records]
    return FinancialSummary(
        total_fees=fees,
        avg_scholarship=sum(scholarships) / len(scholarships),
        # floor at 0, same as the empty case
        max_scholarship=max([0, *scholarships]),
    )


def _country_tally(records: list[University]) -> dict[str, int]:
    tally: dict[str, int] = {}
    for r in records:
        tally[r.country] = tally.get(r.country, 0) + 1
    return tally


def country_count(records: list[University]) -> int:
    return len(_country_tally(records))


def top_countries(records: list[University], limit: int = TOP_LIMIT) -> list[tuple[str, int]]:
    """
    Countries by record count, highest first. sorted() is stable and the
    tally keeps insertion order, so ties stay in first-seen order.
    """
    ranked = sorted(_country_tally(records).items(), key=lambda kv: kv[1], reverse=True)
    return ranked[:limit]


def deadline_instant(r: University) -> datetime:
    """A date-only deadline is taken as midnight UTC of that day."""
    return datetime.combine(r.deadline, time.min, tzinfo=dt_timezone.utc)


def upcoming_deadlines(
    records: list[University], now: datetime | None = None, limit: int = TOP_LIMIT
) -> list[UpcomingDeadline]:
    """
    Deadlines strictly after `now`, soonest first, each with the whole
    number of days left (partial days round up).
    """
    now = now or timezone.now()
    future = [r for r in records if deadline_instant(r) > now]
    future.sort(key=deadline_instant)
    out = []
    for r in future[:limit]:
        delta = (deadline_instant(r) - now).total_seconds()
        out.append(UpcomingDeadline(university=r, days_left=math.ceil(delta / SECONDS_PER_DAY)))
    return out
