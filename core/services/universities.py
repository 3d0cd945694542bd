"""
Record store for university applications, backed by the Supabase
`universities` table.

Every query is scoped to a user: listing filters on `user_id`, and
update/delete add a `user_id` filter next to the `id` filter so a user can
never touch someone else's row even if they guess its id.

    store = UniversityStore(access_token)
    store.list_for_user(uid)          -> [University, ...] newest first
    store.get_by_id(record_id)        -> University | None
    store.insert(draft, uid)          -> University
    store.update(record_id, uid, patch) -> bool
    store.delete(record_id, uid)      -> bool
"""

import logging

from django.utils import timezone

from core.models import University
from core.supabase import SupabaseError, rest

logger = logging.getLogger(__name__)

TABLE = "universities"

# Columns a client may write. id/user_id/timestamps are owned by the store.
WRITABLE_FIELDS = (
    "name",
    "country",
    "deadline",
    "scholarship_percentage",
    "application_fees",
    "notes",
    "status",
)

RETURN_ROWS = {"Prefer": "return=representation"}


def _eq(value) -> str:
    return f"eq.{value}"


def _to_records(rows) -> list[University]:
    try:
        return [University.from_row(r) for r in rows or []]
    except (KeyError, ValueError, TypeError) as e:
        raise SupabaseError(f"Malformed university record: {e}") from e


def _clean_payload(data: dict) -> dict:
    """Keep writable columns only and make values JSON-safe."""
    out = {}
    for key in WRITABLE_FIELDS:
        if key not in data:
            continue
        val = data[key]
        if key == "deadline" and hasattr(val, "isoformat"):
            val = val.isoformat()
        elif key in ("scholarship_percentage", "application_fees") and val is not None:
            val = float(val)
        elif key == "status" and val is not None:
            val = str(val)
        out[key] = val
    return out


class UniversityStore:
    def __init__(self, access_token: str | None = None):
        self.access_token = access_token

    def _rest(self, method: str, **kwargs):
        return rest(method, TABLE, access_token=self.access_token, **kwargs)

    def list_for_user(self, user_id: str) -> list[University]:
        rows = self._rest(
            "GET",
            params={
                "select": "*",
                "user_id": _eq(user_id),
                "order": "created_at.desc",
            },
        )
        return _to_records(rows)

    def get_by_id(self, record_id: str, user_id: str | None = None) -> University | None:
        params = {"select": "*", "id": _eq(record_id)}
        if user_id:
            params["user_id"] = _eq(user_id)
        records = _to_records(self._rest("GET", params=params))
        return records[0] if records else None

    def insert(self, draft: dict, user_id: str) -> University:
        payload = _clean_payload(draft)
        payload["user_id"] = user_id
        rows = self._rest("POST", json=[payload], headers=RETURN_ROWS)
        records = _to_records(rows)
        if not records:
            raise SupabaseError("Insert returned no record")
        logger.info("Inserted university %s for user %s", records[0].id, user_id)
        return records[0]

    def update(self, record_id: str, user_id: str, patch: dict) -> bool:
        """
        Apply `patch` to the record if it belongs to `user_id`.
        Returns False when nothing matched (missing or someone else's record).
        """
        payload = _clean_payload(patch)
        payload["updated_at"] = timezone.now().isoformat()
        rows = self._rest(
            "PATCH",
            params={"id": _eq(record_id), "user_id": _eq(user_id)},
            json=payload,
            headers=RETURN_ROWS,
        )
        return bool(rows)

    def delete(self, record_id: str, user_id: str) -> bool:
        rows = self._rest(
            "DELETE",
            params={"id": _eq(record_id), "user_id": _eq(user_id)},
            headers=RETURN_ROWS,
        )
        if rows:
            logger.info("Deleted university %s for user %s", record_id, user_id)
        return bool(rows)


def store_for(request) -> UniversityStore:
    """Store bound to the access token of the request's signed-in user."""
    session = getattr(request, "backend_session", None) or {}
    return UniversityStore(session.get("access_token"))
