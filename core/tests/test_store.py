from datetime import timedelta
from unittest.mock import patch

from django.test import SimpleTestCase
from django.utils import timezone

from core.models import Status
from core.services import auth as auth_service
from core.services.universities import UniversityStore
from core.supabase import SupabaseError
from core.tests.fakes import FakeBackendMixin


class UniversityStoreTests(FakeBackendMixin, SimpleTestCase):
    def setUp(self):
        super().setUp()
        self.u1 = self.backend.create_user("u1@example.com")
        self.u2 = self.backend.create_user("u2@example.com")
        self.store1 = UniversityStore(auth_service.sign_in("u1@example.com", "pass12345")["access_token"])
        self.store2 = UniversityStore(auth_service.sign_in("u2@example.com", "pass12345")["access_token"])

    def _draft(self, **overrides):
        draft = {
            "name": "Test U",
            "country": "Testland",
            "deadline": timezone.now().date() + timedelta(days=1),
            "scholarship_percentage": 10,
            "application_fees": 50,
            "notes": "",
            "status": Status.APPLYING,
        }
        draft.update(overrides)
        return draft

    def test_list_for_user_is_scoped_and_newest_first(self):
        first = self.backend.add_row(self.u1["id"], name="First")
        self.backend.add_row(self.u2["id"], name="Someone else's")
        second = self.backend.add_row(self.u1["id"], name="Second")

        records = self.store1.list_for_user(self.u1["id"])

        self.assertEqual([r.id for r in records], [second["id"], first["id"]])
        self.assertTrue(all(r.user_id == self.u1["id"] for r in records))

    def test_list_query_shape(self):
        self.store1.list_for_user(self.u1["id"])
        method, path, params = self.backend.calls[-1]
        self.assertEqual((method, path), ("GET", "/rest/v1/universities"))
        self.assertEqual(params["user_id"], f"eq.{self.u1['id']}")
        self.assertEqual(params["order"], "created_at.desc")

    def test_get_by_id_not_found_is_none(self):
        self.assertIsNone(self.store1.get_by_id("does-not-exist"))

    def test_insert_ignores_client_supplied_identity_fields(self):
        obj = self.store1.insert(
            self._draft(id="forged-id", user_id=self.u2["id"], created_at="1999-01-01"),
            self.u1["id"],
        )
        self.assertNotEqual(obj.id, "forged-id")
        self.assertEqual(obj.user_id, self.u1["id"])
        self.assertEqual(obj.created_at, obj.updated_at)

    def test_end_to_end_insert_update_delete(self):
        tomorrow = timezone.now().date() + timedelta(days=1)
        self.store1.insert(self._draft(deadline=tomorrow), self.u1["id"])

        records = self.store1.list_for_user(self.u1["id"])
        self.assertEqual(len(records), 1)
        rec = records[0]
        self.assertEqual(rec.name, "Test U")
        self.assertEqual(rec.country, "Testland")
        self.assertEqual(rec.deadline, tomorrow)
        self.assertEqual(rec.scholarship_percentage, 10)
        self.assertEqual(rec.application_fees, 50)
        self.assertEqual(rec.status, Status.APPLYING)

        later = timezone.now() + timedelta(minutes=5)
        with patch("core.services.universities.timezone.now", return_value=later):
            self.assertTrue(self.store1.update(rec.id, self.u1["id"], {"status": Status.ACCEPTED}))

        updated = self.store1.list_for_user(self.u1["id"])[0]
        self.assertEqual(updated.status, Status.ACCEPTED)
        self.assertGreater(updated.updated_at, rec.updated_at)
        self.assertEqual(updated.created_at, rec.created_at)

        self.assertTrue(self.store1.delete(rec.id, self.u1["id"]))
        self.assertEqual(self.store1.list_for_user(self.u1["id"]), [])

    def test_update_never_changes_owner(self):
        rec = self.store1.insert(self._draft(), self.u1["id"])
        self.store1.update(rec.id, self.u1["id"], {"user_id": self.u2["id"], "name": "Renamed"})
        again = self.store1.get_by_id(rec.id)
        self.assertEqual(again.user_id, self.u1["id"])
        self.assertEqual(again.name, "Renamed")

    def test_update_with_other_users_id_does_not_touch_record(self):
        rec = self.store1.insert(self._draft(), self.u1["id"])

        # u1's own token, but filtering on u2's id
        self.assertFalse(self.store1.update(rec.id, self.u2["id"], {"status": Status.REJECTED}))
        # u2 trying to reach u1's record
        self.assertFalse(self.store2.update(rec.id, self.u2["id"], {"status": Status.REJECTED}))

        self.assertEqual(self.store1.get_by_id(rec.id).status, Status.APPLYING)

    def test_delete_with_other_users_id_does_not_touch_record(self):
        rec = self.store1.insert(self._draft(), self.u1["id"])

        self.assertFalse(self.store1.delete(rec.id, self.u2["id"]))
        self.assertFalse(self.store2.delete(rec.id, self.u2["id"]))

        self.assertEqual(len(self.store1.list_for_user(self.u1["id"])), 1)

    def test_mutations_always_filter_by_owner(self):
        rec = self.store1.insert(self._draft(), self.u1["id"])
        self.store1.update(rec.id, self.u1["id"], {"notes": "x"})
        self.store1.delete(rec.id, self.u1["id"])
        for method, _path, params in self.backend.calls[-2:]:
            self.assertIn(method, ("PATCH", "DELETE"))
            self.assertEqual(params, {"id": f"eq.{rec.id}", "user_id": f"eq.{self.u1['id']}"})

    def test_backend_error_surfaces_message(self):
        self.backend.fail_next("POST", "/rest/v1/universities", 400, {"message": "value too long"})
        with self.assertRaises(SupabaseError) as ctx:
            self.store1.insert(self._draft(), self.u1["id"])
        self.assertEqual(str(ctx.exception), "value too long")

    def test_unauthenticated_store_is_rejected(self):
        with self.assertRaises(SupabaseError):
            UniversityStore().list_for_user(self.u1["id"])

    def test_malformed_row_raises_store_error(self):
        self.backend.add_row(self.u1["id"], status="Pending")
        with self.assertRaises(SupabaseError):
            self.store1.list_for_user(self.u1["id"])
