from unittest.mock import MagicMock, patch

import requests
from django.conf import settings
from django.test import SimpleTestCase

from core.supabase import AuthError, SupabaseError, auth, rest


def _resp(status=200, payload=None, text=None):
    r = MagicMock(status_code=status)
    r.json.return_value = payload
    r.text = text if text is not None else ("" if payload is None else "{}")
    return r


class SupabaseRequestTests(SimpleTestCase):
    @patch("core.supabase.requests.request")
    def test_sends_key_and_bearer_token(self, mock_request):
        mock_request.return_value = _resp(200, [])
        rest("GET", "universities", access_token="user-token", params={"select": "*"})

        args, kwargs = mock_request.call_args
        self.assertEqual(args[0], "GET")
        self.assertTrue(args[1].endswith("/rest/v1/universities"))
        self.assertEqual(kwargs["headers"]["apikey"], settings.SUPABASE_ANON_KEY)
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer user-token")
        self.assertEqual(kwargs["params"], {"select": "*"})

    @patch("core.supabase.requests.request")
    def test_anon_key_is_bearer_without_user_token(self, mock_request):
        mock_request.return_value = _resp(200, [])
        rest("GET", "universities")
        headers = mock_request.call_args.kwargs["headers"]
        self.assertEqual(headers["Authorization"], f"Bearer {settings.SUPABASE_ANON_KEY}")

    @patch("core.supabase.requests.request")
    def test_backend_message_is_kept_verbatim(self, mock_request):
        mock_request.return_value = _resp(400, {"message": "duplicate key value violates unique constraint"})
        with self.assertRaises(SupabaseError) as ctx:
            rest("POST", "universities", json=[{}])
        self.assertEqual(str(ctx.exception), "duplicate key value violates unique constraint")
        self.assertEqual(ctx.exception.status, 400)

    @patch("core.supabase.requests.request")
    def test_auth_errors_use_gotrue_fields(self, mock_request):
        mock_request.return_value = _resp(
            400, {"error": "invalid_grant", "error_description": "Invalid login credentials"}
        )
        with self.assertRaises(AuthError) as ctx:
            auth("POST", "token", params={"grant_type": "password"}, json={})
        self.assertEqual(str(ctx.exception), "Invalid login credentials")

    @patch("core.supabase.requests.request")
    def test_non_json_error_falls_back_to_text(self, mock_request):
        r = _resp(502, None, text="Bad Gateway")
        r.json.side_effect = ValueError("no json")
        mock_request.return_value = r
        with self.assertRaises(SupabaseError) as ctx:
            rest("GET", "universities")
        self.assertEqual(str(ctx.exception), "Bad Gateway")

    @patch("core.supabase.requests.request")
    def test_transport_error_is_wrapped(self, mock_request):
        mock_request.side_effect = requests.ConnectionError("connection refused")
        with self.assertRaises(SupabaseError) as ctx:
            rest("GET", "universities")
        self.assertIn("connection refused", str(ctx.exception))

    @patch("core.supabase.requests.request")
    def test_empty_body_returns_none(self, mock_request):
        mock_request.return_value = _resp(204, None, text="")
        self.assertIsNone(auth("POST", "logout", access_token="t"))
