import sys
import os
import unittest
from unittest.mock import MagicMock, call

current_dir = os.path.dirname(os.path.abspath(__file__))
project_root = os.path.abspath(os.path.join(current_dir, '..'))

# Add the project root to the system path
sys.path.insert(0, project_root)

from utils.cht_api import ChtApi, ChtApiError, REQUEST_TIMEOUT
from utils.settings import Settings

SETTINGS = Settings(cht_url="http://cht.test/", admin_username="medic", admin_password="password")


def make_response(payload=None, status_code=200):
    response = MagicMock()
    response.ok = 200 <= status_code < 300
    response.status_code = status_code
    response.content = b"{}" if payload is not None else b""
    response.json.return_value = payload
    response.text = str(payload)
    return response


class TestChtApi(unittest.TestCase):

    def setUp(self):
        self.session = MagicMock()
        self.api = ChtApi(SETTINGS, session=self.session)

    def test_uses_admin_credentials(self):
        self.assertEqual(self.session.auth, ("medic", "password"))

    def test_save_docs_posts_bulk_docs(self):
        docs = [{"_id": "a"}, {"_id": "b"}]
        self.session.request.return_value = make_response([{"id": "a", "ok": True}, {"id": "b", "ok": True}])

        self.api.save_docs(docs)

        self.session.request.assert_called_once_with(
            "POST", "http://cht.test/medic/_bulk_docs", timeout=REQUEST_TIMEOUT, json={"docs": docs}
        )

    def test_save_docs_raises_on_document_errors(self):
        self.session.request.return_value = make_response([
            {"id": "a", "ok": True},
            {"id": "b", "error": "conflict", "reason": "Document update conflict."},
        ])

        with self.assertRaises(ChtApiError) as ctx:
            self.api.save_docs([{"_id": "a"}, {"_id": "b"}])
        self.assertIn("'b'", str(ctx.exception))

    def test_http_errors_raise_with_status(self):
        self.session.request.return_value = make_response({"error": "unauthorized"}, status_code=401)

        with self.assertRaises(ChtApiError) as ctx:
            self.api.get_doc("form:missing")
        self.assertEqual(ctx.exception.status_code, 401)

    def test_delete_docs_skips_missing_and_deleted(self):
        self.session.request.side_effect = [
            make_response({"rows": [
                {"id": "a", "value": {"rev": "1-a"}},
                {"key": "b", "error": "not_found"},
                {"id": "c", "value": {"rev": "2-c", "deleted": True}},
            ]}),
            make_response([{"id": "a", "ok": True}]),
        ]

        self.api.delete_docs(["a", "b", "c"])

        bulk_call = self.session.request.call_args_list[1]
        self.assertEqual(bulk_call.kwargs["json"], {"docs": [{"_id": "a", "_rev": "1-a", "_deleted": True}]})

    def test_delete_docs_without_ids_makes_no_request(self):
        self.assertEqual(self.api.delete_docs([]), [])
        self.session.request.assert_not_called()

    def test_seed_test_data_keeps_stored_revision(self):
        contact = {"_id": "contact-1", "name": "Jane"}
        self.session.request.side_effect = [
            make_response([{"id": "form:dd", "ok": True}]),
            make_response({"_id": "contact-1", "_rev": "3-abc"}),
            make_response({"ok": True}),
        ]

        self.api.seed_test_data(contact, [{"_id": "form:dd"}])

        save_call = self.session.request.call_args_list[2]
        self.assertEqual(save_call, call(
            "POST", "http://cht.test/medic", timeout=REQUEST_TIMEOUT,
            json={"_id": "contact-1", "name": "Jane", "_rev": "3-abc"},
        ))

    def test_create_users_disables_password_change(self):
        self.session.request.return_value = make_response({"user": {"id": "org.couchdb.user:chw"}})

        self.api.create_users([{"username": "chw", "password": "Secret_1"}])

        body = self.session.request.call_args.kwargs["json"]
        self.assertEqual(body["username"], "chw")
        self.assertIs(body["password_change_required"], False)

    def test_delete_users(self):
        self.session.request.return_value = make_response(None)

        self.api.delete_users([{"username": "chw"}])

        self.session.request.assert_called_once_with(
            "DELETE", "http://cht.test/api/v1/users/chw", timeout=REQUEST_TIMEOUT
        )


if __name__ == '__main__':
    unittest.main()
