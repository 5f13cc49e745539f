"""Client for the CHT data store and users API used to seed test fixtures."""

from typing import Any, Dict, Iterable, List, Optional

import requests
from loguru import logger

from utils.settings import Settings, get_settings

USER_CONTACT_ID = "e2e_contact_test_id"
REQUEST_TIMEOUT = 30  # seconds


class ChtApiError(Exception):
    """Raised when the instance rejects a request."""

    def __init__(self, message: str, status_code: Optional[int] = None, body: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.body = body


class ChtApi:
    def __init__(self, settings: Settings | None = None, session: requests.Session | None = None):
        self.settings = settings or get_settings()
        self.session = session or requests.Session()
        self.session.auth = (self.settings.admin_username, self.settings.admin_password)

    def _request(self, method: str, path: str, **kwargs) -> Any:
        url = f"{self.settings.cht_url}{path}"
        logger.debug(f"{method} {url}")
        response = self.session.request(method, url, timeout=REQUEST_TIMEOUT, **kwargs)
        if not response.ok:
            logger.error(f"{method} {path} failed with {response.status_code}: {response.text}")
            raise ChtApiError(
                f"{method} {path} failed with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response.json() if response.content else None

    # Documents

    def save_docs(self, docs: Iterable[Dict[str, Any]]) -> List[Dict[str, Any]]:
        docs = list(docs)
        results = self._request("POST", "/medic/_bulk_docs", json={"docs": docs})
        failed = [result for result in results if result.get("error")]
        if failed:
            ids = [result.get("id") for result in failed]
            raise ChtApiError(f"Failed to save docs: {ids}", body=failed)
        logger.info(f"Saved {len(docs)} docs")
        return results

    def save_doc(self, doc: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", "/medic", json=doc)

    def get_doc(self, doc_id: str) -> Dict[str, Any]:
        return self._request("GET", f"/medic/{doc_id}")

    def delete_docs(self, ids: Iterable[str]) -> List[Dict[str, Any]]:
        ids = list(ids)
        if not ids:
            return []
        result = self._request("POST", "/medic/_all_docs", json={"keys": ids})
        deletes = [
            {"_id": row["id"], "_rev": row["value"]["rev"], "_deleted": True}
            for row in result["rows"]
            if row.get("value") and not row["value"].get("deleted")
        ]
        if not deletes:
            return []
        return self.save_docs(deletes)

    def seed_test_data(self, user_contact_doc: Dict[str, Any], docs: Iterable[Dict[str, Any]]) -> None:
        """Save `docs` and overwrite the user's contact, keeping its stored revision."""
        self.save_docs(docs)
        stored = self.get_doc(user_contact_doc.get("_id", USER_CONTACT_ID))
        contact = {**user_contact_doc, "_rev": stored["_rev"]}
        self.save_doc(contact)

    # Users

    def create_users(self, users: Iterable[Dict[str, Any]]) -> None:
        for user in users:
            body = {**user, "password_change_required": False}
            self._request("POST", "/api/v1/users", json=body)
            logger.info(f"Created user {user['username']}")

    def delete_users(self, users: Iterable[Dict[str, Any]]) -> None:
        for user in users:
            self._request("DELETE", f"/api/v1/users/{user['username']}")
            logger.info(f"Deleted user {user['username']}")
