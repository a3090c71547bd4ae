"""JSON client for the CampusVoice API.

Every call returns ``(status_code, body)``; HTTP error statuses are data
for the view models in views.py, not exceptions. Transport failures are
reported as status 0 with body None.
"""

import logging
from typing import Any, Dict, Optional, Tuple
from urllib.parse import quote

import httpx

logger = logging.getLogger(__name__)

Result = Tuple[int, Any]


class CampusVoiceClient:
    def __init__(
        self,
        base_url: str = "http://localhost:8000",
        transport: Optional[httpx.BaseTransport] = None,
        http: Optional[httpx.Client] = None,
        timeout: float = 10,
    ):
        # An explicit http client (e.g. a TestClient) wins over base_url/transport
        self.http = http or httpx.Client(base_url=base_url, transport=transport, timeout=timeout)

    def close(self) -> None:
        self.http.close()

    def _call(self, method: str, url: str, **kwargs) -> Result:
        try:
            resp = self.http.request(method, url, **kwargs)
        except httpx.HTTPError as e:
            logger.warning("%s %s failed: %s", method, url, e)
            return 0, None
        try:
            body = resp.json()
        except ValueError:
            body = None
        return resp.status_code, body

    # --- public ---

    def submit_complaint(self, title: str, description: str, category: str, location: str) -> Result:
        return self._call(
            "POST",
            "/api/complaints",
            json={"title": title, "description": description, "category": category, "location": location},
        )

    def track(self, tracking_code: str) -> Result:
        return self._call("GET", f"/api/complaints/{quote(tracking_code.strip(), safe='')}")

    # --- admin ---

    def list_complaints(self, params: Optional[Dict[str, str]] = None) -> Result:
        return self._call("GET", "/api/admin/complaints", params=params or {})

    def update_complaint(self, complaint_pk: int, body: Dict[str, Any]) -> Result:
        return self._call("PATCH", f"/api/admin/complaints/{complaint_pk}", json=body)

    def stats(self) -> Result:
        return self._call("GET", "/api/admin/stats")

    # --- session ---

    def oauth_redirect_url(self) -> Result:
        return self._call("GET", "/api/oauth/google/redirect_url")

    def exchange_code(self, code: str) -> Result:
        return self._call("POST", "/api/sessions", json={"code": code})

    def me(self) -> Result:
        return self._call("GET", "/api/users/me")

    def logout(self) -> Result:
        return self._call("GET", "/api/logout")
