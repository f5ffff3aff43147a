"""
LittleBridge API Client
=======================
Thin wrapper over the HTTP API. `ApiClient.fetch_api` is the single request
primitive; the resource namespaces (`client.centers.list(...)`,
`client.families.add_child(...)`) only turn their arguments into a path,
method and JSON body for it. Validation is the caller's job.

The underlying `requests.Session` keeps the auth cookie set by sign-in, so
every later call is authenticated.
"""
from typing import Any, Dict, Optional

import requests

from littlebridge.config import settings

FALLBACK_ERROR = "Request failed"


class ApiError(Exception):
    """Non-2xx response. `message` is the server's `error` field when it sent one."""

    def __init__(self, message: str, status_code: Optional[int] = None, kind: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.kind = kind

    @property
    def is_duplicate(self) -> bool:
        return self.kind == "duplicate" or "duplicate" in self.message.lower()


class ApiClient:
    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.api_base_url).rstrip("/")
        self.session = session or requests.Session()

        self.auth = AuthApi(self)
        self.centers = CentersApi(self)
        self.enquiries = EnquiriesApi(self)
        self.educators = EducatorsApi(self)
        self.families = FamiliesApi(self)
        self.admin = AdminApi(self)
        self.waitlist = WaitlistApi(self)

    def fetch_api(self, path: str, method: str = "GET", headers: Optional[Dict[str, str]] = None, **kwargs) -> Any:
        """
        Issue one request against `{base_url}/api{path}` and return the decoded JSON body.
        Extra keyword arguments go straight to `requests` (json=, params=, ...).
        Raises ApiError for any status >= 300.
        """
        merged_headers = {"Content-Type": "application/json", **(headers or {})}
        resp = self.session.request(
            method,
            f"{self.base_url}/api{path}",
            headers=merged_headers,
            **kwargs
        )
        if resp.status_code >= 300:
            raise self._error_from(resp)
        if resp.status_code == 204 or not resp.content:
            return None
        return resp.json()

    @staticmethod
    def _error_from(resp: requests.Response) -> ApiError:
        try:
            body = resp.json()
        except ValueError:
            body = None
        if not isinstance(body, dict):
            return ApiError(FALLBACK_ERROR, resp.status_code)
        return ApiError(body.get("error") or FALLBACK_ERROR, resp.status_code, body.get("kind"))


class _Namespace:
    def __init__(self, client: ApiClient):
        self._client = client

    def _call(self, path: str, method: str = "GET", **kwargs) -> Any:
        return self._client.fetch_api(path, method=method, **kwargs)


class AuthApi(_Namespace):
    def sign_up(self, data: Dict[str, Any]):
        return self._call("/auth/signup", "POST", json=data)

    def sign_in(self, data: Dict[str, Any]):
        return self._call("/auth/signin", "POST", json=data)

    def sign_out(self):
        return self._call("/auth/signout", "POST")

    def me(self):
        return self._call("/auth/me")

    def forgot_password(self, email: str):
        return self._call("/auth/forgot-password", "POST", json={"email": email})

    def resend_verification(self, email: str):
        return self._call("/auth/resend-verification", "POST", json={"email": email})


class CentersApi(_Namespace):
    def list(self, search: Optional[str] = None, language: Optional[str] = None, ccs: bool = False):
        """Directory search; only the filters that are set become query parameters"""
        params = {}
        if search:
            params["search"] = search
        if language:
            params["language"] = language
        if ccs:
            params["ccs"] = "true"
        return self._call("/centers", params=params)

    def get(self, slug: str):
        return self._call(f"/centers/{slug}")


class EnquiriesApi(_Namespace):
    def create(self, data: Dict[str, Any]):
        return self._call("/enquiries", "POST", json=data)

    def list(self):
        return self._call("/enquiries")

    def update(self, enquiry_id: str, data: Dict[str, Any]):
        return self._call(f"/enquiries/{enquiry_id}", "PATCH", json=data)


class EducatorsApi(_Namespace):
    def create(self, data: Dict[str, Any]):
        return self._call("/educators", "POST", json=data)


class FamiliesApi(_Namespace):
    def get_profile(self):
        return self._call("/families/profile")

    def update_profile(self, data: Dict[str, Any]):
        return self._call("/families/profile", "PUT", json=data)

    def get_children(self):
        return self._call("/families/children")

    def add_child(self, data: Dict[str, Any]):
        return self._call("/families/children", "POST", json=data)

    def update_child(self, child_id: str, data: Dict[str, Any]):
        return self._call(f"/families/children/{child_id}", "PUT", json=data)

    def delete_child(self, child_id: str):
        return self._call(f"/families/children/{child_id}", "DELETE")


class AdminApi(_Namespace):
    def stats(self):
        return self._call("/admin/stats")

    def enquiries(self):
        return self._call("/admin/enquiries")

    def centers(self):
        return self._call("/admin/centers")

    def educators(self):
        return self._call("/admin/educators")


class WaitlistApi(_Namespace):
    def join(self, email: str, suburb: Optional[str] = None):
        return self._call("/waitlist", "POST", json={"email": email, "suburb": suburb})
