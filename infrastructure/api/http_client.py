import logging
from typing import Any, Optional

import requests

from use_cases.errors import NetworkError, NetworkTimeout

log = logging.getLogger(__name__)

CONNECT_ERROR_MESSAGE = "Unable to connect to the server. Please check your internet connection."


class ApiClient:
    """
    Thin JSON client for the marketplace backend.
    One requests.Session per browser session keeps the backend's auth cookie
    between calls.
    """

    def __init__(self, base_url: str, timeout: float = 20.0, session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _url(self, path: str) -> str:
        return f"{self.base_url}/{path.lstrip('/')}"

    def request(
        self,
        method: str,
        path: str,
        *,
        params: Optional[dict] = None,
        json: Any = None,
        data: Optional[dict] = None,
        files: Optional[dict] = None,
    ) -> dict:
        url = self._url(path)
        if params:
            params = {k: v for k, v in params.items() if v is not None}
        try:
            resp = self.session.request(
                method,
                url,
                params=params or None,
                json=json,
                data=data,
                files=files,
                timeout=self.timeout,
            )
        except requests.Timeout as e:
            log.error(f"❌ {method} {path} timed out after {self.timeout}s")
            raise NetworkTimeout(f"The server did not respond within {self.timeout:g} seconds.") from e
        except requests.RequestException as e:
            log.error(f"❌ Network error on {method} {path}: {e}")
            raise NetworkError(CONNECT_ERROR_MESSAGE) from e

        payload = self._decode(resp)
        if not 200 <= resp.status_code < 300:
            message = payload.get("message") if isinstance(payload, dict) else None
            log.warning(f"⚠️ {method} {path} -> HTTP {resp.status_code}")
            raise NetworkError(
                message or f"Request failed with HTTP {resp.status_code}",
                status_code=resp.status_code,
                payload=payload if isinstance(payload, dict) else None,
            )
        if payload is None:
            raise NetworkError("Invalid response received from server", status_code=resp.status_code)
        return payload

    @staticmethod
    def _decode(resp) -> Any:
        if not resp.content:
            return {}
        try:
            return resp.json()
        except ValueError:
            return None

    def get(self, path: str, params: Optional[dict] = None) -> dict:
        return self.request("GET", path, params=params)

    def post(self, path: str, json: Any = None, data: Optional[dict] = None, files: Optional[dict] = None) -> dict:
        return self.request("POST", path, json=json, data=data, files=files)

    def put(self, path: str, json: Any = None) -> dict:
        return self.request("PUT", path, json=json)
