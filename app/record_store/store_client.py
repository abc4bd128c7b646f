# app/record_store/store_client.py
"""
Record Store Client
Thin HTTP wrapper over the json-server style document store.

- 404 on a single record → RecordNotFoundError
- any other non-2xx status or transport failure → RecordStoreError
"""
import logging
from typing import Any, Dict, List, Optional

import requests

from app.record_store.errors import RecordNotFoundError, RecordStoreError
from config.appconfig import settings

logger = logging.getLogger(__name__)


class RecordStoreClient:
    def __init__(self, base_url: Optional[str] = None, session: Optional[requests.Session] = None):
        self.base_url = (base_url or settings.record_store_base).rstrip("/")
        self.session = session or requests.Session()

    def _url(self, resource: str, record_id: Optional[str] = None) -> str:
        if record_id is None:
            return f"{self.base_url}/{resource}"
        return f"{self.base_url}/{resource}/{record_id}"

    def _request(
        self,
        method: str,
        resource: str,
        record_id: Optional[str] = None,
        **kwargs,
    ) -> requests.Response:
        url = self._url(resource, record_id)
        try:
            response = self.session.request(method, url, **kwargs)
        except requests.RequestException as e:
            raise RecordStoreError(f"{method} {url} failed: {e}") from e

        logger.debug(f"{method} {url} -> {response.status_code}")

        if response.status_code == 404 and record_id is not None:
            raise RecordNotFoundError(resource, record_id)
        if not response.ok:
            raise RecordStoreError(
                f"{method} {url} returned {response.status_code}",
                status_code=response.status_code,
            )
        return response

    # ============================================================
    # ✅ CRUD
    # ============================================================

    def list(self, resource: str, params: Optional[Dict[str, str]] = None) -> List[Dict[str, Any]]:
        return self._request("GET", resource, params=params or None).json()

    def get(self, resource: str, record_id: str) -> Dict[str, Any]:
        return self._request("GET", resource, record_id).json()

    def create(self, resource: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("POST", resource, json=data).json()

    def replace(self, resource: str, record_id: str, data: Dict[str, Any]) -> Dict[str, Any]:
        return self._request("PUT", resource, record_id, json=data).json()

    def delete(self, resource: str, record_id: str) -> None:
        self._request("DELETE", resource, record_id)

    def close(self):
        self.session.close()


def get_record_store():
    """FastAPI dependency yielding a Record Store client for one request."""
    store = RecordStoreClient()
    try:
        yield store
    finally:
        store.close()
