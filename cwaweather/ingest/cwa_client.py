"""CWA open-data API client. Single request per call; no retry or cache."""

import logging
from typing import Any

import httpx

from cwaweather.config.schema import CWA_BASE_URL

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 10.0
FALLBACK_ERROR_MESSAGE = "無法取得天氣資料"


class MissingApiKeyError(ValueError):
    """Raised when no CWA credential is configured."""


class CwaApiError(Exception):
    """Raised when the CWA API answers with a non-2xx status."""

    def __init__(self, status_code: int, body: Any):
        self.status_code = status_code
        self.body = body
        message = body.get("message") if isinstance(body, dict) else None
        self.message = message or FALLBACK_ERROR_MESSAGE
        super().__init__(f"HTTP {status_code}: {self.message}")


def _error_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except ValueError:
        return {"message": resp.text}


class CwaClient:
    def __init__(
        self,
        api_key: str,
        base_url: str = CWA_BASE_URL,
        timeout: float = DEFAULT_TIMEOUT,
    ):
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout

    def get_forecast(self, dataset_id: str) -> dict:
        """Fetch the raw datastore payload for one F-D0047 dataset.

        Upstream error statuses raise CwaApiError carrying the status and
        body untouched; transport errors propagate as httpx.RequestError.
        """
        if not self.api_key:
            raise MissingApiKeyError("CWA_API_KEY is not configured")

        url = f"{self.base_url}/v1/rest/datastore/{dataset_id}"
        params = {"Authorization": self.api_key}
        try:
            resp = httpx.get(
                url, params=params, timeout=self.timeout, follow_redirects=True
            )
        except httpx.RequestError as e:
            logger.error("CWA request failed for dataset=%s: %s", dataset_id, e)
            raise

        if not resp.is_success:
            body = _error_body(resp)
            logger.error(
                "CWA API returned %d for dataset=%s: %s",
                resp.status_code, dataset_id, body,
            )
            raise CwaApiError(resp.status_code, body)

        return resp.json()
