import logging
from typing import Any, Optional

import requests

from conbeekit.api.errors import BridgeConnectionError, BridgeDecodeError, BridgeStatusError
from conbeekit.models.api_response import ApiResponse

logger = logging.getLogger(__name__)


class HttpClient:
    """Blocking JSON-over-HTTP transport for one bridge base URL.

    Every call opens and closes its own session, so an instance carries no
    connection state and can be shared between threads.
    """

    def __init__(self, base_url: str, headers: Optional[dict[str, str]] = None, *,
                 timeout: Optional[float] = None, secret: Optional[str] = None):
        self.base_url = base_url.rstrip("/")
        self.headers = {"Accept": "application/json", **(headers or {})}
        self.timeout = timeout
        self._secret = secret

    def get(self, path: str) -> Any:
        return self._request("GET", path)

    def put(self, path: str, payload: dict) -> Any:
        return self._request("PUT", path, payload)

    def _redact(self, url: str) -> str:
        if self._secret:
            return url.replace(self._secret, "***")
        return url

    def _request(self, method: str, path: str, payload: Optional[dict] = None) -> Any:
        url = f"{self.base_url}/{path}"
        headers = dict(self.headers)
        if payload is not None:
            headers["Content-Type"] = "application/json"

        logger.debug("%s %s", method, self._redact(url))
        try:
            with requests.Session() as session:
                response = session.request(method, url, json=payload, headers=headers,
                                           timeout=self.timeout)
        except requests.RequestException as e:
            raise BridgeConnectionError(f"{method} {self._redact(url)} failed: {e}") from e

        if not response.ok:
            logger.warning("%s %s -> HTTP %s", method, self._redact(url), response.status_code)
            raise BridgeStatusError(response.status_code, self._redact(url),
                                    self._error_records(response))

        try:
            return response.json()
        except ValueError as e:
            raise BridgeDecodeError(f"{method} {self._redact(url)}: response is not JSON: {e}") from e

    @staticmethod
    def _error_records(response: requests.Response) -> list[ApiResponse]:
        try:
            body = response.json()
            if not isinstance(body, list):
                return []
            return [ApiResponse.model_validate(record) for record in body]
        except ValueError:
            # pydantic's ValidationError is a ValueError too
            return []
