import logging
from typing import Any, Dict, List, Optional
from urllib.parse import urlparse

import requests

from essaycheck.core.config import settings
from essaycheck.core.exceptions import ConfigurationError, ResponseError, TransportError

logger = logging.getLogger(__name__)


class HttpGateway:
    """POSTs ``{"message", "history"}`` to the analysis endpoint and returns its ``response`` text.

    One request per call; no retries.
    """

    def __init__(self, endpoint: Optional[str] = None, timeout: Optional[float] = None):
        self.endpoint = settings.ANALYSIS_API_URL if endpoint is None else endpoint
        self.timeout = settings.API_TIMEOUT_S if timeout is None else timeout

    @property
    def is_configured(self) -> bool:
        parsed = urlparse(self.endpoint or "")
        return parsed.scheme in ("http", "https") and bool(parsed.netloc)

    def send(self, *, message: str, history: Optional[List[Dict[str, Any]]] = None) -> str:
        if not self.is_configured:
            raise ConfigurationError(
                "ANALYSIS_API_URL is not set to an http(s) URL. Point it at the analysis endpoint.",
                details={"endpoint": self.endpoint},
            )

        try:
            resp = requests.post(
                self.endpoint,
                json={"message": message, "history": history or []},
                headers={"Content-Type": "application/json"},
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as exc:
            logger.error(f"Analysis endpoint unreachable: {exc}")
            raise TransportError(f"Analysis request failed: {exc}", details={"endpoint": self.endpoint}) from exc

        try:
            data = resp.json()
        except ValueError:
            data = None
        if not isinstance(data, dict):
            data = {}

        if not resp.ok:
            logger.error(f"Analysis endpoint error: {resp.status_code} {resp.reason} {data}")
            err_msg = data.get("error") or data.get("message") or f"HTTP {resp.status_code}: {resp.reason}"
            if data.get("details"):
                err_msg = f"{err_msg} Details: {data['details']}"
            raise ResponseError(str(err_msg), status_code=resp.status_code, details=data)

        reply = data.get("response")
        if not isinstance(reply, str) or not reply:
            logger.error(f"Analysis endpoint returned no response text: {str(data)[:500]}")
            raise ResponseError(
                'Invalid response from analysis endpoint: missing "response"',
                status_code=resp.status_code,
                details=data,
            )
        return reply
