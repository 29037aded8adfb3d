from __future__ import annotations

import json
import logging
import threading
from dataclasses import dataclass
from typing import Any, Optional

import requests
from requests import Response


class ProviderError(RuntimeError):
    """Base provider error."""


class ConfigError(ProviderError):
    """Raised when the provider cannot be used because it is not configured."""


class UpstreamError(ProviderError):
    """The provider answered with a non-success status.

    The status code and raw body are kept exactly as received so that callers
    can pass them through instead of inventing their own message.
    """

    def __init__(self, status_code: int, body: str) -> None:
        super().__init__(f"HTTP {status_code}")
        self.status_code = status_code
        self.body = body

    @property
    def payload(self) -> Optional[Any]:
        try:
            return json.loads(self.body)
        except (TypeError, ValueError):
            return None


class MalformedResponse(ProviderError):
    """A success response lacked data the normalizer cannot do without."""


@dataclass
class RequestConfig:
    timeout: float = 10.0


class WeatherProvider:
    """Base class for HTTP providers: one request, no retries, no caching."""

    name = "provider"

    def __init__(
        self,
        session: Optional[requests.Session] = None,
        request_config: Optional[RequestConfig] = None,
    ) -> None:
        self.request_config = request_config or RequestConfig()
        self._session = session
        self._local = threading.local()
        self._log = logging.getLogger(self.__class__.__name__)

    @property
    def session(self) -> requests.Session:
        """The injected session, otherwise one session per calling thread."""
        if self._session is not None:
            return self._session
        session = getattr(self._local, "session", None)
        if session is None:
            session = self._local.session = requests.Session()
        return session

    def _handle_response(self, response: Response) -> Response:
        if not response.ok:
            self._log.warning("Provider returned %s: %s", response.status_code, response.text[:500])
            raise UpstreamError(response.status_code, response.text)
        return response

    def _request(self, method: str, url: str, **kwargs) -> Response:
        headers = {"Cache-Control": "no-store", **kwargs.pop("headers", {})}
        try:
            response = self.session.request(
                method,
                url,
                timeout=self.request_config.timeout,
                headers=headers,
                **kwargs,
            )
        except requests.Timeout as exc:
            self._log.error("Request timed out", exc_info=exc)
            raise UpstreamError(504, json.dumps({"message": "upstream timeout"})) from exc
        except requests.RequestException as exc:
            self._log.error("Request failed", exc_info=exc)
            raise UpstreamError(502, json.dumps({"message": "upstream unreachable"})) from exc
        self._log.debug("%s %s -> %s", method, self.name, response.status_code)
        return self._handle_response(response)

    def _json(self, response: Response) -> dict:
        try:
            data = response.json()
        except ValueError as exc:
            self._log.error("Failed to decode JSON", exc_info=exc)
            raise MalformedResponse("invalid json") from exc
        if not isinstance(data, dict):
            raise MalformedResponse("expected a JSON object")
        return data


__all__ = [
    "ConfigError",
    "MalformedResponse",
    "ProviderError",
    "RequestConfig",
    "UpstreamError",
    "WeatherProvider",
]
