"""
Generic request gateway used by every REST resource wrapper.

Why: One call path attaches the bearer token, serializes bodies, classifies
responses and turns every failure into a single `ApiRequestError`. Resource
modules stay one-liners and never touch HTTP details.

Contract:
    - 204                     -> NO_CONTENT (typed absence, not None, not {})
    - 2xx + application/json  -> decoded JSON
    - other 2xx               -> response text (logged as unexpected)
    - non-2xx                 -> ApiRequestError(normalized message)
    - transport failure       -> ApiRequestError(str(exc)), chained

Nothing is retried, cached or deduplicated here; concurrent calls are fully
independent.

Security: Token values are never logged; URLs are logged without query.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional
import json
import logging

import httpx

from .config import GatewayConfig, load_gateway_config
from .errors import (
    ERROR_SNIPPET_CHARS,
    SUBSCRIPTION_NOT_FOUND,
    ApiRequestError,
    normalize_error_message,
    status_fallback,
    text_error_message,
)
from .session import CredentialStore, InMemoryCredentialStore, SessionCredentials

logger = logging.getLogger("studio_admin.gateway")

JSON_CONTENT_TYPE = "application/json"


class NoContent:
    """Result type of a 204 response."""

    _instance: Optional["NoContent"] = None

    def __new__(cls) -> "NoContent":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "NO_CONTENT"


NO_CONTENT = NoContent()


@dataclass(frozen=True)
class FormPayload:
    """Pre-built multipart form body; sent as-is, no JSON content type added.

    `files` follows httpx conventions: {field: (filename, bytes_or_file, mime)}.
    """

    data: Mapping[str, str] = field(default_factory=dict)
    files: Mapping[str, Any] = field(default_factory=dict)


def _safe_url(url: str) -> str:
    return str(url).split("?", 1)[0]


def _is_json(response: httpx.Response) -> bool:
    return JSON_CONTENT_TYPE in (response.headers.get("content-type") or "")


class RequestGateway:
    """Async request pipeline bound to one credential store and one config.

    Use as an async context manager, or call `aclose()` when done. Pass
    `transport` (e.g. `httpx.MockTransport`) or a ready `client` to control
    the wire in tests.
    """

    def __init__(
        self,
        *,
        store: CredentialStore | None = None,
        config: GatewayConfig | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.store: CredentialStore = store if store is not None else InMemoryCredentialStore()
        self.config = config or load_gateway_config()
        self._owns_client = client is None
        self.client = client or httpx.AsyncClient(
            transport=transport,
            timeout=self.config.timeout_seconds,
            follow_redirects=True,
        )

    async def __aenter__(self) -> "RequestGateway":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self.client.aclose()

    # --- Helpers -----------------------------------------------------------------

    def credentials(self) -> SessionCredentials:
        return SessionCredentials.from_store(self.store)

    def build_headers(self, *, body: Any = None, headers: Mapping[str, str] | None = None) -> httpx.Headers:
        """Default headers merged with caller headers; caller values win."""
        merged = httpx.Headers({"Accept": JSON_CONTENT_TYPE})
        merged.update(self.credentials().authorization_header())
        caller = httpx.Headers(headers or {})
        if body is not None and not isinstance(body, FormPayload) and "content-type" not in caller:
            merged["Content-Type"] = JSON_CONTENT_TYPE
        merged.update(caller)
        return merged

    @staticmethod
    def _body_kwargs(body: Any) -> Dict[str, Any]:
        if body is None:
            return {}
        if isinstance(body, FormPayload):
            return {"data": dict(body.data), "files": dict(body.files) or None}
        return {"content": json.dumps(body).encode("utf-8")}

    def _error_message(self, response: httpx.Response, url: str) -> str:
        """Normalize an error response; never raises."""
        status = response.status_code
        message = status_fallback(status)
        try:
            if _is_json(response):
                try:
                    payload = response.json()
                except ValueError:
                    logger.warning("error body declared JSON but did not parse url=%s status=%s", _safe_url(url), status)
                    return text_error_message(response.text, response.reason_phrase, status)
                message = normalize_error_message(payload, status)
            else:
                message = text_error_message(response.text, response.reason_phrase, status)
        except Exception as exc:
            logger.error("error parsing error response body url=%s err=%s", _safe_url(url), exc.__class__.__name__)
        return message

    def _success_value(self, response: httpx.Response, url: str) -> Any:
        if response.status_code == 204:
            return NO_CONTENT
        if _is_json(response):
            return response.json()
        text = response.text
        logger.warning(
            "expected JSON response but received %s url=%s text=%s",
            response.headers.get("content-type") or "unknown",
            _safe_url(url),
            text[:ERROR_SNIPPET_CHARS],
        )
        return text

    # --- Public API --------------------------------------------------------------

    async def request(
        self,
        url: str,
        *,
        method: str = "GET",
        headers: Mapping[str, str] | None = None,
        body: Any = None,
        params: Mapping[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the classified success value.

        Raises ApiRequestError for non-2xx statuses and transport failures.
        """
        target = self.config.resolve(url)
        try:
            response = await self.client.request(
                method.upper(),
                target,
                headers=self.build_headers(body=body, headers=headers),
                params=dict(params) if params else None,
                **self._body_kwargs(body),
            )
            if not response.is_success:
                raise ApiRequestError(self._error_message(response, target))
            return self._success_value(response, target)
        except ApiRequestError as exc:
            self._log_failure(target, exc.message)
            raise
        except Exception as exc:
            message = str(exc) or exc.__class__.__name__
            self._log_failure(target, message)
            raise ApiRequestError(message) from exc

    @staticmethod
    def _log_failure(url: str, message: str) -> None:
        if SUBSCRIPTION_NOT_FOUND in message:
            return
        logger.error("API request error for %s: %s", _safe_url(url), message)


__all__ = ["NO_CONTENT", "FormPayload", "NoContent", "RequestGateway"]
