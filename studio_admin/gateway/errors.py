"""
Error contract of the request gateway.

Every failure surfaces as one `ApiRequestError` carrying a human readable
message and nothing else. Backends built on validation middleware report
`message` either as a string or as a list of strings; both shapes are parsed
into a small tagged union and rendered to a single string here, so callers
only ever see `str`.
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Tuple, Union

# Expected, frequent not-found condition: callers treat it as "no subscription"
SUBSCRIPTION_NOT_FOUND = "No active Stripe subscription found"

ERROR_SNIPPET_CHARS = 100


class ApiRequestError(Exception):
    """Raised for every failed gateway call (HTTP error status or transport failure)."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return self.message


@dataclass(frozen=True)
class ScalarMessage:
    text: str


@dataclass(frozen=True)
class MessageList:
    items: Tuple[str, ...]


ErrorMessage = Union[ScalarMessage, MessageList]


def parse_error_message(payload: Any) -> Optional[ErrorMessage]:
    """Extract the `message` field of a decoded JSON error body, if any."""
    if not isinstance(payload, dict):
        return None
    raw = payload.get("message")
    # An empty list carries no text; treat it like a missing message.
    if not raw:
        return None
    if isinstance(raw, list):
        return MessageList(items=tuple(str(item) for item in raw))
    return ScalarMessage(text=str(raw))


def render_message(message: ErrorMessage) -> str:
    if isinstance(message, MessageList):
        return ", ".join(message.items)
    return message.text


def status_fallback(status_code: int) -> str:
    return f"HTTP error {status_code}"


def normalize_error_message(payload: Any, status_code: int) -> str:
    """Return the rendered backend message or the status fallback."""
    tagged = parse_error_message(payload)
    if tagged is None:
        return status_fallback(status_code)
    return render_message(tagged) or status_fallback(status_code)


def text_error_message(text: str, reason: str, status_code: int) -> str:
    """Message for a non-JSON error body: snippet first, else the status line."""
    snippet = text[:ERROR_SNIPPET_CHARS]
    if snippet:
        return snippet
    return f"{status_code} {reason}".strip()


def is_subscription_not_found(err: BaseException) -> bool:
    return SUBSCRIPTION_NOT_FOUND in str(err)


__all__ = [
    "ERROR_SNIPPET_CHARS",
    "SUBSCRIPTION_NOT_FOUND",
    "ApiRequestError",
    "ErrorMessage",
    "MessageList",
    "ScalarMessage",
    "is_subscription_not_found",
    "normalize_error_message",
    "parse_error_message",
    "render_message",
    "status_fallback",
    "text_error_message",
]
