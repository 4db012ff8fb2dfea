"""
Error message parsing helpers (no HTTP involved).
"""
from __future__ import annotations

from studio_admin.gateway.errors import (
    ApiRequestError,
    MessageList,
    ScalarMessage,
    is_subscription_not_found,
    normalize_error_message,
    parse_error_message,
    render_message,
    text_error_message,
)


def test_parse_scalar_and_list():
    assert parse_error_message({"message": "nope"}) == ScalarMessage("nope")
    assert parse_error_message({"message": ["a", "b"]}) == MessageList(("a", "b"))


def test_parse_ignores_non_dict_and_missing_message():
    assert parse_error_message(["message"]) is None
    assert parse_error_message({"detail": "x"}) is None
    assert parse_error_message({"message": None}) is None
    assert parse_error_message(None) is None
    assert parse_error_message({"message": []}) is None


def test_render_joins_list_with_comma_space():
    assert render_message(MessageList(("first", "second", "third"))) == "first, second, third"
    assert render_message(ScalarMessage("only")) == "only"


def test_normalize_falls_back_on_status():
    assert normalize_error_message({"message": []}, 418) == "HTTP error 418"
    assert normalize_error_message("plain", 500) == "HTTP error 500"


def test_text_error_message_prefers_snippet():
    assert text_error_message("Bad gateway page", "Bad Gateway", 502) == "Bad gateway page"
    assert text_error_message("", "Bad Gateway", 502) == "502 Bad Gateway"
    assert text_error_message("", "", 599) == "599"


def test_subscription_not_found_detection():
    assert is_subscription_not_found(ApiRequestError("No active Stripe subscription found"))
    assert is_subscription_not_found(ApiRequestError("Error: No active Stripe subscription found for s1"))
    assert not is_subscription_not_found(ApiRequestError("Stripe is down"))
