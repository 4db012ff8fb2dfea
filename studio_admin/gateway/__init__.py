"""
Generic request gateway for the studio admin REST backend.

Public surface:
    RequestGateway, NO_CONTENT, FormPayload   – request/response pipeline
    ApiRequestError                          – the single normalized error
    SessionCredentials, *CredentialStore     – bearer token slots
    GatewayConfig, load_gateway_config       – environment-driven settings
"""
from __future__ import annotations

from .config import GatewayConfig, load_gateway_config
from .errors import ApiRequestError, MessageList, ScalarMessage, is_subscription_not_found
from .request import NO_CONTENT, FormPayload, NoContent, RequestGateway
from .session import (
    ADMIN_SLOT,
    CLIENT_SLOT,
    CredentialStore,
    FileCredentialStore,
    InMemoryCredentialStore,
    SessionCredentials,
)

__all__ = [
    "ADMIN_SLOT",
    "CLIENT_SLOT",
    "ApiRequestError",
    "CredentialStore",
    "FileCredentialStore",
    "FormPayload",
    "GatewayConfig",
    "InMemoryCredentialStore",
    "MessageList",
    "NO_CONTENT",
    "NoContent",
    "RequestGateway",
    "ScalarMessage",
    "SessionCredentials",
    "is_subscription_not_found",
    "load_gateway_config",
]
