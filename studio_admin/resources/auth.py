"""
Login, logout and client-portal profile.

Admin and client-portal logins write different credential slots; while a
client token is stored it takes precedence for every outgoing request.
Logout only clears the local slot, there is no server-side session to end.

Security: Never log credentials or returned tokens.
"""
from __future__ import annotations

from typing import cast

from studio_admin.gateway.request import RequestGateway
from studio_admin.gateway.session import ADMIN_SLOT, CLIENT_SLOT

from . import endpoints as ep
from .types import ClientLoginResponse, ClientProfile, Credentials, LoginResponse, StudioRegistration


def _store_token(gw: RequestGateway, slot: str, body: object) -> None:
    token = body.get("access_token") if isinstance(body, dict) else None
    if not token:
        raise ValueError("access_token_missing")
    gw.store.set(slot, str(token))


async def login_admin(gw: RequestGateway, credentials: Credentials) -> LoginResponse:
    """Authenticate an administrator and persist the token in the admin slot."""
    body = await gw.request(ep.AUTH_LOGIN, method="POST", body=credentials.to_payload())
    _store_token(gw, ADMIN_SLOT, body)
    return cast(LoginResponse, body)


async def login_client(gw: RequestGateway, credentials: Credentials) -> ClientLoginResponse:
    """Authenticate a parent or adult student against the client portal."""
    body = await gw.request(ep.CLIENT_LOGIN, method="POST", body=credentials.to_payload())
    _store_token(gw, CLIENT_SLOT, body)
    return cast(ClientLoginResponse, body)


def logout_admin(gw: RequestGateway) -> None:
    gw.store.delete(ADMIN_SLOT)


def logout_client(gw: RequestGateway) -> None:
    gw.store.delete(CLIENT_SLOT)


async def get_client_profile(gw: RequestGateway) -> ClientProfile:
    return await gw.request(ep.CLIENT_PROFILE_ME)


async def register_studio(gw: RequestGateway, registration: StudioRegistration) -> dict:
    return await gw.request(ep.PUBLIC_REGISTER_STUDIO, method="POST", body=registration.to_payload())
