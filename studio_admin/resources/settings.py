"""Studio-wide settings: general profile, calendar and payment-processor products."""
from __future__ import annotations

from typing import Any, Mapping

from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import CalendarSettings, GeneralSettings, StripeProductSettings

# Server-managed fields are never sent back on a full replace.
_READ_ONLY = frozenset({"id", "updatedAt"})


def _writable(data: Mapping[str, Any]) -> dict:
    return {k: v for k, v in data.items() if k not in _READ_ONLY}


async def get_general_settings(gw: RequestGateway) -> GeneralSettings:
    return await gw.request(ep.GENERAL_SETTINGS)


async def update_general_settings(gw: RequestGateway, data: Mapping[str, Any]) -> GeneralSettings:
    return await gw.request(ep.GENERAL_SETTINGS, method="PUT", body=_writable(data))


async def get_calendar_settings(gw: RequestGateway) -> CalendarSettings:
    return await gw.request(ep.CALENDAR_SETTINGS)


async def update_calendar_settings(gw: RequestGateway, data: Mapping[str, Any]) -> CalendarSettings:
    return await gw.request(ep.CALENDAR_SETTINGS, method="PUT", body=_writable(data))


async def get_stripe_settings(gw: RequestGateway) -> StripeProductSettings:
    return await gw.request(ep.SETTINGS_STRIPE)


async def update_stripe_settings(gw: RequestGateway, data: Mapping[str, Any]) -> None:
    await gw.request(ep.SETTINGS_STRIPE, method="POST", body=dict(data))
