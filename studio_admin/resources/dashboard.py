"""Dashboard widgets and announcements."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping

from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import Announcement


async def get_revenue(gw: RequestGateway) -> List[Dict[str, Any]]:
    return await gw.request(ep.DASHBOARD_REVENUE)


async def get_key_metrics(gw: RequestGateway) -> Dict[str, Any]:
    """Enrollment, activity and registration counters.

    Shape: {"enrollments": {...}, "actives": {...}, "registrations": {...}}
    """
    return await gw.request(ep.DASHBOARD_METRICS)


async def get_alerts(gw: RequestGateway) -> List[Dict[str, Any]]:
    return await gw.request(ep.DASHBOARD_ALERTS)


async def get_todos(gw: RequestGateway) -> List[Dict[str, Any]]:
    return await gw.request(ep.DASHBOARD_TODOS)


async def get_aged_accounts(gw: RequestGateway) -> Dict[str, Any]:
    return await gw.request(ep.DASHBOARD_AGED_ACCOUNTS)


async def list_announcements(gw: RequestGateway) -> List[Announcement]:
    return await gw.request(ep.ANNOUNCEMENTS)


async def create_announcement(gw: RequestGateway, data: Mapping[str, Any]) -> Announcement:
    return await gw.request(ep.ANNOUNCEMENTS, method="POST", body=dict(data))


async def update_announcement(gw: RequestGateway, announcement_id: str, data: Mapping[str, Any]) -> Announcement:
    return await gw.request(ep.item(ep.ANNOUNCEMENTS, announcement_id), method="PATCH", body=dict(data))


async def delete_announcement(gw: RequestGateway, announcement_id: str) -> None:
    await gw.request(ep.item(ep.ANNOUNCEMENTS, announcement_id), method="DELETE")
