"""Roles and administrator accounts."""
from __future__ import annotations

from typing import Any, List, Mapping, Sequence

from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import AdminUser, AdminUserStatus, Role, UpdatedCount, form_payload


async def list_roles(gw: RequestGateway) -> List[Role]:
    return await gw.request(ep.ROLES)


async def get_role(gw: RequestGateway, role_id: str) -> Role:
    return await gw.request(ep.item(ep.ROLES, role_id))


async def create_role(gw: RequestGateway, data: Mapping[str, Any]) -> Role:
    return await gw.request(ep.ROLES, method="POST", body=dict(data))


async def update_role(gw: RequestGateway, role_id: str, data: Mapping[str, Any]) -> Role:
    return await gw.request(ep.item(ep.ROLES, role_id), method="PATCH", body=dict(data))


async def delete_role(gw: RequestGateway, role_id: str) -> None:
    await gw.request(ep.item(ep.ROLES, role_id), method="DELETE")


async def list_admin_users(gw: RequestGateway) -> List[AdminUser]:
    return await gw.request(ep.ADMIN_USERS)


async def get_admin_user(gw: RequestGateway, admin_user_id: str) -> AdminUser:
    return await gw.request(ep.item(ep.ADMIN_USERS, admin_user_id))


async def create_admin_user(gw: RequestGateway, form: Mapping[str, Any]) -> AdminUser:
    return await gw.request(ep.ADMIN_USERS, method="POST", body=form_payload(form))


async def update_admin_user(gw: RequestGateway, admin_user_id: str, form: Mapping[str, Any]) -> AdminUser:
    return await gw.request(ep.item(ep.ADMIN_USERS, admin_user_id), method="PATCH", body=form_payload(form))


async def delete_admin_user(gw: RequestGateway, admin_user_id: str) -> None:
    await gw.request(ep.item(ep.ADMIN_USERS, admin_user_id), method="DELETE")


async def bulk_update_admin_users_status(
    gw: RequestGateway, admin_user_ids: Sequence[str], status: AdminUserStatus
) -> UpdatedCount:
    body = {"ids": list(admin_user_ids), "status": status}
    return await gw.request(ep.ADMIN_USERS_BULK_STATUS, method="POST", body=body)


async def bulk_update_admin_users_role(
    gw: RequestGateway, admin_user_ids: Sequence[str], role_id: str
) -> UpdatedCount:
    body = {"ids": list(admin_user_ids), "roleId": role_id}
    return await gw.request(ep.ADMIN_USERS_BULK_ROLE, method="POST", body=body)
