"""Programs, membership plans and class offerings."""
from __future__ import annotations

from typing import Any, List, Mapping

from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import ClassOffering, MembershipPlan, Program


async def list_programs(gw: RequestGateway) -> List[Program]:
    return await gw.request(ep.PROGRAMS)


async def get_program(gw: RequestGateway, program_id: str) -> Program:
    return await gw.request(ep.item(ep.PROGRAMS, program_id))


async def create_program(gw: RequestGateway, data: Mapping[str, Any]) -> Program:
    return await gw.request(ep.PROGRAMS, method="POST", body=dict(data))


async def update_program(gw: RequestGateway, program_id: str, data: Mapping[str, Any]) -> Program:
    # Program names are immutable once created.
    body = {k: v for k, v in data.items() if k != "name"}
    return await gw.request(ep.item(ep.PROGRAMS, program_id), method="PATCH", body=body)


async def delete_program(gw: RequestGateway, program_id: str) -> None:
    await gw.request(ep.item(ep.PROGRAMS, program_id), method="DELETE")


async def list_membership_plans(gw: RequestGateway) -> List[MembershipPlan]:
    return await gw.request(ep.MEMBERSHIP_PLANS)


async def get_membership_plan(gw: RequestGateway, plan_id: str) -> MembershipPlan:
    return await gw.request(ep.item(ep.MEMBERSHIP_PLANS, plan_id))


async def create_membership_plan(gw: RequestGateway, data: Mapping[str, Any]) -> MembershipPlan:
    """Create a plan; the backend provisions the processor price and stores its id."""
    body = {k: v for k, v in data.items() if k != "stripePriceId"}
    return await gw.request(ep.MEMBERSHIP_PLANS, method="POST", body=body)


async def update_membership_plan(gw: RequestGateway, plan_id: str, data: Mapping[str, Any]) -> MembershipPlan:
    return await gw.request(ep.item(ep.MEMBERSHIP_PLANS, plan_id), method="PATCH", body=dict(data))


async def delete_membership_plan(gw: RequestGateway, plan_id: str) -> None:
    await gw.request(ep.item(ep.MEMBERSHIP_PLANS, plan_id), method="DELETE")


async def list_class_offerings(gw: RequestGateway) -> List[ClassOffering]:
    return await gw.request(ep.CLASS_OFFERINGS)


async def get_class_offering(gw: RequestGateway, offering_id: str) -> ClassOffering:
    return await gw.request(ep.item(ep.CLASS_OFFERINGS, offering_id))


async def create_class_offering(gw: RequestGateway, data: Mapping[str, Any]) -> ClassOffering:
    return await gw.request(ep.CLASS_OFFERINGS, method="POST", body=dict(data))


async def update_class_offering(gw: RequestGateway, offering_id: str, data: Mapping[str, Any]) -> ClassOffering:
    return await gw.request(ep.item(ep.CLASS_OFFERINGS, offering_id), method="PATCH", body=dict(data))


async def delete_class_offering(gw: RequestGateway, offering_id: str) -> None:
    await gw.request(ep.item(ep.CLASS_OFFERINGS, offering_id), method="DELETE")
