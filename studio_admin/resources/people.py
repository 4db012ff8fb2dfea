"""Students, parents, instructors and prospects."""
from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional, Sequence

from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import (
    Instructor,
    Parent,
    Prospect,
    ProspectApproval,
    Student,
    StudentBulkUpdate,
    UpdatedCount,
    form_payload,
)

# --- Students ---------------------------------------------------------------------


async def list_students(gw: RequestGateway) -> List[Student]:
    return await gw.request(ep.STUDENTS)


async def get_student(gw: RequestGateway, student_id: str) -> Student:
    return await gw.request(ep.item(ep.STUDENTS, student_id))


async def create_student(gw: RequestGateway, form: Mapping[str, Any]) -> Student:
    # Backend hashes the password and derives plan name/renewal date.
    return await gw.request(ep.STUDENTS, method="POST", body=form_payload(form))


async def update_student(gw: RequestGateway, student_id: str, form: Mapping[str, Any]) -> Student:
    return await gw.request(ep.item(ep.STUDENTS, student_id), method="PATCH", body=form_payload(form))


async def delete_student(gw: RequestGateway, student_id: str) -> None:
    await gw.request(ep.item(ep.STUDENTS, student_id), method="DELETE")


async def bulk_update_students(
    gw: RequestGateway, student_ids: Sequence[str], updates: StudentBulkUpdate
) -> UpdatedCount:
    body = {"ids": list(student_ids), "updates": updates.to_payload()}
    return await gw.request(ep.STUDENTS_BULK_UPDATE, method="POST", body=body)


async def update_student_membership(
    gw: RequestGateway,
    student_id: str,
    membership_plan_id: Optional[str],
    membership_start_date: Optional[str] = None,
) -> Student:
    """Change the internal membership record of a student (not the subscription).

    `membership_plan_id=None` is sent as an explicit null to clear the plan.
    """
    body: Dict[str, Any] = {"membershipPlanId": membership_plan_id}
    if membership_start_date is not None:
        body["membershipStartDate"] = membership_start_date
    return await gw.request(ep.item(ep.STUDENTS, student_id), method="PATCH", body=body)


# --- Parents ----------------------------------------------------------------------


async def list_parents(gw: RequestGateway) -> List[Parent]:
    return await gw.request(ep.PARENTS)


async def get_parent(gw: RequestGateway, parent_id: str) -> Parent:
    return await gw.request(ep.item(ep.PARENTS, parent_id))


async def create_parent(gw: RequestGateway, form: Mapping[str, Any]) -> Parent:
    return await gw.request(ep.PARENTS, method="POST", body=form_payload(form))


async def update_parent(gw: RequestGateway, parent_id: str, form: Mapping[str, Any]) -> Parent:
    return await gw.request(ep.item(ep.PARENTS, parent_id), method="PATCH", body=form_payload(form))


async def delete_parent(gw: RequestGateway, parent_id: str) -> None:
    await gw.request(ep.item(ep.PARENTS, parent_id), method="DELETE")


# --- Instructors ------------------------------------------------------------------


async def list_instructors(gw: RequestGateway) -> List[Instructor]:
    return await gw.request(ep.INSTRUCTORS)


async def get_instructor(gw: RequestGateway, instructor_id: str) -> Instructor:
    return await gw.request(ep.item(ep.INSTRUCTORS, instructor_id))


async def create_instructor(gw: RequestGateway, data: Mapping[str, Any]) -> Instructor:
    return await gw.request(ep.INSTRUCTORS, method="POST", body=dict(data))


async def update_instructor(gw: RequestGateway, instructor_id: str, data: Mapping[str, Any]) -> Instructor:
    return await gw.request(ep.item(ep.INSTRUCTORS, instructor_id), method="PATCH", body=dict(data))


async def delete_instructor(gw: RequestGateway, instructor_id: str) -> None:
    await gw.request(ep.item(ep.INSTRUCTORS, instructor_id), method="DELETE")


# --- Prospects --------------------------------------------------------------------


async def list_prospects(gw: RequestGateway) -> List[Prospect]:
    return await gw.request(ep.PROSPECTS)


async def get_prospect(gw: RequestGateway, prospect_id: str) -> Prospect:
    return await gw.request(ep.item(ep.PROSPECTS, prospect_id))


async def create_prospect(gw: RequestGateway, form: Mapping[str, Any], audition_payment_id: str) -> Prospect:
    """Register a prospect after the audition fee was paid."""
    body = {**dict(form), "auditionPaymentId": audition_payment_id}
    return await gw.request(ep.PROSPECTS, method="POST", body=body)


async def update_prospect(gw: RequestGateway, prospect_id: str, form: Mapping[str, Any]) -> Prospect:
    return await gw.request(ep.item(ep.PROSPECTS, prospect_id), method="PATCH", body=dict(form))


async def delete_prospect(gw: RequestGateway, prospect_id: str) -> None:
    await gw.request(ep.item(ep.PROSPECTS, prospect_id), method="DELETE")


async def approve_prospect(gw: RequestGateway, prospect_id: str, approval: ProspectApproval) -> Student:
    """Convert a prospect into a student; returns the created student."""
    url = ep.path(ep.APPROVE_PROSPECT, prospect_id=prospect_id)
    return await gw.request(url, method="POST", body=approval.to_payload())
