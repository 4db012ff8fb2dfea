"""
Enrollments, absences, attendance and school events.

Attendance history: the backend only lists attendance per (class, date), so
a student's history is assembled by fanning out one request per enrolled
class and day and joining them all-or-nothing. Any failed request makes the
whole history unavailable (empty list, logged), mirroring how the admin
screens treat partial data as no data.
"""
from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Any, List, Mapping, Optional, Sequence
import asyncio
import logging

from studio_admin.gateway.errors import ApiRequestError
from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep
from .types import (
    Absence,
    AbsenceInput,
    AbsenceStatus,
    AttendanceMark,
    AttendanceRecord,
    Enrollment,
    SchoolEvent,
    StudentRef,
)

logger = logging.getLogger(__name__)

# --- Enrollments ------------------------------------------------------------------


async def list_enrollments_by_class(gw: RequestGateway, class_offering_id: str) -> List[Enrollment]:
    return await gw.request(ep.ENROLLMENTS, params={"classOfferingId": class_offering_id})


async def enroll_student(gw: RequestGateway, student_id: str, class_offering_id: str) -> Enrollment:
    # Enrollment date defaults server-side.
    body = {"studentId": student_id, "classOfferingId": class_offering_id, "status": "Enrolled"}
    return await gw.request(ep.ENROLLMENTS, method="POST", body=body)


async def unenroll_student(gw: RequestGateway, student_id: str, class_offering_id: str) -> None:
    url = ep.path(ep.UNENROLL, student_id=student_id, class_offering_id=class_offering_id)
    await gw.request(url, method="DELETE")


# --- Absences ---------------------------------------------------------------------


async def list_absences(
    gw: RequestGateway,
    *,
    student_id: Optional[str] = None,
    class_id: Optional[str] = None,
    on_date: Optional[str] = None,
) -> List[Absence]:
    """List absences; only the filters that are set become query parameters."""
    filters = {"studentId": student_id, "classId": class_id, "date": on_date}
    params = {k: v for k, v in filters.items() if v}
    return await gw.request(ep.ABSENCES, params=params)


async def create_absence(gw: RequestGateway, absence: AbsenceInput) -> Absence:
    return await gw.request(ep.ABSENCES, method="POST", body=absence.to_payload())


async def update_absence(
    gw: RequestGateway,
    absence_id: str,
    *,
    status: Optional[AbsenceStatus] = None,
    reason: Optional[str] = None,
    notes: Optional[str] = None,
) -> Absence:
    changes = {"status": status, "reason": reason, "notes": notes}
    body = {k: v for k, v in changes.items() if v is not None}
    return await gw.request(ep.item(ep.ABSENCES, absence_id), method="PATCH", body=body)


async def delete_absence(gw: RequestGateway, absence_id: str) -> None:
    await gw.request(ep.item(ep.ABSENCES, absence_id), method="DELETE")


# --- Attendance -------------------------------------------------------------------


async def list_attendance(gw: RequestGateway, class_offering_id: str, day: str) -> List[AttendanceRecord]:
    return await gw.request(ep.ATTENDANCE, params={"classOfferingId": class_offering_id, "date": day})


async def mark_attendance(gw: RequestGateway, mark: AttendanceMark) -> AttendanceRecord:
    """Upsert a single attendance mark."""
    return await gw.request(ep.ATTENDANCE, method="POST", body=mark.to_payload())


async def mark_bulk_attendance(gw: RequestGateway, marks: Sequence[AttendanceMark]) -> List[AttendanceRecord]:
    body = {"records": [m.to_payload() for m in marks]}
    return await gw.request(ep.ATTENDANCE_BULK, method="POST", body=body)


def _lookback_days(today: date, days: int) -> List[str]:
    return [(today - timedelta(days=offset)).isoformat() for offset in range(days)]


async def list_attendance_by_student(
    gw: RequestGateway,
    student: StudentRef | Mapping[str, Any],
    days_to_look_back: int = 30,
    *,
    today: Optional[date] = None,
) -> List[AttendanceRecord]:
    """Collect a student's attendance over the last `days_to_look_back` days.

    Issues len(enrolled_classes) * days requests concurrently. Returns [] when
    the student has no classes or when any single request fails.
    """
    ref = student if isinstance(student, StudentRef) else StudentRef.from_student(student)
    if not ref.enrolled_classes or days_to_look_back <= 0:
        return []
    start = today or datetime.now(timezone.utc).date()
    calls = [
        list_attendance(gw, class_id, day)
        for day in _lookback_days(start, days_to_look_back)
        for class_id in ref.enrolled_classes
    ]
    try:
        results = await asyncio.gather(*calls)
    except ApiRequestError as exc:
        logger.warning("attendance history unavailable student=%s err=%s", ref.id, exc.message)
        return []
    return [record for batch in results for record in (batch or []) if record.get("studentId") == ref.id]


# --- School events ----------------------------------------------------------------


async def list_school_events(gw: RequestGateway) -> List[SchoolEvent]:
    return await gw.request(ep.SCHOOL_EVENTS)


async def create_school_event(gw: RequestGateway, data: Mapping[str, Any]) -> SchoolEvent:
    return await gw.request(ep.SCHOOL_EVENTS, method="POST", body=dict(data))


async def update_school_event(gw: RequestGateway, event_id: str, data: Mapping[str, Any]) -> SchoolEvent:
    return await gw.request(ep.item(ep.SCHOOL_EVENTS, event_id), method="PATCH", body=dict(data))


async def delete_school_event(gw: RequestGateway, event_id: str) -> None:
    await gw.request(ep.item(ep.SCHOOL_EVENTS, event_id), method="DELETE")
