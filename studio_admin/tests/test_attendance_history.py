"""
Attendance history fan-out: one request per (day, class), all-or-nothing.
"""
from __future__ import annotations

from datetime import date
import logging

import httpx
import pytest

from studio_admin.resources.scheduling import list_attendance_by_student
from studio_admin.resources.types import StudentRef

pytestmark = pytest.mark.anyio("asyncio")

TODAY = date(2024, 5, 10)


def _attendance_handler(req: httpx.Request) -> httpx.Response:
    day = req.url.params["date"]
    class_id = req.url.params["classOfferingId"]
    return httpx.Response(
        200,
        json=[
            {"id": f"{class_id}-{day}-s1", "studentId": "s1", "classOfferingId": class_id, "status": "Present"},
            {"id": f"{class_id}-{day}-s2", "studentId": "s2", "classOfferingId": class_id, "status": "Absent"},
        ],
    )


@pytest.mark.anyio
async def test_fans_out_per_day_and_class(make_gateway, recorder):
    rec = recorder(_attendance_handler)
    student = {"id": "s1", "enrolledClasses": ["c1", "c2"]}
    async with make_gateway(rec) as gw:
        records = await list_attendance_by_student(gw, student, 3, today=TODAY)
    assert len(rec.requests) == 6
    asked = {(r.url.params["date"], r.url.params["classOfferingId"]) for r in rec.requests}
    assert asked == {(d, c) for d in ("2024-05-10", "2024-05-09", "2024-05-08") for c in ("c1", "c2")}
    assert len(records) == 6
    assert all(r["studentId"] == "s1" for r in records)


@pytest.mark.anyio
async def test_no_classes_means_no_requests(make_gateway, recorder):
    rec = recorder(_attendance_handler)
    async with make_gateway(rec) as gw:
        assert await list_attendance_by_student(gw, StudentRef(id="s1"), 30, today=TODAY) == []
        assert await list_attendance_by_student(gw, {"id": "s1"}, today=TODAY) == []
    assert rec.requests == []


@pytest.mark.anyio
async def test_single_failure_empties_the_history(make_gateway, caplog):
    caplog.set_level(logging.WARNING)

    def handler(req: httpx.Request) -> httpx.Response:
        if req.url.params["date"] == "2024-05-09" and req.url.params["classOfferingId"] == "c2":
            return httpx.Response(500, json={"message": "db timeout"})
        return _attendance_handler(req)

    async with make_gateway(handler) as gw:
        records = await list_attendance_by_student(
            gw, StudentRef(id="s1", enrolled_classes=["c1", "c2"]), 2, today=TODAY
        )
    assert records == []
    assert "attendance history unavailable" in caplog.text


@pytest.mark.anyio
async def test_no_content_batches_are_skipped(make_gateway):
    def handler(req: httpx.Request) -> httpx.Response:
        if req.url.params["classOfferingId"] == "c2":
            return httpx.Response(204)
        return _attendance_handler(req)

    async with make_gateway(handler) as gw:
        records = await list_attendance_by_student(
            gw, StudentRef(id="s2", enrolled_classes=["c1", "c2"]), 1, today=TODAY
        )
    assert [r["id"] for r in records] == ["c1-2024-05-10-s2"]
