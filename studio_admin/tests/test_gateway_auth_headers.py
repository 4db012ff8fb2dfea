"""
Gateway request headers: bearer precedence, JSON content type and caller overrides.
"""
from __future__ import annotations

import json

import httpx
import pytest

from studio_admin.gateway.request import FormPayload

pytestmark = pytest.mark.anyio("asyncio")


@pytest.mark.anyio
async def test_no_credentials_sends_no_authorization_header(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec) as gw:
        await gw.request("/auth/login", method="POST", body={"username": "a", "password": "b"})
    assert "authorization" not in rec.last.headers
    assert rec.last.headers["accept"] == "application/json"


@pytest.mark.anyio
async def test_admin_token_only_is_used(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec, admin_token="adm-1") as gw:
        await gw.request("/students")
    assert rec.last.headers["authorization"] == "Bearer adm-1"


@pytest.mark.anyio
async def test_client_token_wins_over_admin_token(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec, admin_token="adm-1", client_token="cli-9") as gw:
        await gw.request("/portal/me")
    assert rec.last.headers["authorization"] == "Bearer cli-9"


@pytest.mark.anyio
async def test_token_is_read_on_every_request(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec, admin_token="adm-1") as gw:
        await gw.request("/students")
        gw.store.set("client-token", "cli-2")
        await gw.request("/students")
    assert [r.headers["authorization"] for r in rec.requests] == ["Bearer adm-1", "Bearer cli-2"]


@pytest.mark.anyio
async def test_structured_body_is_json_encoded_with_content_type(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec) as gw:
        await gw.request("/students", method="POST", body={"firstName": "Ana", "program": None})
    assert rec.last.headers["content-type"] == "application/json"
    assert json.loads(rec.last.content) == {"firstName": "Ana", "program": None}


@pytest.mark.anyio
async def test_form_payload_gets_no_json_content_type(make_gateway, recorder):
    rec = recorder()
    form = FormPayload(data={"title": "logo"}, files={"file": ("logo.png", b"\x89PNG", "image/png")})
    async with make_gateway(rec) as gw:
        await gw.request("/settings/general/logo", method="POST", body=form)
    ctype = rec.last.headers["content-type"]
    assert ctype.startswith("multipart/form-data")
    assert "application/json" not in ctype


@pytest.mark.anyio
async def test_caller_content_type_is_kept(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec) as gw:
        await gw.request(
            "/students",
            method="POST",
            body={"a": 1},
            headers={"content-type": "application/merge-patch+json"},
        )
    assert rec.last.headers["content-type"] == "application/merge-patch+json"


@pytest.mark.anyio
async def test_caller_headers_take_final_precedence(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec, admin_token="adm-1") as gw:
        await gw.request("/students", headers={"Authorization": "Bearer override", "X-Trace": "t1"})
    assert rec.last.headers["authorization"] == "Bearer override"
    assert rec.last.headers["x-trace"] == "t1"


@pytest.mark.anyio
async def test_no_body_means_no_content_type(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec) as gw:
        await gw.request("/students")
    assert "content-type" not in rec.last.headers


@pytest.mark.anyio
async def test_relative_and_absolute_urls(make_gateway, recorder):
    rec = recorder()
    async with make_gateway(rec) as gw:
        await gw.request("students")
        await gw.request("https://other.example/ping")
    assert str(rec.requests[0].url) == "http://studio.test/students"
    assert str(rec.requests[1].url) == "https://other.example/ping"


def test_build_headers_without_network(make_gateway):
    gw = make_gateway(lambda req: httpx.Response(200), admin_token="adm-1")
    headers = gw.build_headers(body={"x": 1})
    assert headers["authorization"] == "Bearer adm-1"
    assert headers["content-type"] == "application/json"
    assert headers["accept"] == "application/json"
