"""Operator command line for the studio admin backend.

Usage:
    studio-admin login --username director
    studio-admin login --client --username parent@example.com
    studio-admin whoami
    studio-admin students list
    studio-admin invoices download inv_123 --dest ~/Downloads
    studio-admin dashboard metrics
    studio-admin logout --all

Tokens are kept in the credential file (STUDIO_CREDENTIALS_PATH). A stored
client-portal token takes precedence over the admin token for every command
until `logout --client` is run.
"""
from __future__ import annotations

from typing import Any, Awaitable, Callable, Dict, Optional, TypeVar
import asyncio
import json
import logging
import os
import sys

import click
from dotenv import load_dotenv

from studio_admin.gateway.config import GatewayConfig, load_gateway_config
from studio_admin.gateway.errors import ApiRequestError
from studio_admin.gateway.request import RequestGateway
from studio_admin.gateway.session import CLIENT_SLOT, FileCredentialStore, SessionCredentials
from studio_admin.resources import auth, dashboard, downloads, people
from studio_admin.resources.types import Credentials

T = TypeVar("T")


def _should_load_dotenv() -> bool:
    """Load a local .env outside pytest unless STUDIO_ENABLE_DOTENV opts out."""
    if "pytest" in sys.modules or os.getenv("PYTEST_CURRENT_TEST"):
        return False
    flag = (os.getenv("STUDIO_ENABLE_DOTENV", "true") or "").strip().lower()
    return flag in ("1", "true", "yes")


def _configure_logging(verbose: bool) -> None:
    level_name = "DEBUG" if verbose else (os.getenv("STUDIO_LOG_LEVEL") or "WARNING").upper()
    logging.basicConfig(
        level=getattr(logging, level_name, logging.WARNING),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


def _run(ctx: click.Context, fn: Callable[[RequestGateway], Awaitable[T]]) -> T:
    """Open a gateway for one command and map API failures to click errors."""
    obj: Dict[str, Any] = ctx.ensure_object(dict)
    cfg: GatewayConfig = obj["config"]

    async def _go() -> T:
        store = FileCredentialStore(cfg.credentials_path)
        async with RequestGateway(store=store, config=cfg, transport=obj.get("transport")) as gw:
            return await fn(gw)

    try:
        return asyncio.run(_go())
    except ApiRequestError as exc:
        raise click.ClickException(exc.message) from exc
    except ValueError as exc:
        # e.g. login response without access_token
        raise click.ClickException(str(exc)) from exc


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.option("--base-url", default=None, help="Override STUDIO_API_BASE_URL.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
@click.pass_context
def main(ctx: click.Context, base_url: Optional[str], verbose: bool) -> None:
    """Studio admin API client."""
    if _should_load_dotenv():
        load_dotenv()
    _configure_logging(verbose)
    obj = ctx.ensure_object(dict)
    cfg = obj.get("config") or load_gateway_config()
    if base_url:
        cfg = cfg.with_base_url(base_url)
    obj["config"] = cfg


@main.command()
@click.option("--client", "as_client", is_flag=True, help="Log in to the client portal instead of the admin area.")
@click.option("--username", required=True)
@click.option("--password", prompt=True, hide_input=True)
@click.pass_context
def login(ctx: click.Context, as_client: bool, username: str, password: str) -> None:
    """Authenticate and store the session token."""
    creds = Credentials(username=username, password=password)

    async def _login(gw: RequestGateway) -> str:
        if as_client:
            body = await auth.login_client(gw, creds)
            user = (body.get("profile") or {}).get("user") or {}
        else:
            body = await auth.login_admin(gw, creds)
            user = body.get("user") or {}
        return " ".join(p for p in (user.get("firstName"), user.get("lastName")) if p) or username

    name = _run(ctx, _login)
    click.echo(f"Logged in as {name} ({'client' if as_client else 'admin'}).")


@main.command()
@click.option("--client", "as_client", is_flag=True, help="Clear only the client-portal token.")
@click.option("--all", "clear_all", is_flag=True, help="Clear both tokens.")
@click.pass_context
def logout(ctx: click.Context, as_client: bool, clear_all: bool) -> None:
    """Forget stored session tokens (admin token by default)."""

    async def _logout(gw: RequestGateway) -> None:
        if clear_all or as_client:
            auth.logout_client(gw)
        if clear_all or not as_client:
            auth.logout_admin(gw)

    _run(ctx, _logout)
    click.echo("Logged out.")


@main.command()
@click.pass_context
def whoami(ctx: click.Context) -> None:
    """Show which session slot is active (never prints the token)."""
    cfg: GatewayConfig = ctx.ensure_object(dict)["config"]
    active = SessionCredentials.from_store(FileCredentialStore(cfg.credentials_path)).active_slot
    if active is None:
        click.echo("Not logged in.")
        return
    if active != CLIENT_SLOT:
        click.echo("Active session: admin")
        return
    profile = _run(ctx, auth.get_client_profile)
    user = (profile or {}).get("user") or {}
    name = " ".join(p for p in (user.get("firstName"), user.get("lastName")) if p)
    click.echo(f"Active session: client ({name or user.get('username') or 'unknown'})")


@main.group()
def students() -> None:
    """Student records."""


@students.command("list")
@click.pass_context
def students_list(ctx: click.Context) -> None:
    rows = _run(ctx, people.list_students)
    for s in rows or []:
        name = f"{s.get('firstName', '')} {s.get('lastName', '')}".strip()
        click.echo(f"{s.get('id')}\t{name}\t{s.get('status', '')}")


@main.group()
def invoices() -> None:
    """Invoices."""


@invoices.command("download")
@click.argument("invoice_id")
@click.option("--dest", default=".", type=click.Path(), help="Target directory or file.")
@click.pass_context
def invoices_download(ctx: click.Context, invoice_id: str, dest: str) -> None:
    path = _run(ctx, lambda gw: downloads.download_invoice_pdf(gw, invoice_id, dest))
    click.echo(str(path))


@main.group("dashboard")
def dashboard_group() -> None:
    """Dashboard reports."""


@dashboard_group.command("metrics")
@click.pass_context
def dashboard_metrics(ctx: click.Context) -> None:
    metrics = _run(ctx, dashboard.get_key_metrics)
    click.echo(json.dumps(metrics, indent=2, sort_keys=True))


if __name__ == "__main__":  # pragma: no cover
    main()
