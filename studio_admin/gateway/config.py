"""
Centralized configuration for the request gateway.

Intent:
    Provide a single source of truth for the backend base URL, the request
    timeout and the location of the persisted credential slots. Values come
    from environment variables with sane fallbacks so tests and the CLI can
    override them without touching code.

Behavior:
    - STUDIO_API_BASE_URL: backend root, trailing slash stripped.
    - STUDIO_API_TIMEOUT_SECONDS: positive float; invalid values fall back.
    - STUDIO_CREDENTIALS_PATH: JSON file holding the two token slots.

Permissions:
    Pure configuration; no external calls or privileges required.
"""
from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path


DEFAULT_BASE_URL = "https://api.adalusa.art"
DEFAULT_TIMEOUT_SECONDS = 30.0
DEFAULT_CREDENTIALS_PATH = Path("~/.config/studio-admin/credentials.json")


@dataclass(frozen=True)
class GatewayConfig:
    base_url: str = DEFAULT_BASE_URL  # e.g., https://api.adalusa.art (no trailing slash)
    timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS
    credentials_path: Path = DEFAULT_CREDENTIALS_PATH

    def resolve(self, url: str) -> str:
        """Return `url` unchanged when absolute, otherwise join it to base_url."""
        if url.startswith(("http://", "https://")):
            return url
        return f"{self.base_url.rstrip('/')}/{url.lstrip('/')}"

    def with_base_url(self, base_url: str) -> "GatewayConfig":
        return replace(self, base_url=base_url.rstrip("/"))


def _parse_float_env(name: str, default: float) -> float:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return default
    try:
        value = float(raw)
    except ValueError:
        return default
    if value <= 0:
        return default
    return value


def load_gateway_config() -> GatewayConfig:
    base_url = (os.getenv("STUDIO_API_BASE_URL") or DEFAULT_BASE_URL).strip().rstrip("/")
    timeout = _parse_float_env("STUDIO_API_TIMEOUT_SECONDS", DEFAULT_TIMEOUT_SECONDS)
    raw_path = (os.getenv("STUDIO_CREDENTIALS_PATH") or "").strip()
    credentials_path = Path(raw_path) if raw_path else DEFAULT_CREDENTIALS_PATH
    return GatewayConfig(
        base_url=base_url or DEFAULT_BASE_URL,
        timeout_seconds=timeout,
        credentials_path=credentials_path.expanduser(),
    )


__all__ = [
    "DEFAULT_BASE_URL",
    "DEFAULT_CREDENTIALS_PATH",
    "DEFAULT_TIMEOUT_SECONDS",
    "GatewayConfig",
    "load_gateway_config",
]
