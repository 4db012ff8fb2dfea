"""
Invoice PDF download.

Why: PDF downloads bypass the generic gateway. The body is binary, must be
streamed to disk, and the content type must be checked before anything is
written. Only the credential lookup and the HTTP client are shared with the
gateway.

Behavior:
    - non-2xx: backend `message` (string or list) if the error body is JSON,
      otherwise "Failed to download invoice (Error: <status> <reason>)".
    - 2xx without application/pdf: rejected, nothing is written.
    - `dest` may be a directory (file name `invoice-<id>.pdf`) or a file path.
"""
from __future__ import annotations

from pathlib import Path
import json
import logging

import httpx

from studio_admin.gateway.errors import ApiRequestError, parse_error_message, render_message
from studio_admin.gateway.request import RequestGateway

from . import endpoints as ep

logger = logging.getLogger(__name__)

PDF_CONTENT_TYPE = "application/pdf"
UNEXPECTED_TYPE_MESSAGE = "Expected a PDF file but received an unexpected file type."


def _target_path(dest: Path | str, invoice_id: str) -> Path:
    target = Path(dest).expanduser()
    if target.is_dir():
        return target / f"invoice-{invoice_id}.pdf"
    return target


def _download_error(status: int, reason: str, raw: bytes) -> str:
    message = f"Failed to download invoice (Error: {status} {reason})"
    try:
        tagged = parse_error_message(json.loads(raw.decode("utf-8") or "null"))
    except ValueError:
        return message
    if tagged is None:
        return message
    return render_message(tagged) or message


async def download_invoice_pdf(gw: RequestGateway, invoice_id: str, dest: Path | str = ".") -> Path:
    """Stream the invoice PDF to `dest` and return the written path."""
    url = gw.config.resolve(ep.path(ep.INVOICE_PDF, invoice_id=invoice_id))
    headers = {"Accept": PDF_CONTENT_TYPE, **gw.credentials().authorization_header()}
    target = _target_path(dest, invoice_id)
    tmp = target.with_name(target.name + ".part")
    try:
        async with gw.client.stream("GET", url, headers=headers) as resp:
            if not resp.is_success:
                raw = await resp.aread()
                raise ApiRequestError(_download_error(resp.status_code, resp.reason_phrase, raw))
            if PDF_CONTENT_TYPE not in (resp.headers.get("content-type") or ""):
                raise ApiRequestError(UNEXPECTED_TYPE_MESSAGE)
            target.parent.mkdir(parents=True, exist_ok=True)
            size = 0
            with tmp.open("wb") as fh:
                async for chunk in resp.aiter_bytes():
                    if not chunk:
                        continue
                    fh.write(chunk)
                    size += len(chunk)
        tmp.replace(target)
    except ApiRequestError as exc:
        logger.error("invoice pdf download failed invoice=%s: %s", invoice_id, exc.message)
        raise
    except (httpx.HTTPError, OSError) as exc:
        tmp.unlink(missing_ok=True)
        message = str(exc) or exc.__class__.__name__
        logger.error("invoice pdf download failed invoice=%s: %s", invoice_id, message)
        raise ApiRequestError(message) from exc
    logger.info("invoice pdf saved invoice=%s size=%s", invoice_id, size)
    return target
