"""
HTML -> PDF renderer client.

Rendering is delegated to a Gotenberg-compatible HTTP service:
- POST /forms/chromium/convert/html  (multipart, `files=index.html`) -> application/pdf
"""

from __future__ import annotations

import os
from typing import Protocol

import httpx


# Renderer failures are explicit and separable from other runtime errors.
class PdfRenderError(RuntimeError):
    pass


class PdfRenderer(Protocol):
    async def render_html_to_pdf(self, html: str) -> bytes: ...


def pdf_renderer_url() -> str:
    return os.environ.get("PDF_RENDERER_URL", "http://gotenberg:3000").strip() or "http://gotenberg:3000"


def pdf_renderer_timeout_s() -> float:
    raw = os.environ.get("PDF_RENDERER_TIMEOUT_S", "").strip()
    try:
        return float(raw) if raw else 60.0
    except ValueError:
        return 60.0


def _normalize_base_url(base_url: str) -> str:
    base_url = (base_url or "").strip()
    if not base_url:
        raise PdfRenderError("PDF_RENDERER_URL is empty.")
    return base_url.rstrip("/")


class GotenbergRenderer:
    def __init__(self, *, base_url: str, timeout_s: float = 60.0) -> None:
        self.base_url = _normalize_base_url(base_url)
        self.timeout_s = timeout_s

    async def render_html_to_pdf(self, html: str) -> bytes:
        """
        Render a full HTML document (A4, default margins) and return the PDF bytes.
        """
        files = {"files": ("index.html", html.encode("utf-8"), "text/html")}
        try:
            async with httpx.AsyncClient(base_url=self.base_url, timeout=self.timeout_s) as client:
                resp = await client.post("/forms/chromium/convert/html", files=files)
        except httpx.HTTPError as exc:
            raise PdfRenderError(f"PDF renderer request failed: {exc}") from exc

        if resp.status_code != 200:
            # Avoid dumping huge bodies; include a small snippet.
            body = resp.text[:500]
            raise PdfRenderError(f"PDF renderer returned {resp.status_code}: {body}")

        if not resp.content:
            raise PdfRenderError("PDF renderer returned an empty document.")
        return resp.content


def get_pdf_renderer() -> PdfRenderer:
    return GotenbergRenderer(base_url=pdf_renderer_url(), timeout_s=pdf_renderer_timeout_s())
