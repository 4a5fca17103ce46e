"""Test helpers: sample documents and a recording MockTransport handler."""

from __future__ import annotations

import io

import httpx
import pymupdf
from PIL import Image

WORKER_A = "http://worker-a.test/pdf-worker/v1/text"
WORKER_B = "http://worker-b.test/pdf-worker/v1/text"
GEMINI_BASE = "http://gemini.test"
GEMINI_URL = f"{GEMINI_BASE}/api/gemini"


class RecordingHandler:
    """MockTransport handler that records every request it answers."""

    def __init__(self, respond):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self))

    def count(self, method: str | None = None, url: str | None = None) -> int:
        return sum(
            1
            for r in self.requests
            if (method is None or r.method == method)
            and (url is None or str(r.url) == url)
        )


def make_pdf(*pages: str) -> bytes:
    """Build a PDF with one page per string, text drawn at the top-left."""
    doc = pymupdf.open()
    for text in pages:
        page = doc.new_page()
        if text:
            page.insert_text((72, 72), text)
    data = doc.tobytes()
    doc.close()
    return data


def make_png() -> bytes:
    buf = io.BytesIO()
    Image.new("RGB", (32, 16), color="white").save(buf, format="PNG")
    return buf.getvalue()


def worker_pages(*pages: list[str]) -> dict:
    """Worker response body with the given text items per page."""
    return {"pages": [{"items": [{"str": s} for s in items]} for items in pages]}
