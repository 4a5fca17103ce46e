"""PDF text extraction through the PDF worker or local pymupdf parsing.

The worker path posts the PDF bytes to the resolved worker URL; the local
path opens the bytes with pymupdf in a thread.  Both produce one text
string per page built from the page's content items in document order.
Engine failures are raised as ExtractionEngineError tagged with an
ErrorKind; ``PdfTextParser`` uses the tag to retry worker failures once
locally and to report unparsable documents as CorruptInputError.
"""

from __future__ import annotations

import asyncio
import logging

import httpx
import pymupdf
from pydantic import ValidationError

from medidoc.config.settings import ExtractionSettings
from medidoc.errors import CorruptInputError, ErrorKind, ExtractionEngineError
from medidoc.extractor.detection import PDF_MEDIA_TYPE
from medidoc.extractor.schemas import WorkerTextResponse
from medidoc.extractor.types import ExtractionMethod
from medidoc.extractor.worker import WorkerEndpointResolver

logger = logging.getLogger(__name__)

# PDF readers accept the header anywhere in the first 1024 bytes
_HEADER_WINDOW = 1024


def has_pdf_header(data: bytes) -> bool:
    """Return True if *data* carries a ``%PDF`` header."""
    return b"%PDF" in data[:_HEADER_WINDOW]


def join_pages(pages: list[str]) -> str:
    """Join per-page text with newlines and strip the result."""
    return "\n".join(pages).strip()


async def parse_with_worker(
    data: bytes,
    worker_url: str,
    http_client: httpx.AsyncClient,
    timeout: float,
) -> list[str]:
    """Send *data* to the PDF worker and return per-page text.

    Raises:
        ExtractionEngineError: kind INVALID_DOCUMENT when the worker rejects
            the document (HTTP 422), kind WORKER for transport failures,
            other error statuses and malformed responses.
    """
    try:
        response = await http_client.post(
            worker_url,
            content=data,
            headers={"Content-Type": PDF_MEDIA_TYPE},
            timeout=timeout,
        )
    except httpx.HTTPError as exc:
        raise ExtractionEngineError(
            f"PDF worker request failed: {exc}", ErrorKind.WORKER
        ) from exc

    if response.status_code == 422:
        raise ExtractionEngineError(
            f"Invalid PDF file format: {response.text.strip()}",
            ErrorKind.INVALID_DOCUMENT,
        )
    if not response.is_success:
        raise ExtractionEngineError(
            f"PDF worker returned HTTP {response.status_code}", ErrorKind.WORKER
        )

    try:
        parsed = WorkerTextResponse.model_validate_json(response.content)
    except ValidationError as exc:
        raise ExtractionEngineError(
            f"PDF worker sent a malformed response: {exc.error_count()} errors",
            ErrorKind.WORKER,
        ) from exc

    return [page.text for page in parsed.pages]


def parse_locally(data: bytes) -> list[str]:
    """Parse *data* in-process with pymupdf and return per-page text.

    Each page's words are its content items; they are joined with single
    spaces in the order pymupdf reads them from the content stream.

    Raises:
        ExtractionEngineError: kind INVALID_DOCUMENT when pymupdf cannot
            open the stream, kind ENGINE for anything else.
    """
    try:
        doc = pymupdf.open(stream=data, filetype="pdf")
    except pymupdf.FileDataError as exc:
        raise ExtractionEngineError(
            f"Invalid PDF file format: {exc}", ErrorKind.INVALID_DOCUMENT
        ) from exc
    except Exception as exc:
        raise ExtractionEngineError(f"Cannot open PDF: {exc}") from exc

    try:
        if doc.needs_pass:
            raise ExtractionEngineError("PDF is password-protected")

        pages: list[str] = []
        for page in doc:
            words = page.get_text("words", sort=False)
            pages.append(" ".join(word[4] for word in words))
        return pages
    except ExtractionEngineError:
        raise
    except Exception as exc:
        raise ExtractionEngineError(f"PDF parsing failed: {exc}") from exc
    finally:
        doc.close()


class PdfTextParser:
    """PDF strategy: worker when available, local pymupdf otherwise."""

    def __init__(
        self,
        resolver: WorkerEndpointResolver,
        http_client: httpx.AsyncClient,
        settings: ExtractionSettings,
    ) -> None:
        self._resolver = resolver
        self._client = http_client
        self._parse_timeout = settings.worker_parse_timeout_seconds

    async def parse(self, data: bytes, name: str) -> tuple[str, ExtractionMethod, int]:
        """Extract text from PDF bytes.

        A failure attributable to the worker disables the resolver and the
        document is parsed once more locally.

        Returns:
            Tuple of (text, method, page_count).

        Raises:
            CorruptInputError: The bytes are not a parsable PDF.
            ExtractionEngineError: The worker and/or local parser failed.
        """
        if not has_pdf_header(data):
            raise CorruptInputError("Invalid PDF file format")

        worker_url = await self._resolver.resolve()
        try:
            pages, method = await self._parse_once(data, worker_url)
        except ExtractionEngineError as exc:
            if exc.kind is not ErrorKind.WORKER or worker_url is None:
                _raise_surfaced(exc)
            logger.warning(
                "PDF worker failed for %s (%s); retrying with local parsing",
                name,
                exc,
            )
            self._resolver.disable()
            try:
                pages, method = await self._parse_once(data, None)
            except ExtractionEngineError as retry_exc:
                _raise_surfaced(retry_exc)

        text = join_pages(pages)
        logger.info(
            "Extracted %d chars from %d pages via %s: %s",
            len(text),
            len(pages),
            method.value,
            name,
        )
        return text, method, len(pages)

    async def _parse_once(
        self, data: bytes, worker_url: str | None
    ) -> tuple[list[str], ExtractionMethod]:
        if worker_url is not None:
            pages = await parse_with_worker(
                data, worker_url, self._client, self._parse_timeout
            )
            return pages, ExtractionMethod.PDF_WORKER
        pages = await asyncio.to_thread(parse_locally, data)
        return pages, ExtractionMethod.PDF_LOCAL


def _raise_surfaced(exc: ExtractionEngineError) -> None:
    if exc.kind is ErrorKind.INVALID_DOCUMENT:
        raise CorruptInputError(str(exc)) from exc
    raise exc
