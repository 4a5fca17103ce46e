"""Per-file text extraction service.

Routes each SourceFile to the PDF strategy or the OCR strategy based on
its declared media type and file name.  The PDF worker resolver is owned
by the extractor and shared by every call made through it, so a process
normally creates one DocumentExtractor and reuses it.
"""

from __future__ import annotations

import logging

import httpx

from medidoc.config.settings import ExtractionSettings
from medidoc.extractor.detection import detect_file_kind
from medidoc.extractor.ocr_extractor import TesseractOcrEngine
from medidoc.extractor.pdf_extractor import PdfTextParser
from medidoc.extractor.types import (
    ExtractionMethod,
    ExtractionResult,
    FileKind,
    SourceFile,
)
from medidoc.extractor.worker import WorkerEndpointResolver

logger = logging.getLogger(__name__)

__all__ = ["DocumentExtractor", "ExtractionResult"]


class DocumentExtractor:
    """Extract plain text from uploaded PDFs and images.

    Args:
        settings: Extraction configuration (worker candidates, OCR options).
        http_client: Async client for worker probes and worker parsing;
            its lifecycle is managed by the caller.
        resolver: Worker resolver to share; built from *settings* if omitted.
        pdf_parser: PDF strategy override (tests).
        ocr_engine: OCR strategy override (tests).
    """

    def __init__(
        self,
        settings: ExtractionSettings,
        http_client: httpx.AsyncClient,
        resolver: WorkerEndpointResolver | None = None,
        pdf_parser: PdfTextParser | None = None,
        ocr_engine: TesseractOcrEngine | None = None,
    ) -> None:
        self.resolver = resolver or WorkerEndpointResolver(
            settings.worker_urls,
            http_client,
            probe_timeout=settings.worker_probe_timeout_seconds,
        )
        self._pdf_parser = pdf_parser or PdfTextParser(
            self.resolver, http_client, settings
        )
        self._ocr_engine = ocr_engine or TesseractOcrEngine(settings)

    async def extract(self, file: SourceFile) -> ExtractionResult:
        """Extract text from *file*.

        The returned text is stripped but may be empty; deciding whether
        empty text is acceptable is up to the caller.

        Raises:
            UnsupportedTypeError: *file* is neither a PDF nor an image.
            CorruptInputError: The PDF bytes could not be parsed.
            ExtractionEngineError: The worker, parser, or OCR engine failed.
        """
        kind = detect_file_kind(file)
        logger.info(
            "Extracting text from %s (%s, %d bytes) via %s strategy",
            file.name,
            file.content_type or "unknown type",
            len(file.data),
            kind.value,
        )

        if kind is FileKind.PDF:
            text, method, page_count = await self._pdf_parser.parse(
                file.data, file.name
            )
            return ExtractionResult(
                text=text,
                source_file_name=file.name,
                method=method,
                page_count=page_count,
            )

        text = await self._ocr_engine.recognize(file.data, file.name)
        return ExtractionResult(
            text=text,
            source_file_name=file.name,
            method=ExtractionMethod.TESSERACT,
        )
