"""Error taxonomy for the extraction and summarization pipeline.

Extraction errors derive from ExtractionError; the remote chat endpoint
raises RemoteServiceError.  Engine adapters tag failures with an ErrorKind
so the PDF strategy can decide on its single worker-less retry by
structure rather than by inspecting error text.
"""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """Origin of a failure reported by an extraction engine adapter."""

    WORKER = "worker"
    INVALID_DOCUMENT = "invalid_document"
    ENGINE = "engine"


class MedidocError(Exception):
    """Base class for all errors raised by medidoc."""


class ExtractionError(MedidocError):
    """Base class for text extraction failures."""


class UnsupportedTypeError(ExtractionError):
    """Neither a PDF nor an image signature was detected."""


class CorruptInputError(ExtractionError):
    """The PDF byte stream could not be parsed."""


class ExtractionEngineError(ExtractionError):
    """The PDF worker, the local PDF parser, or the OCR engine failed."""

    def __init__(self, message: str, kind: ErrorKind = ErrorKind.ENGINE) -> None:
        super().__init__(message)
        self.kind = kind


class EmptyContentError(ExtractionError):
    """Extraction succeeded but produced no usable text."""


class RemoteServiceError(MedidocError):
    """The remote text-generation endpoint answered with a non-2xx status."""

    def __init__(self, status_code: int, body: str = "") -> None:
        self.status_code = status_code
        self.body = body
        super().__init__(f"Gemini API error: {status_code} {body}".rstrip())
