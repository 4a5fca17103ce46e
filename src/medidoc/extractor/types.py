"""Shared types for the extraction pipeline.

Defines SourceFile, ExtractionResult, and the enums used across the
detector, the PDF and OCR strategies, and the extraction service.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class FileKind(Enum):
    """Extraction strategy family chosen for a file."""

    PDF = "pdf"
    IMAGE = "image"


class ExtractionMethod(Enum):
    """Engine that produced the extracted text."""

    PDF_WORKER = "pdf_worker"
    PDF_LOCAL = "pymupdf"
    TESSERACT = "tesseract"


@dataclass(frozen=True)
class SourceFile:
    """An uploaded file handed to the pipeline for a single call.

    Attributes:
        name: Original file name, used for type detection and reporting.
        content_type: Declared media type (may be empty when unknown).
        data: Raw file bytes.
    """

    name: str
    content_type: str
    data: bytes

    @classmethod
    def from_path(cls, path: Path, content_type: str | None = None) -> SourceFile:
        """Read *path* from disk, guessing the media type from its suffix."""
        if content_type is None:
            content_type = mimetypes.guess_type(path.name)[0] or ""
        return cls(name=path.name, content_type=content_type, data=path.read_bytes())


@dataclass
class ExtractionResult:
    """Text extracted from one SourceFile.

    Attributes:
        text: Extracted text, stripped of surrounding whitespace.
        source_file_name: Name of the file the text came from.
        method: Which engine produced the text.
        page_count: Number of PDF pages parsed (0 for images).
    """

    text: str
    source_file_name: str
    method: ExtractionMethod
    page_count: int = 0
