"""File type detection for choosing an extraction strategy."""

from __future__ import annotations

from medidoc.errors import UnsupportedTypeError
from medidoc.extractor.types import FileKind, SourceFile

PDF_MEDIA_TYPE = "application/pdf"

IMAGE_EXTENSIONS = (".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif", ".webp")

UNSUPPORTED_MESSAGE = (
    "Unsupported file type for text extraction. Please use PDF or image files "
    "(PNG, JPG) or try the other analysis tools."
)


def detect_file_kind(file: SourceFile) -> FileKind:
    """Pick the extraction strategy for *file*.

    PDF wins when either the declared media type or the file name says PDF;
    otherwise an ``image/*`` media type or a known image extension selects
    OCR.

    Raises:
        UnsupportedTypeError: Neither a PDF nor an image was indicated.
    """
    content_type = (file.content_type or "").lower()
    name = file.name.lower()

    if content_type == PDF_MEDIA_TYPE or name.endswith(".pdf"):
        return FileKind.PDF
    if content_type.startswith("image/") or name.endswith(IMAGE_EXTENSIONS):
        return FileKind.IMAGE
    raise UnsupportedTypeError(UNSUPPORTED_MESSAGE)
