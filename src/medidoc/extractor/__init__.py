"""Text extraction pipeline: PDF (worker or pymupdf) and image OCR.

Public API:
    DocumentExtractor(settings, http_client).extract(file)
        -> ExtractionResult
"""

from medidoc.extractor.detection import detect_file_kind
from medidoc.extractor.service import DocumentExtractor
from medidoc.extractor.types import (
    ExtractionMethod,
    ExtractionResult,
    FileKind,
    SourceFile,
)
from medidoc.extractor.worker import WorkerEndpointResolver, WorkerState

__all__ = [
    "DocumentExtractor",
    "ExtractionMethod",
    "ExtractionResult",
    "FileKind",
    "SourceFile",
    "WorkerEndpointResolver",
    "WorkerState",
    "detect_file_kind",
]
