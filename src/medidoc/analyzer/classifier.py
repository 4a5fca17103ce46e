"""Keyword-based document category classification.

The file name is searched (case-insensitively, by substring) for keyword
groups in a fixed priority order.  Only when no group matches is the
caller's category hint consulted.
"""

from __future__ import annotations

from enum import Enum


class DocumentCategory(str, Enum):
    """Kind of medical document, phrased for use inside prompts."""

    LAB_REPORT = "lab report"
    PRESCRIPTION = "prescription"
    MEDICAL_SCAN = "medical scan"
    MEDICAL_REPORT = "medical report"
    MEDICAL_DOCUMENT = "medical document"

    def __str__(self) -> str:
        return self.value


# Checked in order; the first group with any keyword in the name wins.
_KEYWORD_GROUPS: tuple[tuple[tuple[str, ...], DocumentCategory], ...] = (
    (("lab", "test", "result"), DocumentCategory.LAB_REPORT),
    (("prescription", "rx", "medication"), DocumentCategory.PRESCRIPTION),
    (("scan", "xray", "mri", "ct"), DocumentCategory.MEDICAL_SCAN),
    (("report", "summary"), DocumentCategory.MEDICAL_REPORT),
)

_HINT_CATEGORIES: dict[str, DocumentCategory] = {
    "lab": DocumentCategory.LAB_REPORT,
    "prescription": DocumentCategory.PRESCRIPTION,
    "imaging": DocumentCategory.MEDICAL_SCAN,
}


def classify(file_name: str, category_hint: str | None = None) -> DocumentCategory:
    """Classify a document from its file name and an optional category hint.

    Args:
        file_name: Uploaded file name, e.g. ``"lab_result_march.pdf"``.
        category_hint: Storage category chosen at upload time
            (``"lab"``, ``"prescription"``, ``"imaging"``), if any.

    Returns:
        The matching category; ``MEDICAL_DOCUMENT`` when nothing matches.
    """
    name = file_name.lower()
    for keywords, category in _KEYWORD_GROUPS:
        if any(keyword in name for keyword in keywords):
            return category

    if category_hint is not None:
        return _HINT_CATEGORIES.get(category_hint, DocumentCategory.MEDICAL_DOCUMENT)
    return DocumentCategory.MEDICAL_DOCUMENT
