"""Shared types for summarization and clinical analysis.

Summaries are reported as a tagged outcome: SummarySuccess or
SummaryFailure.  ``to_dict()`` produces the camel-cased shape consumed by
the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Literal, Union

from medidoc.analyzer.classifier import DocumentCategory


@dataclass(frozen=True)
class SummaryRequest:
    """Prompt prepared for a document summary."""

    prompt_text: str
    document_type: DocumentCategory


@dataclass(frozen=True)
class SummarySuccess:
    """A generated summary.

    Attributes:
        summary_text: Text returned by the model (or the fallback sentinel).
        extracted_text_preview: Leading slice of the extracted text.
        document_type: Category the prompt was built for.
        source_file_name: Name of the summarized file.
    """

    summary_text: str
    extracted_text_preview: str
    document_type: DocumentCategory
    source_file_name: str

    success: Literal[True] = True

    def to_dict(self) -> dict[str, Any]:
        return {
            "success": True,
            "summary": self.summary_text,
            "extractedText": self.extracted_text_preview,
            "documentType": self.document_type.value,
            "fileName": self.source_file_name,
        }


@dataclass(frozen=True)
class SummaryFailure:
    """A summary that could not be produced, with a human-readable reason."""

    reason: str

    success: Literal[False] = False

    def to_dict(self) -> dict[str, Any]:
        return {"success": False, "error": self.reason, "summary": None}


SummaryOutcome = Union[SummarySuccess, SummaryFailure]


class AnalysisType(Enum):
    """Free-text clinical analyses that can be requested."""

    SYMPTOM_ANALYSIS = "symptom_analysis"
    DRUG_INTERACTION = "drug_interaction"
    TREATMENT_PLAN = "treatment_plan"
    NOTES_ANALYSIS = "notes_analysis"


@dataclass(frozen=True)
class PatientContext:
    """Optional patient details included in clinical prompts."""

    age: str | None = None
    gender: str | None = None
    medical_history: str | None = None


@dataclass(frozen=True)
class ClinicalAnalysis:
    """Model output for one clinical analysis request."""

    summary: str
    analysis_type: AnalysisType
    timestamp: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "summary": self.summary,
            "type": self.analysis_type.value,
            "timestamp": self.timestamp,
        }
