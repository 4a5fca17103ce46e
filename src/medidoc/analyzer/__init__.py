"""Document classification, summarization, and clinical analysis.

Public API:
    classify(file_name, category_hint) -> DocumentCategory
    DocumentSummarizer(extractor, client, settings).summarize(file)
        -> SummaryOutcome
    GeminiClient(settings, http_client).send_message(prompt) -> str
    ClinicalAnalyzer(client).analyze_symptoms(...) / ...
"""

from medidoc.analyzer.classifier import DocumentCategory, classify
from medidoc.analyzer.client import GeminiClient
from medidoc.analyzer.clinical import ClinicalAnalyzer
from medidoc.analyzer.service import DocumentSummarizer
from medidoc.analyzer.types import (
    AnalysisType,
    ClinicalAnalysis,
    PatientContext,
    SummaryFailure,
    SummaryOutcome,
    SummaryRequest,
    SummarySuccess,
)

__all__ = [
    "AnalysisType",
    "ClinicalAnalysis",
    "ClinicalAnalyzer",
    "DocumentCategory",
    "DocumentSummarizer",
    "GeminiClient",
    "PatientContext",
    "SummaryFailure",
    "SummaryOutcome",
    "SummaryRequest",
    "SummarySuccess",
    "classify",
]
