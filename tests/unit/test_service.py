"""Tests for the summarization orchestrator."""

import asyncio
import json

import httpx
import pytest
from helpers import RecordingHandler

from medidoc.analyzer.classifier import DocumentCategory
from medidoc.analyzer.client import GeminiClient
from medidoc.analyzer.service import NO_TEXT_REASON, SUMMARY_FALLBACK, DocumentSummarizer
from medidoc.analyzer.types import SummaryFailure, SummarySuccess
from medidoc.errors import CorruptInputError, ExtractionEngineError
from medidoc.extractor.service import DocumentExtractor
from medidoc.extractor.types import ExtractionMethod, ExtractionResult, SourceFile

PDF_FILE = SourceFile("lab_result_march.pdf", "application/pdf", b"%PDF-1.7")


class StubExtractor:
    """Returns fixed text, or raises the given error."""

    def __init__(self, text="", error=None):
        self._text = text
        self._error = error
        self.calls = 0

    async def extract(self, file):
        self.calls += 1
        if self._error is not None:
            raise self._error
        return ExtractionResult(
            text=self._text,
            source_file_name=file.name,
            method=ExtractionMethod.PDF_LOCAL,
            page_count=1,
        )


def _summarize(extractor, handler, gemini_settings, summary_settings, file=PDF_FILE, **kwargs):
    async def scenario():
        async with handler.client() as http_client:
            client = GeminiClient(gemini_settings, http_client)
            summarizer = DocumentSummarizer(extractor, client, summary_settings)
            return await summarizer.summarize(file, **kwargs)

    return asyncio.run(scenario())


def _ok(text="Summary text"):
    return RecordingHandler(lambda r: httpx.Response(200, json={"response": text}))


@pytest.mark.parametrize("text", ["", "   \n\t  "])
def test_empty_text_fails_without_remote_call(gemini_settings, summary_settings, text):
    handler = _ok()

    outcome = _summarize(StubExtractor(text), handler, gemini_settings, summary_settings)

    assert isinstance(outcome, SummaryFailure)
    assert outcome.reason == NO_TEXT_REASON
    assert outcome.reason.lower().startswith("no readable text found")
    assert handler.requests == []


def test_success_outcome(gemini_settings, summary_settings):
    text = "Hemoglobin 13.5 g/dL " * 40
    handler = _ok("Your hemoglobin is normal.")

    outcome = _summarize(StubExtractor(text), handler, gemini_settings, summary_settings)

    assert isinstance(outcome, SummarySuccess)
    assert outcome.success is True
    assert outcome.summary_text == "Your hemoglobin is normal."
    assert outcome.extracted_text_preview == text[:500] + "..."
    assert outcome.document_type is DocumentCategory.LAB_REPORT
    assert outcome.source_file_name == "lab_result_march.pdf"
    assert outcome.to_dict() == {
        "success": True,
        "summary": "Your hemoglobin is normal.",
        "extractedText": text[:500] + "...",
        "documentType": "lab report",
        "fileName": "lab_result_march.pdf",
    }


def test_prompt_carries_document_type_and_text(gemini_settings, summary_settings):
    handler = _ok()

    _summarize(
        StubExtractor("Take one tablet daily"),
        handler,
        gemini_settings,
        summary_settings,
        file=SourceFile("notes.pdf", "application/pdf", b"%PDF"),
        category_hint="prescription",
    )

    (request,) = handler.requests
    prompt = json.loads(request.content)["message"]
    assert "following prescription document" in prompt
    assert "Take one tablet daily" in prompt


def test_explicit_document_type_skips_classification(gemini_settings, summary_settings):
    outcome = _summarize(
        StubExtractor("text"),
        _ok(),
        gemini_settings,
        summary_settings,
        document_type=DocumentCategory.MEDICAL_REPORT,
        category_hint="imaging",
    )
    assert outcome.document_type is DocumentCategory.MEDICAL_REPORT


def test_missing_reply_text_uses_sentinel(gemini_settings, summary_settings):
    handler = RecordingHandler(lambda r: httpx.Response(200, json={}))

    outcome = _summarize(StubExtractor("text"), handler, gemini_settings, summary_settings)

    assert outcome.summary_text == SUMMARY_FALLBACK


def test_remote_error_becomes_failure(gemini_settings, summary_settings):
    handler = RecordingHandler(lambda r: httpx.Response(500, text="internal error"))

    outcome = _summarize(StubExtractor("text"), handler, gemini_settings, summary_settings)

    assert outcome == SummaryFailure(reason="Gemini API error: 500")
    assert outcome.to_dict() == {
        "success": False,
        "error": "Gemini API error: 500",
        "summary": None,
    }


def test_transport_error_becomes_failure(gemini_settings, summary_settings):
    def refuse(request):
        raise httpx.ConnectError("connection refused", request=request)

    outcome = _summarize(
        StubExtractor("text"), RecordingHandler(refuse), gemini_settings, summary_settings
    )

    assert isinstance(outcome, SummaryFailure)
    assert outcome.reason == "connection refused"


@pytest.mark.parametrize(
    "error",
    [
        CorruptInputError("Invalid PDF file format"),
        ExtractionEngineError("Failed to extract text from image: boom"),
    ],
)
def test_extraction_error_message_becomes_reason(gemini_settings, summary_settings, error):
    handler = _ok()

    outcome = _summarize(
        StubExtractor(error=error), handler, gemini_settings, summary_settings
    )

    assert outcome == SummaryFailure(reason=str(error))
    assert handler.requests == []


def test_unexpected_extraction_error_is_captured(gemini_settings, summary_settings):
    outcome = _summarize(
        StubExtractor(error=KeyError("boom")), _ok(), gemini_settings, summary_settings
    )
    assert isinstance(outcome, SummaryFailure)


def test_unsupported_file_through_real_extractor(
    extraction_settings, gemini_settings, summary_settings
):
    handler = _ok()

    async def scenario():
        async with handler.client() as http_client:
            extractor = DocumentExtractor(extraction_settings, http_client)
            client = GeminiClient(gemini_settings, http_client)
            summarizer = DocumentSummarizer(extractor, client, summary_settings)
            return await summarizer.summarize(
                SourceFile("notes.txt", "text/plain", b"plain notes")
            )

    outcome = asyncio.run(scenario())

    assert isinstance(outcome, SummaryFailure)
    assert outcome.reason.startswith("Unsupported file type")
    assert handler.requests == []
