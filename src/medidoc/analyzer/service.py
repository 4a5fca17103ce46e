"""Document summarization orchestrator.

Extracts text from an uploaded file, classifies it, builds a bounded
prompt, and asks the remote text-generation endpoint for a summary.
``summarize`` never raises: every failure becomes a SummaryFailure
carrying a human-readable reason.
"""

from __future__ import annotations

import logging

import httpx

from medidoc.analyzer.classifier import DocumentCategory, classify
from medidoc.analyzer.client import GeminiClient
from medidoc.analyzer.prompt import build_summary_request
from medidoc.analyzer.types import SummaryFailure, SummaryOutcome, SummarySuccess
from medidoc.config.settings import SummarySettings
from medidoc.errors import EmptyContentError, MedidocError, RemoteServiceError
from medidoc.extractor.service import DocumentExtractor
from medidoc.extractor.types import SourceFile

logger = logging.getLogger(__name__)

NO_TEXT_REASON = (
    "No readable text found in the document. "
    "The document might be scanned or corrupted."
)
SUMMARY_FALLBACK = "Summary could not be generated"


class DocumentSummarizer:
    """Turn an uploaded document into a patient-readable summary."""

    def __init__(
        self,
        extractor: DocumentExtractor,
        client: GeminiClient,
        settings: SummarySettings,
    ) -> None:
        self._extractor = extractor
        self._client = client
        self._settings = settings

    async def summarize(
        self,
        file: SourceFile,
        document_type: DocumentCategory | None = None,
        category_hint: str | None = None,
    ) -> SummaryOutcome:
        """Extract, prompt, and summarize *file*.

        Args:
            file: The uploaded document.
            document_type: Category to summarize as; derived from the file
                name and *category_hint* when omitted.
            category_hint: Storage category used by ``classify`` when
                *document_type* is not given.

        Returns:
            SummarySuccess, or SummaryFailure with the reason.  The remote
            endpoint is not contacted when no text could be extracted.
        """
        try:
            text = await self._extract_text(file)
        except MedidocError as exc:
            logger.warning("Cannot summarize %s: %s", file.name, exc)
            return SummaryFailure(reason=str(exc))
        except Exception:
            logger.exception("Unexpected error extracting %s", file.name)
            return SummaryFailure(reason=f"Unexpected error extracting {file.name}")

        if document_type is None:
            document_type = classify(file.name, category_hint)

        request = build_summary_request(text, document_type, self._settings)

        try:
            reply = await self._client.generate(request.prompt_text)
        except RemoteServiceError as exc:
            return SummaryFailure(reason=f"Gemini API error: {exc.status_code}")
        except httpx.HTTPError as exc:
            logger.error("Gemini API request failed for %s: %s", file.name, exc)
            return SummaryFailure(reason=str(exc))
        except Exception:
            logger.exception("Unexpected error summarizing %s", file.name)
            return SummaryFailure(reason=f"Unexpected error summarizing {file.name}")

        logger.info("Summary generated for %s (%s)", file.name, document_type.value)
        return SummarySuccess(
            summary_text=reply.text_or(SUMMARY_FALLBACK),
            extracted_text_preview=text[: self._settings.preview_chars] + "...",
            document_type=document_type,
            source_file_name=file.name,
        )

    async def _extract_text(self, file: SourceFile) -> str:
        result = await self._extractor.extract(file)
        if not result.text.strip():
            raise EmptyContentError(NO_TEXT_REASON)
        return result.text
