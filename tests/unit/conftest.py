"""Shared settings fixtures for unit tests."""

from __future__ import annotations

import pytest
from helpers import GEMINI_BASE, WORKER_A, WORKER_B

from medidoc.config.settings import ExtractionSettings, GeminiSettings, SummarySettings


@pytest.fixture
def extraction_settings() -> ExtractionSettings:
    return ExtractionSettings(
        worker_urls=[WORKER_A, WORKER_B],
        worker_probe_timeout_seconds=1.0,
        worker_parse_timeout_seconds=5.0,
        ocr_language="eng",
        tesseract_cmd="tesseract",
    )


@pytest.fixture
def gemini_settings() -> GeminiSettings:
    return GeminiSettings(api_base_url=GEMINI_BASE, chat_path="/api/gemini")


@pytest.fixture
def summary_settings() -> SummarySettings:
    return SummarySettings(max_prompt_chars=8000, truncation_marker="...", preview_chars=500)
