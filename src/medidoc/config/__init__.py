"""Configuration package -- typed, validated settings from YAML + .env."""

from .settings import (
    ExtractionSettings,
    GeminiSettings,
    PipelineSettings,
    SummarySettings,
)

__all__ = [
    "ExtractionSettings",
    "GeminiSettings",
    "PipelineSettings",
    "SummarySettings",
    "load_all_settings",
]


def load_all_settings() -> tuple[
    GeminiSettings, ExtractionSettings, SummarySettings, PipelineSettings
]:
    """Load and return all configuration objects.

    Returns a tuple of (GeminiSettings, ExtractionSettings, SummarySettings,
    PipelineSettings), each populated from its own YAML file with
    environment variable overrides.
    """
    return GeminiSettings(), ExtractionSettings(), SummarySettings(), PipelineSettings()
