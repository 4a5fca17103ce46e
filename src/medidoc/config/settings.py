"""Pydantic settings models for medidoc configuration.

Each settings class loads from its own YAML config file with environment
variable override support. Source priority (highest to lowest):

    1. Init arguments (used by tests and the CLI)
    2. Environment variables (with prefix, e.g., GEMINI_API_BASE_URL)
    3. .env file
    4. YAML config file (e.g., config/gemini.yaml)
    5. Default values defined here

Config paths are resolved relative to PROJECT_ROOT so the application works
regardless of the current working directory.
"""

from pathlib import Path

from pydantic_settings import (
    BaseSettings,
    PydanticBaseSettingsSource,
    SettingsConfigDict,
    YamlConfigSettingsSource,
)

# Resolve project root: settings.py -> config/ -> medidoc/ -> src/ -> repo root
PROJECT_ROOT = Path(__file__).resolve().parents[3]

_CONFIG_DIR = PROJECT_ROOT / "config"
_ENV_FILE = PROJECT_ROOT / ".env"


class _YamlSettings(BaseSettings):
    """Adds the YAML file source below env and .env in priority."""

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls: type[BaseSettings],
        init_settings: PydanticBaseSettingsSource,
        env_settings: PydanticBaseSettingsSource,
        dotenv_settings: PydanticBaseSettingsSource,
        file_secret_settings: PydanticBaseSettingsSource,
    ) -> tuple[PydanticBaseSettingsSource, ...]:
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            YamlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


class GeminiSettings(_YamlSettings):
    """Remote text-generation endpoint: base URL, route, transport timeout."""

    api_base_url: str = "https://swasthyalink-backend-v2.onrender.com"
    chat_path: str = "/api/gemini"
    timeout_seconds: float = 60.0

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "gemini.yaml"),
        env_file=str(_ENV_FILE),
        env_prefix="GEMINI_",
        extra="ignore",
    )

    @property
    def chat_url(self) -> str:
        return f"{self.api_base_url.rstrip('/')}{self.chat_path}"


class ExtractionSettings(_YamlSettings):
    """Text extraction: PDF worker candidates and OCR engine options.

    ``worker_urls`` is probed in order; the first reachable URL is used for
    every PDF parsed by the process.  An empty list means PDFs are always
    parsed locally.
    """

    worker_urls: list[str] = [
        "http://127.0.0.1:8811/pdf-worker/v1/text",
        "http://pdf-worker:8811/pdf-worker/v1/text",
    ]
    worker_probe_timeout_seconds: float = 5.0
    worker_parse_timeout_seconds: float = 120.0
    ocr_language: str = "eng"
    tesseract_cmd: str = "tesseract"

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "extraction.yaml"),
        env_prefix="EXTRACTION_",
    )


class SummarySettings(_YamlSettings):
    """Prompt shaping for document summaries."""

    max_prompt_chars: int = 8000
    truncation_marker: str = "..."
    preview_chars: int = 500

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "summary.yaml"),
        env_prefix="SUMMARY_",
    )


class PipelineSettings(_YamlSettings):
    """Process-level operations: log location and rotation."""

    log_dir: str = "logs"
    log_max_bytes: int = 10_485_760  # 10MB
    log_backup_count: int = 5

    model_config = SettingsConfigDict(
        yaml_file=str(_CONFIG_DIR / "pipeline.yaml"),
        env_prefix="PIPELINE_",
    )
