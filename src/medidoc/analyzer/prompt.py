"""Prompt template management for document summaries and clinical analyses.

Templates live as text files in the ``prompts/`` directory next to this
module and use ``{variable}`` placeholders.  Each template is read once
and versioned by a short SHA-256 hash that is logged for traceability.
"""

from __future__ import annotations

import functools
import hashlib
import logging
from pathlib import Path

from medidoc.analyzer.classifier import DocumentCategory
from medidoc.analyzer.types import PatientContext, SummaryRequest
from medidoc.config.settings import SummarySettings

logger = logging.getLogger(__name__)

PROMPTS_DIR = Path(__file__).resolve().parent / "prompts"

NOT_SPECIFIED = "Not specified"
NOT_PROVIDED = "Not provided"


@functools.lru_cache(maxsize=None)
def load_prompt_template(name: str) -> tuple[str, str]:
    """Load ``prompts/<name>.txt`` and compute its version hash.

    Returns:
        Tuple of (template_content, version_hash) where version_hash is
        the first 12 hex characters of the SHA-256 digest.

    Raises:
        FileNotFoundError: If the template file does not exist.
    """
    template_path = PROMPTS_DIR / f"{name}.txt"
    if not template_path.exists():
        msg = f"Prompt template not found: {template_path}"
        raise FileNotFoundError(msg)

    content = template_path.read_text(encoding="utf-8").rstrip("\n")
    version_hash = hashlib.sha256(content.encode("utf-8")).hexdigest()[:12]
    logger.info(
        "Loaded prompt template: %s (version %s, %d chars)",
        template_path.name,
        version_hash,
        len(content),
    )
    return content, version_hash


def truncate_text(text: str, max_chars: int, marker: str = "...") -> str:
    """Bound *text* to *max_chars*, appending *marker* only when cut."""
    if len(text) <= max_chars:
        return text
    return text[:max_chars] + marker


def build_summary_request(
    text: str,
    document_type: DocumentCategory,
    settings: SummarySettings,
) -> SummaryRequest:
    """Build the summary prompt for extracted document text.

    The text is truncated to ``settings.max_prompt_chars`` before being
    embedded; shorter text is embedded unmodified.
    """
    template, _ = load_prompt_template("document_summary")
    bounded = truncate_text(
        text, settings.max_prompt_chars, settings.truncation_marker
    )
    if len(bounded) != len(text):
        logger.info(
            "Truncated document text from %d to %d chars for prompt",
            len(text),
            settings.max_prompt_chars,
        )
    prompt = template.format(document_type=document_type.value, document_text=bounded)
    return SummaryRequest(prompt_text=prompt, document_type=document_type)


def _patient_fields(patient: PatientContext) -> dict[str, str]:
    return {
        "age": patient.age or NOT_SPECIFIED,
        "gender": patient.gender or NOT_SPECIFIED,
        "medical_history": patient.medical_history or NOT_PROVIDED,
    }


def build_symptom_prompt(symptoms: str, patient: PatientContext) -> str:
    template, _ = load_prompt_template("symptom_analysis")
    return template.format(symptoms=symptoms, **_patient_fields(patient))


def build_drug_interaction_prompt(drugs: str, patient: PatientContext) -> str:
    template, _ = load_prompt_template("drug_interaction")
    return template.format(drugs=drugs, **_patient_fields(patient))


def build_treatment_plan_prompt(
    patient: PatientContext,
    symptoms: str | None = None,
    clinical_notes: str | None = None,
) -> str:
    template, _ = load_prompt_template("treatment_plan")
    return template.format(
        symptoms=symptoms or NOT_PROVIDED,
        clinical_notes=clinical_notes or NOT_PROVIDED,
        **_patient_fields(patient),
    )


def build_notes_prompt(clinical_notes: str, patient: PatientContext) -> str:
    template, _ = load_prompt_template("notes_analysis")
    return template.format(clinical_notes=clinical_notes, **_patient_fields(patient))
