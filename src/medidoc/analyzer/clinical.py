"""Free-text clinical analyses sent through the chat endpoint.

Each analysis checks its required input, fills its prompt template with
the patient context, and returns the model's answer as a
ClinicalAnalysis.  Remote failures propagate to the caller as
RemoteServiceError.
"""

from __future__ import annotations

import datetime
import logging

from medidoc.analyzer.client import GeminiClient
from medidoc.analyzer.prompt import (
    build_drug_interaction_prompt,
    build_notes_prompt,
    build_symptom_prompt,
    build_treatment_plan_prompt,
)
from medidoc.analyzer.types import AnalysisType, ClinicalAnalysis, PatientContext

logger = logging.getLogger(__name__)


def _is_blank(value: str | None) -> bool:
    return not value or not value.strip()


class ClinicalAnalyzer:
    """Runs symptom, drug interaction, treatment plan and notes analyses."""

    def __init__(self, client: GeminiClient) -> None:
        self._client = client

    async def analyze_symptoms(
        self, symptoms: str, patient: PatientContext | None = None
    ) -> ClinicalAnalysis:
        if _is_blank(symptoms):
            raise ValueError("Please enter symptoms for analysis")
        prompt = build_symptom_prompt(symptoms, patient or PatientContext())
        return await self._run(prompt, AnalysisType.SYMPTOM_ANALYSIS)

    async def check_drug_interactions(
        self, drugs: str, patient: PatientContext | None = None
    ) -> ClinicalAnalysis:
        if _is_blank(drugs):
            raise ValueError("Please enter drug names for interaction check")
        prompt = build_drug_interaction_prompt(drugs, patient or PatientContext())
        return await self._run(prompt, AnalysisType.DRUG_INTERACTION)

    async def generate_treatment_plan(
        self,
        patient: PatientContext | None = None,
        symptoms: str | None = None,
        clinical_notes: str | None = None,
    ) -> ClinicalAnalysis:
        """Draft a treatment plan from symptoms and/or clinical notes.

        At least one of *symptoms* and *clinical_notes* must be non-blank.
        """
        if _is_blank(symptoms) and _is_blank(clinical_notes):
            raise ValueError(
                "Please provide symptoms or clinical notes for treatment plan generation"
            )
        prompt = build_treatment_plan_prompt(
            patient or PatientContext(), symptoms, clinical_notes
        )
        return await self._run(prompt, AnalysisType.TREATMENT_PLAN)

    async def analyze_clinical_notes(
        self, clinical_notes: str, patient: PatientContext | None = None
    ) -> ClinicalAnalysis:
        if _is_blank(clinical_notes):
            raise ValueError("Please enter clinical notes for analysis")
        prompt = build_notes_prompt(clinical_notes, patient or PatientContext())
        return await self._run(prompt, AnalysisType.NOTES_ANALYSIS)

    async def _run(self, prompt: str, analysis_type: AnalysisType) -> ClinicalAnalysis:
        logger.info("Running %s", analysis_type.value)
        summary = await self._client.send_message(prompt)
        return ClinicalAnalysis(
            summary=summary,
            analysis_type=analysis_type,
            timestamp=datetime.datetime.now(datetime.timezone.utc).isoformat(),
        )
