"""medidoc -- command-line entry point.

Startup sequence:
    1. Load pipeline configuration (needed for log_dir and rotation)
    2. Setup logging (must happen before any code that logs)
    3. Load remaining configuration (Gemini endpoint, extraction, summary)
    4. Open one shared httpx.AsyncClient and PDF worker resolver
    5. Run the requested command and print its result

Examples:
    python main.py classify lab_result_march.pdf
    python main.py extract scans/cbc.png
    python main.py summarize reports/discharge.pdf --category imaging
    python main.py symptoms "fever, cough for 3 days" --age 42
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import httpx

from medidoc.analyzer import (
    ClinicalAnalyzer,
    DocumentCategory,
    DocumentSummarizer,
    GeminiClient,
    PatientContext,
    classify,
)
from medidoc.config import (
    ExtractionSettings,
    GeminiSettings,
    PipelineSettings,
    SummarySettings,
)
from medidoc.errors import MedidocError
from medidoc.extractor import DocumentExtractor, SourceFile
from medidoc.logging import setup_logging

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="medidoc",
        description="Extract, classify and summarize medical documents.",
    )
    sub = parser.add_subparsers(dest="command", required=True)

    p = sub.add_parser("extract", help="Print the text extracted from a PDF or image")
    p.add_argument("path", type=Path)

    p = sub.add_parser("classify", help="Print the document category for a file name")
    p.add_argument("name")
    p.add_argument("--category", help="Storage category hint (lab, prescription, imaging)")

    p = sub.add_parser("summarize", help="Summarize a PDF or image with the remote model")
    p.add_argument("path", type=Path)
    p.add_argument("--category", help="Storage category hint (lab, prescription, imaging)")
    p.add_argument(
        "--type",
        dest="document_type",
        choices=[c.value for c in DocumentCategory],
        help="Summarize as this document type instead of classifying",
    )

    for name, text_arg, help_text in (
        ("symptoms", "symptoms", "Analyze symptoms"),
        ("drugs", "drugs", "Check medications for interactions"),
        ("notes", "clinical_notes", "Analyze clinical notes"),
    ):
        p = sub.add_parser(name, help=help_text)
        p.add_argument(text_arg)
        _add_patient_args(p)

    p = sub.add_parser("treatment", help="Draft a treatment plan")
    p.add_argument("--symptoms")
    p.add_argument("--notes", dest="clinical_notes")
    _add_patient_args(p)

    return parser


def _add_patient_args(parser: argparse.ArgumentParser) -> None:
    parser.add_argument("--age")
    parser.add_argument("--gender")
    parser.add_argument("--history", dest="medical_history")


def _patient(args: argparse.Namespace) -> PatientContext:
    return PatientContext(
        age=args.age, gender=args.gender, medical_history=args.medical_history
    )


async def _run(args: argparse.Namespace) -> int:
    gemini = GeminiSettings()
    extraction = ExtractionSettings()
    summary = SummarySettings()

    logger.info(
        "Config loaded -- gemini: url=%s, timeout=%ss",
        gemini.chat_url,
        gemini.timeout_seconds,
    )
    logger.info(
        "Config loaded -- extraction: %d worker candidates, ocr_language=%s",
        len(extraction.worker_urls),
        extraction.ocr_language,
    )

    async with httpx.AsyncClient() as http_client:
        client = GeminiClient(gemini, http_client)

        if args.command in ("extract", "summarize"):
            file = SourceFile.from_path(args.path)
            extractor = DocumentExtractor(extraction, http_client)

            if args.command == "extract":
                try:
                    result = await extractor.extract(file)
                except MedidocError as exc:
                    print(f"Extraction failed: {exc}", file=sys.stderr)
                    return 1
                print(result.text)
                return 0

            summarizer = DocumentSummarizer(extractor, client, summary)
            document_type = (
                DocumentCategory(args.document_type) if args.document_type else None
            )
            outcome = await summarizer.summarize(
                file, document_type=document_type, category_hint=args.category
            )
            print(json.dumps(outcome.to_dict(), indent=2, ensure_ascii=False))
            return 0 if outcome.success else 1

        analyzer = ClinicalAnalyzer(client)
        patient = _patient(args)
        try:
            if args.command == "symptoms":
                analysis = await analyzer.analyze_symptoms(args.symptoms, patient)
            elif args.command == "drugs":
                analysis = await analyzer.check_drug_interactions(args.drugs, patient)
            elif args.command == "notes":
                analysis = await analyzer.analyze_clinical_notes(
                    args.clinical_notes, patient
                )
            else:
                analysis = await analyzer.generate_treatment_plan(
                    patient, symptoms=args.symptoms, clinical_notes=args.clinical_notes
                )
        except ValueError as exc:
            print(str(exc), file=sys.stderr)
            return 2
        except (MedidocError, httpx.HTTPError) as exc:
            print(f"Analysis failed: {exc}", file=sys.stderr)
            return 1
        print(analysis.summary)
        return 0


def main(argv: list[str] | None = None) -> int:
    """Run one medidoc command."""
    args = _build_parser().parse_args(argv)

    if args.command == "classify":
        print(classify(args.name, args.category).value)
        return 0

    # 1. Load pipeline config first -- needed for logging
    pipeline = PipelineSettings()

    # 2. Setup logging BEFORE anything else logs
    setup_logging(
        log_dir=pipeline.log_dir,
        max_bytes=pipeline.log_max_bytes,
        backup_count=pipeline.log_backup_count,
        log_level_console=logging.WARNING,
    )

    return asyncio.run(_run(args))


if __name__ == "__main__":
    sys.exit(main())
