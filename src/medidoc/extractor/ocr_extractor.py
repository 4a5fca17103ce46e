"""Image text extraction using Tesseract OCR via pytesseract.

Images are decoded with Pillow and recognized with a single fixed language
model (``ExtractionSettings.ocr_language``, English by default).  There is
no retry: any decoding or engine failure surfaces as ExtractionEngineError.
"""

from __future__ import annotations

import asyncio
import io
import logging

import pytesseract
from PIL import Image

from medidoc.config.settings import ExtractionSettings
from medidoc.errors import ExtractionEngineError

logger = logging.getLogger(__name__)


class TesseractOcrEngine:
    """OCR strategy backed by the Tesseract executable."""

    def __init__(self, settings: ExtractionSettings) -> None:
        self._language = settings.ocr_language
        # Configure tesseract executable path if non-default
        if settings.tesseract_cmd != "tesseract":
            pytesseract.pytesseract.tesseract_cmd = settings.tesseract_cmd

    def _recognize_sync(self, data: bytes) -> str:
        with Image.open(io.BytesIO(data)) as image:
            return pytesseract.image_to_string(image, lang=self._language)

    async def recognize(self, data: bytes, name: str) -> str:
        """Run OCR over image bytes and return the stripped text.

        Raises:
            ExtractionEngineError: The image could not be decoded or
                Tesseract failed.
        """
        try:
            text = await asyncio.to_thread(self._recognize_sync, data)
        except Exception as exc:
            logger.warning("Tesseract OCR failed for %s: %s", name, exc)
            raise ExtractionEngineError(
                f"Failed to extract text from image: {exc}"
            ) from exc

        text = text.strip()
        logger.info("Tesseract OCR extracted %d chars from %s", len(text), name)
        return text
