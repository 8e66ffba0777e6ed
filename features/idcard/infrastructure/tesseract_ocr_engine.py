"""
Tesseract adapter for the OCR port.

Processing Flow:
  1. Decode the uploaded bytes with Pillow (EXIF orientation applied)
  2. Build preprocessing variants with OpenCV (gray, contrast, adaptive, otsu)
  3. OCR every variant with pytesseract.image_to_data
  4. Keep the variant with the highest mean word confidence

No retries are attempted here; failures surface as InfrastructureError
subclasses and retry policy belongs to the caller.
"""

from __future__ import annotations

import io
import logging
import time
from typing import List, Optional

import cv2
import pytesseract
from PIL import Image, ImageOps, UnidentifiedImageError

from features.idcard.domain.entities import RecognizedText
from features.idcard.domain.errors import ImageDecodeError, OcrEngineError
from features.idcard.domain.interfaces import IOcrEngine
from features.idcard.infrastructure.config import OcrSettings
from features.idcard.infrastructure.utils.ocr_utils import (
    build_preprocessing_variants,
    select_best_recognition,
    tesseract_data_to_text,
)

# Setup logger for this module
logger = logging.getLogger(__name__)


def decode_image(image_bytes: bytes) -> Image.Image:
    """
    Decode encoded image bytes into an upright RGB PIL image.

    Raises:
        ImageDecodeError: If the bytes are empty or not a supported image
    """
    if not image_bytes:
        raise ImageDecodeError("Empty image payload")

    try:
        img = Image.open(io.BytesIO(image_bytes))
        img.load()
        img = ImageOps.exif_transpose(img)
        return img.convert("RGB")
    except (UnidentifiedImageError, Image.DecompressionBombError, OSError, ValueError) as e:
        raise ImageDecodeError(f"Could not decode image: {e}") from e


class TesseractOcrEngine(IOcrEngine):
    """IOcrEngine backed by the local Tesseract binary."""

    def __init__(self, settings: Optional[OcrSettings] = None):
        self.settings = settings or OcrSettings.from_env()
        if self.settings.tesseract_cmd:
            pytesseract.pytesseract.tesseract_cmd = self.settings.tesseract_cmd

    def _recognize_variant(self, name: str, variant: Image.Image) -> RecognizedText:
        try:
            data = pytesseract.image_to_data(
                variant,
                lang=self.settings.lang,
                config=self.settings.tesseract_config,
                output_type=pytesseract.Output.DICT,
            )
        except pytesseract.TesseractNotFoundError as e:
            raise OcrEngineError("Tesseract binary not found (set TESSERACT_CMD)") from e
        except (pytesseract.TesseractError, RuntimeError, OSError) as e:
            raise OcrEngineError(f"Tesseract failed on variant '{name}': {e}") from e

        text, confidence = tesseract_data_to_text(data)
        logger.debug(f"_recognize_variant: variant={name} confidence={confidence:.1f} chars={len(text)}")
        return RecognizedText(text=text, confidence=confidence, variant=name)

    def recognize(self, image_bytes: bytes) -> RecognizedText:
        started = time.perf_counter()
        pil_img = decode_image(image_bytes)

        try:
            variants = build_preprocessing_variants(pil_img, target_width=self.settings.target_width)
        except (cv2.error, MemoryError) as e:
            logger.error(f"recognize: Preprocessing failed for {pil_img.size} image: {e}")
            raise ImageDecodeError(f"Image preprocessing failed: {e}") from e

        results: List[RecognizedText] = [
            self._recognize_variant(name, variant) for name, variant in variants
        ]
        best = select_best_recognition(results) or RecognizedText(text="")

        logger.info(
            f"recognize: Best variant={best.variant} confidence={best.confidence:.1f} "
            f"({len(results)} variants, {time.perf_counter() - started:.2f}s)"
        )
        return best
