"""
OCR Utilities Module

Common helper functions for ID card OCR:
- Arabic-Indic numeral normalization
- Line splitting for OCR text
- Image preprocessing variants tuned for ID card photos
- Word-confidence aggregation and best-of-N selection
"""

from __future__ import annotations

import re
from typing import Any, Dict, List, Optional, Sequence, Tuple

import numpy as np
import cv2
from PIL import Image

from features.idcard.domain.entities import RecognizedText


# Script detection regex
AR_RE = re.compile(r"[\u0600-\u06FF\u0750-\u077F\u08A0-\u08FF]")

# Arabic-Indic digits (U+0660..U+0669) -> ASCII
ARABIC_INDIC_DIGITS = "٠١٢٣٤٥٦٧٨٩"
WESTERN_DIGITS = "0123456789"
_NUMERALS_TABLE = str.maketrans(ARABIC_INDIC_DIGITS, WESTERN_DIGITS)


def normalize_numerals(text: str) -> str:
    """
    Replace every Arabic-Indic digit with its ASCII equivalent.

    All other characters (ASCII digits, letters, whitespace, line breaks) pass
    through unchanged, so the function is total and idempotent.

    Args:
        text: Raw OCR text

    Returns:
        Text with ٠-٩ mapped to 0-9
    """
    if not text:
        return ""
    return text.translate(_NUMERALS_TABLE)


def split_lines(text: str) -> List[str]:
    """Split OCR text into stripped, non-empty lines."""
    if not text:
        return []
    return [ln.strip() for ln in text.splitlines() if ln.strip()]


def resize_to_width(gray: np.ndarray, target_width: int) -> np.ndarray:
    """Scale a grayscale image so that its width equals target_width (aspect preserved)."""
    height, width = gray.shape[:2]
    if width == 0 or width == target_width:
        return gray
    scale = target_width / float(width)
    interpolation = cv2.INTER_CUBIC if scale > 1 else cv2.INTER_AREA
    return cv2.resize(gray, (target_width, max(1, int(height * scale))), interpolation=interpolation)


def build_preprocessing_variants(pil_img: Image.Image, target_width: int = 1600) -> List[Tuple[str, Image.Image]]:
    """
    Build the preprocessing variants that are each sent to OCR.

    Variants:
    1. gray: grayscale, resized to target_width
    2. contrast: CLAHE local contrast enhancement (faded/laminated cards)
    3. adaptive: bilateral denoise + adaptive Gaussian threshold (uneven lighting)
    4. otsu: Gaussian blur + global Otsu threshold (clean scans)

    Args:
        pil_img: Decoded ID card photo
        target_width: Width every variant is resized to

    Returns:
        List of (variant_name, PIL image) pairs
    """
    img = np.array(pil_img.convert("RGB"))
    gray = cv2.cvtColor(img, cv2.COLOR_RGB2GRAY)
    gray = resize_to_width(gray, target_width)

    clahe = cv2.createCLAHE(clipLimit=2.0, tileGridSize=(8, 8))
    contrast = clahe.apply(gray)

    # Denoise while preserving edges (Arabic dots are small)
    denoised = cv2.bilateralFilter(gray, d=7, sigmaColor=35, sigmaSpace=35)
    adaptive = cv2.adaptiveThreshold(
        denoised, 255,
        cv2.ADAPTIVE_THRESH_GAUSSIAN_C,
        cv2.THRESH_BINARY,
        35, 11
    )
    kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (2, 2))
    adaptive = cv2.morphologyEx(adaptive, cv2.MORPH_OPEN, kernel, iterations=1)

    blurred = cv2.GaussianBlur(gray, (3, 3), 0)
    _, otsu = cv2.threshold(blurred, 0, 255, cv2.THRESH_BINARY + cv2.THRESH_OTSU)

    return [
        ("gray", Image.fromarray(gray)),
        ("contrast", Image.fromarray(contrast)),
        ("adaptive", Image.fromarray(adaptive)),
        ("otsu", Image.fromarray(otsu)),
    ]


def tesseract_data_to_text(data: Dict[str, List[Any]]) -> Tuple[str, float]:
    """
    Rebuild line-structured text and mean word confidence from pytesseract.image_to_data output.

    Words are grouped by (block_num, par_num, line_num). Entries with a
    negative confidence (layout rows) or blank text are ignored.

    Args:
        data: Dict returned by image_to_data(..., output_type=Output.DICT)

    Returns:
        Tuple of (text, mean_confidence) where confidence is in 0..100
    """
    lines: Dict[Tuple[int, int, int], List[str]] = {}
    order: List[Tuple[int, int, int]] = []
    confidences: List[float] = []

    for idx, word in enumerate(data.get("text", [])):
        word = (word or "").strip()
        try:
            conf = float(data["conf"][idx])
        except (KeyError, IndexError, TypeError, ValueError):
            conf = -1.0
        if not word or conf < 0:
            continue

        key = (
            int(data["block_num"][idx]),
            int(data["par_num"][idx]),
            int(data["line_num"][idx]),
        )
        if key not in lines:
            lines[key] = []
            order.append(key)
        lines[key].append(word)
        confidences.append(conf)

    text = "\n".join(" ".join(lines[key]) for key in order)
    mean_conf = sum(confidences) / len(confidences) if confidences else 0.0
    return text, mean_conf


def select_best_recognition(results: Sequence[RecognizedText]) -> Optional[RecognizedText]:
    """
    Keep the highest-confidence result out of several OCR attempts.

    Ties are won by the earliest result. Returns None for an empty sequence.
    """
    best: Optional[RecognizedText] = None
    for result in results:
        if best is None or result.confidence > best.confidence:
            best = result
    return best
