"""
National ID extraction from noisy OCR text.

Input:
    Raw OCR text from an ID card photo (Arabic letters, Arabic-Indic and ASCII
    digits, punctuation noise, line breaks).

Goal:
    - Produce every plausible 14-digit candidate, in discovery order
    - Pick the first candidate whose embedded century/month/day fields are legal
    - Fall back to looser scans when no candidate is structurally valid
    - Never raise: "no ID on this card" is returned as None

Candidate scans (in order, results concatenated):
    1. Strict run scan: maximal digit runs of length >= 14, every 14-wide window
    2. Punctuated scan: digits interleaved with spaces/dots/dashes/slashes,
       14 to 30 characters wide, stripped to digits, every 14-wide window

A stray digit glued to either end of the real ID shifts it by one position,
which is why every offset of a long run is tried and not only the first 14.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Optional

from features.idcard.infrastructure.utils.ocr_utils import normalize_numerals

# Setup logger for this module
logger = logging.getLogger(__name__)


NATIONAL_ID_LENGTH = 14

# [0-9] rather than \d: \d also matches other Unicode digit blocks
DIGIT_RUN_RE = re.compile(r"[0-9]+")
PUNCTUATED_SEQUENCE_RE = re.compile(r"[0-9][0-9 \t.\-/]{12,28}[0-9]")
FREE_STANDING_ID_RE = re.compile(r"(?<![0-9])[0-9]{14}(?![0-9])")
LOOSE_SEQUENCE_RE = re.compile(r"[0-9 .\-]{17,30}")
NON_DIGIT_RE = re.compile(r"[^0-9]")

VALID_CENTURY_DIGITS = ("1", "2", "3")


def _sliding_windows(digits: str, width: int = NATIONAL_ID_LENGTH) -> List[str]:
    """Every width-long substring of digits, by increasing offset."""
    return [digits[offset:offset + width] for offset in range(len(digits) - width + 1)]


def scan_digit_runs(text: str) -> List[str]:
    """Strict run scan: windows of every pure digit run that is at least 14 long."""
    candidates: List[str] = []
    for match in DIGIT_RUN_RE.finditer(text):
        run = match.group(0)
        if len(run) >= NATIONAL_ID_LENGTH:
            candidates.extend(_sliding_windows(run))
    return candidates


def scan_punctuated_sequences(text: str) -> List[str]:
    """Punctuation-tolerant scan: strip separators inside a digit sequence, then window it."""
    candidates: List[str] = []
    for match in PUNCTUATED_SEQUENCE_RE.finditer(text):
        cleaned = NON_DIGIT_RE.sub("", match.group(0))
        if len(cleaned) >= NATIONAL_ID_LENGTH:
            candidates.extend(_sliding_windows(cleaned))
    return candidates


def extract_id_candidates(text: str) -> List[str]:
    """
    Extract ordered 14-digit national ID candidates from OCR text.

    Candidates from the strict run scan come first, followed by those of the
    punctuated scan. No deduplication is performed: the same candidate may
    appear once per scan that found it.

    Args:
        text: Raw or already-normalized OCR text

    Returns:
        List of 14-character digit strings, in discovery order
    """
    normalized = normalize_numerals(text)
    strict = scan_digit_runs(normalized)
    punctuated = scan_punctuated_sequences(normalized)
    logger.debug(
        f"extract_id_candidates: {len(strict)} strict + {len(punctuated)} punctuated candidates"
    )
    return strict + punctuated


def is_structurally_valid(candidate: str) -> bool:
    """
    Check the date/century fields embedded in a candidate.

    Rules:
    - exactly 14 ASCII digits
    - century digit (pos 0) is 1, 2 or 3
    - year within century (pos 1-2) is 00-99
    - month (pos 3-4) is 1-12
    - day (pos 5-6) is 1-31, regardless of month length or leap years
    """
    if not candidate or len(candidate) != NATIONAL_ID_LENGTH or NON_DIGIT_RE.search(candidate):
        return False

    if candidate[0] not in VALID_CENTURY_DIGITS:
        return False

    year = int(candidate[1:3])
    month = int(candidate[3:5])
    day = int(candidate[5:7])

    return 0 <= year <= 99 and 1 <= month <= 12 and 1 <= day <= 31


def select_valid_candidate(candidates: Iterable[str]) -> Optional[str]:
    """Return the first structurally valid candidate, or None."""
    for candidate in candidates:
        if is_structurally_valid(candidate):
            return candidate
    return None


def find_free_standing_id(text: str) -> Optional[str]:
    """Fallback (a): a 14-digit token bounded by non-digits or the string edges."""
    match = FREE_STANDING_ID_RE.search(text)
    return match.group(0) if match else None


def find_loose_sequence_id(text: str) -> Optional[str]:
    """Fallback (b): first 17-30 wide digit/space/dot/dash window holding at least 14 digits, truncated to 14."""
    for match in LOOSE_SEQUENCE_RE.finditer(text):
        cleaned = NON_DIGIT_RE.sub("", match.group(0))
        if len(cleaned) >= NATIONAL_ID_LENGTH:
            return cleaned[:NATIONAL_ID_LENGTH]
    return None


def extract_national_id(text: str) -> Optional[str]:
    """
    Extract the national ID from OCR text.

    Pipeline:
    1. Normalize Arabic-Indic digits
    2. Extract candidates (strict + punctuated scans)
    3. Return the first structurally valid candidate
    4. Otherwise fall back to a free-standing 14-digit token
    5. Otherwise fall back to a loose digit/separator window

    The fallbacks may return an ID that does not decode; the decoder reports
    that through is_valid=False.

    Args:
        text: Raw OCR text

    Returns:
        14-digit string, or None when nothing resembling an ID is present
    """
    normalized = normalize_numerals(text)

    candidates = extract_id_candidates(normalized)
    national_id = select_valid_candidate(candidates)
    if national_id:
        logger.debug(f"extract_national_id: Accepted candidate {national_id} out of {len(candidates)}")
        return national_id

    national_id = find_free_standing_id(normalized)
    if national_id:
        logger.debug(f"extract_national_id: No valid candidate, free-standing token fallback -> {national_id}")
        return national_id

    national_id = find_loose_sequence_id(normalized)
    if national_id:
        logger.debug(f"extract_national_id: No valid candidate, loose sequence fallback -> {national_id}")
        return national_id

    logger.info("extract_national_id: No national ID found in OCR text")
    return None
