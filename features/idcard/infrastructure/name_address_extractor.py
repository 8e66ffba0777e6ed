"""
Name and address heuristics for ID card OCR text.

Both extractors are best-effort: they may return a wrong line or None on
low-quality input. Their output is NOT authoritative and should be shown to
an operator for confirmation.

Name:
    Lines written in Arabic letters, 2-7 words, no digits, no boilerplate or
    governorate words. Survivors are scored (3-4 words and 10-50 characters
    score best) and the best one wins; earlier lines win ties.

Address:
    First line mentioning a governorate, with "address"/"governorate" labels
    and colons stripped, 4-100 characters long after trimming.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional

from features.idcard.infrastructure.national_id_decoder import get_all_governorates
from features.idcard.infrastructure.utils.ocr_utils import AR_RE, split_lines

# Setup logger for this module
logger = logging.getLogger(__name__)


# Name thresholds
MIN_NAME_WORDS = 2
MAX_NAME_WORDS = 7
MIN_NAME_LENGTH = 6
IDEAL_NAME_WORDS = (3, 4)
IDEAL_WORDS_SCORE = 3  # score at 3-4 words, minus 1 per word away from that range
NAME_LENGTH_BONUS_RANGE = (10, 50)
NAME_LENGTH_BONUS = 2

# Address thresholds
MIN_ADDRESS_LENGTH = 4
MAX_ADDRESS_LENGTH = 100

# Card boilerplate that is never part of a person's name
EXCLUDED_WORDS = frozenset({
    "جمهورية",
    "الجمهورية",
    "مصر",
    "العربية",
    "بطاقة",
    "البطاقة",
    "تحقيق",
    "الشخصية",
    "الشخصيه",
    "رقم",
    "الرقم",
    "قومي",
    "القومي",
    "محافظة",
    "محافظه",
    "وزارة",
    "الداخلية",
    "مديرية",
    "قسم",
    "مركز",
    "شارع",
    "عنوان",
    "العنوان",
    "تاريخ",
    "الإصدار",
    "الاصدار",
    "الميلاد",
    "الاسم",
})

# OCR frequently drops hamza or writes taa marbuta as haa
GOVERNORATE_SPELLING_VARIANTS = (
    "القاهره",
    "الاسكندرية",
    "اسكندرية",
    "الاسكندريه",
    "بور سعيد",
    "الجيزه",
    "الاسماعيلية",
    "اسيوط",
    "اسوان",
    "الاقصر",
    "البحر الاحمر",
)

GOVERNORATE_NAMES = tuple(get_all_governorates()) + GOVERNORATE_SPELLING_VARIANTS

_GOVERNORATE_RE = re.compile(
    r"(?<!\w)(?:"
    + "|".join(re.escape(name) for name in sorted(GOVERNORATE_NAMES, key=len, reverse=True))
    + r")(?!\w)"
)

ADDRESS_LABELS = ("العنوان", "عنوان", "المحافظة", "محافظة", "محافظه", "address", "governorate")
_ADDRESS_LABEL_RE = re.compile(
    "|".join(re.escape(label) for label in sorted(ADDRESS_LABELS, key=len, reverse=True)),
    re.IGNORECASE,
)
_COLON_RE = re.compile(r"[:：]")

# Arabic letters only (no tatweel, no Arabic-Indic digits, no Arabic punctuation)
_NON_NAME_CHAR_RE = re.compile(r"[^\u0621-\u063A\u0641-\u064A\u0671-\u06D3\s]")
_ANY_DIGIT_RE = re.compile(r"[0-9\u0660-\u0669\u06F0-\u06F9]")
_WHITESPACE_RE = re.compile(r"\s+")


def mentions_governorate(text: str) -> bool:
    """True if text contains a governorate name as a whole word (or phrase)."""
    return bool(text) and _GOVERNORATE_RE.search(text) is not None


def score_name_candidate(words: List[str]) -> int:
    """Higher is more name-like. Assumes words already passed the length filters."""
    low, high = IDEAL_NAME_WORDS
    count = len(words)
    distance = low - count if count < low else max(0, count - high)
    score = IDEAL_WORDS_SCORE - distance

    length = len(" ".join(words))
    min_len, max_len = NAME_LENGTH_BONUS_RANGE
    if min_len <= length <= max_len:
        score += NAME_LENGTH_BONUS
    return score


def clean_name_line(line: str) -> Optional[List[str]]:
    """
    Reduce a line to its Arabic words if it can be a name, else None.

    Rejects lines without Arabic script, with any digit, with the wrong word
    count or length, or containing boilerplate or governorate words.
    """
    if not AR_RE.search(line) or _ANY_DIGIT_RE.search(line):
        return None

    words = _NON_NAME_CHAR_RE.sub(" ", line).split()
    if not MIN_NAME_WORDS <= len(words) <= MAX_NAME_WORDS:
        return None

    joined = " ".join(words)
    if len(joined) < MIN_NAME_LENGTH:
        return None
    if EXCLUDED_WORDS.intersection(words) or mentions_governorate(joined):
        return None
    return words


def extract_full_name(text: str) -> Optional[str]:
    """
    Guess the card holder's full name from OCR text.

    Args:
        text: Raw OCR text (multi-line)

    Returns:
        Best-scoring name line with punctuation removed, or None
    """
    best_name: Optional[str] = None
    best_score: Optional[int] = None

    for line in split_lines(text):
        words = clean_name_line(line)
        if words is None:
            continue
        score = score_name_candidate(words)
        logger.debug(f"extract_full_name: Candidate '{' '.join(words)}' scored {score}")
        if best_score is None or score > best_score:
            best_name, best_score = " ".join(words), score

    if best_name is None:
        logger.info("extract_full_name: No name-like line found")
    return best_name


def extract_address(text: str) -> Optional[str]:
    """
    Guess the address line from OCR text.

    Args:
        text: Raw OCR text (multi-line)

    Returns:
        First governorate-bearing line with labels and colons stripped, or None
    """
    for line in split_lines(text):
        if not mentions_governorate(line):
            continue

        residual = _COLON_RE.sub(" ", _ADDRESS_LABEL_RE.sub(" ", line))
        residual = _WHITESPACE_RE.sub(" ", residual).strip()
        if MIN_ADDRESS_LENGTH <= len(residual) <= MAX_ADDRESS_LENGTH:
            return residual
        logger.debug(f"extract_address: Skipped governorate line of length {len(residual)}")

    logger.info("extract_address: No address line found")
    return None
