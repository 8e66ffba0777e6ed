"""
Domain entities for the ID card feature.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class RecognizedText:
    """Best-effort text returned by an OCR engine for one image (or one variant of it)."""

    text: str
    confidence: float = 0.0
    variant: Optional[str] = None  # name of the preprocessing variant that produced it


@dataclass(frozen=True)
class DecodedNationalId:
    """
    Demographic fields derived from a 14-digit national ID.

    is_valid is True only when century digit, month, day and the birth year
    range checks all pass. governorate may be None on a valid ID when the
    birthplace code is unknown.
    """

    national_id: Optional[str] = None
    birth_date: Optional[str] = None  # "YYYY-MM-DD"
    century: Optional[str] = None  # "1800-1899" | "1900-1999" | "2000-2099"
    gender: Optional[str] = None  # "male" | "female"
    governorate: Optional[str] = None
    is_valid: bool = False
