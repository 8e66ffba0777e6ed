"""
DTO for the ID card extraction result.
"""

from dataclasses import dataclass
from typing import Optional

from features.idcard.domain.entities import DecodedNationalId


@dataclass
class OcrResultDTO:
    """
    Output of the ID card pipeline.

    national_id None means nothing usable was recognized; callers must ask
    the operator to type it in. full_name and address are heuristic guesses.
    decoded_info is None unless national_id is set.
    """

    national_id: Optional[str]
    full_name: Optional[str]
    address: Optional[str]
    text: str  # first 500 chars of the raw OCR text, for diagnostics
    decoded_info: Optional[DecodedNationalId] = None
