"""
DTO for extraction from already-recognized text.
"""

from dataclasses import dataclass


@dataclass
class ExtractIdCardTextRequestDTO:
    """Raw OCR text produced by any OCR engine."""

    text: str
