"""
DTO for ID card photo extraction request.
"""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractIdCardRequestDTO:
    """Encoded photo of the front side of an ID card."""

    image_bytes: bytes
    filename: Optional[str] = None  # for logging only
