"""
DTO for national ID decoding request.
"""

from dataclasses import dataclass
from datetime import date
from typing import Optional


@dataclass
class DecodeNationalIdRequestDTO:
    national_id: str
    today: Optional[date] = None  # reference date for year range and age (defaults to today)
