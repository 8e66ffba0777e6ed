"""
DTO for national ID decoding response.
"""

from dataclasses import dataclass
from typing import Optional

from features.idcard.domain.entities import DecodedNationalId


@dataclass
class DecodeNationalIdResponseDTO:
    """Decoded fields plus age data; age fields are None when the ID is invalid."""

    decoded: DecodedNationalId
    age: Optional[int] = None
    age_group: Optional[str] = None
    is_elderly: Optional[bool] = None
