"""
Egyptian national ID decoder.

Layout of the 14 digits (0-indexed positions):

    0       century (1 = 1800s, 2 = 1900s, 3 = 2000s)
    1-2     year within century
    3-4     month of birth
    5-6     day of birth
    7-8     governorate of birth
    9-11    serial
    12      sex (odd = male, even = female)
    13      check digit (not verified)

Known asymmetry: century digit 1 is accepted, but the derived year is always
below 1900 and the birth-year range check rejects it, so a "1..." ID never
decodes as valid. This is kept on purpose until a product decision says otherwise.
"""

from __future__ import annotations

import re
from datetime import date
from typing import Dict, List, Optional

from features.idcard.domain.entities import DecodedNationalId


NATIONAL_ID_RE = re.compile(r"[0-9]{14}")

MIN_BIRTH_YEAR = 1900

CENTURIES = {
    "1": ("1800-1899", 1800),
    "2": ("1900-1999", 1900),
    "3": ("2000-2099", 2000),
}

# Governorate of birth, 28 entries (27 governorates + 88 born abroad). Static asset, not configurable at runtime.
GOVERNORATES: Dict[str, str] = {
    "01": "القاهرة",
    "02": "الإسكندرية",
    "03": "بورسعيد",
    "04": "السويس",
    "11": "دمياط",
    "12": "الدقهلية",
    "13": "الشرقية",
    "14": "القليوبية",
    "15": "كفر الشيخ",
    "16": "الغربية",
    "17": "المنوفية",
    "18": "البحيرة",
    "19": "الإسماعيلية",
    "21": "الجيزة",
    "22": "بني سويف",
    "23": "الفيوم",
    "24": "المنيا",
    "25": "أسيوط",
    "26": "سوهاج",
    "27": "قنا",
    "28": "أسوان",
    "29": "الأقصر",
    "31": "البحر الأحمر",
    "32": "الوادي الجديد",
    "33": "مطروح",
    "34": "شمال سيناء",
    "35": "جنوب سيناء",
    "88": "خارج مصر",
}


def get_governorate_from_code(code: str) -> Optional[str]:
    """Governorate name for a 2-digit birthplace code, or None if unknown."""
    return GOVERNORATES.get(code)


def get_all_governorates() -> List[str]:
    """All governorate names, in code order."""
    return list(GOVERNORATES.values())


def decode_national_id(national_id: str, today: Optional[date] = None) -> DecodedNationalId:
    """
    Derive birth date, century, sex and governorate from a national ID.

    Pure and total: malformed input yields is_valid=False instead of raising.
    On any failed check every derived field is None.

    Args:
        national_id: Expected to be exactly 14 ASCII digits
        today: Reference date for the birth-year upper bound (defaults to date.today())

    Returns:
        DecodedNationalId
    """
    if not national_id or not NATIONAL_ID_RE.fullmatch(national_id):
        return DecodedNationalId()

    invalid = DecodedNationalId(national_id=national_id)

    century_info = CENTURIES.get(national_id[0])
    if century_info is None:
        return invalid
    century, century_start = century_info

    full_year = century_start + int(national_id[1:3])
    month = int(national_id[3:5])
    day = int(national_id[5:7])
    if not 1 <= month <= 12 or not 1 <= day <= 31:
        return invalid

    current_year = (today or date.today()).year
    if full_year < MIN_BIRTH_YEAR or full_year > current_year:
        return invalid

    return DecodedNationalId(
        national_id=national_id,
        birth_date=f"{full_year:04d}-{month:02d}-{day:02d}",
        century=century,
        gender="female" if int(national_id[12]) % 2 == 0 else "male",
        governorate=get_governorate_from_code(national_id[7:9]),
        is_valid=True,
    )
