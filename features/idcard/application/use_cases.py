"""
Application use cases for the ID card feature.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from features.idcard.domain.errors import InfrastructureError
from features.idcard.domain.interfaces import IOcrEngine
from features.idcard.infrastructure.age_calculator import (
    calculate_age,
    get_age_group,
    is_elderly,
)
from features.idcard.infrastructure.name_address_extractor import (
    extract_address,
    extract_full_name,
)
from features.idcard.infrastructure.national_id_decoder import decode_national_id
from features.idcard.infrastructure.national_id_extractor import extract_national_id
from features.idcard.infrastructure.utils.ocr_utils import normalize_numerals
from .dtos import (
    DecodeNationalIdRequestDTO,
    DecodeNationalIdResponseDTO,
    ExtractIdCardRequestDTO,
    ExtractIdCardTextRequestDTO,
    OcrResultDTO,
)

logger = logging.getLogger(__name__)

DIAGNOSTIC_TEXT_LIMIT = 500


@dataclass
class ExtractIdCardTextUseCase:
    """
    Text-only pipeline for ID card OCR output.

    National ID: normalize digits → extract candidates → validate → decode
    Name/address: heuristics over the raw lines (independent of the ID)

    Never raises for "nothing found": missing fields come back as None.
    """

    def execute(self, request: ExtractIdCardTextRequestDTO) -> OcrResultDTO:
        raw_text = request.text or ""
        normalized = normalize_numerals(raw_text)

        national_id = extract_national_id(normalized)
        decoded_info = decode_national_id(national_id) if national_id else None
        full_name = extract_full_name(raw_text)
        address = extract_address(raw_text)

        logger.info(
            f"ExtractIdCardTextUseCase: national_id={'found' if national_id else 'missing'}, "
            f"valid={decoded_info.is_valid if decoded_info else None}, "
            f"name={'found' if full_name else 'missing'}, address={'found' if address else 'missing'}"
        )

        return OcrResultDTO(
            national_id=national_id,
            full_name=full_name,
            address=address,
            text=raw_text[:DIAGNOSTIC_TEXT_LIMIT],
            decoded_info=decoded_info,
        )


@dataclass
class ExtractIdCardUseCase:
    """
    Complete pipeline: OCR the photo, then run the text pipeline.

    Follows clean architecture: depends on IOcrEngine interface, not concrete implementation.
    Infrastructure failures (bad image, OCR engine down) propagate unchanged.
    """

    ocr_engine: IOcrEngine

    def execute(self, request: ExtractIdCardRequestDTO) -> OcrResultDTO:
        logger.info(
            f"ExtractIdCardUseCase: Processing {request.filename or 'upload'} ({len(request.image_bytes)} bytes)"
        )
        try:
            recognized = self.ocr_engine.recognize(request.image_bytes)
        except InfrastructureError as e:
            logger.error(f"ExtractIdCardUseCase: OCR failed: {e}")
            raise

        logger.debug(f"ExtractIdCardUseCase: OCR raw text: {recognized.text!r}")
        return ExtractIdCardTextUseCase().execute(ExtractIdCardTextRequestDTO(text=recognized.text))


@dataclass
class DecodeNationalIdUseCase:
    """Decode a typed-in or corrected national ID and add age data."""

    def execute(self, request: DecodeNationalIdRequestDTO) -> DecodeNationalIdResponseDTO:
        national_id = normalize_numerals((request.national_id or "").strip())
        decoded = decode_national_id(national_id, today=request.today)

        if not decoded.is_valid:
            return DecodeNationalIdResponseDTO(decoded=decoded)

        return DecodeNationalIdResponseDTO(
            decoded=decoded,
            age=calculate_age(decoded.birth_date, today=request.today),
            age_group=get_age_group(decoded.birth_date, today=request.today),
            is_elderly=is_elderly(decoded.birth_date, today=request.today),
        )
