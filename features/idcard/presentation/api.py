"""
FastAPI routes for the ID card feature.

Feature: extract national ID, name and address from an ID card photo (or from
already-recognized OCR text) and decode the national ID.

A null nationalId is a normal 200 response: the client must ask the operator
to type the ID in. fullName and address are heuristic guesses, not authoritative.
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import APIRouter, File, HTTPException, UploadFile
from pydantic import BaseModel

from features.idcard.application.dtos import (
    DecodeNationalIdRequestDTO,
    DecodeNationalIdResponseDTO,
    ExtractIdCardRequestDTO,
    ExtractIdCardTextRequestDTO,
    OcrResultDTO,
)
from features.idcard.application.use_cases import (
    DecodeNationalIdUseCase,
    ExtractIdCardTextUseCase,
    ExtractIdCardUseCase,
)
from features.idcard.domain.entities import DecodedNationalId
from features.idcard.domain.errors import ImageDecodeError, OcrEngineError
from features.idcard.infrastructure.national_id_decoder import GOVERNORATES
from features.idcard.infrastructure.tesseract_ocr_engine import TesseractOcrEngine


router = APIRouter(prefix="/api/v1/id-cards", tags=["id-cards"])


class DecodedInfo(BaseModel):
    """Fields derived from the national ID."""
    nationalId: str | None = None
    birthDate: str | None = None
    century: str | None = None
    gender: str | None = None
    governorate: str | None = None
    isValid: bool = False


class OcrResult(BaseModel):
    """ID card extraction result."""
    nationalId: str | None = None
    fullName: str | None = None
    address: str | None = None
    text: str = ""
    decodedInfo: DecodedInfo | None = None


class ExtractTextRequest(BaseModel):
    text: str


class DecodeResponse(BaseModel):
    decodedInfo: DecodedInfo
    age: int | None = None
    ageGroup: str | None = None
    isElderly: bool | None = None


class Governorate(BaseModel):
    code: str
    name: str


def to_decoded_info(decoded: DecodedNationalId) -> DecodedInfo:
    return DecodedInfo(
        nationalId=decoded.national_id,
        birthDate=decoded.birth_date,
        century=decoded.century,
        gender=decoded.gender,
        governorate=decoded.governorate,
        isValid=decoded.is_valid,
    )


def to_ocr_result(dto_out: OcrResultDTO) -> OcrResult:
    return OcrResult(
        nationalId=dto_out.national_id,
        fullName=dto_out.full_name,
        address=dto_out.address,
        text=dto_out.text,
        decodedInfo=to_decoded_info(dto_out.decoded_info) if dto_out.decoded_info else None,
    )


@lru_cache(maxsize=1)
def get_ocr_engine() -> TesseractOcrEngine:
    """Process-wide Tesseract engine; settings are read from the environment once."""
    return TesseractOcrEngine()


def build_extract_id_card_use_case() -> ExtractIdCardUseCase:
    """Build photo extraction use case with the shared Tesseract OCR engine."""
    return ExtractIdCardUseCase(ocr_engine=get_ocr_engine())


def build_extract_id_card_text_use_case() -> ExtractIdCardTextUseCase:
    return ExtractIdCardTextUseCase()


def build_decode_national_id_use_case() -> DecodeNationalIdUseCase:
    return DecodeNationalIdUseCase()


@router.post("/extract", response_model=OcrResult)
def extract_id_card(image: UploadFile = File(...)) -> OcrResult:
    """
    OCR an ID card photo and extract its fields.

    Runs:
      - OCR over several preprocessing variants, best confidence wins
      - National ID candidate extraction + structural validation + decoding
      - Name and address heuristics

    Errors:
      - 400: empty upload
      - 422: bytes are not a decodable image
      - 503: OCR engine unavailable or crashed
    """
    image_bytes = image.file.read()
    if not image_bytes:
        raise HTTPException(status_code=400, detail="Uploaded image is empty")

    use_case = build_extract_id_card_use_case()
    dto_in = ExtractIdCardRequestDTO(image_bytes=image_bytes, filename=image.filename)

    try:
        dto_out: OcrResultDTO = use_case.execute(dto_in)
    except ImageDecodeError as e:
        raise HTTPException(status_code=422, detail=f"Invalid image: {e}") from e
    except OcrEngineError as e:
        raise HTTPException(status_code=503, detail=f"OCR engine unavailable: {e}") from e

    return to_ocr_result(dto_out)


@router.post("/extract-text", response_model=OcrResult)
def extract_id_card_text(request: ExtractTextRequest) -> OcrResult:
    """Extract ID card fields from text already produced by an OCR engine."""
    use_case = build_extract_id_card_text_use_case()
    dto_out = use_case.execute(ExtractIdCardTextRequestDTO(text=request.text))
    return to_ocr_result(dto_out)


@router.get("/decode/{national_id}", response_model=DecodeResponse)
def decode_id(national_id: str) -> DecodeResponse:
    """
    Decode a national ID (e.g. one typed in by the operator).

    Invalid IDs are returned with isValid=false, not as an HTTP error.
    """
    use_case = build_decode_national_id_use_case()
    dto_out: DecodeNationalIdResponseDTO = use_case.execute(
        DecodeNationalIdRequestDTO(national_id=national_id)
    )
    return DecodeResponse(
        decodedInfo=to_decoded_info(dto_out.decoded),
        age=dto_out.age,
        ageGroup=dto_out.age_group,
        isElderly=dto_out.is_elderly,
    )


@router.get("/governorates", response_model=list[Governorate])
def list_governorates() -> list[Governorate]:
    """Birthplace code table used by the decoder."""
    return [Governorate(code=code, name=name) for code, name in GOVERNORATES.items()]
