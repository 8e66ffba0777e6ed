"""
DTOs (Data Transfer Objects) used by the ID card use cases and API.

Following clean architecture principles:
- DTOs are organized by feature/domain
- Each DTO is in its own file for better organization
"""

# Extraction DTOs
from .extract_id_card_request_dto import ExtractIdCardRequestDTO
from .extract_id_card_text_request_dto import ExtractIdCardTextRequestDTO
from .ocr_result_dto import OcrResultDTO

# Decoding DTOs
from .decode_national_id_request_dto import DecodeNationalIdRequestDTO
from .decode_national_id_response_dto import DecodeNationalIdResponseDTO

__all__ = [
    # Extraction
    "ExtractIdCardRequestDTO",
    "ExtractIdCardTextRequestDTO",
    "OcrResultDTO",
    # Decoding
    "DecodeNationalIdRequestDTO",
    "DecodeNationalIdResponseDTO",
]
