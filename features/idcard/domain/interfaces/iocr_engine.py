"""
Interface for turning a photographed ID card into raw text.

Infrastructure adapters (e.g., TesseractOcrEngine) implement this interface.
"""

from abc import ABC, abstractmethod

from features.idcard.domain.entities import RecognizedText


class IOcrEngine(ABC):
    """Port for the OCR collaborator."""

    @abstractmethod
    def recognize(self, image_bytes: bytes) -> RecognizedText:
        """
        Recognize text on an encoded image (JPEG/PNG/...).

        May be slow (hundreds of ms to seconds) and always returns best-effort
        text, never guaranteed to be correct.

        Args:
            image_bytes: Raw encoded image bytes

        Returns:
            RecognizedText with the chosen text and its confidence

        Raises:
            ImageDecodeError: If the bytes are not a decodable image
            OcrEngineError: If the engine itself fails
        """
        raise NotImplementedError
