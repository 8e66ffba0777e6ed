"""
Exceptions for the ID card feature.

Only infrastructure failures are exceptional. "No ID found", "ID does not
decode" and "no name/address line" are ordinary results (None / is_valid=False).
"""


class InfrastructureError(Exception):
    """Base exception for failures outside the text-parsing core."""
    pass


class ImageDecodeError(InfrastructureError):
    """The uploaded bytes could not be decoded or resized as an image."""
    pass


class OcrEngineError(InfrastructureError):
    """The OCR engine is unavailable or crashed."""
    pass
