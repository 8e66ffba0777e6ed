"""
Tests for the Tesseract adapter. pytesseract.image_to_data is monkeypatched,
so no tesseract binary is needed.

Usage:
    pytest test_tesseract_ocr_engine.py
"""

import io

import pytest
import pytesseract
from PIL import Image

from features.idcard.domain.errors import ImageDecodeError, InfrastructureError, OcrEngineError
from features.idcard.infrastructure.config import OcrSettings
from features.idcard.infrastructure.tesseract_ocr_engine import TesseractOcrEngine, decode_image


def png_bytes(size=(120, 80)) -> bytes:
    buffer = io.BytesIO()
    Image.new("RGB", size, "white").save(buffer, format="PNG")
    return buffer.getvalue()


def fake_data(word: str, conf: float) -> dict:
    return {
        "text": [word],
        "conf": [conf],
        "block_num": [1],
        "par_num": [1],
        "line_num": [1],
    }


@pytest.fixture
def engine():
    return TesseractOcrEngine(OcrSettings(target_width=200))


def test_decode_image():
    img = decode_image(png_bytes())
    assert img.mode == "RGB"
    assert img.size == (120, 80)


@pytest.mark.parametrize("payload", [b"", b"definitely not an image"])
def test_decode_image_rejects_garbage(payload):
    with pytest.raises(ImageDecodeError):
        decode_image(payload)


def test_image_decode_error_is_infrastructure_error():
    assert issubclass(ImageDecodeError, InfrastructureError)
    assert issubclass(OcrEngineError, InfrastructureError)


def test_recognize_keeps_most_confident_variant(engine, monkeypatch):
    confidences = iter([50.0, 90.0, 70.0, 60.0])
    calls = []

    def fake_image_to_data(image, lang=None, config=None, output_type=None):
        calls.append((lang, config))
        conf = next(confidences)
        return fake_data(f"text{int(conf)}", conf)

    monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

    result = engine.recognize(png_bytes())

    assert result.variant == "contrast"
    assert result.text == "text90"
    assert result.confidence == 90.0
    assert calls == [("ara+eng", "--oem 1 --psm 6")] * 4


def test_recognize_missing_binary(engine, monkeypatch):
    def fake_image_to_data(*args, **kwargs):
        raise pytesseract.TesseractNotFoundError()

    monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

    with pytest.raises(OcrEngineError):
        engine.recognize(png_bytes())


def test_recognize_engine_crash(engine, monkeypatch):
    def fake_image_to_data(*args, **kwargs):
        raise pytesseract.TesseractError(1, "crash")

    monkeypatch.setattr(pytesseract, "image_to_data", fake_image_to_data)

    with pytest.raises(OcrEngineError):
        engine.recognize(png_bytes())


def test_recognize_bad_image(engine):
    with pytest.raises(ImageDecodeError):
        engine.recognize(b"\x00\x01\x02")


def test_settings_from_env(monkeypatch):
    monkeypatch.setenv("OCR_LANG", "ara")
    monkeypatch.setenv("OCR_PSM", "11")
    monkeypatch.delenv("TESSERACT_CMD", raising=False)

    settings = OcrSettings.from_env()

    assert settings.lang == "ara"
    assert settings.psm == 11
    assert settings.tesseract_cmd is None
    assert settings.tesseract_config == "--oem 1 --psm 11"
