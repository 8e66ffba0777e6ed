"""
OCR settings, read from the environment.

    TESSERACT_CMD      path to the tesseract binary (default: found on PATH)
    OCR_LANG           Tesseract language(s), default "ara+eng"
    OCR_PSM            page segmentation mode, default 6 (uniform block of text)
    OCR_OEM            engine mode, default 1 (LSTM)
    OCR_TARGET_WIDTH   width every preprocessing variant is resized to, default 1600
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional


@dataclass(frozen=True)
class OcrSettings:
    tesseract_cmd: Optional[str] = None
    lang: str = "ara+eng"
    psm: int = 6
    oem: int = 1
    target_width: int = 1600

    @property
    def tesseract_config(self) -> str:
        return f"--oem {self.oem} --psm {self.psm}"

    @classmethod
    def from_env(cls) -> "OcrSettings":
        return cls(
            tesseract_cmd=os.environ.get("TESSERACT_CMD") or None,
            lang=os.environ.get("OCR_LANG", cls.lang),
            psm=int(os.environ.get("OCR_PSM", cls.psm)),
            oem=int(os.environ.get("OCR_OEM", cls.oem)),
            target_width=int(os.environ.get("OCR_TARGET_WIDTH", cls.target_width)),
        )
