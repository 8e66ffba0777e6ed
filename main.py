"""
Entry point for the FastAPI application.

Run with (from project root):

    uvicorn main:app --reload

Currently exposes the "ID card" feature via:

    POST /api/v1/id-cards/extract
    POST /api/v1/id-cards/extract-text
    GET  /api/v1/id-cards/decode/{national_id}
    GET  /api/v1/id-cards/governorates
"""

import logging
import sys

from fastapi import FastAPI

from features.idcard.presentation.api import router as id_card_router

# Configure logging
logging.basicConfig(
    level=logging.INFO,  # Set to DEBUG for more verbose output
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s',
    handlers=[
        logging.StreamHandler(sys.stdout),
        logging.FileHandler('id_card_ocr.log', encoding='utf-8')
    ]
)

# Set specific log levels for modules
logging.getLogger("features.idcard.infrastructure.tesseract_ocr_engine").setLevel(logging.DEBUG)

logger = logging.getLogger(__name__)
logger.info("Starting ID Card OCR API")

app = FastAPI(title="ID Card OCR API", version="0.1.0")

app.include_router(id_card_router)


@app.get("/health")
def health_check() -> dict:
    return {"status": "ok"}
