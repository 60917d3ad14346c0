"""
Text extraction from saved captures using Tesseract (via pytesseract).
"""

import os
from typing import Any, Dict

import pytesseract
from PIL import Image
from loguru import logger

from screen_vision.core.constants import OCR_SETTINGS


def _mean_confidence(data: Dict[str, Any]) -> float:
    scores = []
    for value in data.get("conf", []):
        try:
            score = float(value)
        except (TypeError, ValueError):
            continue
        if score >= 0:
            scores.append(score)
    return round(sum(scores) / len(scores), 1) if scores else 0.0


def extract_text(image_path: str, language: str = OCR_SETTINGS["DEFAULT_LANGUAGE"]) -> Dict[str, Any]:
    """
    Run OCR on an image file.

    Args:
        image_path: Path to a saved capture
        language: Tesseract language code ("eng", "jpn", "chi_sim", ...)

    Returns:
        Dict[str, Any]: text, confidence (0-100) and language

    Raises:
        FileNotFoundError: If the image does not exist
        pytesseract.TesseractError: If Tesseract fails
    """
    if not os.path.isfile(image_path):
        raise FileNotFoundError(image_path)

    config = OCR_SETTINGS["TESSERACT_CONFIG"]
    with Image.open(image_path) as img:
        text = pytesseract.image_to_string(img, lang=language, config=config).strip()
        data = pytesseract.image_to_data(img, lang=language, config=config, output_type=pytesseract.Output.DICT)

    confidence = _mean_confidence(data)
    logger.info(f"Extracted {len(text)} characters from {image_path} (confidence {confidence})")
    return {"text": text, "confidence": confidence, "language": language}
