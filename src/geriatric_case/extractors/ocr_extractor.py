# src/geriatric_case/extractors/ocr_extractor.py
"""
Image OCR via Tesseract.

Phone photos of printed notes are the common input, so images are
loaded with EXIF orientation applied and downscaled before recognition.
"""

from pathlib import Path
from typing import Optional
import logging

from PIL import Image, ImageOps
import pytesseract

from ..config import import_settings
from ..utils.exceptions import TextExtractionError
from ..utils.logging import log_performance

logger = logging.getLogger(__name__)


def load_image_for_ocr(
    file_path: Path,
    max_dimension: Optional[int] = None,
) -> Image.Image:
    """
    Load an image with the corrections OCR needs.

    1. EXIF orientation correction (portrait phone photos)
    2. Downscaling oversized images
    3. Conversion to RGB

    Args:
        file_path: Path to image file
        max_dimension: Maximum width or height (larger images are downscaled)

    Returns:
        Corrected PIL Image
    """
    if max_dimension is None:
        max_dimension = import_settings.OCR_MAX_DIMENSION

    with Image.open(file_path) as opened:
        image = opened.copy()

    try:
        image = ImageOps.exif_transpose(image)
    except Exception as e:
        logger.warning(f"EXIF transpose failed (non-fatal): {e}")

    width, height = image.size
    if max(width, height) > max_dimension:
        scale = max_dimension / max(width, height)
        new_size = (max(1, int(width * scale)), max(1, int(height * scale)))
        logger.debug(f"Downscaling image from {width}x{height} to {new_size[0]}x{new_size[1]}")
        image = image.resize(new_size, Image.LANCZOS)

    if image.mode != 'RGB':
        image = image.convert('RGB')

    return image


class OCRExtractor:
    """Tesseract OCR for .png/.jpg/.jpeg images."""

    def __init__(self, language: Optional[str] = None):
        self.logger = logging.getLogger(__name__)
        self.language = language or import_settings.OCR_LANGUAGE

    @log_performance(logger, "OCR")
    def extract(self, image_path: Path) -> str:
        """
        Recognize the text in an image.

        Raises:
            TextExtractionError: If the image cannot be read or Tesseract fails
        """
        image_path = Path(image_path)

        try:
            image = load_image_for_ocr(image_path)
        except Exception as e:
            self.logger.error(f"Failed to open image {image_path.name}: {e}")
            raise TextExtractionError(
                f"Could not read image {image_path.name}: {e}", file_type="image"
            ) from e

        try:
            text = pytesseract.image_to_string(image, lang=self.language)
        except Exception as e:
            self.logger.error(f"Tesseract failed on {image_path.name}: {e}")
            raise TextExtractionError(
                f"OCR failed for {image_path.name}: {e}", file_type="image"
            ) from e
        finally:
            image.close()

        text = text or ''
        self.logger.info(f"OCR extracted {len(text)} chars from {image_path.name}")
        return text
