import io
import logging
import mimetypes
from typing import List, Optional

import cv2
import numpy as np
import pytesseract
from PIL import Image
from pdf2image import convert_from_bytes
from PyPDF2 import PdfReader

from . import config
from .exceptions import FileReadError, FileTooLargeError, UnsupportedFileTypeError

# Set up logging
logger = logging.getLogger(__name__)

PAGE_SEPARATOR = "\n\n"

if config.TESSERACT_CMD_PATH:
    pytesseract.pytesseract.tesseract_cmd = config.TESSERACT_CMD_PATH


def resolve_file_type(file_type: Optional[str], file_name: Optional[str] = None) -> str:
    """
    Use the declared MIME type, or guess it from the file name when missing
    """
    if file_type and file_type != "application/octet-stream":
        return file_type.lower()
    if file_name:
        guessed, _ = mimetypes.guess_type(file_name)
        if guessed:
            return guessed
    return file_type or "application/octet-stream"


def preprocess_image(image):
    """
    Preprocess a scanned page for better OCR accuracy
    """
    # Convert PIL image to OpenCV format
    if isinstance(image, Image.Image):
        image = cv2.cvtColor(np.array(image.convert("RGB")), cv2.COLOR_RGB2BGR)

    gray = cv2.cvtColor(image, cv2.COLOR_BGR2GRAY)

    # Bilateral filter reduces noise while preserving edges
    filtered = cv2.bilateralFilter(gray, 9, 75, 75)
    thresh = cv2.adaptiveThreshold(
        filtered, 255, cv2.ADAPTIVE_THRESH_GAUSSIAN_C, cv2.THRESH_BINARY, 11, 2
    )

    kernel = np.ones((1, 1), np.uint8)
    cleaned = cv2.morphologyEx(thresh, cv2.MORPH_CLOSE, kernel)
    cleaned = cv2.morphologyEx(cleaned, cv2.MORPH_OPEN, kernel)

    return deskew_image(cleaned)


def deskew_image(image):
    """
    Correct image skew for better OCR
    """
    coords = np.column_stack(np.where(image > 0)).astype(np.float32)
    if len(coords) == 0:
        return image

    # OpenCV before 4.5 reports angles in [-90, 0), later versions in (0, 90]
    angle = cv2.minAreaRect(coords)[-1]
    if angle < -45:
        angle += 90
    elif angle > 45:
        angle -= 90
    angle = -angle

    # Only apply rotation if angle is significant
    if abs(angle) > 0.5:
        h, w = image.shape[:2]
        center = (w // 2, h // 2)
        M = cv2.getRotationMatrix2D(center, angle, 1.0)
        return cv2.warpAffine(image, M, (w, h), flags=cv2.INTER_CUBIC, borderMode=cv2.BORDER_REPLICATE)

    return image


def ocr_image(image: Image.Image) -> str:
    try:
        processed = preprocess_image(image)
    except cv2.error as e:
        logger.error(f"Error preprocessing image: {e}")
        raise FileReadError(f"Failed to prepare image for OCR: {e}") from e

    try:
        text = pytesseract.image_to_string(Image.fromarray(processed), config="--oem 3 --psm 3")
    except pytesseract.TesseractNotFoundError as e:
        logger.error(f"Tesseract OCR not found: {e}")
        raise FileReadError("OCR is unavailable: install Tesseract or set TESSERACT_CMD_PATH") from e
    except pytesseract.TesseractError as e:
        logger.error(f"Tesseract failed: {e}")
        raise FileReadError(f"OCR failed: {e.message}") from e
    except RuntimeError as e:
        # pytesseract raises RuntimeError when its timeout expires
        logger.error(f"OCR error: {e}")
        raise FileReadError(f"OCR failed: {e}") from e
    return text.strip()


def extract_text_from_image(image_bytes: bytes) -> str:
    """
    Extract text from image bytes using OCR
    """
    try:
        image = Image.open(io.BytesIO(image_bytes))
        image.load()
    except Exception as e:
        logger.error(f"Error opening image: {e}")
        raise FileReadError(f"Failed to read image: {e}") from e

    text = ocr_image(image)
    logger.info(f"Extracted {len(text)} characters from image")
    return text


def ocr_pdf_page(pdf_bytes: bytes, page_number: int) -> str:
    try:
        images = convert_from_bytes(
            pdf_bytes, dpi=config.PDF_OCR_DPI, first_page=page_number, last_page=page_number
        )
    except Exception as e:
        logger.error(f"Error rasterizing PDF page {page_number}: {e}")
        raise FileReadError(f"Failed to render PDF page {page_number} for OCR: {e}") from e
    return "\n".join(ocr_image(image) for image in images)


def extract_text_from_pdf(pdf_bytes: bytes) -> str:
    """
    Extract text from a PDF

    Pages with a text layer are read directly. Pages without one are
    treated as scans and OCR'd, up to PDF_OCR_MAX_PAGES of them.
    """
    try:
        reader = PdfReader(io.BytesIO(pdf_bytes))
        pages = list(reader.pages)
    except Exception as e:
        logger.error(f"Error opening PDF: {e}")
        raise FileReadError("Failed to extract text from PDF") from e

    page_texts: List[str] = []
    ocr_pages = 0
    for page_number, page in enumerate(pages, 1):
        try:
            page_text = (page.extract_text() or "").strip()
        except Exception as e:
            logger.warning(f"Text layer unreadable on PDF page {page_number}: {e}")
            page_text = ""

        if not page_text and ocr_pages < config.PDF_OCR_MAX_PAGES:
            logger.info(f"PDF page {page_number} has no text layer, running OCR")
            page_text = ocr_pdf_page(pdf_bytes, page_number)
            ocr_pages += 1

        page_texts.append(page_text)

    text = PAGE_SEPARATOR.join(page_texts).strip()
    logger.info(f"✅ Extracted {len(text)} characters from {len(pages)} PDF pages ({ocr_pages} OCR'd)")
    return text


def decode_text_file(file_bytes: bytes) -> str:
    try:
        return file_bytes.decode("utf-8-sig")
    except UnicodeDecodeError:
        logger.warning("Text file is not valid UTF-8, decoding as latin-1")
        return file_bytes.decode("latin-1")


def extract_text(file_bytes: bytes, file_type: Optional[str], file_name: Optional[str] = None) -> str:
    """
    Main function to extract text from an uploaded file

    Args:
        file_bytes: File content as bytes
        file_type: MIME type of the file
        file_name: Original file name, used when file_type is missing

    Returns:
        Extracted text as string
    """
    size_mb = len(file_bytes) / (1024 * 1024)
    if size_mb > config.MAX_FILE_SIZE_MB:
        raise FileTooLargeError(size_mb, config.MAX_FILE_SIZE_MB)

    resolved_type = resolve_file_type(file_type, file_name)
    logger.info(f"Extracting text from {file_name or 'upload'} ({resolved_type}, {len(file_bytes):,} bytes)")

    if resolved_type == "application/pdf":
        return extract_text_from_pdf(file_bytes)
    if resolved_type.startswith("image/"):
        return extract_text_from_image(file_bytes)
    if resolved_type.startswith("text/"):
        return decode_text_file(file_bytes).strip()

    raise UnsupportedFileTypeError(resolved_type)
