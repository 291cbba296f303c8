"""
OCR Processing module for Bill Splitter
Preprocesses and crops receipt images, then reads their text with Tesseract
"""

import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from difflib import SequenceMatcher
from typing import List, Optional, Tuple, Union

import cv2
import numpy as np
import pytesseract
from PIL import Image

from config import (
    OCR_LANGUAGES, OCR_PSM, CONTRAST_FACTOR, IMAGE_REGION_OVERLAP_PX,
    DEFAULT_MAX_WORKERS,
)
from data_models import BoundingBox, OcrResult, OCR_FAILED, ProcessingMetrics

SEAM_LOOKBACK_LINES = 5
SEAM_SIMILARITY = 0.95


def load_image(image_path: str) -> Image.Image:
    image = Image.open(image_path)
    image.load()
    return image


def contrast_stretch(gray: np.ndarray, contrast: float = CONTRAST_FACTOR) -> np.ndarray:
    """Push grey levels away from mid-grey; 0 leaves the image unchanged"""
    factor = (259 * (contrast + 255)) / (255 * (259 - contrast))
    stretched = factor * (gray.astype(np.float32) - 128) + 128
    return np.clip(np.rint(stretched), 0, 255).astype(np.uint8)


def preprocess_image(image: Image.Image, contrast: float = CONTRAST_FACTOR) -> Image.Image:
    """Grayscale, contrast stretch and denoise to improve OCR accuracy"""
    rgb = np.array(image.convert('RGB'), dtype=np.float32)
    # plain channel average, not luminance weighting
    gray = rgb.mean(axis=2)
    gray = contrast_stretch(gray, contrast)

    # Remove noise with bilateral filter
    gray = cv2.bilateralFilter(gray, 9, 75, 75)
    return Image.fromarray(gray)


def crop_image(image: Image.Image, box: Union[BoundingBox, Tuple[int, int, int, int]]) -> Image.Image:
    """Crop to a bounding box, clamped to the image"""
    left, upper, right, lower = box.box if isinstance(box, BoundingBox) else box
    width, height = image.size
    left, right = max(0, min(left, width)), max(0, min(right, width))
    upper, lower = max(0, min(upper, height)), max(0, min(lower, height))
    if right <= left or lower <= upper:
        return image
    return image.crop((left, upper, right, lower))


class ReceiptOCRProcessor:
    """OCR of receipt images, optionally split into regions read in parallel"""

    def __init__(self, num_workers: int = DEFAULT_MAX_WORKERS, languages: str = OCR_LANGUAGES):
        self.num_workers = max(1, num_workers)
        self.languages = languages
        self.metrics = ProcessingMetrics()
        self.available_languages: Optional[List[str]] = None

    def _check_languages(self) -> List[str]:
        """Available Tesseract languages"""
        try:
            languages = pytesseract.get_languages(config='')
            print(f"✓ Available OCR languages: {', '.join(languages)}")
            return languages
        except (pytesseract.TesseractNotFoundError, pytesseract.TesseractError, OSError) as e:
            print(f"⚠ Could not check languages: {e}")
            return ['eng']

    def _get_ocr_language(self) -> str:
        """Requested languages that Tesseract actually has, else English"""
        if self.available_languages is None:
            self.available_languages = self._check_languages()
        wanted = [lang for lang in self.languages.split('+') if lang in self.available_languages]
        return '+'.join(wanted) if wanted else 'eng'

    def split_image_into_regions(self, image: Image.Image) -> List[Tuple[int, Image.Image]]:
        """Horizontal bands, each overlapping the next so no text line is cut"""
        width, height = image.size
        region_height = height // self.num_workers
        if region_height == 0:
            return [(0, image)]

        regions = []
        for i in range(self.num_workers):
            y_start = i * region_height
            y_end = height if i == self.num_workers - 1 else (i + 1) * region_height + IMAGE_REGION_OVERLAP_PX

            region = image.crop((0, y_start, width, min(y_end, height)))
            regions.append((i, region))

        return regions

    def process_region(self, region_data: Tuple[int, Image.Image]) -> str:
        region_id, region_image = region_data
        print(f"  Worker {region_id + 1}: Processing region...")

        text = pytesseract.image_to_string(
            region_image,
            lang=self._get_ocr_language(),
            config=f'--psm {OCR_PSM}'
        )
        print(f"  Worker {region_id + 1}: Complete ✓")
        return text

    @staticmethod
    def join_regions(texts: List[str]) -> str:
        """Join region texts, dropping lines repeated across the overlap"""
        merged: List[str] = []
        for text in texts:
            lines = [line for line in text.split('\n') if line.strip()]
            tail = merged[-SEAM_LOOKBACK_LINES:]
            while lines and any(
                SequenceMatcher(None, lines[0].lower(), seen.lower()).ratio() > SEAM_SIMILARITY
                for seen in tail
            ):
                lines.pop(0)
            merged.extend(lines)
        return '\n'.join(merged)

    def recognize(self, image: Image.Image) -> OcrResult:
        """Read text from an already cropped image; OCR_FAILED on any engine error"""
        start_time = time.time()
        print(f"\n🚀 Starting OCR with {self.num_workers} worker(s)...")

        try:
            processed_image = preprocess_image(image)
            regions = self.split_image_into_regions(processed_image)
            self.metrics.regions_processed = len(regions)

            texts = {}
            with ThreadPoolExecutor(max_workers=self.num_workers) as executor:
                future_to_region = {
                    executor.submit(self.process_region, region): region[0]
                    for region in regions
                }
                for future in as_completed(future_to_region):
                    texts[future_to_region[future]] = future.result()
        except Exception as e:
            print(f"❌ OCR error: {e}")
            return OCR_FAILED

        combined_text = self.join_regions([texts[i] for i in sorted(texts)])

        self.metrics.workers_used = self.num_workers
        self.metrics.processing_time = time.time() - start_time
        self.metrics.text_length = len(combined_text)

        print(f"✅ OCR complete in {self.metrics.processing_time:.2f}s")
        return OcrResult(text=combined_text)
