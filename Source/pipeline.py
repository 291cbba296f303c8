"""
Receipt pipeline for Bill Splitter
detect -> crop -> OCR -> cleanup -> parse -> seed the bill's items
"""

from dataclasses import dataclass
from typing import Optional, Union

from data_models import (
    BillConfig, BoundingBox, OcrResult, CleanupResult, CleanupError, ParseOutcome,
)
from bill_editor import seed_items
from ocr_processor import ReceiptOCRProcessor, load_image, crop_image
from receipt_detector import ReceiptDetector
from receipt_parser import ReceiptParser
from text_cleanup import TextCleanupClient
from utils import create_progress_callback


@dataclass
class PipelineResult:
    config: BillConfig
    box: Optional[BoundingBox] = None
    ocr: Optional[OcrResult] = None
    cleanup: Optional[Union[CleanupResult, CleanupError]] = None
    outcome: Optional[ParseOutcome] = None

    @property
    def error(self) -> Optional[str]:
        """Message to show the person, if a stage failed"""
        if self.ocr is not None and not self.ocr.ok:
            return self.ocr.text
        if isinstance(self.cleanup, CleanupError):
            return self.cleanup.message
        return None


class ReceiptPipeline:
    """Runs the photo collaborators in order and hands the final text to the parser"""

    def __init__(self, processor: ReceiptOCRProcessor = None, detector: ReceiptDetector = None,
                 cleanup: TextCleanupClient = None, parser: ReceiptParser = None,
                 use_cleanup: bool = True, auto_crop: bool = True, show_progress: bool = True,
                 debug: bool = False):
        self.processor = processor or ReceiptOCRProcessor()
        self.detector = detector or ReceiptDetector()
        self.cleanup = cleanup or TextCleanupClient()
        self.parser = parser or ReceiptParser()
        self.use_cleanup = use_cleanup
        self.auto_crop = auto_crop
        self.show_progress = show_progress
        self.debug = debug
        if debug:
            self.parser.debug = True

    def _trace(self, message: str):
        if self.debug:
            print(f"\n[pipeline] {message}")

    def _progress(self):
        if not self.show_progress:
            return lambda step, status="": None
        return create_progress_callback(4, "Receipt")

    def process_image(self, image_path: str, config: BillConfig) -> PipelineResult:
        progress = self._progress()
        result = PipelineResult(config=config)

        try:
            image = load_image(image_path)
        except OSError as e:
            print(f"❌ Could not open image {image_path}: {e}")
            result.ocr = OcrResult(text=f"Could not open image: {e}", ok=False)
            return result

        if self.auto_crop:
            result.box = self.detector.detect(image)
            self._trace(f"receipt box: {result.box}")
            if result.box is not None:
                image = crop_image(image, result.box)
                self.processor.metrics.detection_confidence = result.box.confidence
        progress(1, "cropped" if result.box else "no receipt edge found")

        result.ocr = self.processor.recognize(image)
        self._trace(f"OCR read {len(result.ocr.text)} characters, ok={result.ocr.ok}")
        progress(2, "text read")
        if not result.ocr.ok:
            return result

        return self._finish(result.ocr.text, result, progress)

    def process_text(self, text: str, config: BillConfig, clean: bool = None) -> PipelineResult:
        """Skip the image stages and start from text"""
        progress = self._progress()
        result = PipelineResult(config=config)
        progress(2, "text given")
        return self._finish(text, result, progress, clean)

    def _finish(self, text: str, result: PipelineResult, progress, clean: bool = None) -> PipelineResult:
        clean = self.use_cleanup if clean is None else clean
        if clean:
            result.cleanup = self.cleanup.clean(text)
            self._trace(f"cleanup returned {type(result.cleanup).__name__}")
            progress(3, "cleaned")
            if isinstance(result.cleanup, CleanupError):
                progress(4, "cleanup failed")
                return result
            text = result.cleanup.text
        else:
            progress(3, "cleanup skipped")

        result.outcome = self.parser.parse(text)
        result.config = seed_items(result.config, result.outcome.items)
        progress(4, f"{len(result.outcome.items)} items")
        return result
