"""
Receipt Detector module for Bill Splitter
Finds the receipt in a photo so it can be cropped before OCR
"""

from typing import Optional

import cv2
import numpy as np
from PIL import Image

from config import DETECTION_MIN_CONFIDENCE, DETECTION_MIN_AREA_RATIO
from data_models import BoundingBox

DETECTION_MAX_SIDE = 1000
CANDIDATE_CONTOURS = 10


class ReceiptDetector:
    """Edge/contour detector returning at most one receipt box"""

    def __init__(self, min_confidence: float = DETECTION_MIN_CONFIDENCE,
                 min_area_ratio: float = DETECTION_MIN_AREA_RATIO):
        self.min_confidence = min_confidence
        self.min_area_ratio = min_area_ratio

    def _edges(self, image: Image.Image):
        """Edge map of a downscaled grayscale copy, plus the scale used"""
        width, height = image.size
        ratio = min(1.0, DETECTION_MAX_SIDE / max(width, height))
        small = image.convert('L')
        if ratio < 1.0:
            small = small.resize((max(1, int(width * ratio)), max(1, int(height * ratio))))

        gray = cv2.GaussianBlur(np.array(small), (5, 5), 0)
        edged = cv2.Canny(gray, 50, 150)
        # Close gaps
        kernel = cv2.getStructuringElement(cv2.MORPH_RECT, (3, 3))
        edged = cv2.morphologyEx(edged, cv2.MORPH_CLOSE, kernel, iterations=2)
        return edged, ratio

    def detect(self, image: Image.Image) -> Optional[BoundingBox]:
        """Best receipt-shaped region, or None when nothing is confident enough"""
        width, height = image.size
        if width == 0 or height == 0:
            return None

        edged, ratio = self._edges(image)
        frame_area = float(edged.shape[0] * edged.shape[1])

        contours, _ = cv2.findContours(edged, cv2.RETR_LIST, cv2.CHAIN_APPROX_SIMPLE)
        contours = sorted(contours, key=cv2.contourArea, reverse=True)

        for contour in contours[:CANDIDATE_CONTOURS]:
            peri = cv2.arcLength(contour, True)
            approx = cv2.approxPolyDP(contour, 0.02 * peri, True)
            area = cv2.contourArea(approx)
            if len(approx) != 4 or area < self.min_area_ratio * frame_area:
                continue

            x, y, w, h = cv2.boundingRect(approx)
            # how well the quad fills its upright box
            confidence = area / float(w * h) if w and h else 0.0
            if confidence < self.min_confidence:
                continue

            return BoundingBox(
                x=int(x / ratio),
                y=int(y / ratio),
                width=min(width, int(round(w / ratio))),
                height=min(height, int(round(h / ratio))),
                confidence=round(confidence, 3)
            )

        return None
