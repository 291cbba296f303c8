"""Tests for receipt detection."""

import cv2
import numpy as np
from PIL import Image

from receipt_detector import ReceiptDetector


def receipt_photo():
    canvas = np.zeros((600, 400), dtype=np.uint8)
    cv2.rectangle(canvas, (100, 150), (300, 450), 255, -1)
    return Image.fromarray(canvas)


def test_detects_bright_receipt_on_dark_background():
    box = ReceiptDetector().detect(receipt_photo())

    assert box is not None
    assert abs(box.x - 100) <= 5
    assert abs(box.y - 150) <= 5
    assert abs(box.width - 200) <= 10
    assert abs(box.height - 300) <= 10
    assert 0.5 <= box.confidence <= 1.0


def test_blank_photo_has_no_receipt():
    assert ReceiptDetector().detect(Image.new("L", (400, 600))) is None


def test_small_shapes_are_ignored():
    canvas = np.zeros((600, 400), dtype=np.uint8)
    cv2.rectangle(canvas, (10, 10), (40, 40), 255, -1)
    assert ReceiptDetector().detect(Image.fromarray(canvas)) is None


def test_confidence_threshold():
    assert ReceiptDetector(min_confidence=1.01).detect(receipt_photo()) is None
