#!/usr/bin/env python3
"""
Utility functions for Bill Splitter
"""

import re
import mimetypes
from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from pathlib import Path
from typing import List, Optional

from config import MAX_IMAGE_SIZE_BYTES, PROGRESS_BAR_LENGTH, CURRENCY_SYMBOL
from constants import IMAGE_EXTENSIONS, DECIMAL_QUANTIZE, DINER_LABEL, ITEM_LABEL


def validate_image_path(image_path: str) -> bool:
    """Comprehensive image path validation with security checks"""
    if not isinstance(image_path, str):
        print("Image path must be a string")
        return False

    try:
        path = Path(image_path)

        # Security: Basic directory traversal check
        if '..' in path.parts:
            print(f"Security risk: Invalid path pattern: {image_path}")
            return False

        if not path.exists():
            print(f"File not found: {image_path}")
            return False

        if not path.is_file():
            print(f"Path is not a file: {image_path}")
            return False

        if path.stat().st_size > MAX_IMAGE_SIZE_BYTES:
            print(f"File too large: {path.stat().st_size} bytes (max: {MAX_IMAGE_SIZE_BYTES})")
            return False

        if path.suffix.lower() not in IMAGE_EXTENSIONS:
            print(f"Unsupported file extension: {path.suffix}")
            return False

        mime_type, _ = mimetypes.guess_type(str(path))
        if mime_type and not mime_type.startswith('image/'):
            print(f"Invalid MIME type: {mime_type}")
            return False

        return True

    except OSError as e:
        print(f"Path validation error: {e}")
        return False


def try_parse_int(value: str) -> Optional[int]:
    """Safely parse integer from string"""
    try:
        return int(value.strip())
    except (AttributeError, ValueError):
        return None


def parse_index_list(value: str, count: int) -> List[int]:
    """'1, 3' -> [0, 2]; out-of-range and non-numeric entries are skipped"""
    indices = []
    for part in (value or '').split(','):
        number = try_parse_int(part)
        if number is not None and 1 <= number <= count and number - 1 not in indices:
            indices.append(number - 1)
    return indices


def validate_menu_choice(choice: str, valid_choices: list[str]) -> Optional[str]:
    """Validate a menu choice against allowed options"""
    if not isinstance(choice, str):
        return None
    choice = choice.strip()
    return choice if choice in set(valid_choices) else None


def diner_label(name: str, idx: int) -> str:
    """Display name, or 'Diner #N' when the name is blank"""
    return name or DINER_LABEL.format(idx + 1)


def item_label(name: str, idx: int) -> str:
    return name or ITEM_LABEL.format(idx + 1)


def round_amount(amount: float, quantum: Decimal = DECIMAL_QUANTIZE) -> Decimal:
    """Round half-up for display only"""
    try:
        return Decimal(str(amount)).quantize(quantum, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError):
        return Decimal(0).quantize(quantum)


def format_amount(amount: float, quantum: Decimal = DECIMAL_QUANTIZE, blank_zero: bool = False) -> str:
    if blank_zero and not amount:
        return ''
    return str(round_amount(amount, quantum))


def format_currency(amount: float, symbol: str = CURRENCY_SYMBOL) -> str:
    return f"{symbol}{format_amount(amount)}"


def format_percent(value: float) -> str:
    """9.0 -> '9', 8.5 -> '8.5'"""
    return f"{value:g}"


def create_progress_callback(total_steps: int, description: str = "Processing"):
    """Create a progress callback function for long operations"""
    def progress_callback(step: int, status: str = ""):
        percentage = (step / total_steps) * 100
        bar_length = PROGRESS_BAR_LENGTH
        filled_length = int(bar_length * step // total_steps)
        bar = '█' * filled_length + '░' * (bar_length - filled_length)

        status_text = f" - {status}" if status else ""
        print(f"\r{description}: [{bar}] {percentage:.1f}%{status_text}", end='', flush=True)

        if step >= total_steps:
            print()

    return progress_callback


def clean_text_for_display(text: str, max_length: int = 100) -> str:
    """Clean text for safe display in UI"""
    if not isinstance(text, str):
        return ""

    text = re.sub(r'[\x00-\x1f\x7f-\x9f]', '', text)
    text = ' '.join(text.split())

    if len(text) > max_length:
        text = text[:max_length-3] + "..."

    return text

