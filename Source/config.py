"""
Centralized configuration for Bill Splitter with environment
"""

import os

# Bill defaults
DEFAULT_SERVICE_MULTIPLIER = float(os.getenv("BILLSPLIT_SERVICE_MULTIPLIER", "1.1"))
DEFAULT_GST_PERCENT = float(os.getenv("BILLSPLIT_GST_PERCENT", "9"))
CURRENCY_SYMBOL = os.getenv("BILLSPLIT_CURRENCY_SYMBOL", "$")

# OCR settings
OCR_PSM = int(os.getenv("BILLSPLIT_OCR_PSM", "6"))
OCR_LANGUAGES = os.getenv("BILLSPLIT_OCR_LANGUAGES", "eng")

# Runtime settings
DEFAULT_MAX_WORKERS = int(os.getenv("BILLSPLIT_MAX_WORKERS", "1"))
IMAGE_REGION_OVERLAP_PX = int(os.getenv("BILLSPLIT_IMAGE_OVERLAP", "50"))
MAX_IMAGE_SIZE_BYTES = int(os.getenv("BILLSPLIT_MAX_IMAGE_SIZE_BYTES", str(50 * 1024 * 1024)))
PROGRESS_BAR_LENGTH = int(os.getenv("BILLSPLIT_PROGRESS_BAR_LENGTH", "30"))

# Image preprocessing
CONTRAST_FACTOR = float(os.getenv("BILLSPLIT_CONTRAST", "1.5"))

# Receipt detection
DETECTION_MIN_CONFIDENCE = float(os.getenv("BILLSPLIT_DETECTION_MIN_CONFIDENCE", "0.5"))
DETECTION_MIN_AREA_RATIO = float(os.getenv("BILLSPLIT_DETECTION_MIN_AREA_RATIO", "0.1"))

# Text cleanup
LLM_MODEL = os.getenv("BILLSPLIT_LLM_MODEL", "gpt-4o")
LLM_TEMPERATURE = float(os.getenv("BILLSPLIT_LLM_TEMPERATURE", "0.2"))
LLM_API_KEY_ENV = os.getenv("BILLSPLIT_LLM_API_KEY_ENV", "OPENAI_API_KEY")
LLM_TIMEOUT_SECONDS = float(os.getenv("BILLSPLIT_LLM_TIMEOUT", "60"))

# Workers bounds
WORKERS_MIN = int(os.getenv("BILLSPLIT_WORKERS_MIN", "1"))
WORKERS_MAX = int(os.getenv("BILLSPLIT_WORKERS_MAX", "16"))
