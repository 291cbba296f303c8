from decimal import Decimal

PATTERNS = {
        # "name" and "price" anywhere in the line marks a table header
        'header_name': r'name',
        'header_price': r'price',

        'cell_separator': r'\|',
        'column_gap': r'\s{2,}',

        # Burger x2 12.50
        'item_line': r'(.*?)(?:\s+x(\d+))?\s+([\d.]+)',

        # leading numeric prefix, the way a browser parseFloat reads it
        'numeric_prefix': r'\s*[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?',
    }

MIN_TABLE_FIELDS = 3

DECIMAL_QUANTIZE = Decimal("0.01")
DECIMAL_QUANTIZE_FINE = Decimal("0.0001")

DINER_LABEL = "Diner #{}"
ITEM_LABEL = "Item #{}"

OCR_FAILED_MESSAGE = "OCR failed. Please try again."

CLEANUP_SYSTEM_PROMPT = (
    "You are a helpful assistant that extracts and cleans up bill items from OCR text. "
    "Return only the cleaned, itemized bill as a table with the headers: name, quantity, price. "
    "Each row should correspond to one item. If quantity is missing, use 1. "
    "Price should be a number only, no currency symbol."
)

IMAGE_EXTENSIONS = {'.jpg', '.jpeg', '.png', '.bmp', '.tiff', '.gif', '.webp'}
