"""
Receipt Parser module for Bill Splitter
Turns OCR or cleaned-up receipt text into bill items
"""

import re
from typing import List, Optional

from data_models import ParsedItem, ParseOutcome, StructuredParse, FallbackParse, Item
from constants import PATTERNS, MIN_TABLE_FIELDS

_CELL_SEPARATOR = re.compile(PATTERNS['cell_separator'])
_COLUMN_GAP = re.compile(PATTERNS['column_gap'])
_ITEM_LINE = re.compile(PATTERNS['item_line'])
_HEADER_NAME = re.compile(PATTERNS['header_name'], re.IGNORECASE)
_HEADER_PRICE = re.compile(PATTERNS['header_price'], re.IGNORECASE)


def non_blank_lines(text: str) -> List[str]:
    if not isinstance(text, str):
        return []
    return [line for line in text.splitlines() if line.strip()]


def find_header(lines: List[str]) -> Optional[int]:
    """Index of the first line that looks like a table header"""
    for idx, line in enumerate(lines):
        if _HEADER_NAME.search(line) and _HEADER_PRICE.search(line):
            return idx
    return None


def split_row(row: str) -> List[str]:
    """Split a table row on pipes, or on wide gaps for fixed-width tables"""
    row = row.strip()
    fields = [cell.strip() for cell in _CELL_SEPARATOR.split(row) if cell.strip()]
    if len(fields) < MIN_TABLE_FIELDS:
        fields = [cell.strip() for cell in _COLUMN_GAP.split(row) if cell.strip()]
    return fields


def parse_table_rows(rows: List[str]) -> List[ParsedItem]:
    items = []
    for row in rows:
        fields = split_row(row)
        if len(fields) < MIN_TABLE_FIELDS:
            continue
        items.append(ParsedItem(name=fields[0], quantity=fields[1], price=fields[2]))
    return items


def parse_line(line: str) -> ParsedItem:
    """Match 'name [xN] price'; lines that don't match keep their text as the name"""
    match = _ITEM_LINE.fullmatch(line)
    if match:
        return ParsedItem(name=match.group(1).strip(), price=match.group(3))
    return ParsedItem(name=line, price="")


def parse_receipt(text: str) -> ParseOutcome:
    """Parse receipt text, reporting which strategy produced the items"""
    lines = non_blank_lines(text)

    header_idx = find_header(lines)
    if header_idx is not None:
        items = parse_table_rows(lines[header_idx + 1:])
        if items:
            return StructuredParse(items=tuple(items))

    return FallbackParse(items=tuple(parse_line(line) for line in lines))


def parse_receipt_text(text: str) -> List[ParsedItem]:
    """Parsed items; may be empty, see items_or_placeholder"""
    return list(parse_receipt(text).items)


def items_or_placeholder(items) -> List[Item]:
    """Bill rows for parsed items, or one blank row when nothing was found"""
    rows = [item.to_item() if isinstance(item, ParsedItem) else item for item in items]
    return rows or [Item()]


class ReceiptParser:
    """Parses receipt text with an optional console trace"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.last_outcome: Optional[ParseOutcome] = None

    def parse(self, text: str) -> ParseOutcome:
        if self.debug:
            print("\n🔍 Starting receipt parsing...")
            print(f"Text length: {len(text) if isinstance(text, str) else 0} characters")

        outcome = parse_receipt(text)
        self.last_outcome = outcome

        if self.debug:
            lines = non_blank_lines(text)
            header_idx = find_header(lines)
            if header_idx is None:
                print("  ⚠ No table header found")
            else:
                print(f"  Header at line {header_idx + 1}: '{lines[header_idx].strip()}'")
            if outcome.strategy == FallbackParse.strategy and header_idx is not None:
                print("  💡 Table rows unusable, using line fallback")

            print(f"\n📊 Parsing Results ({outcome.strategy}):")
            print(f"  Items found: {len(outcome.items)}")
            for item in outcome.items:
                qty = f" x{item.quantity}" if item.quantity else ""
                print(f"    • {item.name}{qty}: {item.price or '?'}")

        return outcome
