"""
Data models for Bill Splitter - diners, bill items and receipt parsing results
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple, Union

from config import DEFAULT_SERVICE_MULTIPLIER, DEFAULT_GST_PERCENT
from constants import OCR_FAILED_MESSAGE


@dataclass(frozen=True)
class Item:
    """A single bill row; price is the whole item's base cost"""
    name: str = ""
    price: Union[str, float] = ""
    shared_by: Tuple[int, ...] = ()

    def __post_init__(self):
        # ordered set: keep first occurrence of each index
        object.__setattr__(self, 'shared_by', tuple(dict.fromkeys(self.shared_by)))


@dataclass(frozen=True)
class BillConfig:
    """Snapshot of a bill; every edit produces a new one"""
    diners: Tuple[str, ...] = ("",)
    items: Tuple[Item, ...] = (Item(),)
    service_multiplier: float = DEFAULT_SERVICE_MULTIPLIER
    gst_percent: float = DEFAULT_GST_PERCENT

    def __post_init__(self):
        object.__setattr__(self, 'diners', tuple(self.diners))
        object.__setattr__(self, 'items', tuple(self.items))


@dataclass(frozen=True)
class ParsedItem:
    """Item recovered from receipt text, before anyone is assigned to it"""
    name: str
    price: str = ""
    quantity: Optional[str] = None
    shared_by: Tuple[int, ...] = ()

    def to_item(self) -> Item:
        return Item(name=self.name, price=self.price)


@dataclass(frozen=True)
class ParseOutcome:
    """Items plus the strategy that produced them"""
    items: Tuple[ParsedItem, ...] = ()
    strategy = "unknown"


@dataclass(frozen=True)
class StructuredParse(ParseOutcome):
    strategy = "structured"


@dataclass(frozen=True)
class FallbackParse(ParseOutcome):
    strategy = "fallback"


@dataclass
class Breakdown:
    """Itemized split; per_item_shares[diner][item] holds base cost only"""
    per_item_shares: List[List[float]] = field(default_factory=list)
    subtotal: List[float] = field(default_factory=list)
    service_charge: List[float] = field(default_factory=list)
    gst: List[float] = field(default_factory=list)
    grand_total: List[float] = field(default_factory=list)


@dataclass(frozen=True)
class BoundingBox:
    """Receipt location in pixel coordinates"""
    x: int
    y: int
    width: int
    height: int
    confidence: float = 0.0

    @property
    def box(self) -> Tuple[int, int, int, int]:
        """PIL crop box (left, upper, right, lower)"""
        return (self.x, self.y, self.x + self.width, self.y + self.height)


@dataclass(frozen=True)
class OcrResult:
    text: str
    ok: bool = True


OCR_FAILED = OcrResult(text=OCR_FAILED_MESSAGE, ok=False)


@dataclass(frozen=True)
class CleanupResult:
    text: str


@dataclass(frozen=True)
class CleanupError:
    message: str


@dataclass
class ProcessingMetrics:
    """Metrics for receipt image processing"""
    workers_used: int = 0
    processing_time: float = 0.0
    regions_processed: int = 0
    detection_confidence: Optional[float] = None
    text_length: int = 0
