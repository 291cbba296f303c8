"""
Bill Splitter module
Prorates item costs, service charge and GST across diners
"""

import math
import re
from typing import List, Sequence, Tuple

from data_models import BillConfig, Breakdown, Item
from constants import PATTERNS

_NUMERIC_PREFIX = re.compile(PATTERNS['numeric_prefix'])


def parse_number(value, default: float = 0.0) -> float:
    """Read a number the way the bill form does; anything unreadable is the default"""
    if isinstance(value, bool):
        return default
    if isinstance(value, (int, float)):
        number = float(value)
    elif isinstance(value, str):
        match = _NUMERIC_PREFIX.match(value)
        if not match:
            return default
        number = float(match.group(0))
    else:
        return default

    if math.isnan(number) or math.isinf(number):
        return default
    return number


def parse_price(value) -> float:
    """Blank or garbage prices count as 0"""
    return parse_number(value, 0.0)


def _sharers(item: Item, diner_count: int) -> Tuple[int, ...]:
    """Sharer indices that point at an existing diner"""
    return tuple(
        idx for idx in item.shared_by
        if isinstance(idx, int) and not isinstance(idx, bool) and 0 <= idx < diner_count
    )


def item_total(price: float, service_multiplier: float, gst_percent: float) -> float:
    """Item cost with service charge, then GST on top of the service charge"""
    service_charge = price * (service_multiplier - 1)
    subtotal = price + service_charge
    gst = subtotal * (gst_percent / 100)
    return subtotal + gst


def compute_totals(diners: Sequence[str], items: Sequence[Item],
                   service_multiplier: float, gst_percent: float) -> List[float]:
    """How much each diner owes, aligned with the diners sequence"""
    service_multiplier = parse_number(service_multiplier, 1.0)
    gst_percent = parse_number(gst_percent, 0.0)
    totals = [0.0] * len(diners)

    for item in items:
        sharers = _sharers(item, len(diners))
        if not sharers:
            continue

        total = item_total(parse_price(item.price), service_multiplier, gst_percent)
        share = total / len(sharers)
        for idx in sharers:
            totals[idx] += share

    return totals


def compute_breakdown(diners: Sequence[str], items: Sequence[Item],
                      service_multiplier: float, gst_percent: float) -> Breakdown:
    """Per-diner, per-item base shares with charges worked out on each subtotal"""
    service_multiplier = parse_number(service_multiplier, 1.0)
    gst_percent = parse_number(gst_percent, 0.0)
    shares = [[0.0] * len(items) for _ in diners]

    for item_idx, item in enumerate(items):
        sharers = _sharers(item, len(diners))
        if not sharers:
            continue

        share = parse_price(item.price) / len(sharers)
        for idx in sharers:
            shares[idx][item_idx] = share

    subtotals = [sum(row) for row in shares]
    service_charges = [st * (service_multiplier - 1) for st in subtotals]
    gst_charges = [(st + sc) * (gst_percent / 100) for st, sc in zip(subtotals, service_charges)]
    grand_totals = [st + sc + gst for st, sc, gst in zip(subtotals, service_charges, gst_charges)]

    return Breakdown(
        per_item_shares=shares,
        subtotal=subtotals,
        service_charge=service_charges,
        gst=gst_charges,
        grand_total=grand_totals
    )


def totals_for(config: BillConfig) -> List[float]:
    return compute_totals(config.diners, config.items, config.service_multiplier, config.gst_percent)


def breakdown_for(config: BillConfig) -> Breakdown:
    return compute_breakdown(config.diners, config.items, config.service_multiplier, config.gst_percent)
