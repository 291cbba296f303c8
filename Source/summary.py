"""
Summary tables for Bill Splitter
Simple (one total per diner) and detailed (item by diner) views
"""

from typing import Sequence

import pandas as pd

from data_models import BillConfig, Item
from bill_splitter import compute_totals, compute_breakdown, parse_number
from constants import DECIMAL_QUANTIZE_FINE
from utils import diner_label, item_label, format_amount, format_currency, format_percent


def simple_summary(diners: Sequence[str], totals: Sequence[float]) -> pd.DataFrame:
    rows = [
        {'Diner': diner_label(diner, idx), 'Total': format_currency(totals[idx])}
        for idx, diner in enumerate(diners)
    ]
    return pd.DataFrame(rows, columns=['Diner', 'Total'])


def detailed_summary(diners: Sequence[str], items: Sequence[Item],
                     service_multiplier: float, gst_percent: float) -> pd.DataFrame:
    """Base share of every item per diner, then the charges on each subtotal"""
    breakdown = compute_breakdown(diners, items, service_multiplier, gst_percent)
    columns = ['Item'] + [diner_label(diner, idx) for idx, diner in enumerate(diners)]

    rows = []
    for item_idx, item in enumerate(items):
        rows.append([item_label(item.name, item_idx)] + [
            format_amount(breakdown.per_item_shares[d][item_idx], blank_zero=True)
            for d in range(len(diners))
        ])

    service_label = f"{(parse_number(service_multiplier, 1.0) - 1) * 100:.0f}% service charge"
    gst_label = f"{format_percent(parse_number(gst_percent, 0.0))}% GST"

    rows.append(['subtotal'] + [format_amount(v, blank_zero=True) for v in breakdown.subtotal])
    rows.append([service_label] + [format_amount(v, blank_zero=True) for v in breakdown.service_charge])
    rows.append([gst_label] + [
        format_amount(v, DECIMAL_QUANTIZE_FINE, blank_zero=True) for v in breakdown.gst
    ])
    rows.append(['total'] + [
        format_amount(v, DECIMAL_QUANTIZE_FINE, blank_zero=True) for v in breakdown.grand_total
    ])

    # diner names can repeat, so build positionally
    frame = pd.DataFrame(rows)
    frame.columns = columns
    return frame


def simple_summary_for(config: BillConfig) -> pd.DataFrame:
    totals = compute_totals(config.diners, config.items, config.service_multiplier, config.gst_percent)
    return simple_summary(config.diners, totals)


def detailed_summary_for(config: BillConfig) -> pd.DataFrame:
    return detailed_summary(config.diners, config.items, config.service_multiplier, config.gst_percent)


def table_to_text(frame: pd.DataFrame) -> str:
    """Header plus rows, cells tab-separated, for pasting elsewhere"""
    lines = ['\t'.join(str(col).strip() for col in frame.columns)]
    for row in frame.itertuples(index=False, name=None):
        lines.append('\t'.join(str(cell).strip() for cell in row))
    return '\n'.join(lines)


def render_table(frame: pd.DataFrame) -> str:
    """Fixed-width rendering for the console"""
    if frame.empty and len(frame.columns) == 0:
        return ''
    return frame.to_string(index=False)
