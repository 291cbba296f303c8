"""
Bill editing operations for Bill Splitter
Every edit returns a new BillConfig; nothing is changed in place
"""

from dataclasses import replace
from typing import Iterable

from data_models import BillConfig, Item, ParsedItem
from bill_splitter import parse_number
from receipt_parser import items_or_placeholder
from config import DEFAULT_SERVICE_MULTIPLIER, DEFAULT_GST_PERCENT


def new_bill() -> BillConfig:
    """One blank diner and one blank item, with the default charges"""
    return BillConfig(
        diners=("",),
        items=(Item(),),
        service_multiplier=DEFAULT_SERVICE_MULTIPLIER,
        gst_percent=DEFAULT_GST_PERCENT
    )


def add_diner(config: BillConfig, name: str = "") -> BillConfig:
    return replace(config, diners=config.diners + (name,))


def rename_diner(config: BillConfig, idx: int, name: str) -> BillConfig:
    if not 0 <= idx < len(config.diners):
        return config
    diners = list(config.diners)
    diners[idx] = name
    return replace(config, diners=tuple(diners))


def remove_diner(config: BillConfig, idx: int) -> BillConfig:
    """Drop a diner and shift sharer indices above it down by one"""
    if len(config.diners) <= 1 or not 0 <= idx < len(config.diners):
        return config

    diners = config.diners[:idx] + config.diners[idx + 1:]
    items = tuple(
        replace(item, shared_by=tuple(
            d if d < idx else d - 1 for d in item.shared_by if d != idx
        ))
        for item in config.items
    )
    return replace(config, diners=diners, items=items)


def add_item(config: BillConfig, item: Item = None) -> BillConfig:
    return replace(config, items=config.items + (item or Item(),))


def update_item(config: BillConfig, idx: int, **changes) -> BillConfig:
    """Replace fields (name, price, shared_by) of one item"""
    if not 0 <= idx < len(config.items):
        return config
    items = list(config.items)
    items[idx] = replace(items[idx], **changes)
    return replace(config, items=tuple(items))


def remove_item(config: BillConfig, idx: int) -> BillConfig:
    if len(config.items) <= 1 or not 0 <= idx < len(config.items):
        return config
    return replace(config, items=config.items[:idx] + config.items[idx + 1:])


def toggle_sharer(config: BillConfig, item_idx: int, diner_idx: int) -> BillConfig:
    """Add the diner to the item's sharers, or take them off if already there"""
    if not 0 <= item_idx < len(config.items) or not 0 <= diner_idx < len(config.diners):
        return config

    shared = config.items[item_idx].shared_by
    if diner_idx in shared:
        shared = tuple(d for d in shared if d != diner_idx)
    else:
        shared = shared + (diner_idx,)
    return update_item(config, item_idx, shared_by=shared)


def set_sharers(config: BillConfig, item_idx: int, diner_indices: Iterable[int]) -> BillConfig:
    valid = tuple(d for d in diner_indices if 0 <= d < len(config.diners))
    return update_item(config, item_idx, shared_by=valid)


def share_with_everyone(config: BillConfig, item_idx: int) -> BillConfig:
    return set_sharers(config, item_idx, range(len(config.diners)))


def set_service_multiplier(config: BillConfig, value) -> BillConfig:
    """Form input; unreadable or zero means no service charge"""
    return replace(config, service_multiplier=parse_number(value, 1.0) or 1.0)


def set_gst_percent(config: BillConfig, value) -> BillConfig:
    return replace(config, gst_percent=parse_number(value, 0.0))


def seed_items(config: BillConfig, parsed_items: Iterable[ParsedItem]) -> BillConfig:
    """Replace the bill's items with parsed ones, keeping at least one row"""
    return replace(config, items=tuple(items_or_placeholder(list(parsed_items))))
