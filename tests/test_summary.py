"""Tests for summary tables."""

from data_models import BillConfig, Item
from summary import (
    simple_summary, simple_summary_for, detailed_summary, detailed_summary_for, table_to_text,
    render_table,
)
from utils import format_currency


def test_simple_summary_labels_blank_diners():
    frame = simple_summary(["Alice", ""], [11.990000000000002, 0.0])

    assert list(frame.columns) == ["Diner", "Total"]
    assert list(frame["Diner"]) == ["Alice", "Diner #2"]
    assert list(frame["Total"]) == [format_currency(11.99), format_currency(0)]


def test_simple_summary_for_config():
    config = BillConfig(diners=("A", "B"), items=(Item("Pizza", 20, (0, 1)),),
                        service_multiplier=1.0, gst_percent=0)
    frame = simple_summary_for(config)
    assert list(frame["Total"]) == [format_currency(10), format_currency(10)]


def test_detailed_summary_rows():
    frame = detailed_summary(["A", "B"], [Item("Pizza", "30", (0, 1)), Item("", 8, (1,))], 1.1, 9)

    assert list(frame.columns) == ["Item", "A", "B"]
    rows = [list(row) for row in frame.itertuples(index=False, name=None)]
    assert rows == [
        ["Pizza", "15.00", "15.00"],
        ["Item #2", "", "8.00"],
        ["subtotal", "15.00", "23.00"],
        ["10% service charge", "1.50", "2.30"],
        ["9% GST", "1.4850", "2.2770"],
        ["total", "17.9850", "27.5770"],
    ]


def test_detailed_summary_for_unassigned_diner():
    config = BillConfig(diners=("A", "", "A"), items=(Item("Tea", "4", (0,)),),
                        service_multiplier=1.0, gst_percent=0)
    frame = detailed_summary_for(config)

    assert list(frame.columns) == ["Item", "A", "Diner #2", "A"]
    assert list(frame.iloc[-1]) == ["total", "4.0000", "", ""]
    assert frame.iloc[-3, 0] == "0% service charge"
    assert frame.iloc[-2, 0] == "0% GST"


def test_table_to_text():
    frame = simple_summary(["Alice", "Bob"], [5, 7.5])
    assert table_to_text(frame) == (
        f"Diner\tTotal\nAlice\t{format_currency(5)}\nBob\t{format_currency(7.5)}"
    )


def test_render_table_includes_every_diner():
    text = render_table(simple_summary(["Alice", ""], [1, 2]))
    assert "Alice" in text
    assert "Diner #2" in text
