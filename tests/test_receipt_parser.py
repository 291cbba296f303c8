"""Tests for receipt text parsing."""

from data_models import Item, ParsedItem, StructuredParse, FallbackParse
from receipt_parser import (
    parse_receipt, parse_receipt_text, items_or_placeholder, split_row, find_header, ReceiptParser,
)


def test_pipe_table_after_header():
    text = "name | price\nBurger | 1 | 5.00\nFries | 1 | 2.50"
    outcome = parse_receipt(text)

    assert isinstance(outcome, StructuredParse)
    assert outcome.strategy == "structured"
    assert list(outcome.items) == [
        ParsedItem(name="Burger", quantity="1", price="5.00"),
        ParsedItem(name="Fries", quantity="1", price="2.50"),
    ]


def test_fallback_without_header():
    outcome = parse_receipt("Burger x2 5.00\nplain text line")

    assert isinstance(outcome, FallbackParse)
    assert outcome.strategy == "fallback"
    assert list(outcome.items) == [
        ParsedItem(name="Burger", price="5.00"),
        ParsedItem(name="plain text line", price=""),
    ]
    assert outcome.items[0].quantity is None


def test_markdown_table_with_outer_pipes():
    text = "| Name | Quantity | Price |\n| Chicken Rice | 2 | 10.00 |"
    assert parse_receipt_text(text) == [ParsedItem(name="Chicken Rice", quantity="2", price="10.00")]


def test_fixed_width_table():
    text = "Name    Qty    Price\nChicken Rice    1    5.50\nIced Tea  2  3.00"
    assert parse_receipt_text(text) == [
        ParsedItem(name="Chicken Rice", quantity="1", price="5.50"),
        ParsedItem(name="Iced Tea", quantity="2", price="3.00"),
    ]


def test_lines_before_header_are_ignored():
    text = "Joe's Diner\n12/03 19:40\nname | qty | price\nTea | 1 | 2.00"
    assert parse_receipt_text(text) == [ParsedItem(name="Tea", quantity="1", price="2.00")]


def test_short_rows_are_dropped():
    text = "name|price\nBurger|5.00\nFries|1|2.50"
    assert parse_receipt_text(text) == [ParsedItem(name="Fries", quantity="1", price="2.50")]


def test_extra_columns_are_ignored():
    text = "name | qty | price | notes\nBurger | 1 | 5.00 | no onions"
    assert parse_receipt_text(text) == [ParsedItem(name="Burger", quantity="1", price="5.00")]


def test_unusable_table_falls_back_to_every_line():
    outcome = parse_receipt("name price\nBurger 5.00")

    assert isinstance(outcome, FallbackParse)
    assert list(outcome.items) == [
        ParsedItem(name="name price", price=""),
        ParsedItem(name="Burger", price="5.00"),
    ]


def test_fallback_keeps_one_item_per_nonblank_line():
    text = "Coke 1.50\n\n   \nSpecial of the day\nNoodles x3 21.00\n"
    items = parse_receipt_text(text)

    assert len(items) == 3
    assert [item.name for item in items] == ["Coke", "Special of the day", "Noodles"]
    assert [item.price for item in items] == ["1.50", "", "21.00"]


def test_header_detection_is_case_insensitive():
    lines = ["Receipt", "ITEM NAME | QTY | UNIT PRICE", "Tea | 1 | 2"]
    assert find_header(lines) == 1
    assert find_header(["Burger 5.00"]) is None


def test_split_row():
    assert split_row(" Burger | 1 | 5.00 ") == ["Burger", "1", "5.00"]
    assert split_row("Iced Tea   2   3.00") == ["Iced Tea", "2", "3.00"]
    assert split_row("Burger 5.00") == ["Burger 5.00"]


def test_empty_text_gives_no_items():
    assert parse_receipt_text("") == []
    assert parse_receipt_text("   \n\n") == []
    assert parse_receipt(None) == FallbackParse(items=())


def test_placeholder_when_nothing_parsed():
    assert items_or_placeholder(parse_receipt_text("")) == [Item()]


def test_placeholder_not_added_when_items_exist():
    rows = items_or_placeholder(parse_receipt_text("Burger 5.00"))
    assert rows == [Item(name="Burger", price="5.00")]
    assert rows[0].shared_by == ()


def test_parsed_items_start_unshared():
    for item in parse_receipt_text("name | qty | price\nTea | 1 | 2.00"):
        assert item.shared_by == ()


def test_receipt_parser_trace(capsys):
    parser = ReceiptParser(debug=True)
    outcome = parser.parse("name | qty | price\nTea | 1 | 2.00\nCake | 2 | 9.00")

    out = capsys.readouterr().out
    assert "Items found: 2" in out
    assert "structured" in out
    assert parser.last_outcome is outcome


def test_receipt_parser_quiet_by_default(capsys):
    ReceiptParser().parse("Tea 2.00")
    assert capsys.readouterr().out == ""


def test_fallback_matches_the_line_as_written():
    items = parse_receipt_text("  Tea 2.00\nCoke 1.50 \n  Special of the day")

    assert items == [
        ParsedItem(name="Tea", price="2.00"),
        ParsedItem(name="Coke 1.50 ", price=""),
        ParsedItem(name="  Special of the day", price=""),
    ]
