"""Tests for the receipt pipeline with stand-in providers."""

import bill_editor
from data_models import BoundingBox, OCR_FAILED, CleanupError, ParsedItem, Item
from fakes import make_pipeline, save_photo


def test_image_to_seeded_bill(tmp_path):
    pipeline = make_pipeline(box=BoundingBox(x=10, y=20, width=100, height=150, confidence=0.9))
    result = pipeline.process_image(save_photo(tmp_path), bill_editor.new_bill())

    assert result.error is None
    assert pipeline.processor.images[0].size == (100, 150)
    assert pipeline.processor.metrics.detection_confidence == 0.9
    assert pipeline.cleanup.texts == ["Burger x2 5.00"]
    assert result.outcome.strategy == "structured"
    assert result.config.items == (Item("Burger", "5.00"),)


def test_without_cleanup_raw_text_is_parsed(tmp_path):
    pipeline = make_pipeline(use_cleanup=False)
    result = pipeline.process_image(save_photo(tmp_path), bill_editor.new_bill())

    assert pipeline.cleanup.texts == []
    assert result.outcome.strategy == "fallback"
    assert list(result.outcome.items) == [ParsedItem(name="Burger", price="5.00")]


def test_no_detection_reads_whole_image(tmp_path):
    pipeline = make_pipeline()
    pipeline.process_image(save_photo(tmp_path), bill_editor.new_bill())
    assert pipeline.processor.images[0].size == (200, 300)


def test_ocr_failure_stops_before_cleanup(tmp_path):
    pipeline = make_pipeline(ocr=OCR_FAILED)
    bill = bill_editor.new_bill()
    result = pipeline.process_image(save_photo(tmp_path), bill)

    assert result.error == "OCR failed. Please try again."
    assert pipeline.cleanup.texts == []
    assert result.outcome is None
    assert result.config is bill


def test_cleanup_error_leaves_bill_untouched():
    pipeline = make_pipeline(cleanup=CleanupError(message="OpenAI error: quota"))
    bill = bill_editor.new_bill()
    result = pipeline.process_text("Burger 5.00", bill)

    assert result.error == "OpenAI error: quota"
    assert result.outcome is None
    assert result.config is bill


def test_unreadable_image(tmp_path):
    path = tmp_path / "broken.png"
    path.write_bytes(b"not an image")

    result = make_pipeline().process_image(str(path), bill_editor.new_bill())
    assert result.error.startswith("Could not open image")


def test_empty_text_still_gives_one_row():
    result = make_pipeline().process_text("", bill_editor.new_bill(), clean=False)

    assert result.outcome.items == ()
    assert result.config.items == (Item(),)


def test_debug_traces_stages_and_parser(tmp_path, capsys):
    pipeline = make_pipeline(debug=True)
    pipeline.process_image(save_photo(tmp_path), bill_editor.new_bill())

    out = capsys.readouterr().out
    assert pipeline.parser.debug
    assert "[pipeline] receipt box: None" in out
    assert "[pipeline] cleanup returned CleanupResult" in out
    assert "Items found: 1" in out


def test_quiet_without_debug(capsys):
    make_pipeline().process_text("Tea 2.00", bill_editor.new_bill(), clean=False)
    assert capsys.readouterr().out == ""
