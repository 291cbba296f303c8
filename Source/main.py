"""
Bill Splitter - split a shared bill by receipt photo or manual entry

python3 main.py                          # Interactive CLI mode
python3 main.py receipt.jpg              # Process image and start CLI
python3 main.py receipt.jpg --quick      # Quick mode - just show the items found
python3 main.py --help                   # Show help
"""

import os
import sys
import argparse

import bill_editor
from cli_interface import BillSplitterCLI
from config import (
    DEFAULT_SERVICE_MULTIPLIER, DEFAULT_GST_PERCENT, DEFAULT_MAX_WORKERS, WORKERS_MIN, WORKERS_MAX,
)
from ocr_processor import ReceiptOCRProcessor
from pipeline import ReceiptPipeline


def quick_process(image_path: str, pipeline: ReceiptPipeline, config) -> int:
    """Quick processing mode - just show results"""
    print(f"🚀 Quick processing: {image_path}")

    result = pipeline.process_image(image_path, config)
    if result.error:
        print(f"\n⚠ {result.error}")
        return 1

    items = result.outcome.items
    if items:
        print(f"\n📋 Found {len(items)} items ({result.outcome.strategy} parse):")
        for i, item in enumerate(items, 1):
            qty = f"x{item.quantity}" if item.quantity else ""
            print(f"  {i:2}. {item.name[:40]:40} {qty:>4} {item.price:>8}")

        m = pipeline.processor.metrics
        print(f"\n⚡ Processed in {m.processing_time:.2f}s using {m.workers_used} worker(s)")
        if m.detection_confidence is not None:
            print(f"   Receipt detected (confidence {m.detection_confidence:.2f})")
    else:
        print("\n⚠ No items found in receipt")
        print("Try:")
        print("  • Better image quality/lighting")
        print("  • Cropping closer to the items")
        print("  • Manual item entry in interactive mode")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Bill Splitter - split a shared bill between diners',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python main.py                      # Interactive mode
  python main.py receipt.jpg          # Process image then interactive
  python main.py receipt.jpg --quick  # Quick mode - show items only
  python main.py --gst 8 --service 1  # 8% GST, no service charge
        """
    )

    parser.add_argument('image', nargs='?', help='Receipt image to process')
    parser.add_argument('--workers', type=int, default=DEFAULT_MAX_WORKERS,
                        help=f'Number of parallel OCR workers (default: {DEFAULT_MAX_WORKERS})')
    parser.add_argument('--service', type=float, default=DEFAULT_SERVICE_MULTIPLIER,
                        help=f'Service charge multiplier (default: {DEFAULT_SERVICE_MULTIPLIER:g})')
    parser.add_argument('--gst', type=float, default=DEFAULT_GST_PERCENT,
                        help=f'GST percent (default: {DEFAULT_GST_PERCENT:g})')
    parser.add_argument('--no-cleanup', action='store_true',
                        help='Parse raw OCR text without the LLM cleanup pass')
    parser.add_argument('--no-crop', action='store_true',
                        help='Skip automatic receipt detection and cropping')
    parser.add_argument('--debug', action='store_true', help='Print parser trace')
    parser.add_argument('--quick', action='store_true',
                        help='Quick mode - process image and show results only')
    parser.add_argument('--version', action='version', version='Bill Splitter 1.0')
    return parser


def run(argv=None):
    """Parse arguments, seed the bill and start the menu"""
    args = build_parser().parse_args(argv)

    if args.workers < WORKERS_MIN or args.workers > WORKERS_MAX:
        print(f"⚠ Workers must be between {WORKERS_MIN} and {WORKERS_MAX}")
        args.workers = max(WORKERS_MIN, min(WORKERS_MAX, args.workers))

    config = bill_editor.new_bill()
    config = bill_editor.set_service_multiplier(config, args.service)
    config = bill_editor.set_gst_percent(config, args.gst)

    pipeline = ReceiptPipeline(
        processor=ReceiptOCRProcessor(num_workers=args.workers),
        use_cleanup=not args.no_cleanup,
        auto_crop=not args.no_crop,
        debug=args.debug
    )

    if args.quick and args.image:
        if not os.path.exists(args.image):
            print(f"❌ File not found: {args.image}")
            sys.exit(1)
        sys.exit(quick_process(args.image, pipeline, config))

    cli = BillSplitterCLI(pipeline=pipeline, config=config)

    if args.image:
        if os.path.exists(args.image):
            cli.process_receipt(args.image)
        else:
            print(f"⚠ File not found: {args.image}")

    cli.run()


def main(argv=None):
    """Main entry point"""
    try:
        run(argv)
    except KeyboardInterrupt:
        print("\n\n👋 Goodbye!")
        sys.exit(0)
    except Exception as e:
        print(f"\n❌ An error occurred: {e}")
        import traceback
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
