"""
CLI Interface module for Bill Splitter
Command-line interface for entering a bill, reading receipts and splitting the cost
"""

import json
from dataclasses import asdict
from datetime import datetime

import bill_editor
from bill_splitter import totals_for, breakdown_for
from data_models import BillConfig
from pipeline import ReceiptPipeline, PipelineResult
from summary import simple_summary_for, detailed_summary_for, table_to_text, render_table
from utils import (
    validate_image_path, validate_menu_choice, try_parse_int, parse_index_list,
    diner_label, item_label, format_percent, clean_text_for_display,
)


class BillSplitterCLI:
    """Command-line interface for Bill Splitter"""

    def __init__(self, pipeline: ReceiptPipeline = None, config: BillConfig = None):
        self.config = config or bill_editor.new_bill()
        self.pipeline = pipeline or ReceiptPipeline()
        self.show_detailed = False
        self.last_result = None

    def display_banner(self):
        print("\n" + "="*60)
        print("🍽️  BILL SPLITTER")
        print("Split bills by receipt photo or manual entry")
        print("="*60)

    def _pick(self, prompt: str, count: int):
        """1-based number from the person, as a 0-based index or None"""
        number = try_parse_int(input(prompt))
        if number is None or not 1 <= number <= count:
            print("Invalid selection")
            return None
        return number - 1

    def process_receipt(self, image_path: str):
        """Read a receipt photo and seed the bill's items from it"""
        print(f"\n📸 Processing receipt: {image_path}")
        result = self.pipeline.process_image(image_path, self.config)
        self._apply_result(result)

    def process_text(self, text: str, clean: bool = None):
        result = self.pipeline.process_text(text, self.config, clean)
        self._apply_result(result)

    def _apply_result(self, result: PipelineResult):
        self.last_result = result
        if result.ocr is not None:
            print("\n" + "-"*50)
            print("OCR RESULT")
            print("-"*50)
            print(result.ocr.text)
        if result.error:
            print(f"\n⚠ {result.error}")
            return
        if result.cleanup is not None:
            print("\n" + "-"*50)
            print("CLEANED BILL ITEMS")
            print("-"*50)
            print(result.cleanup.text)

        self.config = result.config
        print(f"\n✓ Loaded {len(self.config.items)} item(s) ({result.outcome.strategy} parse)")
        self.display_items()

    def display_items(self):
        print("\n" + "="*50)
        print("📋 BILL ITEMS")
        print("="*50)
        for i, item in enumerate(self.config.items):
            sharers = ', '.join(diner_label(self.config.diners[d], d)
                                for d in item.shared_by if 0 <= d < len(self.config.diners))
            print(f"{i + 1:2}. {clean_text_for_display(item_label(item.name, i), 30):30} "
                  f"{str(item.price):>8} [{sharers or 'Unassigned'}]")

    def manage_diners(self):
        print("\n" + "="*50)
        print("👥 DINERS")
        print("="*50)

        while True:
            labels = [diner_label(d, i) for i, d in enumerate(self.config.diners)]
            print(f"\nCurrent diners: {', '.join(labels)}")
            print("\n1. Add diner")
            print("2. Rename diner")
            print("3. Remove diner")
            print("4. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3', '4']) or ''
            print("-"*50)

            if choice == '1':
                name = input("Enter name (blank for a numbered diner): ").strip()
                self.config = bill_editor.add_diner(self.config, name)
                print(f"✓ Added {diner_label(name, len(self.config.diners) - 1)}")
            elif choice == '2':
                idx = self._pick("Diner number: ", len(self.config.diners))
                if idx is not None:
                    self.config = bill_editor.rename_diner(self.config, idx, input("New name: ").strip())
            elif choice == '3':
                if len(self.config.diners) <= 1:
                    print("⚠ A bill needs at least one diner")
                    continue
                idx = self._pick("Diner number to remove: ", len(self.config.diners))
                if idx is not None:
                    removed = diner_label(self.config.diners[idx], idx)
                    self.config = bill_editor.remove_diner(self.config, idx)
                    print(f"✓ Removed {removed}")
            elif choice == '4':
                break

    def manage_items(self):
        while True:
            self.display_items()
            print("\n1. Add item")
            print("2. Edit item")
            print("3. Remove item")
            print("4. Done")

            choice = validate_menu_choice(input("\nChoice: "), ['1', '2', '3', '4']) or ''
            print("-"*50)

            if choice == '1':
                name = input("Item name: ").strip()
                price = input("Price: ").strip()
                self.config = bill_editor.add_item(self.config)
                self.config = bill_editor.update_item(self.config, len(self.config.items) - 1,
                                                      name=name, price=price)
            elif choice == '2':
                idx = self._pick("Item number: ", len(self.config.items))
                if idx is None:
                    continue
                item = self.config.items[idx]
                name = input(f"Item name [{item.name}]: ").strip() or item.name
                price = input(f"Price [{item.price}]: ").strip() or item.price
                self.config = bill_editor.update_item(self.config, idx, name=name, price=price)
            elif choice == '3':
                if len(self.config.items) <= 1:
                    print("⚠ A bill needs at least one item")
                    continue
                idx = self._pick("Item number to remove: ", len(self.config.items))
                if idx is not None:
                    self.config = bill_editor.remove_item(self.config, idx)
            elif choice == '4':
                break

    def assign_items(self):
        print("\n" + "="*50)
        print("🔍 ITEM ASSIGNMENT")
        print("="*50)

        for idx, item in enumerate(self.config.items):
            print(f"\n{item_label(item.name, idx)} - {item.price}")
            sharers = [diner_label(self.config.diners[d], d) for d in item.shared_by
                       if 0 <= d < len(self.config.diners)]
            print(f"Shared by: {', '.join(sharers) if sharers else 'None'}")

            print("\n1. Everyone")
            print("2. Specific diners")
            print("3. Toggle one diner")
            print("4. Skip")

            choice = validate_menu_choice(input("Choice: "), ['1', '2', '3', '4']) or ''
            print("-"*50)

            if choice == '1':
                self.config = bill_editor.share_with_everyone(self.config, idx)
                print("✓ Shared by everyone")
            elif choice == '2':
                for i, diner in enumerate(self.config.diners, 1):
                    print(f"{i}. {diner_label(diner, i - 1)}")
                selections = input("Enter diner numbers (comma-separated): ")
                indices = parse_index_list(selections, len(self.config.diners))
                self.config = bill_editor.set_sharers(self.config, idx, indices)
                print(f"✓ Shared by {len(indices)} diner(s)")
            elif choice == '3':
                diner_idx = self._pick("Diner number: ", len(self.config.diners))
                if diner_idx is not None:
                    self.config = bill_editor.toggle_sharer(self.config, idx, diner_idx)

    def set_charges(self):
        current = self.config
        value = input(f"\nService charge multiplier, e.g. 1.1 for 10% [{current.service_multiplier:g}]: ").strip()
        if value:
            self.config = bill_editor.set_service_multiplier(self.config, value)
        value = input(f"GST percent, e.g. 9 for 9% [{format_percent(current.gst_percent)}]: ").strip()
        if value:
            self.config = bill_editor.set_gst_percent(self.config, value)
        print(f"✓ Service x{self.config.service_multiplier:g}, GST {format_percent(self.config.gst_percent)}%")

    def current_summary(self):
        if self.show_detailed:
            return detailed_summary_for(self.config)
        return simple_summary_for(self.config)

    def display_summary(self):
        print("\n" + "="*50)
        print("💰 DETAILED SUMMARY" if self.show_detailed else "💰 SUMMARY")
        print("="*50)
        print(render_table(self.current_summary()))

        unshared = [i for i, item in enumerate(self.config.items) if not item.shared_by]
        if unshared:
            print(f"\n⚠ {len(unshared)} item(s) have no diners and are not counted")

    def copy_summary(self):
        print("\n" + table_to_text(self.current_summary()))

    def export_results(self):
        """Export the bill, totals and breakdown to JSON"""
        filename = f"bill_split_{datetime.now().strftime('%Y%m%d_%H%M%S')}.json"
        totals = totals_for(self.config)

        data = {
            'export_info': {
                'timestamp': datetime.now().isoformat(),
                'version': '1.0'
            },
            'bill': asdict(self.config),
            'totals': [
                {'diner': diner_label(d, i), 'total': round(totals[i], 2)}
                for i, d in enumerate(self.config.diners)
            ],
            'breakdown': asdict(breakdown_for(self.config)),
        }
        if self.last_result is not None and self.last_result.outcome is not None:
            data['parse_strategy'] = self.last_result.outcome.strategy

        try:
            with open(filename, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2, ensure_ascii=False)
            print(f"\n✅ Bill exported to {filename}")
        except OSError as e:
            print(f"\nExport failed: {e}")
        return filename

    def run(self):
        self.display_banner()

        while True:
            print("\n" + "="*50)
            print("MAIN MENU")
            print("="*50)
            print("1. Process receipt image")
            print("2. Paste receipt text")
            print("3. Manage diners")
            print("4. Manage items")
            print("5. Assign items to diners")
            print("6. Service charge & GST")
            print("7. Show summary")
            print("8. Toggle simple/detailed summary")
            print("9. Copy summary")
            print("10. Export results")
            print("11. Exit")

            choice = input("\nChoice: ").strip()

            if choice == '1':
                image_path = input("Enter image path: ").strip()
                if validate_image_path(image_path):
                    self.process_receipt(image_path)
                else:
                    print("⚠ Invalid or unsupported image")
            elif choice == '2':
                print("Paste receipt text, finish with an empty line:")
                lines = []
                while True:
                    line = input()
                    if not line:
                        break
                    lines.append(line)
                self.process_text('\n'.join(lines))
            elif choice == '3':
                self.manage_diners()
            elif choice == '4':
                self.manage_items()
            elif choice == '5':
                self.assign_items()
            elif choice == '6':
                self.set_charges()
            elif choice == '7':
                self.display_summary()
            elif choice == '8':
                self.show_detailed = not self.show_detailed
                self.display_summary()
            elif choice == '9':
                self.copy_summary()
            elif choice == '10':
                self.export_results()
            elif choice == '11':
                print("\n👋 Thanks for using Bill Splitter!")
                break
