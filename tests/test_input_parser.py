import unittest

import pytest

from services import input_parser
from services.catalog import Item
from services.input_parser import InventoryMarker, OtherLine, StackRequest
from services.request_processor import process_inventory_requests


class ReadItemsTests(unittest.TestCase):
    def test_reads_items_in_order_with_multi_word_names(self):
        catalog = input_parser.read_items(
            ["0 Air\n", "1 HP Potion\n", "\n", "// weapons\n", "2   Iron   Sword  \n"]
        )

        self.assertEqual(
            list(catalog),
            [Item(0, "Air"), Item(1, "HP Potion"), Item(2, "Iron Sword")],
        )

    def test_malformed_item_line_names_line_number(self):
        with self.assertRaises(ValueError) as ctx:
            input_parser.read_items(["1 Torch", "two Rope"])
        self.assertIn("Line 2", str(ctx.exception))

    def test_item_without_name_is_rejected(self):
        with self.assertRaises(ValueError):
            input_parser.read_items(["7"])

    def test_duplicate_ids_are_kept_and_logged(self):
        with self.assertLogs("services.input_parser", level="WARNING") as captured:
            catalog = input_parser.read_items(["1 Torch", "1 Lantern"])

        self.assertEqual(len(catalog), 2)
        self.assertEqual(catalog.find(1).name, "Torch")
        self.assertIn("Duplicate item ids [1]", captured.output[0])


class ReadInventoryLinesTests(unittest.TestCase):
    def test_classifies_markers_requests_and_other_lines(self):
        lines = input_parser.read_inventory_lines(
            ["Inventories\n", "# 5\n", "- 1 3\n", "\n", "#10\n", "-2 4\n"]
        )

        self.assertEqual(
            lines,
            [
                OtherLine("Inventories"),
                InventoryMarker(5),
                StackRequest(1, 3),
                OtherLine(""),
                InventoryMarker(10),
                StackRequest(2, 4),
            ],
        )

    def test_negative_capacity_is_passed_through(self):
        self.assertEqual(input_parser.read_inventory_lines(["# -4"]), [InventoryMarker(-4)])

    def test_malformed_marker_raises(self):
        with self.assertRaises(ValueError) as ctx:
            input_parser.read_inventory_lines(["# 5", "# big"])
        self.assertIn("Line 2", str(ctx.exception))

    def test_malformed_stack_request_raises(self):
        with self.assertRaises(ValueError):
            input_parser.read_inventory_lines(["- 1"])
        with self.assertRaises(ValueError):
            input_parser.read_inventory_lines(["- 1 -3"])


def test_read_from_file_applies_reader(tmp_path):
    items_path = tmp_path / "items.txt"
    items_path.write_text("1 Torch\n2 Rope\n", encoding="utf-8")

    catalog = input_parser.read_from_file(items_path, input_parser.read_items)

    assert [item.name for item in catalog] == ["Torch", "Rope"]


def test_read_from_file_propagates_missing_file(tmp_path):
    with pytest.raises(OSError):
        input_parser.read_from_file(tmp_path / "missing.txt", input_parser.read_items)


def test_read_from_file_ignores_byte_order_mark(tmp_path):
    inventories_path = tmp_path / "inventories.txt"
    inventories_path.write_text("\ufeff# 5\n- 1 3\n", encoding="utf-8")
    items_path = tmp_path / "items.txt"
    items_path.write_text("\ufeff1 Torch\n", encoding="utf-8")

    lines = input_parser.read_from_file(inventories_path, input_parser.read_inventory_lines)
    catalog = input_parser.read_from_file(items_path, input_parser.read_items)

    assert lines == [InventoryMarker(5), StackRequest(1, 3)]
    results = process_inventory_requests(lines, catalog)
    assert len(results) == 1
    assert results[0][0] == ["Stored    ( 3) Torch"]


def test_read_from_text_ignores_byte_order_mark():
    lines = input_parser.read_from_text("\ufeff# 5\n- 1 3\n", input_parser.read_inventory_lines)
    assert lines == [InventoryMarker(5), StackRequest(1, 3)]


def test_read_from_text_splits_lines():
    lines = input_parser.read_from_text("# 3\r\n- 1 1\r\n", input_parser.read_inventory_lines)
    assert lines == [InventoryMarker(3), StackRequest(1, 1)]


if __name__ == "__main__":
    unittest.main()
