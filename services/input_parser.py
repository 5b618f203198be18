import logging
import re
from dataclasses import dataclass
from typing import Union

from services.catalog import Catalog, Item

logger = logging.getLogger(__name__)

ITEM_LINE_PATTERN = re.compile(r"^(\d+)\s+(\S.*)$")
MARKER_LINE_PATTERN = re.compile(r"^#\s*(-?\d+)$")
STACK_LINE_PATTERN = re.compile(r"^-\s*(\d+)\s+(\d+)$")
COMMENT_PREFIX = "//"
BYTE_ORDER_MARK = "\ufeff"


@dataclass(frozen=True)
class InventoryMarker:
    capacity: int


@dataclass(frozen=True)
class StackRequest:
    item_id: int
    quantity: int


@dataclass(frozen=True)
class OtherLine:
    text: str = ""


ClassifiedLine = Union[InventoryMarker, StackRequest, OtherLine]


def _clean_value(value):
    if value is None:
        return ""
    return str(value).strip()


def parse_item_line(raw_line, line_number=None):
    text = _clean_value(raw_line)
    if not text or text.startswith(COMMENT_PREFIX):
        return None
    match = ITEM_LINE_PATTERN.match(text)
    if not match:
        raise ValueError(f"Line {line_number}: expected '<id> <name>', got {text!r}")
    name = " ".join(match.group(2).split())
    return Item(item_id=int(match.group(1)), name=name)


def classify_inventory_line(raw_line, line_number=None):
    text = _clean_value(raw_line)
    if text.startswith("#"):
        match = MARKER_LINE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Line {line_number}: expected '# <capacity>', got {text!r}"
            )
        return InventoryMarker(capacity=int(match.group(1)))
    if text.startswith("-"):
        match = STACK_LINE_PATTERN.match(text)
        if not match:
            raise ValueError(
                f"Line {line_number}: expected '- <id> <quantity>', got {text!r}"
            )
        return StackRequest(item_id=int(match.group(1)), quantity=int(match.group(2)))
    return OtherLine(text=text)


def read_items(stream):
    items = []
    for line_number, raw_line in enumerate(stream, start=1):
        item = parse_item_line(raw_line, line_number)
        if item is not None:
            items.append(item)

    catalog = Catalog(items)
    duplicates = catalog.duplicate_ids()
    if duplicates:
        logger.warning(
            "Duplicate item ids %s in item list; first entry wins on lookup.",
            duplicates,
        )
    return catalog


def read_inventory_lines(stream):
    return [
        classify_inventory_line(raw_line, line_number)
        for line_number, raw_line in enumerate(stream, start=1)
    ]


def read_from_file(path, reader):
    with open(path, "r", encoding="utf-8-sig") as handle:
        return reader(handle)


def read_from_text(text, reader):
    text = (text or "").lstrip(BYTE_ORDER_MARK)
    return reader(text.splitlines())
