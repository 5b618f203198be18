from dataclasses import dataclass


@dataclass(frozen=True)
class Item:
    item_id: int
    name: str

    def __str__(self):
        return self.name


class Catalog:
    """Read-only registry of known items, in input order.

    Identifiers are not required to be unique. Lookups return the first
    matching entry.
    """

    def __init__(self, items=None):
        self._items = tuple(items or ())

    def __iter__(self):
        return iter(self._items)

    def __len__(self):
        return len(self._items)

    def __getitem__(self, index):
        return self._items[index]

    def __repr__(self):
        return f"Catalog({len(self._items)} items)"

    def find(self, item_id):
        for item in self._items:
            if item.item_id == item_id:
                return item
        return None

    def __contains__(self, item_id):
        return self.find(item_id) is not None

    def duplicate_ids(self):
        seen = set()
        duplicates = []
        for item in self._items:
            if item.item_id in seen and item.item_id not in duplicates:
                duplicates.append(item.item_id)
            seen.add(item.item_id)
        return duplicates
