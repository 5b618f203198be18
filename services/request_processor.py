import logging

from services.input_parser import InventoryMarker, StackRequest
from services.inventory import Inventory, ItemStack
from services.size_policy import quantity_size

logger = logging.getLogger(__name__)

STORED_LABEL = "Stored"
DISCARDED_LABEL = "Discarded"
UNRESOLVED_LABEL = "Unknown"


def split_on_markers(lines):
    """Split the line stream around every inventory marker.

    Markers are dropped. The first segment holds everything before the
    first marker, so the result always has one more segment than there are
    markers.
    """
    segments = [[]]
    for line in lines:
        if isinstance(line, InventoryMarker):
            segments.append([])
        else:
            segments[-1].append(line)
    return segments


def build_inventories(lines):
    return [Inventory(line.capacity) for line in lines if isinstance(line, InventoryMarker)]


def resolve_stacks(catalog, segment, size_policy=None, unresolved=None):
    size_policy = size_policy or quantity_size
    stacks = []
    for line in segment:
        if not isinstance(line, StackRequest):
            continue
        item = catalog.find(line.item_id)
        if item is None:
            logger.debug("No item with id %s; request dropped.", line.item_id)
            if unresolved is not None:
                unresolved.append(line)
            continue
        stacks.append(ItemStack(item, line.quantity, size_policy))
    return stacks


def format_log_entry(stored, stack):
    label = STORED_LABEL if stored else DISCARDED_LABEL
    return f"{label:<9} ({stack.size():>2}) {stack.item.name}"


def format_unresolved_entry(request):
    return f"{UNRESOLVED_LABEL:<9} ({request.quantity:>2}) item #{request.item_id}"


def record_stacks(stacks, inventory):
    entries = []
    for stack in stacks:
        stored = inventory.add_items(stack)
        entries.append(format_log_entry(stored, stack))
    return entries


def _record_segment(catalog, segment, inventory, size_policy):
    # Interleaves unresolved entries at their original position.
    entries = []
    for line in segment:
        if not isinstance(line, StackRequest):
            continue
        stacks = resolve_stacks(catalog, [line], size_policy)
        if stacks:
            entries.extend(record_stacks(stacks, inventory))
        else:
            entries.append(format_unresolved_entry(line))
    return entries


def process_inventory_requests(lines, catalog, size_policy=None, log_unresolved=False):
    lines = list(lines)
    segments = split_on_markers(lines)
    inventories = build_inventories(lines)

    results = []
    for inventory, segment in zip(inventories, segments[1:]):
        if log_unresolved:
            entries = _record_segment(catalog, segment, inventory, size_policy)
        else:
            unresolved = []
            stacks = resolve_stacks(catalog, segment, size_policy, unresolved=unresolved)
            if unresolved:
                logger.warning(
                    "Dropped %s stack requests with unknown item ids %s",
                    len(unresolved),
                    sorted({request.item_id for request in unresolved}),
                )
            entries = record_stacks(stacks, inventory)
        results.append((entries, inventory))

    logger.info(
        "Processed %s inventories from %s lines (%s preamble lines skipped)",
        len(results),
        len(lines),
        len(segments[0]),
    )
    return results


def summarize_results(results):
    summary = []
    for index, (entries, inventory) in enumerate(results, start=1):
        payload = inventory.to_dict()
        payload["inventory_number"] = index
        payload["log"] = list(entries)
        payload["stored_count"] = sum(1 for entry in entries if entry.startswith(STORED_LABEL))
        payload["discarded_count"] = sum(
            1 for entry in entries if entry.startswith(DISCARDED_LABEL)
        )
        summary.append(payload)
    return summary
