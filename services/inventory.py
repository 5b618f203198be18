import logging
from dataclasses import dataclass, field

from services.size_policy import quantity_size

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ItemStack:
    item: object
    quantity: int
    size_policy: object = field(default=quantity_size, compare=False, repr=False)

    def size(self):
        return self.size_policy(self.item, self.quantity)

    @property
    def name(self):
        return self.item.name

    def __str__(self):
        return f"({self.size():>2}) {self.item.name}"


class Inventory:
    """A container with a fixed capacity that accepts whole stacks only."""

    def __init__(self, capacity):
        self.capacity = capacity
        self.occupied = 0
        self.stacks = []

    def remaining(self):
        return max(self.capacity - self.occupied, 0)

    def is_full(self):
        return self.occupied >= self.capacity

    def utilization_pct(self):
        if self.capacity <= 0:
            return 0.0
        return (self.occupied / self.capacity) * 100

    def add_items(self, stack):
        incoming = stack.size()
        if incoming < 0 or self.occupied + incoming > self.capacity:
            logger.debug(
                "Discarded %s x%s (size %s): %s of %s occupied",
                stack.item.name,
                stack.quantity,
                incoming,
                self.occupied,
                self.capacity,
            )
            return False

        self.stacks.append(stack)
        self.occupied += incoming
        return True

    def to_dict(self):
        return {
            "capacity": self.capacity,
            "occupied": self.occupied,
            "remaining": self.remaining(),
            "utilization_pct": round(self.utilization_pct(), 2),
            "stacks": [
                {
                    "item_id": stack.item.item_id,
                    "name": stack.item.name,
                    "quantity": stack.quantity,
                    "size": stack.size(),
                }
                for stack in self.stacks
            ],
        }

    def __str__(self):
        lines = [f" -Used {self.occupied:>3} of {self.capacity:>3}"]
        lines.extend(f"  {stack}" for stack in self.stacks)
        return "\n".join(lines)

    def __repr__(self):
        return f"Inventory(capacity={self.capacity}, occupied={self.occupied}, stacks={len(self.stacks)})"


def add_items(inventory, stack):
    return inventory.add_items(stack)
