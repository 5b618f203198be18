import logging
from pathlib import Path

import pandas as pd

logger = logging.getLogger(__name__)

DEFAULT_ITEM_WEIGHT = 1
EXCEL_SUFFIXES = {".xlsx", ".xlsm", ".xls"}
WEIGHT_COLUMN_ALIASES = {
    "id": "item_id",
    "item": "item_id",
    "itemid": "item_id",
    "item_id": "item_id",
    "weight": "weight",
    "size": "weight",
    "units": "weight",
}


def quantity_size(item, quantity):
    return quantity


def _coerce_non_negative_int(value, default):
    try:
        parsed = int(float(str(value).strip()))
    except (TypeError, ValueError, AttributeError):
        return default
    if parsed < 0:
        return default
    return parsed


class WeightedSizePolicy:
    """Stack size scaled by a per-item weight.

    Items without a weight entry count as ``default_weight`` per unit.
    """

    def __init__(self, weights=None, default_weight=DEFAULT_ITEM_WEIGHT):
        self.weights = dict(weights or {})
        self.default_weight = default_weight

    def weight_for(self, item):
        return self.weights.get(item.item_id, self.default_weight)

    def __call__(self, item, quantity):
        return quantity * self.weight_for(item)

    def __repr__(self):
        return f"WeightedSizePolicy({len(self.weights)} weights, default={self.default_weight})"


def _normalize_columns(columns):
    column_map = {}
    for column in columns:
        key = str(column).strip().lower().replace(" ", "_")
        if key in WEIGHT_COLUMN_ALIASES:
            column_map[column] = WEIGHT_COLUMN_ALIASES[key]
    return column_map


def load_item_weights(path):
    path = Path(path)
    if path.suffix.lower() in EXCEL_SUFFIXES:
        df = pd.read_excel(path, sheet_name=0, dtype=str)
    else:
        df = pd.read_csv(path, dtype=str, keep_default_na=False)

    df = df.rename(columns=_normalize_columns(df.columns))
    missing = [col for col in ("item_id", "weight") if col not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")

    weights = {}
    skipped = 0
    for row in df.to_dict(orient="records"):
        item_id = _coerce_non_negative_int(row.get("item_id"), None)
        if item_id is None:
            skipped += 1
            continue
        weights[item_id] = _coerce_non_negative_int(row.get("weight"), DEFAULT_ITEM_WEIGHT)
    if skipped:
        logger.warning("Skipped %s weight rows without a usable item id in %s", skipped, path)
    logger.info("Loaded %s item weights from %s", len(weights), path)
    return weights


def resolve_size_policy(name, weights_path=None):
    normalized = (name or "quantity").strip().lower()
    if normalized == "quantity":
        return quantity_size
    if normalized == "weighted":
        weights = load_item_weights(weights_path) if weights_path else {}
        return WeightedSizePolicy(weights)
    raise ValueError(f"Unknown size policy: {name!r}")
