import os
from pathlib import Path

ROOT = Path(__file__).resolve().parent

SIZE_POLICY_CHOICES = ("quantity", "weighted")
DEFAULT_SIZE_POLICY = "quantity"
DEFAULT_MAX_UPLOAD_BYTES = 2 * 1024 * 1024


def _env_bool(name, default=False):
    raw = os.environ.get(name)
    if raw is None:
        return bool(default)
    normalized = str(raw).strip().lower()
    if normalized in {"1", "true", "yes", "on", "y"}:
        return True
    if normalized in {"0", "false", "no", "off", "n"}:
        return False
    return bool(default)


def _coerce_non_negative_int(value, default):
    try:
        parsed = int(value)
    except (TypeError, ValueError):
        return int(default)
    if parsed < 0:
        return int(default)
    return parsed


def _env_choice(name, choices, default):
    value = (os.environ.get(name) or "").strip().lower()
    if value in choices:
        return value
    return default


def _env_path(name):
    value = (os.environ.get(name) or "").strip()
    if not value:
        return None
    return Path(value)


SIZE_POLICY = _env_choice("INVENTORY_SIZE_POLICY", SIZE_POLICY_CHOICES, DEFAULT_SIZE_POLICY)
WEIGHTS_PATH = _env_path("INVENTORY_WEIGHTS_PATH")
LOG_UNRESOLVED = _env_bool("INVENTORY_LOG_UNRESOLVED", default=False)
LOG_LEVEL = (os.environ.get("LOG_LEVEL") or "INFO").strip().upper()
# 0 disables the upload size limit.
MAX_UPLOAD_BYTES = _coerce_non_negative_int(
    os.environ.get("MAX_UPLOAD_BYTES"), DEFAULT_MAX_UPLOAD_BYTES
)
