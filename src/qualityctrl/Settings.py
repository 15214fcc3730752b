"""TOML backed configuration for tiers, thresholds and timing."""
from typing import Dict, Any
from pathlib import Path
import copy

import tomllib
import tomli_w

from qualityctrl.QualityController import DEFAULT_TIER_SETTINGS


def merge_sections(base: Dict[str, Any], override: Dict[str, Any], path: str = "") -> Dict[str, Any]:
    """Recursively merge ``override`` into ``base`` and return ``base``.

    A table in the defaults can only be overridden by another table.
    """
    for key, value in override.items():
        current = base.get(key)
        if isinstance(current, dict):
            if not isinstance(value, dict):
                raise ValueError(f"Setting '{path}{key}' must be a table, got {value!r}")
            merge_sections(current, value, f"{path}{key}.")
        else:
            base[key] = value

    return base


def strip_none(obj: Any) -> Any:
    """TOML has no null, so None entries are left out when saving."""
    if isinstance(obj, dict):
        return {k: strip_none(v) for k, v in obj.items() if v is not None}
    if isinstance(obj, list):
        return [strip_none(v) for v in obj if v is not None]
    return obj


class Settings:
    DEFAULTS: Dict[str, Any] = {
        "tiers": {
            tier.value: dict(values)
            for tier, values in DEFAULT_TIER_SETTINGS.items()
        },
        "policy": {
            "downgrade_high": 50,
            "downgrade_medium": 35,
            "upgrade": 58,
            "upgrade_floor": 55,
            "min_readings": 3,
            "cooldown_ms": 5000,
        },
        "sampler": {
            "window_ms": 1000,
            "capacity": 10,
            "default_rate": 60,
        },
        "monitor": {
            "evaluation_interval_ms": 2000,
        },
    }

    def __init__(self, path: str) -> None:
        self.path = Path(path)
        self.settings: Dict[str, Any] = {}
        self.load()

    def load(self) -> None:
        self.settings = copy.deepcopy(self.DEFAULTS)
        if not self.path.exists():
            return

        loaded = tomllib.loads(self.path.read_text(encoding="utf-8"))
        merge_sections(self.settings, loaded)

    def save(self) -> None:
        self.path.write_text(tomli_w.dumps(strip_none(self.settings)), encoding="utf-8")

    def get(self, key: str, default: Any = None) -> Any:
        return self.settings.get(key, default)

    def section(self, key: str) -> Dict[str, Any]:
        """Copy of a table, empty if the table is missing."""
        value = self.settings.get(key)
        return dict(value) if isinstance(value, dict) else {}

    def set(self, key: str, value: Any) -> None:
        self.settings[key] = value

    def delete(self, key: str) -> None:
        self.settings.pop(key, None)
