# config_manager.py - JSON config manager

import json
import logging
import os
from dataclasses import asdict, fields
from pathlib import Path

from predictive_keyboard.core.config import EngineConfig, ResourcePaths

logger = logging.getLogger(__name__)

DEFAULT_DATA_DIR = "data"


class Config:
    """
    Flat JSON file holding the engine knobs plus the data directory.
    Missing file: defaults are written out on first use.
    """

    def __init__(self, path="keyboard_config.json"):
        self.path = path
        self.data = {"data_dir": DEFAULT_DATA_DIR, "log_file": ""}
        self.data.update(asdict(EngineConfig()))
        self._load()

    def _load(self):
        if os.path.exists(self.path):
            try:
                with open(self.path, "r", encoding="utf8") as f:
                    stored = json.load(f)
            except (OSError, ValueError) as e:
                logger.warning("config %s unreadable, using defaults: %s", self.path, e)
                return
            unknown = set(stored) - set(self.data)
            if unknown:
                logger.warning("ignoring unknown config keys: %s", ", ".join(sorted(unknown)))
            self.data.update({k: v for k, v in stored.items() if k in self.data})
        else:
            self.save()

    def save(self):
        with open(self.path, "w", encoding="utf8") as f:
            json.dump(self.data, f, indent=2)

    def set(self, key, val):
        """Set one option, coercing to the type of its current value."""
        if key not in self.data:
            raise KeyError(f"no such option: {key}")
        current = self.data[key]
        if isinstance(current, bool):
            val = str(val).strip().lower() in ("1", "true", "yes", "on")
        elif current is None:
            # only optional ints default to None (max_prefix_nodes)
            val = None if str(val).strip().lower() in ("", "none") else int(val)
        else:
            val = type(current)(val)
        self.data[key] = val
        self.save()

    def engine_config(self) -> EngineConfig:
        names = {f.name for f in fields(EngineConfig)}
        return EngineConfig(**{k: v for k, v in self.data.items() if k in names})

    def resource_paths(self) -> ResourcePaths:
        return ResourcePaths.under(Path(self.data["data_dir"]))
