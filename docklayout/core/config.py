from typing import Any, Literal, Optional
import json
import os
from pydantic import BaseModel, ConfigDict, Field
from loguru import logger
from .events import Signal

# --- Settings Models ---
class DockSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    # Edge length of one indicator button (hit-zone), in surface units
    indicator_size: float = Field(default=32.0, gt=0)
    # Inset of the root indicators from the root's edges
    root_indicator_margin: float = Field(default=8.0, ge=0)
    # Orientation for a new root when the edge implies none (CENTER)
    default_orientation: Literal["horizontal", "vertical"] = "horizontal"
    # Elide containers left with a single child after undock
    collapse_single_child: bool = True

class LoggingSettings(BaseModel):
    model_config = ConfigDict(validate_assignment=True)

    debug_mode: bool = False
    log_dir: Optional[str] = None

class DockLayoutConfig(BaseModel):
    dock: DockSettings = Field(default_factory=DockSettings)
    logging: LoggingSettings = Field(default_factory=LoggingSettings)

# --- Manager ---
class ConfigManager:
    """
    Manages engine configuration with optional persistence and reactivity.

    Without a filepath the configuration lives in memory only.
    """
    def __init__(self, filepath: Optional[str] = None):
        self.filepath = filepath
        self._data = DockLayoutConfig()
        self.on_changed = Signal("ConfigChanged")
        if self.filepath:
            self._load()

    @property
    def data(self) -> DockLayoutConfig:
        return self._data

    @property
    def dock(self) -> DockSettings:
        return self._data.dock

    def update(self, section: str, key: str, value: Any):
        """Update a setting, validate via Pydantic, autosave, and emit change event."""
        if not hasattr(self._data, section):
            raise ValueError(f"Invalid section: {section}")

        section_obj = getattr(self._data, section)
        if not hasattr(section_obj, key):
            raise ValueError(f"Invalid key: {key} in section {section}")

        setattr(section_obj, key, value)
        if self.filepath:
            self._save()
        self.on_changed.emit(section, key, value)

    def get(self, section: str, key: str) -> Any:
        section_obj = getattr(self._data, section)
        return getattr(section_obj, key)

    def _load(self):
        """Load settings from JSON or TOML file if present; otherwise keep defaults."""
        if os.path.isfile(self.filepath):
            try:
                if self.filepath.endswith('.toml'):
                    import tomllib
                    with open(self.filepath, "rb") as f:
                        raw = tomllib.load(f)
                else:
                    with open(self.filepath, "r", encoding="utf-8") as f:
                        raw = json.load(f)
                self._data = DockLayoutConfig.model_validate(raw)
                logger.debug(f"Loaded config from {self.filepath}")
            except Exception as e:
                logger.error(f"Failed to load config from {self.filepath}: {e}")
        else:
            self._save()

    def _save(self):
        """Persist current config to JSON file."""
        if self.filepath.endswith('.toml'):
            logger.warning(f"Not writing TOML config {self.filepath}, it is read-only")
            return
        try:
            dirname = os.path.dirname(self.filepath)
            if dirname:
                os.makedirs(dirname, exist_ok=True)
            with open(self.filepath, "w", encoding="utf-8") as f:
                json.dump(self._data.model_dump(), f, indent=4)
        except Exception as e:
            logger.error(f"Failed to save config to {self.filepath}: {e}")
