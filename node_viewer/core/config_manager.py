# node_viewer/core/config_manager.py

import json
import logging
import shutil
import sys
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Any, Dict, Optional

from .errors import SettingsError
from .file_sources import PICKER_MODES, PICKER_NATIVE

# A dedicated logger for the module that persists the user's preferences.
logger = logging.getLogger(__name__)

# --- Recognized Preference Options ---
UI_SCALES = (1.0, 1.5, 2.0)
THEMES = ("light", "dark", "system")


def get_project_root() -> Path:
    """
    The directory holding `config/` and `assets/`: the PyInstaller bundle
    directory when frozen, the project root when running from source.
    """
    bundle_dir = getattr(sys, "_MEIPASS", None)
    if bundle_dir:
        return Path(bundle_dir)
    return Path(__file__).resolve().parents[2]


DEFAULT_SETTINGS_PATH = get_project_root() / "config" / "settings.json"


@dataclass
class ViewerSettings:
    """
    The preferences that survive between sessions. Loaded file content is
    deliberately absent: only how the viewer looks and picks files persists.
    """
    ui_scale: float = 1.0
    theme: str = "system"
    picker_mode: str = PICKER_NATIVE
    pending_timeout: Optional[float] = None

    def validate(self):
        """Raises SettingsError for any value outside its recognized options."""
        if self.ui_scale not in UI_SCALES:
            raise SettingsError(f"UI scale must be one of {UI_SCALES}, got {self.ui_scale!r}.")
        if self.theme not in THEMES:
            raise SettingsError(f"Theme must be one of {THEMES}, got {self.theme!r}.")
        if self.picker_mode not in PICKER_MODES:
            raise SettingsError(f"Picker mode must be one of {PICKER_MODES}, got {self.picker_mode!r}.")
        if self.pending_timeout is not None and self.pending_timeout <= 0:
            raise SettingsError(f"Pending timeout must be positive, got {self.pending_timeout!r}.")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)


def _coerce_setting(name: str, value: Any) -> Any:
    if name == "ui_scale":
        return float(value)
    if name == "pending_timeout":
        return None if value is None else float(value)
    return str(value)


def load_settings(settings_path: Path = DEFAULT_SETTINGS_PATH) -> ViewerSettings:
    """
    Reads the settings file, falling back to defaults for anything missing,
    unreadable or invalid. A broken settings file never stops the viewer.
    """
    settings = ViewerSettings()
    try:
        if not settings_path.exists():
            logger.info(f"No settings file at '{settings_path}', using defaults.")
            return settings
        with open(settings_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning(f"Could not read settings from '{settings_path}', using defaults: {e}")
        return settings

    if not isinstance(data, dict):
        logger.warning(f"Settings file '{settings_path}' does not hold an object, using defaults.")
        return settings

    # Each key is applied and validated on its own, so one bad value only
    # resets that one preference.
    for name, default in ViewerSettings().to_dict().items():
        if name not in data:
            continue
        try:
            setattr(settings, name, _coerce_setting(name, data[name]))
            settings.validate()
        except (TypeError, ValueError) as e:
            logger.warning(f"Ignoring invalid setting '{name}': {e}")
            setattr(settings, name, default)

    logger.debug(f"Loaded settings: {settings}")
    return settings


def save_settings(settings: ViewerSettings, settings_path: Path = DEFAULT_SETTINGS_PATH) -> bool:
    """
    Validates and writes the settings file. A backup of the previous file is
    taken first and restored if the write fails.

    Raises:
        SettingsError: A value is outside its recognized options.

    Returns:
        True on success, False if the file could not be written.
    """
    settings.validate()

    backup_path = settings_path.with_suffix(".json.bak")
    try:
        settings_path.parent.mkdir(parents=True, exist_ok=True)
        if settings_path.exists():
            shutil.copy(settings_path, backup_path)
            logger.debug(f"Settings backup created at: {backup_path}")

        with open(settings_path, 'w', encoding='utf-8') as f:
            json.dump(settings.to_dict(), f, indent=2)
        logger.info(f"Settings saved to: {settings_path}")
        return True

    except OSError as e:
        logger.error(f"Failed to write settings file: {e}", exc_info=True)
        if backup_path.exists():
            shutil.copy(backup_path, settings_path)
            logger.warning("Restored settings from backup after a failed save.")
        return False
