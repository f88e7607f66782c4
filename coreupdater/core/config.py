# Copyright (C) 2025-2026 CoreUpdater Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Persistent settings for the core updater.

Settings are stored as a JSON file in the OS-appropriate config directory
(``%APPDATA%/CoreUpdater`` on Windows, ``~/.config/CoreUpdater`` on Linux).
Empty directory settings fall back to ``cores/`` and ``info/`` inside that
same config directory.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass, fields, asdict
from pathlib import Path
from typing import Any

from PySide6.QtCore import QCoreApplication, QStandardPaths

from coreupdater.updater_list.models import UpdaterPaths

log = logging.getLogger(__name__)


# -- Defaults --------------------------------------------------------------

_APP_DIR_NAME = "CoreUpdater"
_CONFIG_FILE  = "settings.json"

DEFAULT_BUILDBOT_URL = "https://buildbot.libretro.com/nightly/windows/x86_64/latest"
LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def _config_dir() -> Path:
    """Return (and create) the per-user config directory."""
    if not QCoreApplication.applicationName():
        QCoreApplication.setApplicationName(_APP_DIR_NAME)
    base = QStandardPaths.writableLocation(
        QStandardPaths.StandardLocation.AppConfigLocation,
    )
    path = Path(base)
    path.mkdir(parents=True, exist_ok=True)
    return path


# -- Config data -----------------------------------------------------------

@dataclass
class UpdaterConfig:
    """All user-facing settings.  Serialises to / from JSON."""

    # Directories
    core_directory: str = ""           # installed core binaries
    info_directory: str = ""           # core .info files

    # Network
    buildbot_url: str = DEFAULT_BUILDBOT_URL

    # Debug
    debug_logging: bool = False
    debug_log_level: str = "WARNING"   # DEBUG / INFO / WARNING / ERROR

    # ------------------------------------------------------------------
    # Persistence
    # ------------------------------------------------------------------

    @classmethod
    def load(cls) -> UpdaterConfig:
        """Load from disk, returning defaults if the file is missing or bad.

        Unknown keys in the JSON (left over from older versions) are
        silently ignored so that adding or removing fields never causes a
        crash.
        """
        path = _config_dir() / _CONFIG_FILE
        if not path.exists():
            return cls()
        try:
            raw = json.loads(path.read_text(encoding="utf-8"))
            if not isinstance(raw, dict):
                raise ValueError("settings root is not an object")
            return _safe_dataclass_from_dict(cls, raw)
        except (OSError, ValueError, TypeError) as exc:
            log.warning("Ignoring unreadable settings file %s: %s", path, exc)
            return cls()

    def save(self) -> None:
        """Write current settings to disk."""
        path = _config_dir() / _CONFIG_FILE
        path.write_text(
            json.dumps(asdict(self), indent=2, ensure_ascii=False),
            encoding="utf-8",
        )

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def log_level_name(self) -> str:
        level = str(self.debug_log_level).upper()
        return level if level in LOG_LEVELS else "WARNING"

    def updater_paths(self) -> UpdaterPaths:
        """Return the directories used to build updater list entries."""
        base = _config_dir()
        return UpdaterPaths(
            core_dir=self.core_directory or str(base / "cores"),
            info_dir=self.info_directory or str(base / "info"),
            buildbot_url=self.buildbot_url,
        )


def _safe_dataclass_from_dict(dataclass_type: type, value: dict[str, Any]):
    """Build dataclass instance while ignoring unknown serialized keys."""
    known = {f.name for f in fields(dataclass_type)}
    filtered = {k: v for k, v in value.items() if k in known}
    return dataclass_type(**filtered)
