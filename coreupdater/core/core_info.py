# Copyright (C) 2025-2026 CoreUpdater Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""
Minimal reader for libretro core ``.info`` files.

Only the handful of keys the core updater needs are extracted.  The format
is a flat list of ``key = "value"`` lines with ``#`` comments; values may
also appear unquoted.  Like the other config readers in this project we
work on raw text lines rather than :mod:`configparser`, which rejects
files without a section header.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

log = logging.getLogger(__name__)

_LINE_RE = re.compile(r'^\s*([A-Za-z0-9_]+)\s*=\s*(.*?)\s*$')


@dataclass(frozen=True)
class CoreUpdaterInfo:
    """The subset of a core info file shown in the updater list."""
    display_name: str = ""
    description: str = ""
    licenses: str = ""          # "|"-delimited, as stored in the file
    is_experimental: bool = False


InfoProvider = Callable[[str], "CoreUpdaterInfo | None"]


def parse_info_text(text: str) -> dict[str, str]:
    """Return every ``key = value`` pair in *text* with quotes removed."""
    values: dict[str, str] = {}
    for raw_line in text.splitlines():
        line = raw_line.strip()
        if not line or line.startswith("#"):
            continue
        m = _LINE_RE.match(line)
        if not m:
            continue
        key, val = m.group(1), m.group(2)
        if len(val) >= 2 and val[0] == '"' and val[-1] == '"':
            val = val[1:-1]
        values[key] = val
    return values


def read_core_updater_info(info_path: str | Path) -> CoreUpdaterInfo | None:
    """Read the updater fields of the info file at *info_path*.

    Returns ``None`` if the file does not exist or cannot be read.
    """
    path = Path(info_path)
    try:
        text = path.read_text(encoding="utf-8", errors="replace")
    except OSError as exc:
        log.debug("No core info at %s (%s)", path, exc)
        return None

    values = parse_info_text(text)
    return CoreUpdaterInfo(
        display_name=values.get("display_name", ""),
        description=values.get("description", ""),
        licenses=values.get("license", ""),
        is_experimental=values.get("is_experimental", "").lower() == "true",
    )
