"""Typed data models for core updater list entries."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ── List source types ────────────────────────────────────────────────────

class CoreListType(Enum):
    """Delivery method a list was populated from."""
    UNKNOWN = "unknown"
    BUILDBOT = "buildbot"
    PFD = "pfd"          # play feature delivery (platform app store)


# Release year used by the fallback metadata record; never shown in headers.
UNKNOWN_RELEASE_YEAR = 9999


# ── Value types ──────────────────────────────────────────────────────────

@dataclass(frozen=True)
class CoreDate:
    """Build date of a buildbot core.  All zero when absent."""
    year: int = 0
    month: int = 0
    day: int = 0


@dataclass(frozen=True)
class UpdaterPaths:
    """Directories (and buildbot URL) that entry paths are derived from.

    *core_dir* is where installed core binaries live, *info_dir* holds the
    matching ``.info`` files.  *buildbot_url* is only required when parsing
    buildbot listings.
    """
    core_dir: str
    info_dir: str
    buildbot_url: str = ""


# ── Entries ──────────────────────────────────────────────────────────────

@dataclass
class CoreUpdaterEntry:
    """One catalog row: an installable core, or a synthetic group header.

    Header rows only carry ``remote_filename`` / ``display_name`` (both set
    to the header text); every other field stays at its zero value.
    """
    remote_filename: str = ""
    remote_core_path: str = ""
    local_core_path: str = ""
    local_info_path: str = ""
    display_name: str = ""
    description: str = ""
    licenses: list[str] = field(default_factory=list)
    is_experimental: bool = False
    checksum: int = 0
    release_date: CoreDate = field(default_factory=CoreDate)
    is_manufacturer_header: bool = False
    is_console_header: bool = False

    def __post_init__(self) -> None:
        if self.is_manufacturer_header and self.is_console_header:
            raise ValueError("an entry cannot be both a manufacturer and a console header")

    @property
    def is_header(self) -> bool:
        return self.is_manufacturer_header or self.is_console_header

    # ── Header factories ─────────────────────────────────────────────

    @classmethod
    def manufacturer_header(cls, manufacturer: str) -> CoreUpdaterEntry | None:
        """Build a ``=== Manufacturer ===`` row, or ``None`` for a blank name."""
        if not manufacturer:
            return None
        text = f"=== {manufacturer} ==="
        return cls(
            remote_filename=text,
            display_name=text,
            is_manufacturer_header=True,
        )

    @classmethod
    def console_header(cls, console_model: str, release_year: int) -> CoreUpdaterEntry | None:
        """Build a ``--- Console (year) ---`` row.

        The year is omitted when it is unknown (zero or the 9999 sentinel).
        """
        if not console_model:
            return None
        if 0 < release_year < UNKNOWN_RELEASE_YEAR:
            text = f"--- {console_model} ({release_year}) ---"
        else:
            text = f"--- {console_model} ---"
        return cls(
            remote_filename=text,
            display_name=text,
            is_console_header=True,
        )
