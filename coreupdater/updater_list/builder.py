"""Build core updater list entries from individual listing records.

A broken record is never fatal: the listing sources (network transfers,
platform delivery enumeration) are unreliable, so a record that fails any
step is logged at debug level and dropped, and the caller moves on to the
next one.
"""

from __future__ import annotations

import logging
import re

from coreupdater.core.core_info import InfoProvider, read_core_updater_info

from .entry_list import CoreUpdaterList
from .models import CoreDate, CoreListType, CoreUpdaterEntry, UpdaterPaths
from .paths import resolve_entry_paths

log = logging.getLogger(__name__)

_DECIMAL_RE = re.compile(r"^[0-9]+$")
_HEX_RE = re.compile(r"^[0-9A-Fa-f]+$")


# ── Field parsers ────────────────────────────────────────────────────────

def _to_unsigned(value: str) -> int:
    """Decimal string to int; anything that is not all digits gives 0."""
    if not _DECIMAL_RE.match(value):
        return 0
    return int(value)


def parse_date(date_str: str) -> CoreDate | None:
    """Parse ``YYYY-MM-DD``; ``None`` when fewer than three parts are present.

    Empty parts (``2023--01``) are skipped rather than counted, and a part
    that is not a plain number becomes 0 instead of failing the record.
    """
    if not date_str:
        return None
    parts = [p for p in date_str.split("-") if p]
    if len(parts) < 3:
        return None
    year, month, day = (_to_unsigned(p) for p in parts[:3])
    return CoreDate(year=year, month=month, day=day)


def parse_checksum(checksum_str: str) -> int:
    """Parse a hex CRC32 (optional ``0x`` prefix).  Invalid input gives 0."""
    if not checksum_str:
        return 0
    digits = checksum_str
    if digits[:2] in ("0x", "0X"):
        digits = digits[2:]
    if not _HEX_RE.match(digits):
        return 0
    return int(digits, 16) & 0xFFFFFFFF


def split_licenses(licenses: str) -> list[str]:
    return [lic for lic in licenses.split("|") if lic]


# ── Entry construction ───────────────────────────────────────────────────

def _apply_core_info(
    entry: CoreUpdaterEntry,
    filename_str: str,
    info_provider: InfoProvider,
) -> None:
    """Fill display name, description, licenses and experimental flag.

    Cores without an info file, or whose info file has a blank display
    name, are listed under their filename and flagged experimental.
    """
    info = info_provider(entry.local_info_path)
    if info is not None and info.display_name:
        entry.display_name = info.display_name
        entry.is_experimental = info.is_experimental
        entry.description = info.description or ""
        entry.licenses = split_licenses(info.licenses or "")
        return

    entry.display_name = filename_str
    entry.is_experimental = True
    entry.description = ""
    entry.licenses = []


def _build_entry(
    core_list: CoreUpdaterList,
    paths: UpdaterPaths,
    filename_str: str,
    list_type: CoreListType,
    info_provider: InfoProvider,
    checksum: int = 0,
    release_date: CoreDate | None = None,
) -> bool:
    resolved = resolve_entry_paths(paths, filename_str, list_type)
    if resolved is None:
        log.debug("Dropping %r: could not resolve paths", filename_str)
        return False

    entry = CoreUpdaterEntry(
        remote_filename=resolved.remote_filename,
        remote_core_path=resolved.remote_core_path,
        local_core_path=resolved.local_core_path,
        local_info_path=resolved.local_info_path,
        checksum=checksum,
        release_date=release_date or CoreDate(),
    )
    _apply_core_info(entry, filename_str, info_provider)
    return core_list.append(entry)


def build_from_fields(
    core_list: CoreUpdaterList,
    paths: UpdaterPaths,
    date_str: str,
    checksum_str: str,
    filename_str: str,
    list_type: CoreListType = CoreListType.BUILDBOT,
    info_provider: InfoProvider = read_core_updater_info,
) -> bool:
    """Add one buildbot listing record (``date checksum filename``).

    Returns ``True`` if an entry was appended, ``False`` if the record was
    a duplicate or malformed and has been skipped.
    """
    if core_list.find_by_remote_filename(filename_str) is not None:
        log.debug("Skipping duplicate listing %r", filename_str)
        return False

    release_date = parse_date(date_str)
    if release_date is None:
        log.debug("Dropping %r: bad date %r", filename_str, date_str)
        return False

    checksum = parse_checksum(checksum_str)
    if checksum == 0:
        log.debug("Dropping %r: bad checksum %r", filename_str, checksum_str)
        return False

    return _build_entry(
        core_list, paths, filename_str, list_type, info_provider,
        checksum=checksum, release_date=release_date,
    )


def build_from_filename(
    core_list: CoreUpdaterList,
    paths: UpdaterPaths,
    filename_str: str,
    info_provider: InfoProvider = read_core_updater_info,
) -> bool:
    """Add one play feature delivery core.

    These cores carry no build date or checksum, so both stay zero.
    """
    if not filename_str:
        return False
    if core_list.find_by_remote_filename(filename_str) is not None:
        log.debug("Skipping duplicate PFD core %r", filename_str)
        return False
    return _build_entry(
        core_list, paths, filename_str, CoreListType.PFD, info_provider,
    )
