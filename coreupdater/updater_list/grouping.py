"""Sorting and two-level grouping of core updater lists.

Production lists are ordered by :func:`sort_grouped`: cores are sorted by
manufacturer, then console, then name, and synthetic header rows are
interleaved wherever the manufacturer or console changes::

    === Nintendo ===
    --- Nintendo Entertainment System (1983) ---
    Nintendo - NES / Famicom (FCEUmm)
    --- Super Nintendo Entertainment System (1990) ---
    Nintendo - SNES / SFC (Snes9x)

Headers are derived from :mod:`.metadata` on every sort and are never
stored anywhere else.
"""

from __future__ import annotations

import dataclasses
from functools import cmp_to_key
from typing import Callable, Iterable

from .entry_list import CoreUpdaterList
from .metadata import CoreMetadata, lookup_core_metadata
from .models import CoreUpdaterEntry

MetadataLookup = Callable[[str], CoreMetadata]


# ── Plain alphabetical order ─────────────────────────────────────────────

def compare_alphabetical(a: CoreUpdaterEntry, b: CoreUpdaterEntry) -> int:
    """Case-insensitive comparison by display name.

    Entries without a display name compare equal to everything.
    """
    if not a.display_name or not b.display_name:
        return 0
    name_a, name_b = a.display_name.lower(), b.display_name.lower()
    return (name_a > name_b) - (name_a < name_b)


def sort_alphabetical(core_list: CoreUpdaterList) -> None:
    if len(core_list) < 2:
        return
    core_list.sort(key=cmp_to_key(compare_alphabetical))


# ── Grouped order ────────────────────────────────────────────────────────

def grouping_sort_key(
    entry: CoreUpdaterEntry,
    lookup: MetadataLookup = lookup_core_metadata,
) -> tuple:
    """Sort key placing headers first, then cores by their console grouping."""
    if entry.is_manufacturer_header:
        return (0, entry.display_name.lower())
    if entry.is_console_header:
        return (1, entry.display_name.lower())

    meta = lookup(entry.display_name)
    return (
        2,
        meta.manufacturer_priority,
        meta.manufacturer.lower(),
        meta.console_priority,
        meta.console_model.lower(),
        meta.console_type.lower(),
        meta.release_year,
        entry.display_name.lower(),
    )


def inject_headers(
    entries: Iterable[CoreUpdaterEntry],
    lookup: MetadataLookup = lookup_core_metadata,
) -> list[CoreUpdaterEntry]:
    """Return *entries* with manufacturer and console headers interleaved.

    *entries* must already be in grouped order.  Header rows already present
    are discarded and regenerated.
    """
    grouped: list[CoreUpdaterEntry] = []
    last_manufacturer: str | None = None
    last_console_model: str | None = None

    for entry in entries:
        if entry.is_header or not entry.display_name:
            continue

        meta = lookup(entry.display_name)

        if last_manufacturer is None or last_manufacturer.lower() != meta.manufacturer.lower():
            header = CoreUpdaterEntry.manufacturer_header(meta.manufacturer)
            if header is not None:
                grouped.append(header)
            last_manufacturer = meta.manufacturer
            last_console_model = None

        if last_console_model is None or last_console_model.lower() != meta.console_model.lower():
            header = CoreUpdaterEntry.console_header(meta.console_model, meta.release_year)
            if header is not None:
                grouped.append(header)
            last_console_model = meta.console_model

        # The licence list is handed over to the new row, not duplicated;
        # the source row is discarded with the old storage.
        grouped.append(dataclasses.replace(
            entry,
            licenses=entry.licenses,
            is_manufacturer_header=False,
            is_console_header=False,
        ))

    return grouped


def sort_grouped(
    core_list: CoreUpdaterList,
    lookup: MetadataLookup = lookup_core_metadata,
) -> None:
    """Sort *core_list* into grouped order and insert header rows.

    The list's storage is only replaced once the new sequence is complete.
    """
    if len(core_list) < 1:
        return
    core_list.sort(key=lambda e: grouping_sort_key(e, lookup))
    grouped = inject_headers(core_list, lookup)
    if grouped:
        core_list.replace_entries(grouped)
