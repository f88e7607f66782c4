"""Populate a :class:`CoreUpdaterList` from a listing source.

Two sources are supported:

* buildbot listings: newline-separated ``date checksum filename`` records
  as served by the libretro buildbot (``.index-extended``);
* play feature delivery: a plain sequence of core filenames that the
  platform's app store has made available locally.

Both parsers rebuild the list from scratch, then sort and group it.
"""

from __future__ import annotations

import logging
from typing import Sequence

from coreupdater.core.core_info import InfoProvider, read_core_updater_info

from .builder import build_from_fields, build_from_filename
from .entry_list import CoreUpdaterList
from .grouping import sort_grouped
from .models import CoreListType, UpdaterPaths

log = logging.getLogger(__name__)


def split_listing_line(line: str) -> tuple[str, str, str] | None:
    """Split one listing line into ``(date, checksum, filename)``.

    Fields are separated by single spaces; runs of spaces collapse.  Lines
    with fewer than three fields give ``None``.  Anything after the third
    field is ignored.
    """
    fields = [f for f in line.split(" ") if f]
    if len(fields) < 3:
        return None
    return fields[0], fields[1], fields[2]


def _decode_listing(data: bytes | str, length: int | None) -> str:
    if isinstance(data, str):
        text = data if length is None else data[:length]
    else:
        raw = bytes(data if length is None else data[:length])
        text = raw.decode("utf-8", errors="replace")
    # The listing is treated as a C string: a NUL ends it.
    nul = text.find("\0")
    if nul >= 0:
        text = text[:nul]
    return text


def parse_network_data(
    core_list: CoreUpdaterList,
    paths: UpdaterPaths,
    data: bytes | str,
    length: int | None = None,
    info_provider: InfoProvider = read_core_updater_info,
) -> bool:
    """Read a buildbot core listing into *core_list*.

    *data* is the raw response body; *length* limits how much of it is
    used.  Returns ``False`` (leaving the list empty) if the data is empty,
    contains no line breaks, or yields no valid entries.
    """
    core_list.reset()

    if not data or (length is not None and length < 1):
        return False

    text = _decode_listing(data, length)
    if "\n" not in text:
        log.debug("Buildbot listing has no line breaks; ignoring it")
        return False

    for line in text.split("\n"):
        if not line:
            continue
        record = split_listing_line(line)
        if record is None:
            log.debug("Skipping malformed listing line %r", line)
            continue
        date_str, checksum_str, filename_str = record
        build_from_fields(
            core_list, paths, date_str, checksum_str, filename_str,
            info_provider=info_provider,
        )

    if len(core_list) < 1:
        return False

    sort_grouped(core_list)
    core_list.set_type(CoreListType.BUILDBOT)
    log.info("Parsed buildbot listing: %d rows", len(core_list))
    return True


def parse_pfd_data(
    core_list: CoreUpdaterList,
    paths: UpdaterPaths,
    filenames: Sequence[str],
    info_provider: InfoProvider = read_core_updater_info,
) -> bool:
    """Read the play feature delivery core list into *core_list*.

    Returns ``False`` (leaving the list empty) if *filenames* is empty or
    none of them produce an entry.
    """
    core_list.reset()

    if not filenames:
        return False

    for filename_str in filenames:
        if not filename_str:
            continue
        build_from_filename(core_list, paths, filename_str, info_provider=info_provider)

    if len(core_list) < 1:
        return False

    sort_grouped(core_list)
    core_list.set_type(CoreListType.PFD)
    log.info("Parsed play feature delivery list: %d rows", len(core_list))
    return True
