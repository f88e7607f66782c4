"""Core updater list: the catalog of installable libretro cores.

Builds an in-memory, display-ready list of cores from a buildbot listing
or from the play feature delivery core list, then groups it by
manufacturer and console.  Nothing is fetched, installed or persisted
here; the list is rebuilt from scratch on every parse.

Quick start::

    from coreupdater.updater_list import (
        CoreUpdaterList,
        UpdaterPaths,
        parse_network_data,
    )

    core_list = CoreUpdaterList()
    paths = UpdaterPaths(
        core_dir="/home/me/.config/retroarch/cores",
        info_dir="/home/me/.config/retroarch/info",
        buildbot_url="https://buildbot.libretro.com/nightly/linux/x86_64/latest",
    )
    if parse_network_data(core_list, paths, response_body):
        for entry in core_list:
            print(entry.display_name)
"""

from __future__ import annotations

from .builder import (
    build_from_fields,
    build_from_filename,
    parse_checksum,
    parse_date,
)
from .entry_list import CoreUpdaterList, free_cached, get_cached, init_cached
from .grouping import (
    compare_alphabetical,
    grouping_sort_key,
    inject_headers,
    sort_alphabetical,
    sort_grouped,
)
from .metadata import (
    CORE_METADATA,
    UNKNOWN_CORE_METADATA,
    CoreMetadata,
    lookup_core_metadata,
)
from .models import CoreDate, CoreListType, CoreUpdaterEntry, UpdaterPaths
from .parser import parse_network_data, parse_pfd_data
from .paths import ResolvedPaths, resolve_entry_paths

__all__ = [
    # Models
    "CoreDate",
    "CoreListType",
    "CoreUpdaterEntry",
    "UpdaterPaths",
    "ResolvedPaths",
    # List
    "CoreUpdaterList",
    "init_cached",
    "get_cached",
    "free_cached",
    # Metadata
    "CoreMetadata",
    "CORE_METADATA",
    "UNKNOWN_CORE_METADATA",
    "lookup_core_metadata",
    # Building
    "build_from_fields",
    "build_from_filename",
    "parse_date",
    "parse_checksum",
    "resolve_entry_paths",
    # Parsing
    "parse_network_data",
    "parse_pfd_data",
    # Sorting
    "compare_alphabetical",
    "grouping_sort_key",
    "inject_headers",
    "sort_alphabetical",
    "sort_grouped",
]
