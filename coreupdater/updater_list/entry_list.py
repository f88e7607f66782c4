"""In-memory container for core updater list entries.

A :class:`CoreUpdaterList` owns its entries for its whole lifetime and is
rebuilt from scratch by every parse call.  One process-wide list can be
kept through :func:`init_cached` / :func:`get_cached` / :func:`free_cached`;
nothing here locks, so callers sharing the cached list across threads must
serialise access themselves.
"""

from __future__ import annotations

import sys
from typing import Callable, Iterable, Iterator

from .models import CoreListType, CoreUpdaterEntry
from .paths import resolve_realpath

# Windows filesystems compare paths case-insensitively.
_CASE_INSENSITIVE_FS = sys.platform.startswith("win")


class CoreUpdaterList:
    """Ordered, indexable list of :class:`CoreUpdaterEntry` rows."""

    def __init__(self) -> None:
        self._entries: list[CoreUpdaterEntry] = []
        self._type = CoreListType.UNKNOWN

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CoreUpdaterEntry]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"CoreUpdaterList(type={self._type.name}, size={len(self._entries)})"

    # ── Lifecycle ────────────────────────────────────────────────────

    def reset(self) -> None:
        """Remove every entry and forget the list type."""
        self._entries.clear()
        self._type = CoreListType.UNKNOWN

    def free(self) -> None:
        self.reset()

    # ── Getters ──────────────────────────────────────────────────────

    def size(self) -> int:
        return len(self._entries)

    @property
    def list_type(self) -> CoreListType:
        return self._type

    def set_type(self, list_type: CoreListType) -> None:
        self._type = list_type

    def entries(self) -> list[CoreUpdaterEntry]:
        """Return a shallow copy of the entries in display order."""
        return list(self._entries)

    def get_at(self, index: int) -> CoreUpdaterEntry | None:
        if index < 0 or index >= len(self._entries):
            return None
        return self._entries[index]

    def find_by_remote_filename(self, remote_filename: str) -> CoreUpdaterEntry | None:
        """Return the first entry whose remote filename equals *remote_filename*."""
        if not remote_filename:
            return None
        for entry in self._entries:
            if entry.remote_filename and entry.remote_filename == remote_filename:
                return entry
        return None

    def find_by_local_path(self, local_core_path: str) -> CoreUpdaterEntry | None:
        """Return the entry installed at *local_core_path*, if any.

        The path is canonicalised the same way entry paths were when the
        list was built (no symlink resolution for play feature delivery
        lists).
        """
        if not local_core_path or not self._entries:
            return None

        real_path = resolve_realpath(
            local_core_path,
            resolve_symlinks=self._type is not CoreListType.PFD,
        )
        if not real_path:
            return None
        if _CASE_INSENSITIVE_FS:
            real_path = real_path.lower()

        for entry in self._entries:
            candidate = entry.local_core_path
            if not candidate:
                continue
            if _CASE_INSENSITIVE_FS:
                candidate = candidate.lower()
            if candidate == real_path:
                return entry
        return None

    # ── Mutation ─────────────────────────────────────────────────────

    def append(self, entry: CoreUpdaterEntry) -> bool:
        """Add *entry* to the end of the list.

        The list takes the entry over; callers must not keep mutating it.
        """
        self._entries.append(entry)
        return True

    def sort(self, key: Callable[[CoreUpdaterEntry], object]) -> None:
        self._entries.sort(key=key)

    def replace_entries(self, entries: Iterable[CoreUpdaterEntry]) -> None:
        """Swap the backing storage for *entries* in a single step."""
        self._entries = list(entries)


# ── Cached ('global') list ───────────────────────────────────────────────

_cached_list: CoreUpdaterList | None = None


def init_cached() -> bool:
    """Replace the cached list with a new, empty one."""
    global _cached_list
    if _cached_list is not None:
        _cached_list.free()
    _cached_list = CoreUpdaterList()
    return True


def get_cached() -> CoreUpdaterList | None:
    return _cached_list


def free_cached() -> None:
    global _cached_list
    if _cached_list is not None:
        _cached_list.free()
    _cached_list = None
