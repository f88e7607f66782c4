"""Derive remote and local paths for a core from its listing filename.

A listing filename such as ``snes9x_libretro.so.zip`` maps to:

* the download URL ``<buildbot_url>/snes9x_libretro.so.zip`` (buildbot only),
* the installed binary ``<core_dir>/snes9x_libretro.so`` (archive suffix
  dropped, canonicalised),
* the info file ``<info_dir>/snes9x_libretro.info``.

Platform addenda on the filename stem (``snes9x_libretro_android.so``) are
removed so the info path always ends in ``_libretro.info``.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from urllib.parse import quote

from .models import CoreListType, UpdaterPaths

CORE_INFO_EXTENSION = ".info"

_ARCHIVE_EXTENSIONS = {"zip", "7z", "apk"}
_LIBRETRO_SUFFIX = "_libretro"


@dataclass(frozen=True)
class ResolvedPaths:
    remote_filename: str
    remote_core_path: str
    local_core_path: str
    local_info_path: str


# ── Path / URL helpers ───────────────────────────────────────────────────

def join_path(base: str, name: str) -> str:
    """Append *name* to *base*; a leading separator on *name* stays under *base*."""
    return os.path.join(base, name.lstrip("/\\"))


def join_url(base_url: str, name: str) -> str:
    """Join *name* onto *base_url* with exactly one ``/`` between them."""
    if not base_url:
        return name
    return f"{base_url.rstrip('/')}/{name.lstrip('/')}"


def remove_extension(path: str) -> str:
    """Drop the last extension of *path* (``a/b.so.zip`` -> ``a/b.so``)."""
    return os.path.splitext(path)[0]


def is_compressed_file(path: str) -> bool:
    ext = os.path.splitext(path)[1]
    return ext[1:].lower() in _ARCHIVE_EXTENSIONS


def resolve_realpath(path: str, resolve_symlinks: bool = True) -> str:
    """Return the canonical absolute form of *path*.

    With *resolve_symlinks* off the path is only made absolute and
    normalised (play feature delivery cores).
    """
    if not path:
        return ""
    if resolve_symlinks:
        return os.path.realpath(path)
    return os.path.abspath(path)


def urlencode_full(url: str) -> str:
    """Percent-encode everything after ``scheme://host`` in *url*."""
    scheme_end = url.find("://")
    host_start = scheme_end + 3 if scheme_end >= 0 else 0
    path_start = url.find("/", host_start)
    if path_start < 0:
        return url
    return url[:path_start] + quote(url[path_start:], safe="/*")


def _strip_platform_suffix(path: str) -> str:
    """Cut a trailing ``_<suffix>`` from the file stem unless it is ``_libretro``."""
    head, stem = os.path.split(path)
    underscore = stem.rfind("_")
    if underscore >= 0 and stem[underscore:] != _LIBRETRO_SUFFIX:
        stem = stem[:underscore]
    return os.path.join(head, stem) if head else stem


# ── Resolver ─────────────────────────────────────────────────────────────

def resolve_entry_paths(
    paths: UpdaterPaths,
    filename: str,
    list_type: CoreListType,
) -> ResolvedPaths | None:
    """Compute every path of a list entry from its listing *filename*.

    Returns ``None`` when *filename* or either local directory is empty, or
    when a buildbot entry is requested without a buildbot URL.
    """
    if not filename or not paths.core_dir or not paths.info_dir:
        return None
    if list_type is CoreListType.BUILDBOT and not paths.buildbot_url:
        return None

    is_archive = is_compressed_file(filename)
    resolve_symlinks = list_type is not CoreListType.PFD

    remote_core_path = ""
    if list_type is CoreListType.BUILDBOT:
        remote_core_path = urlencode_full(join_url(paths.buildbot_url, filename))

    local_core_path = join_path(paths.core_dir, filename)
    if is_archive:
        local_core_path = remove_extension(local_core_path)
    local_core_path = resolve_realpath(local_core_path, resolve_symlinks)

    local_info_path = remove_extension(join_path(paths.info_dir, filename))
    if is_archive:
        local_info_path = remove_extension(local_info_path)
    local_info_path = _strip_platform_suffix(local_info_path) + CORE_INFO_EXTENSION

    return ResolvedPaths(
        remote_filename=filename,
        remote_core_path=remote_core_path,
        local_core_path=local_core_path,
        local_info_path=local_info_path,
    )
