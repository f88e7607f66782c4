# Copyright (C) 2025-2026 CoreUpdater Contributors
# SPDX-License-Identifier: AGPL-3.0-or-later
# See LICENSE for the full text.

"""Build and print a core updater list.

Usage::

    python main.py <listing-file>          # buildbot .index-extended listing
    python main.py --pfd <core> [<core>...]  # play feature delivery filenames
"""

import sys
import traceback
from datetime import datetime, timezone
from pathlib import Path

_ROOT = Path(__file__).resolve().parent
_CACHE_DIR = _ROOT / "cache"
_CRASH_LOG = _CACHE_DIR / "latest.log"


def _install_crash_logger() -> None:
    """Replace the default exception hook so unhandled errors are written
    to ``cache/latest.log`` before the process terminates."""
    _original_hook = sys.excepthook

    def _crash_hook(exc_type, exc_value, exc_tb):
        try:
            _CACHE_DIR.mkdir(parents=True, exist_ok=True)
            tb_text = "".join(traceback.format_exception(exc_type, exc_value, exc_tb))
            timestamp = datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S UTC")
            header = (
                f"CoreUpdater crash log\n"
                f"=====================\n"
                f"Timestamp : {timestamp}\n"
                f"Python    : {sys.version}\n"
                f"Platform  : {sys.platform}\n"
                f"Exception : {exc_type.__name__}: {exc_value}\n"
                f"\n"
            )
            _CRASH_LOG.write_text(header + tb_text, encoding="utf-8")
        except OSError:
            pass
        _original_hook(exc_type, exc_value, exc_tb)

    sys.excepthook = _crash_hook


def _apply_debug_logging(cfg) -> None:
    """Configure Python logging based on the user's debug settings."""
    import logging
    if cfg.debug_logging:
        level = getattr(logging, cfg.log_level_name(), logging.WARNING)
        log_file = _CACHE_DIR / "coreupdater_debug.log"
        _CACHE_DIR.mkdir(parents=True, exist_ok=True)
        logging.basicConfig(
            level=level,
            format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
            handlers=[
                logging.FileHandler(str(log_file), encoding="utf-8"),
                logging.StreamHandler(sys.stderr),
            ],
            force=True,
        )
    else:
        logging.basicConfig(level=logging.WARNING, force=True)


def _print_list(core_list) -> None:
    for entry in core_list:
        if entry.is_manufacturer_header:
            print(entry.display_name)
        elif entry.is_console_header:
            print(f"  {entry.display_name}")
        else:
            flag = " [experimental]" if entry.is_experimental else ""
            print(f"    {entry.display_name}{flag}")


def main(argv: list[str] | None = None) -> int:
    argv = list(sys.argv[1:] if argv is None else argv)
    _install_crash_logger()

    from coreupdater.core.config import UpdaterConfig
    from coreupdater.updater_list import (
        CoreUpdaterList,
        parse_network_data,
        parse_pfd_data,
    )

    cfg = UpdaterConfig.load()
    _apply_debug_logging(cfg)

    if not argv:
        print(__doc__, file=sys.stderr)
        return 2

    paths = cfg.updater_paths()
    core_list = CoreUpdaterList()
    if argv[0] == "--pfd":
        ok = parse_pfd_data(core_list, paths, argv[1:])
    else:
        ok = parse_network_data(core_list, paths, Path(argv[0]).read_bytes())

    if not ok:
        print("No cores found.", file=sys.stderr)
        return 1
    _print_list(core_list)
    return 0


if __name__ == "__main__":
    sys.exit(main())
