"""Tests for building list entries from listing records."""

import os
from pathlib import Path

import pytest

from coreupdater.core.core_info import CoreUpdaterInfo
from coreupdater.updater_list.builder import (
    build_from_fields,
    build_from_filename,
    parse_checksum,
    parse_date,
    split_licenses,
)
from coreupdater.updater_list.entry_list import CoreUpdaterList
from coreupdater.updater_list.models import CoreDate, UpdaterPaths


def _make_paths(tmp_path: Path, url: str = "http://buildbot/") -> UpdaterPaths:
    return UpdaterPaths(
        core_dir=str(tmp_path / "cores"),
        info_dir=str(tmp_path / "info"),
        buildbot_url=url,
    )


def _provider(infos: dict[str, CoreUpdaterInfo]):
    """Info provider keyed by info file basename."""
    calls: list[str] = []

    def lookup(info_path: str) -> CoreUpdaterInfo | None:
        calls.append(info_path)
        return infos.get(os.path.basename(info_path))

    lookup.calls = calls
    return lookup


_SNES9X_INFO = CoreUpdaterInfo(
    display_name="Nintendo - SNES / SFC (Snes9x)",
    description="Portable SNES emulator",
    licenses="Non-commercial|GPLv2",
    is_experimental=False,
)


class TestParseDate:
    def test_valid_date(self) -> None:
        assert parse_date("2023-01-15") == CoreDate(2023, 1, 15)

    def test_empty_components_skipped(self) -> None:
        assert parse_date("2023--01-15") == CoreDate(2023, 1, 15)

    def test_non_numeric_component_becomes_zero(self) -> None:
        assert parse_date("2023-xx-15") == CoreDate(2023, 0, 15)
        assert parse_date("2023-01-15abc") == CoreDate(2023, 1, 0)

    @pytest.mark.parametrize("value", ["", "2023-01", "2023", "--"])
    def test_too_few_components(self, value: str) -> None:
        assert parse_date(value) is None


class TestParseChecksum:
    def test_hex(self) -> None:
        assert parse_checksum("deadbeef") == 0xDEADBEEF
        assert parse_checksum("CAFEBABE") == 0xCAFEBABE

    def test_prefix(self) -> None:
        assert parse_checksum("0x1234abcd") == 0x1234ABCD

    def test_invalid_is_zero(self) -> None:
        assert parse_checksum("") == 0
        assert parse_checksum("zzzz") == 0
        assert parse_checksum("00000000") == 0

    def test_truncated_to_32_bits(self) -> None:
        assert parse_checksum("1ffffffff") == 0xFFFFFFFF


class TestSplitLicenses:
    def test_split_and_skip_empty(self) -> None:
        assert split_licenses("GPLv2||MIT|") == ["GPLv2", "MIT"]
        assert split_licenses("") == []


class TestBuildFromFields:
    def test_adds_entry_with_core_info(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        provider = _provider({"snes9x_libretro.info": _SNES9X_INFO})

        added = build_from_fields(
            core_list, _make_paths(tmp_path),
            "2023-01-15", "deadbeef", "snes9x_libretro.so.zip",
            info_provider=provider,
        )

        assert added
        entry = core_list.get_at(0)
        assert entry.remote_filename == "snes9x_libretro.so.zip"
        assert entry.remote_core_path == "http://buildbot/snes9x_libretro.so.zip"
        assert entry.display_name == "Nintendo - SNES / SFC (Snes9x)"
        assert entry.description == "Portable SNES emulator"
        assert entry.licenses == ["Non-commercial", "GPLv2"]
        assert entry.is_experimental is False
        assert entry.checksum == 0xDEADBEEF
        assert entry.release_date == CoreDate(2023, 1, 15)
        assert provider.calls == [entry.local_info_path]

    def test_duplicate_filename_skipped(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        provider = _provider({})
        paths = _make_paths(tmp_path)

        assert build_from_fields(
            core_list, paths, "2023-01-15", "deadbeef", "a_libretro.so", info_provider=provider,
        )
        assert not build_from_fields(
            core_list, paths, "2024-02-02", "cafebabe", "a_libretro.so", info_provider=provider,
        )
        assert core_list.size() == 1
        assert core_list.get_at(0).checksum == 0xDEADBEEF

    def test_zero_checksum_dropped(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        assert not build_from_fields(
            core_list, _make_paths(tmp_path), "2023-01-15", "00000000", "a_libretro.so",
            info_provider=_provider({}),
        )
        assert core_list.size() == 0

    def test_bad_date_dropped(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        assert not build_from_fields(
            core_list, _make_paths(tmp_path), "2023-01", "deadbeef", "a_libretro.so",
            info_provider=_provider({}),
        )
        assert core_list.size() == 0

    def test_missing_buildbot_url_dropped(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        assert not build_from_fields(
            core_list, _make_paths(tmp_path, url=""), "2023-01-15", "deadbeef", "a_libretro.so",
            info_provider=_provider({}),
        )
        assert core_list.size() == 0

    def test_missing_info_falls_back_to_filename(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        build_from_fields(
            core_list, _make_paths(tmp_path), "2023-01-15", "deadbeef", "a_libretro.so",
            info_provider=_provider({}),
        )
        entry = core_list.get_at(0)
        assert entry.display_name == "a_libretro.so"
        assert entry.is_experimental is True
        assert entry.description == ""
        assert entry.licenses == []

    def test_blank_display_name_falls_back_to_filename(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        info = CoreUpdaterInfo(display_name="", description="ignored", licenses="MIT")
        build_from_fields(
            core_list, _make_paths(tmp_path), "2023-01-15", "deadbeef", "a_libretro.so",
            info_provider=_provider({"a_libretro.info": info}),
        )
        entry = core_list.get_at(0)
        assert entry.display_name == "a_libretro.so"
        assert entry.is_experimental is True
        assert entry.description == ""

    def test_experimental_flag_copied(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        info = CoreUpdaterInfo(display_name="Sony - PlayStation 3 (RPCS3)", is_experimental=True)
        build_from_fields(
            core_list, _make_paths(tmp_path), "2023-01-15", "deadbeef", "rpcs3_libretro.so",
            info_provider=_provider({"rpcs3_libretro.info": info}),
        )
        assert core_list.get_at(0).is_experimental is True


class TestBuildFromFilename:
    def test_pfd_entry_has_no_date_or_checksum(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        added = build_from_filename(
            core_list, _make_paths(tmp_path, url=""), "snes9x_libretro_android.so",
            info_provider=_provider({"snes9x_libretro.info": _SNES9X_INFO}),
        )
        assert added
        entry = core_list.get_at(0)
        assert entry.checksum == 0
        assert entry.release_date == CoreDate()
        assert entry.remote_core_path == ""
        assert entry.display_name == "Nintendo - SNES / SFC (Snes9x)"

    def test_empty_filename_ignored(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        assert not build_from_filename(core_list, _make_paths(tmp_path), "", _provider({}))
        assert core_list.size() == 0

    def test_duplicate_skipped(self, tmp_path: Path) -> None:
        core_list = CoreUpdaterList()
        paths = _make_paths(tmp_path)
        assert build_from_filename(core_list, paths, "a_libretro.so", _provider({}))
        assert not build_from_filename(core_list, paths, "a_libretro.so", _provider({}))
        assert core_list.size() == 1
