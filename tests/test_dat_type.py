"""
DAT Type Registry Tests
=======================

Tests for DATType identification and the per-type constants.
"""

import pytest

from xivdat.dat import (
    DATType,
    SECTION_BASED_TYPES,
    mask_for,
    terminator_for,
    default_max_size_for,
)


# =============================================================================
# Identification Tests
# =============================================================================

class TestIdentify:
    """Tests for DATType.identify()."""

    @pytest.mark.parametrize("code,expected", [
        (0x006B0005, DATType.GEARSET),
        (0x0067000A, DATType.GOLD_SAUCER),
        (0x00040002, DATType.HOTBAR),
        (0x00CA0008, DATType.ITEM_FINDER),
        (0x00670007, DATType.ITEM_ORDER),
        (0x00650003, DATType.KEYBIND),
        (0x00030004, DATType.LOG_FILTER),
        (0x00020001, DATType.MACRO),
        (0x00640006, DATType.RECENT_TELLS),
        (0x00010009, DATType.UI_SAVE),
    ])
    def test_known_codes(self, code, expected):
        """Every known type code maps to its type."""
        assert DATType.identify(code) is expected

    def test_unknown_code(self):
        """Unrecognized codes map to UNKNOWN instead of failing."""
        assert DATType.identify(0x00990099) is DATType.UNKNOWN
        assert DATType.identify(0) is DATType.UNKNOWN

    def test_aliases_are_same_member(self):
        """File name aliases are the same members as the descriptive names."""
        assert DATType.GS is DATType.GOLD_SAUCER
        assert DATType.MACROSYS is DATType.MACRO
        assert DATType.ACQ is DATType.RECENT_TELLS
        assert DATType.UISAVE is DATType.UI_SAVE


class TestFromFilename:
    """Tests for DATType.from_filename()."""

    def test_game_file_names(self):
        """Game file names map to their types."""
        assert DATType.from_filename("MACRO.DAT") is DATType.MACRO
        assert DATType.from_filename("MACROSYS.DAT") is DATType.MACRO
        assert DATType.from_filename("acq.dat") is DATType.RECENT_TELLS

    def test_path_is_accepted(self, tmp_path):
        """Directories in the path are ignored."""
        assert DATType.from_filename(tmp_path / "KEYBIND.DAT") is DATType.KEYBIND

    def test_unknown_name(self):
        """Unknown file names map to UNKNOWN."""
        assert DATType.from_filename("COMMON.DAT") is DATType.UNKNOWN


class TestDescription:
    """Tests for DATType.get_description()."""

    def test_known_description(self):
        """Known types describe their file name."""
        assert "MACRO.DAT" in DATType.MACRO.get_description()

    def test_unknown_description(self):
        """UNKNOWN has a description."""
        assert DATType.UNKNOWN.get_description() == "Unknown"


# =============================================================================
# Per-Type Constant Tests
# =============================================================================

class TestMasks:
    """Tests for mask_for()."""

    @pytest.mark.parametrize("dat_type", [
        DATType.GEARSET,
        DATType.GOLD_SAUCER,
        DATType.ITEM_FINDER,
        DATType.ITEM_ORDER,
        DATType.KEYBIND,
        DATType.MACRO,
        DATType.RECENT_TELLS,
    ])
    def test_mask_0x73(self, dat_type):
        """Most types are masked with 0x73."""
        assert mask_for(dat_type) == 0x73

    def test_mask_0x31(self):
        """Hotbar and UI save files are masked with 0x31."""
        assert mask_for(DATType.HOTBAR) == 0x31
        assert mask_for(DATType.UI_SAVE) == 0x31

    def test_no_mask(self):
        """Log filter and unknown files have no mask."""
        assert mask_for(DATType.LOG_FILTER) is None
        assert mask_for(DATType.UNKNOWN) is None


class TestTerminators:
    """Tests for terminator_for()."""

    def test_terminators(self):
        """Header end bytes match the game defaults."""
        assert terminator_for(DATType.MACRO) == 0xFF
        assert terminator_for(DATType.HOTBAR) == 0x31
        assert terminator_for(DATType.UI_SAVE) == 0x21

    def test_unknown_terminator(self):
        """Types with no documented end byte return None."""
        assert terminator_for(DATType.LOG_FILTER) is None
        assert terminator_for(DATType.UNKNOWN) is None


class TestDefaultMaxSizes:
    """Tests for default_max_size_for()."""

    @pytest.mark.parametrize("dat_type,size", [
        (DATType.GEARSET, 44849),
        (DATType.GOLD_SAUCER, 649),
        (DATType.HOTBAR, 204800),
        (DATType.ITEM_FINDER, 14030),
        (DATType.ITEM_ORDER, 15193),
        (DATType.KEYBIND, 20480),
        (DATType.MACRO, 286720),
        (DATType.RECENT_TELLS, 2048),
        (DATType.UI_SAVE, 64512),
    ])
    def test_default_sizes(self, dat_type, size):
        """Default max sizes match the game client."""
        assert default_max_size_for(dat_type) == size

    def test_unknown_size(self):
        """UNKNOWN has no default max size."""
        assert default_max_size_for(DATType.UNKNOWN) is None


def test_section_based_types():
    """Only tells, keybinds and macros are section based."""
    assert set(SECTION_BASED_TYPES) == {
        DATType.RECENT_TELLS,
        DATType.KEYBIND,
        DATType.MACRO,
    }
