"""
DAT File Type Registry
======================

This module identifies DAT files by the type code stored in the first four
header bytes, and supplies the per-type constants needed to read and create
them.

Type Codes
----------
The first header field is a little-endian u32 whose low and high 16-bit
halves are each <byte, 0x00>. Known values:

    Code        Type            File name
    ----------  --------------  ----------------------------
    0x006B0005  Gearset         GEARSET.DAT
    0x0067000A  Gold Saucer     GS.DAT
    0x00040002  Hotbar          HOTBAR.DAT
    0x00CA0008  Item Finder     ITEMFDR.DAT
    0x00670007  Item Order      ITEMODR.DAT
    0x00650003  Keybind         KEYBIND.DAT
    0x00030004  Log Filter      LOGFLTR.DAT
    0x00020001  Macro           MACRO.DAT / MACROSYS.DAT
    0x00640006  Recent Tells    ACQ.DAT
    0x00010009  UI Save         UISAVE.DAT

Per-Type Constants
------------------
- Mask: XOR byte applied to every content byte (0x73 or 0x31)
- Terminator: the last header byte; purpose unknown, fixed per type
- Default max size: the content region size the game client allocates

Types with no documented value (including UNKNOWN) return None.

Copyright (c) 2026 xivdat Contributors
"""

from enum import IntEnum
from pathlib import PurePath
from typing import Optional, Union


# =============================================================================
# File Type Enumeration
# =============================================================================

class DATType(IntEnum):
    """
    Known DAT file types, valued by their header type code.

    File types may be referenced by a descriptive name (GOLD_SAUCER) or by
    the file name the game uses (GS). Both spellings are the same member:
    DATType.GOLD_SAUCER is DATType.GS.
    """
    GEARSET = 0x006B0005
    GOLD_SAUCER = 0x0067000A
    HOTBAR = 0x00040002
    ITEM_FINDER = 0x00CA0008
    ITEM_ORDER = 0x00670007
    KEYBIND = 0x00650003
    LOG_FILTER = 0x00030004
    MACRO = 0x00020001
    RECENT_TELLS = 0x00640006
    UI_SAVE = 0x00010009
    UNKNOWN = 0

    # File name aliases
    ACQ = 0x00640006
    GS = 0x0067000A
    ITEMFDR = 0x00CA0008
    ITEMODR = 0x00670007
    LOGFLTR = 0x00030004
    MACROSYS = 0x00020001
    UISAVE = 0x00010009

    @classmethod
    def identify(cls, type_code: int) -> "DATType":
        """
        Convert a header type code to a DATType.

        Never fails: unrecognized codes map to UNKNOWN.
        """
        try:
            return cls(type_code)
        except ValueError:
            return cls.UNKNOWN

    @classmethod
    def from_filename(cls, filename: Union[str, PurePath]) -> "DATType":
        """
        Guess a DATType from a game file name such as "MACROSYS.DAT".

        Returns UNKNOWN when the stem is not a known file name.
        """
        stem = PurePath(filename).stem.upper()
        if stem in _FILENAME_TYPES:
            return _FILENAME_TYPES[stem]
        return cls.UNKNOWN

    def get_description(self) -> str:
        """Get a human-readable description of the file type."""
        return _DESCRIPTIONS.get(self, f"Unknown (0x{int(self):08X})")


_FILENAME_TYPES = {
    "ACQ": DATType.RECENT_TELLS,
    "GEARSET": DATType.GEARSET,
    "GS": DATType.GOLD_SAUCER,
    "HOTBAR": DATType.HOTBAR,
    "ITEMFDR": DATType.ITEM_FINDER,
    "ITEMODR": DATType.ITEM_ORDER,
    "KEYBIND": DATType.KEYBIND,
    "LOGFLTR": DATType.LOG_FILTER,
    "MACRO": DATType.MACRO,
    "MACROSYS": DATType.MACRO,
    "UISAVE": DATType.UI_SAVE,
}

_DESCRIPTIONS = {
    DATType.GEARSET: "Gearsets (GEARSET.DAT)",
    DATType.GOLD_SAUCER: "Gold Saucer config (GS.DAT)",
    DATType.HOTBAR: "Hotbar layouts (HOTBAR.DAT)",
    DATType.ITEM_FINDER: "Item finder index (ITEMFDR.DAT)",
    DATType.ITEM_ORDER: "Item order (ITEMODR.DAT)",
    DATType.KEYBIND: "Keybinds (KEYBIND.DAT)",
    DATType.LOG_FILTER: "Chat log filters (LOGFLTR.DAT)",
    DATType.MACRO: "Macros (MACRO.DAT / MACROSYS.DAT)",
    DATType.RECENT_TELLS: "Recent tells (ACQ.DAT)",
    DATType.UI_SAVE: "UI config (UISAVE.DAT)",
    DATType.UNKNOWN: "Unknown",
}


# DAT types whose content is a sequence of Sections.
SECTION_BASED_TYPES = (DATType.RECENT_TELLS, DATType.KEYBIND, DATType.MACRO)


# =============================================================================
# Per-Type Constants
# =============================================================================

_MASKS = {
    DATType.GEARSET: 0x73,
    DATType.GOLD_SAUCER: 0x73,
    DATType.ITEM_FINDER: 0x73,
    DATType.ITEM_ORDER: 0x73,
    DATType.KEYBIND: 0x73,
    DATType.MACRO: 0x73,
    DATType.RECENT_TELLS: 0x73,
    DATType.HOTBAR: 0x31,
    DATType.UI_SAVE: 0x31,
}

_TERMINATORS = {
    DATType.GEARSET: 0xFF,
    DATType.GOLD_SAUCER: 0xFF,
    DATType.ITEM_FINDER: 0xFF,
    DATType.ITEM_ORDER: 0xFF,
    DATType.KEYBIND: 0xFF,
    DATType.MACRO: 0xFF,
    DATType.RECENT_TELLS: 0xFF,
    DATType.HOTBAR: 0x31,
    DATType.UI_SAVE: 0x21,
}

_DEFAULT_MAX_SIZES = {
    DATType.GEARSET: 44849,
    DATType.GOLD_SAUCER: 649,
    DATType.HOTBAR: 204800,
    DATType.ITEM_FINDER: 14030,
    DATType.ITEM_ORDER: 15193,
    DATType.KEYBIND: 20480,
    DATType.MACRO: 286720,
    DATType.RECENT_TELLS: 2048,
    DATType.UI_SAVE: 64512,
}


def mask_for(file_type: DATType) -> Optional[int]:
    """
    Get the XOR mask applied to the content of a DAT file.

    The mask covers only the content region, never the header, footer or
    padding. Returns None for unknown types and types with no mask.

    Example:
        >>> mask = mask_for(DATType.MACRO)
        >>> plain = bytes(b ^ mask for b in masked_content)
    """
    return _MASKS.get(file_type)


def terminator_for(file_type: DATType) -> Optional[int]:
    """
    Get the default header end byte for a DAT type.

    The purpose of this byte is unknown, but it is fixed per file type.
    Returns None if the type is unknown.
    """
    return _TERMINATORS.get(file_type)


def default_max_size_for(file_type: DATType) -> Optional[int]:
    """
    Get the default maximum content size for a DAT type.

    Returns None if the type is unknown or has no standard size.
    """
    return _DEFAULT_MAX_SIZES.get(file_type)
