"""
Macro Resources Module
======================

Typed access to the macros stored in MACRO.DAT and MACROSYS.DAT.

Main Components
---------------
- **Macro**: A single macro (title, icon, 15 lines)
- **MacroIcon**: The icons selectable from the macro GUI
- **read_macro_content / write_macro_content**: Whole-file access

Example
-------
    >>> from xivdat.macro import read_macro_content
    >>> macros = read_macro_content("MACRO.DAT")
    >>> [macro.title for macro in macros if macro.title]
"""

from xivdat.macro.icon import (
    MacroIcon,
    icon_to_key_and_id,
    icon_from_key_and_id,
)

from xivdat.macro.resource import (
    EXPECTED_ITEM_COUNT,
    MACRO_LINE_COUNT,
    MAX_TITLE_LENGTH,
    MAX_LINE_LENGTH,
    SECTION_TAG_TITLE,
    SECTION_TAG_ICON,
    SECTION_TAG_KEY,
    SECTION_TAG_LINE,
    Macro,
    as_macro,
    as_macro_list,
    read_macro,
    read_macro_content,
    to_writeable_bytes,
    to_writeable_bytes_unsafe,
    write_macro_content,
)

__all__ = [
    # Icons
    "MacroIcon",
    "icon_to_key_and_id",
    "icon_from_key_and_id",
    # Constants
    "EXPECTED_ITEM_COUNT",
    "MACRO_LINE_COUNT",
    "MAX_TITLE_LENGTH",
    "MAX_LINE_LENGTH",
    "SECTION_TAG_TITLE",
    "SECTION_TAG_ICON",
    "SECTION_TAG_KEY",
    "SECTION_TAG_LINE",
    # Macros
    "Macro",
    "as_macro",
    "as_macro_list",
    "read_macro",
    "read_macro_content",
    "to_writeable_bytes",
    "to_writeable_bytes_unsafe",
    "write_macro_content",
]
