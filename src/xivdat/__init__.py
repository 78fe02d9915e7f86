"""
xivdat - Reader and Writer for FINAL FANTASY XIV DAT Files
==========================================================

This package reads and writes the binary DAT files the FINAL FANTASY XIV
client keeps in its per-character settings folders (FFXIV_CHR...).

A binary DAT file is a fixed 17-byte header, an XOR masked content
region and null padding. Several file types store their content as a
sequence of tag-length-value Sections; macros are built on top of those.

Main Components
---------------
- **dat**: Type registry, container codec and section records
    DATType, DATFile, Section and whole-file helpers

- **macro**: Macro resources
    Macro, MacroIcon and whole-file macro helpers

- **cli**: The `xivdat` command-line tool

Quick Start
-----------
Read the raw content of any DAT file:
    >>> from xivdat import read_content
    >>> content = read_content("KEYBIND.DAT")

Read the sections of a section-based file:
    >>> from xivdat import read_section_content
    >>> for section in read_section_content("KEYBIND.DAT"):
    ...     print(section.tag, section.content)

Edit macros:
    >>> from xivdat import Macro, MacroIcon, read_macro_content, write_macro_content
    >>> macros = read_macro_content("MACRO.DAT")
    >>> macros[0] = Macro.new("Hello", ["/say Hello!"], MacroIcon.SYMBOL_SPEECH)
    >>> write_macro_content("MACRO.DAT", macros)

Or use the command-line tool:
    $ xivdat info MACRO.DAT
    $ xivdat macros MACRO.DAT

Plaintext DAT files (COMMON.DAT, CONTROL0.DAT, ...) are not binary DAT
files and are rejected with BadHeaderError.

Copyright (c) 2026 xivdat Contributors
"""

__version__ = "0.3.0"

# =============================================================================
# Public API Exports
# =============================================================================

from xivdat.errors import (
    ErrorKind,
    DATError,
    BadHeaderError,
    BadEncodingError,
    EndOfFileError,
    DATOverflowError,
    UnderflowError,
    MalformedBufferError,
    IncorrectTypeError,
    InvalidInputError,
    StorageIOError,
)

from xivdat.config import DATConfig, get_config, set_config

from xivdat.dat import (
    DATType,
    DATFile,
    DATHeader,
    Section,
    check_type,
    read_content,
    write_content,
    as_section,
    as_section_list,
    read_section,
    read_sections,
    read_section_content,
)

from xivdat.macro import (
    Macro,
    MacroIcon,
    read_macro,
    read_macro_content,
    write_macro_content,
)

__all__ = [
    "__version__",
    # Errors
    "ErrorKind",
    "DATError",
    "BadHeaderError",
    "BadEncodingError",
    "EndOfFileError",
    "DATOverflowError",
    "UnderflowError",
    "MalformedBufferError",
    "IncorrectTypeError",
    "InvalidInputError",
    "StorageIOError",
    # Configuration
    "DATConfig",
    "get_config",
    "set_config",
    # Container
    "DATType",
    "DATFile",
    "DATHeader",
    "check_type",
    "read_content",
    "write_content",
    # Sections
    "Section",
    "as_section",
    "as_section_list",
    "read_section",
    "read_sections",
    "read_section_content",
    # Macros
    "Macro",
    "MacroIcon",
    "read_macro",
    "read_macro_content",
    "write_macro_content",
]
