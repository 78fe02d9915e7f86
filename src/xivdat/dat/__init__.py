"""
DAT Container Module
====================

Low-level access to binary DAT files: the type registry, the DATFile
container codec and the Section record codec.

Main Components
---------------
- **DATType**: File type enumeration and per-type constants
- **DATFile**: File-like access to the masked content region
- **Section**: Tag-length-value record used by section-based types

Example
-------
    >>> from xivdat.dat import DATFile, DATType, read_sections
    >>> with DATFile.open("MACRO.DAT") as dat_file:
    ...     if dat_file.file_type == DATType.MACRO:
    ...         sections = read_sections(dat_file)
"""

from xivdat.dat.types import (
    DATType,
    SECTION_BASED_TYPES,
    mask_for,
    terminator_for,
    default_max_size_for,
)

from xivdat.dat.file import (
    HEADER_SIZE,
    MAX_SIZE_OFFSET,
    DATFile,
    DATHeader,
    apply_mask,
    parse_header,
    check_type,
    read_content,
    write_content,
)

from xivdat.dat.section import (
    SECTION_HEADER_SIZE,
    MAX_SECTION_SIZE,
    Section,
    parse_section_header,
    as_section,
    as_section_list,
    sections_to_bytes,
    read_section,
    read_sections,
    read_section_content,
)

__all__ = [
    # Types
    "DATType",
    "SECTION_BASED_TYPES",
    "mask_for",
    "terminator_for",
    "default_max_size_for",
    # Container
    "HEADER_SIZE",
    "MAX_SIZE_OFFSET",
    "DATFile",
    "DATHeader",
    "apply_mask",
    "parse_header",
    "check_type",
    "read_content",
    "write_content",
    # Sections
    "SECTION_HEADER_SIZE",
    "MAX_SECTION_SIZE",
    "Section",
    "parse_section_header",
    "as_section",
    "as_section_list",
    "sections_to_bytes",
    "read_section",
    "read_sections",
    "read_section_content",
]
