"""
Macro Resources
===============

This module maps the Sections of MACRO.DAT and MACROSYS.DAT files to Macro
objects and back.

Macro Structure
---------------
A single macro is stored as 18 consecutive sections:

    Tag  Count  Content
    ---  -----  -------
    T    1      Title (at most 20 characters)
    I    1      Icon id (7 hex digits)
    K    1      Icon key (3 hex digits)
    L    15     Lines (at most 180 characters each)

A macro file always holds exactly 100 macros. Unused slots are blank
macros with no icon.

Validation
----------
Macro.validate() returns the first violation instead of raising, in this
order: title too long, icon pair not registered, fewer than 15 lines,
more than 15 lines, line too long. Structural problems (wrong tags, too
few sections) are raised by from_sections_unsafe() as InvalidInputError.

Usage Examples
--------------
Reading every macro of a file:
    >>> from xivdat.macro import read_macro_content
    >>> for macro in read_macro_content("MACRO.DAT"):
    ...     print(macro.title)

Writing macros back:
    >>> from xivdat.macro import Macro, MacroIcon, write_macro_content
    >>> macro = Macro.new("Hello", ["/say Hello!"], MacroIcon.SYMBOL_SPEECH)
    >>> write_macro_content("MACRO.DAT", [macro])

Copyright (c) 2026 xivdat Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional, Sequence, Union
import logging

from xivdat.dat.file import DATFile, check_type, write_content
from xivdat.dat.section import (
    Section,
    as_section_list,
    read_section,
    read_sections,
    sections_to_bytes,
)
from xivdat.dat.types import DATType
from xivdat.errors import (
    DATError,
    DATOverflowError,
    EndOfFileError,
    IncorrectTypeError,
    InvalidInputError,
    UnderflowError,
)
from xivdat.macro.icon import MacroIcon, icon_from_key_and_id, icon_to_key_and_id

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Number of macros in a macro file.
EXPECTED_ITEM_COUNT = 100

# Number of line sections per macro.
MACRO_LINE_COUNT = 15

# Limits enforced by the game client (characters, not bytes).
MAX_TITLE_LENGTH = 20
MAX_LINE_LENGTH = 180

SECTION_TAG_TITLE = "T"
SECTION_TAG_ICON = "I"
SECTION_TAG_KEY = "K"
SECTION_TAG_LINE = "L"


# =============================================================================
# Macro
# =============================================================================

@dataclass
class Macro:
    """
    A single macro from a MACRO or MACROSYS DAT file.

    Attributes:
        title: Macro title
        icon_key: Icon key section content (3 hex digits)
        icon_id: Icon id section content (7 hex digits)
        lines: Macro lines; a valid macro has exactly 15

    Example:
        >>> macro = Macro.new("Title", ["Circle"], MacroIcon.SYMBOL_CIRCLE)
        >>> len(macro.lines)
        15
        >>> macro.get_icon()
        <MacroIcon.SYMBOL_CIRCLE: ('039', '0010301')>
    """
    title: str = ""
    icon_key: str = MacroIcon.NO_ICON.key
    icon_id: str = MacroIcon.NO_ICON.id
    lines: list[str] = field(default_factory=lambda: [""] * MACRO_LINE_COUNT)

    @classmethod
    def new(
        cls,
        title: str,
        lines: Sequence[str],
        icon: MacroIcon = MacroIcon.NO_ICON,
    ) -> "Macro":
        """
        Build a validated macro.

        Lines are padded with empty strings up to 15.

        Raises:
            DATOverflowError, UnderflowError, InvalidInputError: The first
                validation error, see validate()
        """
        icon_key, icon_id = icon_to_key_and_id(icon)
        padded_lines = list(lines)
        if len(padded_lines) < MACRO_LINE_COUNT:
            padded_lines.extend([""] * (MACRO_LINE_COUNT - len(padded_lines)))

        macro = cls(title=title, icon_key=icon_key, icon_id=icon_id, lines=padded_lines)
        error = macro.validate()
        if error is not None:
            raise error
        return macro

    @classmethod
    def blank(cls) -> "Macro":
        """An empty macro with no icon, as used for unused slots."""
        return cls()

    # =========================================================================
    # Section Mapping
    # =========================================================================

    @classmethod
    def from_sections_unsafe(cls, sections: Sequence[Section]) -> "Macro":
        """
        Build a macro from its sections without validating the content.

        The sections must follow the pattern T, I, K, L...; line count and
        lengths are not checked.

        Raises:
            InvalidInputError: If there are fewer than 4 sections or a tag
                is out of place
        """
        if len(sections) < 4:
            raise InvalidInputError("Macros require a minimum of 4 sections.")
        if sections[0].tag != SECTION_TAG_TITLE:
            raise InvalidInputError("First section was not a Title (T) section.")
        if sections[1].tag != SECTION_TAG_ICON:
            raise InvalidInputError("Second section was not an Icon (I) section.")
        if sections[2].tag != SECTION_TAG_KEY:
            raise InvalidInputError("Third section was not a Key (K) section.")

        lines = []
        for section in sections[3:]:
            if section.tag != SECTION_TAG_LINE:
                raise InvalidInputError("Non-line (L) section in lines block.")
            lines.append(section.content)

        return cls(
            title=sections[0].content,
            icon_key=sections[2].content,
            icon_id=sections[1].content,
            lines=lines,
        )

    @classmethod
    def from_sections(cls, sections: Sequence[Section]) -> "Macro":
        """
        Build a macro from its sections and validate it.

        Raises:
            InvalidInputError: For structural errors (see
                from_sections_unsafe) or an unregistered icon
            DATOverflowError, UnderflowError: For content errors
        """
        macro = cls.from_sections_unsafe(sections)
        error = macro.validate()
        if error is not None:
            raise error
        return macro

    def to_sections(self) -> list[Section]:
        """
        Convert to sections in T, I, K, L... order.

        Raises:
            DATOverflowError: If any content is too long for a section
        """
        sections = [
            Section(SECTION_TAG_TITLE, self.title),
            Section(SECTION_TAG_ICON, self.icon_id),
            Section(SECTION_TAG_KEY, self.icon_key),
        ]
        for line in self.lines:
            sections.append(Section(SECTION_TAG_LINE, line))
        return sections

    def to_bytes(self) -> bytes:
        """Encode the macro as it is stored in a macro file."""
        return sections_to_bytes(self.to_sections())

    # =========================================================================
    # Icon
    # =========================================================================

    def get_icon(self) -> Optional[MacroIcon]:
        """The MacroIcon for the key and id, or None if unregistered."""
        return icon_from_key_and_id(self.icon_key, self.icon_id)

    def change_icon(self, icon: MacroIcon) -> None:
        """Replace the icon key and id together."""
        self.icon_key, self.icon_id = icon_to_key_and_id(icon)

    # =========================================================================
    # Validation
    # =========================================================================

    def validate(self) -> Optional[DATError]:
        """
        Check the macro against the limits of the game client.

        Returns:
            The first error found, or None if the macro is valid
        """
        if len(self.title) > MAX_TITLE_LENGTH:
            return DATOverflowError(f"Title is longer than {MAX_TITLE_LENGTH} characters.")
        if self.get_icon() is None:
            return InvalidInputError("Macro icon is invalid.")
        if len(self.lines) < MACRO_LINE_COUNT:
            return UnderflowError(f"Macro has fewer than {MACRO_LINE_COUNT} lines.")
        if len(self.lines) > MACRO_LINE_COUNT:
            return DATOverflowError(f"Macro has more than {MACRO_LINE_COUNT} lines.")
        for line in self.lines:
            if len(line) > MAX_LINE_LENGTH:
                return DATOverflowError(f"Line is longer than {MAX_LINE_LENGTH} characters.")
        return None

    def is_blank(self) -> bool:
        """True if the macro has no title, no icon and only empty lines."""
        return (
            not self.title
            and self.get_icon() == MacroIcon.NO_ICON
            and not any(self.lines)
        )


# =============================================================================
# Grouping
# =============================================================================

def _group_macros(sections: Sequence[Section]) -> list[Macro]:
    """Split a section stream into macros, starting one at each Title."""
    macros = []
    group: list[Section] = []
    for section in sections:
        if section.tag == SECTION_TAG_TITLE and group:
            macros.append(Macro.from_sections_unsafe(group))
            group = []
        group.append(section)
    if group:
        macros.append(Macro.from_sections_unsafe(group))
    return macros


def as_macro(data: bytes) -> Macro:
    """
    Decode the bytes of a single macro without validating its content.

    Raises:
        InvalidInputError: If the sections are not a single macro
    """
    return Macro.from_sections_unsafe(as_section_list(data))


def as_macro_list(data: bytes) -> list[Macro]:
    """
    Decode a macro file content buffer into macros.

    The macros are not validated; see Macro.validate().
    """
    return _group_macros(as_section_list(data))


# =============================================================================
# File Functions
# =============================================================================

def _require_macro_type(file_type: DATType) -> None:
    if file_type != DATType.MACRO:
        raise IncorrectTypeError(
            f"Attempted to read a macro from a non-macro file ({file_type.name})."
        )


def read_macro(dat_file: DATFile) -> Macro:
    """
    Read the next macro from an open macro file.

    The file must be positioned at a Title section. Reading stops before
    the next Title section or at the end of the content, so repeated calls
    walk the file macro by macro. The macro is not validated.

    Raises:
        IncorrectTypeError: If the file is not a macro file
        EndOfFileError: If no section is left to read
    """
    _require_macro_type(dat_file.file_type)

    group = [read_section(dat_file)]
    while True:
        position = dat_file.tell()
        try:
            section = read_section(dat_file)
        except EndOfFileError:
            break
        if section.tag == SECTION_TAG_TITLE:
            dat_file.seek(position)
            break
        group.append(section)
    return Macro.from_sections_unsafe(group)


def read_macro_content(path: Union[str, Path]) -> list[Macro]:
    """
    Read every macro of a macro file.

    The macros are not validated; see Macro.validate().

    Raises:
        IncorrectTypeError: If the file is not a macro file
    """
    with DATFile.open(path) as dat_file:
        _require_macro_type(dat_file.file_type)
        sections = read_sections(dat_file)

    macros = _group_macros(sections)
    logger.debug(f"Read {len(macros)} macros from {path}")
    return macros


def to_writeable_bytes(macros: Sequence[Macro]) -> bytes:
    """
    Encode macros as the complete content of a macro file.

    Lists shorter than 100 are padded with blank macros. Every macro is
    validated before any bytes are produced.

    Raises:
        DATOverflowError: If more than 100 macros are given
        DATOverflowError, UnderflowError, InvalidInputError: The first
            validation error of any macro
    """
    if len(macros) > EXPECTED_ITEM_COUNT:
        raise DATOverflowError(
            f"A valid macro file cannot contain more than {EXPECTED_ITEM_COUNT} macros."
        )

    padded = list(macros)
    padded.extend(Macro.blank() for _ in range(EXPECTED_ITEM_COUNT - len(padded)))

    for index, macro in enumerate(padded):
        error = macro.validate()
        if error is not None:
            logger.debug(f"Macro {index} failed validation: {error}")
            raise error

    return to_writeable_bytes_unsafe(padded)


def to_writeable_bytes_unsafe(macros: Sequence[Macro]) -> bytes:
    """Encode macros back to back, without padding or validation."""
    return b"".join(macro.to_bytes() for macro in macros)


def write_macro_content(path: Union[str, Path], macros: Sequence[Macro]) -> int:
    """
    Replace every macro of an existing macro file.

    Nothing is written unless all macros are valid.

    Returns:
        Number of content bytes written

    Raises:
        IncorrectTypeError: If the file is not a macro file
    """
    file_type = check_type(path)
    if file_type != DATType.MACRO:
        raise IncorrectTypeError(
            f"Attempted to write macros to a non-macro file ({file_type.name})."
        )

    content = to_writeable_bytes(macros)
    written = write_content(path, content)
    logger.debug(f"Wrote {len(macros)} macros ({written} bytes) to {path}")
    return written
