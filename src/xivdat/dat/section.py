"""
DAT Section Records
===================

This module defines the Section record used by several DAT files, and
functions to decode and encode sequences of them.

A resource (a macro, a keybind, a recent tell) is made out of a repeating
pattern of Sections. Section-based file types are ACQ, KEYBIND, MACRO and
MACROSYS (see SECTION_BASED_TYPES).

Record Format
-------------
    Byte 0:     Tag (one UTF-8 character)
    Byte 1-2:   Content size (u16 little-endian), content bytes + 1
    Byte 3+:    Content (content size - 1 bytes of UTF-8)
    Last byte:  0x00 terminator

The content size therefore always counts the terminating NUL, and the
longest possible content is 0xFFFE bytes.

Decoding Convention
-------------------
Section.from_bytes() takes exactly one encoded record, terminator
included, and validates the terminator before stripping it. The same
rule applies to every record found by as_section_list().

Copyright (c) 2026 xivdat Contributors
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable, Union
import logging
import struct

from xivdat.dat.file import DATFile
from xivdat.errors import (
    BadEncodingError,
    DATOverflowError,
    EndOfFileError,
    InvalidInputError,
    MalformedBufferError,
    UnderflowError,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Length of a section header in bytes (tag + u16 size).
SECTION_HEADER_SIZE = 3

# Largest content_size value, NUL included.
MAX_SECTION_SIZE = 0xFFFF

SECTION_SIZE_FIELD = struct.Struct("<H")


def parse_section_header(data: bytes) -> tuple[str, int]:
    """
    Read a 3-byte section header.

    Returns:
        Tuple of (tag, content_size)

    Raises:
        UnderflowError: If fewer than 3 bytes are given
        BadEncodingError: If the tag is not a valid UTF-8 character

    Example:
        >>> parse_section_header(bytes([97, 1, 0]))
        ('a', 1)
    """
    if len(data) < SECTION_HEADER_SIZE:
        raise UnderflowError("Section header requires 3 bytes.")
    try:
        tag = data[:1].decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadEncodingError("Section tag is not a valid utf-8 character.") from e
    (content_size,) = SECTION_SIZE_FIELD.unpack_from(data, 1)
    return tag, content_size


# =============================================================================
# Section
# =============================================================================

@dataclass(frozen=True)
class Section:
    """
    A single tag-length-value record.

    Sections are immutable so content_size always matches the content.

    Attributes:
        tag: Single character type tag. Its meaning depends on the file
            type; some tags are reused with different meanings.
        content: Text content, without the terminating NUL
        content_size: Encoded content length in bytes, NUL included

    Example:
        >>> section = Section("T", "Title")
        >>> section.content_size
        6
        >>> section.to_bytes()
        b'T\\x06\\x00Title\\x00'
    """
    tag: str
    content: str
    content_size: int = field(init=False)

    def __post_init__(self) -> None:
        """Validate the tag and content and compute content_size."""
        if len(self.tag.encode("utf-8")) != 1:
            raise InvalidInputError("Tag must be exactly 1 byte.")
        if "\0" in self.content:
            raise InvalidInputError("Section content cannot contain NUL characters.")

        content_size = len(self.content.encode("utf-8")) + 1
        if content_size > MAX_SECTION_SIZE:
            raise DATOverflowError(
                f"Section content is {content_size - 1} bytes; "
                f"the maximum is {MAX_SECTION_SIZE - 1}."
            )
        object.__setattr__(self, "content_size", content_size)

    @classmethod
    def new(cls, tag: str, content: str) -> "Section":
        """Build a validated Section."""
        return cls(tag, content)

    def to_bytes(self) -> bytes:
        """Encode as tag || content_size || content || NUL."""
        return (
            self.tag.encode("utf-8")
            + SECTION_SIZE_FIELD.pack(self.content_size)
            + self.content.encode("utf-8")
            + b"\0"
        )

    def get_size(self) -> int:
        """Total encoded size in bytes."""
        return SECTION_HEADER_SIZE + self.content_size

    @classmethod
    def from_bytes(cls, data: bytes) -> "Section":
        """
        Decode exactly one encoded section.

        Raises:
            UnderflowError: If the data is shorter than declared, or the
                content contains a NUL before its declared end
            DATOverflowError: If the data is longer than declared, or the
                byte at the declared end is not NUL
            BadEncodingError: If the tag or content is not valid UTF-8
        """
        tag, content_size = parse_section_header(data)
        remaining = len(data) - SECTION_HEADER_SIZE

        if content_size > remaining:
            raise UnderflowError(
                "Data buffer is too small for content_size specified in header."
            )
        if content_size < remaining:
            raise DATOverflowError(
                "Data buffer is too large for content_size specified in header."
            )
        if content_size == 0:
            raise UnderflowError("Section content_size must include the terminating NUL.")

        payload = bytes(data[SECTION_HEADER_SIZE:-1])
        if data[-1] != 0:
            raise DATOverflowError("Section content is not terminated at its declared size.")
        if b"\0" in payload:
            raise UnderflowError("Section content is terminated before its declared size.")

        try:
            content = payload.decode("utf-8")
        except UnicodeDecodeError as e:
            raise BadEncodingError("Text data block did not contain valid utf-8.") from e

        return cls(tag, content)


# =============================================================================
# Buffer Functions
# =============================================================================

def as_section(data: bytes) -> Section:
    """Decode a single encoded section. See Section.from_bytes()."""
    return Section.from_bytes(data)


def as_section_list(data: bytes) -> list[Section]:
    """
    Decode a buffer holding a sequence of sections.

    The buffer must end exactly at the end of the last record.

    Raises:
        MalformedBufferError: If the buffer ends with a partial record
        UnderflowError, DATOverflowError, BadEncodingError: As for
            Section.from_bytes()
    """
    sections = []
    offset = 0
    buf_len = len(data)

    while offset < buf_len:
        if offset + SECTION_HEADER_SIZE > buf_len:
            raise MalformedBufferError(
                f"Partial section header at offset {offset}."
            )
        _, content_size = parse_section_header(data[offset:offset + SECTION_HEADER_SIZE])
        end = offset + SECTION_HEADER_SIZE + content_size
        if end > buf_len:
            raise MalformedBufferError(
                f"Section at offset {offset} declares {content_size} bytes; "
                f"only {buf_len - offset - SECTION_HEADER_SIZE} remain."
            )
        sections.append(Section.from_bytes(data[offset:end]))
        offset = end

    logger.debug(f"Decoded {len(sections)} sections from {buf_len} bytes")
    return sections


def sections_to_bytes(sections: Iterable[Section]) -> bytes:
    """Encode a sequence of sections back to back."""
    return b"".join(section.to_bytes() for section in sections)


# =============================================================================
# Stream Functions
# =============================================================================

def read_section(dat_file: DATFile) -> Section:
    """
    Read the next section from an open DAT file.

    Raises:
        EndOfFileError: If the content ends inside the header or payload
        UnderflowError, DATOverflowError, BadEncodingError: If the record
            is malformed
    """
    header = dat_file.read(SECTION_HEADER_SIZE)
    if len(header) < SECTION_HEADER_SIZE:
        raise EndOfFileError("Content ended before a section header.")

    _, content_size = parse_section_header(header)
    body = dat_file.read(content_size)
    if len(body) < content_size:
        raise EndOfFileError("Content ended before the end of a section.")

    return Section.from_bytes(header + body)


def read_sections(dat_file: DATFile) -> list[Section]:
    """
    Read all remaining sections from an open DAT file.

    At least one section must be present. Reading stops cleanly when the
    content ends between two records; a record cut short by the end of the
    content is still an error.

    Raises:
        EndOfFileError: If no section can be read or the last one is cut
    """
    sections = [read_section(dat_file)]
    content_end = dat_file.content_size - 1

    while True:
        position = dat_file.tell()
        try:
            sections.append(read_section(dat_file))
        except EndOfFileError:
            if position >= content_end:
                break
            logger.warning(f"Truncated section at offset {position} in {dat_file.name}")
            raise

    logger.debug(f"Read {len(sections)} sections from {dat_file.name}")
    return sections


def read_section_content(path: Union[str, Path]) -> list[Section]:
    """
    Read every section of a DAT file on disk.

    Example:
        >>> for section in read_section_content("KEYBIND.DAT"):
        ...     print(section.tag, section.content)
    """
    with DATFile.open(path) as dat_file:
        return read_sections(dat_file)
