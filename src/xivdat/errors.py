"""
xivdat Error Hierarchy
======================

This module defines the exception hierarchy for the whole library.
All exceptions inherit from DATError, allowing callers to catch every
DAT-related failure with a single except clause if desired.

Exception Hierarchy
-------------------
DATError (base)
├── BadHeaderError - header absent, truncated or inconsistent
├── DATOverflowError - a size or count exceeds its maximum
├── UnderflowError - data shorter than declared or required
│   └── MalformedBufferError - trailing partial record in a buffer
├── EndOfFileError - stream ended in the middle of a record
├── BadEncodingError - text block is not valid UTF-8
├── IncorrectTypeError - operation needs a different DAT file type
├── InvalidInputError - structural or argument violation
└── StorageIOError - wrapped error from the underlying file

Design Notes
------------
Structural parse errors (BadHeaderError, BadEncodingError, EndOfFileError)
and validation errors (DATOverflowError, UnderflowError, InvalidInputError)
are separate classes so callers can treat "this record is malformed"
differently from "this is not a DAT file at all".

Every error carries an ErrorKind. The string form of an error is
"<kind description>: <message>", e.g.:

    Invalid header data: Content size exceeds max size in header.

Copyright (c) 2026 xivdat Contributors
"""

from enum import Enum
from typing import Optional


# =============================================================================
# Error Kinds
# =============================================================================

class ErrorKind(Enum):
    """
    Category of a DAT error.

    The value of each member is the human-readable prefix used when an
    error is formatted for display.
    """
    BAD_ENCODING = "Invalid text encoding"
    BAD_HEADER = "Invalid header data"
    OVERFLOW = "Content overflow"
    UNDERFLOW = "Content underflow"
    END_OF_FILE = "Unexpected EOF"
    STORAGE_IO = "File IO error"
    INCORRECT_TYPE = "Incorrect DAT file type"
    INVALID_INPUT = "Invalid input"


# =============================================================================
# Base Exception Class
# =============================================================================

class DATError(Exception):
    """
    Base exception for all xivdat errors.

    Subclasses set the class attribute `kind`. The original message is
    kept in `message` so callers can compare it without the kind prefix.

        try:
            content = read_content("MACRO.DAT")
        except DATError as e:
            print(f"{e.kind.name}: {e.message}")
    """
    kind: ErrorKind = ErrorKind.INVALID_INPUT

    def __init__(self, message: str):
        self.message = message
        super().__init__(f"{self.kind.value}: {message}")


# =============================================================================
# Structural Errors
# =============================================================================

class BadHeaderError(DATError):
    """
    The header data is incorrect.

    Raised when the 17-byte header is absent or truncated, when the file
    type bytes do not follow the <byte, 0x00> pattern, or when the
    declared content size exceeds the declared maximum size. The file is
    probably not a binary DAT file, but may be a plaintext DAT.
    """
    kind = ErrorKind.BAD_HEADER


class BadEncodingError(DATError):
    """Attempted to read a byte stream as UTF-8 text when it was not."""
    kind = ErrorKind.BAD_ENCODING


class EndOfFileError(DATError):
    """
    Unexpectedly hit the end of the content while reading a record.

    This is an expected condition when enumerating records until the
    content is exhausted; read_sections() stops on it between records.
    """
    kind = ErrorKind.END_OF_FILE


# =============================================================================
# Validation Errors
# =============================================================================

class DATOverflowError(DATError):
    """
    Data exceeds a maximum.

    Raised when:
    - Content would exceed the max size in the header (or u32 max)
    - Section content does not fit the 16-bit size field
    - More than 100 macros are written to a macro file
    - A macro title or line is too long
    - A record buffer is longer than its declared size
    """
    kind = ErrorKind.OVERFLOW


class UnderflowError(DATError):
    """
    Data is shorter than declared or required.

    Raised when a record buffer is shorter than its declared size, when
    a record payload contains an embedded NUL, or when a macro has fewer
    than 15 lines.
    """
    kind = ErrorKind.UNDERFLOW


class MalformedBufferError(UnderflowError):
    """A byte buffer ends with a partial record."""
    pass


class IncorrectTypeError(DATError):
    """Attempted to use a type-specific function on the wrong DAT type."""
    kind = ErrorKind.INCORRECT_TYPE


class InvalidInputError(DATError, ValueError):
    """
    Invalid input for a function.

    Raised for shape violations not covered by a more specific error:
    wrong section ordering, a tag that is not exactly one byte, an icon
    pair that is not registered, zero-sized resize requests, or a seek
    before the start of the content.
    """
    kind = ErrorKind.INVALID_INPUT


# =============================================================================
# Storage Errors
# =============================================================================

class StorageIOError(DATError):
    """
    Wrapper for an error reported by the underlying file.

    Attributes:
        os_error: The original OSError, if any
    """
    kind = ErrorKind.STORAGE_IO

    def __init__(self, message: str, os_error: Optional[OSError] = None):
        self.os_error = os_error
        super().__init__(message)

    @classmethod
    def wrap(cls, error: OSError) -> "StorageIOError":
        """Build a StorageIOError describing an OSError."""
        detail = error.strerror or str(error)
        if error.filename:
            detail = f"{detail} ({error.filename})"
        return cls(detail, os_error=error)
