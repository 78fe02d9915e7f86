"""
DAT Container Codec
===================

This module provides DATFile, a file-like view over the content region of
a binary DAT file, plus whole-file convenience helpers.

File Structure
--------------
A binary DAT file contains:
1. Header (17 bytes, little-endian):

    Offset  Size    Description
    ------  ----    -----------
    0x00    4       File type code (see DATType)
    0x04    4       Max size: content region size (file size - 32)
    0x08    4       Content size, including one trailing NUL
    0x0C    4       Reserved (always zero)
    0x10    1       Header end byte (fixed per type, purpose unknown)

2. Content region: content_size bytes, XOR masked for most types, the last
   of which is the NUL terminator.
3. Null padding up to max_size, then a fixed 15-byte null footer.

The on-disk file length is always max_size + 32.

Coordinate Spaces
-----------------
DATFile positions are logical: position 0 is the first content byte, which
lives at raw file offset 17. The logical end of the content is the
trailing NUL (content_size - 1); read() never returns that byte.

Usage Examples
--------------
Reading the whole content:
    >>> from xivdat.dat import read_content
    >>> content = read_content("MACRO.DAT")

Replacing the whole content:
    >>> from xivdat.dat import write_content
    >>> write_content("MACRO.DAT", new_content)

File-like access:
    >>> with DATFile.open("MACRO.DAT") as dat_file:
    ...     first_256_bytes = dat_file.read(256)

Copyright (c) 2026 xivdat Contributors
"""

from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import BinaryIO, Iterator, Optional, Union
import io
import logging
import os
import struct

from xivdat.config import get_config
from xivdat.dat.types import (
    DATType,
    default_max_size_for,
    mask_for,
    terminator_for,
)
from xivdat.errors import (
    BadHeaderError,
    DATError,
    DATOverflowError,
    EndOfFileError,
    InvalidInputError,
    StorageIOError,
)

# Logger for this module
logger = logging.getLogger(__name__)


# =============================================================================
# Constants
# =============================================================================

# Header length in bytes. Logical offset 0 is raw offset HEADER_SIZE.
HEADER_SIZE = 0x11

# Difference between the on-disk file size and the max_size header value.
MAX_SIZE_OFFSET = 32

# Header field offsets
INDEX_FILE_TYPE = 0x00
INDEX_MAX_SIZE = 0x04
INDEX_CONTENT_SIZE = 0x08

# type, max_size, content_size, reserved
HEADER_STRUCT = struct.Struct("<IIII")
SIZE_FIELD = struct.Struct("<I")

U32_MAX = 0xFFFFFFFF

# Set on type codes whose zero bytes are missing.
_TYPE_CODE_ZERO_BYTES = 0xFF00FF00

PathLike = Union[str, Path]

_MASK_TABLES: dict[int, bytes] = {}


def apply_mask(data: bytes, mask: Optional[int]) -> bytes:
    """
    XOR every byte of `data` with `mask`.

    The operation is its own inverse. A mask of None returns the data
    unchanged.
    """
    if mask is None:
        return bytes(data)
    table = _MASK_TABLES.get(mask)
    if table is None:
        table = bytes(value ^ mask for value in range(256))
        _MASK_TABLES[mask] = table
    return bytes(data).translate(table)


@contextmanager
def _storage_errors() -> Iterator[None]:
    """Re-raise OSError from the underlying file as StorageIOError."""
    try:
        yield
    except OSError as e:
        raise StorageIOError.wrap(e) from e


# =============================================================================
# Header
# =============================================================================

@dataclass
class DATHeader:
    """
    Decoded DAT file header.

    Attributes:
        file_type: File type identified from the type code
        max_size: Maximum content region size in bytes
        content_size: Current content size, including the trailing NUL
        end_byte: Last header byte
        type_code: Raw type code (differs from file_type for UNKNOWN files)
    """
    file_type: DATType
    max_size: int
    content_size: int
    end_byte: int
    type_code: Optional[int] = None

    def __post_init__(self) -> None:
        if self.type_code is None:
            self.type_code = int(self.file_type)

    def to_bytes(self) -> bytes:
        """Serialize the header to 17 bytes."""
        return HEADER_STRUCT.pack(
            self.type_code,
            self.max_size,
            self.content_size,
            0,
        ) + bytes([self.end_byte])

    @classmethod
    def from_bytes(cls, data: bytes) -> "DATHeader":
        """
        Decode and validate a header.

        Raises:
            BadHeaderError: If the data is shorter than 17 bytes, the type
                code zero bytes are absent, or content_size > max_size
        """
        if len(data) < HEADER_SIZE:
            raise BadHeaderError("Header data is absent or unreadable.")

        type_code, max_size, content_size, _ = HEADER_STRUCT.unpack_from(data)
        end_byte = data[HEADER_SIZE - 1]

        if type_code & _TYPE_CODE_ZERO_BYTES:
            raise BadHeaderError("File type ID bytes are absent.")
        if content_size > max_size:
            raise BadHeaderError("Content size exceeds max size in header.")

        return cls(
            file_type=DATType.identify(type_code),
            max_size=max_size,
            content_size=content_size,
            end_byte=end_byte,
            type_code=type_code,
        )


def parse_header(data: bytes) -> DATHeader:
    """
    Decode the first 17 bytes of a DAT file.

    Example:
        >>> header = parse_header(bytes.fromhex("00000000020000000200000000000000ff"))
        >>> header.file_type, header.max_size, header.content_size
        (<DATType.UNKNOWN: 0>, 2, 2)
    """
    return DATHeader.from_bytes(data)


# =============================================================================
# DAT File
# =============================================================================

class DATFile:
    """
    File-like access to the content region of a binary DAT file.

    DATFile keeps the header in sync with the content while it is read,
    written and resized. The XOR mask of the file type is applied
    automatically. Positions are logical (0 = first content byte).

    Attributes:
        content_size: Content size including the trailing NUL
        max_size: Maximum content size
        file_type: DATType of the file
        type_code: Raw type code from the header
        header_end_byte: Last header byte

    Example:
        >>> with DATFile.open("MACRO.DAT", "r+b") as dat_file:
        ...     dat_file.seek(0, io.SEEK_END)
        ...     dat_file.write(b"more")
    """

    def __init__(self, raw_file: BinaryIO):
        """
        Wrap an open binary file and read its header.

        The file must be positioned anywhere; the header is always read
        from offset 0 and the cursor is left at logical offset 0.

        Raises:
            EndOfFileError: If the file holds fewer than 17 bytes
            BadHeaderError: If the header fails validation
        """
        self._raw = raw_file
        with _storage_errors():
            self._raw.seek(0)
            header_bytes = self._raw.read(HEADER_SIZE)
        if len(header_bytes) < HEADER_SIZE:
            raise EndOfFileError(
                f"File ended after {len(header_bytes)} of {HEADER_SIZE} header bytes."
            )

        header = DATHeader.from_bytes(header_bytes)
        self._content_size = header.content_size
        self._max_size = header.max_size
        self._file_type = header.file_type
        self._header_end_byte = header.end_byte
        self._type_code = header.type_code
        self._mask = mask_for(header.file_type)

        logger.debug(
            f"Opened {self.name}: {header.file_type.name}, "
            f"content {header.content_size}/{header.max_size} bytes"
        )

    # =========================================================================
    # Construction
    # =========================================================================

    @classmethod
    def open(cls, path: PathLike, mode: str = "rb") -> "DATFile":
        """
        Open an existing DAT file.

        Args:
            path: Path to the DAT file
            mode: "rb" for read-only access, "r+b" to allow writes

        Raises:
            StorageIOError: If the file cannot be opened
            EndOfFileError: If the file is shorter than a header
            BadHeaderError: If the header fails validation
        """
        if mode not in ("rb", "r+b", "rb+"):
            raise InvalidInputError(f"Unsupported open mode '{mode}'.")

        with _storage_errors():
            raw_file = open(path, mode)
        try:
            return cls(raw_file)
        except DATError:
            raw_file.close()
            raise

    @classmethod
    def create(cls, path: PathLike, dat_type: DATType) -> "DATFile":
        """
        Create an empty DAT file using the defaults for its type.

        The file is created with a content size of 1 (the NUL only) and is
        opened for reading and writing. Unknown types have no default max
        size and cannot be created this way; use create_unsafe().
        """
        max_size = default_max_size_for(dat_type) or 0
        end_byte = terminator_for(dat_type) or 0
        return cls.create_unsafe(path, dat_type, 1, max_size, end_byte)

    @classmethod
    def create_unsafe(
        cls,
        path: PathLike,
        dat_type: DATType,
        content_size: int,
        max_size: int,
        end_byte: int,
    ) -> "DATFile":
        """
        Create a DAT file with explicit header values.

        Any values may be used, including ones the game client would not
        accept. Existing files are overwritten. The file is allocated at
        max_size + 32 bytes, zero-filled, given a provisional content size
        of 1, and then resized to `content_size`.

        Args:
            path: Path of the file to create
            dat_type: Type code written to the header
            content_size: Initial content size (>= 1, includes the NUL)
            max_size: Maximum content size
            end_byte: Header end byte

        Raises:
            InvalidInputError: If content_size is zero
            DATOverflowError: If content_size exceeds max_size or max_size
                does not fit the header
            StorageIOError: If the file cannot be created
        """
        if content_size < 1:
            raise InvalidInputError("Content size must be > 0.")
        if max_size > U32_MAX:
            raise DATOverflowError("Max size exceeds maximum possible size (u32::MAX).")
        if content_size > max_size:
            raise DATOverflowError("Content size would exceed maximum size.")

        header = DATHeader(
            file_type=dat_type,
            max_size=max_size,
            content_size=1,
            end_byte=end_byte,
        )
        with _storage_errors():
            with open(path, "wb") as raw_file:
                raw_file.truncate(max_size + MAX_SIZE_OFFSET)
                raw_file.write(header.to_bytes())

        logger.debug(f"Created {path}: {dat_type.name}, max size {max_size}")

        dat_file = cls.open(path, "r+b")
        try:
            dat_file.set_content_size(content_size)
        except DATError:
            dat_file.close()
            raise
        return dat_file

    @classmethod
    def create_with_content(
        cls, path: PathLike, dat_type: DATType, content: bytes
    ) -> "DATFile":
        """
        Create a DAT file using the type defaults and write its content.

        The returned file is positioned at logical offset 0.
        """
        max_size = default_max_size_for(dat_type) or 0
        end_byte = terminator_for(dat_type) or 0
        dat_file = cls.create_unsafe(path, dat_type, 1, max_size, end_byte)
        try:
            dat_file.write(content)
            dat_file.seek(0)
        except DATError:
            dat_file.close()
            raise
        return dat_file

    # =========================================================================
    # Accessors
    # =========================================================================

    @property
    def content_size(self) -> int:
        """Content size in bytes, including the trailing NUL."""
        return self._content_size

    @property
    def max_size(self) -> int:
        """Maximum content size in bytes."""
        return self._max_size

    @property
    def file_type(self) -> DATType:
        """DATType identified from the header."""
        return self._file_type

    @property
    def type_code(self) -> int:
        """Raw header type code (kept for UNKNOWN files)."""
        return self._type_code

    @property
    def header_end_byte(self) -> int:
        """Last header byte."""
        return self._header_end_byte

    @property
    def name(self) -> str:
        """Name of the underlying file, if it has one."""
        return str(getattr(self._raw, "name", "<stream>"))

    @property
    def closed(self) -> bool:
        return self._raw.closed

    def metadata(self) -> os.stat_result:
        """Stat the underlying file."""
        with _storage_errors():
            return os.fstat(self._raw.fileno())

    # =========================================================================
    # Stream Interface
    # =========================================================================

    def tell(self) -> int:
        """Current logical position."""
        with _storage_errors():
            return self._raw.tell() - HEADER_SIZE

    def read(self, size: int = -1) -> bytes:
        """
        Read up to `size` bytes of unmasked content.

        Reads stop at the last content byte before the trailing NUL. Once
        the cursor reaches that point, an empty bytes object is returned.

        Args:
            size: Maximum number of bytes; negative reads to the end
        """
        cursor = self.tell()
        max_end = self._content_size - 1
        if size is None or size < 0:
            read_end = max_end
        else:
            read_end = min(cursor + size, max_end)

        read_len = read_end - cursor
        if read_len < 1:
            return b""

        with _storage_errors():
            data = self._raw.read(read_len)
        return apply_mask(data, self._mask)

    def readinto(self, buffer: bytearray) -> int:
        """
        Read content into a pre-allocated buffer.

        Bytes of `buffer` past the number read are left untouched.

        Returns:
            Number of bytes read (0 at the end of the content)
        """
        data = self.read(len(buffer))
        buffer[:len(data)] = data
        return len(data)

    def seek(self, offset: int, whence: int = io.SEEK_SET) -> int:
        """
        Move the cursor and return the new logical position.

        - SEEK_SET: offset from the first content byte
        - SEEK_CUR: offset from the current position
        - SEEK_END: offset from the logical end (the trailing NUL)

        Raises:
            InvalidInputError: If the target lies before the content start
        """
        if whence == io.SEEK_SET:
            if offset < 0:
                raise InvalidInputError("Invalid argument: negative seek position.")
            with _storage_errors():
                raw_pos = self._raw.seek(HEADER_SIZE + offset)

        elif whence == io.SEEK_CUR:
            with _storage_errors():
                if self._raw.tell() + offset < HEADER_SIZE:
                    raise InvalidInputError("Invalid argument: seek before content start.")
                raw_pos = self._raw.seek(offset, io.SEEK_CUR)

        elif whence == io.SEEK_END:
            # Net out the unused region and the footer to land on the NUL.
            end_offset = (
                offset
                - (self._max_size - self._content_size)
                - (MAX_SIZE_OFFSET - HEADER_SIZE)
                - 1
            )
            with _storage_errors():
                file_size = self._raw.seek(0, io.SEEK_END)
                if file_size + end_offset < HEADER_SIZE:
                    raise InvalidInputError("Invalid argument: seek before content start.")
                raw_pos = self._raw.seek(end_offset, io.SEEK_END)

        else:
            raise InvalidInputError(f"Invalid whence ({whence}).")

        return raw_pos - HEADER_SIZE

    def write(self, data: bytes) -> int:
        """
        Write content at the current position, masking it as needed.

        If the write extends past the current content, the header content
        size is updated before the data is written.

        Returns:
            Number of bytes written

        Raises:
            DATOverflowError: If the content would exceed max_size
        """
        content_cursor = self.tell()
        buf_len = len(data)
        if buf_len > U32_MAX:
            raise DATOverflowError("Content too long to write.")

        new_content_size = content_cursor + buf_len + 1
        if new_content_size > U32_MAX:
            raise DATOverflowError(
                "Content size would exceed maximum possible size (u32::MAX) after write."
            )
        if new_content_size > self._content_size:
            if new_content_size > self._max_size:
                raise DATOverflowError("Content size would exceed maximum size after write.")
            self._write_content_size_header(new_content_size)

        with _storage_errors():
            return self._raw.write(apply_mask(data, self._mask))

    def flush(self) -> None:
        with _storage_errors():
            self._raw.flush()

    def sync(self) -> None:
        """Flush and fsync the file so writes are durable."""
        with _storage_errors():
            self._raw.flush()
            os.fsync(self._raw.fileno())

    def close(self) -> None:
        """Close the underlying file. No sync is performed."""
        with _storage_errors():
            self._raw.close()

    def __enter__(self) -> "DATFile":
        return self

    def __exit__(self, exc_type, exc_value, traceback) -> None:
        self.close()

    def __repr__(self) -> str:
        return (
            f"DATFile(name={self.name!r}, file_type={self._file_type.name}, "
            f"content_size={self._content_size}, max_size={self._max_size})"
        )

    # =========================================================================
    # Resizing
    # =========================================================================

    def set_content_size(self, new_size: int) -> None:
        """
        Resize the content region and update the header.

        Growing pads the new space with the masked NUL so it reads back as
        NUL. Shrinking overwrites the vacated space with literal NUL bytes.
        The cursor position is preserved.

        Raises:
            InvalidInputError: If new_size is zero
            DATOverflowError: If new_size exceeds max_size
        """
        if new_size == self._content_size:
            return
        if new_size < 1:
            raise InvalidInputError("Content size must be > 0.")
        if new_size > self._max_size:
            raise DATOverflowError("Content size would exceed maximum size.")

        with _storage_errors():
            pre_cursor = self._raw.tell()

        old_size = self._content_size
        try:
            if new_size > old_size:
                self.seek(0, io.SEEK_END)
                padding_byte = self._mask or 0
                write_size = new_size - old_size
            else:
                self.seek(new_size - 1)
                padding_byte = 0
                write_size = old_size - new_size

            self._write_padding(padding_byte, write_size)
            self._write_content_size_header(new_size)
        finally:
            with _storage_errors():
                self._raw.seek(pre_cursor)

        logger.debug(f"Resized content of {self.name}: {old_size} -> {new_size} bytes")

    def set_max_size(self, new_size: int) -> None:
        """
        Resize the file on disk to hold `new_size` bytes of content.

        Raises:
            InvalidInputError: If new_size is zero
            DATOverflowError: If new_size is smaller than the content size
        """
        if new_size == self._max_size:
            return
        if new_size < 1:
            raise InvalidInputError("Max size must be > 0.")
        if new_size < self._content_size:
            raise DATOverflowError("Content size would exceed maximum size.")
        if new_size > U32_MAX:
            raise DATOverflowError("Max size exceeds maximum possible size (u32::MAX).")

        with _storage_errors():
            self._raw.truncate(new_size + MAX_SIZE_OFFSET)
        old_size = self._max_size
        self._write_size_field(INDEX_MAX_SIZE, new_size)
        self._max_size = new_size

        logger.debug(f"Resized {self.name}: max size {old_size} -> {new_size} bytes")

    # =========================================================================
    # Internal Helpers
    # =========================================================================

    def _write_padding(self, padding_byte: int, count: int) -> None:
        """Write `count` copies of a raw byte in bounded chunks."""
        chunk_size = get_config().chunk_size
        remaining = count
        with _storage_errors():
            while remaining > 0:
                step = min(remaining, chunk_size)
                self._raw.write(bytes([padding_byte]) * step)
                remaining -= step

    def _write_size_field(self, index: int, value: int) -> None:
        """Write a u32 header field without moving the cursor."""
        with _storage_errors():
            pre_cursor = self._raw.tell()
            self._raw.seek(index)
            self._raw.write(SIZE_FIELD.pack(value))
            self._raw.seek(pre_cursor)

    def _write_content_size_header(self, size: int) -> None:
        self._write_size_field(INDEX_CONTENT_SIZE, size)
        self._content_size = size


# =============================================================================
# Convenience Functions
# =============================================================================

def check_type(path: PathLike) -> DATType:
    """
    Read the DATType of a file from its header.

    Raises:
        StorageIOError: If the file cannot be opened
        BadHeaderError: If the file is not a binary DAT file
    """
    with DATFile.open(path) as dat_file:
        return dat_file.file_type


def read_content(path: PathLike) -> bytes:
    """
    Read the whole unmasked content of a DAT file.

    The trailing NUL is not included.

    Example:
        >>> content = read_content("MACRO.DAT")
    """
    with DATFile.open(path) as dat_file:
        expected = dat_file.content_size - 1
        content = dat_file.read(expected)
        if len(content) < expected:
            raise EndOfFileError(
                f"Content ended after {len(content)} of {expected} bytes."
            )
        return content


def write_content(path: PathLike, data: bytes) -> int:
    """
    Replace the whole content of an existing DAT file.

    The content region is resized to fit `data` before it is written.

    Returns:
        Number of bytes written

    Raises:
        DATOverflowError: If the data does not fit the file's max size
    """
    new_size = len(data) + 1
    if new_size > U32_MAX:
        raise DATOverflowError(
            "Content size would exceed maximum possible size (u32::MAX)."
        )

    with DATFile.open(path, "r+b") as dat_file:
        if new_size != dat_file.content_size:
            dat_file.set_content_size(new_size)
        written = dat_file.write(data)

    logger.debug(f"Wrote {written} content bytes to {path}")
    return written
