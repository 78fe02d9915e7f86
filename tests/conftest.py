"""
xivdat Test Configuration
=========================

Shared fixtures for the xivdat test suite.

The DAT fixtures are generated from raw bytes in a temporary directory so
every test gets its own copy:

- TEST.DAT: unknown type, max size 7, content "Boop!"
- TEST_XOR.DAT: macro type (mask 0x73), max size 8, content "Macro!"
- TEST_EMPTY.DAT: unknown type, max size 8, no content
"""

import struct
from pathlib import Path
from typing import Callable, Optional

import pytest

from xivdat.config import set_config


HEADER = struct.Struct("<IIII")

# Bytes between the end of max_size and the end of the file.
FOOTER_SIZE = 15


def build_dat_bytes(
    type_code: int,
    max_size: int,
    content: bytes,
    end_byte: int = 0xFF,
    mask: Optional[int] = None,
) -> bytes:
    """
    Build the bytes of a binary DAT file.

    The content is terminated with a NUL and masked if a mask is given.
    """
    region = content + b"\0"
    if mask is not None:
        region = bytes(b ^ mask for b in region)
    header = HEADER.pack(type_code, max_size, len(region), 0) + bytes([end_byte])
    padding = b"\0" * (max_size - len(region) + FOOTER_SIZE)
    return header + region + padding


@pytest.fixture
def make_dat(tmp_path: Path) -> Callable[..., Path]:
    """
    Fixture: factory writing a DAT file into tmp_path.

    Usage: make_dat("NAME.DAT", type_code, max_size, content, ...)
    """
    def _make(name: str, *args, **kwargs) -> Path:
        path = tmp_path / name
        path.write_bytes(build_dat_bytes(*args, **kwargs))
        return path
    return _make


@pytest.fixture
def boop_dat(make_dat) -> Path:
    """Fixture: unknown type file containing "Boop!"."""
    return make_dat("TEST.DAT", 0x00000000, 7, b"Boop!")


@pytest.fixture
def xor_dat(make_dat) -> Path:
    """Fixture: masked macro type file containing "Macro!"."""
    return make_dat("TEST_XOR.DAT", 0x00020001, 8, b"Macro!", mask=0x73)


@pytest.fixture
def empty_dat(make_dat) -> Path:
    """Fixture: unknown type file with a content size of 1."""
    return make_dat("TEST_EMPTY.DAT", 0x00000000, 8, b"")


@pytest.fixture(autouse=True)
def reset_config():
    """Fixture: drop any global configuration set by a test."""
    set_config(None)
    yield
    set_config(None)
