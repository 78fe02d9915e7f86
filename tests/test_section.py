"""
Section Record Tests
====================

Tests for the Section tag-length-value record: construction, encoding,
decoding of single records and buffers, and reading from DAT files.
"""

import dataclasses

import pytest

from xivdat.dat import (
    DATFile,
    DATType,
    MAX_SECTION_SIZE,
    Section,
    as_section,
    as_section_list,
    parse_section_header,
    read_section,
    read_section_content,
    read_sections,
    sections_to_bytes,
)
from xivdat.errors import (
    BadEncodingError,
    DATOverflowError,
    EndOfFileError,
    InvalidInputError,
    MalformedBufferError,
    UnderflowError,
)


# =============================================================================
# Test Fixtures
# =============================================================================

@pytest.fixture
def keybind_sections() -> list[Section]:
    """A short run of keybind-style sections."""
    return [
        Section("T", "Title"),
        Section("a", ""),
        Section("L", "/echo ñ"),
    ]


@pytest.fixture
def section_dat(make_dat, keybind_sections):
    """Fixture: keybind file holding keybind_sections."""
    return make_dat(
        "KEYBIND.DAT",
        int(DATType.KEYBIND),
        512,
        sections_to_bytes(keybind_sections),
        mask=0x73,
    )


# =============================================================================
# Construction Tests
# =============================================================================

class TestConstruct:
    """Tests for Section construction."""

    def test_content_size(self):
        """content_size counts the UTF-8 bytes plus the NUL."""
        section = Section.new("T", "Title")
        assert section.tag == "T"
        assert section.content == "Title"
        assert section.content_size == 6
        assert section.get_size() == 9

    def test_multibyte_content(self):
        """Multi-byte characters count by their encoded length."""
        assert Section("L", "ñ").content_size == 3

    def test_empty_content(self):
        """Empty content is just the NUL."""
        assert Section("a", "").content_size == 1

    @pytest.mark.parametrize("tag", ["", "TT", "ñ"])
    def test_bad_tag(self, tag):
        """Tags must be exactly one byte."""
        with pytest.raises(InvalidInputError):
            Section(tag, "content")

    def test_embedded_nul(self):
        """Content cannot contain a NUL."""
        with pytest.raises(InvalidInputError):
            Section("T", "a\0b")

    def test_largest_content(self):
        """Content of 0xFFFE bytes fits the size field."""
        section = Section("L", "x" * (MAX_SECTION_SIZE - 1))
        assert section.content_size == MAX_SECTION_SIZE

    def test_content_too_long(self):
        """Content of 0xFFFF bytes overflows the size field."""
        with pytest.raises(DATOverflowError):
            Section("L", "x" * MAX_SECTION_SIZE)

    @pytest.mark.parametrize("attribute, value", [
        ("content", "Longer title"),
        ("tag", "L"),
        ("content_size", 99),
    ])
    def test_immutable(self, attribute, value):
        """Sections cannot be modified after construction."""
        section = Section("T", "Title")
        with pytest.raises(dataclasses.FrozenInstanceError):
            setattr(section, attribute, value)
        assert section.content_size == 6
        assert as_section(section.to_bytes()) == section


# =============================================================================
# Encoding Tests
# =============================================================================

class TestEncode:
    """Tests for Section.to_bytes() and sections_to_bytes()."""

    def test_to_bytes(self):
        """Encoding is tag, u16 size, content, NUL."""
        encoded = Section("T", "Title").to_bytes()
        assert encoded == b"T\x06\x00Title\x00"
        assert len(encoded) == 9

    def test_sections_to_bytes(self, keybind_sections):
        """Sections are encoded back to back."""
        encoded = sections_to_bytes(keybind_sections)
        assert encoded == b"".join(s.to_bytes() for s in keybind_sections)
        assert len(encoded) == sum(s.get_size() for s in keybind_sections)


# =============================================================================
# Decoding Tests
# =============================================================================

class TestParseHeader:
    """Tests for parse_section_header()."""

    def test_parse(self):
        """The tag and size are returned."""
        assert parse_section_header(bytes([97, 1, 0])) == ("a", 1)
        assert parse_section_header(b"T\x06\x00Title\x00") == ("T", 6)

    def test_short(self):
        """Fewer than 3 bytes is an underflow."""
        with pytest.raises(UnderflowError):
            parse_section_header(b"T\x06")

    def test_bad_tag(self):
        """A tag byte that is not UTF-8 is a bad encoding."""
        with pytest.raises(BadEncodingError):
            parse_section_header(b"\xff\x01\x00")


class TestDecodeOne:
    """Tests for Section.from_bytes() / as_section()."""

    def test_decode(self):
        """A single encoded record decodes."""
        section = as_section(b"T\x06\x00Title\x00")
        assert section == Section("T", "Title")

    def test_decode_empty(self):
        """A record with only the NUL decodes to empty content."""
        assert as_section(b"a\x01\x00\x00") == Section("a", "")

    def test_round_trip(self):
        """Decoding an encoded section gives the same section."""
        section = Section("L", "/micon \"Sprint\" ñ")
        assert Section.from_bytes(section.to_bytes()) == section

    def test_buffer_too_short(self):
        """Fewer bytes than declared is an underflow."""
        with pytest.raises(UnderflowError):
            as_section(b"T\x06\x00Titl")

    def test_buffer_too_long(self):
        """More bytes than declared is an overflow."""
        with pytest.raises(DATOverflowError):
            as_section(b"T\x06\x00Title\x00\x00")

    def test_zero_size(self):
        """A size of zero has no room for the terminator."""
        with pytest.raises(UnderflowError):
            as_section(b"T\x00\x00")

    def test_missing_terminator(self):
        """A non-NUL byte at the declared end is an overflow."""
        with pytest.raises(DATOverflowError):
            as_section(b"T\x06\x00Titles")

    def test_early_terminator(self):
        """A NUL before the declared end is an underflow."""
        with pytest.raises(UnderflowError):
            as_section(b"T\x06\x00Ti\x00le\x00")

    def test_bad_utf8(self):
        """Content that is not UTF-8 is a bad encoding."""
        with pytest.raises(BadEncodingError):
            as_section(b"T\x03\x00\xc3\x28\x00")


class TestDecodeAll:
    """Tests for as_section_list()."""

    def test_decode_list(self, keybind_sections):
        """Records are decoded in order."""
        encoded = sections_to_bytes(keybind_sections)
        assert as_section_list(encoded) == keybind_sections

    def test_empty_buffer(self):
        """An empty buffer has no sections."""
        assert as_section_list(b"") == []

    def test_partial_header(self, keybind_sections):
        """A trailing partial header is a malformed buffer."""
        encoded = sections_to_bytes(keybind_sections) + b"T\x06"
        with pytest.raises(MalformedBufferError):
            as_section_list(encoded)

    def test_partial_record(self, keybind_sections):
        """A trailing partial record is a malformed buffer."""
        encoded = sections_to_bytes(keybind_sections) + b"T\x06\x00Tit"
        with pytest.raises(MalformedBufferError):
            as_section_list(encoded)

    def test_malformed_is_underflow(self):
        """MalformedBufferError is caught as an underflow."""
        with pytest.raises(UnderflowError):
            as_section_list(b"T\x06\x00")

    def test_bad_record_in_list(self):
        """A bad record in the middle fails the whole buffer."""
        encoded = b"T\x02\x00a\x00" + b"L\x02\x00bc" + b"K\x01\x00\x00"
        with pytest.raises(DATOverflowError):
            as_section_list(encoded)


# =============================================================================
# Stream Reading Tests
# =============================================================================

class TestReadSections:
    """Tests for read_section(), read_sections() and read_section_content()."""

    def test_read_section(self, section_dat, keybind_sections):
        """Sections are read one at a time through the mask."""
        with DATFile.open(section_dat) as dat_file:
            assert read_section(dat_file) == keybind_sections[0]
            assert read_section(dat_file) == keybind_sections[1]
            assert read_section(dat_file) == keybind_sections[2]
            with pytest.raises(EndOfFileError):
                read_section(dat_file)

    def test_read_sections(self, section_dat, keybind_sections):
        """All sections are read until the end of the content."""
        with DATFile.open(section_dat) as dat_file:
            assert read_sections(dat_file) == keybind_sections

    def test_read_section_content(self, section_dat, keybind_sections):
        """The whole file can be read by path."""
        assert read_section_content(section_dat) == keybind_sections

    def test_empty_file(self, empty_dat):
        """At least one section is required."""
        with pytest.raises(EndOfFileError):
            read_section_content(empty_dat)

    def test_truncated_record(self, make_dat):
        """A record cut off by the end of the content is an error."""
        content = Section("T", "Title").to_bytes() + b"L\x09\x00abc"
        path = make_dat("KEYBIND.DAT", int(DATType.KEYBIND), 64, content, mask=0x73)
        with pytest.raises(EndOfFileError):
            read_section_content(path)

    def test_bad_record(self, make_dat):
        """Malformed records are reported while reading."""
        content = Section("T", "Title").to_bytes() + b"L\x03\x00abc"
        path = make_dat("KEYBIND.DAT", int(DATType.KEYBIND), 64, content, mask=0x73)
        with pytest.raises(DATOverflowError):
            read_section_content(path)
