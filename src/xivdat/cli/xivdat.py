"""
xivdat - DAT File Command-Line Interface
========================================

This module implements the command-line interface for reading and editing
binary DAT files.

Commands
--------
- **read**: Write the raw content of a DAT file to stdout
- **info**: Show the header of a DAT file
- **sections**: List the sections of a section-based DAT file
- **macros**: List the macros of a macro file
- **create**: Create a new empty DAT file
- **write**: Replace the content of a DAT file

Usage Examples
--------------
Dump the content of a file:
    $ xivdat read KEYBIND.DAT > keybind.bin

Show header information:
    $ xivdat info MACRO.DAT

List the macros in use:
    $ xivdat macros MACRO.DAT

Create a new macro file and fill it:
    $ xivdat create MACRO.DAT --type macro --content macros.bin

Logging
-------
-v/--verbose enables debug logging. Otherwise the level comes from the
XIVDAT_LOG_LEVEL environment variable (default: WARNING).

Copyright (c) 2026 xivdat Contributors
"""

import logging
import sys
from pathlib import Path
from typing import Optional

import click

from xivdat import __version__
from xivdat.cli.errors import handle_cli_exception
from xivdat.config import get_config
from xivdat.dat import (
    SECTION_BASED_TYPES,
    DATFile,
    DATType,
    mask_for,
    read_content,
    read_section_content,
    terminator_for,
    write_content,
)
from xivdat.errors import IncorrectTypeError
from xivdat.macro import read_macro_content

logger = logging.getLogger(__name__)


# =============================================================================
# CLI Context and Utilities
# =============================================================================

class Context:
    """
    Shared context for CLI commands.

    Stores the verbosity flag set on the main group.
    """

    def __init__(self) -> None:
        self.verbose: bool = False

    def setup_logging(self) -> None:
        """Configure logging based on verbosity and XIVDAT_LOG_LEVEL."""
        level = logging.DEBUG if self.verbose else get_config().get_log_level()
        logging.basicConfig(
            level=level,
            format="%(levelname)s: %(name)s: %(message)s" if self.verbose else "%(levelname)s: %(message)s",
        )


pass_context = click.make_pass_decorator(Context, ensure=True)


class DATTypeChoice(click.ParamType):
    """
    Click parameter type for DAT file type selection.

    Accepts member names and file name aliases, case-insensitively
    (macro, MACROSYS, gold_saucer, gs, ...).
    """
    name = "dat_type"

    def convert(self, value: str, param: Optional[click.Parameter],
                ctx: Optional[click.Context]) -> DATType:
        """Convert string to DATType."""
        if isinstance(value, DATType):
            return value

        key = value.replace("-", "_").upper()
        if key.endswith(".DAT"):
            key = key[:-4]
        if key not in DATType.__members__ or key == "UNKNOWN":
            choices = [name.lower() for name in DATType.__members__ if name != "UNKNOWN"]
            self.fail(
                f"Invalid DAT type '{value}'. Choose from: {', '.join(choices)}",
                param, ctx
            )
        return DATType[key]


DAT_TYPE = DATTypeChoice()

DAT_PATH = click.Path(exists=True, dir_okay=False, path_type=Path)


# =============================================================================
# Main CLI Group
# =============================================================================

@click.group()
@click.option(
    "-v", "--verbose",
    is_flag=True,
    help="Enable debug logging and tracebacks",
)
@click.version_option(__version__, "--version", "-V", prog_name="xivdat")
@pass_context
def main(ctx: Context, verbose: bool) -> None:
    """
    Read and edit FINAL FANTASY XIV binary DAT files.

    \b
    Commands:
      read      Write raw content to stdout
      info      Show header information
      sections  List sections of a section-based file
      macros    List macros of a macro file
      create    Create a new empty DAT file
      write     Replace the content of a DAT file

    \b
    Examples:
      xivdat info MACRO.DAT
      xivdat macros MACRO.DAT
      xivdat read KEYBIND.DAT > keybind.bin
    """
    ctx.verbose = verbose
    ctx.setup_logging()


# =============================================================================
# Read Command
# =============================================================================

@main.command("read")
@click.argument("dat_path", type=DAT_PATH)
@pass_context
def cmd_read(ctx: Context, dat_path: Path) -> None:
    """
    Write the unmasked content of DAT_PATH to stdout.

    The trailing NUL is not included.
    """
    try:
        content = read_content(dat_path)
        click.echo(content, nl=False)
    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Info Command
# =============================================================================

@main.command("info")
@click.argument("dat_path", type=DAT_PATH)
@pass_context
def cmd_info(ctx: Context, dat_path: Path) -> None:
    """
    Show the header fields of DAT_PATH.

    \b
    Output includes:
      - File type and raw type code
      - Max size and content size
      - Header end byte and content mask
      - Size on disk
    """
    try:
        with DATFile.open(dat_path) as dat_file:
            file_size = dat_file.metadata().st_size
            file_type = dat_file.file_type
            content_size = dat_file.content_size
            max_size = dat_file.max_size
            end_byte = dat_file.header_end_byte
            type_code = dat_file.type_code

        mask = mask_for(file_type)
        used_percent = (content_size * 100) // max_size if max_size > 0 else 0

        click.echo(f"DAT Information: {dat_path}")
        click.echo("=" * 40)
        click.echo(f"Type:          {file_type.get_description()}")
        click.echo(f"Type Code:     0x{type_code:08X}")
        click.echo(f"Max Size:      {max_size} bytes")
        click.echo(f"Content Size:  {content_size} bytes ({used_percent}%)")
        click.echo(f"End Byte:      0x{end_byte:02X}")
        click.echo(f"Mask:          {f'0x{mask:02X}' if mask is not None else 'none'}")
        click.echo(f"File Size:     {file_size} bytes")

        expected_end_byte = terminator_for(file_type)
        if expected_end_byte is not None and expected_end_byte != end_byte:
            click.echo(f"\nWarning: end byte differs from the default 0x{expected_end_byte:02X}")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Sections Command
# =============================================================================

@main.command("sections")
@click.argument("dat_path", type=DAT_PATH)
@pass_context
def cmd_sections(ctx: Context, dat_path: Path) -> None:
    """
    List the sections of DAT_PATH.

    \b
    Output format:
      Tag  Size  Content
      T       6  Title
    """
    try:
        with DATFile.open(dat_path) as dat_file:
            file_type = dat_file.file_type
        if file_type not in SECTION_BASED_TYPES:
            raise IncorrectTypeError(
                f"{file_type.get_description()} files do not contain sections."
            )

        sections = read_section_content(dat_path)

        click.echo(f"{'Tag':<4} {'Size':>5}  Content")
        click.echo("-" * 40)
        for section in sections:
            click.echo(f"{section.tag:<4} {section.content_size:>5}  {section.content}")
        click.echo("-" * 40)
        click.echo(f"Total: {len(sections)} sections")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Macros Command
# =============================================================================

@main.command("macros")
@click.argument("dat_path", type=DAT_PATH)
@click.option(
    "-a", "--all", "show_all",
    is_flag=True,
    help="Include blank macros",
)
@pass_context
def cmd_macros(ctx: Context, dat_path: Path, show_all: bool) -> None:
    """
    List the macros of the macro file DAT_PATH.

    Blank macros are skipped unless --all is given. Only non-empty lines
    are shown.
    """
    try:
        macros = read_macro_content(dat_path)

        shown = 0
        for index, macro in enumerate(macros):
            if not show_all and macro.is_blank():
                continue
            shown += 1

            icon = macro.get_icon()
            icon_name = icon.name if icon is not None else f"? ({macro.icon_key}/{macro.icon_id})"
            click.echo(f"[{index:>2}] {macro.title or '(untitled)'}  <{icon_name}>")
            for line in macro.lines:
                if line:
                    click.echo(f"     {line}")

            error = macro.validate()
            if error is not None:
                click.echo(f"     ! {error}")

        click.echo(f"{shown} of {len(macros)} macros shown")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Create Command
# =============================================================================

@main.command("create")
@click.argument(
    "dat_path",
    type=click.Path(dir_okay=False, path_type=Path),
)
@click.option(
    "-t", "--type",
    "dat_type",
    type=DAT_TYPE,
    required=True,
    help="File type: macro, keybind, hotbar, ... (required)",
)
@click.option(
    "-m", "--max-size",
    type=click.IntRange(min=1),
    default=None,
    help="Max content size (default: the game's size for the type)",
)
@click.option(
    "-c", "--content",
    "content_path",
    type=DAT_PATH,
    default=None,
    help="File holding the initial unmasked content",
)
@click.option(
    "-f", "--force",
    is_flag=True,
    help="Overwrite an existing file",
)
@pass_context
def cmd_create(
    ctx: Context,
    dat_path: Path,
    dat_type: DATType,
    max_size: Optional[int],
    content_path: Optional[Path],
    force: bool,
) -> None:
    """
    Create a new DAT file at DAT_PATH.

    \b
    Examples:
      xivdat create MACRO.DAT --type macro
      xivdat create KEYBIND.DAT -t keybind -c keybind.bin
      xivdat create SMALL.DAT -t gearset --max-size 512
    """
    try:
        if dat_path.exists() and not force:
            raise click.BadParameter(
                f"{dat_path} already exists (use --force to overwrite)",
                param_hint="DAT_PATH",
            )

        content = content_path.read_bytes() if content_path else b""
        logger.debug(f"Creating {dat_path} as {dat_type.name} with {len(content)} content bytes")

        if max_size is None:
            dat_file = DATFile.create(dat_path, dat_type)
        else:
            end_byte = terminator_for(dat_type) or 0
            dat_file = DATFile.create_unsafe(dat_path, dat_type, 1, max_size, end_byte)

        with dat_file:
            if content:
                dat_file.write(content)
            dat_file.sync()
            max_size = dat_file.max_size

        click.echo(
            f"Created {dat_path} ({dat_type.name}, {len(content)} of {max_size} bytes used)"
        )

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


# =============================================================================
# Write Command
# =============================================================================

@main.command("write")
@click.argument("dat_path", type=DAT_PATH)
@click.argument("content_path", type=DAT_PATH)
@pass_context
def cmd_write(ctx: Context, dat_path: Path, content_path: Path) -> None:
    """
    Replace the content of DAT_PATH with the bytes of CONTENT_PATH.

    The content size is adjusted; the max size is not.
    """
    try:
        content = content_path.read_bytes()
        written = write_content(dat_path, content)
        click.echo(f"Wrote {written} bytes to {dat_path}")

    except Exception as e:
        handle_cli_exception(e, ctx.verbose)


if __name__ == "__main__":
    sys.exit(main())
