"""Format generations.

Each generation is a strategy object that knows its own version byte, the
field order of its header and how atlas banks are sized. Codecs are bound to
exactly one layout; there is no per-field branching on the version.
"""
from __future__ import annotations

from abc import ABC, abstractmethod

from .blocks import BlockReader, BlockWriter
from .errors import InvalidBank
from .header import Header
from .profile import PlatformProfile
from .protocol import (
    MAX_BANK_COUNT,
    MAX_SIZED_ATLAS_LEN,
    MAX_STRING_LEN,
    PREFIX_LEN,
    VERSION_NUMERIC_ID,
    VERSION_STRING_ID,
)


class Layout(ABC):
    version: int
    name: str
    has_controller_graphics: bool
    sized_atlas_banks: bool
    # Bytes after the prefix that do not depend on string lengths
    fixed_len: int
    string_count: int
    # Length prefix bytes per string (0 when lengths live in a table)
    string_prefix_len: int

    @abstractmethod
    def header_problems(self, header: Header) -> list[str]:
        """Reasons ``header`` cannot be stored in this generation at all."""

    @abstractmethod
    def read_fields(self, r: BlockReader) -> Header:
        ...

    @abstractmethod
    def write_fields(self, header: Header, w: BlockWriter) -> None:
        ...

    @abstractmethod
    def read_atlas_sizes(self, r: BlockReader, header: Header, profile: PlatformProfile) -> list[int]:
        ...

    @abstractmethod
    def write_atlas_sizes(self, atlases, w: BlockWriter) -> None:
        ...

    @abstractmethod
    def check_atlas(self, bank: bytes, index: int, profile: PlatformProfile) -> None:
        ...

    @abstractmethod
    def max_atlas_bank_size(self, profile: PlatformProfile) -> int:
        ...

    def atlas_table_len(self, count: int) -> int:
        return 0

    @property
    def min_header_len(self) -> int:
        # Each string holds at least one byte; at least one atlas bank
        strings = self.string_count * (self.string_prefix_len + 1)
        return PREFIX_LEN + self.fixed_len + strings + self.atlas_table_len(1)

    @property
    def max_header_len(self) -> int:
        strings = self.string_count * (self.string_prefix_len + MAX_STRING_LEN)
        return PREFIX_LEN + self.fixed_len + strings + self.atlas_table_len(MAX_BANK_COUNT)

    def __repr__(self) -> str:
        return f"{type(self).__name__}(version={self.version})"


class StringIdLayout(Layout):
    """v1: string id, fixed-size atlas banks, controller graphics banks."""

    version = VERSION_STRING_ID
    name = "string-id"
    has_controller_graphics = True
    sized_atlas_banks = False
    # min(2) target(2) build(4) counts(4)
    fixed_len = 12
    string_count = 4
    string_prefix_len = 1

    def read_fields(self, r: BlockReader) -> Header:
        min_version = r.read_u16("min console version")
        target_version = r.read_u16("target console version")
        build = r.read_u32("build")
        app_id = r.read_len_string("id")
        name = r.read_len_string("name")
        version = r.read_len_string("version")
        author = r.read_len_string("author")
        code_bank_count = r.read_u8("code bank count")
        ram_bank_count = r.read_u8("ram bank count")
        atlas_bank_count = r.read_u8("atlas bank count")
        controller_count = r.read_u8("controller graphics count")
        return Header(
            app_id=app_id,
            build_number=build,
            min_console_version=min_version,
            target_console_version=target_version,
            name=name,
            version=version,
            author=author,
            code_bank_count=code_bank_count,
            ram_bank_count=ram_bank_count,
            atlas_bank_count=atlas_bank_count,
            controller_graphics_bank_count=controller_count,
        )

    def header_problems(self, header):
        problems = []
        if not isinstance(header.app_id, str):
            problems.append(f"ID must be a string in this format, got {type(header.app_id).__name__}")
        if header.controller_graphics_bank_count is None:
            problems.append("Controller graphics count is required in this format")
        return problems

    def write_fields(self, header: Header, w: BlockWriter) -> None:
        w.write_u16(header.min_console_version, "min console version")
        w.write_u16(header.target_console_version, "target console version")
        w.write_u32(header.build_number, "build")
        w.write_len_string(header.app_id, "ID")
        w.write_len_string(header.name, "Name")
        w.write_len_string(header.version, "Version")
        w.write_len_string(header.author, "Author")
        w.write_u8(header.code_bank_count, "code bank count")
        w.write_u8(header.ram_bank_count, "ram bank count")
        w.write_u8(header.atlas_bank_count, "atlas bank count")
        w.write_u8(header.controller_graphics_bank_count, "controller graphics count")

    def read_atlas_sizes(self, r, header, profile):
        return [profile.atlas_bank_size] * header.atlas_bank_count

    def write_atlas_sizes(self, atlases, w):
        pass

    def check_atlas(self, bank, index, profile):
        if len(bank) != profile.atlas_bank_size:
            raise InvalidBank("atlas", index, profile.atlas_bank_size, len(bank))

    def max_atlas_bank_size(self, profile):
        return profile.atlas_bank_size


class NumericIdLayout(Layout):
    """v2: u32 id, u16 build, length-prefixed atlas banks, no controller graphics."""

    version = VERSION_NUMERIC_ID
    name = "numeric-id"
    has_controller_graphics = False
    sized_atlas_banks = True
    # min(2) target(2) id(4) build(2) string lengths(3) counts(3)
    fixed_len = 16
    string_count = 3
    string_prefix_len = 0

    def read_fields(self, r: BlockReader) -> Header:
        min_version = r.read_u16("min console version")
        target_version = r.read_u16("target console version")
        app_id = r.read_u32("id")
        build = r.read_u16("build")
        version_len = r.read_u8("version length")
        name_len = r.read_u8("name length")
        author_len = r.read_u8("author length")
        code_bank_count = r.read_u8("code bank count")
        ram_bank_count = r.read_u8("ram bank count")
        atlas_bank_count = r.read_u8("atlas bank count")
        name = r.read_string(name_len, "name")
        author = r.read_string(author_len, "author")
        version = r.read_string(version_len, "version")
        return Header(
            app_id=app_id,
            build_number=build,
            min_console_version=min_version,
            target_console_version=target_version,
            name=name,
            version=version,
            author=author,
            code_bank_count=code_bank_count,
            ram_bank_count=ram_bank_count,
            atlas_bank_count=atlas_bank_count,
        )

    def header_problems(self, header):
        problems = []
        if isinstance(header.app_id, bool) or not isinstance(header.app_id, int):
            problems.append(f"ID must be a number in this format, got {type(header.app_id).__name__}")
        if header.controller_graphics_bank_count is not None:
            problems.append("Controller graphics are not supported in this format")
        return problems

    def write_fields(self, header: Header, w: BlockWriter) -> None:
        w.write_u16(header.min_console_version, "min console version")
        w.write_u16(header.target_console_version, "target console version")
        w.write_u32(header.app_id, "id")
        w.write_u16(header.build_number, "build")
        # Lengths are written first, so check the strings before anything else
        lengths = BlockWriter()
        strings = BlockWriter()
        for label, text in (("Version", header.version), ("Name", header.name), ("Author", header.author)):
            before = len(strings)
            strings.write_string(text, label)
            lengths.write_u8(len(strings) - before, f"{label} length")
        w.write_block(lengths.getvalue())
        w.write_u8(header.code_bank_count, "code bank count")
        w.write_u8(header.ram_bank_count, "ram bank count")
        w.write_u8(header.atlas_bank_count, "atlas bank count")
        w.write_string(header.name, "Name")
        w.write_string(header.author, "Author")
        w.write_string(header.version, "Version")

    def read_atlas_sizes(self, r, header, profile):
        return [r.read_u16(f"atlas length[{i}]") for i in range(header.atlas_bank_count)]

    def write_atlas_sizes(self, atlases, w):
        for i, bank in enumerate(atlases):
            w.write_u16(len(bank), f"atlas length[{i}]")

    def check_atlas(self, bank, index, profile):
        if not 0 < len(bank) <= MAX_SIZED_ATLAS_LEN:
            raise InvalidBank("atlas", index, f"1..{MAX_SIZED_ATLAS_LEN} bytes", len(bank))

    def max_atlas_bank_size(self, profile):
        return MAX_SIZED_ATLAS_LEN

    def atlas_table_len(self, count: int) -> int:
        return 2 * count


LAYOUTS = {layout.version: layout for layout in (StringIdLayout(), NumericIdLayout())}


def layout_for_version(version: int) -> Layout:
    try:
        return LAYOUTS[version]
    except KeyError:
        raise ValueError(f"no layout for format version {version}; known: {sorted(LAYOUTS)}") from None
