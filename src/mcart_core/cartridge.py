"""Cartridge codec: header plus bank-structured body.

Body sections are always read and written in this order:
main code, code banks, atlas banks, controller graphics banks.
"""
from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Iterator
from warnings import warn

from .blocks import BlockReader, BlockWriter
from .errors import FormatMismatch, InvalidBank, InvalidHeader, UnsupportedVersion
from .guard import FileGuard
from .header import CartridgeSummary, Header, validate_header
from .layouts import Layout, StringIdLayout, layout_for_version
from .profile import DEFAULT_PROFILE, PlatformProfile
from .protocol import DEFAULT_VERSION, MAGIC_CARTRIDGE


@dataclass(frozen=True, eq=False)
class GameFile:
    """Full game file.

    Identity is ``(app_id, build_number)`` only: two files with the same id and
    build compare equal even if their banks differ.
    """

    header: Header
    main_code: bytes
    code_banks: tuple[bytes, ...] = ()
    atlases: tuple[bytes, ...] = ()
    controller_graphics: tuple[bytes, ...] = ()

    def _key(self) -> tuple:
        return (self.header.app_id, self.header.build_number)

    def __eq__(self, other):
        if not isinstance(other, GameFile):
            return NotImplemented
        return self._key() == other._key()

    def __hash__(self):
        return hash(self._key())

    @classmethod
    def assemble(
        cls,
        *,
        app_id: str | int,
        build_number: int,
        min_console_version: int,
        target_console_version: int,
        name: str,
        version: str,
        author: str,
        main_code: bytes,
        code_banks=(),
        atlases=(),
        controller_graphics=None,
        ram_bank_count: int = 0,
    ) -> "GameFile":
        """Build a game file whose header counts are derived from the banks.

        Pass ``controller_graphics=None`` for generations without them.
        """
        header = Header(
            app_id=app_id,
            build_number=build_number,
            min_console_version=min_console_version,
            target_console_version=target_console_version,
            name=name,
            version=version,
            author=author,
            code_bank_count=len(code_banks),
            ram_bank_count=ram_bank_count,
            atlas_bank_count=len(atlases),
            controller_graphics_bank_count=None if controller_graphics is None else len(controller_graphics),
        )
        return cls(
            header=header,
            main_code=bytes(main_code),
            code_banks=tuple(bytes(b) for b in code_banks),
            atlases=tuple(bytes(b) for b in atlases),
            controller_graphics=tuple(bytes(b) for b in controller_graphics or ()),
        )


class HeaderCodec:
    def __init__(self, layout: Layout | None = None, profile: PlatformProfile = DEFAULT_PROFILE):
        self.layout = layout or StringIdLayout()
        self.profile = profile

    def read(self, r: BlockReader) -> Header:
        magic = r.read_block(len(MAGIC_CARTRIDGE), "file header")
        if magic != MAGIC_CARTRIDGE:
            raise FormatMismatch(magic)
        ver = r.read_u8("file version")
        if ver != self.layout.version:
            raise UnsupportedVersion(ver, self.layout.version)
        return self.layout.read_fields(r)

    def write(self, header: Header, w: BlockWriter) -> None:
        problems = self.layout.header_problems(header)
        if problems:
            raise InvalidHeader(problems)
        w.write_block(MAGIC_CARTRIDGE)
        w.write_u8(self.layout.version, "file version")
        self.layout.write_fields(header, w)

    def decode(self, source) -> Header:
        return self.read(BlockReader(source))

    def encode(self, header: Header) -> bytes:
        w = BlockWriter()
        self.write(header, w)
        return w.getvalue()


class CartridgeCodec:
    def __init__(self, layout: Layout | None = None, profile: PlatformProfile = DEFAULT_PROFILE):
        self.layout = layout or StringIdLayout()
        self.profile = profile
        self.headers = HeaderCodec(self.layout, profile)
        self.guard = FileGuard(self.layout, profile)

    def _read_header(self, r: BlockReader) -> Header:
        header = self.headers.read(r)
        reasons = validate_header(header, self.profile)
        if reasons:
            raise InvalidHeader(reasons)
        return header

    def read(self, source) -> GameFile:
        p = self.profile
        r = BlockReader(source)

        # 1. Header
        header = self._read_header(r)
        atlas_sizes = self.layout.read_atlas_sizes(r, header, p)

        # 2. Body, in fixed order
        main_code = r.read_block(p.code_bank_size, "main code")
        code_banks = r.read_blocks(p.code_bank_size, header.code_bank_count, "code bank")
        atlases = tuple(r.read_block(size, f"atlas bank[{i}]") for i, size in enumerate(atlas_sizes))
        controller_graphics: tuple[bytes, ...] = ()
        if self.layout.has_controller_graphics:
            controller_graphics = r.read_blocks(
                p.controller_graphics_bank_size,
                header.controller_graphics_bank_count,
                "controller graphics",
            )

        if not r.at_eof():
            warn(f"Trailing bytes after cartridge body at offset {r.consumed}")

        return GameFile(header, main_code, code_banks, atlases, controller_graphics)

    def check(self, game: GameFile) -> None:
        """Raise if ``game`` cannot be written as a well-formed cartridge."""
        p = self.profile
        h = game.header
        reasons = self.layout.header_problems(h) + validate_header(h, p)
        if reasons:
            raise InvalidHeader(reasons)

        if len(game.main_code) != p.code_bank_size:
            raise InvalidBank("main code", None, p.code_bank_size, len(game.main_code))
        if h.code_bank_count != len(game.code_banks):
            raise InvalidBank("code bank count", None, len(game.code_banks), h.code_bank_count)
        for i, bank in enumerate(game.code_banks):
            if len(bank) != p.code_bank_size:
                raise InvalidBank("code bank", i, p.code_bank_size, len(bank))
        if h.atlas_bank_count != len(game.atlases):
            raise InvalidBank("atlas bank count", None, len(game.atlases), h.atlas_bank_count)
        for i, bank in enumerate(game.atlases):
            self.layout.check_atlas(bank, i, p)

        if self.layout.has_controller_graphics:
            if h.controller_graphics_bank_count != len(game.controller_graphics):
                raise InvalidBank(
                    "controller graphics count", None, len(game.controller_graphics), h.controller_graphics_bank_count
                )
            for i, bank in enumerate(game.controller_graphics):
                if len(bank) != p.controller_graphics_bank_size:
                    raise InvalidBank("controller graphics", i, p.controller_graphics_bank_size, len(bank))
        elif game.controller_graphics:
            raise InvalidBank("controller graphics count", None, 0, len(game.controller_graphics))

    def write(self, game: GameFile) -> bytes:
        w = BlockWriter()
        # Field errors (FieldTooLong, FieldOutOfRange) come before semantic ones
        self.headers.write(game.header, w)
        self.check(game)
        self.layout.write_atlas_sizes(game.atlases, w)
        w.write_block(game.main_code)
        for bank in game.code_banks:
            w.write_block(bank)
        for bank in game.atlases:
            w.write_block(bank)
        for bank in game.controller_graphics:
            w.write_block(bank)
        return w.getvalue()

    def read_path(self, path: Path | str) -> GameFile:
        self.guard.check(path)
        with open(path, "rb") as f:
            return self.read(f)

    def write_path(self, game: GameFile, path: Path | str) -> None:
        data = self.write(game)
        with open(path, "wb") as f:
            f.write(data)

    def read_summary(self, path: Path | str) -> CartridgeSummary:
        self.guard.check(path)
        with open(path, "rb") as f:
            return CartridgeSummary(self._read_header(BlockReader(f)))

    def section_offsets(self, game: GameFile) -> Iterator[tuple[str, int, int, int]]:
        """Yield ``(section, index, offset, length)`` for every body section."""
        offset = len(self.headers.encode(game.header))
        offset += self.layout.atlas_table_len(len(game.atlases))
        sections = [("main_code", [game.main_code]), ("code_bank", game.code_banks), ("atlas", game.atlases)]
        if self.layout.has_controller_graphics:
            sections.append(("controller_graphics", game.controller_graphics))
        for section, banks in sections:
            for i, bank in enumerate(banks):
                yield section, i, offset, len(bank)
                offset += len(bank)


def codec_for(version: int = DEFAULT_VERSION, profile: PlatformProfile = DEFAULT_PROFILE) -> CartridgeCodec:
    return CartridgeCodec(layout_for_version(version), profile)
