"""16-colour palette files."""
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import NamedTuple
from warnings import warn

from .blocks import BlockReader
from .errors import InvalidPalette
from .guard import check_file
from .protocol import MAGIC_PALETTE, PALETTE_COLOR_COUNT, PALETTE_COLOR_LEN, PALETTE_FILE_LEN


class Color(NamedTuple):
    r: int
    g: int
    b: int

    @classmethod
    def from_bytes(cls, rgb: bytes) -> "Color":
        return cls(rgb[0], rgb[1], rgb[2])

    def as_bytes(self) -> bytes:
        return bytes((self.r, self.g, self.b))


@dataclass(frozen=True)
class Palette:
    colors: tuple[Color, ...]
    # Where the palette was loaded from; not part of the encoded bytes
    filepath: str | None = field(default=None, compare=False)

    def __post_init__(self):
        if len(self.colors) != PALETTE_COLOR_COUNT:
            raise ValueError(f"a palette has exactly {PALETTE_COLOR_COUNT} colors, got {len(self.colors)}")
        object.__setattr__(self, "colors", tuple(Color(*c) for c in self.colors))

    @property
    def filename(self) -> str | None:
        if self.filepath is None:
            return None
        return Path(self.filepath).name


def decode_palette(source) -> Palette:
    r = BlockReader(source)
    if r.read_block(len(MAGIC_PALETTE), "palette header") != MAGIC_PALETTE:
        raise InvalidPalette("Not a palette file")
    blocks = r.read_blocks(PALETTE_COLOR_LEN, PALETTE_COLOR_COUNT, "palette color")
    if not r.at_eof():
        warn(f"Trailing bytes after palette at offset {PALETTE_FILE_LEN}")
    return Palette(tuple(Color.from_bytes(b) for b in blocks))


def encode_palette(palette: Palette) -> bytes:
    return MAGIC_PALETTE + b"".join(c.as_bytes() for c in palette.colors)


def read_palette(path: Path | str) -> Palette:
    check_file(path, PALETTE_FILE_LEN, PALETTE_FILE_LEN)
    with open(path, "rb") as f:
        palette = decode_palette(f)
    return Palette(palette.colors, filepath=str(path))


def write_palette(palette: Palette, path: Path | str) -> None:
    with open(path, "wb") as f:
        f.write(encode_palette(palette))
