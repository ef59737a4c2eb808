"""Project manifest: the JSON description of a game to compile."""
from __future__ import annotations

import json
from dataclasses import dataclass, field, fields
from pathlib import Path

from mcart_core.atlas import decode_atlas
from mcart_core.cartridge import GameFile
from mcart_core.errors import InvalidBank, ManifestParsingError
from mcart_core.guard import check_file
from mcart_core.layouts import Layout, StringIdLayout
from mcart_core.profile import DEFAULT_PROFILE, PlatformProfile

# Manifests are small; anything larger is not a manifest
MAX_MANIFEST_SIZE = 1024 * 1024

_TYPES = {
    "id": (str, int),
    "name": str,
    "author": str,
    "version": str,
    "build": int,
    "main_code": str,
    "min_console_version": int,
    "target_console_version": int,
    "code_files": list,
    "atlas_files": list,
    "controller_graphics_files": list,
    "ram_banks": int,
}


@dataclass
class Manifest:
    id: str | int
    name: str
    author: str
    version: str
    build: int
    main_code: str
    min_console_version: int
    code_files: list[str] = field(default_factory=list)
    atlas_files: list[str] = field(default_factory=list)
    ram_banks: int = 0
    target_console_version: int | None = None
    controller_graphics_files: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, obj) -> "Manifest":
        if not isinstance(obj, dict):
            raise ManifestParsingError("manifest must be a JSON object")
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(obj) - known)
        if unknown:
            raise ManifestParsingError(f"unknown fields {unknown}")
        for key, value in obj.items():
            typ = _TYPES[key]
            if value is None and key == "target_console_version":
                continue
            if isinstance(value, bool) or not isinstance(value, typ):
                raise ManifestParsingError(f"field {key} has wrong type {type(value).__name__}")
            if typ is list and not all(isinstance(x, str) for x in value):
                raise ManifestParsingError(f"field {key} must be a list of paths")
        try:
            return cls(**obj)
        except TypeError as e:
            raise ManifestParsingError(str(e)) from e

    @classmethod
    def from_string(cls, text: str) -> "Manifest":
        try:
            obj = json.loads(text)
        except json.JSONDecodeError as e:
            raise ManifestParsingError(str(e)) from e
        return cls.from_dict(obj)

    @classmethod
    def from_file(cls, path: Path | str) -> "Manifest":
        check_file(path, max_size=MAX_MANIFEST_SIZE)
        return cls.from_string(Path(path).read_text(encoding="utf-8"))


def _load_bank(path: Path, section: str, index: int | None, size: int) -> bytes:
    check_file(path)
    data = path.read_bytes()
    if len(data) > size:
        raise InvalidBank(section, index, f"at most {size} bytes", len(data))
    return data.ljust(size, b"\x00")


def _load_atlas(path: Path, index: int, layout: Layout, profile: PlatformProfile) -> bytes:
    check_file(path)
    data = path.read_bytes()
    if not layout.sized_atlas_banks:
        return decode_atlas(data, profile.atlas_sprite_size).to_bank(profile)
    # Sized banks keep their exact length
    layout.check_atlas(data, index, profile)
    return data


def build_game_file(
    manifest: Manifest,
    base_dir: Path,
    layout: Layout | None = None,
    profile: PlatformProfile = DEFAULT_PROFILE,
) -> GameFile:
    """Assemble a game file from the payload files a manifest points at.

    Paths are relative to ``base_dir``. Fixed-size banks are zero-padded;
    missing controller graphics become blank banks.
    """
    layout = layout or StringIdLayout()
    base_dir = Path(base_dir)
    p = profile

    main_code = _load_bank(base_dir / manifest.main_code, "main code", None, p.code_bank_size)
    code_banks = [
        _load_bank(base_dir / rel, "code bank", i, p.code_bank_size)
        for i, rel in enumerate(manifest.code_files)
    ]
    atlases = [_load_atlas(base_dir / rel, i, layout, p) for i, rel in enumerate(manifest.atlas_files)]

    controller_graphics = None
    if layout.has_controller_graphics:
        controller_graphics = [
            _load_bank(base_dir / rel, "controller graphics", i, p.controller_graphics_bank_size)
            for i, rel in enumerate(manifest.controller_graphics_files)
        ]
        blank = bytes(p.controller_graphics_bank_size)
        controller_graphics += [blank] * (p.controller_count - len(controller_graphics))

    target = manifest.target_console_version
    return GameFile.assemble(
        app_id=manifest.id,
        build_number=manifest.build,
        min_console_version=manifest.min_console_version,
        target_console_version=manifest.min_console_version if target is None else target,
        name=manifest.name,
        version=manifest.version,
        author=manifest.author,
        main_code=main_code,
        code_banks=code_banks,
        atlases=atlases,
        controller_graphics=controller_graphics,
        ram_bank_count=manifest.ram_banks,
    )
