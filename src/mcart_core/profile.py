"""Platform profile: bank sizes and controller count for one console revision."""
from __future__ import annotations

import json
from dataclasses import dataclass, fields, replace
from pathlib import Path

from .errors import ProfileError


@dataclass(frozen=True)
class PlatformProfile:
    code_bank_size: int = 0x2000
    ram_bank_size: int = 0x2000
    atlas_bank_size: int = 0x1000
    controller_graphics_bank_size: int = 0x200
    controller_count: int = 9
    atlas_sprite_size: int = 32

    def __post_init__(self):
        for f in fields(self):
            value = getattr(self, f.name)
            if not isinstance(value, int) or isinstance(value, bool) or value <= 0:
                raise ProfileError(f"{f.name} must be a positive integer, was {value!r}")


DEFAULT_PROFILE = PlatformProfile()


def profile_from_dict(overrides: dict, base: PlatformProfile = DEFAULT_PROFILE) -> PlatformProfile:
    known = {f.name for f in fields(PlatformProfile)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ProfileError(f"unknown keys {unknown}")
    return replace(base, **overrides)


def load_profile(path: Path | str | None) -> PlatformProfile:
    """Load a profile from a JSON object of overrides; ``None`` gives the default."""
    if path is None:
        return DEFAULT_PROFILE
    try:
        data = json.loads(Path(path).read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as e:
        raise ProfileError(str(e)) from e
    if not isinstance(data, dict):
        raise ProfileError("profile must be a JSON object")
    return profile_from_dict(data)
