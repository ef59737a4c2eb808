"""Atlas files: a flat run of fixed-size sprite images."""
from __future__ import annotations

from dataclasses import dataclass

from .blocks import as_stream
from .errors import InvalidAtlas
from .profile import DEFAULT_PROFILE, PlatformProfile


@dataclass(frozen=True)
class AtlasFile:
    images: tuple[bytes, ...]
    sprite_size: int = DEFAULT_PROFILE.atlas_sprite_size

    def validate(self, profile: PlatformProfile = DEFAULT_PROFILE) -> list[str]:
        errors = []
        if self.sprite_size != profile.atlas_sprite_size:
            errors.append(f"Sprite size {self.sprite_size} does not match platform size {profile.atlas_sprite_size}")
        capacity = profile.atlas_bank_size // profile.atlas_sprite_size
        if len(self.images) > capacity:
            errors.append(f"Atlas has too many images ({len(self.images)}, max {capacity})")
        return errors

    def to_bank(self, profile: PlatformProfile = DEFAULT_PROFILE) -> bytes:
        """Pack the images into one zero-padded atlas bank."""
        errors = self.validate(profile)
        if errors:
            raise InvalidAtlas("; ".join(errors))
        return encode_atlas(self).ljust(profile.atlas_bank_size, b"\x00")


def decode_atlas(source, sprite_size: int = DEFAULT_PROFILE.atlas_sprite_size) -> AtlasFile:
    data = as_stream(source).read()
    if len(data) % sprite_size != 0:
        raise InvalidAtlas(f"Content must be multiple of {sprite_size}, was {len(data)} bytes")
    images = tuple(data[i:i + sprite_size] for i in range(0, len(data), sprite_size))
    return AtlasFile(images, sprite_size)


def encode_atlas(atlas: AtlasFile) -> bytes:
    return b"".join(atlas.images)
