"""Pre-flight file checks, run before any decode attempt."""
from __future__ import annotations

from pathlib import Path

from .errors import FileTooLarge, FileTooSmall, NotAFile, NotFound
from .layouts import Layout, StringIdLayout
from .profile import DEFAULT_PROFILE, PlatformProfile
from .protocol import MAX_BANK_COUNT


def check_file(path: Path | str, min_size: int | None = None, max_size: int | None = None) -> int:
    """Check ``path`` is an existing regular file within bounds; return its size."""
    p = Path(path)
    if not p.exists():
        raise NotFound(p)
    if not p.is_file():
        raise NotAFile(p)
    size = p.stat().st_size
    if max_size is not None and size > max_size:
        raise FileTooLarge(size, max_size)
    if min_size is not None and size < min_size:
        raise FileTooSmall(size, min_size)
    return size


class FileGuard:
    def __init__(self, layout: Layout | None = None, profile: PlatformProfile = DEFAULT_PROFILE):
        self.layout = layout or StringIdLayout()
        self.profile = profile

    @property
    def min_file_size(self) -> int:
        return self.layout.min_header_len + self.profile.code_bank_size

    @property
    def max_file_size(self) -> int:
        p = self.profile
        size = self.layout.max_header_len + p.code_bank_size
        size += MAX_BANK_COUNT * p.code_bank_size
        size += MAX_BANK_COUNT * p.ram_bank_size
        size += MAX_BANK_COUNT * self.layout.max_atlas_bank_size(p)
        if self.layout.has_controller_graphics:
            size += p.controller_count * p.controller_graphics_bank_size
        return size

    def check(self, path: Path | str) -> int:
        return check_file(path, self.min_file_size, self.max_file_size)
