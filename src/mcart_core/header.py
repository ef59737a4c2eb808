"""Cartridge header value and its semantic validation."""
from __future__ import annotations

from dataclasses import dataclass

from .blocks import encoded_len
from .profile import DEFAULT_PROFILE, PlatformProfile
from .protocol import MAX_STRING_LEN


@dataclass(frozen=True)
class Header:
    # Unique id for the app: a string in v1, a u32 in v2
    app_id: str | int
    # Build number of the app (must be equal or higher than the installed one)
    build_number: int
    # Compatibility bounds
    min_console_version: int
    target_console_version: int
    name: str
    version: str
    author: str
    code_bank_count: int = 0
    # RAM banks needed by the game; they are not stored in the file
    ram_bank_count: int = 0
    atlas_bank_count: int = 1
    # None for generations without controller graphics
    controller_graphics_bank_count: int | None = None

    def __post_init__(self):
        # Strings are stored trimmed; keep the value equal to what decodes back
        for name in ("name", "version", "author"):
            object.__setattr__(self, name, getattr(self, name).strip())
        if isinstance(self.app_id, str):
            object.__setattr__(self, "app_id", self.app_id.strip())

    @property
    def name_length(self) -> int:
        return encoded_len(self.name)

    @property
    def version_length(self) -> int:
        return encoded_len(self.version)

    @property
    def author_length(self) -> int:
        return encoded_len(self.author)


def _check_text(label: str, text: str, errors: list[str]) -> None:
    length = encoded_len(text)
    if length == 0:
        errors.append(f"{label} must have at least one character")
    elif length > MAX_STRING_LEN:
        errors.append(f"{label} is too long, max of {MAX_STRING_LEN} characters")


def validate_header(header: Header, profile: PlatformProfile = DEFAULT_PROFILE) -> list[str]:
    """Collect every semantic violation in ``header``.

    Returns an empty list when the header is valid. Pure: no I/O.
    """
    errors: list[str] = []

    if header.build_number < 1:
        errors.append("Build ver must be at least 1")
    if header.target_console_version < header.min_console_version:
        errors.append("Minimum console version must <= target version")
    _check_text("Author", header.author, errors)
    _check_text("Name", header.name, errors)
    _check_text("Version", header.version, errors)
    if isinstance(header.app_id, str):
        _check_text("ID", header.app_id, errors)
    elif header.app_id < 1:
        errors.append("ID must be at least 1")
    count = header.controller_graphics_bank_count
    if count is not None and count != profile.controller_count:
        errors.append(
            "Incorrect number of controller graphics "
            f"(expected {profile.controller_count}, found {count})"
        )
    if header.atlas_bank_count < 1:
        errors.append("Must have at least one atlas bank")

    return errors


@dataclass(frozen=True)
class CartridgeSummary:
    """Header-only view of a cartridge, for listings."""

    header: Header

    @property
    def id(self) -> str | int:
        return self.header.app_id

    @property
    def name(self) -> str:
        return self.header.name

    def version_formatted(self) -> str:
        return f"Ver {self.header.version} (#{self.header.build_number})"
