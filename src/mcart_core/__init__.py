"""mcart core - cartridge and palette codecs."""
from .atlas import AtlasFile, decode_atlas, encode_atlas
from .cartridge import CartridgeCodec, GameFile, HeaderCodec, codec_for
from .errors import CartridgeError, DecodeError, EncodeError, GuardError
from .guard import FileGuard, check_file
from .header import CartridgeSummary, Header, validate_header
from .layouts import NumericIdLayout, StringIdLayout, layout_for_version
from .palette import Color, Palette, decode_palette, encode_palette, read_palette, write_palette
from .profile import DEFAULT_PROFILE, PlatformProfile, load_profile

__all__ = [
    "AtlasFile", "decode_atlas", "encode_atlas",
    "CartridgeCodec", "GameFile", "HeaderCodec", "codec_for",
    "CartridgeError", "DecodeError", "EncodeError", "GuardError",
    "FileGuard", "check_file",
    "CartridgeSummary", "Header", "validate_header",
    "NumericIdLayout", "StringIdLayout", "layout_for_version",
    "Color", "Palette", "decode_palette", "encode_palette", "read_palette", "write_palette",
    "DEFAULT_PROFILE", "PlatformProfile", "load_profile",
]
