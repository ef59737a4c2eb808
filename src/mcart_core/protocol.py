"""Cartridge protocol constants.

Single source of truth for on-disk magic values and format versions.
Keep this file stable. Compiler and verifier must remain synchronized.
"""

# File magics
MAGIC_CARTRIDGE = b"\xFD\xA1"  # Cartridge header
MAGIC_PALETTE   = b"\xFD\xA2"  # Palette header

# Format generations
VERSION_STRING_ID  = 1  # Canonical: string id, fixed atlas banks, controller graphics
VERSION_NUMERIC_ID = 2  # Numeric id, length-prefixed atlas banks, no controller graphics
DEFAULT_VERSION = VERSION_STRING_ID

# Prefix: [Magic(2) | Ver(1)] = 3 bytes
PREFIX_LEN = 3

# Header strings are u8-length-prefixed
MAX_STRING_LEN = 255

# Each bank type may appear at most this many times
MAX_BANK_COUNT = 255

# v2 atlas banks carry a u16 length each
MAX_SIZED_ATLAS_LEN = 0xFFFF

# Palette: [Magic(2) | 16 * RGB(3)] = 50 bytes
PALETTE_COLOR_COUNT = 16
PALETTE_COLOR_LEN = 3
PALETTE_FILE_LEN = len(MAGIC_PALETTE) + PALETTE_COLOR_COUNT * PALETTE_COLOR_LEN

CARTRIDGE_EXT = "mcart"
PALETTE_EXT = "mpal"
