"""Error taxonomy for the cartridge codecs.

Every data-driven failure is a ``CartridgeError`` carrying a stable ``code``.
Guard, decode and encode failures are separate families so callers can tell
"the file could not be opened" apart from "the bytes are malformed".
"""
from __future__ import annotations


class CartridgeError(ValueError):
    code = "E_CARTRIDGE"


# --- FileGuard ---------------------------------------------------------------

class GuardError(CartridgeError):
    code = "E_GUARD"


class NotFound(GuardError):
    code = "E_NOT_FOUND"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"File not found: {self.path}")


class NotAFile(GuardError):
    code = "E_NOT_A_FILE"

    def __init__(self, path):
        self.path = str(path)
        super().__init__(f"Not a regular file: {self.path}")


class FileTooLarge(GuardError):
    code = "E_FILE_TOO_LARGE"

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(f"File too large. File was {size}, max is {max_size}")


class FileTooSmall(GuardError):
    code = "E_FILE_TOO_SMALL"

    def __init__(self, size: int, min_size: int):
        self.size = size
        self.min_size = min_size
        super().__init__(f"File too small ({size} < {min_size}). This may not be a valid file.")


# --- Decoding ----------------------------------------------------------------

class DecodeError(CartridgeError):
    code = "E_DECODE"


class FormatMismatch(DecodeError):
    code = "E_FORMAT_MISMATCH"

    def __init__(self, found: bytes):
        self.found = bytes(found)
        super().__init__(f"Not a cartridge file (magic {self.found!r})")


class UnsupportedVersion(DecodeError):
    code = "E_UNSUPPORTED_VERSION"

    def __init__(self, found: int, expected: int):
        self.found = found
        self.expected = expected
        super().__init__(f"Unsupported cartridge file version, was {found} and must be {expected}")


class Truncated(DecodeError):
    code = "E_TRUNCATED"

    def __init__(self, field: str, expected: int, got: int):
        self.field = field
        self.expected = expected
        self.got = got
        super().__init__(f"Truncated while reading {field}: expected {expected} bytes, got {got}")


class InvalidHeader(DecodeError):
    code = "E_INVALID_HEADER"

    def __init__(self, reasons: list[str]):
        self.reasons = list(reasons)
        super().__init__("Header validation failed:\n" + "\n".join(self.reasons))


class InvalidPalette(DecodeError):
    code = "E_INVALID_PALETTE"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid Palette file: {reason}")


class InvalidAtlas(DecodeError):
    code = "E_INVALID_ATLAS"

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid atlas: {reason}")


# --- Encoding ----------------------------------------------------------------

class EncodeError(CartridgeError):
    code = "E_ENCODE"


class FieldTooLong(EncodeError):
    code = "E_FIELD_TOO_LONG"

    def __init__(self, field: str, max_len: int, actual: int):
        self.field = field
        self.max = max_len
        self.actual = actual
        super().__init__(f"{field} field too long, max is {max_len} and was {actual}")


class FieldOutOfRange(EncodeError):
    code = "E_FIELD_OUT_OF_RANGE"

    def __init__(self, field: str, max_value: int, actual: int):
        self.field = field
        self.max = max_value
        self.actual = actual
        super().__init__(f"{field} out of range, must be 0..{max_value} and was {actual}")


class InvalidBank(EncodeError):
    code = "E_INVALID_BANK"

    def __init__(self, section: str, index: int | None, expected, actual):
        self.section = section
        self.index = index
        self.expected = expected
        self.actual = actual
        where = section if index is None else f"{section}[{index}]"
        super().__init__(f"Invalid {where}: expected {expected}, found {actual}")


# --- Collaborators -----------------------------------------------------------

class ManifestParsingError(CartridgeError):
    code = "E_MANIFEST_PARSE"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Unable to parse manifest: {detail}")


class ProfileError(CartridgeError):
    code = "E_PROFILE"

    def __init__(self, detail: str):
        self.detail = detail
        super().__init__(f"Invalid platform profile: {detail}")
