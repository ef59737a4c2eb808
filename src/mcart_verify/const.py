ERRORS = {
  "E_NOT_FOUND": "Required file missing",
  "E_NOT_A_FILE": "Path is not a regular file",
  "E_FILE_TOO_LARGE": "File exceeds the largest possible cartridge",
  "E_FILE_TOO_SMALL": "File is smaller than the smallest possible cartridge",
  "E_FORMAT_MISMATCH": "File missing cartridge magic bytes",
  "E_UNSUPPORTED_VERSION": "Cartridge format version not supported",
  "E_TRUNCATED": "File ended inside a declared section",
  "E_INVALID_HEADER": "Cartridge header failed validation",
  "E_INVALID_PALETTE": "Palette file missing palette magic bytes",
  "E_INVALID_ATLAS": "Atlas data is not a whole number of sprites",
  "E_BUNDLE_JSON": "Bundle JSON invalid",
  "E_SIG_INVALID": "Bundle signature invalid",
  "E_POLICY_TRUST": "Publisher key not trusted",
  "E_TRUST_STORE": "Trust store unreadable",
  "E_IO": "File could not be read",
}
