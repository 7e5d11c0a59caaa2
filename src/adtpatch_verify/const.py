ERRORS = {
  "E_SIZE_MISMATCH": "Patched class size differs from original",
  "E_DIFF_COUNT": "Patched class must differ from original in exactly one byte",
  "E_DIFF_OFFSET": "Changed byte is not the version byte",
  "E_PATCHED_CONST": "Patched class does not carry the new version constant",
}
