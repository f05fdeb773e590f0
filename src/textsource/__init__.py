from .binary_check import (
    BinaryDetector, EncodingDetector, is_binary_file, detect_line_ending,
    BINARY_SIGNATURES, BINARY_EXTENSIONS
)
from .reader import (
    SourceText, read_text, read_bytes, decode_text, sanitize_text, clamp_length,
    normalize_newlines, STDIN_NAME, MAX_TEXT_LENGTH
)


__all__ = [
    "BinaryDetector", "EncodingDetector", "is_binary_file", "detect_line_ending",
    "BINARY_SIGNATURES", "BINARY_EXTENSIONS",
    "SourceText", "read_text", "read_bytes", "decode_text", "sanitize_text", "clamp_length",
    "normalize_newlines", "STDIN_NAME", "MAX_TEXT_LENGTH",
]
