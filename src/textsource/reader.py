import os
import re
import sys
from typing import Optional, Tuple, BinaryIO
from dataclasses import dataclass
from .binary_check import BinaryDetector, EncodingDetector, detect_line_ending

STDIN_NAME = '-'
MAX_TEXT_LENGTH = 1_000_000

# NUL and C0 controls except \t \n \r, plus DEL
_CONTROL_CHARS = re.compile(r'[\x00-\x08\x0b\x0c\x0e-\x1f\x7f]')


@dataclass
class SourceText:
    label: str
    text: str
    encoding: str
    line_ending: str
    truncated: bool = False
    sanitized: bool = False


def sanitize_text(text: str) -> str:
    return _CONTROL_CHARS.sub('', text)


def clamp_length(text: str, limit: int = MAX_TEXT_LENGTH) -> Tuple[str, bool]:
    if limit < 0:
        raise ValueError(f"Length limit must be non-negative, got {limit}")
    if len(text) <= limit:
        return text, False
    return text[:limit], True


def normalize_newlines(text: str) -> str:
    return text.replace('\r\n', '\n').replace('\r', '\n')


def read_bytes(path: str, stdin: Optional[BinaryIO] = None) -> bytes:
    if path == STDIN_NAME:
        stream = stdin or sys.stdin.buffer
        return stream.read()
    if not os.path.exists(path):
        raise FileNotFoundError(f"File not found: {path}")
    if os.path.isdir(path):
        raise ValueError(f"Is a directory: {path}")
    with open(path, 'rb') as f:
        return f.read()


def decode_text(data: bytes, label: str, encoding: Optional[str] = None) -> Tuple[str, str]:
    if BinaryDetector().check_bytes(data, None if label == STDIN_NAME else label):
        raise ValueError(f"Cannot compare binary file: {label}")
    enc = encoding or EncodingDetector().detect_from_content(data)
    return data.decode(enc, errors='replace'), enc


def read_text(path: str, encoding: Optional[str] = None, sanitize: bool = True,
              max_length: int = MAX_TEXT_LENGTH, stdin: Optional[BinaryIO] = None) -> SourceText:
    """Load one side of a comparison.

    The file is read whole, decoded, newline-normalized to ``\\n`` and
    optionally stripped of control characters and capped at ``max_length``
    characters. A trailing newline is kept: at line granularity it is a
    significant empty last line.
    """
    data = read_bytes(path, stdin)
    text, enc = decode_text(data, path, encoding)
    line_ending = detect_line_ending(data)
    text = normalize_newlines(text)
    sanitized = False
    if sanitize:
        cleaned = sanitize_text(text)
        sanitized = cleaned != text
        text = cleaned
    text, truncated = clamp_length(text, max_length)
    return SourceText(label=path, text=text, encoding=enc, line_ending=line_ending,
                      truncated=truncated, sanitized=sanitized)
