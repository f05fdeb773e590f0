import os
from typing import Optional


BINARY_SIGNATURES = [
    b'\x89PNG\r\n\x1a\n',
    b'\xff\xd8\xff',
    b'GIF87a',
    b'GIF89a',
    b'PK\x03\x04',
    b'%PDF',
    b'\x7fELF',
    b'\x1f\x8b',
    b'BZh',
    b'\xfd7zXZ\x00',
    b'Rar!\x1a\x07',
    b'\xca\xfe\xba\xbe',
]


BINARY_EXTENSIONS = {
    '.png', '.jpg', '.jpeg', '.gif', '.bmp', '.ico', '.webp', '.tiff',
    '.pdf', '.doc', '.docx', '.xls', '.xlsx',
    '.zip', '.rar', '.7z', '.tar', '.gz', '.bz2', '.xz',
    '.exe', '.dll', '.so', '.dylib', '.bin',
    '.mp3', '.mp4', '.wav', '.ogg',
    '.pyc', '.class', '.o',
    '.db', '.sqlite',
}


CHECK_SIZE = 8192
NON_TEXT_THRESHOLD = 0.30

# BOMs are checked before the NUL byte scan, utf-16 text is full of NULs
TEXT_BOMS = {
    b'\xef\xbb\xbf': 'utf-8-sig',
    b'\xff\xfe\x00\x00': 'utf-32',
    b'\x00\x00\xfe\xff': 'utf-32',
    b'\xff\xfe': 'utf-16',
    b'\xfe\xff': 'utf-16',
}


class BinaryDetector:
    def __init__(self):
        self.signatures = BINARY_SIGNATURES
        self.binary_extensions = BINARY_EXTENSIONS
        self.check_size = CHECK_SIZE
        self.threshold = NON_TEXT_THRESHOLD

    def is_binary_by_extension(self, filepath: str) -> bool:
        ext = os.path.splitext(filepath)[1].lower()
        return ext in self.binary_extensions

    def is_binary_by_signature(self, data: bytes) -> bool:
        return any(data.startswith(sig) for sig in self.signatures)

    def is_binary_by_content(self, data: bytes) -> bool:
        if not data:
            return False
        if EncodingDetector().detect_bom(data):
            return False
        if b'\x00' in data:
            return True
        try:
            data.decode('utf-8')
            return False
        except UnicodeDecodeError:
            pass
        text_chars = bytearray({7, 8, 9, 10, 12, 13, 27} | set(range(0x20, 0x100)))
        non_text = sum(1 for byte in data if byte not in text_chars)
        return (non_text / len(data)) > self.threshold

    def check_bytes(self, data: bytes, name: Optional[str] = None) -> bool:
        if name and self.is_binary_by_extension(name):
            return True
        chunk = data[:self.check_size]
        if self.is_binary_by_signature(chunk):
            return True
        return self.is_binary_by_content(chunk)

    def check_file(self, filepath: str) -> bool:
        if not os.path.exists(filepath):
            raise FileNotFoundError(f"File not found: {filepath}")
        if not os.path.isfile(filepath):
            raise ValueError(f"Not a file: {filepath}")
        if os.path.getsize(filepath) == 0:
            return False
        with open(filepath, 'rb') as f:
            chunk = f.read(self.check_size)
        return self.check_bytes(chunk, filepath)


def is_binary_file(filepath: str) -> bool:
    return BinaryDetector().check_file(filepath)


class EncodingDetector:
    ENCODINGS = ['utf-8', 'cp1252', 'latin-1']

    def detect_bom(self, data: bytes) -> Optional[str]:
        for bom, encoding in sorted(TEXT_BOMS.items(), key=lambda x: -len(x[0])):
            if data.startswith(bom):
                return encoding
        return None

    def detect_from_content(self, data: bytes) -> str:
        bom_encoding = self.detect_bom(data)
        if bom_encoding:
            return bom_encoding
        for encoding in self.ENCODINGS:
            try:
                data.decode(encoding)
                return encoding
            except (UnicodeDecodeError, LookupError):
                continue
        return 'utf-8'


def detect_line_ending(data: bytes) -> str:
    crlf_count = data.count(b'\r\n')
    lf_count = data.count(b'\n') - crlf_count
    cr_count = data.count(b'\r') - crlf_count
    if crlf_count and crlf_count >= lf_count and crlf_count >= cr_count:
        return '\r\n'
    elif cr_count > lf_count:
        return '\r'
    return '\n'
