import io, os, sys, tempfile, shutil, pytest

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..', 'src'))

from textsource.binary_check import (
    BinaryDetector, EncodingDetector, is_binary_file, detect_line_ending,
    BINARY_SIGNATURES, BINARY_EXTENSIONS
)
from textsource.reader import (
    SourceText, read_text, read_bytes, decode_text, sanitize_text, clamp_length,
    normalize_newlines, STDIN_NAME, MAX_TEXT_LENGTH
)


@pytest.fixture
def tmp():
    d = tempfile.mkdtemp()
    yield d
    shutil.rmtree(d, ignore_errors=True)


def _mk(tmp, name, content, binary=False):
    p = os.path.join(tmp, name)
    with open(p, 'wb' if binary else 'w', encoding=None if binary else 'utf-8', newline='' if not binary else None) as f:
        f.write(content)
    return p


def test_binary_detector_text(tmp):
    assert not BinaryDetector().check_file(_mk(tmp, 't.txt', 'Hello'))


def test_binary_detector_ext(tmp):
    assert BinaryDetector().check_file(_mk(tmp, 'i.png', b'\x89PNG\r\n\x1a\n', True))


def test_binary_detector_signature_without_ext():
    assert BinaryDetector().check_bytes(b'%PDF-1.4 something')
    assert BinaryDetector().check_bytes(b'\x7fELF\x02\x01')


def test_is_binary_null(tmp):
    assert is_binary_file(_mk(tmp, 'd.dat', b'a\x00b', True))


def test_empty_file_is_text(tmp):
    assert not is_binary_file(_mk(tmp, 'e.txt', b'', True))


def test_utf16_with_bom_is_text():
    data = '\ufeffhi'.encode('utf-16-le')
    assert not BinaryDetector().is_binary_by_content(data)


def test_check_file_errors(tmp):
    with pytest.raises(FileNotFoundError):
        BinaryDetector().check_file(os.path.join(tmp, 'missing.txt'))
    with pytest.raises(ValueError):
        BinaryDetector().check_file(tmp)


def test_constants():
    assert b'%PDF' in BINARY_SIGNATURES
    assert '.png' in BINARY_EXTENSIONS
    assert '.txt' not in BINARY_EXTENSIONS


def test_encoding_utf8():
    assert EncodingDetector().detect_from_content('héllo'.encode('utf-8')) == 'utf-8'


def test_encoding_bom():
    d = EncodingDetector()
    assert d.detect_bom(b'\xef\xbb\xbfabc') == 'utf-8-sig'
    assert d.detect_bom(b'\xff\xfe\x00\x00') == 'utf-32'
    assert d.detect_bom(b'\xff\xfea\x00') == 'utf-16'
    assert d.detect_bom(b'abc') is None


def test_encoding_fallback():
    assert EncodingDetector().detect_from_content(b'caf\xe9') == 'cp1252'
    assert EncodingDetector().detect_from_content(b'\x81\x8d') == 'latin-1'


def test_line_endings():
    assert detect_line_ending(b'a\r\nb\r\n') == '\r\n'
    assert detect_line_ending(b'a\nb\n') == '\n'
    assert detect_line_ending(b'a\rb\r') == '\r'
    assert detect_line_ending(b'') == '\n'


def test_sanitize_text():
    assert sanitize_text('a\x00b\x07c\x7f') == 'abc'
    assert sanitize_text('keep\ttabs\nand\r\nnewlines') == 'keep\ttabs\nand\r\nnewlines'


def test_clamp_length():
    assert clamp_length('abcdef', 3) == ('abc', True)
    assert clamp_length('abc', 3) == ('abc', False)
    assert clamp_length('', 0) == ('', False)
    with pytest.raises(ValueError):
        clamp_length('abc', -1)
    assert MAX_TEXT_LENGTH == 1_000_000


def test_normalize_newlines():
    assert normalize_newlines('a\r\nb\rc\n') == 'a\nb\nc\n'


def test_read_text_basic(tmp):
    src = read_text(_mk(tmp, 'a.txt', 'one\ntwo\n'))
    assert isinstance(src, SourceText)
    assert src.text == 'one\ntwo\n'
    assert src.encoding == 'utf-8'
    assert src.line_ending == '\n'
    assert not src.truncated
    assert not src.sanitized


def test_read_text_crlf(tmp):
    src = read_text(_mk(tmp, 'w.txt', b'one\r\ntwo', True))
    assert src.text == 'one\ntwo'
    assert src.line_ending == '\r\n'


def test_read_text_bom_stripped(tmp):
    src = read_text(_mk(tmp, 'b.txt', b'\xef\xbb\xbfhello', True))
    assert src.text == 'hello'
    assert src.encoding == 'utf-8-sig'


def test_read_text_sanitizes(tmp):
    path = _mk(tmp, 'c.txt', b'a\x01b\n', True)
    src = read_text(path)
    assert src.text == 'ab\n'
    assert src.sanitized
    raw = read_text(path, sanitize=False)
    assert raw.text == 'a\x01b\n'
    assert not raw.sanitized


def test_read_text_truncates(tmp):
    src = read_text(_mk(tmp, 'long.txt', 'x' * 50), max_length=10)
    assert src.text == 'x' * 10
    assert src.truncated


def test_read_text_explicit_encoding(tmp):
    src = read_text(_mk(tmp, 'l.txt', 'café'.encode('latin-1'), True), encoding='latin-1')
    assert src.text == 'café'
    assert src.encoding == 'latin-1'


def test_read_text_unknown_encoding(tmp):
    with pytest.raises(LookupError):
        read_text(_mk(tmp, 'u.txt', 'x'), encoding='no-such-codec')


def test_read_text_stdin():
    src = read_text(STDIN_NAME, stdin=io.BytesIO(b'from\nstdin\n'))
    assert src.label == '-'
    assert src.text == 'from\nstdin\n'


def test_read_bytes_errors(tmp):
    with pytest.raises(FileNotFoundError, match='File not found'):
        read_bytes(os.path.join(tmp, 'nope.txt'))
    with pytest.raises(ValueError, match='Is a directory'):
        read_bytes(tmp)


def test_decode_rejects_binary():
    with pytest.raises(ValueError, match='Cannot compare binary file'):
        decode_text(b'\x89PNG\r\n\x1a\n....', 'pic')
    with pytest.raises(ValueError):
        decode_text(b'plain', 'archive.zip')


def test_stdin_label_skips_extension_check():
    text, enc = decode_text(b'plain', STDIN_NAME)
    assert text == 'plain'
    assert enc == 'utf-8'
