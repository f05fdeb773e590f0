import re
from typing import List, Tuple, NamedTuple, Optional, Callable
from enum import Enum
from dataclasses import dataclass


class DiffKind(str, Enum):
    ADDED = 'added'
    REMOVED = 'removed'
    UNCHANGED = 'unchanged'
    MODIFIED = 'modified'


class Granularity(str, Enum):
    LINE = 'line'
    WORD = 'word'
    CHAR = 'char'

    @classmethod
    def _missing_(cls, value):
        if isinstance(value, str):
            name = value.strip().lower()
            if name == 'character':
                return cls.CHAR
            for member in cls:
                if member.value == name:
                    return member
        return None


class DiffToken(NamedTuple):
    kind: DiffKind
    content: str
    old_position: Optional[int] = None
    new_position: Optional[int] = None
    old_content: Optional[str] = None
    new_content: Optional[str] = None

    def __repr__(self) -> str:
        if self.kind == DiffKind.MODIFIED:
            return (f"DiffToken({self.kind.value!r}, {self.old_content!r} -> {self.new_content!r}, "
                    f"old={self.old_position}, new={self.new_position})")
        return (f"DiffToken({self.kind.value!r}, {self.content!r}, "
                f"old={self.old_position}, new={self.new_position})")


TokenList = List[DiffToken]


@dataclass(frozen=True)
class CompareOptions:
    granularity: Granularity = Granularity.LINE
    ignore_whitespace: bool = False
    ignore_case: bool = False

    @classmethod
    def from_names(cls, granularity: str = 'line', ignore_whitespace: bool = False,
                   ignore_case: bool = False) -> 'CompareOptions':
        return cls(Granularity(granularity), ignore_whitespace, ignore_case)


@dataclass
class DiffSummary:
    added: int
    removed: int
    modified: int
    unchanged: int
    total: int
    similarity_ratio: float

    @property
    def has_changes(self) -> bool:
        return (self.added + self.removed + self.modified) > 0

    def as_dict(self) -> dict:
        return {
            'added': self.added,
            'removed': self.removed,
            'modified': self.modified,
            'unchanged': self.unchanged,
            'total': self.total,
        }

    @classmethod
    def from_tokens(cls, tokens: TokenList) -> 'DiffSummary':
        counts = count_kinds(tokens)
        old_len = sum(1 for t in tokens if t.old_position is not None)
        new_len = sum(1 for t in tokens if t.new_position is not None)
        total_units = old_len + new_len
        ratio = (2.0 * counts['unchanged'] / total_units) if total_units > 0 else 1.0
        return cls(
            added=counts['added'],
            removed=counts['removed'],
            modified=counts['modified'],
            unchanged=counts['unchanged'],
            total=counts['total'],
            similarity_ratio=ratio
        )


def make_added(content: str, new_position: int) -> DiffToken:
    return DiffToken(DiffKind.ADDED, content, new_position=new_position)


def make_removed(content: str, old_position: int) -> DiffToken:
    return DiffToken(DiffKind.REMOVED, content, old_position=old_position)


def make_unchanged(content: str, old_position: int, new_position: int) -> DiffToken:
    return DiffToken(DiffKind.UNCHANGED, content, old_position, new_position)


def make_modified(old_content: str, new_content: str,
                  old_position: int, new_position: int) -> DiffToken:
    return DiffToken(DiffKind.MODIFIED, new_content, old_position, new_position,
                     old_content, new_content)


def count_kinds(tokens: TokenList) -> dict:
    counts = {
        'added': 0,
        'removed': 0,
        'modified': 0,
        'unchanged': 0,
        'total': len(tokens)
    }
    for token in tokens:
        counts[token.kind.value] += 1
    return counts


_WHITESPACE_RUN = re.compile(r'\s+')


def tokenize_lines(text: str) -> List[str]:
    if not text:
        return []
    return text.split('\n')


def tokenize_words(text: str) -> List[str]:
    return [w for w in _WHITESPACE_RUN.split(text) if w]


def tokenize_chars(text: str) -> List[str]:
    # code points, not grapheme clusters
    return list(text)


def get_tokenizer(granularity: Granularity) -> Callable[[str], List[str]]:
    tokenizers = {
        Granularity.LINE: tokenize_lines,
        Granularity.WORD: tokenize_words,
        Granularity.CHAR: tokenize_chars
    }
    return tokenizers[granularity]


def join_units(units: List[str], granularity: Granularity) -> str:
    if granularity == Granularity.LINE:
        return '\n'.join(units)
    elif granularity == Granularity.WORD:
        return ' '.join(units)
    else:
        return ''.join(units)


def normalize_unit(unit: str, ignore_whitespace: bool = False, ignore_case: bool = False) -> str:
    if ignore_case:
        unit = unit.lower()
    if ignore_whitespace:
        unit = _WHITESPACE_RUN.sub(' ', unit).strip()
    return unit


def original_units(tokens: TokenList) -> List[str]:
    result = []
    for token in tokens:
        if token.kind == DiffKind.MODIFIED:
            result.append(token.old_content)
        elif token.kind != DiffKind.ADDED:
            result.append(token.content)
    return result


def modified_units(tokens: TokenList) -> List[str]:
    # unchanged units come back with the original side's display content
    result = []
    for token in tokens:
        if token.kind == DiffKind.MODIFIED:
            result.append(token.new_content)
        elif token.kind != DiffKind.REMOVED:
            result.append(token.content)
    return result


def swap_tokens(tokens: TokenList) -> TokenList:
    swapped = []
    for token in tokens:
        if token.kind == DiffKind.ADDED:
            swapped.append(make_removed(token.content, token.new_position))
        elif token.kind == DiffKind.REMOVED:
            swapped.append(make_added(token.content, token.old_position))
        elif token.kind == DiffKind.MODIFIED:
            swapped.append(make_modified(token.new_content, token.old_content,
                                         token.new_position, token.old_position))
        else:
            swapped.append(make_unchanged(token.content, token.new_position, token.old_position))
    return swapped


def group_consecutive_kinds(tokens: TokenList) -> List[Tuple[DiffKind, List[DiffToken]]]:
    if not tokens:
        return []
    groups = []
    current_kind = tokens[0].kind
    current = [tokens[0]]
    for token in tokens[1:]:
        if token.kind == current_kind:
            current.append(token)
        else:
            groups.append((current_kind, current))
            current_kind = token.kind
            current = [token]
    groups.append((current_kind, current))
    return groups
