from functools import lru_cache
from typing import List, Optional, Tuple, Union
from .utils import (
    DiffKind, DiffToken, TokenList, Granularity, CompareOptions, DiffSummary,
    make_added, make_removed, make_unchanged, make_modified,
    get_tokenizer, normalize_unit, swap_tokens
)

COMPARE_CACHE_SIZE = 64


class GreedyBoundedDiff:
    """Two-cursor diff with a forward lookahead on mismatch.

    Not a minimal edit script: on a mismatch the engine only asks whether
    either current unit shows up again further along the other side, and
    picks the closer one. Repeated units can therefore produce longer
    results than an LCS diff would. Worst case is quadratic in the number
    of units scanned by the lookahead.
    """

    def __init__(self, original: List[str], modified: List[str],
                 granularity: Granularity = Granularity.LINE,
                 ignore_whitespace: bool = False, ignore_case: bool = False):
        self.original = original
        self.modified = modified
        self.granularity = granularity
        self.ignore_whitespace = ignore_whitespace
        self.ignore_case = ignore_case
        self.n = len(original)
        self.m = len(modified)
        self._norm_original = [self._normalize(u) for u in original]
        self._norm_modified = [self._normalize(u) for u in modified]

    def _normalize(self, unit: str) -> str:
        return normalize_unit(unit, self.ignore_whitespace, self.ignore_case)

    def compute(self) -> TokenList:
        tokens: TokenList = []
        orig, mod = self._norm_original, self._norm_modified
        i, j = 0, 0
        while i < self.n or j < self.m:
            if i >= self.n:
                tokens.append(make_added(self.modified[j], j + 1))
                j += 1
            elif j >= self.m:
                tokens.append(make_removed(self.original[i], i + 1))
                i += 1
            elif orig[i] == mod[j]:
                tokens.append(make_unchanged(self.original[i], i + 1, j + 1))
                i += 1
                j += 1
            else:
                dist_o = self._find_forward(orig, i + 1, mod[j])
                dist_w = self._find_forward(mod, j + 1, orig[i])
                if dist_o is not None and (dist_w is None or dist_o <= dist_w):
                    tokens.append(make_removed(self.original[i], i + 1))
                    i += 1
                elif dist_w is not None:
                    tokens.append(make_added(self.modified[j], j + 1))
                    j += 1
                elif self.granularity == Granularity.LINE:
                    tokens.append(make_modified(self.original[i], self.modified[j], i + 1, j + 1))
                    i += 1
                    j += 1
                else:
                    tokens.append(make_removed(self.original[i], i + 1))
                    tokens.append(make_added(self.modified[j], j + 1))
                    i += 1
                    j += 1
        return tokens

    @staticmethod
    def _find_forward(seq: List[str], start: int, target: str) -> Optional[int]:
        for offset, unit in enumerate(seq[start:]):
            if unit == target:
                return offset
        return None

    def get_summary(self) -> DiffSummary:
        return DiffSummary.from_tokens(self.compute())


def diff(original: List[str], modified: List[str],
         granularity: Granularity = Granularity.LINE,
         ignore_whitespace: bool = False, ignore_case: bool = False) -> TokenList:
    differ = GreedyBoundedDiff(original, modified, granularity, ignore_whitespace, ignore_case)
    return differ.compute()


@lru_cache(maxsize=COMPARE_CACHE_SIZE)
def _compare_cached(original: str, modified: str, granularity: Granularity,
                    ignore_whitespace: bool, ignore_case: bool) -> Tuple[DiffToken, ...]:
    tokenize = get_tokenizer(granularity)
    return tuple(diff(tokenize(original), tokenize(modified),
                      granularity, ignore_whitespace, ignore_case))


def compare(original: str, modified: str,
            granularity: Union[Granularity, str] = Granularity.LINE,
            ignore_whitespace: bool = False, ignore_case: bool = False) -> TokenList:
    return list(_compare_cached(original, modified, Granularity(granularity),
                                bool(ignore_whitespace), bool(ignore_case)))


def compare_with(original: str, modified: str, options: CompareOptions) -> TokenList:
    return compare(original, modified, options.granularity,
                   options.ignore_whitespace, options.ignore_case)


def clear_cache():
    _compare_cached.cache_clear()


def summarize(original: str, modified: str,
              ignore_whitespace: bool = False, ignore_case: bool = False) -> DiffSummary:
    # counts are always taken from the line comparison
    tokens = compare(original, modified, Granularity.LINE, ignore_whitespace, ignore_case)
    return DiffSummary.from_tokens(tokens)


def similarity_ratio(original: str, modified: str,
                     granularity: Union[Granularity, str] = Granularity.LINE) -> float:
    return DiffSummary.from_tokens(compare(original, modified, granularity)).similarity_ratio


def swap(tokens: TokenList) -> TokenList:
    return swap_tokens(tokens)


def has_changes(tokens: TokenList) -> bool:
    return any(t.kind != DiffKind.UNCHANGED for t in tokens)
