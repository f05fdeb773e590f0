from typing import List, Optional, Tuple
from .utils import TokenList, Granularity, CompareOptions, DiffSummary, DiffKind
from .greedy import compare_with, summarize


class DiffEngine:
    def __init__(self, options: Optional[CompareOptions] = None):
        self.options = options or CompareOptions()

    def compare(self, original: str, modified: str) -> TokenList:
        return compare_with(original, modified, self.options)

    def compare_at(self, original: str, modified: str, granularity: Granularity) -> TokenList:
        options = CompareOptions(granularity, self.options.ignore_whitespace, self.options.ignore_case)
        return compare_with(original, modified, options)

    def summarize(self, original: str, modified: str) -> DiffSummary:
        return summarize(original, modified, self.options.ignore_whitespace, self.options.ignore_case)

    def differs(self, original: str, modified: str) -> bool:
        return any(t.kind != DiffKind.UNCHANGED for t in self.compare(original, modified))

    def compare_many(self, pairs: List[Tuple[str, str]]) -> List[TokenList]:
        results = []
        for orig, mod in pairs:
            results.append(self.compare(orig, mod))
        return results

    def compare_all_against_base(self, base: str, targets: List[str]) -> List[TokenList]:
        results = []
        for target in targets:
            results.append(self.compare(base, target))
        return results
