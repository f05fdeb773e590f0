from typing import List
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from algorithms.utils import DiffKind, DiffToken, CompareOptions
from formatters.base import BaseFormatter, FormatterFactory, HunkGenerator, DiffHunk


class UnifiedFormatter(BaseFormatter):
    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        if not self.has_changes(tokens):
            return
        self._writeln(f"{self.colors.bold}--- {label1}{self.colors.reset}")
        self._writeln(f"{self.colors.bold}+++ {label2}{self.colors.reset}")
        for hunk in HunkGenerator(self.config.context_lines).generate(tokens):
            self._write_hunk(hunk)

    def _write_hunk(self, hunk: DiffHunk):
        header = f"@@ -{hunk.orig_start + 1},{hunk.orig_count} +{hunk.mod_start + 1},{hunk.mod_count} @@"
        self._writeln(f"{self.colors.cyan}{header}{self.colors.reset}")
        for t in hunk.tokens:
            if t.kind == DiffKind.UNCHANGED:
                self._writeln(f" {t.content}")
            elif t.kind == DiffKind.REMOVED:
                self._writeln(self._colored(DiffKind.REMOVED, f"-{t.content}"))
            elif t.kind == DiffKind.ADDED:
                self._writeln(self._colored(DiffKind.ADDED, f"+{t.content}"))
            elif t.kind == DiffKind.MODIFIED:
                self._writeln(self._colored(DiffKind.REMOVED, f"-{t.old_content}"))
                self._writeln(self._colored(DiffKind.ADDED, f"+{t.new_content}"))


FormatterFactory.register("unified", UnifiedFormatter)
