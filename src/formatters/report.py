from datetime import datetime
from typing import List, Optional
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from algorithms.utils import DiffKind, DiffToken, DiffSummary, CompareOptions
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory, KIND_PREFIXES


def _yes_no(flag: bool) -> str:
    return "Yes" if flag else "No"


class ReportFormatter(BaseFormatter):
    """Plain-text diff report.

    Expects line granularity tokens. The settings block still reports the
    granularity the caller compared with, so a report generated from a word
    or character view records that mode next to the line listing.
    """

    def __init__(self, config: Optional[FormatterConfig] = None,
                 generated_at: Optional[datetime] = None):
        super().__init__(config)
        self.generated_at = generated_at

    def _timestamp(self) -> str:
        moment = self.generated_at or datetime.now()
        return moment.strftime("%Y-%m-%d %H:%M:%S")

    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        stats = self.summary or DiffSummary.from_tokens(tokens)
        self._writeln("Diff Report")
        self._writeln(f"Generated on: {self._timestamp()}")
        self._writeln(f"Original: {label1}")
        self._writeln(f"Modified: {label2}")
        self._writeln()
        self._writeln("Statistics:")
        self._writeln(f"- Added lines: {stats.added}")
        self._writeln(f"- Removed lines: {stats.removed}")
        self._writeln(f"- Modified lines: {stats.modified}")
        self._writeln(f"- Unchanged lines: {stats.unchanged}")
        self._writeln(f"- Total lines: {stats.total}")
        self._writeln()
        self._writeln("Settings:")
        self._writeln(f"- Diff mode: {options.granularity.value}")
        self._writeln(f"- Ignore whitespace: {_yes_no(options.ignore_whitespace)}")
        self._writeln(f"- Ignore case: {_yes_no(options.ignore_case)}")
        self._writeln()
        self._writeln("Line-by-line diff:")
        for token in tokens:
            self._writeln(self.format_line(token))

    @staticmethod
    def format_line(token: DiffToken) -> str:
        line_num = token.new_position if token.kind == DiffKind.ADDED else token.old_position
        return f"{KIND_PREFIXES[token.kind]}({line_num}) {token.content}"


FormatterFactory.register("report", ReportFormatter)
