from typing import List, Optional
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.utils import DiffKind, DiffToken, CompareOptions, group_consecutive_kinds, join_units
from formatters.base import BaseFormatter, FormatterConfig, FormatterFactory


class ColumnConfig:
    def __init__(self, total_width: int = 130, gutter_width: int = 3, line_num_width: int = 4):
        self.total_width = total_width
        self.gutter_width = gutter_width
        self.line_num_width = line_num_width
        self._calculate_content_width()

    def _calculate_content_width(self):
        available = self.total_width - self.gutter_width - (2 * self.line_num_width) - 4
        self.content_width = max(1, available // 2)


class TextTruncator:
    def __init__(self, max_width: int, ellipsis: str = "..."):
        self.max_width = max_width
        self.ellipsis = ellipsis

    def truncate(self, text: str) -> str:
        if len(text) <= self.max_width:
            return text
        if self.max_width <= len(self.ellipsis):
            return text[:self.max_width]
        return text[:self.max_width - len(self.ellipsis)] + self.ellipsis

    def pad(self, text: str, width: Optional[int] = None) -> str:
        target_width = width or self.max_width
        if len(text) >= target_width:
            return text[:target_width]
        return text + " " * (target_width - len(text))

    def truncate_and_pad(self, text: str) -> str:
        return self.pad(self.truncate(text))


class LineNumberFormatter:
    def __init__(self, width: int = 4, padding_char: str = " "):
        self.width = width
        self.padding_char = padding_char

    def format(self, line_num: Optional[int]) -> str:
        if self.width == 0:
            return ""
        if line_num is None:
            return self.padding_char * self.width
        num_str = str(line_num)
        if len(num_str) >= self.width:
            return num_str[:self.width]
        return self.padding_char * (self.width - len(num_str)) + num_str


class GutterFormatter:
    def __init__(self, colors):
        self.colors = colors
        self.markers = {
            DiffKind.UNCHANGED: " | ",
            DiffKind.REMOVED: " < ",
            DiffKind.ADDED: " > ",
            DiffKind.MODIFIED: " ~ ",
        }

    def format(self, kind: DiffKind) -> str:
        marker = self.markers[kind]
        color = self.colors.for_kind(kind)
        if not color:
            return marker
        return f"{color}{marker}{self.colors.reset}"


class SideBySideRow:
    def __init__(
        self,
        left_num: Optional[int],
        left_content: str,
        right_num: Optional[int],
        right_content: str,
        change_type: DiffKind
    ):
        self.left_num = left_num
        self.left_content = left_content
        self.right_num = right_num
        self.right_content = right_content
        self.change_type = change_type


class SideBySideGenerator:
    def generate(self, tokens: List[DiffToken]) -> List[SideBySideRow]:
        rows = []
        i = 0
        while i < len(tokens):
            t = tokens[i]
            if t.kind == DiffKind.UNCHANGED:
                rows.append(SideBySideRow(t.old_position, t.content, t.new_position, t.content,
                                          DiffKind.UNCHANGED))
            elif t.kind == DiffKind.MODIFIED:
                rows.append(SideBySideRow(t.old_position, t.old_content, t.new_position, t.new_content,
                                          DiffKind.MODIFIED))
            elif t.kind == DiffKind.REMOVED:
                nxt = tokens[i + 1] if i + 1 < len(tokens) else None
                if nxt is not None and nxt.kind == DiffKind.ADDED:
                    rows.append(SideBySideRow(t.old_position, t.content, nxt.new_position, nxt.content,
                                              DiffKind.MODIFIED))
                    i += 1
                else:
                    rows.append(SideBySideRow(t.old_position, t.content, None, "", DiffKind.REMOVED))
            elif t.kind == DiffKind.ADDED:
                rows.append(SideBySideRow(None, "", t.new_position, t.content, DiffKind.ADDED))
            i += 1
        return rows


class SideBySideRowFormatter:
    def __init__(self, config: ColumnConfig, colors):
        self.colors = colors
        self.truncator = TextTruncator(config.content_width)
        self.line_num_fmt = LineNumberFormatter(config.line_num_width)
        self.gutter_fmt = GutterFormatter(colors)

    def format_row(self, row: SideBySideRow) -> str:
        left = f"{self.line_num_fmt.format(row.left_num)} {self.truncator.truncate_and_pad(row.left_content)}"
        right = f"{self.line_num_fmt.format(row.right_num)} {self.truncator.truncate(row.right_content)}"
        gutter = self.gutter_fmt.format(row.change_type)
        if row.change_type in (DiffKind.REMOVED, DiffKind.MODIFIED):
            left = f"{self.colors.red}{left}{self.colors.reset}"
        if row.change_type in (DiffKind.ADDED, DiffKind.MODIFIED):
            right = f"{self.colors.green}{right}{self.colors.reset}"
        return f"{left}{gutter}{right}".rstrip()


class SideBySideFormatter(BaseFormatter):
    def __init__(self, config: Optional[FormatterConfig] = None):
        super().__init__(config)
        num_width = 4 if self.config.show_line_numbers else 0
        self.column_config = ColumnConfig(self.config.width, line_num_width=num_width)
        self.generator = SideBySideGenerator()
        self.row_formatter = SideBySideRowFormatter(self.column_config, self.colors)

    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        header_width = self.column_config.content_width + self.column_config.line_num_width + 1
        truncator = TextTruncator(header_width)
        self._writeln("=" * self.column_config.total_width)
        self._writeln(f"{truncator.truncate_and_pad(label1)} | {truncator.truncate(label2)}")
        self._writeln("=" * self.column_config.total_width)
        for row in self.generator.generate(tokens):
            self._writeln(self.row_formatter.format_row(row))


class InlineFormatter(BaseFormatter):
    """Word and character view: changes marked inline as [-old-] and {+new+}."""

    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        granularity = options.granularity
        parts = []
        for kind, group in group_consecutive_kinds(tokens):
            if kind == DiffKind.MODIFIED:
                parts.append(join_units([self._removed(t.old_content) + self._added(t.new_content)
                                         for t in group], granularity))
                continue
            text = join_units([t.content for t in group], granularity)
            if kind == DiffKind.REMOVED:
                text = self._removed(text)
            elif kind == DiffKind.ADDED:
                text = self._added(text)
            parts.append(text)
        self._writeln(join_units(parts, granularity))

    def _removed(self, text: str) -> str:
        return self._colored(DiffKind.REMOVED, f"[-{text}-]")

    def _added(self, text: str) -> str:
        return self._colored(DiffKind.ADDED, f"{{+{text}+}}")


FormatterFactory.register("side-by-side", SideBySideFormatter)
FormatterFactory.register("inline", InlineFormatter)
