from abc import ABC, abstractmethod
from typing import List, TextIO, Optional, Dict, Tuple
from enum import Enum
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from algorithms.utils import DiffKind, DiffToken, DiffSummary, CompareOptions, Granularity


class OutputTarget(Enum):
    STDOUT = "stdout"
    FILE = "file"
    STRING = "string"


KIND_PREFIXES = {
    DiffKind.ADDED: "+ ",
    DiffKind.REMOVED: "- ",
    DiffKind.MODIFIED: "~ ",
    DiffKind.UNCHANGED: "  ",
}


class FormatterConfig:
    def __init__(
        self,
        context_lines: int = 3,
        width: int = 130,
        use_color: bool = True,
        show_line_numbers: bool = True
    ):
        self.context_lines = context_lines
        self.width = width
        self.use_color = use_color
        self.show_line_numbers = show_line_numbers

    def copy(self) -> 'FormatterConfig':
        return FormatterConfig(
            context_lines=self.context_lines,
            width=self.width,
            use_color=self.use_color,
            show_line_numbers=self.show_line_numbers
        )

    def with_context_lines(self, lines: int) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.context_lines = lines
        return cfg

    def with_width(self, width: int) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.width = width
        return cfg

    def with_color(self, use_color: bool) -> 'FormatterConfig':
        cfg = self.copy()
        cfg.use_color = use_color
        return cfg


class ColorScheme:
    def __init__(self):
        self.reset = '\033[0m'
        self.bold = '\033[1m'
        self.red = '\033[31m'
        self.green = '\033[32m'
        self.yellow = '\033[33m'
        self.cyan = '\033[36m'

    def disable_colors(self):
        self.reset = ''
        self.bold = ''
        self.red = ''
        self.green = ''
        self.yellow = ''
        self.cyan = ''

    def for_kind(self, kind: DiffKind) -> str:
        return {
            DiffKind.ADDED: self.green,
            DiffKind.REMOVED: self.red,
            DiffKind.MODIFIED: self.yellow,
        }.get(kind, '')

    @classmethod
    def no_color(cls) -> 'ColorScheme':
        scheme = cls()
        scheme.disable_colors()
        return scheme


class OutputWriter:
    def __init__(self, target: OutputTarget = OutputTarget.STDOUT, output: Optional[TextIO] = None):
        self.target = target
        self._output = output or sys.stdout
        self._buffer: List[str] = []

    def write(self, text: str):
        if self.target == OutputTarget.STRING:
            self._buffer.append(text)
        else:
            self._output.write(text)

    def writeln(self, text: str = ""):
        self.write(text + "\n")

    def get_output(self) -> str:
        return "".join(self._buffer)


class DiffHunk:
    def __init__(
        self,
        orig_start: int,
        orig_count: int,
        mod_start: int,
        mod_count: int,
        tokens: List[DiffToken]
    ):
        self.orig_start = orig_start
        self.orig_count = orig_count
        self.mod_start = mod_start
        self.mod_count = mod_count
        self.tokens = tokens

    def __repr__(self) -> str:
        return f"DiffHunk(@@ -{self.orig_start},{self.orig_count} +{self.mod_start},{self.mod_count} @@)"

    def is_empty(self) -> bool:
        return len(self.tokens) == 0

    def has_changes(self) -> bool:
        return any(t.kind != DiffKind.UNCHANGED for t in self.tokens)


class HunkGenerator:
    def __init__(self, context_lines: int = 3):
        self.context_lines = context_lines

    def generate(self, tokens: List[DiffToken]) -> List[DiffHunk]:
        if not tokens:
            return []
        change_indices = [i for i, t in enumerate(tokens) if t.kind != DiffKind.UNCHANGED]
        if not change_indices:
            return []
        return [self._create_hunk(tokens, start, end)
                for start, end in self._merge_ranges(change_indices, len(tokens))]

    def _merge_ranges(self, change_indices: List[int], total: int) -> List[Tuple[int, int]]:
        ranges = []
        current_start = max(0, change_indices[0] - self.context_lines)
        current_end = min(total - 1, change_indices[0] + self.context_lines)
        for idx in change_indices[1:]:
            potential_start = max(0, idx - self.context_lines)
            if potential_start <= current_end + 1:
                current_end = min(total - 1, idx + self.context_lines)
            else:
                ranges.append((current_start, current_end))
                current_start = potential_start
                current_end = min(total - 1, idx + self.context_lines)
        ranges.append((current_start, current_end))
        return ranges

    def _create_hunk(self, tokens: List[DiffToken], start: int, end: int) -> DiffHunk:
        orig_start = sum(1 for t in tokens[:start] if t.old_position is not None)
        mod_start = sum(1 for t in tokens[:start] if t.new_position is not None)
        window = tokens[start:end + 1]
        orig_count = sum(1 for t in window if t.old_position is not None)
        mod_count = sum(1 for t in window if t.new_position is not None)
        return DiffHunk(orig_start, orig_count, mod_start, mod_count, window)


class BaseFormatter(ABC):
    def __init__(self, config: Optional[FormatterConfig] = None):
        self.config = config or FormatterConfig()
        self.colors = ColorScheme() if self.config.use_color else ColorScheme.no_color()
        self.writer: Optional[OutputWriter] = None
        self.summary: Optional[DiffSummary] = None

    def format(
        self,
        tokens: List[DiffToken],
        label1: str,
        label2: str,
        options: Optional[CompareOptions] = None,
        output: Optional[TextIO] = None,
        summary: Optional[DiffSummary] = None
    ) -> str:
        self.summary = summary
        if output is None:
            self.writer = OutputWriter(OutputTarget.STRING)
        else:
            self.writer = OutputWriter(OutputTarget.FILE, output)
        self._format_impl(tokens, label1, label2, options or CompareOptions())
        if output is None:
            return self.writer.get_output()
        return ""

    @abstractmethod
    def _format_impl(
        self,
        tokens: List[DiffToken],
        label1: str,
        label2: str,
        options: CompareOptions
    ):
        pass

    def has_changes(self, tokens: List[DiffToken]) -> bool:
        return any(t.kind != DiffKind.UNCHANGED for t in tokens)

    def _line_summary(self, tokens: List[DiffToken], options: CompareOptions) -> Optional[DiffSummary]:
        # statistics count lines; word and char tokens need a summary passed in
        if self.summary is not None:
            return self.summary
        if options.granularity == Granularity.LINE:
            return DiffSummary.from_tokens(tokens)
        return None

    def _colored(self, kind: DiffKind, text: str) -> str:
        color = self.colors.for_kind(kind)
        if not color:
            return text
        return f"{color}{text}{self.colors.reset}"

    def _write(self, text: str):
        if self.writer:
            self.writer.write(text)

    def _writeln(self, text: str = ""):
        if self.writer:
            self.writer.writeln(text)


class SimpleFormatter(BaseFormatter):
    def _format_impl(
        self,
        tokens: List[DiffToken],
        label1: str,
        label2: str,
        options: CompareOptions
    ):
        for token in tokens:
            line = f"{KIND_PREFIXES[token.kind]}{token.content}"
            if self.config.show_line_numbers:
                line = f"{_num(token.old_position)} {_num(token.new_position)} {line}"
            self._writeln(self._colored(token.kind, line))


def _num(position: Optional[int], width: int = 4) -> str:
    return " " * width if position is None else str(position).rjust(width)


class FormatterFactory:
    _formatters: Dict[str, type] = {}

    @classmethod
    def register(cls, name: str, formatter_class: type):
        cls._formatters[name] = formatter_class

    @classmethod
    def create(cls, name: str, config: Optional[FormatterConfig] = None) -> BaseFormatter:
        if name not in cls._formatters:
            raise ValueError(f"Unknown formatter: {name}")
        return cls._formatters[name](config)

    @classmethod
    def available(cls) -> List[str]:
        return list(cls._formatters.keys())


FormatterFactory.register("simple", SimpleFormatter)
