from formatters.base import (
    BaseFormatter, SimpleFormatter, FormatterConfig, FormatterFactory,
    ColorScheme, OutputWriter, OutputTarget, DiffHunk, HunkGenerator, KIND_PREFIXES
)
from formatters.report import ReportFormatter
from formatters.unified import UnifiedFormatter
from formatters.side_by_side import (
    SideBySideFormatter, SideBySideRow, SideBySideGenerator, SideBySideRowFormatter,
    ColumnConfig, TextTruncator, LineNumberFormatter, GutterFormatter, InlineFormatter
)
from formatters.html import HTMLFormatter, JSONFormatter, token_to_dict


__all__ = [
    "BaseFormatter", "SimpleFormatter", "FormatterConfig", "FormatterFactory",
    "ColorScheme", "OutputWriter", "OutputTarget", "DiffHunk", "HunkGenerator", "KIND_PREFIXES",
    "ReportFormatter", "UnifiedFormatter",
    "SideBySideFormatter", "SideBySideRow", "SideBySideGenerator", "SideBySideRowFormatter",
    "ColumnConfig", "TextTruncator", "LineNumberFormatter", "GutterFormatter", "InlineFormatter",
    "HTMLFormatter", "JSONFormatter", "token_to_dict"
]


def create_formatter(name: str, config: FormatterConfig = None) -> BaseFormatter:
    return FormatterFactory.create(name, config)


def get_available_formatters():
    return FormatterFactory.available()


def format_diff(
    tokens,
    label1: str,
    label2: str,
    formatter_name: str = "simple",
    config: FormatterConfig = None,
    options=None,
    summary=None
) -> str:
    formatter = create_formatter(formatter_name, config)
    return formatter.format(tokens, label1, label2, options, summary=summary)
