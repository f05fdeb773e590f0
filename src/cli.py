#!/usr/bin/env python3
import argparse
import sys
import os
from typing import Optional, List, TextIO

sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from algorithms.utils import CompareOptions, Granularity, DiffSummary
from algorithms.engine import DiffEngine
from algorithms.greedy import has_changes
from formatters import FormatterConfig, FormatterFactory, ColorScheme
from textsource import read_text, SourceText, STDIN_NAME, MAX_TEXT_LENGTH

__version__ = '1.0.0'

FORMAT_FLAGS = ['simple', 'unified', 'side_by_side', 'inline', 'report', 'html', 'json']

ENDING_NAMES = {'\n': 'LF', '\r\n': 'CRLF', '\r': 'CR'}
FALLBACK_ENCODINGS = ('cp1252', 'latin-1')


class ColorPrinter:
    def __init__(self, use_color: bool = True, output: Optional[TextIO] = None,
                 errors: Optional[TextIO] = None):
        self.use_color = use_color
        self.output = output or sys.stdout
        self.errors = errors or sys.stderr
        self.colors = ColorScheme() if use_color else ColorScheme.no_color()

    def print(self, text: str, end: str = '\n'):
        self.output.write(text + end)

    def print_header(self, text: str):
        self.print(f"{self.colors.bold}{text}{self.colors.reset}")

    def print_error(self, text: str):
        self.errors.write(f"{self.colors.red}Error: {text}{self.colors.reset}\n")

    def print_warning(self, text: str):
        self.errors.write(f"{self.colors.yellow}Warning: {text}{self.colors.reset}\n")


def format_summary(summary: DiffSummary) -> str:
    return (f"added: {summary.added}, removed: {summary.removed}, "
            f"modified: {summary.modified}, unchanged: {summary.unchanged}, "
            f"total: {summary.total}, similarity: {summary.similarity_ratio:.2f}")


class CLIApplication:
    def __init__(self):
        self.parser = self._create_parser()
        self.printer: Optional[ColorPrinter] = None

    def _create_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog='textdiff',
            description='Compare two texts line by line, word by word or character by character',
            formatter_class=argparse.RawDescriptionHelpFormatter,
            epilog='''
Examples:
  %(prog)s old.txt new.txt
  %(prog)s -g word --inline draft.md final.md
  %(prog)s -w -i --unified a.cfg b.cfg
  %(prog)s --report -o report.txt a.txt b.txt
  cat new.txt | %(prog)s old.txt -
            '''
        )
        parser.add_argument('original', help='Original text file (- for stdin)')
        parser.add_argument('modified', help='Modified text file (- for stdin)')
        parser.add_argument(
            '-g', '--granularity',
            choices=[g.value for g in Granularity],
            default=Granularity.LINE.value,
            help='Unit of comparison (default: line)'
        )
        parser.add_argument(
            '-w', '--ignore-whitespace',
            action='store_true',
            help='Collapse and trim whitespace before comparing units'
        )
        parser.add_argument(
            '-i', '--ignore-case',
            action='store_true',
            help='Ignore case differences'
        )
        format_group = parser.add_mutually_exclusive_group()
        format_group.add_argument(
            '-s', '--simple',
            action='store_true',
            help='One line per token with +, -, ~ prefixes (default)'
        )
        format_group.add_argument(
            '-u', '--unified',
            action='store_true',
            help='Output unified diff'
        )
        format_group.add_argument(
            '-y', '--side-by-side',
            action='store_true',
            help='Output side-by-side diff'
        )
        format_group.add_argument(
            '--inline',
            action='store_true',
            help='Mark changes inline as [-removed-] and {+added+}'
        )
        format_group.add_argument(
            '--report',
            action='store_true',
            help='Output a plain-text diff report with statistics'
        )
        format_group.add_argument(
            '--html',
            action='store_true',
            help='Output HTML diff'
        )
        format_group.add_argument(
            '--json',
            action='store_true',
            help='Output tokens and statistics as JSON'
        )
        parser.add_argument(
            '-c', '--context',
            type=int,
            default=3,
            metavar='NUM',
            help='Number of context lines for unified output (default: 3)'
        )
        parser.add_argument(
            '-W', '--width',
            type=int,
            default=130,
            metavar='NUM',
            help='Output width for side-by-side (default: 130)'
        )
        parser.add_argument(
            '--no-line-numbers',
            action='store_true',
            help='Hide line numbers'
        )
        parser.add_argument(
            '--stats',
            action='store_true',
            help='Print line statistics after the diff'
        )
        parser.add_argument(
            '-q', '--quiet',
            action='store_true',
            help='Report only whether inputs differ'
        )
        parser.add_argument(
            '--swap',
            action='store_true',
            help='Exchange original and modified before comparing'
        )
        parser.add_argument(
            '--max-length',
            type=int,
            default=MAX_TEXT_LENGTH,
            metavar='NUM',
            help=f'Truncate each input to NUM characters (default: {MAX_TEXT_LENGTH})'
        )
        parser.add_argument(
            '--no-sanitize',
            action='store_true',
            help='Keep control characters in the inputs'
        )
        parser.add_argument(
            '--encoding',
            metavar='NAME',
            help='Input encoding (default: detected)'
        )
        parser.add_argument(
            '--no-color',
            action='store_true',
            help='Disable colored output'
        )
        parser.add_argument(
            '-o', '--output',
            type=str,
            metavar='FILE',
            help='Write output to file'
        )
        parser.add_argument(
            '-v', '--version',
            action='version',
            version=f'%(prog)s {__version__}'
        )
        return parser

    def run(self, argv: Optional[List[str]] = None) -> int:
        args = self.parser.parse_args(argv)
        use_color = not args.no_color and not args.output and sys.stdout.isatty()
        output_file = None
        try:
            if args.output:
                output_file = open(args.output, 'w', encoding='utf-8')
                self.printer = ColorPrinter(use_color=False, output=output_file)
            else:
                self.printer = ColorPrinter(use_color=use_color)
            result = self._execute(args)
        except KeyboardInterrupt:
            self._printer_or_default().print_error("Interrupted")
            result = 130
        except (OSError, ValueError, LookupError) as e:
            self._printer_or_default().print_error(str(e))
            result = 2
        finally:
            if output_file is not None:
                output_file.close()
        return result

    def _printer_or_default(self) -> ColorPrinter:
        return self.printer or ColorPrinter(use_color=False)

    def _execute(self, args) -> int:
        if args.original == STDIN_NAME and args.modified == STDIN_NAME:
            raise ValueError("Only one input can be read from stdin")
        if args.context < 0:
            raise ValueError(f"Context must be non-negative, got {args.context}")
        if args.width < 20:
            raise ValueError(f"Width must be at least 20, got {args.width}")
        first = self._load(args.original, args)
        second = self._load(args.modified, args)
        if first.line_ending != second.line_ending and '\n' in first.text and '\n' in second.text:
            self.printer.print_warning(
                f"Line endings differ ({ENDING_NAMES[first.line_ending]} vs "
                f"{ENDING_NAMES[second.line_ending]}), compared as LF")
        if args.swap:
            first, second = second, first
        options = CompareOptions.from_names(args.granularity, args.ignore_whitespace, args.ignore_case)
        engine = DiffEngine(options)
        tokens = engine.compare(first.text, second.text)
        changed = has_changes(tokens)
        if args.quiet:
            if changed:
                self.printer.print(f"Inputs {first.label} and {second.label} differ")
            return 1 if changed else 0
        name = self._formatter_name(args)
        if name == 'report':
            # the report always lists lines, whatever granularity was asked for
            tokens = engine.compare_at(first.text, second.text, Granularity.LINE)
        config = FormatterConfig(
            context_lines=args.context,
            width=args.width,
            use_color=self.printer.use_color and name not in ('html', 'json'),
            show_line_numbers=not args.no_line_numbers
        )
        formatter = FormatterFactory.create(name, config)
        summary = engine.summarize(first.text, second.text)
        self.printer.print(formatter.format(tokens, first.label, second.label, options, summary=summary),
                           end='')
        if args.stats:
            self.printer.print_header(format_summary(summary))
        return 1 if changed else 0

    def _load(self, path: str, args) -> SourceText:
        source = read_text(path, encoding=args.encoding, sanitize=not args.no_sanitize,
                           max_length=args.max_length)
        if source.sanitized:
            self.printer.print_warning(f"{source.label}: control characters removed")
        if source.truncated:
            self.printer.print_warning(f"{source.label}: truncated to {args.max_length} characters")
        if args.encoding is None and source.encoding in FALLBACK_ENCODINGS:
            self.printer.print_warning(f"{source.label}: not valid UTF-8, decoded as {source.encoding}")
        return source

    @staticmethod
    def _formatter_name(args) -> str:
        for flag in FORMAT_FLAGS:
            if getattr(args, flag):
                return flag.replace('_', '-')
        return 'simple'


def main(argv: Optional[List[str]] = None) -> int:
    app = CLIApplication()
    return app.run(argv)


if __name__ == '__main__':
    sys.exit(main())
