import json
from typing import List, Optional
from html import escape as html_escape
import sys
import os

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))
from algorithms.utils import DiffKind, DiffToken, CompareOptions
from formatters.base import BaseFormatter, FormatterFactory


DEFAULT_STYLES = """
body { font-family: monospace; margin: 20px; background: #fafafa; color: #333; }
.diff-container { border: 1px solid #ddd; border-radius: 4px; overflow: hidden; margin-bottom: 20px; }
.diff-header { background: #f7f7f7; padding: 10px 15px; border-bottom: 1px solid #ddd; font-weight: bold; }
table { width: 100%; border-collapse: collapse; font-size: 13px; }
td { padding: 2px 8px; vertical-align: top; white-space: pre-wrap; word-wrap: break-word; }
.line-num { width: 50px; text-align: right; color: #999; background: #f7f7f7; border-right: 1px solid #eee; }
.unchanged { background: #fff; }
.removed { background: #ffeef0; }
.added { background: #e6ffed; }
.modified { background: #fffbdd; }
.marker { width: 20px; text-align: center; font-weight: bold; }
.marker-removed { color: #cb2431; }
.marker-added { color: #22863a; }
.marker-modified { color: #b08800; }
.old-content { color: #cb2431; text-decoration: line-through; }
.stats { padding: 10px 15px; background: #f7f7f7; border-top: 1px solid #ddd; font-size: 12px; }
"""

MARKERS = {
    DiffKind.UNCHANGED: " ",
    DiffKind.ADDED: "+",
    DiffKind.REMOVED: "-",
    DiffKind.MODIFIED: "~",
}


class HTMLFormatter(BaseFormatter):
    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        rows = [self._row(t) for t in tokens]
        stats = self._line_summary(tokens, options)
        footer = "" if stats is None else (
            f'<div class="stats">added {stats.added}, removed {stats.removed}, '
            f'modified {stats.modified}, unchanged {stats.unchanged}</div>\n')
        html = f"""<!DOCTYPE html>
<html><head><meta charset="UTF-8"><title>Diff: {html_escape(label1)} vs {html_escape(label2)}</title>
<style>{DEFAULT_STYLES}</style></head><body>
<div class="diff-container">
<div class="diff-header"><span>--- {html_escape(label1)}</span><br><span>+++ {html_escape(label2)}</span></div>
<table>{"".join(rows)}</table>
{footer}</div></body></html>"""
        self._writeln(html)

    def _row(self, token: DiffToken) -> str:
        kind = token.kind.value
        if token.kind == DiffKind.MODIFIED:
            content = (f'<span class="old-content">{html_escape(token.old_content)}</span> '
                       f'{html_escape(token.new_content)}')
        else:
            content = html_escape(token.content)
        cells = []
        if self.config.show_line_numbers:
            cells.append(f'<td class="line-num">{_cell_num(token.old_position)}</td>')
            cells.append(f'<td class="line-num">{_cell_num(token.new_position)}</td>')
        cells.append(f'<td class="marker marker-{kind}">{MARKERS[token.kind]}</td>')
        cells.append(f'<td>{content}</td>')
        return f'<tr class="{kind}">{"".join(cells)}</tr>'


def _cell_num(position: Optional[int]) -> str:
    return "" if position is None else str(position)


def token_to_dict(token: DiffToken) -> dict:
    item = {
        "kind": token.kind.value,
        "content": token.content,
        "old_position": token.old_position,
        "new_position": token.new_position,
    }
    if token.kind == DiffKind.MODIFIED:
        item["old_content"] = token.old_content
        item["new_content"] = token.new_content
    return item


class JSONFormatter(BaseFormatter):
    def _format_impl(self, tokens: List[DiffToken], label1: str, label2: str,
                     options: CompareOptions):
        result = {
            "original": label1,
            "modified": label2,
            "options": {
                "granularity": options.granularity.value,
                "ignore_whitespace": options.ignore_whitespace,
                "ignore_case": options.ignore_case,
            },
            "tokens": [token_to_dict(t) for t in tokens],
        }
        stats = self._line_summary(tokens, options)
        if stats is not None:
            result["stats"] = stats.as_dict()
        self._writeln(json.dumps(result, indent=2, ensure_ascii=False))


FormatterFactory.register("html", HTMLFormatter)
FormatterFactory.register("json", JSONFormatter)
