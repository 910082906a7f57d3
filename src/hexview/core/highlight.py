"""
Highlighting of hex dump lines using Pygments.
"""

from typing import Iterable

from pygments import highlight
from pygments.formatters import TerminalFormatter
from pygments.lexer import RegexLexer, bygroups, this, using
from pygments.token import Number, String, Text, Whitespace

from .formatter import ASCII_OFFSET, LineRecord


class HexLineLexer(RegexLexer):
    """Lexer for the lines produced by format_buffer."""

    name = 'Hex line'
    aliases = ['hexline']

    tokens = {
        'root': [
            (r'(.{%d})(.*)(\n?)' % ASCII_OFFSET,
             bygroups(using(this, state='hex'), String, Whitespace)),
            (r'.+', Text),
            (r'\n', Whitespace),
        ],
        'hex': [
            (r'[0-9a-fA-F]{2}', Number.Hex),
            (r'\s+', Whitespace),
            (r'.', Text),
        ],
    }


def render_records(records: Iterable[LineRecord], colour: bool = False) -> str:
    """Render records one per line, with terminal colours if asked."""

    text = '\n'.join(record.text for record in records)
    if not colour or not text:
        return text

    return highlight(text, HexLineLexer(), TerminalFormatter()).rstrip('\n')
