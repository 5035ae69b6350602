"""Tokenizer for road network descriptions."""

import re
from typing import List, Tuple

Token = Tuple[str, str, int, int]  # (type, value, line, col)

SYMBOLS = {
    '[': 'LBRACK',
    ']': 'RBRACK',
    '(': 'LPAREN',
    ')': 'RPAREN',
    ',': 'COMMA',
    '-': 'DASH',
    '+': 'PLUS',
    '=': 'EQUAL',
}

# Alternatives are tried in order: numbers before identifiers so "1e3" stays numeric.
_token_re = re.compile(
    r'''
    (?P<SKIP>[ \t\r]+)
    |(?P<COMMENT>\#.*)
    |(?P<STRING>"(?:[^"\\]|\\.)*")
    |(?P<NUMBER>(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?)
    |(?P<ID>[A-Za-z_][A-Za-z0-9_]*)
    |(?P<SYMBOL>[\[\](),\-+=])
    ''',
    re.VERBOSE,
)
_escape_re = re.compile(r'\\(.)')


def unquote(literal: str) -> str:
    """Strip the quotes of a string literal and undo its backslash escapes.

    Only ``\\"`` and ``\\\\`` are ever written by the printer; any other escaped
    character stands for itself. Non-ASCII text passes through untouched.
    """
    return _escape_re.sub(r'\1', literal[1:-1])


def tokenize_line(s: str, line_no: int) -> List[Token]:
    tokens: List[Token] = []
    pos = 0
    while pos < len(s):
        m = _token_re.match(s, pos)
        col = pos + 1
        if m is None:
            if s[pos] == '"':
                raise SyntaxError(f'[line {line_no}, col {col}] unterminated string literal')
            raise SyntaxError(f'[line {line_no}, col {col}] unexpected character: {s[pos]!r}')
        kind = m.lastgroup
        text = m.group(0)
        pos = m.end()
        if kind == 'COMMENT':
            break
        if kind == 'SKIP':
            continue
        if kind == 'STRING':
            tokens.append(('STRING', unquote(text), line_no, col))
        elif kind == 'SYMBOL':
            tokens.append((SYMBOLS[text], text, line_no, col))
        else:
            tokens.append((kind, text, line_no, col))
    return tokens
