import re
from typing import Any, Dict, List, Optional, Tuple

from .ast import Network, Span, Stmt
from .lexer import Token, tokenize_line

_ERROR_LOC_RE = re.compile(r"\[line (\d+), col (\d+)\]")


class Cursor:
    def __init__(self, tokens: List[Token]):
        self.toks = tokens
        self.i = 0

    def peek(self):
        return self.toks[self.i] if self.i < len(self.toks) else None

    def peek_keyword(self):
        t = self.peek()
        if not t or t[0] != 'ID':
            return None
        return t[1].lower()

    def consume_keyword(self, keyword: str):
        tok = self.expect('ID')
        if tok[1].lower() != keyword:
            raise SyntaxError(
                f"[line {tok[2]}, col {tok[3]}] expected keyword '{keyword}', got '{tok[1]}'"
            )

    def match(self, *types: str):
        if self.i < len(self.toks) and self.toks[self.i][0] in types:
            t = self.toks[self.i]
            self.i += 1
            return t
        return None

    def expect(self, *types: str):
        t = self.peek()
        if t and t[0] in types:
            self.i += 1
            return t
        want = '|'.join(types)
        if t:
            raise SyntaxError(f'[line {t[2]}, col {t[3]}] expected {want}, got {t[0]}')
        raise SyntaxError(f'Unexpected end of line: expected {want}')

    def peek_ahead(self, offset: int = 1):
        idx = self.i + offset
        return self.toks[idx] if idx < len(self.toks) else None


def parse_id(cur: Cursor):
    t = cur.expect('ID')
    return t[1], Span(t[2], t[3])


def parse_pair(cur: Cursor):
    a, sp = parse_id(cur)
    cur.expect('DASH')
    b, _ = parse_id(cur)
    return (a, b), sp


def parse_idchain(cur: Cursor):
    a, sp = parse_id(cur)
    ids = [a]
    while cur.match('DASH'):
        b, _ = parse_id(cur)
        ids.append(b)
    if len(ids) < 2:
        t = cur.peek()
        raise SyntaxError(f'[line {t[2] if t else sp.line}, col {t[3] if t else sp.col}] expected "-" ID in chain')
    return ids, sp


def parse_number(cur: Cursor) -> float:
    sign = 1.0
    s = cur.match('DASH', 'PLUS')
    if s and s[0] == 'DASH':
        sign = -1.0
    t = cur.expect('NUMBER')
    return sign * float(t[1])


def parse_position(cur: Cursor) -> Tuple[float, float, float]:
    lp = cur.expect('LPAREN')
    coords: List[float] = []
    while True:
        t = cur.peek()
        if not t or t[0] == 'RPAREN':
            break
        if coords:
            cur.expect('COMMA')
        coords.append(parse_number(cur))
    cur.expect('RPAREN')
    if len(coords) != 3:
        raise SyntaxError(f'[line {lp[2]}, col {lp[3]}] position needs 3 coordinates, got {len(coords)}')
    return coords[0], coords[1], coords[2]


def parse_opt_value(cur: Cursor):
    vtok = cur.peek()
    if not vtok:
        raise SyntaxError('unterminated options value')
    if vtok[0] == 'STRING':
        return cur.match('STRING')[1]
    if vtok[0] in ('NUMBER', 'DASH', 'PLUS'):
        return parse_number(cur)
    if vtok[0] == 'ID':
        raw = cur.match('ID')[1]
        low = raw.lower()
        if low in ('true', 'false'):
            return low == 'true'
        return raw
    raise SyntaxError(f'[line {vtok[2]}, col {vtok[3]}] invalid option value token {vtok[0]}')


def parse_opts(cur: Cursor) -> Dict[str, Any]:
    opts: Dict[str, Any] = {}
    if not cur.match('LBRACK'):
        return opts
    need_sep = False
    while True:
        t = cur.peek()
        if not t:
            raise SyntaxError('unterminated options block')
        if t[0] == 'RBRACK':
            cur.i += 1
            break
        if need_sep:
            if t[0] == 'COMMA':
                cur.i += 1
                need_sep = False
                continue
            next_tok = cur.peek_ahead()
            if t[0] != 'ID' or not next_tok or next_tok[0] != 'EQUAL':
                raise SyntaxError(
                    f"[line {t[2]}, col {t[3]}] unexpected token '{t[1]}'. Expected ',' or ']'"
                )
        k = cur.expect('ID')
        cur.expect('EQUAL')
        opts[k[1]] = parse_opt_value(cur)
        need_sep = True
    return opts


def parse_stmt(tokens: List[Token]) -> Optional[Stmt]:
    if not tokens:
        return None
    cur = Cursor(tokens)
    t0 = cur.peek()
    kw = cur.peek_keyword()
    if not kw:
        raise SyntaxError(f'[line {t0[2]}, col {t0[3]}] expected statement keyword')

    stmt: Stmt

    if kw == 'plan':
        cur.consume_keyword('plan')
        s = cur.expect('STRING')
        stmt = Stmt('plan', Span(s[2], s[3]), {'title': s[1]})
    elif kw == 'node':
        cur.consume_keyword('node')
        name, sp = parse_id(cur)
        cur.consume_keyword('at')
        position = parse_position(cur)
        stmt = Stmt('node', sp, {'id': name, 'position': position})
    elif kw == 'road':
        cur.consume_keyword('road')
        edge, sp = parse_pair(cur)
        opts = parse_opts(cur)
        stmt = Stmt('road', sp, {'edge': edge}, opts)
    elif kw == 'roads':
        cur.consume_keyword('roads')
        ids, sp = parse_idchain(cur)
        stmt = Stmt('roads', sp, {'ids': ids})
    else:
        raise SyntaxError(f'[line {t0[2]}, col {t0[3]}] unknown statement "{kw}"')

    trailing = cur.peek()
    if trailing:
        raise SyntaxError(f"[line {trailing[2]}, col {trailing[3]}] unexpected token {trailing[1]!r}")
    return stmt


def _augment_syntax_error(err: SyntaxError, line_text: str) -> Optional[SyntaxError]:
    message = str(err)
    if not line_text or "\n" in message:
        return None
    match = _ERROR_LOC_RE.search(message)
    if not match:
        return None
    col = max(int(match.group(2)), 1)
    caret_line = " " * (col - 1) + "^"
    snippet = f"    {line_text.rstrip()}\n    {caret_line}"
    return SyntaxError(f"{message}\n{snippet}")


def parse_network(text: str) -> Network:
    network = Network()
    for i, raw in enumerate(text.splitlines(), start=1):
        try:
            tokens = tokenize_line(raw, i)
            stmt = parse_stmt(tokens)
        except SyntaxError as err:
            augmented = _augment_syntax_error(err, raw)
            if augmented is None:
                raise
            raise augmented from None
        if stmt:
            network.stmts.append(stmt)
    return network
