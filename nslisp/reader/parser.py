"""
  nslisp Reader: Lexer and Parser

- Tokens are plain strings: "(", ")" or a symbol run
- Emits Python primitives:

    - numbers -> float
    - identifiers -> Symbol (dotted identifiers are full names)
    - lists -> Python list
"""

from __future__ import annotations

import re
from typing import Iterable, Iterator, Optional

from nslisp import SExpression
from nslisp.errors import NsSyntaxError
from nslisp.types.symbol import Symbol

LEFT_PAREN = "("
RIGHT_PAREN = ")"

WHITESPACE = " \t\r\n"

TOKEN_RE = re.compile(
    r"(?P<comment>;[^\n]*)"  # single-line comment
    r"|(?P<paren>[()])"  # ( or )
    r"|(?P<symbol>[^\s)]+)"  # any run up to whitespace or ')'
)

NUMBER_RE = re.compile(r"[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")


def _lex_error(source: str, pos: int) -> NsSyntaxError:
    return NsSyntaxError(
        "LEX_ERROR",
        {"char": source[pos], "position": pos},
        f"Invalid char at {pos}: {source[pos]!r}",
    )


def lex(source: str) -> Iterator[str]:
    """Token generator: yields "(", ")" and symbol strings.

    A symbol runs until whitespace or ')', so `a(b` is a single symbol.
    """
    pos = 0
    n = len(source)
    while pos < n:
        if source[pos] in WHITESPACE:
            pos += 1
            continue
        m = TOKEN_RE.match(source, pos)
        if not m:
            raise _lex_error(source, pos)
        if m.lastgroup == "comment":
            pos = m.end()
            continue
        for i in range(pos, m.end()):
            if not source[i].isprintable():
                raise _lex_error(source, i)
        pos = m.end()
        yield m.group(m.lastgroup)


def parse_atom(token: str) -> SExpression:
    """Numeric text becomes a float, anything else an identifier."""
    if NUMBER_RE.fullmatch(token):
        return float(token)
    return Symbol(token)


class TokenStream:
    def __init__(self, token_iter: Iterable[str]):
        self.tokens = iter(token_iter)
        self.buffer: list[str] = []

    def peek(self) -> Optional[str]:
        if not self.buffer:
            try:
                self.buffer.append(next(self.tokens))
            except StopIteration:
                return None
        return self.buffer[0]

    def advance(self) -> Optional[str]:
        if self.buffer:
            return self.buffer.pop(0)
        return next(self.tokens, None)

    def rest(self) -> list[str]:
        """Drain and return the unread tokens."""
        remaining = list(self.buffer)
        self.buffer.clear()
        remaining.extend(self.tokens)
        return remaining

    def parse_expr(self) -> SExpression:
        """Parse exactly one value; returns None when the stream is exhausted."""
        tok = self.peek()
        if tok is None:
            return None
        self.advance()

        if tok == RIGHT_PAREN:
            raise NsSyntaxError("INVALID_EXPRESSION", {"exp": tok}, "Unexpected ')'")

        if tok != LEFT_PAREN:
            return parse_atom(tok)

        # Open lists, innermost last
        stack: list[list[SExpression]] = [[]]
        while True:
            tok = self.advance()
            if tok is None:
                raise NsSyntaxError("INVALID_EXPRESSION", {"exp": "("}, "Unmatched '('")
            if tok == LEFT_PAREN:
                stack.append([])
            elif tok == RIGHT_PAREN:
                items = stack.pop()
                if not stack:
                    return items
                stack[-1].append(items)
            else:
                stack[-1].append(parse_atom(tok))

    def parse_all(self) -> Iterator[SExpression]:
        while self.peek() is not None:
            yield self.parse_expr()


def parse(tokens: Iterable[str]) -> tuple[SExpression, list[str]]:
    """Parse one expression from the front of `tokens`; return it with the leftovers."""
    stream = TokenStream(tokens)
    if stream.peek() is None:
        raise NsSyntaxError("INVALID_EXPRESSION", {"exp": ""}, "Empty input")
    expr = stream.parse_expr()
    return expr, stream.rest()
