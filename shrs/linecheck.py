"""Detection of command lines that need another line of input."""

from __future__ import annotations

from collections.abc import Iterator

from shrs.lexer import LexError, Lexer, Token, TokenKind

_OPENERS = {TokenKind.RPAREN: TokenKind.LPAREN, TokenKind.RBRACE: TokenKind.LBRACE}


def _tokens(command: str) -> Iterator[Token]:
    lexer = Lexer(command)
    while True:
        try:
            _, token, _ = next(lexer)
        except LexError:
            continue
        except StopIteration:
            return
        yield token


def needs_line_check(command: str) -> bool:
    """Whether the line is incomplete: a trailing backslash, open quote or bracket."""
    if command.endswith("\\"):
        return True

    brackets: list[TokenKind] = []
    for token in _tokens(command):
        kind = token.kind
        if kind in (TokenKind.LBRACE, TokenKind.LPAREN):
            brackets.append(kind)
        elif kind in _OPENERS:
            if brackets:
                if brackets[-1] is _OPENERS[kind]:
                    brackets.pop()
                else:
                    return False
        elif kind is TokenKind.WORD and token.value:
            word = token.value
            quote = word[0]
            if quote in "'\"":
                return len(word) == 1 or word[-1] != quote

    return bool(brackets)