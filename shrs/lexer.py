"""Tokenizer for the POSIX shell command language."""

from __future__ import annotations

import enum
from dataclasses import dataclass

RESERVED_WORDS: tuple[str, ...] = (
    "!", "{", "}", "case", "do", "done", "elif", "else", "esac", "fi", "for",
    "if", "in", "then", "until", "while",
)


class TokenKind(enum.Enum):
    NEWLINE = enum.auto()
    SEMI = enum.auto()
    AMP = enum.auto()
    PIPE = enum.auto()
    BACKTICK = enum.auto()
    EQUAL = enum.auto()
    BACKSLASH = enum.auto()
    SINGLEQUOTE = enum.auto()
    DOUBLEQUOTE = enum.auto()
    LESS = enum.auto()
    GREAT = enum.auto()

    LPAREN = enum.auto()
    RPAREN = enum.auto()
    LBRACE = enum.auto()
    RBRACE = enum.auto()
    BANG = enum.auto()

    AND_IF = enum.auto()
    OR_IF = enum.auto()
    DSEMI = enum.auto()

    DLESS = enum.auto()
    DGREAT = enum.auto()
    LESSAND = enum.auto()
    GREATAND = enum.auto()
    LESSGREAT = enum.auto()
    DLESSDASH = enum.auto()
    CLOBBER = enum.auto()

    IF = enum.auto()
    THEN = enum.auto()
    ELSE = enum.auto()
    ELIF = enum.auto()
    FI = enum.auto()
    DO = enum.auto()
    DONE = enum.auto()

    CASE = enum.auto()
    ESAC = enum.auto()
    WHILE = enum.auto()
    UNTIL = enum.auto()
    FOR = enum.auto()
    IN = enum.auto()

    WORD = enum.auto()
    ASSIGNMENT_WORD = enum.auto()
    FNAME = enum.auto()
    NAME = enum.auto()
    IO_NUMBER = enum.auto()


@dataclass(frozen=True)
class Token:
    """A token kind, with the matched text for word-like tokens."""

    kind: TokenKind
    value: str | None = None


class LexError(ValueError):
    """An input character that starts no token."""

    def __init__(self, start: int, char: str, end: int) -> None:
        super().__init__(f"unrecognized character {char} in range {start}:{end}")
        self.start = start
        self.char = char
        self.end = end


_SINGLE: dict[str, TokenKind] = {
    "\n": TokenKind.NEWLINE,
    ";": TokenKind.SEMI,
    "&": TokenKind.AMP,
    "|": TokenKind.PIPE,
    "`": TokenKind.BACKTICK,
    "=": TokenKind.EQUAL,
    "\\": TokenKind.BACKSLASH,
    "<": TokenKind.LESS,
    ">": TokenKind.GREAT,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "!": TokenKind.BANG,
}

_DOUBLE: dict[str, dict[str, TokenKind]] = {
    ";": {";": TokenKind.DSEMI},
    "&": {"&": TokenKind.AND_IF},
    "|": {"|": TokenKind.OR_IF},
    "<": {"<": TokenKind.DLESS, "&": TokenKind.LESSAND, ">": TokenKind.LESSGREAT},
    ">": {">": TokenKind.DGREAT, "&": TokenKind.GREATAND, "|": TokenKind.CLOBBER},
}

_KEYWORDS: dict[str, TokenKind] = {
    "if": TokenKind.IF,
    "then": TokenKind.THEN,
    "else": TokenKind.ELSE,
    "elif": TokenKind.ELIF,
    "fi": TokenKind.FI,
    "do": TokenKind.DO,
    "done": TokenKind.DONE,
    "case": TokenKind.CASE,
    "esac": TokenKind.ESAC,
    "while": TokenKind.WHILE,
    "until": TokenKind.UNTIL,
    "for": TokenKind.FOR,
    "in": TokenKind.IN,
}

_WHITESPACE = frozenset(
    "\t\n\x0b\x0c\r \x85\xa0\u1680\u2028\u2029\u202f\u205f\u3000"
    + "".join(chr(c) for c in range(0x2000, 0x200B))
)

_WORD_BREAK = frozenset(";)(`!\\'\"><&|{}*")


def _is_whitespace(ch: str) -> bool:
    return ch in _WHITESPACE


def _is_word_continue(ch: str) -> bool:
    return ch not in _WORD_BREAK and not _is_whitespace(ch)


def _is_word_start(ch: str) -> bool:
    code = ord(ch)
    if code <= 0x1F or code == 0x7F or 0x80 <= code <= 0x9F:
        return False
    return _is_word_continue(ch)


Spanned = tuple[int, Token, int]


class Lexer:
    """Iterator of ``(start, token, end)`` triples over a command line.

    An unrecognized character raises LexError; iteration may continue after it.
    Offsets are character indices into the source.
    """

    def __init__(self, source: str) -> None:
        self.source = source
        self._pos = 0

    def _peek(self) -> str | None:
        if self._pos < len(self.source):
            return self.source[self._pos]
        return None

    def __iter__(self) -> Lexer:
        return self

    def __next__(self) -> Spanned:
        while self._pos < len(self.source):
            start = self._pos
            ch = self.source[start]
            self._pos += 1
            end = self._pos

            if ch in _SINGLE:
                follow = _DOUBLE.get(ch, {}).get(self._peek() or "")
                if follow is not None:
                    self._pos += 1
                    return start, Token(follow), self._pos
                return start, Token(_SINGLE[ch]), end
            if ch in "'\"":
                return self._quoted(start, ch)
            if _is_word_start(ch):
                return self._word(start, end)
            if _is_whitespace(ch):
                continue
            raise LexError(start, ch, end)
        raise StopIteration

    def _word(self, start: int, end: int) -> Spanned:
        while (ch := self._peek()) is not None and _is_word_continue(ch):
            self._pos += 1
            end = self._pos
        word = self.source[start:end]
        kind = _KEYWORDS.get(word)
        token = Token(kind) if kind is not None else Token(TokenKind.WORD, word)
        return start, token, end

    def _quoted(self, start: int, quote: str) -> Spanned:
        while (ch := self._peek()) is not None:
            self._pos += 1
            if ch == quote:
                break
        return start, Token(TokenKind.WORD, self.source[start:self._pos]), self._pos