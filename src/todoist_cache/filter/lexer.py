"""
Filter expression lexer.

Turns a filter string such as ``(today | overdue) & #Work & !@waiting``
into positioned tokens. Token positions are byte offsets into the UTF-8
encoding of the input.

Characters that start no token are collected as LexerErrors instead of
aborting, so one pass reports every bad character.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum

from todoist_cache.filter.errors import LexerError


class TokenKind(Enum):
    AND = "and"
    OR = "or"
    NOT = "not"
    OPEN_PAREN = "open_paren"
    CLOSE_PAREN = "close_paren"
    TODAY = "today"
    TOMORROW = "tomorrow"
    OVERDUE = "overdue"
    NO_DATE = "no_date"
    NO_LABELS = "no_labels"
    NEXT_7_DAYS = "next_7_days"
    SPECIFIC_DATE = "specific_date"
    PRIORITY = "priority"
    LABEL = "label"
    PROJECT = "project"
    PROJECT_WITH_SUBPROJECTS = "project_with_subprojects"
    SECTION = "section"
    WORD = "word"


@dataclass(frozen=True)
class Token:
    """
    A lexed token.

    ``value`` depends on the kind: the name for sigil tokens, the digit
    string for PRIORITY, a (month, day) tuple for SPECIFIC_DATE and the raw
    word for WORD.
    """

    kind: TokenKind
    text: str
    position: int
    value: str | tuple[int, int] | None = None


@dataclass
class LexResult:
    tokens: list[Token] = field(default_factory=list)
    errors: list[LexerError] = field(default_factory=list)


_OPERATORS = {
    "&": TokenKind.AND,
    "|": TokenKind.OR,
    "!": TokenKind.NOT,
    "(": TokenKind.OPEN_PAREN,
    ")": TokenKind.CLOSE_PAREN,
}

_KEYWORDS = {
    "today": TokenKind.TODAY,
    "tomorrow": TokenKind.TOMORROW,
    "overdue": TokenKind.OVERDUE,
}

MONTHS = {
    "jan": 1,
    "january": 1,
    "feb": 2,
    "february": 2,
    "mar": 3,
    "march": 3,
    "apr": 4,
    "april": 4,
    "may": 5,
    "jun": 6,
    "june": 6,
    "jul": 7,
    "july": 7,
    "aug": 8,
    "august": 8,
    "sep": 9,
    "sept": 9,
    "september": 9,
    "oct": 10,
    "october": 10,
    "nov": 11,
    "november": 11,
    "dec": 12,
    "december": 12,
}

_PRIORITY_RE = re.compile(r"p([0-9]+)")
_DAY_RE = re.compile(r"[0-9]{1,2}")

# Characters ending a bare name after a sigil.
_NAME_TERMINATORS = frozenset("&|()")


def _is_word_char(ch: str) -> bool:
    return ch.isalnum() or ch in "_-"


class Lexer:
    """Single-use lexer over one filter string."""

    def __init__(self, text: str) -> None:
        self._text = text
        self._index = 0
        # Byte offset of every character index, plus the end.
        self._offsets = [0]
        for ch in text:
            self._offsets.append(self._offsets[-1] + len(ch.encode("utf-8")))

    def tokenize(self) -> LexResult:
        """Lex the whole input."""
        result = LexResult()
        while True:
            self._skip_whitespace()
            if self._at_end():
                return result

            start = self._index
            ch = self._text[start]
            if ch in _OPERATORS:
                self._index += 1
                result.tokens.append(self._token(_OPERATORS[ch], start))
            elif ch in "@#/":
                result.tokens.append(self._read_sigil(start))
            elif ch.isalnum():
                result.tokens.append(self._read_word(start))
            else:
                self._index += 1
                result.errors.append(LexerError(ch, self._offsets[start]))

    # =========================================================================
    # Scanning
    # =========================================================================

    def _at_end(self) -> bool:
        return self._index >= len(self._text)

    def _peek(self) -> str:
        return "" if self._at_end() else self._text[self._index]

    def _skip_whitespace(self) -> None:
        while not self._at_end() and self._text[self._index].isspace():
            self._index += 1

    def _token(
        self,
        kind: TokenKind,
        start: int,
        value: str | tuple[int, int] | None = None,
    ) -> Token:
        return Token(kind, self._text[start : self._index], self._offsets[start], value)

    def _read_identifier(self) -> str:
        start = self._index
        while not self._at_end() and _is_word_char(self._text[self._index]):
            self._index += 1
        return self._text[start : self._index]

    def _read_sigil(self, start: int) -> Token:
        sigil = self._text[start]
        self._index += 1
        if sigil == "@":
            kind = TokenKind.LABEL
        elif sigil == "/":
            kind = TokenKind.SECTION
        elif self._peek() == "#":
            self._index += 1
            kind = TokenKind.PROJECT_WITH_SUBPROJECTS
        else:
            kind = TokenKind.PROJECT
        name = self._read_name()
        return self._token(kind, start, name)

    def _read_name(self) -> str:
        quote = self._peek()
        if quote in ('"', "'"):
            return self._read_quoted(quote)

        start = self._index
        while not self._at_end():
            ch = self._text[self._index]
            if ch.isspace() or ch in _NAME_TERMINATORS:
                break
            self._index += 1
        return self._text[start : self._index]

    def _read_quoted(self, quote: str) -> str:
        self._index += 1
        chars: list[str] = []
        while not self._at_end():
            ch = self._text[self._index]
            self._index += 1
            if ch == quote:
                break
            if ch == "\\":
                if not self._at_end():
                    chars.append(self._text[self._index])
                    self._index += 1
                continue
            chars.append(ch)
        return "".join(chars)

    def _read_word(self, start: int) -> Token:
        word = self._read_identifier()
        lower = word.lower()

        priority = _PRIORITY_RE.fullmatch(lower)
        if priority:
            return self._token(TokenKind.PRIORITY, start, priority.group(1))

        if lower in _KEYWORDS:
            return self._token(_KEYWORDS[lower], start)

        if lower == "no":
            if self._match_words("date"):
                return self._token(TokenKind.NO_DATE, start)
            if self._match_words("labels"):
                return self._token(TokenKind.NO_LABELS, start)
        elif lower == "next":
            if self._match_words("7", "days"):
                return self._token(TokenKind.NEXT_7_DAYS, start)
        elif lower == "7":
            if self._match_words("days"):
                return self._token(TokenKind.NEXT_7_DAYS, start)
        elif lower in MONTHS:
            day = self._match_day()
            if day is not None:
                return self._token(TokenKind.SPECIFIC_DATE, start, (MONTHS[lower], day))

        return self._token(TokenKind.WORD, start, word)

    def _match_words(self, *expected: str) -> bool:
        """Consume the expected words if they follow, else leave the input as is."""
        saved = self._index
        for word in expected:
            self._skip_whitespace()
            if self._read_identifier().lower() != word:
                self._index = saved
                return False
        return True

    def _match_day(self) -> int | None:
        saved = self._index
        self._skip_whitespace()
        word = self._read_identifier()
        if _DAY_RE.fullmatch(word) and 1 <= int(word) <= 31:
            return int(word)
        self._index = saved
        return None
