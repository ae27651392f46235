"""
Filter parsing errors.

Every error carries the byte offset (within the stripped expression) where
the problem was found, so callers can point at it.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Sequence

from todoist_cache.exceptions import TodoistCacheError


@dataclass(frozen=True)
class LexerError:
    """A character the lexer could not match to any token."""

    character: str
    position: int


class FilterError(TodoistCacheError, ValueError):
    """Base class for invalid filter expressions."""


class EmptyExpressionError(FilterError):
    def __init__(self) -> None:
        super().__init__("filter expression is empty")


def _format_lexer_errors(errors: Sequence[LexerError]) -> str:
    if len(errors) == 1:
        return f"'{errors[0].character}' at position {errors[0].position}"
    return ", ".join(f"'{e.character}' at {e.position}" for e in errors)


class UnknownCharactersError(FilterError):
    """One or more characters matched no token. All of them are reported."""

    def __init__(self, errors: Sequence[LexerError]) -> None:
        self.errors = list(errors)
        super().__init__(
            f"unknown character(s) in filter: {_format_lexer_errors(self.errors)}",
            details={"errors": [(e.character, e.position) for e in self.errors]},
        )


class UnexpectedTokenError(FilterError):
    def __init__(self, token: str, position: int) -> None:
        self.token = token
        self.position = position
        super().__init__(f"unexpected token '{token}' at position {position}")


class UnexpectedEndOfInputError(FilterError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"unexpected end of expression after position {position}")


class UnclosedParenthesisError(FilterError):
    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"unclosed parenthesis at position {position}")


class InvalidPriorityError(FilterError):
    def __init__(self, value: str, position: int) -> None:
        self.value = value
        self.position = position
        super().__init__(
            f"invalid priority '{value}' at position {position} (expected 1-4)"
        )


class UnknownKeywordError(FilterError):
    def __init__(self, keyword: str, position: int) -> None:
        self.keyword = keyword
        self.position = position
        super().__init__(f"unknown filter keyword '{keyword}' at position {position}")
