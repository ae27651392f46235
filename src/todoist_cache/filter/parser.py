"""
Recursive descent parser for filter expressions.

Grammar (NOT binds tighter than AND, which binds tighter than OR):

    expression := or_expr
    or_expr    := and_expr ('|' and_expr)*
    and_expr   := unary ('&' unary)*
    unary      := '!' unary | primary
    primary    := '(' expression ')' | keyword | identifier
"""

from __future__ import annotations

from typing import Sequence

from todoist_cache.filter import ast
from todoist_cache.filter.errors import (
    EmptyExpressionError,
    InvalidPriorityError,
    UnclosedParenthesisError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownCharactersError,
    UnknownKeywordError,
)
from todoist_cache.filter.lexer import Lexer, Token, TokenKind

_SIMPLE_NODES: dict[TokenKind, type[ast.Filter]] = {
    TokenKind.TODAY: ast.Today,
    TokenKind.TOMORROW: ast.Tomorrow,
    TokenKind.OVERDUE: ast.Overdue,
    TokenKind.NO_DATE: ast.NoDate,
    TokenKind.NO_LABELS: ast.NoLabels,
    TokenKind.NEXT_7_DAYS: ast.Next7Days,
}

_NAMED_NODES: dict[TokenKind, type[ast.Filter]] = {
    TokenKind.LABEL: ast.Label,
    TokenKind.PROJECT: ast.Project,
    TokenKind.PROJECT_WITH_SUBPROJECTS: ast.ProjectWithSubprojects,
    TokenKind.SECTION: ast.Section,
}


class FilterParser:
    """
    Parses filter strings into Filter trees.

    Usage:
        tree = FilterParser.parse("(today | overdue) & p1")
    """

    def __init__(self, tokens: Sequence[Token], input_length: int) -> None:
        self._tokens = list(tokens)
        self._position = 0
        self._input_length = input_length

    @classmethod
    def parse(cls, text: str) -> ast.Filter:
        """
        Parse a filter expression.

        Surrounding whitespace is ignored; error positions are byte offsets
        into the stripped expression.

        Raises:
            FilterError: A subclass describing the first problem found
        """
        stripped = text.strip()
        if not stripped:
            raise EmptyExpressionError()

        lexed = Lexer(stripped).tokenize()
        if lexed.errors:
            raise UnknownCharactersError(lexed.errors)
        if not lexed.tokens:
            raise EmptyExpressionError()

        parser = cls(lexed.tokens, len(stripped.encode("utf-8")))
        tree = parser._parse_or()
        trailing = parser._peek()
        if trailing is not None:
            raise UnexpectedTokenError(trailing.text, trailing.position)
        return tree

    # =========================================================================
    # Token Stream
    # =========================================================================

    def _peek(self) -> Token | None:
        if self._position < len(self._tokens):
            return self._tokens[self._position]
        return None

    def _check(self, kind: TokenKind) -> bool:
        token = self._peek()
        return token is not None and token.kind is kind

    def _advance(self) -> Token:
        token = self._peek()
        if token is None:
            raise UnexpectedEndOfInputError(self._input_length)
        self._position += 1
        return token

    # =========================================================================
    # Grammar Rules
    # =========================================================================

    def _parse_or(self) -> ast.Filter:
        left = self._parse_and()
        while self._check(TokenKind.OR):
            self._advance()
            left = ast.Or(left, self._parse_and())
        return left

    def _parse_and(self) -> ast.Filter:
        left = self._parse_unary()
        while self._check(TokenKind.AND):
            self._advance()
            left = ast.And(left, self._parse_unary())
        return left

    def _parse_unary(self) -> ast.Filter:
        if self._check(TokenKind.NOT):
            self._advance()
            return ast.Not(self._parse_unary())
        return self._parse_primary()

    def _parse_primary(self) -> ast.Filter:
        token = self._advance()
        kind = token.kind

        if kind is TokenKind.OPEN_PAREN:
            inner = self._parse_or()
            if not self._check(TokenKind.CLOSE_PAREN):
                raise UnclosedParenthesisError(token.position)
            self._advance()
            return inner

        if kind in _SIMPLE_NODES:
            return _SIMPLE_NODES[kind]()

        if kind in _NAMED_NODES:
            if not token.value:
                raise UnexpectedTokenError(token.text, token.position)
            return _NAMED_NODES[kind](token.value)

        if kind is TokenKind.SPECIFIC_DATE:
            month, day = token.value  # type: ignore[misc]
            return ast.SpecificDate(month, day)

        if kind is TokenKind.PRIORITY:
            level = int(token.value)  # type: ignore[arg-type]
            if not 1 <= level <= 4:
                raise InvalidPriorityError(str(token.value), token.position)
            return ast.Priority(level)

        if kind is TokenKind.WORD:
            raise UnknownKeywordError(str(token.value), token.position)

        raise UnexpectedTokenError(token.text, token.position)


def parse_filter(text: str) -> ast.Filter:
    """Parse a filter expression. See FilterParser.parse."""
    return FilterParser.parse(text)
