"""
Todoist filter language.

Supports a subset of Todoist's filter syntax:

    today, tomorrow, overdue, no date, 7 days, Jan 15   date predicates
    p1 .. p4                                            priority
    @label, no labels                                   labels
    #Project, ##Project (with subprojects)              projects
    /Section                                            sections
    &, |, !, ( )                                        boolean logic

Names containing spaces are quoted: #"My Project".
"""

from todoist_cache.filter import ast
from todoist_cache.filter.ast import Filter
from todoist_cache.filter.errors import (
    EmptyExpressionError,
    FilterError,
    InvalidPriorityError,
    LexerError,
    UnclosedParenthesisError,
    UnexpectedEndOfInputError,
    UnexpectedTokenError,
    UnknownCharactersError,
    UnknownKeywordError,
)
from todoist_cache.filter.evaluator import FilterContext, FilterEvaluator, select_items
from todoist_cache.filter.lexer import Lexer, LexResult, Token, TokenKind
from todoist_cache.filter.parser import FilterParser, parse_filter

__all__ = [
    "ast",
    "Filter",
    "FilterParser",
    "parse_filter",
    "FilterEvaluator",
    "FilterContext",
    "select_items",
    "Lexer",
    "LexResult",
    "Token",
    "TokenKind",
    "LexerError",
    "FilterError",
    "EmptyExpressionError",
    "UnknownCharactersError",
    "UnexpectedTokenError",
    "UnexpectedEndOfInputError",
    "UnclosedParenthesisError",
    "InvalidPriorityError",
    "UnknownKeywordError",
]
