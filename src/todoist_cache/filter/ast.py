"""
Filter expression tree.

Nodes are immutable. Priority levels are user-facing (1 is the most
urgent); the evaluator maps them to the inverted API values.
"""

from __future__ import annotations

from dataclasses import dataclass


class Filter:
    """Base class for filter nodes."""


# Date predicates


@dataclass(frozen=True)
class Today(Filter):
    pass


@dataclass(frozen=True)
class Tomorrow(Filter):
    pass


@dataclass(frozen=True)
class Overdue(Filter):
    pass


@dataclass(frozen=True)
class NoDate(Filter):
    pass


@dataclass(frozen=True)
class Next7Days(Filter):
    """Due today or within the following six days."""


@dataclass(frozen=True)
class SpecificDate(Filter):
    """Due on this month and day, in any year."""

    month: int
    day: int


# Attribute predicates


@dataclass(frozen=True)
class Priority(Filter):
    level: int


@dataclass(frozen=True)
class Label(Filter):
    name: str


@dataclass(frozen=True)
class NoLabels(Filter):
    pass


@dataclass(frozen=True)
class Project(Filter):
    name: str


@dataclass(frozen=True)
class ProjectWithSubprojects(Filter):
    name: str


@dataclass(frozen=True)
class Section(Filter):
    name: str


# Boolean operators


@dataclass(frozen=True)
class And(Filter):
    left: Filter
    right: Filter


@dataclass(frozen=True)
class Or(Filter):
    left: Filter
    right: Filter


@dataclass(frozen=True)
class Not(Filter):
    operand: Filter
