"""
Filter evaluation against cached items.

Usage:
    tree = parse_filter("today & p1")
    evaluator = FilterEvaluator(tree, FilterContext.from_cache(cache))
    urgent = evaluator.filter_items(cache.items)
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, timedelta
from typing import TYPE_CHECKING, Iterable, Sequence

from todoist_cache.filter import ast
from todoist_cache.filter.parser import parse_filter
from todoist_cache.models import Item
from todoist_cache.models import Label as LabelRecord
from todoist_cache.models import Project as ProjectRecord
from todoist_cache.models import Section as SectionRecord
from todoist_cache.models import to_api_priority

if TYPE_CHECKING:
    from todoist_cache.cache.cache import Cache

logger = logging.getLogger(__name__)


@dataclass
class FilterContext:
    """
    Reference data used to resolve names in a filter.

    Deleted records are ignored by every lookup.
    """

    projects: Sequence[ProjectRecord] = field(default_factory=list)
    sections: Sequence[SectionRecord] = field(default_factory=list)
    labels: Sequence[LabelRecord] = field(default_factory=list)

    @classmethod
    def from_cache(cls, cache: Cache) -> FilterContext:
        return cls(projects=cache.projects, sections=cache.sections, labels=cache.labels)

    def find_project_by_name(self, name: str) -> ProjectRecord | None:
        """First non-deleted project with this case-insensitive name."""
        name_lower = name.lower()
        for project in self.projects:
            if not project.is_deleted and project.name.lower() == name_lower:
                return project
        return None

    def get_project_ids_with_subprojects(self, name: str) -> set[str]:
        """
        IDs of the named project and all of its descendants.

        Empty if no project has the name.
        """
        root = self.find_project_by_name(name)
        if root is None:
            return set()

        ids = {root.id}
        pending = [root.id]
        while pending:
            parent_id = pending.pop()
            for project in self.projects:
                if (
                    not project.is_deleted
                    and project.parent_id == parent_id
                    and project.id not in ids
                ):
                    ids.add(project.id)
                    pending.append(project.id)
        return ids

    def find_section_by_name(self, name: str) -> SectionRecord | None:
        """First non-deleted section with this case-insensitive name."""
        name_lower = name.lower()
        for section in self.sections:
            if not section.is_deleted and section.name.lower() == name_lower:
                return section
        return None

    def label_exists(self, name: str) -> bool:
        name_lower = name.lower()
        return any(
            not label.is_deleted and label.name.lower() == name_lower for label in self.labels
        )


class FilterEvaluator:
    """
    Matches items against a parsed filter.

    Args:
        filter: Parsed filter tree
        context: Projects, sections and labels used to resolve names
        today: Reference date for date predicates; the local date by default
    """

    def __init__(
        self,
        filter: ast.Filter,
        context: FilterContext,
        *,
        today: date | None = None,
    ) -> None:
        self._filter = filter
        self._context = context
        self._today = today or date.today()
        self._subproject_ids: dict[str, set[str]] = {}

    @property
    def today(self) -> date:
        return self._today

    def matches(self, item: Item) -> bool:
        """True if the item satisfies the filter."""
        return self._evaluate(self._filter, item)

    def filter_items(self, items: Iterable[Item]) -> list[Item]:
        """Matching items, in their original order."""
        return [item for item in items if self.matches(item)]

    # =========================================================================
    # Evaluation
    # =========================================================================

    def _evaluate(self, node: ast.Filter, item: Item) -> bool:
        if isinstance(node, ast.And):
            return self._evaluate(node.left, item) and self._evaluate(node.right, item)
        if isinstance(node, ast.Or):
            return self._evaluate(node.left, item) or self._evaluate(node.right, item)
        if isinstance(node, ast.Not):
            return not self._evaluate(node.operand, item)

        if isinstance(node, ast.NoDate):
            return item.due is None
        if isinstance(
            node, (ast.Today, ast.Tomorrow, ast.Overdue, ast.Next7Days, ast.SpecificDate)
        ):
            return self._matches_date(node, item)

        if isinstance(node, ast.Priority):
            return item.priority == to_api_priority(node.level)

        if isinstance(node, ast.Label):
            name = node.name.lower()
            return any(label.lower() == name for label in item.labels)
        if isinstance(node, ast.NoLabels):
            return not item.labels

        if isinstance(node, ast.Project):
            project = self._context.find_project_by_name(node.name)
            return project is not None and project.id == item.project_id
        if isinstance(node, ast.ProjectWithSubprojects):
            return item.project_id in self._project_closure(node.name)

        if isinstance(node, ast.Section):
            if item.section_id is None:
                return False
            section = self._context.find_section_by_name(node.name)
            return section is not None and section.id == item.section_id

        raise TypeError(f"Unsupported filter node: {node!r}")

    def _matches_date(self, node: ast.Filter, item: Item) -> bool:
        due = item.due_date
        if due is None:
            return False

        today = self._today
        if isinstance(node, ast.Today):
            return due == today
        if isinstance(node, ast.Tomorrow):
            return due == today + timedelta(days=1)
        if isinstance(node, ast.Overdue):
            return not item.checked and due < today
        if isinstance(node, ast.Next7Days):
            return today <= due < today + timedelta(days=7)
        if isinstance(node, ast.SpecificDate):
            return due.month == node.month and due.day == node.day
        raise TypeError(f"Unsupported date filter: {node!r}")

    def _project_closure(self, name: str) -> set[str]:
        key = name.lower()
        if key not in self._subproject_ids:
            self._subproject_ids[key] = self._context.get_project_ids_with_subprojects(name)
        return self._subproject_ids[key]


def select_items(
    cache: Cache,
    expression: str,
    *,
    include_completed: bool = False,
    today: date | None = None,
) -> list[Item]:
    """
    Items in the cache matching a filter expression.

    Completed items are skipped unless include_completed is set.

    Raises:
        FilterError: If the expression does not parse
    """
    tree = parse_filter(expression)
    evaluator = FilterEvaluator(tree, FilterContext.from_cache(cache), today=today)
    candidates = (
        item
        for item in cache.items
        if not item.is_deleted and (include_completed or not item.checked)
    )
    matched = evaluator.filter_items(candidates)
    logger.debug("Filter %r matched %d item(s)", expression, len(matched))
    return matched
