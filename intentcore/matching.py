from __future__ import annotations

from typing import List, Optional

from intentcore.component import ComponentDescription
from intentcore.errors import NoMatchingFilter
from intentcore.ir import FilterRule, IntentQuery
from intentcore.logging import Logger


def resolve_filter(
    component: ComponentDescription,
    query: IntentQuery,
    logger: Optional[Logger] = None,
) -> FilterRule:
    """Heuristic: the first survivor in structural order wins, not the platform's pick."""
    rules = sorted(component.filter_rules, key=FilterRule.sort_key)

    candidates = _match_action(rules, query.action)
    _require(candidates, component, query, "action")
    if len(candidates) == 1:
        return candidates[0]

    candidates = _match_categories(candidates, query)
    _require(candidates, component, query, "category")
    if len(candidates) == 1:
        return candidates[0]

    candidates = _match_data(candidates, query)
    _require(candidates, component, query, "data")

    if logger:
        logger.debug(f"filter matches component={component.name} query={query} matches={len(candidates)}")
    return candidates[0]


def _match_action(rules: List[FilterRule], action: Optional[str]) -> List[FilterRule]:
    if action is None:
        return [rule for rule in rules if not rule.has_action()]
    return [rule for rule in rules if rule.has_action() and action in rule.actions]


def _match_categories(candidates: List[FilterRule], query: IntentQuery) -> List[FilterRule]:
    if not query.categories:
        return candidates
    return [
        rule for rule in candidates
        if rule.has_category() and rule.categories.issuperset(query.categories)
    ]


def _match_data(candidates: List[FilterRule], query: IntentQuery) -> List[FilterRule]:
    if not query.data:
        return candidates
    return [
        rule for rule in candidates
        if rule.has_data() and rule.data.match_uri(query.data, query.mime_type) is not None
    ]


def _require(candidates: List[FilterRule], component: ComponentDescription, query: IntentQuery, stage: str) -> None:
    if not candidates:
        raise NoMatchingFilter(component.name, query, stage)
