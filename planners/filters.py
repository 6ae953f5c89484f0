from __future__ import annotations

from typing import List

from intentcore.context import FuzzContext
from intentcore.errors import NoMatchingFilter
from intentcore.ir import FilterRule, IntentPlan, IntentQuery
from intentcore.matching import resolve_filter
from intentcore.pools import ValuePool
from planners.base import BasePlanner


def query_for_rule(rule: FilterRule, pool: ValuePool) -> IntentQuery:
    """An intent aimed at ``rule``: one of its actions, all its categories, a URI of its data."""
    action = pool.choice(rule.actions) if rule.actions else None
    data = rule.data.generate_random_uri(pool.rng) if rule.data else None
    mime_type = pool.choice(rule.data.mime_types) if rule.data and rule.data.mime_types else None
    return IntentQuery(action=action, categories=rule.categories, data=data, mime_type=mime_type)


class FilterPlanner(BasePlanner):
    name = "filters"

    def run(self, ctx: FuzzContext) -> List[IntentPlan]:
        plans: List[IntentPlan] = []
        total = 0
        skipped = 0
        for comp in ctx.selected_components():
            if not comp.has_filter_rules():
                continue
            fqn = ctx.fqn(comp)
            for rule in sorted(comp.filter_rules, key=FilterRule.sort_key):
                total += 1
                query = query_for_rule(rule, ctx.pool)
                try:
                    resolved = resolve_filter(comp, query, ctx.logger)
                except NoMatchingFilter as exc:
                    skipped += 1
                    ctx.logger.debug(f"filter skipped component={fqn} reason={exc}")
                    continue
                plans.append(
                    IntentPlan(
                        planner=self.name,
                        component=fqn,
                        kind=comp.kind,
                        action=query.action,
                        categories=query.categories,
                        data=query.data,
                        filter_rule=resolved,
                        notes={"exact": resolved == rule},
                    )
                )
        self._record_stats(ctx, total, len(plans), skipped)
        return plans
