from __future__ import annotations

from typing import List

from intentcore.context import FuzzContext
from intentcore.errors import UnsupportedType
from intentcore.extras import synthesize_extras
from intentcore.ir import IntentPlan
from planners.base import BasePlanner


class ExtrasPlanner(BasePlanner):
    name = "extras"

    def run(self, ctx: FuzzContext) -> List[IntentPlan]:
        plans: List[IntentPlan] = []
        total = 0
        skipped = 0
        for comp in ctx.selected_components():
            # providers are reached through URIs, not intents
            if comp.is_content_provider() or not comp.has_extras():
                continue
            total += 1
            fqn = ctx.fqn(comp)
            try:
                bundle = synthesize_extras(comp, ctx.pool, count=ctx.config.count, bound=ctx.config.bound)
            except UnsupportedType as exc:
                skipped += 1
                ctx.logger.warn(f"extras skipped component={fqn} error={exc}")
                continue
            plans.append(IntentPlan(planner=self.name, component=fqn, kind=comp.kind, extras=bundle))
        self._record_stats(ctx, total, len(plans), skipped)
        return plans
