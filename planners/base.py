from __future__ import annotations

from typing import List

from intentcore.context import FuzzContext
from intentcore.ir import IntentPlan


class BasePlanner:
    name = "base"

    def run(self, ctx: FuzzContext) -> List[IntentPlan]:
        raise NotImplementedError

    def _record_stats(self, ctx: FuzzContext, total: int, planned: int, skipped: int) -> None:
        ctx.metrics.setdefault("planner_stats", {})[self.name] = {
            "total": total,
            "planned": planned,
            "skipped": skipped,
        }
        ctx.logger.debug(f"stats name={self.name} total={total} planned={planned} skipped={skipped}")
