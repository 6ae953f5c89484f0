from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Dict, List, Optional

from intentcore.component import ComponentDescription
from intentcore.ir import FilterRule, IntentPlan

TOOL_NAME = "intentfuzz"
TOOL_VERSION = "0.1.0"


def _rule_to_dict(rule: FilterRule) -> Dict[str, object]:
    out: Dict[str, object] = {
        "actions": sorted(rule.actions),
        "categories": sorted(rule.categories),
    }
    if rule.data is not None:
        out["data"] = str(rule.data)
    return out


def _extra_tag(tag) -> str:
    return getattr(tag, "value", str(tag))


def _component_to_dict(component: ComponentDescription, package_name: str) -> Dict[str, object]:
    return {
        "name": component.fully_qualified_name(package_name),
        "type": component.kind.value,
        "intent_filters": [_rule_to_dict(r) for r in sorted(component.filter_rules, key=FilterRule.sort_key)],
        "extras": {name: _extra_tag(tag) for name, tag in sorted(component.extras.items())},
        "string_constants": len(component.string_constants),
    }


def _plan_to_dict(plan: IntentPlan) -> Dict[str, object]:
    out: Dict[str, object] = {
        "planner": plan.planner,
        "component": plan.component,
        "type": plan.kind.value,
        "action": plan.action,
        "categories": sorted(plan.categories),
        "data": plan.data,
    }
    if plan.filter_rule is not None:
        out["intent_filter"] = _rule_to_dict(plan.filter_rule)
    if plan.extras is not None:
        out["extras"] = plan.extras.to_dict()
    if plan.notes:
        out["notes"] = dict(plan.notes)
    return out


def _sort_plans(plans: List[IntentPlan]) -> List[IntentPlan]:
    return sorted(plans, key=lambda p: (p.component, p.planner, p.action or ""))


def build_json_report(
    package_name: str,
    components: List[ComponentDescription],
    plans: List[IntentPlan],
    seed: Optional[int] = None,
    app_info: Optional[Dict[str, object]] = None,
    stats: Optional[Dict[str, dict]] = None,
) -> Dict[str, object]:
    return {
        "tool": {"name": TOOL_NAME, "version": TOOL_VERSION},
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "seed": seed,
        "app": dict(app_info or {"package_name": package_name}),
        "components": [_component_to_dict(c, package_name) for c in components],
        "plans": [_plan_to_dict(p) for p in _sort_plans(plans)],
        "stats": dict(stats or {}),
    }


def write_json_report(path: str, report: Dict[str, object]) -> None:
    with open(path, "w", encoding="utf-8") as f:
        json.dump(report, f, indent=2, ensure_ascii=False)
        f.write("\n")
