from __future__ import annotations

import json

from intentcore.component import ComponentDescription
from intentcore.extras import synthesize_extras
from intentcore.ir import ComponentKind, FilterRule, IntentPlan
from intentcore.pools import ValuePool
from intentcore.reporting.json_report import TOOL_NAME, build_json_report, write_json_report


def _component():
    comp = ComponentDescription(".MainActivity", ComponentKind.ACTIVITY)
    comp.add_filter_rule(FilterRule(actions={"VIEW"}))
    comp.add_extras({"p": "Parcelable[]", "n": "Int", "s": "String"})
    return comp


def test_report_is_json_serializable(tmp_path):
    comp = _component()
    bundle = synthesize_extras(comp, ValuePool(seed=1, overrides={"string_with_null": [None]}))
    plans = [
        IntentPlan(planner="extras", component="com.test.MainActivity", kind=comp.kind, extras=bundle),
        IntentPlan(
            planner="filters",
            component="com.test.MainActivity",
            kind=comp.kind,
            action="VIEW",
            filter_rule=FilterRule(actions={"VIEW"}),
            notes={"exact": True},
        ),
    ]
    report = build_json_report("com.test", [comp], plans, seed=1)
    out = tmp_path / "report.json"
    write_json_report(str(out), report)

    loaded = json.loads(out.read_text(encoding="utf-8"))
    assert loaded["tool"]["name"] == TOOL_NAME
    assert loaded["seed"] == 1
    assert loaded["app"] == {"package_name": "com.test"}
    assert loaded["components"][0]["name"] == "com.test.MainActivity"
    assert loaded["components"][0]["extras"] == {"n": "Int", "p": "Parcelable[]", "s": "String"}
    assert [p["planner"] for p in loaded["plans"]] == ["extras", "filters"]
    extras = loaded["plans"][0]["extras"]
    assert extras["p"] == {"type": "Parcelable[]", "value": [{}]}
    assert extras["s"] == {"type": "String", "value": None}
    assert loaded["plans"][1]["intent_filter"] == {"actions": ["VIEW"], "categories": []}
    assert loaded["plans"][1]["notes"] == {"exact": True}
