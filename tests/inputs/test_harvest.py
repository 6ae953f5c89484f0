from __future__ import annotations

from intentcore.bc_extract import get_invoke_refs
from intentcore.component import ComponentDescription
from intentcore.harvest import harvest_all, harvest_component, harvest_method
from intentcore.ir import ComponentKind, ExtraType
from tests.helpers.fakes import (
    FakeAnalysis,
    FakeExternalMethod,
    FakeMethod,
    ins_const_string,
    ins_get_extra,
    ins_invoke,
    ins_move_result,
)

STRING_DESC = "(Ljava/lang/String;)Ljava/lang/String;"


def _on_create():
    return FakeMethod("Lcom/test/MainActivity;", "onCreate", "(Landroid/os/Bundle;)V", [
        ins_invoke("invoke-virtual", ["p0"], "Landroid/app/Activity;", "getIntent", "()Landroid/content/Intent;"),
        ins_move_result("v0"),
        ins_const_string("v1", "user_id"),
        ins_const_string("v2", "-1"),
        ins_get_extra("v0", "v1", "getIntExtra", "(Ljava/lang/String;I)I"),
        ins_move_result("v3"),
        ins_const_string("v1", "token"),
        ins_get_extra("v0", "v1", "getStringExtra", STRING_DESC),
        ins_move_result("v4"),
        ins_const_string("v5", "https://example.com"),
        ins_get_extra("v0", "v6", "getParcelableExtra", "(Ljava/lang/String;)Landroid/os/Parcelable;"),
    ])


def test_invoke_refs_parse_registers_and_target():
    refs = get_invoke_refs(_on_create())
    getter = next(r for r in refs if r.target_name == "getIntExtra")
    assert getter.target_class == "Landroid/content/Intent;"
    assert getter.arg_regs == [0, 1]
    assert refs[0].arg_regs == [-1]


def test_harvest_method_tracks_latest_key_per_register():
    literals, extras = harvest_method(_on_create())
    assert extras == {"user_id": ExtraType.INT, "token": ExtraType.STRING}
    assert {"user_id", "token", "-1", "https://example.com"} <= literals


def test_bundle_getters_are_harvested():
    method = FakeMethod("Lcom/test/MainActivity;", "handle", "(Landroid/os/Bundle;)V", [
        ins_const_string("v0", "names"),
        ins_invoke("invoke-virtual", ["p1", "v0"], "Landroid/os/Bundle;", "getStringArrayList", "(Ljava/lang/String;)Ljava/util/ArrayList;"),
    ])
    _, extras = harvest_method(method)
    assert extras == {"names": ExtraType.STRING_LIST}


def test_harvest_component_enriches_only_its_class():
    comp = ComponentDescription(".MainActivity", ComponentKind.ACTIVITY)
    foreign = FakeMethod("Lcom/test/Other;", "run", "()V", [
        ins_const_string("v0", "elsewhere"),
        ins_get_extra("v1", "v0", "getLongExtra", "(Ljava/lang/String;J)J"),
    ])
    external = FakeExternalMethod("Lcom/test/MainActivity;", "native", "()V")
    analysis = FakeAnalysis([_on_create(), foreign, external])

    inspected = harvest_component(analysis, comp, "com.test")
    assert inspected == 2
    assert dict(comp.extras) == {"user_id": ExtraType.INT, "token": ExtraType.STRING}
    # keys are not reused as values
    assert comp.string_constants == {"-1", "https://example.com"}


def test_harvest_all_counts_methods():
    comps = [
        ComponentDescription(".MainActivity", ComponentKind.ACTIVITY),
        ComponentDescription("com.test.Other", ComponentKind.SERVICE),
    ]
    analysis = FakeAnalysis([_on_create(), FakeMethod("Lcom/test/Other;", "run", "()V", [])])
    assert harvest_all(analysis, comps, "com.test") == 2
    assert not comps[1].has_extras()
