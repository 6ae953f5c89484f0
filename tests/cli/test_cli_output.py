from __future__ import annotations

import json

import pytest

import ifuzz
from intentcore.manifest import parse_manifest_xml
from tests.helpers.fakes import FakeAnalysis, FakeAPK, MANIFEST_XML

CATALOG = """
package: com.test
components:
  - name: .MainActivity
    type: activity
    extras:
      id: "Int"
      names: "String<>"
"""


def _write_catalog(tmp_path, text=CATALOG):
    path = tmp_path / "catalog.yml"
    path.write_text(text, encoding="utf-8")
    return str(path)


def _fake_apk(monkeypatch):
    def fake_load_apk(path):
        return FakeAPK(package_name="com.test", version_name="1.0"), object(), FakeAnalysis([])

    def fake_get_components(apk):
        return parse_manifest_xml(MANIFEST_XML)[1]

    monkeypatch.setattr(ifuzz, "load_apk", fake_load_apk)
    monkeypatch.setattr(ifuzz, "get_components", fake_get_components)


def test_cli_apk_and_catalog(monkeypatch, tmp_path, capsys):
    _fake_apk(monkeypatch)
    out_path = tmp_path / "report.json"
    code = ifuzz.main(["fake.apk", "--catalog", _write_catalog(tmp_path), "--seed", "3", "--out", str(out_path)])
    assert code == 0
    output = capsys.readouterr().out
    assert "components activities=1 services=1 receivers=1 providers=1" in output
    assert "plans name=filters planned=3 skipped=0 total=3" in output
    assert "plans name=extras planned=1 skipped=0 total=1" in output
    assert "PLANNER" in output

    report = json.loads(out_path.read_text(encoding="utf-8"))
    assert report["seed"] == 3
    assert report["app"] == {"package_name": "com.test", "version_name": "1.0"}
    extras_plan = next(p for p in report["plans"] if p["planner"] == "extras")
    assert set(extras_plan["extras"]) == {"id", "names"}


def test_cli_catalog_only(tmp_path, capsys):
    assert ifuzz.main(["--catalog", _write_catalog(tmp_path), "--seed", "1"]) == 0
    output = capsys.readouterr().out
    assert "package=com.test seed=1" in output
    assert "com.test.MainActivity" in output


def test_cli_same_seed_same_report(tmp_path):
    catalog = _write_catalog(tmp_path)
    reports = []
    for idx in range(2):
        out = tmp_path / f"r{idx}.json"
        ifuzz.main(["--catalog", catalog, "--seed", "5", "--out", str(out)])
        reports.append(json.loads(out.read_text(encoding="utf-8"))["plans"])
    assert reports[0] == reports[1]


def test_cli_requires_input():
    with pytest.raises(SystemExit) as err:
        ifuzz.main([])
    assert err.value.code == 2


def test_cli_bad_catalog_exits_nonzero(tmp_path, capsys):
    path = _write_catalog(tmp_path, "components: {}\n")
    assert ifuzz.main(["--catalog", path]) == 1
    assert "[-] cannot load inputs" in capsys.readouterr().out


def test_cli_broken_yaml_catalog_exits_nonzero(tmp_path, capsys):
    path = _write_catalog(tmp_path, "components: [\n  - name: a\n")
    assert ifuzz.main(["--catalog", path]) == 1
    assert "[-] cannot load inputs" in capsys.readouterr().out


def test_cli_broken_yaml_pools_exits_nonzero(tmp_path, capsys):
    pools = tmp_path / "pools.yml"
    pools.write_text("int: [1, 2\n", encoding="utf-8")
    assert ifuzz.main(["--catalog", _write_catalog(tmp_path), "--pools", str(pools)]) == 1
    assert "[-] cannot load inputs" in capsys.readouterr().out


def test_cli_verbose_output_includes_debug(tmp_path, capsys):
    ifuzz.main(["--catalog", _write_catalog(tmp_path), "--verbose"])
    assert "[DBG]" in capsys.readouterr().out


def test_cli_no_plans(tmp_path, capsys):
    path = _write_catalog(tmp_path, "components:\n  - name: a.B\n    type: service\n")
    ifuzz.main(["--catalog", path])
    assert "Plans: none" in capsys.readouterr().out
