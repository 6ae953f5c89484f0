#!/usr/bin/env python3
from __future__ import annotations

import argparse
import sys
from typing import Dict, List, Optional

from androguard.util import set_log

from intentcore.catalog import load_catalog, merge_components
from intentcore.context import FuzzConfig, FuzzContext
from intentcore.errors import IntentCoreError
from intentcore.harvest import harvest_all
from intentcore.ir import ComponentKind, IntentPlan
from intentcore.loader import load_apk
from intentcore.logging import Logger
from intentcore.manifest import get_components
from intentcore.pools import ValuePool
from intentcore.reporting.json_report import TOOL_VERSION, build_json_report, write_json_report
from planners.extras import ExtrasPlanner
from planners.filters import FilterPlanner


def parse_args(argv: List[str]) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="intentfuzz - intent resolution and extras synthesis")
    parser.add_argument("apk", nargs="?", help="Path to APK file")
    parser.add_argument("--catalog", help="YAML/JSON component catalog exported by static analysis")
    parser.add_argument("--package", help="Package name used to qualify relative component names")
    parser.add_argument("--out", help="JSON report output path")
    parser.add_argument("--component", help="Plan only components whose name contains this")
    parser.add_argument("--seed", type=int, help="Seed of the value pool random source")
    parser.add_argument("--count", type=int, default=5, help="Elements per generated array/list")
    parser.add_argument("--bound", type=int, default=100, help="Magnitude bound of generated array values")
    parser.add_argument("--pools", help="YAML file overriding the default value pools")
    parser.add_argument("--no-harvest", action="store_true", help="Skip bytecode harvesting of strings and extras")
    parser.add_argument("--verbose", action="store_true", help="Verbose output")
    args = parser.parse_args(argv)
    if not args.apk and not args.catalog:
        parser.error("an APK path or --catalog is required")
    if args.count < 1 or args.bound < 1:
        parser.error("--count and --bound must be positive")
    return args


def main(argv: List[str]) -> int:
    args = parse_args(argv)
    logger = Logger(verbose=args.verbose)
    config = FuzzConfig(
        component_filter=args.component,
        verbose=args.verbose,
        seed=args.seed,
        count=args.count,
        bound=args.bound,
        harvest=not args.no_harvest,
    )

    logger.info(f"intentfuzz v{TOOL_VERSION}")

    apk = analysis = None
    package_name = args.package or ""
    components = []
    try:
        pool = ValuePool.from_config(args.pools, seed=args.seed)
        if args.apk:
            logger.info("loading apk...")
            apk, _, analysis = load_apk(args.apk)
            package_name = args.package or apk.get_package() or ""
            components = get_components(apk)
        if args.catalog:
            catalog_package, catalog_components = load_catalog(args.catalog)
            package_name = package_name or catalog_package or ""
            components = merge_components(components, catalog_components, package_name)
    except (OSError, IntentCoreError) as exc:
        logger.error(f"cannot load inputs error={exc}")
        return 1

    if analysis is not None and config.harvest:
        methods = harvest_all(analysis, components, package_name, logger)
        logger.info(f"harvest methods={methods}")

    ctx = FuzzContext(
        package_name=package_name,
        components=components,
        config=config,
        pool=pool,
        logger=logger,
        apk_path=args.apk,
        apk=apk,
        analysis=analysis,
    )

    planners = [
        FilterPlanner(),
        ExtrasPlanner(),
    ]

    logger.info(f"package={package_name or 'n/a'} seed={args.seed if args.seed is not None else 'random'}")
    logger.info(f"planners total={len(planners)}")

    plans: List[IntentPlan] = []
    for planner in planners:
        try:
            logger.info(f"planner start name={planner.name}")
            before = len(plans)
            plans.extend(planner.run(ctx))
            logger.info(f"planner end name={planner.name} plans={len(plans) - before}")
        except IntentCoreError as exc:
            logger.warn(f"planner failed name={planner.name} error={exc}")

    if args.out:
        report = build_json_report(
            package_name,
            ctx.selected_components(),
            plans,
            seed=args.seed,
            app_info=_app_metadata(apk, package_name),
            stats=ctx.metrics.get("planner_stats", {}),
        )
        write_json_report(args.out, report)

    counts = _component_counts(ctx.selected_components())
    stats = ctx.metrics.get("planner_stats", {})
    logger.info(
        "components "
        f"activities={counts[ComponentKind.ACTIVITY]} "
        f"services={counts[ComponentKind.SERVICE]} "
        f"receivers={counts[ComponentKind.BROADCAST_RECEIVER]} "
        f"providers={counts[ComponentKind.CONTENT_PROVIDER]}"
    )
    for name, data in stats.items():
        logger.info(f"plans name={name} planned={data['planned']} skipped={data['skipped']} total={data['total']}")
    logger.success(f"report json={args.out or 'n/a'}")

    print()
    _print_plans_table(plans)

    return 0


def _component_counts(components) -> Dict[ComponentKind, int]:
    counts = {kind: 0 for kind in ComponentKind}
    for comp in components:
        counts[comp.kind] += 1
    return counts


def _app_metadata(apk, package_name: str) -> Dict[str, object]:
    fields: Dict[str, object] = {"package_name": package_name}
    if apk is None:
        return fields
    getters = {
        "version_name": "get_androidversion_name",
        "version_code": "get_androidversion_code",
        "min_sdk": "get_min_sdk_version",
        "target_sdk": "get_target_sdk_version",
    }
    for key, getter in getters.items():
        method = getattr(apk, getter, None)
        value = method() if method else None
        if value not in (None, "", "0"):
            fields[key] = value
    return fields


def _print_plans_table(plans: List[IntentPlan]) -> None:
    if not plans:
        print("Plans: none")
        return

    headers = ["PLANNER", "TYPE", "COMPONENT", "ACTION", "EXTRAS"]
    rows = []
    for p in sorted(plans, key=lambda p: (p.component, p.planner)):
        extras = ",".join(p.extras) if p.extras is not None else "-"
        rows.append([p.planner, p.kind.value, p.component, p.action or "-", extras or "-"])

    max_widths = [8, 8, 60, 48, 48]
    widths = []
    for idx, header in enumerate(headers):
        max_len = max(len(header), max(len(r[idx]) for r in rows))
        widths.append(min(max_len, max_widths[idx]))

    print("  ".join(_clip(headers[i], widths[i]).ljust(widths[i]) for i in range(len(headers))))
    print("  ".join("-" * widths[i] for i in range(len(headers))))
    for row in rows:
        print("  ".join(_clip(row[i], widths[i]).ljust(widths[i]) for i in range(len(headers))))


def _clip(value: str, width: int) -> str:
    if len(value) <= width:
        return value
    if width <= 3:
        return value[:width]
    return value[: width - 3] + "..."


def run() -> int:
    set_log("CRITICAL")
    return main(sys.argv[1:])


if __name__ == "__main__":
    raise SystemExit(run())
