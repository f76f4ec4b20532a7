from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Iterable

from . import config
from .taxonomy import FLAGGED_QUADRANT_ITEM, QUADRANTS, SECTIONS, all_items
from .types import Item

log = logging.getLogger(__name__)


def _blank_section() -> dict[str, object]:
    return {
        "items": 0,
        "scoring": 0,
        "excluded": [],
        "quadrants": {q: 0 for q in QUADRANTS},
        "unassigned": 0,
    }


def audit_items(items: Iterable[Item]) -> dict[str, object]:
    coverage: dict[str, dict[str, object]] = {tag: _blank_section() for tag in SECTIONS}
    totals = {"items": 0, "scoring": 0, "excluded": 0, **{q: 0 for q in QUADRANTS}}
    seen: set[int] = set()
    warnings: list[str] = []

    for item in items:
        if item.id in seen:
            warnings.append(f"item {item.id} listed more than once")
            continue
        seen.add(item.id)
        data = coverage.setdefault(item.section, _blank_section())
        data["items"] += 1  # type: ignore[operator]
        totals["items"] += 1
        if item.excluded_from_section_score:
            data["excluded"].append(item.id)  # type: ignore[union-attr]
            totals["excluded"] += 1
        else:
            data["scoring"] += 1  # type: ignore[operator]
            totals["scoring"] += 1
        if item.quadrant:
            data["quadrants"][item.quadrant] += 1  # type: ignore[index]
            totals[item.quadrant] += 1
        else:
            data["unassigned"] += 1  # type: ignore[operator]

    missing = sorted(set(range(1, config.ITEM_COUNT + 1)) - seen)
    if missing:
        warnings.append(f"item ids missing from the table: {', '.join(str(i) for i in missing)}")

    for tag in coverage:
        if tag not in SECTIONS:
            warnings.append(f"unknown section {tag}")

    return {
        "coverage": coverage,
        "warnings": warnings,
        "totals": totals,
        "item_86_registration": bool(config.ITEM_86_REGISTRATION),
        "flagged_item": FLAGGED_QUADRANT_ITEM,
    }


def _format_row(tag: str, data: dict[str, object]) -> str:
    quads = data["quadrants"]  # type: ignore[assignment]
    parts = [f"{tag:<27}", f"items:{data['items']:3d}", f"scoring:{data['scoring']:3d}"]
    for q in QUADRANTS:
        parts.append(f"{q}:{quads.get(q, 0):2d}")  # type: ignore[union-attr]
    return "  ".join(parts)


def print_report(summary: dict[str, object]) -> None:
    coverage: dict[str, dict[str, object]] = summary["coverage"]  # type: ignore[assignment]
    print("=== Item Taxonomy ===")
    for tag in SECTIONS:
        data = coverage[tag]
        print("  " + _format_row(tag, data))
        if data["excluded"]:
            print(f"    excluded from section score: {data['excluded']}")
    print(
        f"\nItem {summary['flagged_item']} in registrationIncreased: "
        f"{'yes' if summary['item_86_registration'] else 'no'}"
    )

    warnings: list[str] = summary["warnings"]  # type: ignore[assignment]
    if warnings:
        print("\nWarnings:")
        for msg in warnings:
            print(f" - {msg}")
    else:
        print("\nNo warnings.")

    print("\nTotals:", summary["totals"])


def write_summary(summary: dict[str, object], path: Path = Path("/tmp/taxonomy_audit.json")) -> str:
    text = json.dumps(summary, indent=2, sort_keys=True)
    path.write_text(text + "\n", encoding="utf-8")
    return text


def main(argv: list[str] | None = None) -> int:
    import argparse

    ap = argparse.ArgumentParser(description="Audit the item taxonomy table.")
    ap.add_argument("--out", type=Path, default=Path("/tmp/taxonomy_audit.json"))
    a = ap.parse_args(argv)

    logging.basicConfig(level=config.LOG_LEVEL, format="[%(levelname)s] %(message)s")
    summary = audit_items(all_items())
    print_report(summary)
    write_summary(summary, path=a.out)
    log.info("taxonomy audit written to %s", a.out)
    return 2 if summary["warnings"] else 0


if __name__ == "__main__":
    raise SystemExit(main())
