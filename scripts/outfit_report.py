#!/usr/bin/env python3
"""
Print composed outfits for one or more base products.

Runs against Supabase (default) or a JSON catalog snapshot, in ranked or
sampled mode. With --shuffles N the sampled outfit is regenerated N times,
feeding each round's product ids back as exclusions, and any repeat is
flagged.

Usage:
    PYTHONPATH=src python scripts/outfit_report.py PRODUCT_ID [PRODUCT_ID ...]
    PYTHONPATH=src python scripts/outfit_report.py p-1 --catalog-json catalog.json
    PYTHONPATH=src python scripts/outfit_report.py p-1 --policy sampled --shuffles 3 --seed 7
"""

import argparse
import os
import random
import sys
import time

ROOT = os.path.join(os.path.dirname(os.path.abspath(__file__)), "..")
sys.path.insert(0, os.path.join(ROOT, "src"))

from dotenv import load_dotenv
load_dotenv(os.path.join(ROOT, ".env"))


def build_engine(args):
    from config.constants import OutfitLimits
    from outfits.catalog import InMemoryCatalog
    from services.outfit_engine import OutfitEngine, get_outfit_engine

    rng = random.Random(args.seed) if args.seed is not None else None
    if args.catalog_json:
        catalog = InMemoryCatalog.from_json(args.catalog_json)
        print(f"  Catalog:   {args.catalog_json} ({len(catalog)} products)")
        return OutfitEngine(catalog, limits=OutfitLimits(), rng=rng)

    print("  Catalog:   Supabase")
    engine = get_outfit_engine()
    if rng is not None:
        engine.rng = rng
    return engine


def print_result(result, elapsed: float) -> None:
    print(f"  {result.title}  [{result.status.value}, {elapsed * 1000:.0f} ms]")
    print(f"  {result.message}")
    for item in result.items:
        if item.product is None:
            print(f"    - {item.role.value:<10} (unfilled) {item.reason}")
            continue
        p = item.product
        price = f"{p.price:.2f}" if p.price is not None else "?"
        color = item.color_hint or item.color_hex_hint or "-"
        print(
            f"    - {item.role.value:<10} {p.name[:40]:<40} "
            f"| {item.suggested_category:<10} | {color:<10} | {price:>8} | {p.product_id}"
        )
        print(f"      {item.reason}")


def main():
    parser = argparse.ArgumentParser(description="Print composed outfits")
    parser.add_argument("product_ids", nargs="+", help="Base product ids")
    parser.add_argument("--policy", choices=["ranked", "sampled"], default="ranked")
    parser.add_argument("--gender", default=None, help="Gender override (Men/Women/Kids)")
    parser.add_argument("--category", default=None, help="Base category override")
    parser.add_argument("--vibe", default=None, help="Style vibe (e.g. office_casual)")
    parser.add_argument("--mood", default=None, help="Free-text mood keywords")
    parser.add_argument("--shuffles", type=int, default=1, help="Rounds per product (default: 1)")
    parser.add_argument("--seed", type=int, default=None, help="Seed for sampled mode")
    parser.add_argument("--catalog-json", default=None, help="JSON catalog snapshot instead of Supabase")
    args = parser.parse_args()

    from core.logging import configure_logging
    from outfits.exceptions import OutfitEngineError
    from outfits.models import ExclusionState, OutfitRequest, SelectionMode

    configure_logging(json_logs=False, log_level="WARNING")

    print("=" * 65)
    print("  OUTFIT REPORT")
    print("=" * 65)
    engine = build_engine(args)
    print(f"  Policy:    {args.policy}")
    print(f"  Vibe:      {args.vibe or '-'}")
    print("=" * 65)

    failures = 0
    for product_id in args.product_ids:
        print(f"\n{'─' * 65}")
        print(f"  BASE {product_id}")
        print(f"{'─' * 65}")

        state = ExclusionState()
        seen = set()
        for round_no in range(max(1, args.shuffles)):
            request = OutfitRequest(
                base_product_id=product_id,
                gender=args.gender,
                base_category=args.category,
                vibe=args.vibe,
                mood=args.mood,
                policy=SelectionMode(args.policy),
            )
            t0 = time.perf_counter()
            try:
                result = engine.compose(request, exclusions=state)
            except OutfitEngineError as e:
                print(f"  ERROR: {e}")
                failures += 1
                break
            elapsed = time.perf_counter() - t0

            if args.shuffles > 1:
                print(f"\n  Round {round_no + 1}")
            print_result(result, elapsed)

            repeats = seen.intersection(result.product_ids)
            if repeats:
                print(f"  !! repeated ids: {', '.join(sorted(repeats))}")
            seen.update(result.product_ids)

    print(f"\n{'=' * 65}")
    print(f"  Done: {len(args.product_ids)} products, {failures} errors")
    print(f"{'=' * 65}")
    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
