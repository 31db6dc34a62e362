#!/usr/bin/env python3
"""
Dump this package's outputs as reference vectors for cross-checking other engines.

For each seed, records the first N outputs of value(), range_float(0, 1) and
range_int(0, INT32_MAX), each from a freshly seeded generator.

Output is computed by this package, so it is only useful for comparing against
another engine. Do not write it over tests/fixtures/reference_vectors.json:
those values come from an independent implementation and regenerating them
here would make the regression tests check the code against itself.

Usage:
    python -m scripts.dump_vectors --seeds 0 1 358118 --count 5 --out /tmp/vectors.json
"""
import argparse
import json
import sys
from pathlib import Path
from typing import Any

# Add parent to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent))

from unity_random.logic.generator import Random
from unity_random.logic.state import INT32_MAX

DEFAULT_SEEDS = [0, 1, 358118, 30029247, 719188662]


def dump_seed(seed: int, count: int) -> dict[str, Any]:
    """First `count` outputs of each reference distribution for one seed."""
    rng = Random(seed)
    values = [rng.value() for _ in range(count)]

    rng.init_state(seed)
    floats = [rng.range_float(0.0, 1.0) for _ in range(count)]

    rng.init_state(seed)
    ints = [rng.range_int(0, INT32_MAX) for _ in range(count)]

    return {"value": values, "rangeFloat": floats, "rangeInt": ints}


def build_vectors(seeds: list[int], count: int) -> dict[str, Any]:
    return {
        "count": count,
        "cases": {str(seed): dump_seed(seed, count) for seed in seeds},
    }


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Dump reference vectors as JSON")
    parser.add_argument(
        "--seeds",
        type=int,
        nargs="+",
        default=DEFAULT_SEEDS,
        help=f"Seeds to dump (default: {' '.join(map(str, DEFAULT_SEEDS))})",
    )
    parser.add_argument(
        "--count",
        type=int,
        default=5,
        help="Outputs per distribution (default: 5)",
    )
    parser.add_argument(
        "--out",
        type=str,
        default=None,
        help="Output JSON path (default: stdout)",
    )
    parser.add_argument(
        "--force",
        action="store_true",
        help="Overwrite --out if it already exists",
    )

    args = parser.parse_args(argv)

    if args.count < 1:
        parser.error("--count must be at least 1")
    if args.out and Path(args.out).exists() and not args.force:
        parser.error(f"{args.out} exists; pass --force to overwrite")

    vectors = build_vectors(args.seeds, args.count)
    text = json.dumps(vectors, indent=2)

    if args.out:
        out_path = Path(args.out)
        out_path.parent.mkdir(parents=True, exist_ok=True)
        out_path.write_text(text + "\n")
        print(f"Wrote {len(args.seeds)} seeds to {out_path}")
    else:
        print(text)

    return 0


if __name__ == "__main__":
    sys.exit(main())
