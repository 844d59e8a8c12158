#!/usr/bin/env python3
"""
Benchmark the minimizer on random completely specified functions.
Minimizes independent functions in parallel worker processes and verifies
every cover.
"""

import argparse
import multiprocessing as mp
from concurrent.futures import ProcessPoolExecutor, as_completed
import random
import sys
import time

from sop_minimization.solver import MinimizerOptions, SOPMinimizer
from sop_minimization.truth_tables import BooleanFunction
from sop_minimization.verify import verify_result


def random_truth_table(n_vars, density, seed):
    """Random output column with roughly `density` ON points."""
    rng = random.Random(seed)
    return "".join('1' if rng.random() < density else '0' for _ in range(1 << n_vars))


def run_case(args):
    """Minimize one random function. Run in separate process."""
    n_vars, density, seed, exact = args
    function = BooleanFunction.from_truth_table(random_truth_table(n_vars, density, seed))

    start = time.time()
    solver = SOPMinimizer(function, MinimizerOptions(exact=False))
    greedy = solver.solve()
    greedy_time = time.time() - start

    exact_result = None
    if exact:
        solver = SOPMinimizer(function, MinimizerOptions(exact=True))
        exact_result = solver.solve()

    ok, errors = verify_result(function, greedy)
    if exact_result is not None:
        ok_exact, errors_exact = verify_result(function, exact_result)
        ok = ok and ok_exact
        errors += errors_exact

    return {
        "seed": seed,
        "on": len(function.on_set),
        "greedy_cubes": len(greedy.cover),
        "greedy_cost": greedy.cost,
        "exact_cost": exact_result.cost if exact_result is not None else None,
        "time": greedy_time,
        "ok": ok,
        "errors": errors[:3],
    }


def main():
    parser = argparse.ArgumentParser(description="Random-function benchmark")
    parser.add_argument("--vars", type=int, default=8, help="Number of variables")
    parser.add_argument("--cases", type=int, default=32, help="Number of random functions")
    parser.add_argument("--density", type=float, default=0.5, help="Fraction of ON points")
    parser.add_argument("--exact", action="store_true", help="Also run MaxSAT refinement")
    parser.add_argument("--workers", type=int, default=mp.cpu_count())
    args = parser.parse_args()

    print("=" * 60)
    print("SOP Minimization Random Benchmark")
    print("=" * 60)
    print(f"{args.cases} functions of {args.vars} variables, density {args.density}")
    print(f"Using {args.workers} worker processes")
    print()

    configs = [(args.vars, args.density, seed, args.exact) for seed in range(args.cases)]
    results = []
    failures = 0

    start_time = time.time()
    with ProcessPoolExecutor(max_workers=args.workers) as executor:
        futures = {executor.submit(run_case, cfg): cfg for cfg in configs}

        for future in as_completed(futures):
            cfg = futures[future]
            try:
                res = future.result()
            except Exception as e:
                print(f"  seed {cfg[2]}: Error - {e}")
                failures += 1
                continue

            results.append(res)
            status = "verified" if res["ok"] else "INVALID - " + "; ".join(res["errors"])
            exact_info = f", exact {res['exact_cost']}" if res["exact_cost"] is not None else ""
            print(f"  seed {res['seed']:>3}: {res['on']:>4} ON, {res['greedy_cubes']:>3} cubes, "
                  f"cost {res['greedy_cost']}{exact_info} ({res['time']:.2f}s) {status}")
            if not res["ok"]:
                failures += 1

    elapsed = time.time() - start_time

    print()
    print("=" * 60)
    print("RESULTS")
    print("=" * 60)
    print(f"Total time: {elapsed:.1f} seconds")
    if results:
        avg_cost = sum(r["greedy_cost"] for r in results) / len(results)
        print(f"Average greedy cost: {avg_cost:.1f} gate inputs")
        if args.exact:
            gains = [r["greedy_cost"] - r["exact_cost"] for r in results]
            print(f"Average MaxSAT gain: {sum(gains) / len(gains):.1f} gate inputs")
    print(f"Failures: {failures}")

    return 1 if failures else 0


if __name__ == "__main__":
    sys.exit(main())
