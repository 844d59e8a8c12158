"""
Two-level SOP minimizer built on ternary-index expansion.

This module chains the heuristic pipeline (cover selection followed by
redundancy elimination) and an optional MaxSAT refinement that picks a
minimum-cost cover from a pool of heuristic prime implicants.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional

from pysat.examples.rc2 import RC2
from pysat.formula import WCNF

from .cover import CoverSelector
from .cube import Cube
from .errors import DeadlineExceeded
from .expansion import check_order, expand_minterm, rotated_orders
from .redundancy import eliminate_redundant
from .truth_tables import BooleanFunction

logger = logging.getLogger(__name__)


@dataclass
class CostBreakdown:
    """Gate-input cost of a two-level realisation of a cover."""

    and_inputs: int      # Inputs to AND gates (multi-literal cubes only)
    or_inputs: int       # Inputs to the output OR gate (0 for a single cube)
    num_cubes: int
    num_literals: int

    @property
    def total(self) -> int:
        """Total gate inputs (AND + OR)."""
        return self.and_inputs + self.or_inputs


def compute_cost_breakdown(cover: list[Cube]) -> CostBreakdown:
    """
    Cost model (input complements are free):
    - AND gate inputs: only for cubes with 2+ literals; a single literal is
      a wire and the constant-1 cube needs no gate
    - OR gate inputs: one per cube, unless there is only one cube
    """
    and_inputs = sum(c.num_literals for c in cover if c.num_literals >= 2)
    or_inputs = len(cover) if len(cover) > 1 else 0
    return CostBreakdown(
        and_inputs=and_inputs,
        or_inputs=or_inputs,
        num_cubes=len(cover),
        num_literals=sum(c.num_literals for c in cover),
    )


def prime_weight(cube: Cube) -> int:
    """MaxSAT soft-clause weight of selecting `cube`."""
    and_cost = cube.num_literals if cube.num_literals >= 2 else 0
    return and_cost + 1


@dataclass
class MinimizerOptions:
    """Configuration for one minimization run."""

    variable_order: Optional[list[int]] = None   # Expansion order (default ascending)
    eliminate_redundancy: bool = True
    fixpoint: bool = True                         # Repeat elimination passes
    deadline: Optional[float] = None              # Seconds for the cover loop
    exact: bool = False                           # Run the MaxSAT refinement
    pool_orders: Optional[int] = None             # Rotated orders for the prime pool


@dataclass
class MinimizationResult:
    """Result of SOP minimization."""

    cover: list[Cube]
    method: str
    cost_breakdown: CostBreakdown = None
    iterations: int = 0
    removed_redundant: list[Cube] = field(default_factory=list)
    complete: bool = True
    essential: list[Cube] = field(default_factory=list)

    def __post_init__(self):
        if self.cost_breakdown is None:
            self.cost_breakdown = compute_cost_breakdown(self.cover)

    @property
    def cost(self) -> int:
        return self.cost_breakdown.total

    @property
    def cube_strings(self) -> list[str]:
        return [c.to_cube_str() for c in self.cover]

    @property
    def expression(self) -> str:
        """Sum of products as cube strings, e.g. "0-1 + 1-0"."""
        return " + ".join(self.cube_strings) if self.cover else "0"


class SOPMinimizer:
    """
    Heuristic two-level minimizer for one completely specified function.

    Uses a combination of:
    1. Ternary-index expansion with greedy cover selection for the baseline
    2. Redundancy elimination on the selected cover
    3. MaxSAT selection over a pool of expanded primes (optional)
    """

    def __init__(self, function: BooleanFunction, options: MinimizerOptions = None):
        self.function = function
        self.options = options if options is not None else MinimizerOptions()
        self._order = None
        if self.options.variable_order is not None:
            self._order = check_order(self.options.variable_order, function.n_vars)
        # Built once, shared read-only by every expansion
        self.off_index = function.off_index()
        self.prime_pool: list[Cube] = []
        self._greedy: Optional[MinimizationResult] = None

    def greedy_baseline(self) -> MinimizationResult:
        """
        Phase 1: cover selection plus redundancy elimination.

        Raises:
            DeadlineExceeded: the cover loop was stopped by the deadline; the
                exception carries the partial, incomplete result
        """
        opts = self.options
        deadline = None
        if opts.deadline is not None:
            deadline = time.monotonic() + opts.deadline

        selector = CoverSelector(self.function.n_vars, self.function.on_set, self.off_index)
        selection = selector.select(deadline=deadline, order=self._order)

        if not selection.complete:
            partial = MinimizationResult(
                cover=selection.cover,
                method="greedy",
                iterations=selection.iterations,
                complete=False,
            )
            raise DeadlineExceeded(partial, selection.iterations)

        cover = selection.cover
        removed = []
        if opts.eliminate_redundancy:
            report = eliminate_redundant(cover, self.function.on_index(), opts.fixpoint)
            cover = report.cover
            removed = report.removed

        self._greedy = MinimizationResult(
            cover=cover,
            method="greedy",
            iterations=selection.iterations,
            removed_redundant=removed,
        )
        return self._greedy

    def generate_prime_pool(self) -> list[Cube]:
        """
        Expand every ON-set point under each rotated variable order.

        The greedy cover's members come first; duplicates are dropped and
        first-seen order is kept.
        """
        n_vars = self.function.n_vars
        count = self.options.pool_orders if self.options.pool_orders is not None else n_vars

        pool: dict[Cube, None] = {}
        if self._greedy is not None:
            for cube in self._greedy.cover:
                pool[cube] = None

        for order in rotated_orders(n_vars, count):
            for seed in self.function.on_set:
                pool.setdefault(expand_minterm(seed, self.off_index, order), None)

        self.prime_pool = list(pool)
        logger.info("Prime pool: %d primes from %d orders", len(self.prime_pool), max(1, count))
        return self.prime_pool

    def maxsat_optimize(self) -> MinimizationResult:
        """
        Phase 2: minimum-cost cover over the prime pool.

        Formulates the covering problem as weighted MaxSAT where:
        - Hard clauses: every ON-set minterm must be covered
        - Soft clauses: penalize each prime by its gate-input cost
        """
        if not self.prime_pool:
            self.generate_prime_pool()

        if not self.function.on_set:
            return MinimizationResult(cover=[], method="maxsat")

        on_index = self.function.on_index()

        # Variable mapping: prime index -> SAT variable (1-indexed)
        covering: dict[int, list[int]] = {m: [] for m in self.function.on_set}
        for i, prime in enumerate(self.prime_pool):
            for m in on_index.points_within(prime):
                covering[m].append(i + 1)

        wcnf = WCNF()
        essential_vars = set()
        for m in self.function.on_set:
            if not covering[m]:
                raise RuntimeError(f"No prime in the pool covers minterm {m}")
            wcnf.append(covering[m])  # Hard: at least one must be selected
            if len(covering[m]) == 1:
                essential_vars.add(covering[m][0])

        for i, prime in enumerate(self.prime_pool):
            wcnf.append([-(i + 1)], weight=prime_weight(prime))

        with RC2(wcnf) as solver:
            model = solver.compute()
            if model is None:
                raise RuntimeError("MaxSAT solver found no solution")
            chosen = set(v for v in model if v > 0)

        selected = [p for i, p in enumerate(self.prime_pool) if i + 1 in chosen]
        essential = [p for i, p in enumerate(self.prime_pool) if i + 1 in essential_vars]

        removed = []
        if self.options.eliminate_redundancy:
            report = eliminate_redundant(selected, on_index, self.options.fixpoint)
            selected = report.cover
            removed = report.removed

        return MinimizationResult(
            cover=selected,
            method="maxsat",
            removed_redundant=removed,
            essential=essential,
        )

    def solve(self) -> MinimizationResult:
        """
        Run the complete minimization pipeline.

        Returns:
            Best result found; on equal cost the greedy result wins
        """
        results = []

        logger.info(
            "Minimizing %d-variable function: %d ON, %d OFF points",
            self.function.n_vars, len(self.function.on_set), self.function.off_count,
        )

        greedy_result = self.greedy_baseline()
        results.append(greedy_result)
        logger.info(
            "Greedy: %d cubes, cost %d gate inputs",
            len(greedy_result.cover), greedy_result.cost,
        )

        if self.options.exact:
            self.generate_prime_pool()
            maxsat_result = self.maxsat_optimize()
            results.append(maxsat_result)
            logger.info(
                "MaxSAT: %d cubes, cost %d gate inputs, %d essential primes",
                len(maxsat_result.cover), maxsat_result.cost, len(maxsat_result.essential),
            )

        best = min(results, key=lambda r: r.cost)
        logger.info("Best result: %d gate inputs (%s)", best.cost, best.method)
        return best

    def print_result(self, result: MinimizationResult):
        """Pretty-print a minimization result."""
        names = self.function.var_names
        print(f"\n{'=' * 60}")
        print(f"Minimization Result: {result.method}")
        print(f"{'=' * 60}")

        cb = result.cost_breakdown
        print("Cost breakdown:")
        print(f"  Cubes:           {cb.num_cubes} ({cb.num_literals} literals)")
        print(f"  AND gate inputs: {cb.and_inputs}")
        print(f"  OR gate inputs:  {cb.or_inputs}")
        print(f"  Total:           {cb.total} gate inputs")

        if result.removed_redundant:
            print(f"\nRedundant cubes removed ({len(result.removed_redundant)}):")
            for cube in result.removed_redundant:
                print(f"  {cube.to_cube_str()}")

        if result.essential:
            print(f"\nEssential primes ({len(result.essential)}):")
            for cube in result.essential:
                print(f"  {cube.to_cube_str():12} {cube.to_expr_str(names)}")

        print("\nCover:")
        for cube in result.cover:
            lit_info = f"({cube.num_literals} lit)" if cube.num_literals >= 2 else "(wire)"
            print(f"  {cube.to_cube_str():12} {lit_info:8} {cube.to_expr_str(names)}")

        print(f"\nF = {result.expression}")
        if not result.complete:
            print("WARNING: cover is incomplete")


def minimize(
    n_vars: int,
    on_set: Iterable[str],
    off_set: Iterable[str] = (),
    implicit_offset: bool = False,
    **options,
) -> list[str]:
    """
    Minimize a function given as minterm strings; return the cube strings.

    Extra keyword arguments are passed to MinimizerOptions.
    """
    function = BooleanFunction.from_minterms(n_vars, on_set, off_set, implicit_offset)
    return SOPMinimizer(function, MinimizerOptions(**options)).solve().cube_strings
