"""
Cover selection: assemble prime implicants until the ON-set is covered.

The selector repeatedly takes the smallest uncovered ON-set point, expands
it against the OFF-set and drops every point the new prime covers. Each
iteration removes at least its seed, so the loop ends after at most
|ON-set| iterations.
"""

import logging
import time
from dataclasses import dataclass, field
from typing import Iterable, Optional, Sequence

from .cube import Cube
from .expansion import check_order, expand_minterm
from .ternary_index import TernaryIndex

logger = logging.getLogger(__name__)


@dataclass
class CoverResult:
    """Outcome of one cover selection run."""

    cover: list[Cube] = field(default_factory=list)
    complete: bool = True
    iterations: int = 0
    uncovered_count: int = 0


class CoverSelector:
    """
    Greedy cover assembly over one Boolean function.

    The OFF-set index is shared read-only; the uncovered ON-set index is
    created by each call to select() and owned by it.
    """

    def __init__(self, n_vars: int, on_set: Iterable[int], off_index: TernaryIndex):
        if off_index.n_vars != n_vars:
            raise ValueError(
                f"OFF-set index has {off_index.n_vars} variables, expected {n_vars}"
            )
        self.n_vars = n_vars
        self.on_set = sorted(set(on_set))
        self.off_index = off_index

    def select(
        self,
        deadline: Optional[float] = None,
        order: Optional[Sequence[int]] = None,
    ) -> CoverResult:
        """
        Build a cover of the ON-set.

        Args:
            deadline: Absolute time.monotonic() value; checked between
                iterations. When passed, the partial cover is returned with
                complete=False.
            order: Variable order used by every expansion

        Returns:
            CoverResult with the primes in selection order
        """
        if order is not None:
            order = check_order(order, self.n_vars)

        uncovered = TernaryIndex(self.n_vars, self.on_set)
        result = CoverResult()

        while not uncovered.is_empty():
            if deadline is not None and time.monotonic() >= deadline:
                result.complete = False
                result.uncovered_count = len(uncovered)
                logger.warning(
                    "Deadline reached after %d iterations, %d points uncovered",
                    result.iterations, result.uncovered_count,
                )
                return result

            seed = uncovered.first()
            prime = expand_minterm(seed, self.off_index, order)
            removed = uncovered.remove_within(prime)
            result.cover.append(prime)
            result.iterations += 1

            logger.debug(
                "Iteration %d: prime %s covers %d new points, %d left",
                result.iterations, prime, len(removed), len(uncovered),
            )

        logger.info(
            "Cover selection finished: %d cubes in %d iterations",
            len(result.cover), result.iterations,
        )
        return result

