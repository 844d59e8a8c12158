"""
Expansion of minterms into prime implicants.

A seed point is generalized one variable at a time: each fixed variable is
tentatively set to don't care and the candidate is checked against a
ternary index over the OFF-set. Relaxations that stay clear of the OFF-set
are kept, and later candidates build on them, so one pass over the
variables yields a prime implicant.
"""

import logging
from typing import Optional, Sequence

from .cube import Cube
from .ternary_index import TernaryIndex

logger = logging.getLogger(__name__)


def check_order(order: Sequence[int], n_vars: int) -> list[int]:
    """Validate a variable order; it must be a permutation of range(n_vars)."""
    order = list(order)
    if sorted(order) != list(range(n_vars)):
        raise ValueError(
            f"variable order {order} is not a permutation of 0..{n_vars - 1}"
        )
    return order


def rotated_orders(n_vars: int, count: Optional[int] = None) -> list[list[int]]:
    """
    The ascending variable order followed by its left rotations.

    rotated_orders(3) == [[0, 1, 2], [1, 2, 0], [2, 0, 1]]
    """
    if count is None:
        count = n_vars
    base = list(range(n_vars))
    orders = []
    for shift in range(max(1, min(count, n_vars))):
        orders.append(base[shift:] + base[:shift])
    return orders


def expand_cube(
    cube: Cube,
    off_index: TernaryIndex,
    order: Optional[Sequence[int]] = None,
) -> Cube:
    """
    Grow `cube` into a prime implicant that avoids the OFF-set.

    Args:
        cube: Starting cube; must not intersect the OFF-set
        off_index: Index over the OFF-set (TernaryIndex, or ComplementIndex
            for an implicit OFF-set)
        order: Variables to try, in order (default: ascending index)

    Returns:
        A cube containing `cube` where no fixed variable can be relaxed
        without covering an OFF-set point
    """
    n_vars = cube.n_vars
    order = list(range(n_vars)) if order is None else check_order(order, n_vars)

    if off_index.contains_within(cube):
        raise ValueError(f"cube {cube} already intersects the OFF-set")

    working = cube
    for var in order:
        if not working.is_fixed(var):
            continue
        candidate = working.relax(var)
        if not off_index.contains_within(candidate):
            working = candidate

    return working


def expand_minterm(
    seed: int,
    off_index: TernaryIndex,
    order: Optional[Sequence[int]] = None,
) -> Cube:
    """Expand a single ON-set point into a prime implicant."""
    seed_cube = Cube.from_minterm(seed, off_index.n_vars)
    prime = expand_cube(seed_cube, off_index, order)
    logger.debug("expanded %s -> %s", seed_cube, prime)
    return prime


def is_prime(cube: Cube, off_index: TernaryIndex) -> bool:
    """True if `cube` avoids the OFF-set and no literal can be dropped."""
    if off_index.contains_within(cube):
        return False
    for var in range(cube.n_vars):
        if cube.is_fixed(var) and not off_index.contains_within(cube.relax(var)):
            return False
    return True
