"""
Redundancy elimination for finished covers.

A member is redundant when every ON-set point it covers is also covered by
another member. Members are tested newest first and removed greedily;
passes repeat until one removes nothing.
"""

import logging
from dataclasses import dataclass, field

from .cube import Cube
from .ternary_index import TernaryIndex

logger = logging.getLogger(__name__)


@dataclass
class RedundancyReport:
    """Cover after elimination plus what was taken out."""

    cover: list[Cube]
    removed: list[Cube] = field(default_factory=list)
    passes: int = 0


def coverage_counts(cover: list[Cube], on_index: TernaryIndex) -> dict[int, int]:
    """Map each ON-set point inside the cover to the number of members covering it."""
    counts: dict[int, int] = {}
    for cube in cover:
        for point in on_index.points_within(cube):
            counts[point] = counts.get(point, 0) + 1
    return counts


def is_redundant(cube: Cube, cover: list[Cube], on_index: TernaryIndex) -> bool:
    """True if the other members of `cover` still cover every ON point of `cube`."""
    others = list(cover)
    others.remove(cube)
    if any(other.contains(cube) for other in others):
        return True
    for point in on_index.points_within(cube):
        if not any(other.covers(point) for other in others):
            return False
    return True


def eliminate_redundant(
    cover: list[Cube],
    on_index: TernaryIndex,
    fixpoint: bool = True,
) -> RedundancyReport:
    """
    Remove members whose ON-set points are all covered elsewhere.

    Args:
        cover: Cover in insertion order
        on_index: Ternary index over the full ON-set (not modified)
        fixpoint: Repeat passes until nothing is removed

    Returns:
        RedundancyReport; survivors keep their relative order
    """
    counts = coverage_counts(cover, on_index)
    alive = [True] * len(cover)
    report = RedundancyReport(cover=[])

    while True:
        report.passes += 1
        removed_this_pass = 0

        for i in range(len(cover) - 1, -1, -1):
            if not alive[i]:
                continue
            points = list(on_index.points_within(cover[i]))
            if all(counts[p] >= 2 for p in points):
                for p in points:
                    counts[p] -= 1
                alive[i] = False
                report.removed.append(cover[i])
                removed_this_pass += 1
                logger.debug("Pass %d: removed redundant cube %s", report.passes, cover[i])

        if not fixpoint or removed_this_pass == 0:
            break

    report.cover = [cube for i, cube in enumerate(cover) if alive[i]]
    if report.removed:
        logger.info(
            "Removed %d redundant cubes in %d passes",
            len(report.removed), report.passes,
        )
    return report
