"""
Ternary index: a binary trie over minterms queried with ternary cubes.

Each node at depth d branches on variable d (children 0 and 1); a node at
depth n marks a stored point. A cube query follows one child for a fixed
variable and both children for a don't-care, so the question "does any
stored point lie inside this cube?" costs roughly O(n) for sparse sets
instead of a scan over the whole set.

Nodes live in an arena of parallel lists indexed by integer handles. Every
linked node has a non-zero subtree count; branches emptied by removal are
unlinked and their handles reused.
"""

from typing import Iterable, Iterator, Optional

from .cube import Cube, minterm_to_str

NO_NODE = -1
ROOT = 0


class TernaryIndex:
    """
    Point set over n_vars variables with cube containment queries.

    Points are minterm integers, variable 0 being the most significant bit.
    Iteration and every query that returns points are in ascending order.
    """

    def __init__(self, n_vars: int, points: Iterable[int] = ()):
        if n_vars < 0:
            raise ValueError(f"n_vars must be non-negative, got {n_vars}")
        self.n_vars = n_vars
        self._zero: list[int] = [NO_NODE]
        self._one: list[int] = [NO_NODE]
        self._count: list[int] = [0]
        self._free: list[int] = []

        for point in points:
            self.insert(point)

    # ------------------------------------------------------------------
    # Arena management
    # ------------------------------------------------------------------

    def _new_node(self) -> int:
        if self._free:
            return self._free.pop()
        self._zero.append(NO_NODE)
        self._one.append(NO_NODE)
        self._count.append(0)
        return len(self._count) - 1

    def _release_path(self, node: int, depth: int, minterm: int):
        """Free `node` and the single chain below it that leads to `minterm`."""
        while node != NO_NODE:
            if depth < self.n_vars:
                bit = (minterm >> (self.n_vars - 1 - depth)) & 1
                child = self._one[node] if bit else self._zero[node]
            else:
                child = NO_NODE
            self._zero[node] = NO_NODE
            self._one[node] = NO_NODE
            self._count[node] = 0
            self._free.append(node)
            node = child
            depth += 1

    @property
    def node_count(self) -> int:
        """Number of live nodes, root included."""
        return len(self._count) - len(self._free)

    # ------------------------------------------------------------------
    # Point operations
    # ------------------------------------------------------------------

    def _check_minterm(self, minterm: int):
        if minterm < 0 or minterm >> self.n_vars:
            raise ValueError(
                f"minterm {minterm} out of range for {self.n_vars} variables"
            )

    def _check_cube(self, cube: Cube):
        if cube.n_vars != self.n_vars:
            raise ValueError(
                f"cube {cube} has {cube.n_vars} variables, index has {self.n_vars}"
            )

    def insert(self, minterm: int) -> bool:
        """Store a point. Returns False if it was already present."""
        self._check_minterm(minterm)
        if minterm in self:
            return False

        n = self.n_vars
        node = ROOT
        self._count[node] += 1
        for depth in range(n):
            children = self._one if (minterm >> (n - 1 - depth)) & 1 else self._zero
            child = children[node]
            if child == NO_NODE:
                child = self._new_node()
                children[node] = child
            self._count[child] += 1
            node = child
        return True

    def remove(self, minterm: int) -> bool:
        """Remove a point. Returns False if it was not present."""
        self._check_minterm(minterm)
        if minterm not in self:
            return False

        n = self.n_vars
        node = ROOT
        self._count[node] -= 1
        for depth in range(n):
            children = self._one if (minterm >> (n - 1 - depth)) & 1 else self._zero
            child = children[node]
            self._count[child] -= 1
            if self._count[child] == 0:
                children[node] = NO_NODE
                self._release_path(child, depth + 1, minterm)
                break
            node = child
        return True

    def __contains__(self, minterm: int) -> bool:
        if minterm < 0 or minterm >> self.n_vars:
            return False
        if self._count[ROOT] == 0:
            return False
        n = self.n_vars
        node = ROOT
        for depth in range(n):
            node = self._one[node] if (minterm >> (n - 1 - depth)) & 1 else self._zero[node]
            if node == NO_NODE:
                return False
        return True

    def contains(self, minterm: int) -> bool:
        return minterm in self

    def __len__(self) -> int:
        return self._count[ROOT]

    def is_empty(self) -> bool:
        return self._count[ROOT] == 0

    def __iter__(self) -> Iterator[int]:
        if self._count[ROOT]:
            yield from self._iter_from(ROOT, 0, 0)

    def first(self) -> Optional[int]:
        """The lexicographically smallest stored point, or None if empty."""
        if self._count[ROOT] == 0:
            return None
        return self._first_from(ROOT, 0, 0)

    # ------------------------------------------------------------------
    # Subtree walks
    # ------------------------------------------------------------------

    def _first_from(self, node: int, depth: int, prefix: int) -> int:
        n = self.n_vars
        while depth < n:
            bit = 1 << (n - 1 - depth)
            zero = self._zero[node]
            if zero != NO_NODE:
                node = zero
            else:
                node = self._one[node]
                prefix |= bit
            depth += 1
        return prefix

    def _iter_from(self, node: int, depth: int, prefix: int) -> Iterator[int]:
        n = self.n_vars
        stack = [(node, depth, prefix)]
        while stack:
            node, depth, prefix = stack.pop()
            if depth == n:
                yield prefix
                continue
            bit = 1 << (n - 1 - depth)
            one = self._one[node]
            zero = self._zero[node]
            # Push 1 before 0 so the 0 branch is visited first
            if one != NO_NODE:
                stack.append((one, depth + 1, prefix | bit))
            if zero != NO_NODE:
                stack.append((zero, depth + 1, prefix))

    def _matching_subtrees(self, cube: Cube) -> Iterator[tuple[int, int, int]]:
        """
        Yield (node, depth, prefix) for each maximal subtree lying inside `cube`.

        A subtree qualifies once every remaining position of the cube is a
        don't-care; below that point every stored point matches. Subtrees are
        produced in ascending order of the points they hold.
        """
        self._check_cube(cube)
        if self._count[ROOT] == 0:
            return

        n = self.n_vars
        mask = cube.mask
        value = cube.value
        stack = [(ROOT, 0, 0)]
        while stack:
            node, depth, prefix = stack.pop()
            if mask & ((1 << (n - depth)) - 1) == 0:
                yield node, depth, prefix
                continue

            bit = 1 << (n - 1 - depth)
            if mask & bit:
                if value & bit:
                    child = self._one[node]
                    if child != NO_NODE:
                        stack.append((child, depth + 1, prefix | bit))
                else:
                    child = self._zero[node]
                    if child != NO_NODE:
                        stack.append((child, depth + 1, prefix))
            else:
                one = self._one[node]
                zero = self._zero[node]
                if one != NO_NODE:
                    stack.append((one, depth + 1, prefix | bit))
                if zero != NO_NODE:
                    stack.append((zero, depth + 1, prefix))

    # ------------------------------------------------------------------
    # Cube queries
    # ------------------------------------------------------------------

    def contains_within(self, cube: Cube) -> bool:
        """True if any stored point lies inside `cube`."""
        for _ in self._matching_subtrees(cube):
            return True
        return False

    def find_within(self, cube: Cube) -> Optional[int]:
        """The smallest stored point inside `cube`, or None."""
        for node, depth, prefix in self._matching_subtrees(cube):
            return self._first_from(node, depth, prefix)
        return None

    def points_within(self, cube: Cube) -> Iterator[int]:
        """Yield the stored points inside `cube` in ascending order."""
        for node, depth, prefix in self._matching_subtrees(cube):
            yield from self._iter_from(node, depth, prefix)

    def count_within(self, cube: Cube) -> int:
        """Number of stored points inside `cube`."""
        return sum(self._count[node] for node, _, _ in self._matching_subtrees(cube))

    def remove_within(self, cube: Cube) -> list[int]:
        """Remove every stored point inside `cube`; return them ascending."""
        removed = list(self.points_within(cube))
        for point in removed:
            self.remove(point)
        return removed

    def __repr__(self):
        shown = [minterm_to_str(p, self.n_vars) for _, p in zip(range(4), self)]
        more = ", ..." if len(self) > 4 else ""
        return f"TernaryIndex(n_vars={self.n_vars}, points=[{', '.join(shown)}{more}])"


class ComplementIndex:
    """
    Read-only view of every point NOT stored in a TernaryIndex.

    Used for an implicit OFF-set: nothing is materialized, and a cube holds
    a complement point exactly when the underlying index stores fewer points
    inside it than the cube covers.
    """

    def __init__(self, index: TernaryIndex):
        self.index = index
        self.n_vars = index.n_vars

    def __contains__(self, minterm: int) -> bool:
        if minterm < 0 or minterm >> self.n_vars:
            return False
        return minterm not in self.index

    def __len__(self) -> int:
        return (1 << self.n_vars) - len(self.index)

    def is_empty(self) -> bool:
        return len(self) == 0

    def __iter__(self) -> Iterator[int]:
        stored = iter(self.index)
        nxt = next(stored, None)
        for m in range(1 << self.n_vars):
            if m == nxt:
                nxt = next(stored, None)
            else:
                yield m

    def contains_within(self, cube: Cube) -> bool:
        """True if some point inside `cube` is missing from the index."""
        return self.index.count_within(cube) < cube.covered_count

    def find_within(self, cube: Cube) -> Optional[int]:
        """The smallest point inside `cube` missing from the index, or None."""
        if not self.contains_within(cube):
            return None
        # At most count_within(cube) + 1 steps before a gap shows up
        for m in cube.minterms():
            if m not in self.index:
                return m
        return None

    def __repr__(self):
        return f"ComplementIndex(n_vars={self.n_vars}, stored={len(self.index)})"
