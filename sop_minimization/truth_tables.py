"""
Validated input model for completely specified Boolean functions.

A function of n variables is given as an ON-set and an OFF-set of minterm
strings (n characters over {0, 1}, variable 0 first). Every one of the 2^n
points must be in exactly one set, unless the caller declares the remaining
points implicitly OFF.

Truth tables as strings (index i is the output for minterm i):
    "0110"  ->  XOR of two variables
    "1001"  ->  XNOR of two variables
"""

import logging
from bisect import bisect_left
from dataclasses import dataclass, field
from typing import Iterable, Iterator, Optional, Union

from .cube import Cube, default_var_names, minterm_to_str
from .errors import (
    IncompleteSpecification,
    InconsistentSpecification,
    MalformedInput,
)
from .ternary_index import ComplementIndex, TernaryIndex

logger = logging.getLogger(__name__)


def _check_n_vars(n_vars) -> int:
    if isinstance(n_vars, bool) or not isinstance(n_vars, int) or n_vars < 0:
        raise MalformedInput(None, f"variable count must be a non-negative integer, got {n_vars!r}")
    return n_vars


def parse_minterm(text: str, n_vars: int) -> int:
    """Convert an n-character string over {0, 1} to its minterm index."""
    if not isinstance(text, str):
        raise MalformedInput(repr(text), "minterm must be a string")
    if len(text) != n_vars:
        raise MalformedInput(text, f"expected {n_vars} characters, got {len(text)}")
    for ch in text:
        if ch not in '01':
            raise MalformedInput(text, f"invalid character {ch!r}, expected 0 or 1")
    return int(text, 2) if text else 0


def parse_cube(text: str, n_vars: int) -> Cube:
    """Convert an n-character string over {0, 1, -} to a Cube."""
    if not isinstance(text, str):
        raise MalformedInput(repr(text), "cube must be a string")
    if len(text) != n_vars:
        raise MalformedInput(text, f"expected {n_vars} characters, got {len(text)}")
    for ch in text:
        if ch not in '01-':
            raise MalformedInput(text, f"invalid character {ch!r}, expected 0, 1 or -")
    return Cube.from_string(text)


def minterm_to_bits(minterm: int, n_vars: int) -> tuple[int, ...]:
    """Convert a minterm index to its bit tuple (variable 0 first)."""
    return tuple((minterm >> (n_vars - 1 - i)) & 1 for i in range(n_vars))


def _first_gap(points: list[int]) -> int:
    """Smallest non-negative integer missing from a sorted list of distinct points."""
    for expected, m in enumerate(points):
        if m != expected:
            return expected
    return len(points)


def bits_to_minterm(bits: Iterable[int]) -> int:
    """Convert a bit tuple (variable 0 first) to a minterm index."""
    m = 0
    for b in bits:
        m = (m << 1) | (b & 1)
    return m


@dataclass(frozen=True)
class BooleanFunction:
    """
    A completely specified Boolean function.

    Construct through the from_* class methods, which validate the input.
    ON-set and OFF-set are sorted tuples of minterm indices. With
    implicit_offset, off_set holds only the OFF points that were listed and
    every point outside the ON-set is OFF; the complement is never stored.
    The ON-set alone determines equality.
    """

    n_vars: int
    on_set: tuple[int, ...]
    off_set: tuple[int, ...] = field(default=(), compare=False)
    implicit_offset: bool = field(default=False, compare=False)
    var_names: list[str] = field(default=None, compare=False)

    def __post_init__(self):
        if self.var_names is None:
            object.__setattr__(self, 'var_names', default_var_names(self.n_vars))
        elif len(self.var_names) != self.n_vars:
            raise MalformedInput(
                None,
                f"expected {self.n_vars} variable names, got {len(self.var_names)}",
            )

    @classmethod
    def _build(
        cls,
        n_vars: int,
        on_points: set[int],
        off_points: set[int],
        implicit_offset: bool,
        var_names: Optional[list[str]],
    ) -> "BooleanFunction":
        overlap = on_points & off_points
        if overlap:
            raise InconsistentSpecification(minterm_to_str(min(overlap), n_vars))

        total = 1 << n_vars
        specified = len(on_points) + len(off_points)
        if specified == total:
            implicit_offset = False
        elif implicit_offset:
            logger.debug("Treating %d unspecified points as OFF-set", total - specified)
        else:
            missing = _first_gap(sorted(on_points | off_points))
            raise IncompleteSpecification(
                minterm_to_str(missing, n_vars), missing=total - specified
            )

        return cls(
            n_vars=n_vars,
            on_set=tuple(sorted(on_points)),
            off_set=tuple(sorted(off_points)),
            implicit_offset=implicit_offset,
            var_names=list(var_names) if var_names is not None else None,
        )

    @classmethod
    def from_minterms(
        cls,
        n_vars: int,
        on_set: Iterable[str],
        off_set: Iterable[str] = (),
        implicit_offset: bool = False,
        var_names: Optional[list[str]] = None,
    ) -> "BooleanFunction":
        """
        Build a function from ON-set and OFF-set minterm strings.

        Args:
            n_vars: Number of input variables
            on_set: Minterm strings where the function is 1
            off_set: Minterm strings where the function is 0
            implicit_offset: Treat points in neither set as OFF-set
            var_names: Optional variable names (default A, B, C, ...)

        Raises:
            MalformedInput: bad string length or character
            InconsistentSpecification: a minterm is in both sets
            IncompleteSpecification: a point is in neither set and
                implicit_offset is False
        """
        n_vars = _check_n_vars(n_vars)
        on_points = {parse_minterm(s, n_vars) for s in on_set}
        off_points = {parse_minterm(s, n_vars) for s in off_set}
        return cls._build(n_vars, on_points, off_points, implicit_offset, var_names)

    @classmethod
    def from_cubes(
        cls,
        n_vars: int,
        on_cubes: Iterable[str],
        off_cubes: Iterable[str] = (),
        implicit_offset: bool = True,
        var_names: Optional[list[str]] = None,
    ) -> "BooleanFunction":
        """
        Build a function from ON-set and OFF-set cube strings over {0, 1, -}.

        Each cube stands for every minterm inside it. Unspecified points are
        OFF by default, as in cube-list files.
        """
        n_vars = _check_n_vars(n_vars)
        on_list = [parse_cube(text, n_vars) for text in on_cubes]
        off_list = [parse_cube(text, n_vars) for text in off_cubes]

        # Checked on the cubes so overlapping input fails before any expansion
        shared = [
            on_cube.value | off_cube.value
            for on_cube in on_list
            for off_cube in off_list
            if on_cube.intersects(off_cube)
        ]
        if shared:
            raise InconsistentSpecification(minterm_to_str(min(shared), n_vars))

        on_points: set[int] = set()
        off_points: set[int] = set()
        for cube in on_list:
            on_points.update(cube.minterms())
        for cube in off_list:
            off_points.update(cube.minterms())
        return cls._build(n_vars, on_points, off_points, implicit_offset, var_names)

    @classmethod
    def from_truth_table(
        cls,
        table: str,
        var_names: Optional[list[str]] = None,
    ) -> "BooleanFunction":
        """
        Build a function from its output column.

        Character i is the output for minterm i; the length must be a power
        of two.
        """
        if not table or len(table) & (len(table) - 1):
            raise MalformedInput(table, "truth table length must be a power of two")
        for ch in table:
            if ch not in '01':
                raise MalformedInput(table, f"invalid character {ch!r}, expected 0 or 1")

        n_vars = len(table).bit_length() - 1
        on_points = {i for i, ch in enumerate(table) if ch == '1'}
        off_points = {i for i, ch in enumerate(table) if ch == '0'}
        return cls._build(n_vars, on_points, off_points, False, var_names)

    @classmethod
    def from_pla_lines(
        cls,
        lines: Iterable[str],
        implicit_offset: bool = True,
    ) -> "BooleanFunction":
        """
        Build a function from PLA-like lines of the form "<cube> <0|1>".

        Blank lines and lines starting with '#' are skipped. A ".i N"
        directive fixes the variable count and ".ilb" names the variables;
        other directives are ignored.
        """
        n_vars = None
        var_names = None
        on_cubes = []
        off_cubes = []

        for raw in lines:
            line = raw.split('#', 1)[0].strip()
            if not line:
                continue
            if line.startswith('.'):
                parts = line.split()
                if parts[0] == '.i':
                    if len(parts) != 2 or not parts[1].isdigit():
                        raise MalformedInput(raw.strip(), "expected '.i <count>'")
                    n_vars = int(parts[1])
                elif parts[0] == '.ilb':
                    var_names = parts[1:]
                continue

            parts = line.split()
            if len(parts) != 2 or parts[1] not in ('0', '1'):
                raise MalformedInput(raw.strip(), "expected '<cube> <0|1>'")
            if n_vars is None:
                n_vars = len(parts[0])
            (on_cubes if parts[1] == '1' else off_cubes).append(parts[0])

        if n_vars is None:
            raise MalformedInput(None, "no cubes and no '.i' directive in input")

        return cls.from_cubes(n_vars, on_cubes, off_cubes, implicit_offset, var_names)

    def on_index(self) -> TernaryIndex:
        """Fresh ternary index over the ON-set."""
        return TernaryIndex(self.n_vars, self.on_set)

    def off_index(self) -> Union[TernaryIndex, ComplementIndex]:
        """
        Fresh index over the OFF-set.

        An implicit OFF-set is answered from the ON-set, so its size never
        depends on 2^n.
        """
        if self.implicit_offset:
            return ComplementIndex(self.on_index())
        return TernaryIndex(self.n_vars, self.off_set)

    @property
    def off_count(self) -> int:
        """Number of OFF-set points, implicit ones included."""
        if self.implicit_offset:
            return (1 << self.n_vars) - len(self.on_set)
        return len(self.off_set)

    def off_points(self) -> Iterator[int]:
        """Every OFF-set point in ascending order, implicit ones included."""
        if self.implicit_offset:
            return iter(self.off_index())
        return iter(self.off_set)

    def evaluate(self, minterm: int) -> bool:
        """Function value at a minterm."""
        if minterm < 0 or minterm >> self.n_vars:
            raise ValueError(f"minterm {minterm} out of range for {self.n_vars} variables")
        lo = bisect_left(self.on_set, minterm)
        return lo < len(self.on_set) and self.on_set[lo] == minterm

    def on_strings(self) -> list[str]:
        return [minterm_to_str(m, self.n_vars) for m in self.on_set]

    def off_strings(self) -> list[str]:
        return [minterm_to_str(m, self.n_vars) for m in self.off_points()]

    def to_truth_table(self) -> str:
        """Output column as a string, character i for minterm i."""
        on = set(self.on_set)
        return "".join('1' if m in on else '0' for m in range(1 << self.n_vars))


def print_truth_table(function: BooleanFunction, max_vars: int = 6):
    """Print the complete truth table of a small function."""
    if function.n_vars > max_vars:
        print(f"Truth table omitted ({function.n_vars} variables > {max_vars})")
        return

    header = " ".join(function.var_names)
    print(f"{header} | F")
    print("-" * (len(header) + 4))
    on = set(function.on_set)
    for m in range(1 << function.n_vars):
        bits = " ".join(
            f"{b:>{len(name)}}"
            for b, name in zip(minterm_to_bits(m, function.n_vars), function.var_names)
        )
        print(f"{bits} | {1 if m in on else 0}")
