"""
Cube (product term) representation for two-level Boolean minimization.

A cube over n variables is stored as a mask/value pair:
- mask: which bit positions are fixed (1 = fixed literal, 0 = don't care)
- value: the required bit values for the fixed positions

Variable 0 is the leftmost character of the string form and the most
significant bit, so for n = 3:
- Bit 2 = variable 0 (A)
- Bit 1 = variable 1 (B)
- Bit 0 = variable 2 (C)

With this layout the lexicographic order of minterm strings is the same as
the integer order of the minterms.
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator


class Trit(IntEnum):
    """Value a variable takes in a cube."""

    ZERO = 0
    ONE = 1
    DONTCARE = 2


TRIT_CHARS = {Trit.ZERO: '0', Trit.ONE: '1', Trit.DONTCARE: '-'}
CHAR_TRITS = {c: t for t, c in TRIT_CHARS.items()}


def default_var_names(n_vars: int) -> list[str]:
    """A, B, C, ... for up to 26 variables, x0, x1, ... beyond that."""
    if n_vars <= 26:
        return [chr(ord('A') + i) for i in range(n_vars)]
    return [f"x{i}" for i in range(n_vars)]


def minterm_to_str(minterm: int, n_vars: int) -> str:
    """Convert a minterm index to its n-character bit string (MSB first)."""
    return format(minterm, f"0{n_vars}b") if n_vars else ""


@dataclass(frozen=True, order=True)
class Cube:
    """
    An immutable product term over n_vars variables.

    A cube with num_literals == n_vars is a single point (minterm).
    """

    n_vars: int
    mask: int       # Which bits are fixed (1 = fixed)
    value: int      # Required values for the fixed bits

    def __post_init__(self):
        if self.n_vars < 0:
            raise ValueError(f"n_vars must be non-negative, got {self.n_vars}")
        full = (1 << self.n_vars) - 1
        if self.mask & ~full:
            raise ValueError(f"mask {self.mask:#x} exceeds {self.n_vars} variables")
        if self.value & ~self.mask:
            # Normalise so equal cubes compare and hash equal
            object.__setattr__(self, 'value', self.value & self.mask)

    @classmethod
    def from_minterm(cls, minterm: int, n_vars: int) -> "Cube":
        """The single-point cube for a minterm."""
        full = (1 << n_vars) - 1
        if minterm < 0 or minterm > full:
            raise ValueError(f"minterm {minterm} out of range for {n_vars} variables")
        return cls(n_vars=n_vars, mask=full, value=minterm)

    @classmethod
    def universe(cls, n_vars: int) -> "Cube":
        """The all-don't-care cube (constant 1)."""
        return cls(n_vars=n_vars, mask=0, value=0)

    @classmethod
    def from_string(cls, text: str) -> "Cube":
        """
        Parse a cube string over {0, 1, -}.

        Raises ValueError on any other character.
        """
        mask = 0
        value = 0
        for ch in text:
            if ch not in CHAR_TRITS:
                raise ValueError(f"invalid cube character {ch!r} in {text!r}")
            mask <<= 1
            value <<= 1
            if ch != '-':
                mask |= 1
                if ch == '1':
                    value |= 1
        return cls(n_vars=len(text), mask=mask, value=value)

    def _bit(self, index: int) -> int:
        if index < 0 or index >= self.n_vars:
            raise IndexError(f"variable index {index} out of range")
        return 1 << (self.n_vars - 1 - index)

    @property
    def num_literals(self) -> int:
        """Count the number of literals (fixed positions) in this cube."""
        return bin(self.mask).count('1')

    @property
    def covered_count(self) -> int:
        """Number of minterms inside this cube."""
        return 1 << (self.n_vars - self.num_literals)

    @property
    def is_minterm(self) -> bool:
        return self.num_literals == self.n_vars

    def trit(self, index: int) -> Trit:
        """Value of variable `index` in this cube."""
        bit = self._bit(index)
        if not self.mask & bit:
            return Trit.DONTCARE
        return Trit.ONE if self.value & bit else Trit.ZERO

    @property
    def trits(self) -> tuple[Trit, ...]:
        return tuple(self.trit(i) for i in range(self.n_vars))

    def is_fixed(self, index: int) -> bool:
        return bool(self.mask & self._bit(index))

    def relax(self, index: int) -> "Cube":
        """Return a copy with variable `index` set to don't care."""
        bit = self._bit(index)
        return Cube(n_vars=self.n_vars, mask=self.mask & ~bit, value=self.value & ~bit)

    def covers(self, minterm: int) -> bool:
        """Check if this cube covers a given minterm."""
        return (minterm & self.mask) == self.value

    def contains(self, other: "Cube") -> bool:
        """True if every minterm of `other` is inside this cube."""
        self._check_width(other)
        if self.mask & ~other.mask:
            return False
        return (other.value & self.mask) == self.value

    def intersects(self, other: "Cube") -> bool:
        """True if the two cubes share at least one minterm."""
        self._check_width(other)
        common = self.mask & other.mask
        return (self.value & common) == (other.value & common)

    def minterms(self) -> Iterator[int]:
        """Yield every minterm inside this cube in ascending order."""
        # Free bits, least significant first
        free = [1 << b for b in range(self.n_vars) if not self.mask & (1 << b)]
        for combo in range(1 << len(free)):
            m = self.value
            for k, bit in enumerate(free):
                if combo >> k & 1:
                    m |= bit
            yield m

    def to_cube_str(self) -> str:
        """String form over {0, 1, -}."""
        return "".join(TRIT_CHARS[t] for t in self.trits)

    def to_expr_str(self, var_names: list[str] = None) -> str:
        """Convert to a product term string such as A'BC."""
        if var_names is None:
            var_names = default_var_names(self.n_vars)

        literals = []
        for i, t in enumerate(self.trits):
            if t == Trit.ONE:
                literals.append(var_names[i])
            elif t == Trit.ZERO:
                literals.append(f"{var_names[i]}'")

        return "".join(literals) if literals else "1"

    def to_boolean_expression(self, var_names: list[str] = None) -> str:
        """Convert to an operator form such as ~A&B."""
        if var_names is None:
            var_names = default_var_names(self.n_vars)

        literals = []
        for i, t in enumerate(self.trits):
            if t == Trit.ONE:
                literals.append(var_names[i])
            elif t == Trit.ZERO:
                literals.append(f"~{var_names[i]}")

        return "&".join(literals) if literals else "1"

    def _check_width(self, other: "Cube"):
        if other.n_vars != self.n_vars:
            raise ValueError(
                f"cube width mismatch: {self.n_vars} vs {other.n_vars} variables"
            )

    def __str__(self):
        return self.to_cube_str()

    def __repr__(self):
        return f"Cube({self.to_cube_str()!r})"
