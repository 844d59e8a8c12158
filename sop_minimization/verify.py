"""
Verification module for minimization results.

Ensures a cover is sound (never touches the OFF-set), complete (covers the
whole ON-set), made of primes and, after elimination, irredundant.
"""

from .cube import Cube, minterm_to_str
from .expansion import is_prime
from .redundancy import is_redundant
from .solver import MinimizationResult
from .truth_tables import BooleanFunction, minterm_to_bits


def evaluate_sop(cover: list[Cube], minterm: int) -> bool:
    """Evaluate a sum-of-products on a specific input (OR of AND terms)."""
    return any(cube.covers(minterm) for cube in cover)


def check_soundness(function: BooleanFunction, cover: list[Cube]) -> list[str]:
    """Errors for every cube that contains an OFF-set point."""
    errors = []
    off_index = function.off_index()
    for cube in cover:
        witness = off_index.find_within(cube)
        if witness is not None:
            errors.append(
                f"Cube {cube} covers OFF-set point "
                f"{minterm_to_str(witness, function.n_vars)}"
            )
    return errors


def check_completeness(function: BooleanFunction, cover: list[Cube]) -> list[str]:
    """Errors for every ON-set point no cube covers."""
    uncovered = function.on_index()
    for cube in cover:
        uncovered.remove_within(cube)
    return [
        f"ON-set point {minterm_to_str(m, function.n_vars)} is not covered"
        for m in uncovered
    ]


def check_primality(function: BooleanFunction, cover: list[Cube]) -> list[str]:
    """Errors for every cube that could drop a literal and stay sound."""
    off_index = function.off_index()
    errors = []
    for cube in cover:
        if not off_index.contains_within(cube) and not is_prime(cube, off_index):
            errors.append(f"Cube {cube} is not a prime implicant")
    return errors


def check_irredundant(function: BooleanFunction, cover: list[Cube]) -> list[str]:
    """Errors for every cube whose removal keeps the cover complete."""
    on_index = function.on_index()
    return [
        f"Cube {cube} is redundant"
        for cube in cover
        if is_redundant(cube, cover, on_index)
    ]


def verify_cover(
    function: BooleanFunction,
    cover: list[Cube],
    require_prime: bool = True,
    require_irredundant: bool = False,
) -> tuple[bool, list[str]]:
    """
    Verify a cover against the function it was built for.

    Args:
        function: The specified function
        cover: Cubes to check
        require_prime: Also check that no cube can be generalized
        require_irredundant: Also check that no cube can be dropped

    Returns:
        Tuple of (all_correct, list of error messages)
    """
    errors = check_soundness(function, cover)
    errors += check_completeness(function, cover)
    if require_prime:
        errors += check_primality(function, cover)
    if require_irredundant:
        errors += check_irredundant(function, cover)
    return len(errors) == 0, errors


def verify_result(
    function: BooleanFunction,
    result: MinimizationResult,
    require_irredundant: bool = True,
) -> tuple[bool, list[str]]:
    """Verify a minimization result. Incomplete results always fail."""
    ok, errors = verify_cover(
        function,
        result.cover,
        require_irredundant=require_irredundant,
    )
    if not result.complete:
        errors.insert(0, "Result is marked incomplete")
        ok = False
    return ok, errors


def print_truth_table_comparison(function: BooleanFunction, result: MinimizationResult,
                                 max_vars: int = 6) -> bool:
    """Print truth table comparing expected vs actual outputs."""
    n = function.n_vars
    if n > max_vars:
        ok, _ = verify_cover(function, result.cover, require_prime=False)
        print(f"Truth table omitted ({n} variables); all correct: {ok}")
        return ok

    print("Truth Table Verification")
    print("=" * 40)
    print(f"{'Input':>{max(n, 5)}} | Expected | Actual | Match")
    print("-" * 40)

    all_match = True
    for m in range(1 << n):
        bits = "".join(str(b) for b in minterm_to_bits(m, n))
        expected = 1 if function.evaluate(m) else 0
        actual = 1 if evaluate_sop(result.cover, m) else 0
        match_str = "." if expected == actual else "X"
        if expected != actual:
            all_match = False
        print(f"{bits:>{max(n, 5)}} | {expected:>8} | {actual:>6} | {match_str}")

    print("-" * 40)
    print(f"All correct: {all_match}")
    return all_match
