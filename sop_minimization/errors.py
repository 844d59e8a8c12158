"""Exceptions raised while validating input and running a minimization."""

from typing import Optional


class MinimizationError(Exception):
    """Base class for every error reported by the minimizer."""


class MalformedInput(MinimizationError):
    """A minterm or cube string has the wrong length or a bad character."""

    def __init__(self, minterm: Optional[str], reason: str):
        self.minterm = minterm
        self.reason = reason
        if minterm is None:
            super().__init__(reason)
        else:
            super().__init__(f"{minterm!r}: {reason}")


class InconsistentSpecification(MinimizationError):
    """A minterm appears in both the ON-set and the OFF-set."""

    def __init__(self, minterm: str):
        self.minterm = minterm
        super().__init__(f"{minterm!r} is in both the ON-set and the OFF-set")


class IncompleteSpecification(MinimizationError):
    """A point is in neither set and the OFF-set was not declared implicit."""

    def __init__(self, minterm: str, missing: int = 1):
        self.minterm = minterm
        self.missing = missing
        super().__init__(
            f"{minterm!r} is in neither the ON-set nor the OFF-set "
            f"({missing} unspecified point{'s' if missing != 1 else ''}); "
            f"declare implicit_offset to treat them as OFF"
        )


class DeadlineExceeded(MinimizationError):
    """
    The cover loop was aborted before every ON-set point was covered.

    `result` holds the partial cover, marked incomplete. It is not a valid
    minimized result.
    """

    def __init__(self, result, iterations: int):
        self.result = result
        self.iterations = iterations
        super().__init__(
            f"deadline exceeded after {iterations} iteration"
            f"{'s' if iterations != 1 else ''}; "
            f"partial cover has {len(result.cover)} cube{'s' if len(result.cover) != 1 else ''}"
        )
