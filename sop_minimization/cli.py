"""Command-line interface for two-level SOP minimization."""

import argparse
import logging
import sys

from .errors import DeadlineExceeded, MinimizationError
from .export import (
    to_boolean_expression,
    to_c_code,
    to_cube_list,
    to_equations,
    to_sop,
    to_verilog,
)
from .solver import MinimizerOptions, SOPMinimizer
from .truth_tables import BooleanFunction, print_truth_table

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_INPUT_ERROR = 1
EXIT_DEADLINE = 2


def create_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sop-minimize",
        description="Minimize a completely specified Boolean function to a sum of products",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  sop-minimize --on 00 11 --off 01 10        XNOR of two variables
  sop-minimize --on 111 --implicit-off       Single ON point, rest OFF
  sop-minimize --truth-table 0111            OR of two variables
  sop-minimize --input f.pla --exact         Cube list file, MaxSAT refinement
  sop-minimize --truth-table 0110 -f verilog Output as Verilog module
        """,
    )

    source = parser.add_argument_group("function")
    source.add_argument("--on", nargs="*", default=[], metavar="CUBE",
                        help="ON-set minterms or cubes over {0,1,-}")
    source.add_argument("--off", nargs="*", default=[], metavar="CUBE",
                        help="OFF-set minterms or cubes over {0,1,-}")
    source.add_argument("--truth-table", metavar="BITS",
                        help="Output column, character i for minterm i")
    source.add_argument("--input", "-i", metavar="FILE",
                        help="Cube list file with lines '<cube> <0|1>' ('-' for stdin)")
    source.add_argument("--implicit-off", action="store_true",
                        help="Treat points in neither set as OFF-set")

    parser.add_argument("--exact", action="store_true",
                        help="Also run MaxSAT selection over a prime pool")
    parser.add_argument("--deadline", type=float, metavar="SECONDS",
                        help="Abort the cover loop after this many seconds")
    parser.add_argument("--no-redundancy", action="store_true",
                        help="Skip redundancy elimination")
    parser.add_argument("--order", metavar="PERM",
                        help="Expansion variable order, e.g. 2,0,1")
    parser.add_argument("--format", "-f",
                        choices=["text", "sop", "cubes", "equations", "expr", "verilog", "c"],
                        default="text",
                        help="Output format (default: text)")
    parser.add_argument("--show-truth-table", action="store_true",
                        help="Print the function's truth table before minimizing")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose output")
    return parser


def load_function(args) -> BooleanFunction:
    """Build the function described by the parsed arguments."""
    from_file_or_table = args.truth_table is not None or args.input is not None
    given = [args.truth_table is not None, args.input is not None, bool(args.on or args.off)]
    if sum(given) > 1:
        raise MinimizationError(
            "give exactly one function source: --on/--off, --truth-table or --input"
        )
    if args.implicit_off and from_file_or_table:
        raise MinimizationError("--implicit-off only applies to --on/--off")

    if args.truth_table is not None:
        return BooleanFunction.from_truth_table(args.truth_table)

    if args.input is not None:
        if args.input == "-":
            return BooleanFunction.from_pla_lines(sys.stdin, implicit_offset=True)
        with open(args.input, "r", encoding="utf-8") as fh:
            return BooleanFunction.from_pla_lines(fh, implicit_offset=True)

    patterns = args.on + args.off
    if not patterns:
        raise MinimizationError("no function given: use --on/--off, --truth-table or --input")
    n_vars = len(patterns[0])
    if any('-' in p for p in patterns):
        return BooleanFunction.from_cubes(n_vars, args.on, args.off, args.implicit_off)
    return BooleanFunction.from_minterms(n_vars, args.on, args.off, args.implicit_off)


def parse_order(text: str) -> list[int]:
    try:
        return [int(part) for part in text.split(",") if part.strip()]
    except ValueError:
        raise MinimizationError(f"invalid variable order {text!r}") from None


def format_result(result, function: BooleanFunction, fmt: str) -> str:
    if fmt == "sop":
        return to_sop(result)
    if fmt == "cubes":
        return to_cube_list(result, function.n_vars)
    if fmt == "equations":
        return to_equations(result, function.var_names)
    if fmt == "expr":
        return to_boolean_expression(result, function.var_names)
    if fmt == "verilog":
        return to_verilog(result, function.var_names)
    if fmt == "c":
        return to_c_code(result, function.var_names)
    raise ValueError(f"unknown format {fmt!r}")


def main(argv=None):
    parser = create_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(asctime)s - %(levelname)s - %(message)s",
    )

    try:
        function = load_function(args)
        options = MinimizerOptions(
            variable_order=parse_order(args.order) if args.order else None,
            eliminate_redundancy=not args.no_redundancy,
            deadline=args.deadline,
            exact=args.exact,
        )
        solver = SOPMinimizer(function, options)
    except (MinimizationError, ValueError, OSError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INPUT_ERROR

    if args.show_truth_table and args.format == "text":
        print_truth_table(function)

    try:
        result = solver.solve()
    except DeadlineExceeded as e:
        print(f"Warning: {e}; the cover below is INCOMPLETE", file=sys.stderr)
        print(to_sop(e.result))
        return EXIT_DEADLINE

    if args.format == "text":
        solver.print_result(result)
    else:
        print(format_result(result, function, args.format))

    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
