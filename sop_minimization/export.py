"""
Export minimized covers to various formats (cube lists, equations, Verilog, C).
"""

from typing import Optional

from .cube import Cube, Trit, default_var_names
from .solver import MinimizationResult


def _names_for(result: MinimizationResult, var_names: Optional[list[str]]) -> list[str]:
    if var_names is not None:
        return var_names
    n_vars = result.cover[0].n_vars if result.cover else 0
    return default_var_names(n_vars)


def to_sop(result: MinimizationResult) -> str:
    """Cube strings joined as a sum of products, e.g. "0-1 + 1-0"."""
    return result.expression


def to_cube_list(result: MinimizationResult, n_vars: Optional[int] = None) -> str:
    """
    Export the cover as a single-output cube list.

    Cube strings are written verbatim, one per line, followed by the output
    value 1, between .i/.o/.p and .e lines.
    """
    if n_vars is None:
        n_vars = result.cover[0].n_vars if result.cover else 0
    lines = [f".i {n_vars}", ".o 1", f".p {len(result.cover)}"]
    for cube in result.cover:
        lines.append(f"{cube.to_cube_str()} 1")
    lines.append(".e")
    return "\n".join(lines)


def to_equations(result: MinimizationResult, var_names: Optional[list[str]] = None) -> str:
    """
    Export a minimization result as a Boolean equation.

    Args:
        result: The minimization result
        var_names: Variable names (default A, B, C, ...)

    Returns:
        Human-readable Boolean equation with a short header
    """
    names = _names_for(result, var_names)
    terms = [cube.to_expr_str(names) for cube in result.cover]

    lines = []
    lines.append(f"Method: {result.method}")
    lines.append(f"Total gate inputs: {result.cost}")
    lines.append(f"Cubes: {len(result.cover)}")
    lines.append("")
    lines.append(f"F = {' + '.join(terms) if terms else '0'}")
    return "\n".join(lines)


def to_boolean_expression(result: MinimizationResult, var_names: Optional[list[str]] = None) -> str:
    """Operator form of the cover, e.g. "~A&B | A&C"."""
    names = _names_for(result, var_names)
    if not result.cover:
        return "0"
    return " | ".join(cube.to_boolean_expression(names) for cube in result.cover)


def cube_to_verilog(cube: Cube, var_names: list[str]) -> str:
    """Convert a cube to a Verilog expression."""
    terms = []
    for i in range(cube.n_vars):
        if cube.is_fixed(i):
            if cube.trit(i) == Trit.ONE:
                terms.append(var_names[i])
            else:
                terms.append(f"~{var_names[i]}")

    if not terms:
        return "1'b1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_verilog(result: MinimizationResult, var_names: list[str], module_name: str = "sop") -> str:
    """
    Export a minimization result to Verilog.

    Args:
        result: The minimization result
        var_names: Variable names, variable 0 being the input MSB
        module_name: Name for the Verilog module

    Returns:
        Verilog source code as string
    """
    n = len(var_names)
    lines = []
    lines.append("// Two-level SOP realisation")
    lines.append(f"// Minimized with {result.cost} gate inputs using {result.method}")
    lines.append("")
    lines.append(f"module {module_name} (")
    if n:
        lines.append(f"    input  wire [{n - 1}:0] in,")
    lines.append("    output wire f")
    lines.append(");")
    lines.append("")

    if n:
        lines.append("    // Input aliases")
        for i, name in enumerate(var_names):
            lines.append(f"    wire {name} = in[{n - 1 - i}];")
        lines.append("")

    terms = [cube_to_verilog(cube, var_names) for cube in result.cover]
    expr = " | ".join(terms) if terms else "1'b0"
    lines.append(f"    assign f = {expr};")
    lines.append("")
    lines.append("endmodule")

    return "\n".join(lines)


def cube_to_c(cube: Cube, var_names: list[str]) -> str:
    """Convert a cube to a C expression."""
    terms = []
    for i in range(cube.n_vars):
        if cube.is_fixed(i):
            if cube.trit(i) == Trit.ONE:
                terms.append(var_names[i])
            else:
                terms.append(f"n{var_names[i]}")

    if not terms:
        return "1"
    elif len(terms) == 1:
        return terms[0]
    else:
        return "(" + " & ".join(terms) + ")"


def to_c_code(result: MinimizationResult, var_names: list[str], func_name: str = "sop") -> str:
    """
    Export a minimization result as C code.

    Args:
        result: The minimization result
        var_names: Variable names, variable 0 being the input MSB
        func_name: Name for the C function

    Returns:
        C source code as string
    """
    n = len(var_names)
    lines = []
    lines.append("/*")
    lines.append(" * Two-level SOP realisation")
    lines.append(f" * Minimized with {result.cost} gate inputs using {result.method}")
    lines.append(" */")
    lines.append("")
    lines.append("#include <stdint.h>")
    lines.append("")
    lines.append(f"uint8_t {func_name}(uint64_t in) {{")
    if n:
        lines.append("    // Extract individual bits")
        for i, name in enumerate(var_names):
            lines.append(f"    uint8_t {name} = (in >> {n - 1 - i}) & 1;")
        lines.append("    uint8_t " + ", ".join(f"n{name} = !{name}" for name in var_names) + ";")
        lines.append("")
    else:
        lines.append("    (void)in;")

    terms = [cube_to_c(cube, var_names) for cube in result.cover]
    lines.append(f"    return {' | '.join(terms) if terms else '0'};")
    lines.append("}")

    return "\n".join(lines)
