from contextlib import redirect_stdout
from io import StringIO
from numbers import Integral
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from .DispatchProblem import DispatchSolution


def my_format(value: Any, digits: int = 6) -> str:
    """ Compact formatting of numbers and (nested) sequences of numbers. """
    if isinstance(value, (list, tuple, np.ndarray)):
        return "[" + ", ".join(my_format(val, digits) for val in value) + "]"
    if isinstance(value, Integral):
        return str(value)
    return f"{value:.{digits}g}"


def format_output(output: float) -> str:
    """ Whole outputs are printed without decimals. """
    return str(int(output)) if float(output).is_integer() else f"{output:g}"


def format_plan_table(solution: "DispatchSolution", decimals: int = 2) -> str:
    """ Renders generation plan as a text table followed by the total cost. Costs are rounded for display only. """
    headers = ("Generator", "Output (MW)", "Cost")
    rows = [(str(entry.generator), format_output(entry.output), f"{entry.cost:.{decimals}f}") for entry in solution.entries]
    widths = [max(len(row[col]) for row in [headers] + rows) for col in range(len(headers))]

    buf = StringIO()
    with redirect_stdout(buf):
        print(" | ".join(header.ljust(width) for header, width in zip(headers, widths)))
        print("-+-".join("-" * width for width in widths))
        for row in rows:
            print(" | ".join(cell.rjust(width) for cell, width in zip(row, widths)))
        print(f"Total cost: {solution.total_cost:.{decimals}f}")
    return buf.getvalue()
