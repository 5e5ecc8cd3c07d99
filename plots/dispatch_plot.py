import matplotlib.pyplot as plt
from matplotlib.axes import Axes

from econ_dispatch.DispatchProblem import DispatchSolution


def plot_generation_plan(solution: DispatchSolution, ax: Axes | None = None, show_costs: bool = False) -> Axes:
    """ Bar chart of generator outputs (or unit costs if show_costs) of a given solution. """
    if ax is None:
        ax = plt.gca()
    labels = [f"G{entry.generator}" for entry in solution.entries]
    values = [entry.cost if show_costs else entry.output for entry in solution.entries]
    ax.bar(labels, values)
    ax.set_xlabel("Generator")
    ax.set_ylabel("Cost" if show_costs else "Output (MW)")
    ax.set_title(f"Total cost: {solution.total_cost:.2f}")
    return ax
