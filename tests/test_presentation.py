"""Tests for display helpers: number formatting, plan table, plan bar chart."""

import dataclasses

import matplotlib.pyplot as plt
import numpy as np
import pytest

from econ_dispatch.DispatchProblem import DispatchSolution, PlanEntry
from econ_dispatch.utils import format_output, format_plan_table, my_format
from plots.dispatch_plot import plot_generation_plan


@pytest.fixture
def solution():
    return DispatchSolution((PlanEntry(1, 39, 955.5), PlanEntry(2, 21, 483.0)), 1438.5)


class TestMyFormat:
    def test_scalar(self):
        assert my_format(1438.5) == "1438.5"

    def test_integer(self):
        assert my_format(np.int64(7)) == "7"

    def test_sequence(self):
        assert my_format([1, 2.5, np.array([3.25])]) == "[1, 2.5, [3.25]]"


class TestFormatPlanTable:
    def test_rows_and_total(self, solution):
        lines = format_plan_table(solution).splitlines()
        assert lines[0].split(" | ") == ["Generator", "Output (MW)", "Cost  "]
        assert [cell.strip() for cell in lines[2].split("|")] == ["1", "39", "955.50"]
        assert [cell.strip() for cell in lines[3].split("|")] == ["2", "21", "483.00"]
        assert lines[-1] == "Total cost: 1438.50"

    def test_rounding_only_for_display(self):
        solution = DispatchSolution((PlanEntry(1, 3, 1.005),), 1.005)
        assert format_plan_table(solution, decimals=1).splitlines()[-1] == "Total cost: 1.0"
        assert solution.total_cost == 1.005

    def test_solution_is_immutable(self):
        solution = DispatchSolution((PlanEntry(1, 3, 3.0),), 3.0, {"lambda": 1.0})
        with pytest.raises(dataclasses.FrozenInstanceError):
            solution.total_cost = 0.0
        assert solution.extra == {"lambda": 1.0}

    def test_fractional_output(self):
        assert format_output(20.25) == "20.25"
        assert format_output(20.0) == "20"

    def test_solution_str(self, solution):
        text = str(solution)
        assert "Outputs        : [39, 21]" in text
        assert "Optimized cost : 1438.5" in text


class TestPlotGenerationPlan:
    def test_output_bars(self, solution):
        fig, ax = plt.subplots()
        plot_generation_plan(solution, ax)
        assert [patch.get_height() for patch in ax.patches] == [39, 21]
        assert ax.get_title() == "Total cost: 1438.50"
        plt.close(fig)

    def test_cost_bars(self, solution):
        fig, ax = plt.subplots()
        plot_generation_plan(solution, ax, show_costs=True)
        assert [patch.get_height() for patch in ax.patches] == [955.5, 483.0]
        assert ax.get_ylabel() == "Cost"
        plt.close(fig)
