import logging
import math
from abc import ABC, abstractmethod
from dataclasses import dataclass
from itertools import product
from typing import Sequence

import numpy as np
from scipy import optimize

from .DispatchProblem import DispatchProblem, DispatchSolution, PlanEntry
from .DispatchTables import backtrack_plan, build_dispatch_tables
from .Generator import Generator
from .config import DispatchSettings, get_settings
from .errors import DispatchError, InfeasibilityError, NO_FEASIBLE_PLAN
from .validation import validate_dispatch_inputs

logger = logging.getLogger(__name__)


class DispatchSolver(ABC):
    """ Base class for dispatch problem solvers. """

    @abstractmethod
    def solve(self, problem: DispatchProblem) -> DispatchSolution:
        """ Solves a given dispatch problem and returns its solution. Raises InfeasibilityError if there is none. """
        pass


class DynamicProgrammingSolver(DispatchSolver):
    """ Exact solver. Builds staged cost table over whole-unit loads and backtracks the optimal plan. """

    def solve(self, problem: DispatchProblem) -> DispatchSolution:
        tables = build_dispatch_tables(problem)
        return backtrack_plan(problem, tables)


class BruteForceSolver(DispatchSolver):
    """ Enumerates all combinations of candidate outputs. Exponential in the number of generators, intended as a reference for small problems. """

    def solve(self, problem: DispatchProblem) -> DispatchSolution:
        candidates = [problem.get_candidate_outputs(gen_ind) for gen_ind in range(problem.num_generators)]
        best_powers, best_cost = None, np.inf
        for powers in product(*candidates):
            if sum(powers) != problem.load:
                continue
            cost = problem.get_generation_cost(powers)
            if best_powers is None or cost < best_cost or (math.isnan(best_cost) and not math.isnan(cost)):
                best_powers, best_cost = powers, cost

        if best_powers is None:
            raise InfeasibilityError(NO_FEASIBLE_PLAN, {"load": problem.load})
        entries = tuple(PlanEntry(i + 1, power, gen.generation_cost(power)) for i, (gen, power) in enumerate(zip(problem.generators, best_powers)))
        return DispatchSolution(entries, best_cost)


class ContinuousRelaxationSolver(DispatchSolver):
    """ Solves the problem with real-valued outputs using SLSQP. The result is not restricted to whole units, so it is a point of comparison
    for the exact solvers rather than a dispatch plan. Marginal costs of all units and the system marginal cost (lambda) are put into extra. """

    def __init__(self, tolerance: float = 1e-6):
        self.tolerance = tolerance

    def get_bounds(self, problem: DispatchProblem) -> list[tuple[float, float]]:
        return [(0 if problem.allow_shutdown else gen.min_output, gen.max_output) for gen in problem.generators]

    @staticmethod
    def get_initial_point(problem: DispatchProblem) -> list[float]:
        """ Spreads load proportionally to maximum outputs. """
        total_max = sum(gen.max_output for gen in problem.generators)
        return [gen.max_output * problem.load / total_max for gen in problem.generators]

    def get_system_marginal_cost(self, generators: Sequence[Generator], powers: Sequence[float]) -> float | None:
        """ Average marginal cost of the units that are strictly inside their bounds. None if every unit sits at a bound. """
        interior = [gen.marginal_cost(power) for gen, power in zip(generators, powers)
                    if gen.min_output + self.tolerance < power < gen.max_output - self.tolerance]
        return sum(interior) / len(interior) if interior else None

    def solve(self, problem: DispatchProblem) -> DispatchSolution:
        constraints = [{"type": "eq", "fun": lambda powers: np.sum(powers) - problem.load}]
        result = optimize.minimize(problem.get_generation_cost, self.get_initial_point(problem), method="SLSQP", bounds=self.get_bounds(problem),
                                   constraints=constraints)
        if not result.success:
            logger.warning("Continuous relaxation failed: %s", result.message)
            raise InfeasibilityError(NO_FEASIBLE_PLAN, {"load": problem.load, "message": result.message})

        powers = [float(power) for power in result.x]
        entries = tuple(PlanEntry(i + 1, power, gen.generation_cost(power)) for i, (gen, power) in enumerate(zip(problem.generators, powers)))
        extra = {
            "opt_result": result,
            "marginal_costs": [gen.marginal_cost(power) for gen, power in zip(problem.generators, powers)],
            "lambda": self.get_system_marginal_cost(problem.generators, powers),
        }
        return DispatchSolution(entries, problem.get_generation_cost(powers), extra)


@dataclass(frozen=True)
class DispatchResult:
    """ Either a solution or the error that prevented it. """
    solution: DispatchSolution | None = None
    error: DispatchError | None = None

    @property
    def ok(self) -> bool:
        return self.solution is not None

    @property
    def reason(self) -> str | None:
        """ Human-readable failure reason, None on success. """
        return self.error.reason if self.error is not None else None


def solve_dispatch(generators: Sequence[Generator], load: int, allow_shutdown: bool | None = None, settings: DispatchSettings | None = None,
                   solver: DispatchSolver | None = None) -> DispatchResult:
    """
    Validates inputs and finds the least-cost generation plan.
    :param generators: Generators in dispatch order.
    :param load: Required total output, positive integer.
    :param allow_shutdown: Whether any unit may produce 0 regardless of its minimum output. Taken from settings if None.
    :param settings: Limits to apply. Global settings if None.
    :param solver: Solver to use. DynamicProgrammingSolver by default.
    :return: Result with either the solution or the error. Input and infeasibility errors are never raised.
    """
    settings = settings or get_settings()
    if allow_shutdown is None:
        allow_shutdown = settings.allow_shutdown

    validation = validate_dispatch_inputs(generators, load, allow_shutdown, settings)
    if not validation.is_valid:
        return DispatchResult(error=validation.errors[0])

    problem = DispatchProblem(validation.generators, validation.load, allow_shutdown)
    solver = solver or DynamicProgrammingSolver()
    try:
        solution = solver.solve(problem)
    except DispatchError as err:
        return DispatchResult(error=err)
    logger.info("Dispatched load %d over %d generators at cost %s", problem.load, problem.num_generators, solution.total_cost)
    return DispatchResult(solution=solution)
