import logging
import time
from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from .DispatchProblem import DispatchProblem, DispatchSolution, PlanEntry
from .errors import InfeasibilityError, NO_FEASIBLE_PLAN

logger = logging.getLogger(__name__)

UNREACHABLE = np.inf
NO_CHOICE = -1


@dataclass(frozen=True)
class DispatchTables:
    """
    Staged dynamic programming tables of a dispatch problem. Both arrays have shape (num_generators, load + 1) and are read-only.
    :var cost: cost[i, j] is the minimum cost of supplying exactly j units with generators 0..i, or UNREACHABLE.
    :var choice: choice[i, j] is the output of generator i that achieves cost[i, j], or NO_CHOICE. Reachability is read from this table only,
    since the cost of a reachable entry may overflow to inf as well.
    """
    cost: NDArray[np.float64]
    choice: NDArray[np.int64]

    def is_reachable(self, gen_ind: int, load: int) -> bool:
        return bool(self.choice[gen_ind, load] != NO_CHOICE)


def build_dispatch_tables(problem: DispatchProblem) -> DispatchTables:
    """ Fills cost and choice tables stage by stage. At each stage, every cumulative load j is combined with every candidate output p <= j of the
    current generator. Candidates are scanned in ascending order and only a strictly smaller total replaces the current one, so ties keep the lowest p.
    Time O(N * L^2), memory O(N * L). """
    start = time.perf_counter()
    num_gens, load = problem.num_generators, problem.load
    cost = np.full((num_gens, load + 1), UNREACHABLE)
    choice = np.full((num_gens, load + 1), NO_CHOICE, dtype=np.int64)

    first = problem.generators[0]
    for power in problem.get_candidate_outputs(0):
        cost[0, power] = first.generation_cost(power)
        choice[0, power] = power

    for gen_ind in range(1, num_gens):
        gen = problem.generators[gen_ind]
        candidates = problem.get_candidate_outputs(gen_ind)
        powers = np.array(candidates, dtype=np.int64)
        unit_costs = np.array([gen.generation_cost(power) for power in candidates], dtype=np.float64)
        for total in range(load + 1):
            num_candidates = np.searchsorted(powers, total, side="right")
            if num_candidates == 0:
                continue
            prev_loads = total - powers[:num_candidates]
            reachable = np.flatnonzero(choice[gen_ind - 1, prev_loads] != NO_CHOICE)
            if reachable.size == 0:
                continue
            with np.errstate(invalid="ignore", over="ignore"):
                totals = cost[gen_ind - 1, prev_loads[reachable]] + unit_costs[reachable]
            # NaN totals (inf - inf) lose to any comparable total
            best = 0 if np.all(np.isnan(totals)) else np.nanargmin(totals)
            cost[gen_ind, total] = totals[best]
            choice[gen_ind, total] = powers[reachable[best]]

    cost.setflags(write=False)
    choice.setflags(write=False)
    logger.debug("Built dispatch tables of shape %s in %.4f s", cost.shape, time.perf_counter() - start)
    return DispatchTables(cost, choice)


def backtrack_plan(problem: DispatchProblem, tables: DispatchTables) -> DispatchSolution:
    """ Walks the choice table from the last generator to the first and returns the plan in generator order.
    Raises InfeasibilityError if the full load is unreachable. """
    last = problem.num_generators - 1
    if not tables.is_reachable(last, problem.load):
        logger.warning("No feasible generation plan for load %d with %d generators", problem.load, problem.num_generators)
        raise InfeasibilityError(NO_FEASIBLE_PLAN, {"load": problem.load})

    entries = []
    remaining = problem.load
    for gen_ind in range(last, -1, -1):
        power = int(tables.choice[gen_ind, remaining])
        entries.append(PlanEntry(gen_ind + 1, power, problem.generators[gen_ind].generation_cost(power)))
        remaining -= power
    entries.reverse()
    assert remaining == 0, f"Backtracked outputs do not add up to load, {remaining} left"
    return DispatchSolution(tuple(entries), float(tables.cost[last, problem.load]))
