from contextlib import redirect_stdout
from dataclasses import dataclass, field
from io import StringIO
from typing import Any

from .Generator import Generator
from .utils import my_format


@dataclass(frozen=True)
class DispatchProblem:
    """ Single-period economic dispatch: supply exactly the given integer load with the given generators at minimum total cost.
    :var generators: Generators in dispatch order. Stage i of the dispatch tables corresponds to generators[i].
    :var load: Required total output in whole power units.
    :var allow_shutdown: If True, output 0 is a permitted choice for every generator, even if its minimum output is positive. """
    generators: tuple[Generator, ...]
    load: int
    allow_shutdown: bool = False

    def __post_init__(self):
        object.__setattr__(self, "generators", tuple(self.generators))

    @property
    def num_generators(self) -> int:
        return len(self.generators)

    def get_candidate_outputs(self, gen_ind: int, upper: int | None = None) -> list[int]:
        """ Returns ascending list of permitted outputs of a given generator, capped by upper (load by default). """
        upper = self.load if upper is None else upper
        return self.generators[gen_ind].integer_outputs(self.allow_shutdown, upper)

    def get_generation_cost(self, powers: tuple[float, ...] | list[float]) -> float:
        """ Returns total generation cost of given outputs, summed in generator order. """
        return sum(gen.generation_cost(power) for gen, power in zip(self.generators, powers))


@dataclass(frozen=True)
class PlanEntry:
    """ Output of one generator in a generation plan.
    :var generator: 1-based generator number.
    :var output: Output of this generator. Whole number for the exact solvers.
    :var cost: Generation cost at this output (unrounded). """
    generator: int
    output: float
    cost: float


@dataclass(frozen=True)
class DispatchSolution:
    """ Represents solution to a dispatch problem. Entries are in generator order. Solver-specific details are passed in extra at construction. """
    entries: tuple[PlanEntry, ...]
    total_cost: float
    extra: dict[str, Any] = field(default_factory=dict)

    @property
    def outputs(self) -> list[float]:
        return [entry.output for entry in self.entries]

    @property
    def total_output(self) -> float:
        return sum(self.outputs)

    def __str__(self):
        """ Prints solution. """
        buf = StringIO()
        with redirect_stdout(buf):
            print(f"Outputs        : {my_format(self.outputs)}")
            print(f"Unit costs     : {my_format([entry.cost for entry in self.entries])}")
            print(f"Optimized cost : {my_format(self.total_cost)}")
        return buf.getvalue()
