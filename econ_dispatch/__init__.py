""" Least-cost economic dispatch of generators over whole-unit power levels by dynamic programming. """

__version__ = "1.0.0"

from .Generator import Generator, generation_cost
from .errors import DispatchError, InfeasibilityError, InputError
from .DispatchProblem import DispatchProblem, DispatchSolution, PlanEntry
from .DispatchTables import DispatchTables, build_dispatch_tables, backtrack_plan
from .DispatchSolver import (
    DispatchSolver,
    DynamicProgrammingSolver,
    BruteForceSolver,
    ContinuousRelaxationSolver,
    DispatchResult,
    solve_dispatch,
)
from .validation import ValidationResult, parse_generator_fields, parse_load, validate_dispatch_inputs
