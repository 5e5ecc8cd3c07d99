import time

from econ_dispatch.DispatchProblem import DispatchProblem
from econ_dispatch.DispatchSolver import BruteForceSolver, ContinuousRelaxationSolver, DynamicProgrammingSolver
from econ_dispatch.Generator import Generator
from econ_dispatch.logging_config import configure_logging
from econ_dispatch.utils import format_plan_table, my_format


def get_single_generator_problem() -> DispatchProblem:
    generators = [Generator((0, 100), (2, 10, 5))]
    load = 50
    return DispatchProblem(generators, load)


def get_two_generator_problem() -> DispatchProblem:
    generators = [Generator((0, 50), (1, 5, 0)),
                  Generator((0, 50), (2, 2, 0))]
    load = 60

    # generators = [Generator((100, 600), (0.004, 10, 500)),
    #               Generator((100, 400), (0.005, 8, 300)),
    #               Generator((50, 200), (0.01, 6, 100))]
    # load = 850
    return DispatchProblem(generators, load)


def main():
    # problem = get_single_generator_problem()
    problem = get_two_generator_problem()

    solution = DynamicProgrammingSolver().solve(problem)
    print("=== Dynamic programming ===")
    print(format_plan_table(solution))

    reference = BruteForceSolver().solve(problem)
    print("=== Brute force ===")
    print(reference)

    relaxed = ContinuousRelaxationSolver().solve(problem)
    print("=== Continuous relaxation ===")
    print(relaxed)
    print(f"Marginal costs : {my_format(relaxed.extra['marginal_costs'])}")
    print(f"Lambda         : {relaxed.extra['lambda']}")


if __name__ == "__main__":
    configure_logging("DEBUG")
    t1 = time.perf_counter()
    main()
    t2 = time.perf_counter()
    print(f"Elapsed time {t2 - t1} seconds")
