import math
from dataclasses import dataclass
from numbers import Real


def generation_cost(a: float, b: float, d: float, power: float) -> float:
    """ Quadratic generation cost 0.5 * a * p^2 + b * p + d. A unit producing nothing costs nothing, i.e. the no-load term d is dropped at p = 0. """
    if power == 0:
        return 0.0
    return 0.5 * a * power ** 2 + b * power + d


@dataclass(frozen=True)
class Generator:
    """
    Describes a generator.
    :var power_range: (min, max) values of active power output for this generator.
    :var cost_terms: (a, b, d) terms of quadratic generation cost function (0.5ap^2 + bp + d).
    """
    power_range: tuple[float, float]
    cost_terms: tuple[float, float, float]

    @property
    def min_output(self) -> float:
        return self.power_range[0]

    @property
    def max_output(self) -> float:
        return self.power_range[1]

    def is_valid(self) -> bool:
        """ True if all five numbers are finite and 0 <= min <= max. """
        values = (*self.power_range, *self.cost_terms)
        if not all(isinstance(val, Real) and not isinstance(val, bool) and math.isfinite(val) for val in values):
            return False
        return 0 <= self.min_output <= self.max_output

    def generation_cost(self, power: float) -> float:
        return generation_cost(*self.cost_terms, power)

    def marginal_cost(self, power: float) -> float:
        """ Derivative of the cost curve at a given power, i.e. ap + b. """
        return self.cost_terms[0] * power + self.cost_terms[1]

    def integer_outputs(self, allow_shutdown: bool = False, upper: int | None = None) -> list[int]:
        """ Whole-unit output levels inside the power range and not above upper, ascending. 0 is added when the unit may be shut down. """
        top = math.floor(self.max_output) if upper is None else min(math.floor(self.max_output), upper)
        outputs = list(range(math.ceil(self.min_output), top + 1))
        if allow_shutdown and (not outputs or outputs[0] != 0):
            outputs.insert(0, 0)
        return outputs
