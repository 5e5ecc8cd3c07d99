""" Input parsing and feasibility checks. Everything here runs before any dispatch table is built. """

import logging
import math
from dataclasses import dataclass, field
from numbers import Integral
from typing import Any, Mapping, Sequence

from .Generator import Generator
from .config import DispatchSettings, get_settings
from .errors import (
    DispatchError, InfeasibilityError, InputError, INVALID_LOAD, LOAD_BELOW_MINIMUM, LOAD_EXCEEDS_CAPACITY, LOAD_TOO_LARGE, NO_GENERATORS,
    NON_POSITIVE_LOAD, TOO_MANY_GENERATORS,
)

logger = logging.getLogger(__name__)

GENERATOR_FIELDS = ("min", "max", "a", "b", "d")


@dataclass
class ValidationResult:
    """
    Outcome of parsing or validating dispatch inputs.
    :var errors: All errors found, in the order they were detected. The first one is the reported reason.
    :var generators: Validated generators, empty unless valid.
    :var load: Validated load, None unless known to be valid.
    """
    errors: list[DispatchError] = field(default_factory=list)
    generators: tuple[Generator, ...] = ()
    load: int | None = None

    @property
    def is_valid(self) -> bool:
        return not self.errors

    @property
    def reason(self) -> str | None:
        """ Human-readable reason of the first error, None if valid. """
        return self.errors[0].reason if self.errors else None

    def add_error(self, error: DispatchError):
        self.errors.append(error)


def _parse_number(raw: Any) -> float:
    """ Converts a text field (or a number) to float. Raises ValueError for anything that is not a finite number. """
    if isinstance(raw, bool):
        raise ValueError(f"Boolean is not a number: {raw}")
    value = float(raw.strip()) if isinstance(raw, str) else float(raw)
    if not math.isfinite(value):
        raise ValueError(f"Not a finite number: {raw}")
    return value


def parse_generator_fields(rows: Sequence[Mapping[str, Any]]) -> ValidationResult:
    """ Converts raw generator fields (keys min, max, a, b, d; values as text or numbers) to generators.
    Every unparsable field is reported as an InputError naming its 1-based generator number. """
    result = ValidationResult()
    generators = []
    for gen_num, row in enumerate(rows, start=1):
        values = {}
        for name in GENERATOR_FIELDS:
            raw = row.get(name)
            try:
                values[name] = _parse_number(raw)
            except (TypeError, ValueError):
                result.add_error(InputError.for_generator(gen_num, name, raw))
        if len(values) == len(GENERATOR_FIELDS):
            generators.append(Generator((values["min"], values["max"]), (values["a"], values["b"], values["d"])))

    if result.is_valid:
        result.generators = tuple(generators)
    else:
        logger.info("Rejected generator fields: %s", result.reason)
    return result


def parse_load(raw: Any) -> int:
    """ Parses load field to an integer number of power units. Fractional values are truncated towards zero. """
    try:
        value = _parse_number(raw)
    except (TypeError, ValueError) as err:
        raise InputError(INVALID_LOAD, field="load", value=raw) from err
    return int(value)


def validate_dispatch_inputs(generators: Sequence[Generator], load: int, allow_shutdown: bool | None = None, settings: DispatchSettings | None = None) \
        -> ValidationResult:
    """
    Checks that generators and load admit at least one candidate solution.
    Load must be a positive integer and every generator must be valid. Then the load has to lie between the total minimum output
    (skipped if units can be shut down) and the total maximum output of the fleet.
    :param generators: Generator specifications in dispatch order.
    :param load: Required total output.
    :param allow_shutdown: Whether any unit may produce 0 regardless of its minimum output. Taken from settings if None.
    :param settings: Limits to apply. Global settings if None.
    :return: Validation result. Capacity checks are only performed if all inputs are well-formed.
    """
    settings = settings or get_settings()
    if allow_shutdown is None:
        allow_shutdown = settings.allow_shutdown
    result = ValidationResult()

    if len(generators) == 0:
        result.add_error(InputError(NO_GENERATORS))
    elif len(generators) > settings.max_generators:
        result.add_error(InputError(TOO_MANY_GENERATORS, field="generators", value=len(generators)))

    if isinstance(load, bool) or not isinstance(load, Integral):
        result.add_error(InputError(INVALID_LOAD, field="load", value=load))
    elif load <= 0:
        result.add_error(InputError(NON_POSITIVE_LOAD, field="load", value=load))
    elif load > settings.max_load:
        result.add_error(InputError(LOAD_TOO_LARGE, field="load", value=load))

    for gen_num, gen in enumerate(generators, start=1):
        if not isinstance(gen, Generator) or not gen.is_valid():
            result.add_error(InputError.for_generator(gen_num))

    if result.is_valid:
        total_max = sum(gen.max_output for gen in generators)
        total_min = sum(gen.min_output for gen in generators)
        details = {"load": load, "total_min": total_min, "total_max": total_max}
        if load > total_max:
            result.add_error(InfeasibilityError(LOAD_EXCEEDS_CAPACITY, details))
        elif not allow_shutdown and load < total_min:
            result.add_error(InfeasibilityError(LOAD_BELOW_MINIMUM, details))

    if result.is_valid:
        result.generators = tuple(generators)
        result.load = int(load)
    else:
        logger.info("Rejected dispatch inputs: %s", result.errors[0])
    return result
