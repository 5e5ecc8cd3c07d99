from typing import Any

INVALID_GENERATOR_INPUT = "invalid numeric input at generator {generator}"
INVALID_LOAD = "invalid load value"
NON_POSITIVE_LOAD = "load must be strictly positive"
NO_GENERATORS = "no generators supplied"
TOO_MANY_GENERATORS = "too many generators"
LOAD_TOO_LARGE = "load exceeds the configured table limit"
LOAD_EXCEEDS_CAPACITY = "load exceeds total maximum capacity"
LOAD_BELOW_MINIMUM = "load below total minimum requirement"
NO_FEASIBLE_PLAN = "no feasible generation plan found"


class DispatchError(Exception):
    """ Base class for all dispatch errors.
    :var reason: Short human-readable reason, suitable for showing to the user as is.
    :var details: Additional context for debugging. """

    def __init__(self, reason: str, details: dict[str, Any] | None = None):
        self.reason = reason
        self.details = details or {}
        super().__init__(reason)

    def __str__(self) -> str:
        if self.details:
            detail_str = ", ".join(f"{key}={val}" for key, val in self.details.items())
            return f"{self.reason} [{detail_str}]"
        return self.reason


class InputError(DispatchError):
    """ Malformed or missing numeric input. Raised or collected before any table is built.
    :var generator: 1-based number of the offending generator, None if the error is not tied to a generator (e.g. load).
    :var field: Name of the offending field.
    :var value: Offending value as received. """

    def __init__(self, reason: str, generator: int | None = None, field: str | None = None, value: Any = None):
        self.generator = generator
        self.field = field
        self.value = value
        details = {}
        if field is not None:
            details["field"] = field
            details["value"] = repr(value)
        super().__init__(reason, details)

    @classmethod
    def for_generator(cls, generator: int, field: str | None = None, value: Any = None) -> "InputError":
        return cls(INVALID_GENERATOR_INPUT.format(generator=generator), generator, field, value)


class InfeasibilityError(DispatchError):
    """ Load lies outside of what the fleet can supply, either by the up-front capacity bounds or by the exact table check. """
