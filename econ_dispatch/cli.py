from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any

from .config import get_settings, LogLevel
from .DispatchSolver import solve_dispatch
from .errors import InputError
from .logging_config import configure_logging
from .utils import format_plan_table
from .validation import GENERATOR_FIELDS, parse_generator_fields, parse_load


def _prompt_int(prompt: str, *, min_v: int, max_v: int) -> int:
    while True:
        raw = input(prompt).strip()
        try:
            v = int(raw)
        except ValueError:
            print("Please enter a whole number.", file=sys.stderr)
            continue
        if not min_v <= v <= max_v:
            print(f"Must be between {min_v} and {max_v}.", file=sys.stderr)
            continue
        return v


def load_inputs(path: str | None, *, interactive: bool, max_generators: int) -> dict[str, Any]:
    """ Reads {"load": ..., "generators": [{"min", "max", "a", "b", "d"}, ...]} from JSON and prompts for whatever is missing if interactive.
    Prompted fields are kept as text, they are parsed together with the file fields. """
    data: dict[str, Any] = {}
    if path:
        p = Path(path)
        if not p.exists():
            raise FileNotFoundError(f"Input JSON not found: {path}")
        data = json.loads(p.read_text())
        if not isinstance(data, dict):
            raise ValueError("Input JSON must be an object")

    if interactive:
        if "generators" not in data:
            num_gens = _prompt_int(f"Number of generators (1-{max_generators}): ", min_v=1, max_v=max_generators)
            data["generators"] = [
                {name: input(f"Generator {gen_num} {name} [0]: ").strip() or "0" for name in GENERATOR_FIELDS}
                for gen_num in range(1, num_gens + 1)
            ]
        if "load" not in data:
            data["load"] = input("Required load (MW): ").strip()

    return data


def main(argv: list[str] | None = None) -> int:
    settings = get_settings()
    parser = argparse.ArgumentParser(description="Least-cost economic dispatch of generators by dynamic programming.")
    parser.add_argument("input", nargs="?", help="Path to input JSON with load and generators. If omitted, use --interactive prompts.")
    parser.add_argument("--load", "-l", help="Required load. Overrides the load in the input file.")
    parser.add_argument("--allow-shutdown", action="store_true", default=None, help="Allow any generator to produce 0 regardless of its minimum output.")
    parser.add_argument("--interactive", action="store_true", help="Prompt for missing inputs.")
    parser.add_argument("--log-level", choices=[level.value for level in LogLevel], default=settings.log_level.value, help="Log level.")
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        raw = load_inputs(args.input, interactive=args.interactive, max_generators=settings.max_generators)
    except (FileNotFoundError, ValueError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    rows = raw.get("generators", [])
    if not isinstance(rows, list) or not all(isinstance(row, dict) for row in rows):
        print("Input error: generators must be a list of objects", file=sys.stderr)
        return 2

    parsed = parse_generator_fields(rows)
    if not parsed.is_valid:
        print(f"Error: {parsed.reason}", file=sys.stderr)
        return 1
    try:
        load = parse_load(args.load if args.load is not None else raw.get("load"))
    except InputError as e:
        print(f"Error: {e.reason}", file=sys.stderr)
        return 1

    result = solve_dispatch(parsed.generators, load, allow_shutdown=args.allow_shutdown, settings=settings)
    if not result.ok:
        print(f"Error: {result.reason}", file=sys.stderr)
        return 1

    print("Generation Plan")
    print(format_plan_table(result.solution, settings.display_decimals), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
