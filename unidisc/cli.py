import json
import os
import sys
from typing import Optional

from unidisc.catalog import Catalog
from unidisc.config import EngineConfig, load_config
from unidisc.consistency import run_all_checks
from unidisc.engine import PrerequisiteEngine
from unidisc.logger import logger
from unidisc.rules import RuleEngine, populate_from_catalog

COMMANDS = ("sort", "cycles", "sequences", "infer", "check")
USAGE = f"Usage: unidisc <catalog.json> <{'|'.join(COMMANDS)}> [max-length]"


def parse_args(argv):
    if len(argv) < 2:
        raise ValueError(USAGE)

    catalog_path, command = argv[0], argv[1]
    if command not in COMMANDS:
        raise ValueError(f"Unknown command: {command}. {USAGE}")

    max_length = None
    if len(argv) >= 3:
        try:
            max_length = int(argv[2])
        except ValueError:
            raise ValueError(f"max-length must be an integer, got: {argv[2]}")
        if max_length <= 0:
            raise ValueError("max-length must be a positive integer")

    if not os.path.exists(catalog_path):
        raise ValueError(f"{catalog_path} does not exist")
    if not os.path.isfile(catalog_path):
        raise ValueError(f"{catalog_path} must be a file")

    return catalog_path, command, max_length


def load_json(path):
    try:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise FileNotFoundError(f"File not found: {path}") from e
    except json.JSONDecodeError as e:
        raise ValueError(f"Failed to parse {path} as JSON: {e}") from e


def run(
    catalog: Catalog,
    command: str,
    max_length=None,
    config: Optional[EngineConfig] = None,
) -> int:
    """Run one command against the catalog, printing results. Returns an exit code."""
    config = config or EngineConfig()
    engine = PrerequisiteEngine(catalog, config)
    course_ids = list(catalog.get_all_courses())

    if command == "sort":
        order, ok = engine.topological_sort(course_ids)
        print(" --> ".join(order))
        if not ok:
            print("Circular dependency detected; order is incomplete")
            return 1
        return 0

    if command == "cycles":
        cyclic = engine.find_cyclic_courses()
        for course in cyclic:
            print(f"CYCLE DETECTED in prerequisites for {course}")
        print(f"Validated {len(course_ids) - len(cyclic)} prerequisite rules")
        return 1 if cyclic else 0

    if command == "sequences":
        result = engine.enumerate_sequences(course_ids, max_length)
        for i, sequence in enumerate(result.sequences, 1):
            print(f"Sequence {i}: {' -> '.join(sequence)}")
        print(f"Total sequences generated: {len(result.sequences)}")
        if result.truncated:
            print("Some sequences were cut short by max-length")
        return 0

    if command == "infer":
        rules = RuleEngine(max_iterations=config.inference_max_iterations)
        populate_from_catalog(rules, catalog)
        result = rules.forward_chain()
        for rule_id, fact in zip(result.fired, result.derived):
            print(f"{rule_id} -> {fact}")
        print(f"Total facts derived: {len(result.derived)}")
        return 0 if result.complete else 1

    if command == "check":
        violations = run_all_checks(catalog, config)
        for violation in violations:
            print(f"{violation.kind.upper()}: {violation.message}")
        print(f"Total violations found: {len(violations)}")
        return 1 if violations else 0

    raise ValueError(f"Unknown command: {command}")


def main(argv=None) -> int:
    argv = sys.argv[1:] if argv is None else argv
    try:
        catalog_path, command, max_length = parse_args(argv)
        config = load_config()
        catalog = Catalog.from_dict(load_json(catalog_path))
    except (ValueError, FileNotFoundError) as err:
        logger.error(str(err))
        print(err, file=sys.stderr)
        return 2
    return run(catalog, command, max_length, config)


if __name__ == "__main__":
    sys.exit(main())
