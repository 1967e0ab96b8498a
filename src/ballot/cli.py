"""Ballot CLI — replay voting campaigns from scenario files.

Usage:
    python -m ballot.cli phases
    python -m ballot.cli run scenario.json
    python -m ballot.cli run scenario.json --keep-going --json
    python -m ballot.cli --env-file .env.test run scenario.json

Scenario format:
    {
      "admin": "owner",
      "steps": [
        {"caller": "owner", "op": "register_voter", "args": {"address": "alice"}},
        {"caller": "owner", "op": "start_proposals_registration"},
        ...
      ]
    }

"admin" is optional and defaults to BALLOT_ADMIN. A step without a
"caller" runs as the admin.
"""

from __future__ import annotations

import argparse
import json
import sys
from pathlib import Path
from typing import Any, Optional

from ballot.config import BallotConfig
from ballot.models.campaign import WorkflowStatus
from ballot.observability.logging import configure_logging
from ballot.service import BallotService


class ScenarioError(ValueError):
    """Raised when a scenario file is malformed."""


# Addresses, descriptions and proposal ids are all scalars.
_SCALAR_TYPES = (str, int, float, bool, type(None))


def load_scenario(path: Path) -> dict[str, Any]:
    """Read and shape-check a scenario file."""
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise ScenarioError(f"{path}: invalid JSON ({e})") from e

    if not isinstance(data, dict):
        raise ScenarioError(f"{path}: top level must be an object")
    admin = data.get("admin")
    if admin is not None and (not isinstance(admin, str) or not admin.strip()):
        raise ScenarioError(f"{path}: 'admin' must be a non-empty string")
    steps = data.get("steps")
    if not isinstance(steps, list):
        raise ScenarioError(f"{path}: 'steps' must be a list")
    for i, step in enumerate(steps, 1):
        if not isinstance(step, dict) or not isinstance(step.get("op"), str):
            raise ScenarioError(f"{path}: step {i} must be an object with an 'op'")
        if "caller" in step and not isinstance(step["caller"], str):
            raise ScenarioError(f"{path}: step {i} 'caller' must be a string")
        step_args = step.get("args", {})
        if not isinstance(step_args, dict):
            raise ScenarioError(f"{path}: step {i} 'args' must be an object")
        for name, value in step_args.items():
            if not isinstance(value, _SCALAR_TYPES):
                raise ScenarioError(
                    f"{path}: step {i} argument '{name}' must be a scalar"
                )
    return data


def cmd_phases(args: argparse.Namespace, config: BallotConfig) -> int:
    for status in WorkflowStatus:
        print(f"{status.ordinal}  {status.value}")
    return 0


def cmd_run(args: argparse.Namespace, config: BallotConfig) -> int:
    try:
        scenario = load_scenario(args.scenario)
    except (OSError, ScenarioError) as e:
        print(f"Failed: {e}", file=sys.stderr)
        return 1

    admin = scenario.get("admin") or config.admin
    service = BallotService(admin=admin)
    failures = 0
    report: list[dict[str, Any]] = []

    for i, step in enumerate(scenario["steps"], 1):
        caller = step.get("caller", admin)
        op = step["op"]
        result = service.dispatch(op, caller, step.get("args"))
        report.append({
            "step": i,
            "caller": caller,
            "op": op,
            "success": result.success,
            "errors": result.errors,
            "data": result.data,
        })
        if result.success:
            if not args.json:
                print(f"[{i}] {caller} {op}: ok")
        else:
            # Failures reach stderr in both modes; stdout stays parseable under --json.
            print(f"[{i}] {caller} {op}: {'; '.join(result.errors)}", file=sys.stderr)
            failures += 1
            if not args.keep_going:
                break

    status = service.status()
    if args.json:
        print(json.dumps({"steps": report, "status": status}, indent=2, default=str))
    else:
        print(json.dumps(status, indent=2))
    return 1 if failures else 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="ballot",
        description="Ballot — authorization-gated voting campaign runner",
    )
    parser.add_argument(
        "--env-file",
        type=Path,
        default=None,
        help="Path to a .env file (default: .env in the working directory)",
    )
    sub = parser.add_subparsers(dest="command")

    # phases
    sub.add_parser("phases", help="List workflow phases in order")

    # run
    p_run = sub.add_parser("run", help="Replay a scenario file against a new campaign")
    p_run.add_argument("scenario", type=Path, help="Scenario JSON file")
    p_run.add_argument(
        "--keep-going", action="store_true",
        help="Continue after a failed step instead of stopping",
    )
    p_run.add_argument(
        "--json", action="store_true",
        help="Print a JSON report of every step",
    )

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        return 0

    try:
        config = BallotConfig.from_env(args.env_file)
    except ValueError as e:
        print(f"Invalid configuration: {e}", file=sys.stderr)
        return 1
    configure_logging(level=config.log_level, fmt=config.log_format)

    commands = {
        "phases": cmd_phases,
        "run": cmd_run,
    }

    handler = commands.get(args.command)
    if handler is None:
        print(f"Unknown command: {args.command}", file=sys.stderr)
        return 1

    return handler(args, config)


if __name__ == "__main__":
    raise SystemExit(main())
