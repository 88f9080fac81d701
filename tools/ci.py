#!/usr/bin/env python3
# Copyright 2026 Apishape Contributors
# SPDX-License-Identifier: Apache-2.0

"""Run all CI checks locally: format, lint, type check, tests, and build."""

import subprocess
import sys
import time
from pathlib import Path

from yachalk import chalk

# ###############
# Public Interface
# ###############

STEPS: list[tuple[str, list[str]]] = [
    ("Format check", ["uv", "run", "ruff", "format", "--check", "src/", "tests/"]),
    ("Lint", ["uv", "run", "ruff", "check", "src/", "tests/"]),
    ("Type check", ["uv", "run", "ty", "check", "src/"]),
    ("Tests", ["uv", "run", "pytest", "--cov=apishape", "--cov-report=term-missing"]),
    ("Build", ["uv", "build"]),
]


def main() -> int:
    """Run all CI steps and report results.

    Steps named on the command line (case-insensitive, e.g. ``lint tests``)
    restrict the run to those steps.
    """
    selected = {arg.lower() for arg in sys.argv[1:]}
    steps = [(name, cmd) for name, cmd in STEPS if not selected or name.lower() in selected]
    if not steps:
        print(chalk.red(f"No CI step matches: {', '.join(sorted(selected))}"))
        return 2

    results = [_run_step(name, cmd) for name, cmd in steps]
    return _print_summary(results)


# ################
# Implementation
# ################


def _run_step(name: str, cmd: list[str]) -> tuple[str, bool, float]:
    sep = chalk.blue("=" * 60)
    print(f"\n{sep}")
    print(chalk.blue(name))
    print(sep)
    start = time.monotonic()
    proc = subprocess.run(cmd, cwd=Path(__file__).parent.parent)
    return name, proc.returncode == 0, time.monotonic() - start


def _print_summary(results: list[tuple[str, bool, float]]) -> int:
    sep = "=" * 60
    print(f"\n{chalk.blue(sep)}")
    print(chalk.blue("  Summary"))
    print(chalk.blue(sep))
    for name, passed, elapsed in results:
        color = chalk.green if passed else chalk.red
        status = "PASS" if passed else "FAIL"
        print(color(f"  {status}  {name} ({elapsed:.1f}s)"))
    print()
    return 0 if all(passed for _, passed, _ in results) else 1


if __name__ == "__main__":
    sys.exit(main())
