#!/usr/bin/env python3
"""Terse test runner: one summary line, then failing test ids."""

import re
import subprocess
import sys

COVERAGE_FLOOR = 90


def _count(label: str, text: str) -> int:
    """Return the pytest summary count for *label* (0 when absent)."""
    if match := re.search(rf"(\d+) {label}", text):
        return int(match.group(1))
    return 0


def main(argv: list[str]) -> int:
    """Run the suite with coverage gating; extra arguments go to pytest."""
    result = subprocess.run(
        [
            sys.executable,
            "-m",
            "pytest",
            "-q",
            "--tb=line",
            "--cov=tokenhue",
            "--cov-report=term",
            f"--cov-fail-under={COVERAGE_FLOOR}",
            *argv,
        ],
        capture_output=True,
        text=True,
    )
    output = result.stdout + result.stderr

    coverage = match.group(1) if (match := re.search(r"^TOTAL.*?(\d+%)$", output, re.M)) else "?"
    status = "PASS" if result.returncode == 0 else "FAIL"
    print(
        f"tests:{status} passed:{_count('passed', output)} failed:{_count('failed', output)} "
        f"errors:{_count('error', output)} coverage:{coverage}"
    )

    if result.returncode != 0:
        for line in output.splitlines():
            if line.startswith(("FAILED", "ERROR")):
                print(line)

    return result.returncode


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
