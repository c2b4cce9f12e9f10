#!/usr/bin/env python3
"""
Test runner for the atlas packer.
Provides a simple way to run tests without the full CLI.
"""

import sys
import subprocess
from pathlib import Path


def run_tests(test_type="all", verbose=False, coverage=False):
    """Run atlas packer tests."""

    project_root = Path(__file__).parent.parent

    cmd = [sys.executable, "-m", "pytest"]

    if verbose:
        cmd.append("-v")

    if coverage:
        cmd.extend(["--cov=sprite_atlas", "--cov-report=term-missing"])

    test_dir = project_root / "scripts" / "sprite_atlas" / "tests"
    integration_tests = [
        test_dir / "test_cli_integration.py",
        test_dir / "test_pipeline_integration.py",
    ]

    if test_type == "integration":
        cmd.extend(str(path) for path in integration_tests)
    elif test_type == "unit":
        cmd.append(str(test_dir))
        cmd.extend("--ignore=" + str(path) for path in integration_tests)
    else:  # all
        cmd.append(str(test_dir))

    print(f"Running: {' '.join(cmd)}")
    print(f"Working directory: {project_root}")

    try:
        result = subprocess.run(cmd, cwd=project_root)
        return result.returncode
    except FileNotFoundError:
        print("Error: pytest not found. Install it with: pip install pytest")
        return 1


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(description="Run atlas packer tests")
    parser.add_argument("--type", choices=["all", "unit", "integration"],
                        default="all", help="Type of tests to run")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Verbose output")
    parser.add_argument("--coverage", action="store_true",
                        help="Run with coverage report")

    args = parser.parse_args()

    sys.exit(run_tests(args.type, args.verbose, args.coverage))
