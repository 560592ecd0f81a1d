"""Development script to run checks (linting, tests) and the generator."""

import argparse
import subprocess
import sys


def run_command(command: list[str], step_name: str) -> None:
    """Run a shell command as a step in the development process."""
    print(f"\n--- Running Step: {step_name} ---")
    print(f"$ {' '.join(command)}")
    try:
        subprocess.run(command, check=True)
    except subprocess.CalledProcessError:
        print(f"\n❌ Failed: {step_name}")
        sys.exit(1)


def run_checks() -> None:
    """Run lint, format and test checks without modifying files."""
    run_command(["uv", "run", "ruff", "format", "--check"], "Ruff Format Check")
    run_command(["uv", "run", "ruff", "check"], "Ruff Lint")
    run_command(["uv", "run", "pytest", "-q"], "Tests")


def main() -> None:
    """Run the development checks and optionally the generator."""
    parser = argparse.ArgumentParser(
        description="Run development checks and the binding generator."
    )
    parser.add_argument(
        "--ci", action="store_true", help="Run checks and tests only, skipping main.py"
    )
    args = parser.parse_args()

    if args.ci:
        run_checks()
        print("\n✅ CI checks passed successfully. Skipping execution of main.py.")
        return

    run_command(["uv", "run", "ruff", "format"], "Ruff Formatting")
    run_command(
        ["uv", "run", "ruff", "check", "--fix", "--unsafe-fixes"],
        "Ruff Linting & Fixes",
    )
    run_checks()
    run_command(["uv", "run", "python", "main.py"], "Main Entry Point")

    print("\n✅ All development checks and main script passed successfully.")


if __name__ == "__main__":
    main()
